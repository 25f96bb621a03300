from dataclasses import dataclass

@dataclass(slots=True)
class ActiveSwitch:
    """Per-cell occupancy flag.

    active: True while the cell holds a tile; False between a clear and the next refill.
    """
    active: bool = True
