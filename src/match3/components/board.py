from dataclasses import dataclass

@dataclass(slots=True)
class BoardGrid:
    """Fixed dimensions of the board; lives on its own entity."""
    rows: int
    cols: int
