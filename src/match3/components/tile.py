from dataclasses import dataclass
from typing import Any

@dataclass(slots=True)
class Tile:
    """Tile value held by a cell.

    The value is opaque to the board and compared only with ``==``.
    Whether the cell is currently occupied is tracked by ActiveSwitch, so a
    stale value left behind by a clear is never read as a tile.
    """
    value: Any = None
