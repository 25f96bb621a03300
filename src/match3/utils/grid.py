from typing import Any, Callable, List, Sequence, TypeVar

T = TypeVar("T")


def create_grid(width: int, height: int, get_value: Callable[[], T]) -> List[List[T]]:
    """Build a height x width grid, calling get_value once per cell in row-major order."""
    return [[get_value() for _ in range(width)] for _ in range(height)]


def is_between(value: int, low: int, high: int) -> bool:
    return low <= value <= high


def format_grid(rows: Sequence[Sequence[Any]], empty: str = ".") -> str:
    """Render rows as an aligned text table for console dumps and debugging."""
    if not rows:
        return ""
    cells = [[empty if value is None else str(value) for value in row] for row in rows]
    width = max((len(cell) for row in cells for cell in row), default=1)
    return "\n".join(" ".join(cell.rjust(width) for cell in row) for row in cells)
