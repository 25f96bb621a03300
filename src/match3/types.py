from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Generic, NamedTuple, Protocol, Tuple, TypeVar, Union

T = TypeVar("T")
T_co = TypeVar("T_co", covariant=True)

EVENT_KIND_MATCH = "match"
EVENT_KIND_REFILL = "refill"


class Position(NamedTuple):
    """Zero-based cell coordinate; rows grow downward."""

    row: int
    col: int


@dataclass(frozen=True, slots=True)
class Match(Generic[T]):
    """A contiguous horizontal or vertical run of equal tiles.

    Horizontal runs list positions left-to-right, vertical runs top-to-bottom.
    """

    value: T
    positions: Tuple[Position, ...]

    def __len__(self) -> int:
        return len(self.positions)

    @property
    def orientation(self) -> str:
        if len(self.positions) > 1 and self.positions[0].row == self.positions[1].row:
            return "horizontal"
        return "vertical"


@dataclass(frozen=True, slots=True)
class BoardEvent(Generic[T]):
    kind: str
    match: Match[T]


class TileGenerator(Protocol[T_co]):
    def next(self) -> T_co: ...


GeneratorLike = Union[TileGenerator[T], Callable[[], T]]
BoardListener = Callable[[BoardEvent[T]], None]
