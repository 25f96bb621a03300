from __future__ import annotations

from typing import Any, Sequence

from match3.board import Board
from match3.constants import MAX_CASCADE_DEPTH
from match3.types import BoardEvent, Position


class ScriptedGenerator:
    """Returns the scripted values in order, then a fresh distinct tile per call."""

    def __init__(self, values: Sequence[Any] = ()):
        self.values = list(values)
        self.calls = 0

    def next(self):
        index = self.calls
        self.calls += 1
        if index < len(self.values):
            return self.values[index]
        return f"fresh{index}"


class EventRecorder:
    def __init__(self):
        self.events: list[BoardEvent] = []

    def __call__(self, event: BoardEvent) -> None:
        self.events.append(event)

    @property
    def kinds(self) -> list[str]:
        return [event.kind for event in self.events]


def scripted_board(
    layout: Sequence[Sequence[Any]],
    refill: Sequence[Any] = (),
    *,
    max_cascades: int | None = MAX_CASCADE_DEPTH,
) -> tuple[Board, ScriptedGenerator]:
    """Build a board whose initial fill is exactly ``layout``; later refills come from ``refill``."""
    height = len(layout)
    width = len(layout[0])
    values = [value for row in layout for value in row] + list(refill)
    generator = ScriptedGenerator(values)
    board = Board(generator, width, height, max_cascades=max_cascades)
    return board, generator


def line(*cells: tuple[int, int]) -> tuple[Position, ...]:
    return tuple(Position(r, c) for r, c in cells)
