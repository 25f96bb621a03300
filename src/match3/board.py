"""Public board facade.

Owns the esper world holding the cells, the event bus the systems talk over,
and the single observer slot fed with match/refill events during a cascade.
"""
from __future__ import annotations

import logging
from typing import Any, Generic, List, Optional, Tuple, TypeVar

from match3.constants import DEFAULT_COLS, DEFAULT_ROWS, MAX_CASCADE_DEPTH
from match3.events.bus import (EventBus, EVENT_TILE_SWAP_REQUEST, EVENT_TILE_SWAP_VALID,
                               EVENT_TILE_SWAP_FINALIZE, EVENT_MATCH_FOUND, EVENT_REFILL_REQUESTED)
from match3.exceptions import BoardConfigurationError
from match3.systems.board_ops import (find_all_matches, populate_board, snapshot_rows,
                                      swap_tile_values, tile_value_at)
from match3.systems.match import MatchSystem
from match3.systems.match_resolution import MatchResolutionSystem
from match3.types import (EVENT_KIND_MATCH, EVENT_KIND_REFILL, BoardEvent, BoardListener,
                          GeneratorLike, Match, Position)
from match3.utils.grid import format_grid
from match3.world import create_world

T = TypeVar("T")

logger = logging.getLogger(__name__)


def _check_dimension(name: str, value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        raise BoardConfigurationError(name, value)
    return value


def _check_generator(generator: Any) -> None:
    if callable(getattr(generator, "next", None)) or hasattr(generator, "__next__") or callable(generator):
        return
    raise BoardConfigurationError(
        "generator", generator, "must expose next(), be an iterator, or be callable"
    )


class Board(Generic[T]):
    def __init__(
        self,
        generator: GeneratorLike,
        width: int,
        height: int,
        *,
        max_cascades: int | None = MAX_CASCADE_DEPTH,
    ):
        _check_generator(generator)
        self.width = _check_dimension("width", width)
        self.height = _check_dimension("height", height)
        self.event_bus = EventBus()
        self.world = create_world(rows=self.height, cols=self.width)
        # Initial fill is taken as-is: runs already present are not resolved here.
        populate_board(self.world, generator)
        self._listener: Optional[BoardListener] = None
        self._swap_applied = False
        self.match_system = MatchSystem(self.world, self.event_bus)
        self.match_resolution_system = MatchResolutionSystem(
            self.world, self.event_bus, generator, max_cascades=max_cascades
        )
        self.event_bus.subscribe(EVENT_TILE_SWAP_VALID, self.on_swap_valid)
        self.event_bus.subscribe(EVENT_MATCH_FOUND, self.on_match_found)
        self.event_bus.subscribe(EVENT_REFILL_REQUESTED, self.on_refill_requested)

    def add_listener(self, listener: Optional[BoardListener]) -> None:
        """Register the observer; replaces any previous one. ``None`` removes it.

        The listener must not call ``move`` on this board. An exception it
        raises propagates out of ``move`` and aborts the cascade pass before
        the run is cleared, so the swapped tiles and their run stay in place.
        """
        self._listener = listener

    def piece(self, position: Tuple[int, int]) -> Optional[T]:
        """Tile at position, or None when the position is off the board."""
        return tile_value_at(self.world, position[0], position[1])

    def can_move(self, first: Tuple[int, int], second: Tuple[int, int]) -> bool:
        return self.match_system.is_aligned(first, second)

    def is_legal_move(self, first: Tuple[int, int], second: Tuple[int, int]) -> bool:
        return self.match_system.is_legal(first, second)

    def move(self, first: Tuple[int, int], second: Tuple[int, int]) -> bool:
        """Swap two tiles and resolve the resulting cascade.

        Returns False, leaving the board untouched, when the cells are not
        aligned or the swap would not create a run.
        """
        self._swap_applied = False
        self.event_bus.emit(EVENT_TILE_SWAP_REQUEST, src=Position(*first), dst=Position(*second))
        return self._swap_applied

    def on_swap_valid(self, sender, **kwargs):
        src = kwargs['src']
        dst = kwargs['dst']
        if not swap_tile_values(self.world, src, dst):
            return
        self._swap_applied = True
        logger.debug("Swapped %s <-> %s", src, dst)
        self.event_bus.emit(EVENT_TILE_SWAP_FINALIZE, src=src, dst=dst)

    def on_match_found(self, sender, **kwargs):
        self._notify(BoardEvent(EVENT_KIND_MATCH, kwargs['match']))

    def on_refill_requested(self, sender, **kwargs):
        self._notify(BoardEvent(EVENT_KIND_REFILL, kwargs['match']))

    def _notify(self, event: BoardEvent) -> None:
        if self._listener is not None:
            self._listener(event)

    def find_matches(self) -> List[Match]:
        """Runs currently on the board; empty once a move has settled."""
        return find_all_matches(self.world)

    def positions(self) -> List[Position]:
        return [Position(r, c) for r in range(self.height) for c in range(self.width)]

    def rows(self) -> List[List[Optional[T]]]:
        return snapshot_rows(self.world)

    def __str__(self) -> str:
        return format_grid(self.rows())


def create_board(
    generator: GeneratorLike,
    *,
    rows: int = DEFAULT_ROWS,
    cols: int = DEFAULT_COLS,
    max_cascades: int | None = MAX_CASCADE_DEPTH,
) -> Board:
    return Board(generator, cols, rows, max_cascades=max_cascades)
