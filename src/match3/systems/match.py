import logging
from typing import Tuple

from esper import World

from match3.events.bus import EventBus, EVENT_TILE_SWAP_REQUEST, EVENT_TILE_SWAP_VALID, EVENT_TILE_SWAP_INVALID
from match3.systems.board_ops import in_bounds, predict_swap_creates_match
from match3.types import Position

logger = logging.getLogger(__name__)


class MatchSystem:
    def __init__(self, world: World, event_bus: EventBus):
        self.world = world
        self.event_bus = event_bus
        event_bus.subscribe(EVENT_TILE_SWAP_REQUEST, self.on_swap_request)

    def on_swap_request(self, sender, **kwargs):
        src = kwargs.get('src')
        dst = kwargs.get('dst')
        if src is None or dst is None:
            return
        src, dst = Position(*src), Position(*dst)
        if not self.is_aligned(src, dst):
            logger.debug("Rejected swap %s <-> %s: not aligned", src, dst)
            self.event_bus.emit(EVENT_TILE_SWAP_INVALID, src=src, dst=dst, reason='alignment')
            return
        if not self.creates_match(src, dst):
            logger.debug("Rejected swap %s <-> %s: no run", src, dst)
            self.event_bus.emit(EVENT_TILE_SWAP_INVALID, src=src, dst=dst, reason='no_match')
            return
        self.event_bus.emit(EVENT_TILE_SWAP_VALID, src=src, dst=dst)

    def is_aligned(self, a: Tuple[int, int], b: Tuple[int, int]) -> bool:
        """Both cells on the board and sharing exactly one of row or column.

        Distance is not checked: any two cells in the same row or column pass.
        """
        if not (in_bounds(self.world, *a) and in_bounds(self.world, *b)):
            return False
        same_row = a[0] == b[0]
        same_col = a[1] == b[1]
        return same_row != same_col

    def is_legal(self, a: Tuple[int, int], b: Tuple[int, int]) -> bool:
        return self.is_aligned(a, b) and self.creates_match(a, b)

    def creates_match(self, a: Tuple[int, int], b: Tuple[int, int]) -> bool:
        # Virtual swap on a copy of the board, then a full scan
        return predict_swap_creates_match(self.world, Position(*a), Position(*b))
