import logging
from typing import List

from esper import World

from match3.components.cascade_state import CascadeState
from match3.constants import MAX_CASCADE_DEPTH
from match3.events.bus import (EventBus, EVENT_TILE_SWAP_FINALIZE, EVENT_MATCH_FOUND, EVENT_REFILL_REQUESTED,
                               EVENT_MATCH_CLEARED, EVENT_GRAVITY_APPLIED, EVENT_REFILL_COMPLETED,
                               EVENT_CASCADE_STEP, EVENT_CASCADE_COMPLETE)
from match3.exceptions import CascadeLimitError
from match3.systems.board_ops import (apply_gravity_moves, clear_positions, compute_gravity_moves,
                                      find_all_matches, refill_inactive_tiles)
from match3.types import GeneratorLike, Position

logger = logging.getLogger(__name__)


class MatchResolutionSystem:
    """Runs the clear -> collapse -> refill cascade after every finalized swap.

    The whole cascade completes inside the handler for EVENT_TILE_SWAP_FINALIZE;
    listeners receive every event before the emitting call returns.
    """

    def __init__(self, world: World, event_bus: EventBus, generator: GeneratorLike,
                 *, max_cascades: int | None = MAX_CASCADE_DEPTH):
        self.world = world
        self.event_bus = event_bus
        self.generator = generator
        self.max_cascades = max_cascades
        _, self.state = world.get_component(CascadeState)[0]
        self.event_bus.subscribe(EVENT_TILE_SWAP_FINALIZE, self.on_swap_finalize)

    def on_swap_finalize(self, sender, **kwargs):
        self.resolve()

    def resolve(self) -> int:
        """Resolve runs until the board is quiescent; returns the number of passes made."""
        state = self.state
        state.cascade_active = True
        state.cascade_depth = 0
        state.matches_resolved = 0
        try:
            while True:
                matches = find_all_matches(self.world)
                if not matches:
                    break
                if self.max_cascades is not None and state.cascade_depth >= self.max_cascades:
                    raise CascadeLimitError(
                        self.max_cascades,
                        details={"pending_matches": len(matches)},
                    )
                state.cascade_depth += 1
                self._resolve_pass(matches, state.cascade_depth)
                state.matches_resolved += len(matches)
        finally:
            state.cascade_active = False
        if state.cascade_depth:
            logger.debug("Cascade settled after %d passes (%d runs)", state.cascade_depth, state.matches_resolved)
        self.event_bus.emit(EVENT_CASCADE_COMPLETE, depth=state.cascade_depth)
        return state.cascade_depth

    def _resolve_pass(self, matches, depth: int) -> None:
        logger.debug("Cascade pass %d: %d runs", depth, len(matches))
        self.event_bus.emit(EVENT_CASCADE_STEP, depth=depth, matches=list(matches))
        cleared: List[Position] = []
        for match in matches:
            self.event_bus.emit(EVENT_MATCH_FOUND, match=match, depth=depth)
            self.event_bus.emit(EVENT_REFILL_REQUESTED, match=match, depth=depth)
            # Runs crossing an earlier run share cells that are already empty.
            cleared.extend(clear_positions(self.world, match.positions))
        self.event_bus.emit(EVENT_MATCH_CLEARED, positions=cleared, depth=depth)
        moves = compute_gravity_moves(self.world)
        if moves:
            apply_gravity_moves(self.world, moves)
        self.event_bus.emit(EVENT_GRAVITY_APPLIED, moves=moves, depth=depth)
        new_tiles = refill_inactive_tiles(self.world, self.generator)
        self.event_bus.emit(EVENT_REFILL_COMPLETED, new_tiles=new_tiles, depth=depth)
