"""Rules engine for a generic match-three board."""
from match3.board import Board, create_board
from match3.exceptions import (BoardConfigurationError, CascadeLimitError, GeneratorExhaustedError,
                               Match3Error)
from match3.types import EVENT_KIND_MATCH, EVENT_KIND_REFILL, BoardEvent, Match, Position

__all__ = [
    "Board",
    "BoardConfigurationError",
    "BoardEvent",
    "CascadeLimitError",
    "EVENT_KIND_MATCH",
    "EVENT_KIND_REFILL",
    "GeneratorExhaustedError",
    "Match",
    "Match3Error",
    "Position",
    "create_board",
]
