"""Exceptions raised by the match-three board.

Illegal moves and out-of-range lookups are not errors; the board absorbs them
as no-ops. Only bad construction parameters and a runaway cascade raise.
"""

from typing import Any, Optional


class Match3Error(Exception):
    """Base exception for all board errors."""

    def __init__(self, message: str, details: Optional[dict[str, Any]] = None):
        super().__init__(message)
        self.details = details or {}


class BoardConfigurationError(Match3Error, ValueError):
    """Raised when a board is constructed with unusable parameters.

    Examples:
    - Width or height that is not a positive integer
    - Generator that is neither callable nor exposes ``next()``
    """

    def __init__(
        self,
        parameter: str,
        value: Any,
        message: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        if message is None:
            message = f"must be a positive integer, got {value!r}"
        details = details or {}
        details["value"] = value
        super().__init__(f"Invalid board parameter '{parameter}': {message}", details=details)
        self.parameter = parameter
        self.value = value


class CascadeLimitError(Match3Error, RuntimeError):
    """Raised when a cascade has not settled after the configured number of passes.

    The board is left in the state reached after the last completed pass:
    every cell holds a tile, but runs may still be present.
    """

    def __init__(self, limit: int, details: Optional[dict[str, Any]] = None):
        super().__init__(f"Cascade did not settle after {limit} passes", details=details)
        self.limit = limit


class GeneratorExhaustedError(Match3Error, RuntimeError):
    """Raised when an iterator used as tile generator has no values left.

    During a refill no cell is written until every value the pass needs has
    been drawn, so the board keeps the collapsed state of that pass.
    """

    def __init__(self, needed: int, details: Optional[dict[str, Any]] = None):
        super().__init__(f"Tile generator ran out; {needed} more tiles were needed", details=details)
        self.needed = needed
