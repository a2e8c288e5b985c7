"""Exception hierarchy for the chess core.

Every failure carries a :class:`MoveError` reason so callers can branch on
the violated rule without parsing messages.
"""

from __future__ import annotations

from puzzle_engine.core.enums import MoveError


class ChessError(Exception):
    """Base class for recoverable chess-core errors."""

    def __init__(self, reason: MoveError, detail: str | None = None) -> None:
        self.reason = reason
        self.detail = detail
        message = str(reason) if detail is None else f"{reason}: {detail}"
        super().__init__(message)


class OutOfBoundsError(ChessError, ValueError):
    """A coordinate or offset falls outside the 8x8 board."""

    def __init__(self, detail: str | None = None) -> None:
        super().__init__(MoveError.OUT_OF_BOUNDS, detail)


class IllegalMoveError(ChessError):
    """A move request violates the rules; the game state is unchanged."""
