"""High-level chess rules: check and checkmate detection."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from puzzle_engine.core.enums import Color, StatusKind
from puzzle_engine.core.validator import MoveValidator

if TYPE_CHECKING:
    from puzzle_engine.core.state import BoardState


@dataclass(frozen=True, slots=True)
class GameStatus:
    """Status of a game; ``color`` is the side in check or checkmated."""

    kind: StatusKind
    color: Color | None = None

    @classmethod
    def in_progress(cls) -> GameStatus:
        return cls(StatusKind.IN_PROGRESS)

    @classmethod
    def check(cls, color: Color) -> GameStatus:
        return cls(StatusKind.CHECK, color)

    @classmethod
    def checkmate(cls, color: Color) -> GameStatus:
        return cls(StatusKind.CHECKMATE, color)

    @property
    def is_terminal(self) -> bool:
        return self.kind == StatusKind.CHECKMATE

    def __str__(self) -> str:
        if self.kind == StatusKind.IN_PROGRESS:
            return "in progress"
        if self.kind == StatusKind.CHECK:
            return f"{self.color} is in check"
        return f"{self.color} is checkmated"


class Rules:
    """Static rule-checker that operates on a :class:`BoardState`.

    Every query is read-only. Stalemate and repetition draws are not modelled.
    """

    @staticmethod
    def is_in_check(state: BoardState, color: Color) -> bool:
        return MoveValidator(state).is_in_check(color)

    @staticmethod
    def is_checkmate(state: BoardState, color: Color) -> bool:
        if not Rules.is_in_check(state, color):
            return False
        if state.side_to_move != color:
            # Ask as if it were *color*'s turn; no en passant would be pending.
            state = state.copy()
            state.side_to_move = color
            state.en_passant = None
        return not MoveValidator(state).has_legal_move()

    @staticmethod
    def status(state: BoardState) -> GameStatus:
        """Status from the point of view of the side to move."""
        color = state.side_to_move
        validator = MoveValidator(state)
        if not validator.is_in_check(color):
            return GameStatus.in_progress()
        if validator.has_legal_move():
            return GameStatus.check(color)
        return GameStatus.checkmate(color)
