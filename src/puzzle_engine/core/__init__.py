"""Core domain layer: pure chess rules with zero external dependencies.

Quick start::

    from puzzle_engine.core import BoardState, MoveValidator, Rules, parse_square

    state = BoardState.initial()
    move = MoveValidator(state).validate(parse_square("e2"), parse_square("e4"))
    state.apply(move)
    Rules.status(state)
"""

from puzzle_engine.core.board import Board
from puzzle_engine.core.enums import (
    PROMOTION_TYPES,
    CastlingRights,
    Color,
    MoveError,
    MoveFlag,
    PieceType,
    StatusKind,
)
from puzzle_engine.core.errors import ChessError, IllegalMoveError, OutOfBoundsError
from puzzle_engine.core.move import Move
from puzzle_engine.core.piece import Piece, raw_targets
from puzzle_engine.core.position import Position, parse_square, squares_between
from puzzle_engine.core.rules import GameStatus, Rules
from puzzle_engine.core.state import BoardState
from puzzle_engine.core.validator import MoveValidator

__all__ = [
    # Enums / flags
    "PROMOTION_TYPES",
    "CastlingRights",
    "Color",
    "MoveError",
    "MoveFlag",
    "PieceType",
    "StatusKind",
    # Errors
    "ChessError",
    "IllegalMoveError",
    "OutOfBoundsError",
    # Coordinates
    "Position",
    "parse_square",
    "squares_between",
    # Domain objects
    "Board",
    "BoardState",
    "GameStatus",
    "Move",
    "MoveValidator",
    "Piece",
    "Rules",
    "raw_targets",
]
