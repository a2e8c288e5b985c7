"""Shared pytest fixtures used across the test suite."""

from __future__ import annotations

from collections.abc import Callable

import pytest

from puzzle_engine.core.enums import CastlingRights, Color
from puzzle_engine.core.piece import Piece
from puzzle_engine.core.position import FILES, Position
from puzzle_engine.core.state import BoardState

StateFactory = Callable[..., BoardState]


def state_from_diagram(
    diagram: str,
    side_to_move: Color = Color.WHITE,
    castling: CastlingRights = CastlingRights.NONE,
    en_passant: Position | None = None,
) -> BoardState:
    """Build a state from eight rows of piece letters, rank 8 first, '.' = empty."""
    rows = [row.replace(" ", "") for row in diagram.strip().splitlines()]
    assert len(rows) == 8, "diagram needs eight ranks"

    placement: dict[Position, Piece] = {}
    for rank, row in zip(range(8, 0, -1), rows):
        assert len(row) == 8, f"rank {rank} needs eight files"
        for file, char in zip(FILES, row):
            if char != ".":
                placement[Position(file, rank)] = Piece.from_char(char)
    return BoardState.from_pieces(placement, side_to_move, castling, en_passant)


@pytest.fixture
def make_state() -> StateFactory:
    """Factory fixture: ``make_state(diagram, side_to_move=..., castling=...)``."""
    return state_from_diagram
