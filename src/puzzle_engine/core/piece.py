"""Piece value object and the per-kind movement catalog."""

from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache

from puzzle_engine.core.enums import Color, PieceType
from puzzle_engine.core.position import Position, on_board

# Letter ↔ (Color, PieceType), uppercase = white
_CHAR_MAP: dict[str, tuple[Color, PieceType]] = {
    "P": (Color.WHITE, PieceType.PAWN),
    "N": (Color.WHITE, PieceType.KNIGHT),
    "B": (Color.WHITE, PieceType.BISHOP),
    "R": (Color.WHITE, PieceType.ROOK),
    "Q": (Color.WHITE, PieceType.QUEEN),
    "K": (Color.WHITE, PieceType.KING),
    "p": (Color.BLACK, PieceType.PAWN),
    "n": (Color.BLACK, PieceType.KNIGHT),
    "b": (Color.BLACK, PieceType.BISHOP),
    "r": (Color.BLACK, PieceType.ROOK),
    "q": (Color.BLACK, PieceType.QUEEN),
    "k": (Color.BLACK, PieceType.KING),
}

_UNICODE: dict[tuple[Color, PieceType], str] = {
    (Color.WHITE, PieceType.PAWN): "♙",
    (Color.WHITE, PieceType.KNIGHT): "♘",
    (Color.WHITE, PieceType.BISHOP): "♗",
    (Color.WHITE, PieceType.ROOK): "♖",
    (Color.WHITE, PieceType.QUEEN): "♕",
    (Color.WHITE, PieceType.KING): "♔",
    (Color.BLACK, PieceType.PAWN): "♟",
    (Color.BLACK, PieceType.KNIGHT): "♞",
    (Color.BLACK, PieceType.BISHOP): "♝",
    (Color.BLACK, PieceType.ROOK): "♜",
    (Color.BLACK, PieceType.QUEEN): "♛",
    (Color.BLACK, PieceType.KING): "♚",
}

_LETTERS: dict[tuple[Color, PieceType], str] = {v: k for k, v in _CHAR_MAP.items()}


@dataclass(frozen=True, slots=True)
class Piece:
    """Immutable value object representing a chess piece."""

    color: Color
    kind: PieceType

    # ── Serialisation ────────────────────────────────────────────────────

    def __str__(self) -> str:
        """Letter (uppercase = white, lowercase = black)."""
        return _LETTERS[(self.color, self.kind)]

    @classmethod
    def from_char(cls, char: str) -> Piece:
        """Create piece from its letter, e.g. 'N' → white knight."""
        try:
            color, kind = _CHAR_MAP[char]
        except KeyError:
            raise ValueError(f"Invalid piece character: {char!r}") from None
        return cls(color, kind)

    @property
    def symbol(self) -> str:
        """Unicode chess symbol, e.g. ♞."""
        return _UNICODE[(self.color, self.kind)]


# -- Movement patterns -------------------------------------------------------

KNIGHT_OFFSETS: tuple[tuple[int, int], ...] = (
    (-2, -1),
    (-2, 1),
    (-1, -2),
    (-1, 2),
    (1, -2),
    (1, 2),
    (2, -1),
    (2, 1),
)

KING_OFFSETS: tuple[tuple[int, int], ...] = (
    (-1, -1),
    (-1, 0),
    (-1, 1),
    (0, -1),
    (0, 1),
    (1, -1),
    (1, 0),
    (1, 1),
)

BISHOP_DIRS: tuple[tuple[int, int], ...] = ((-1, -1), (-1, 1), (1, -1), (1, 1))
ROOK_DIRS: tuple[tuple[int, int], ...] = ((-1, 0), (1, 0), (0, -1), (0, 1))
QUEEN_DIRS: tuple[tuple[int, int], ...] = BISHOP_DIRS + ROOK_DIRS

SLIDING_DIRS: dict[PieceType, tuple[tuple[int, int], ...]] = {
    PieceType.BISHOP: BISHOP_DIRS,
    PieceType.ROOK: ROOK_DIRS,
    PieceType.QUEEN: QUEEN_DIRS,
}


def pawn_start_rank(color: Color) -> int:
    """Rank (1-8) from which a pawn may double-step."""
    return 2 if color == Color.WHITE else 7


def pawn_last_rank(color: Color) -> int:
    """Rank (1-8) on which a pawn promotes."""
    return 8 if color == Color.WHITE else 1


def _steps(origin: Position, offsets: tuple[tuple[int, int], ...]) -> set[Position]:
    targets: set[Position] = set()
    for df, dr in offsets:
        af = origin.file_index + df
        ar = origin.rank_index + dr
        if on_board(af, ar):
            targets.add(Position.from_coords(af, ar))
    return targets


def _rays(origin: Position, directions: tuple[tuple[int, int], ...]) -> set[Position]:
    targets: set[Position] = set()
    for df, dr in directions:
        af = origin.file_index + df
        ar = origin.rank_index + dr
        while on_board(af, ar):
            targets.add(Position.from_coords(af, ar))
            af += df
            ar += dr
    return targets


def _pawn_targets(origin: Position, color: Color) -> set[Position]:
    dr = color.forward
    offsets = [(0, dr), (-1, dr), (1, dr)]
    if origin.rank == pawn_start_rank(color):
        offsets.append((0, 2 * dr))
    return _steps(origin, tuple(offsets))


@lru_cache(maxsize=None)
def raw_targets(kind: PieceType, color: Color, origin: Position) -> frozenset[Position]:
    """Squares a piece could reach from *origin* on an empty board.

    Pawns include their forward step(s) and both capture diagonals; whether
    those squares are actually usable depends on occupancy and is decided by
    the validator.
    """
    if kind == PieceType.PAWN:
        return frozenset(_pawn_targets(origin, color))
    if kind == PieceType.KNIGHT:
        return frozenset(_steps(origin, KNIGHT_OFFSETS))
    if kind == PieceType.KING:
        return frozenset(_steps(origin, KING_OFFSETS))
    return frozenset(_rays(origin, SLIDING_DIRS[kind]))
