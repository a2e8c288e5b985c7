"""Board - piece placement on an 8x8 board."""

from __future__ import annotations

from collections.abc import Iterator

from puzzle_engine.core.enums import Color, PieceType
from puzzle_engine.core.piece import Piece
from puzzle_engine.core.position import FILES, Position

_COLOR_COUNT = 2

_BACK_RANK: tuple[PieceType, ...] = (
    PieceType.ROOK,
    PieceType.KNIGHT,
    PieceType.BISHOP,
    PieceType.QUEEN,
    PieceType.KING,
    PieceType.BISHOP,
    PieceType.KNIGHT,
    PieceType.ROOK,
)


class Board:
    """Mutable 64-square board with per-color occupancy indexes."""

    __slots__ = ("_squares", "_color_bitboards", "_king_squares")

    def __init__(self) -> None:
        self._squares: list[Piece | None] = [None] * 64
        # [color] -> bitboard of all occupied squares for that color.
        self._color_bitboards: list[int] = [0] * _COLOR_COUNT
        # [color] -> king square index cache (None if king missing).
        self._king_squares: list[int | None] = [None] * _COLOR_COUNT

    @staticmethod
    def _indexes_from_bitboard(bitboard: int) -> Iterator[int]:
        while bitboard:
            lsb = bitboard & -bitboard
            yield lsb.bit_length() - 1
            bitboard ^= lsb

    # -- Element access -----------------------------------------------------

    def __getitem__(self, sq: Position) -> Piece | None:
        return self._squares[sq.index]

    def __setitem__(self, sq: Position, piece: Piece | None) -> None:
        idx = sq.index
        old_piece = self._squares[idx]
        if old_piece == piece:
            return

        mask = 1 << idx

        if old_piece is not None:
            old_color_idx = int(old_piece.color)
            self._color_bitboards[old_color_idx] &= ~mask
            if (
                old_piece.kind == PieceType.KING
                and self._king_squares[old_color_idx] == idx
            ):
                self._king_squares[old_color_idx] = None

        self._squares[idx] = piece

        if piece is None:
            return

        color_idx = int(piece.color)
        self._color_bitboards[color_idx] |= mask
        if piece.kind == PieceType.KING:
            self._king_squares[color_idx] = idx

    def is_empty(self, sq: Position) -> bool:
        return self._squares[sq.index] is None

    # -- Query helpers ------------------------------------------------------

    def all_pieces(self, color: Color) -> list[Position]:
        """All squares occupied by *color*, at most sixteen."""
        return [
            Position.from_index(idx)
            for idx in self._indexes_from_bitboard(self._color_bitboards[int(color)])
        ]

    def pieces(self, color: Color, kind: PieceType) -> list[Position]:
        """Squares occupied by *color*'s pieces of *kind*."""
        found: list[Position] = []
        for sq in self.all_pieces(color):
            piece = self[sq]
            if piece is not None and piece.kind == kind:
                found.append(sq)
        return found

    def king_square(self, color: Color) -> Position:
        """Return the single king square for *color*."""
        idx = self._king_squares[int(color)]
        if idx is None:
            raise ValueError(f"No {color.name} king on board")
        return Position.from_index(idx)

    # -- Copying -------------------------------------------------------

    def copy(self) -> Board:
        b = Board()
        b._squares = self._squares.copy()
        b._color_bitboards = self._color_bitboards.copy()
        b._king_squares = self._king_squares.copy()
        return b

    # -- Factory ------------------------------------------------------------

    @classmethod
    def initial(cls) -> Board:
        """Standard starting position."""
        b = cls()
        for f, kind in zip(FILES, _BACK_RANK):
            b[Position(f, 1)] = Piece(Color.WHITE, kind)
            b[Position(f, 2)] = Piece(Color.WHITE, PieceType.PAWN)
            b[Position(f, 7)] = Piece(Color.BLACK, PieceType.PAWN)
            b[Position(f, 8)] = Piece(Color.BLACK, kind)
        return b

    # -- Rendering ----------------------------------------------------------

    def render(self, unicode: bool = True) -> str:
        """Text grid, rank 8 at the top, files listed underneath."""
        rows: list[str] = []
        for rank in range(8, 0, -1):
            row = []
            for f in FILES:
                p = self[Position(f, rank)]
                if p is None:
                    row.append(".")
                else:
                    row.append(p.symbol if unicode else str(p))
            rows.append(f"{rank} {' '.join(row)}")
        rows.append("  " + " ".join(FILES))
        return "\n".join(rows)

    # -- Dunder helpers -----------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return self._squares == other._squares

    def __repr__(self) -> str:
        return self.render(unicode=False)
