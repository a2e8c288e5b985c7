"""Complete game state (board + metadata) with move application."""

from __future__ import annotations

from collections.abc import Mapping

from puzzle_engine.core.board import Board
from puzzle_engine.core.enums import CastlingRights, Color, MoveFlag, PieceType
from puzzle_engine.core.move import Move
from puzzle_engine.core.piece import Piece
from puzzle_engine.core.position import Position


class BoardState:
    """Full chess state: board + side to move + castling + en passant + clocks.

    :meth:`apply` is the only mutation primitive. It trusts its caller: moves
    must come from :class:`~puzzle_engine.core.validator.MoveValidator`.
    """

    __slots__ = (
        "board",
        "side_to_move",
        "castling",
        "en_passant",
        "halfmove_clock",
        "fullmove_number",
    )

    def __init__(
        self,
        board: Board | None = None,
        side_to_move: Color = Color.WHITE,
        castling: CastlingRights = CastlingRights.ALL,
        en_passant: Position | None = None,
        halfmove_clock: int = 0,
        fullmove_number: int = 1,
    ) -> None:
        self.board = board if board is not None else Board.initial()
        self.side_to_move = side_to_move
        self.castling = castling
        self.en_passant = en_passant
        self.halfmove_clock = halfmove_clock
        self.fullmove_number = fullmove_number

    # ── Factories ────────────────────────────────────────────────────────

    @classmethod
    def initial(cls) -> BoardState:
        """Standard starting position, White to move, all rights available."""
        return cls()

    @classmethod
    def from_pieces(
        cls,
        placement: Mapping[Position, Piece],
        side_to_move: Color = Color.WHITE,
        castling: CastlingRights = CastlingRights.NONE,
        en_passant: Position | None = None,
    ) -> BoardState:
        """Custom setup for puzzles and tests.

        Raises:
            ValueError: if either side does not have exactly one king.
        """
        board = Board()
        for sq, piece in placement.items():
            board[sq] = piece
        for color in Color:
            kings = len(board.pieces(color, PieceType.KING))
            if kings != 1:
                raise ValueError(f"{color.name} must have exactly one king, found {kings}")
        return cls(board, side_to_move, castling, en_passant)

    # ── Read accessors ───────────────────────────────────────────────────

    def piece_at(self, sq: Position) -> Piece | None:
        return self.board[sq]

    def has_castling_right(self, right: CastlingRights) -> bool:
        return bool(self.castling & right)

    def king_square(self, color: Color) -> Position:
        return self.board.king_square(color)

    def pieces(self, color: Color) -> list[Position]:
        return self.board.all_pieces(color)

    # ── Mutation ─────────────────────────────────────────────────────────

    def apply(self, move: Move) -> None:
        """Commit an already validated *move*."""
        board = self.board
        piece = board[move.from_sq]
        if piece is None:
            raise ValueError(f"No piece on {move.from_sq}")

        capture_sq = move.capture_sq if move.capture_sq is not None else move.to_sq
        captured = board[capture_sq]

        board[move.from_sq] = None
        if captured is not None:
            board[capture_sq] = None

        placed = piece
        if move.promotion is not None:
            placed = Piece(piece.color, move.promotion)
        board[move.to_sq] = placed

        if move.is_castle:
            assert move.rook_from is not None and move.rook_to is not None
            board[move.rook_to] = board[move.rook_from]
            board[move.rook_from] = None

        # En passant target lives for exactly one reply
        self.en_passant = None
        if move.flag == MoveFlag.DOUBLE_PAWN:
            self.en_passant = Position(
                move.from_sq.file, (move.from_sq.rank + move.to_sq.rank) // 2
            )

        self._update_castling(move, piece)

        if piece.kind == PieceType.PAWN or captured is not None:
            self.halfmove_clock = 0
        else:
            self.halfmove_clock += 1

        if self.side_to_move == Color.BLACK:
            self.fullmove_number += 1

        self.side_to_move = self.side_to_move.opposite

    # ── Castling bookkeeping ─────────────────────────────────────────────

    _ROOK_CORNERS: dict[Position, CastlingRights] = {
        Position("a", 1): CastlingRights.WHITE_QUEENSIDE,
        Position("h", 1): CastlingRights.WHITE_KINGSIDE,
        Position("a", 8): CastlingRights.BLACK_QUEENSIDE,
        Position("h", 8): CastlingRights.BLACK_KINGSIDE,
    }

    def _update_castling(self, move: Move, piece: Piece) -> None:
        if piece.kind == PieceType.KING:
            self.castling &= ~CastlingRights.both(piece.color)

        # A rook leaving its corner, or anything landing on it, ends that right
        for sq in (move.from_sq, move.to_sq):
            if sq in self._ROOK_CORNERS:
                self.castling &= ~self._ROOK_CORNERS[sq]

    # ── Utilities ────────────────────────────────────────────────────────

    def copy(self) -> BoardState:
        """Independent copy for scratch simulation."""
        return BoardState(
            board=self.board.copy(),
            side_to_move=self.side_to_move,
            castling=self.castling,
            en_passant=self.en_passant,
            halfmove_clock=self.halfmove_clock,
            fullmove_number=self.fullmove_number,
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, BoardState):
            return NotImplemented
        return (
            self.board == other.board
            and self.side_to_move == other.side_to_move
            and self.castling == other.castling
            and self.en_passant == other.en_passant
            and self.halfmove_clock == other.halfmove_clock
            and self.fullmove_number == other.fullmove_number
        )

    def __repr__(self) -> str:
        return (
            f"BoardState(side_to_move={self.side_to_move}, castling={self.castling!r}, "
            f"en_passant={self.en_passant}, halfmove_clock={self.halfmove_clock}, "
            f"fullmove_number={self.fullmove_number})\n{self.board!r}"
        )
