"""Move validation, legal move enumeration and attack detection."""

from __future__ import annotations

from collections.abc import Iterator
from typing import TYPE_CHECKING

from puzzle_engine.core.enums import (
    PROMOTION_TYPES,
    CastlingRights,
    Color,
    MoveError,
    MoveFlag,
    PieceType,
)
from puzzle_engine.core.errors import IllegalMoveError
from puzzle_engine.core.move import Move
from puzzle_engine.core.piece import SLIDING_DIRS, Piece, pawn_last_rank, raw_targets
from puzzle_engine.core.position import Position, squares_between

if TYPE_CHECKING:
    from puzzle_engine.core.state import BoardState


class MoveValidator:
    """Decides whether a requested move is legal for a :class:`BoardState`.

    The validator never mutates the state it was built for; king-safety is
    tested on a scratch copy.
    """

    __slots__ = ("_state", "_board")

    def __init__(self, state: BoardState) -> None:
        self._state = state
        self._board = state.board

    # -- Public API ---------------------------------------------------------

    def validate(
        self,
        from_sq: Position,
        to_sq: Position,
        promotion: PieceType | None = None,
    ) -> Move:
        """Return the fully described move or raise :class:`IllegalMoveError`."""
        piece = self._board[from_sq]
        if piece is None or piece.color != self._state.side_to_move:
            raise IllegalMoveError(MoveError.NO_PIECE_AT_SOURCE, str(from_sq))

        if self._is_castle_request(piece, from_sq, to_sq):
            if promotion is not None:
                raise IllegalMoveError(
                    MoveError.MISSING_OR_INVALID_PROMOTION, "castling cannot promote"
                )
            return self._validate_castle(piece.color, from_sq, to_sq)

        flag = self._check_pattern(piece, from_sq, to_sq)

        capture_sq: Position | None = None
        if flag == MoveFlag.EN_PASSANT:
            capture_sq = Position(to_sq.file, from_sq.rank)

        if piece.kind == PieceType.PAWN and to_sq.rank == pawn_last_rank(piece.color):
            if promotion not in PROMOTION_TYPES:
                raise IllegalMoveError(
                    MoveError.MISSING_OR_INVALID_PROMOTION,
                    f"pawn reaching {to_sq} needs one of queen, rook, bishop, knight",
                )
            flag = MoveFlag.PROMOTION
        elif promotion is not None:
            raise IllegalMoveError(
                MoveError.MISSING_OR_INVALID_PROMOTION, f"{from_sq}{to_sq} does not promote"
            )

        move = Move(from_sq, to_sq, flag, promotion, capture_sq)
        if self._leaves_king_attacked(move, piece.color):
            raise IllegalMoveError(MoveError.SELF_CHECK_VIOLATION, str(move))
        return move

    def is_legal(
        self,
        from_sq: Position,
        to_sq: Position,
        promotion: PieceType | None = None,
    ) -> bool:
        try:
            self.validate(from_sq, to_sq, promotion)
        except IllegalMoveError:
            return False
        return True

    def generate_legal_moves(self) -> list[Move]:
        """All strictly legal moves for the side to move."""
        return list(self._iter_legal_moves())

    def has_legal_move(self) -> bool:
        """Whether the side to move has at least one legal move."""
        return next(self._iter_legal_moves(), None) is not None

    def legal_destinations(self, from_sq: Position) -> list[Position]:
        """Legal destination squares for the piece on *from_sq*.

        Empty when the square is empty or holds a piece of the side not to move.
        """
        piece = self._board[from_sq]
        if piece is None or piece.color != self._state.side_to_move:
            return []
        targets = {move.to_sq for move in self._iter_moves_from(from_sq, piece)}
        return sorted(targets)

    # -- Attack detection (public) -----------------------------------------

    def is_in_check(self, color: Color) -> bool:
        """Is *color*'s king attacked by the opponent?"""
        return self.is_square_attacked(self._board.king_square(color), color.opposite)

    def is_square_attacked(self, sq: Position, by_color: Color) -> bool:
        """Is *sq* attacked by any piece of *by_color*?"""
        return any(self.attacks(origin, sq) for origin in self._board.all_pieces(by_color))

    def attacks(self, from_sq: Position, target: Position) -> bool:
        """Whether the piece on *from_sq* attacks *target*.

        Uses the movement pattern and path rules only, without the self-check
        simulation. Pawns attack their two forward diagonals.
        """
        piece = self._board[from_sq]
        if piece is None:
            return False

        occupant = self._board[target]
        if occupant is not None and occupant.color == piece.color:
            return False

        if piece.kind == PieceType.PAWN:
            return (
                target.rank - from_sq.rank == piece.color.forward
                and abs(target.file_index - from_sq.file_index) == 1
            )

        if target not in raw_targets(piece.kind, piece.color, from_sq):
            return False
        if piece.kind in SLIDING_DIRS:
            return self._path_clear(from_sq, target)
        return True

    # -- Step checks (private) ----------------------------------------------

    def _check_pattern(self, piece: Piece, from_sq: Position, to_sq: Position) -> MoveFlag:
        """Geometry, occupancy and path rules. Returns the move's flag."""
        if to_sq not in raw_targets(piece.kind, piece.color, from_sq):
            raise IllegalMoveError(
                MoveError.ILLEGAL_PATTERN, f"{piece.kind.name.lower()} cannot reach {to_sq}"
            )

        target = self._board[to_sq]
        flag = MoveFlag.NORMAL

        if piece.kind == PieceType.PAWN:
            if to_sq.file == from_sq.file:
                if target is not None:
                    raise IllegalMoveError(MoveError.ILLEGAL_PATTERN, "pawns capture diagonally")
                if abs(to_sq.rank - from_sq.rank) == 2:
                    flag = MoveFlag.DOUBLE_PAWN
            elif target is None:
                if to_sq != self._state.en_passant or not self._en_passant_victim(
                    piece.color, from_sq, to_sq
                ):
                    raise IllegalMoveError(
                        MoveError.ILLEGAL_PATTERN, f"nothing to capture on {to_sq}"
                    )
                flag = MoveFlag.EN_PASSANT

        if (piece.kind in SLIDING_DIRS or flag == MoveFlag.DOUBLE_PAWN) and not (
            self._path_clear(from_sq, to_sq)
        ):
            raise IllegalMoveError(MoveError.ILLEGAL_PATTERN, f"path to {to_sq} is blocked")

        if target is not None:
            if target.color == piece.color:
                raise IllegalMoveError(MoveError.OWN_PIECE_AT_DESTINATION, str(to_sq))
            if target.kind == PieceType.KING:
                raise IllegalMoveError(MoveError.ILLEGAL_PATTERN, "kings cannot be captured")

        return flag

    def _en_passant_victim(self, color: Color, from_sq: Position, to_sq: Position) -> bool:
        victim = self._board[Position(to_sq.file, from_sq.rank)]
        return victim == Piece(color.opposite, PieceType.PAWN)

    def _path_clear(self, from_sq: Position, to_sq: Position) -> bool:
        return all(self._board.is_empty(sq) for sq in squares_between(from_sq, to_sq))

    @staticmethod
    def _is_castle_request(piece: Piece, from_sq: Position, to_sq: Position) -> bool:
        rank = piece.color.home_rank
        return (
            piece.kind == PieceType.KING
            and from_sq == Position("e", rank)
            and to_sq.rank == rank
            and to_sq.file in ("c", "g")
        )

    def _validate_castle(self, color: Color, king_sq: Position, to_sq: Position) -> Move:
        kingside = to_sq.file == "g"
        rank = king_sq.rank
        side = "kingside" if kingside else "queenside"

        if not self._state.has_castling_right(CastlingRights.for_side(color, kingside)):
            raise IllegalMoveError(MoveError.ILLEGAL_CASTLE, f"{side} right lost")

        rook_from = Position("h" if kingside else "a", rank)
        if self._board[rook_from] != Piece(color, PieceType.ROOK):
            raise IllegalMoveError(MoveError.ILLEGAL_CASTLE, f"no rook on {rook_from}")

        if not self._path_clear(king_sq, rook_from):
            raise IllegalMoveError(MoveError.ILLEGAL_CASTLE, "path between king and rook occupied")

        opponent = color.opposite
        if self.is_square_attacked(king_sq, opponent):
            raise IllegalMoveError(MoveError.ILLEGAL_CASTLE, "king is in check")

        for sq in (*squares_between(king_sq, to_sq), to_sq):
            if self.is_square_attacked(sq, opponent):
                raise IllegalMoveError(MoveError.ILLEGAL_CASTLE, f"{sq} is attacked")

        move = Move(
            king_sq,
            to_sq,
            MoveFlag.CASTLE_KINGSIDE if kingside else MoveFlag.CASTLE_QUEENSIDE,
            rook_from=rook_from,
            rook_to=Position("f" if kingside else "d", rank),
        )
        if self._leaves_king_attacked(move, color):
            raise IllegalMoveError(MoveError.ILLEGAL_CASTLE, "king would land in check")
        return move

    def _leaves_king_attacked(self, move: Move, color: Color) -> bool:
        scratch = self._state.copy()
        scratch.apply(move)
        return MoveValidator(scratch).is_in_check(color)

    # -- Enumeration (private) ----------------------------------------------

    def _iter_legal_moves(self) -> Iterator[Move]:
        color = self._state.side_to_move
        for from_sq in self._board.all_pieces(color):
            piece = self._board[from_sq]
            assert piece is not None
            yield from self._iter_moves_from(from_sq, piece)

    def _iter_moves_from(self, from_sq: Position, piece: Piece) -> Iterator[Move]:
        for to_sq, promotion in self._candidates(from_sq, piece):
            try:
                yield self.validate(from_sq, to_sq, promotion)
            except IllegalMoveError:
                continue

    @staticmethod
    def _candidates(
        from_sq: Position, piece: Piece
    ) -> Iterator[tuple[Position, PieceType | None]]:
        targets = sorted(raw_targets(piece.kind, piece.color, from_sq))
        if piece.kind == PieceType.KING and from_sq == Position("e", piece.color.home_rank):
            rank = piece.color.home_rank
            targets += [Position("c", rank), Position("g", rank)]

        last_rank = pawn_last_rank(piece.color)
        for to_sq in targets:
            if piece.kind == PieceType.PAWN and to_sq.rank == last_rank:
                for promotion in PROMOTION_TYPES:
                    yield to_sq, promotion
            else:
                yield to_sq, None
