"""Move value object: a validated move together with its side effects."""

from __future__ import annotations

from dataclasses import dataclass

from puzzle_engine.core.enums import MoveFlag, PieceType
from puzzle_engine.core.position import Position

_PROMO_CHARS: dict[PieceType, str] = {
    PieceType.KNIGHT: "n",
    PieceType.BISHOP: "b",
    PieceType.ROOK: "r",
    PieceType.QUEEN: "q",
}


@dataclass(frozen=True, slots=True)
class Move:
    """Immutable description of a single legal move.

    ``capture_sq`` is only set when the captured piece does not stand on
    ``to_sq`` (en passant). ``rook_from``/``rook_to`` describe the rook
    displacement of a castling move.
    """

    from_sq: Position
    to_sq: Position
    flag: MoveFlag = MoveFlag.NORMAL
    promotion: PieceType | None = None
    capture_sq: Position | None = None
    rook_from: Position | None = None
    rook_to: Position | None = None

    @property
    def is_castle(self) -> bool:
        return self.flag in (MoveFlag.CASTLE_KINGSIDE, MoveFlag.CASTLE_QUEENSIDE)

    # ── Display ──────────────────────────────────────────────────────────

    def __str__(self) -> str:
        base = f"{self.from_sq}{self.to_sq}"
        if self.promotion is not None:
            base += _PROMO_CHARS.get(self.promotion, "")
        return base

    @property
    def uci(self) -> str:
        """Coordinate notation, e.g. ``e7e8q``."""
        return str(self)
