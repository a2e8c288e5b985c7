"""Position value object and coordinate helpers.

Board layout (Little-Endian Rank-File mapping):
    a1=0, b1=1, ..., h1=7
    a2=8, b2=9, ..., h2=15
    ...
    a8=56, b8=57, ..., h8=63
"""

from __future__ import annotations

from dataclasses import dataclass
from functools import total_ordering

from puzzle_engine.core.errors import OutOfBoundsError

FILES = "abcdefgh"


def on_board(file_idx: int, rank_idx: int) -> bool:
    """Whether zero-based file/rank indexes fall on the board."""
    return 0 <= file_idx < 8 and 0 <= rank_idx < 8


@total_ordering
@dataclass(frozen=True, slots=True)
class Position:
    """Immutable board coordinate, e.g. ``Position("e", 4)``.

    Squares order by board index, so a1 < h1 < a2 < h8.
    """

    file: str
    rank: int

    def __post_init__(self) -> None:
        if not (
            isinstance(self.file, str)
            and len(self.file) == 1
            and self.file in FILES
            and isinstance(self.rank, int)
            and not isinstance(self.rank, bool)
            and 1 <= self.rank <= 8
        ):
            raise OutOfBoundsError(f"{self.file!r}{self.rank!r}")

    # ── Conversions ──────────────────────────────────────────────────────

    @property
    def file_index(self) -> int:
        """File index 0-7 (a-h)."""
        return FILES.index(self.file)

    @property
    def rank_index(self) -> int:
        """Rank index 0-7 (1-8)."""
        return self.rank - 1

    @property
    def index(self) -> int:
        """Square index 0-63."""
        return self.rank_index * 8 + self.file_index

    @classmethod
    def from_index(cls, index: int) -> Position:
        if not 0 <= index < 64:
            raise OutOfBoundsError(f"square index {index}")
        return cls(FILES[index & 7], (index >> 3) + 1)

    @classmethod
    def from_coords(cls, file_idx: int, rank_idx: int) -> Position:
        """Create from zero-based file/rank indexes."""
        if not on_board(file_idx, rank_idx):
            raise OutOfBoundsError(f"file {file_idx}, rank {rank_idx}")
        return cls(FILES[file_idx], rank_idx + 1)

    # ── Arithmetic ───────────────────────────────────────────────────────

    def offset(self, df: int, dr: int) -> Position:
        """Square shifted by *df* files and *dr* ranks."""
        return Position.from_coords(self.file_index + df, self.rank_index + dr)

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Position):
            return NotImplemented
        return self.index < other.index

    def __str__(self) -> str:
        return f"{self.file}{self.rank}"


def parse_square(name: str) -> Position:
    """Parse square name, e.g. 'e4'."""
    if len(name) != 2 or not name[1].isdigit():
        raise OutOfBoundsError(f"invalid square name {name!r}")
    return Position(name[0], int(name[1]))


def squares_between(a: Position, b: Position) -> list[Position]:
    """Squares strictly between two squares sharing a rank, file or diagonal.

    Returns an empty list when the squares are adjacent or not aligned.
    """
    df = b.file_index - a.file_index
    dr = b.rank_index - a.rank_index
    if df == 0 and dr == 0:
        return []
    if df != 0 and dr != 0 and abs(df) != abs(dr):
        return []

    step_f = (df > 0) - (df < 0)
    step_r = (dr > 0) - (dr < 0)
    distance = max(abs(df), abs(dr))
    return [
        Position.from_coords(a.file_index + step_f * i, a.rank_index + step_r * i)
        for i in range(1, distance)
    ]
