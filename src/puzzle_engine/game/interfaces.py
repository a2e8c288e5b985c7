"""Abstract interfaces for the game layer.

The chess driver implements :class:`IGameController`. The maze and cipher
engines live outside this package; their ABCs describe the shape a host
process relies on when it composes them with a chess game.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from enum import IntEnum, auto
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from puzzle_engine.core.enums import PieceType
    from puzzle_engine.core.position import Position
    from puzzle_engine.core.rules import GameStatus


# ── Chess driver ─────────────────────────────────────────────────────────────


class IGameController(ABC):
    """Interface for the chess game orchestrator."""

    @abstractmethod
    def try_move(
        self,
        from_sq: Position,
        to_sq: Position,
        promotion: PieceType | None = None,
    ) -> GameStatus:
        """Validate and commit a move; raises ``IllegalMoveError`` on failure."""

    @abstractmethod
    def display(self) -> str:
        """Deterministic text rendering of the board."""

    @abstractmethod
    def reset(self) -> None:
        """Return to the standard starting position."""


# ── Collaborator engines ─────────────────────────────────────────────────────


class Direction(IntEnum):
    """Grid-maze step directions."""

    NORTH = auto()
    EAST = auto()
    SOUTH = auto()
    WEST = auto()


class IGridMaze(ABC):
    """A navigable grid maze built with ``(width, height)``."""

    @abstractmethod
    def __init__(self, width: int, height: int) -> None: ...

    @abstractmethod
    def try_move(self, direction: Direction) -> bool:
        """Step the player; False when a wall is in the way."""

    @abstractmethod
    def is_at_end(self) -> bool: ...


class INetworkMaze(ABC):
    """A graph maze built with a node count; construction may raise ``ValueError``."""

    @abstractmethod
    def __init__(self, node_count: int) -> None: ...

    @abstractmethod
    def find_path(self) -> list[int]:
        """Ordered node ids from the current node to the goal."""

    @abstractmethod
    def traverse(self, node_id: int) -> None:
        """Move to an adjacent node; raises ``ValueError`` if not adjacent."""

    @abstractmethod
    def is_at_end(self) -> bool: ...


class ICipher(ABC):
    """A keyed, stateless text transform."""

    @abstractmethod
    def __init__(self, key: str) -> None: ...

    @abstractmethod
    def encrypt(self, text: str) -> str: ...

    @abstractmethod
    def decrypt(self, text: str) -> str: ...
