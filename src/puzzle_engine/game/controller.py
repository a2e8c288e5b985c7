"""Game controller: the public entry point of a chess game.

Coordinates: BoardState, MoveValidator, Rules.
Emits events via simple callbacks so a console / tests can subscribe.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field

from puzzle_engine.config import EngineSettings, GlyphSet
from puzzle_engine.core.enums import MoveError, PieceType
from puzzle_engine.core.errors import IllegalMoveError
from puzzle_engine.core.move import Move
from puzzle_engine.core.position import Position
from puzzle_engine.core.rules import GameStatus, Rules
from puzzle_engine.core.state import BoardState
from puzzle_engine.core.validator import MoveValidator
from puzzle_engine.game.interfaces import IGameController

_LOGGER = logging.getLogger(__name__)

# ── Event definitions ────────────────────────────────────────────────────────

MoveCallback = Callable[[Move, GameStatus, BoardState], None]  # move, status, state
GameOverCallback = Callable[[GameStatus], None]


@dataclass
class GameEvents:
    """Observable callbacks. Multiple handlers per event.

    Handlers run after the move is committed and must not raise: an
    exception escapes ``try_move`` but the move stays on the board and in
    the history.
    """

    on_move: list[MoveCallback] = field(default_factory=list)
    on_game_over: list[GameOverCallback] = field(default_factory=list)


# ── Controller ───────────────────────────────────────────────────────────────


class GameController(IGameController):
    """Owns one game's :class:`BoardState` and is its only writer.

    Validation failures raise :class:`IllegalMoveError` and never touch the
    state. Not thread-safe: one controller per session, one caller at a time.
    """

    __slots__ = ("_state", "_status", "_history", "_settings", "events")

    def __init__(
        self,
        settings: EngineSettings | None = None,
        state: BoardState | None = None,
    ) -> None:
        self._settings = settings if settings is not None else EngineSettings()
        self._state = state if state is not None else BoardState.initial()
        self._status = Rules.status(self._state)
        self._history: list[Move] = []
        self.events = GameEvents()

    @classmethod
    def new_game(cls, settings: EngineSettings | None = None) -> GameController:
        """Standard start position, White to move."""
        return cls(settings)

    # ── Properties ───────────────────────────────────────────────────────

    @property
    def state(self) -> BoardState:
        """Live state; treat as read-only."""
        return self._state

    @property
    def status(self) -> GameStatus:
        return self._status

    @property
    def is_game_over(self) -> bool:
        return self._status.is_terminal

    @property
    def move_history(self) -> tuple[Move, ...]:
        return tuple(self._history)

    @property
    def settings(self) -> EngineSettings:
        return self._settings

    # ── IGameController impl ─────────────────────────────────────────────

    def try_move(
        self,
        from_sq: Position,
        to_sq: Position,
        promotion: PieceType | None = None,
    ) -> GameStatus:
        if self.is_game_over:
            raise IllegalMoveError(MoveError.GAME_ALREADY_OVER, str(self._status))

        try:
            move = MoveValidator(self._state).validate(from_sq, to_sq, promotion)
        except IllegalMoveError as exc:
            _LOGGER.debug("Rejected %s%s: %s", from_sq, to_sq, exc.reason.name)
            raise

        self._state.apply(move)
        self._history.append(move)
        self._status = Rules.status(self._state)
        _LOGGER.debug("Committed %s, %s", move, self._status)

        self._emit_move(move)
        if self.is_game_over:
            _LOGGER.info("Game over after %d moves: %s", len(self._history), self._status)
            self._emit_game_over()
        return self._status

    def display(self) -> str:
        return self._state.board.render(unicode=self._settings.glyphs == GlyphSet.UNICODE)

    def reset(self) -> None:
        self._state = BoardState.initial()
        self._status = Rules.status(self._state)
        self._history = []

    # ── Queries ──────────────────────────────────────────────────────────

    def legal_moves(self, from_sq: Position) -> list[Position]:
        """Legal destinations for the piece on *from_sq* (empty once the game is over)."""
        if self.is_game_over:
            return []
        return MoveValidator(self._state).legal_destinations(from_sq)

    # ── Internal helpers ─────────────────────────────────────────────────

    def _emit_move(self, move: Move) -> None:
        for cb in self.events.on_move:
            cb(move, self._status, self._state)

    def _emit_game_over(self) -> None:
        for cb in self.events.on_game_over:
            cb(self._status)


def new_game(settings: EngineSettings | None = None) -> GameController:
    """Start a game in the standard position."""
    return GameController.new_game(settings)
