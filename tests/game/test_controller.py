"""Tests for GameController, the public game driver."""

import logging

import pytest

from puzzle_engine.config import EngineSettings, GlyphSet
from puzzle_engine.core.enums import CastlingRights, Color, MoveError, PieceType
from puzzle_engine.core.errors import IllegalMoveError
from puzzle_engine.core.move import Move
from puzzle_engine.core.piece import Piece
from puzzle_engine.core.position import parse_square
from puzzle_engine.core.rules import GameStatus
from puzzle_engine.core.state import BoardState
from puzzle_engine.game.controller import GameController, new_game
from puzzle_engine.game.interfaces import IGameController

SCHOLARS_MATE = ["e2e4", "e7e5", "f1c4", "b8c6", "d1h5", "g8f6", "h5f7"]

START_UNICODE = "\n".join(
    [
        "8 ♜ ♞ ♝ ♛ ♚ ♝ ♞ ♜",
        "7 ♟ ♟ ♟ ♟ ♟ ♟ ♟ ♟",
        "6 . . . . . . . .",
        "5 . . . . . . . .",
        "4 . . . . . . . .",
        "3 . . . . . . . .",
        "2 ♙ ♙ ♙ ♙ ♙ ♙ ♙ ♙",
        "1 ♖ ♘ ♗ ♕ ♔ ♗ ♘ ♖",
        "  a b c d e f g h",
    ]
)


def _move(game: GameController, uci: str, promotion: PieceType | None = None) -> GameStatus:
    return game.try_move(parse_square(uci[:2]), parse_square(uci[2:4]), promotion)


def _reason(game: GameController, uci: str, promotion: PieceType | None = None) -> MoveError:
    with pytest.raises(IllegalMoveError) as info:
        _move(game, uci, promotion)
    return info.value.reason


class TestNewGame:
    def test_start_position(self) -> None:
        game = new_game()
        assert isinstance(game, IGameController)
        assert game.state == BoardState.initial()
        assert game.status == GameStatus.in_progress()
        assert game.move_history == ()

    def test_classmethod_matches_function(self) -> None:
        assert GameController.new_game().state == new_game().state


class TestScenarios:
    def test_double_step(self) -> None:
        game = new_game()
        status = _move(game, "e2e4")
        assert status == GameStatus.in_progress()
        assert game.state.piece_at(parse_square("e4")) == Piece(Color.WHITE, PieceType.PAWN)
        assert game.state.en_passant == parse_square("e3")
        assert game.state.side_to_move == Color.BLACK

    def test_scholars_mate(self) -> None:
        game = new_game()
        statuses = [_move(game, uci) for uci in SCHOLARS_MATE]
        assert all(s == GameStatus.in_progress() for s in statuses[:-1])
        assert statuses[-1] == GameStatus.checkmate(Color.BLACK)
        assert game.is_game_over

    def test_three_square_pawn_move(self) -> None:
        game = new_game()
        before = game.state.copy()
        assert _reason(game, "e2e5") == MoveError.ILLEGAL_PATTERN
        assert game.state == before
        assert game.move_history == ()

    def test_castle_while_in_check(self) -> None:
        state = BoardState.from_pieces(
            {
                parse_square("e1"): Piece(Color.WHITE, PieceType.KING),
                parse_square("h1"): Piece(Color.WHITE, PieceType.ROOK),
                parse_square("e5"): Piece(Color.BLACK, PieceType.ROOK),
                parse_square("a8"): Piece(Color.BLACK, PieceType.KING),
            },
            castling=CastlingRights.WHITE_KINGSIDE,
        )
        game = GameController(state=state)
        assert game.status == GameStatus.check(Color.WHITE)
        assert _reason(game, "e1g1") == MoveError.ILLEGAL_CASTLE

    def test_promotion(self) -> None:
        state = BoardState.from_pieces(
            {
                parse_square("e1"): Piece(Color.WHITE, PieceType.KING),
                parse_square("b7"): Piece(Color.WHITE, PieceType.PAWN),
                parse_square("h5"): Piece(Color.BLACK, PieceType.KING),
            }
        )
        game = GameController(state=state)
        assert _reason(game, "b7b8") == MoveError.MISSING_OR_INVALID_PROMOTION
        assert game.state.piece_at(parse_square("b7")) == Piece(Color.WHITE, PieceType.PAWN)

        _move(game, "b7b8", PieceType.QUEEN)
        assert game.state.piece_at(parse_square("b8")) == Piece(Color.WHITE, PieceType.QUEEN)


class TestInvariants:
    def test_kings_survive_every_move(self) -> None:
        game = new_game()
        counts: list[int] = []
        game.events.on_move.append(
            lambda m, status, state: counts.append(
                sum(
                    1
                    for color in Color
                    for sq in state.pieces(color)
                    if state.piece_at(sq).kind == PieceType.KING
                )
            )
        )
        for uci in SCHOLARS_MATE:
            _move(game, uci)
        assert counts == [2] * len(SCHOLARS_MATE)

    def test_castling_right_lost_for_good(self) -> None:
        game = new_game()
        for uci in ["e2e4", "e7e5", "e1e2", "e8e7", "e2e1", "e7e8"]:
            _move(game, uci)
        assert game.state.castling == CastlingRights.NONE

        # clear f1/g1 so only the lost right stands in the way
        for uci in ["g1f3", "g8f6", "f1e2", "f8e7"]:
            _move(game, uci)
        assert _reason(game, "e1g1") == MoveError.ILLEGAL_CASTLE
        assert parse_square("g1") not in game.legal_moves(parse_square("e1"))

    def test_en_passant_window_is_one_move(self) -> None:
        game = new_game()
        for uci in ["e2e4", "a7a6", "e4e5", "d7d5"]:
            _move(game, uci)
        assert parse_square("d6") in game.legal_moves(parse_square("e5"))

        for uci in ["b1c3", "a6a5"]:
            _move(game, uci)
        assert _reason(game, "e5d6") == MoveError.ILLEGAL_PATTERN

    def test_en_passant_capture(self) -> None:
        game = new_game()
        for uci in ["e2e4", "a7a6", "e4e5", "d7d5", "e5d6"]:
            _move(game, uci)
        assert game.state.piece_at(parse_square("d5")) is None
        assert game.state.piece_at(parse_square("d6")) == Piece(Color.WHITE, PieceType.PAWN)

    def test_rejection_keeps_turn(self) -> None:
        game = new_game()
        assert _reason(game, "e7e5") == MoveError.NO_PIECE_AT_SOURCE
        assert game.state.side_to_move == Color.WHITE


class TestGameOver:
    def test_moves_rejected_after_mate(self) -> None:
        game = new_game()
        for uci in SCHOLARS_MATE:
            _move(game, uci)
        before = game.state.copy()
        assert _reason(game, "a7a6") == MoveError.GAME_ALREADY_OVER
        assert game.state == before
        assert game.legal_moves(parse_square("a7")) == []

    def test_game_over_event(self) -> None:
        game = new_game()
        results: list[GameStatus] = []
        game.events.on_game_over.append(results.append)
        for uci in SCHOLARS_MATE:
            _move(game, uci)
        assert results == [GameStatus.checkmate(Color.BLACK)]

    def test_game_over_logged(self, caplog: pytest.LogCaptureFixture) -> None:
        game = new_game()
        with caplog.at_level(logging.INFO, logger="puzzle_engine"):
            for uci in SCHOLARS_MATE:
                _move(game, uci)
        assert "Game over after 7 moves" in caplog.text


class TestEventsAndHistory:
    def test_move_event_fires(self) -> None:
        game = new_game()
        seen: list[str] = []
        game.events.on_move.append(lambda m, status, state: seen.append(str(m)))
        _move(game, "e2e4")
        _move(game, "e7e5")
        assert seen == ["e2e4", "e7e5"]

    def test_failing_handler_leaves_move_committed(self) -> None:
        game = new_game()

        def broken(move: Move, status: GameStatus, state: BoardState) -> None:
            raise RuntimeError("handler failed")

        game.events.on_move.append(broken)
        with pytest.raises(RuntimeError, match="handler failed"):
            _move(game, "e2e4")
        assert game.state.piece_at(parse_square("e4")) == Piece(Color.WHITE, PieceType.PAWN)
        assert game.state.side_to_move == Color.BLACK
        assert [m.uci for m in game.move_history] == ["e2e4"]

    def test_history_records_moves(self) -> None:
        game = new_game()
        _move(game, "g1f3")
        history = game.move_history
        assert len(history) == 1
        assert isinstance(history[0], Move)
        assert history[0].uci == "g1f3"

    def test_reset(self) -> None:
        game = new_game()
        for uci in SCHOLARS_MATE:
            _move(game, uci)
        game.reset()
        assert game.state == BoardState.initial()
        assert game.status == GameStatus.in_progress()
        assert game.move_history == ()
        _move(game, "d2d4")


class TestDisplay:
    def test_start_layout(self) -> None:
        assert new_game().display() == START_UNICODE

    def test_deterministic_and_read_only(self) -> None:
        game = new_game()
        before = game.state.copy()
        assert game.display() == game.display()
        assert game.state == before

    def test_ascii_glyphs(self) -> None:
        game = new_game(EngineSettings(glyphs=GlyphSet.ASCII))
        _move(game, "e2e4")
        lines = game.display().splitlines()
        assert lines[0] == "8 r n b q k b n r"
        assert lines[4] == "4 . . . . P . . ."


class TestLegalMoves:
    def test_knight(self) -> None:
        game = new_game()
        assert game.legal_moves(parse_square("g1")) == [parse_square("f3"), parse_square("h3")]

    def test_castle_listed(self) -> None:
        game = new_game()
        for uci in ["e2e4", "e7e5", "g1f3", "b8c6", "f1c4", "g8f6"]:
            _move(game, uci)
        assert parse_square("g1") in game.legal_moves(parse_square("e1"))
