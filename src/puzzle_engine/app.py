"""Console entry point: play a chess game by typing coordinate moves."""

from __future__ import annotations

import argparse
import dataclasses
import sys
from typing import TextIO

from puzzle_engine.bootstrap import configure_logging
from puzzle_engine.config import EngineSettings, GlyphSet
from puzzle_engine.core.enums import MoveError, PieceType
from puzzle_engine.core.errors import ChessError, IllegalMoveError
from puzzle_engine.core.position import Position, parse_square
from puzzle_engine.game.controller import GameController

_PROMOTION_CHARS: dict[str, PieceType] = {
    "q": PieceType.QUEEN,
    "r": PieceType.ROOK,
    "b": PieceType.BISHOP,
    "n": PieceType.KNIGHT,
}

_HELP = "moves: e2e4, e7e8q | commands: board, moves <square>, reset, help, quit"


def parse_move(text: str) -> tuple[Position, Position, PieceType | None]:
    """Parse coordinate notation such as ``e2e4`` or ``e7e8q``."""
    if len(text) not in (4, 5):
        raise IllegalMoveError(MoveError.ILLEGAL_PATTERN, f"cannot parse {text!r}")
    from_sq = parse_square(text[:2])
    to_sq = parse_square(text[2:4])
    promotion: PieceType | None = None
    if len(text) == 5:
        try:
            promotion = _PROMOTION_CHARS[text[4]]
        except KeyError:
            raise IllegalMoveError(
                MoveError.MISSING_OR_INVALID_PROMOTION, f"unknown piece {text[4]!r}"
            ) from None
    return from_sq, to_sq, promotion


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="puzzle-chess", description="Play chess in the terminal"
    )
    parser.add_argument(
        "--ascii", action="store_true", help="draw pieces as letters instead of symbols"
    )
    parser.add_argument("--log-level", type=str.upper, help="override the log level")
    return parser


def _settings_from_args(args: argparse.Namespace) -> EngineSettings:
    settings = EngineSettings.from_env()
    if args.ascii:
        settings = dataclasses.replace(settings, glyphs=GlyphSet.ASCII)
    if args.log_level:
        settings = dataclasses.replace(settings, log_level=args.log_level)
    return settings


def _handle_line(game: GameController, line: str, out: TextIO) -> bool:
    """Run one input line. Returns False when the session should end."""
    command, _, rest = line.partition(" ")
    command = command.lower()

    if command in ("quit", "exit"):
        return False
    if command == "help":
        print(_HELP, file=out)
    elif command == "board":
        print(game.display(), file=out)
    elif command == "reset":
        game.reset()
        print(game.display(), file=out)
    elif command == "moves":
        targets = game.legal_moves(parse_square(rest.strip()))
        print(" ".join(str(sq) for sq in targets) or "(none)", file=out)
    else:
        status = game.try_move(*parse_move(command))
        print(game.display(), file=out)
        print(status, file=out)
    return True


def main(
    argv: list[str] | None = None,
    stdin: TextIO | None = None,
    stdout: TextIO | None = None,
) -> int:
    """Launch the console game loop."""
    args = _build_parser().parse_args(argv)
    try:
        settings = _settings_from_args(args)
    except ValueError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2
    configure_logging(settings)

    src = sys.stdin if stdin is None else stdin
    out = sys.stdout if stdout is None else stdout

    game = GameController.new_game(settings)
    print(game.display(), file=out)
    for raw in src:
        line = raw.strip()
        if not line:
            continue
        try:
            if not _handle_line(game, line, out):
                break
        except ChessError as exc:
            print(f"error: {exc}", file=out)
    return 0


if __name__ == "__main__":
    sys.exit(main())
