"""Puzzle engines: a rule-complete chess core plus collaborator interfaces."""

from puzzle_engine.game.controller import GameController, new_game

__all__ = ["GameController", "new_game"]

__version__ = "0.1.0"
