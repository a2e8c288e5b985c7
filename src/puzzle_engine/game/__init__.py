"""Game management layer for the driver and the collaborator interfaces.

Quick start::

    from puzzle_engine.core import parse_square
    from puzzle_engine.game import new_game

    game = new_game()
    game.try_move(parse_square("e2"), parse_square("e4"))
    print(game.display())
"""

from puzzle_engine.game.controller import GameController, GameEvents, new_game
from puzzle_engine.game.interfaces import (
    Direction,
    ICipher,
    IGameController,
    IGridMaze,
    INetworkMaze,
)

__all__ = [
    # Interfaces
    "Direction",
    "ICipher",
    "IGameController",
    "IGridMaze",
    "INetworkMaze",
    # Concrete
    "GameController",
    "GameEvents",
    "new_game",
]
