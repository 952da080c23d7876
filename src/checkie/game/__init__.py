"""Game management layer — controller, players, turn state machine.

Quick start::

    from checkie.core import Player, Position
    from checkie.game import GameController, HumanPlayer

    ctrl = GameController()
    ctrl.new_game(
        white=HumanPlayer(Player.WHITE, "Alice"),
        black=HumanPlayer(Player.BLACK, "Bob"),
    )
    ctrl.select(Position(5, 0))
    ctrl.move(Position(4, 1))
"""

from checkie.game.controller import GameController, GameEvents
from checkie.game.interfaces import (
    BlockedPolicy,
    ChainPolicy,
    GamePhase,
    IGameController,
    IPlayer,
)
from checkie.game.player import AIPlayer, HumanPlayer
from checkie.game.state import GameState, TurnSnapshot

__all__ = [
    # Interfaces / policies
    "BlockedPolicy",
    "ChainPolicy",
    "GamePhase",
    "IGameController",
    "IPlayer",
    # Concrete
    "AIPlayer",
    "GameController",
    "GameEvents",
    "GameState",
    "HumanPlayer",
    "TurnSnapshot",
]
