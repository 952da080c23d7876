"""Draughts engine package: minimax search and Qt worker bridge."""

from checkie.engine.minimax import (
    MinimaxEngine,
    evaluate,
    play_turn,
    request_automated_move,
)
from checkie.engine.search import (
    CancelCheck,
    Difficulty,
    IEngine,
    SearchLimits,
    SearchResult,
)

__all__ = [
    "CancelCheck",
    "Difficulty",
    "IEngine",
    "MinimaxEngine",
    "SearchLimits",
    "SearchResult",
    "evaluate",
    "play_turn",
    "request_automated_move",
]
