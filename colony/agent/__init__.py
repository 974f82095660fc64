"""AI players: strategy interface and the built-in heuristic strategy."""

from .heuristic_player import HeuristicStrategy
from .strategy import AIStrategy, StrategyPlayer, WorldView

__all__ = [
    "AIStrategy",
    "HeuristicStrategy",
    "StrategyPlayer",
    "WorldView",
]
