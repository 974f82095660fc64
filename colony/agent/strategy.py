"""AI strategy interface.

An AI strategy sees a private snapshot of the world and returns one
Command at a time. Its commands go through the same CommandPipeline as a
human's; there is no other way for an AI to change the game.
"""

import copy
import logging
from dataclasses import dataclass
from typing import Protocol

from ..engine.commands import CommandResult
from ..engine.turn_executor import TurnReport
from ..models.command import Command
from ..models.game import GameState

logger = logging.getLogger(__name__)


@dataclass
class WorldView:
    """Read-only snapshot handed to a strategy.

    Attributes:
        player_id: The player the strategy acts for
        turn: Current turn number
        game: Deep copy of the game state; changes to it are discarded
        report: The player's latest pre-turn report
    """

    player_id: str
    turn: int
    game: GameState
    report: TurnReport | None = None

    @classmethod
    def capture(cls, game: GameState, player_id: str, report: TurnReport | None = None) -> "WorldView":
        return cls(
            player_id=player_id,
            turn=game.turn,
            game=copy.deepcopy(game),
            report=report,
        )


class AIStrategy(Protocol):
    """Contract for AI decision making."""

    def decide(self, view: WorldView) -> Command:
        """Return the next command, eventually an advance-cycle command."""
        ...


class StrategyPlayer:
    """Decision source that asks an AIStrategy for commands."""

    def __init__(self, player_id: str, strategy: AIStrategy):
        """Initialize AI player.

        Args:
            player_id: Player the strategy controls
            strategy: Strategy implementation
        """
        self.player_id = player_id
        self.strategy = strategy
        self.errors: list[str] = []

    def next_command(self, game: GameState, report: TurnReport) -> Command:
        return self.strategy.decide(WorldView.capture(game, self.player_id, report))

    def on_result(self, result: CommandResult) -> None:
        logger.debug(f"{self.player_id}: {result.message}")

    def on_error(self, error: Exception) -> None:
        self.errors.append(str(error))
