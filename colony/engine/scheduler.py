"""Turn scheduler: the top-level state machine of a game.

States:
    AWAITING_PRE_TURN -> PROCESSING_PRE_TURN -> AWAITING_COMMAND
    AWAITING_COMMAND --(advance_cycle)--> CHECK_VICTORY
    CHECK_VICTORY -> GAME_OVER | AWAITING_PRE_TURN (next player)

The player queue is fixed for the whole game. Each advance moves the
index by exactly one position and wraps to 0, at which point the turn
number increases.
"""

import logging
from enum import Enum
from typing import Optional, Protocol

from ..errors import ActionNotFound, ParseError, ValidationError
from ..models.command import Action, Command, Entity
from ..models.game import GameState
from ..utils import MAX_AI_COMMANDS_PER_TURN
from .commands import CommandPipeline, CommandResult
from .turn_executor import PlanetaryProcessor, TurnReport
from .victory import check_victory

logger = logging.getLogger(__name__)

RECOVERABLE_ERRORS = (ParseError, ValidationError, ActionNotFound)

ADVANCE_CYCLE = Command(entity=Entity.GENERAL, action=Action.ADVANCE_CYCLE)


class Phase(Enum):
    """Scheduler states."""

    AWAITING_PRE_TURN = "awaiting_pre_turn"
    PROCESSING_PRE_TURN = "processing_pre_turn"
    AWAITING_COMMAND = "awaiting_command"
    CHECK_VICTORY = "check_victory"
    GAME_OVER = "game_over"


class DecisionSource(Protocol):
    """Where a player's commands come from (keyboard, AI strategy, test script)."""

    def next_command(self, game: GameState, report: TurnReport) -> str | Command: ...

    def on_result(self, result: CommandResult) -> None: ...

    def on_error(self, error: Exception) -> None: ...


class TurnScheduler:
    """Drives the fixed player queue through pre-turns and command phases."""

    def __init__(
        self,
        game: GameState,
        sources: dict[str, DecisionSource] | None = None,
        pipeline: CommandPipeline | None = None,
        processor: PlanetaryProcessor | None = None,
        max_ai_commands: int = MAX_AI_COMMANDS_PER_TURN,
    ):
        """Initialize scheduler.

        Args:
            game: Game to drive; play starts with game.current_player
            sources: Player id -> decision source (needed for play_turn/run)
            pipeline: Command pipeline shared by every player
            processor: Pre-turn processor
            max_ai_commands: Commands an AI may issue before its turn is ended for it
        """
        self.game = game
        self.sources = sources or {}
        self.pipeline = pipeline or CommandPipeline()
        self.processor = processor or PlanetaryProcessor()
        self.max_ai_commands = max_ai_commands
        self.phase = Phase.GAME_OVER if game.winner else Phase.AWAITING_PRE_TURN
        self.last_report: Optional[TurnReport] = None

    @property
    def current_player_id(self) -> str:
        return self.game.turn_order[self.game.current_index]

    def _require(self, phase: Phase) -> None:
        if self.phase is not phase:
            raise RuntimeError(f"Expected phase {phase.value}, scheduler is in {self.phase.value}")

    # =========================================================================
    # STATE TRANSITIONS
    # =========================================================================

    def start_turn(self) -> TurnReport:
        """Run the acting player's pre-turn processing.

        Returns:
            Report of everything that happened during the pre-turn

        Raises:
            RuntimeError: If not awaiting a pre-turn
        """
        self._require(Phase.AWAITING_PRE_TURN)
        self.phase = Phase.PROCESSING_PRE_TURN
        self.last_report = self.processor.process(self.game, self.current_player_id)
        self.phase = Phase.AWAITING_COMMAND
        return self.last_report

    def submit(self, command: str | Command) -> CommandResult:
        """Run one command for the acting player.

        Parse and validation errors propagate to the caller and leave the
        scheduler waiting for another command. An advance-cycle command
        triggers the victory check and moves play to the next player.

        Raises:
            ParseError, ValidationError, ActionNotFound: Recoverable command errors
            RuntimeError: If not awaiting a command
        """
        self._require(Phase.AWAITING_COMMAND)
        result = self.pipeline.run(self.game, self.current_player_id, command)
        if result.ends_turn:
            self._advance_cycle()
        return result

    def _advance_cycle(self) -> None:
        self.phase = Phase.CHECK_VICTORY
        acting = self.current_player_id
        if check_victory(self.game, acting):
            self.phase = Phase.GAME_OVER
            logger.info(f"Game over on turn {self.game.turn}: {self.game.winner} wins")
            return

        self.game.current_index = (self.game.current_index + 1) % len(self.game.turn_order)
        if self.game.current_index == 0:
            self.game.turn += 1
        self.phase = Phase.AWAITING_PRE_TURN
        logger.debug(f"{acting} ended turn; next up {self.current_player_id}")

    # =========================================================================
    # DRIVING DECISION SOURCES
    # =========================================================================

    def play_turn(self) -> None:
        """Play one full player turn using the player's decision source.

        Humans are asked until they end their turn. AIs are cut off after
        max_ai_commands commands and their turn is ended for them.
        """
        report = self.start_turn()
        player_id = self.current_player_id
        player = self.game.players[player_id]
        source = self.sources[player_id]
        issued = 0

        while self.phase is Phase.AWAITING_COMMAND and self.current_player_id == player_id:
            if player.is_ai and issued >= self.max_ai_commands:
                logger.warning(
                    f"{player_id} issued {issued} commands without ending its turn; forcing end"
                )
                source.on_result(self.submit(ADVANCE_CYCLE))
                break

            command = source.next_command(self.game, report)
            issued += 1
            try:
                result = self.submit(command)
            except RECOVERABLE_ERRORS as e:
                if player.is_ai:
                    logger.warning(f"{player_id} command rejected: {command} ({e})")
                source.on_error(e)
                continue
            source.on_result(result)
            if result.ends_turn:
                break

    def run(self, max_turns: int | None = None) -> str | None:
        """Play until someone wins or max_turns full rounds have been played.

        Returns:
            Winner's player id, or None if the turn limit was reached
        """
        while self.phase is not Phase.GAME_OVER:
            if max_turns is not None and self.game.turn > max_turns:
                logger.info(f"Turn limit {max_turns} reached without a winner")
                break
            self.play_turn()
        return self.game.winner
