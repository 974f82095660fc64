"""Human player controller for CLI interaction.

This module provides the HumanPlayer class, a decision source that reads
command lines from the terminal (or any injected input function) and
prints results and errors back.
"""

from typing import Callable

from ..engine.commands import CommandResult
from ..engine.turn_executor import TurnReport
from ..errors import ErrorType, ParseError
from ..models.game import GameState
from .command_parser import HELP_TEXT


def format_report(report: TurnReport) -> list[str]:
    """Render a pre-turn report as short text lines."""
    lines = []
    for done in report.completed:
        lines.append(f"  Completed: {done.description}")
    for event in report.production:
        line = f"  {event.planet_id} produced {event.produced}"
        if not event.wasted.is_zero():
            line += f" (wasted {event.wasted})"
        lines.append(line)
    for event in report.shields_restored:
        lines.append(f"  Shield on {event.planet_id} restored to {event.shield}")
    for event in report.arrivals:
        lines.append(f"  {event.fleet_id} arrived at {event.destination}")
    for event in report.combats:
        lines.append(
            f"  Battle at {event.planet_id}: {event.winner} won, "
            f"destroyed {', '.join(event.destroyed_fleets)}"
        )
    for event in report.bombardments:
        lines.append(
            f"  {event.fleet_id} bombarded {event.planet_id}: "
            f"shield {event.shield_before} -> {event.shield_after}"
        )
    for event in report.conquests:
        lines.append(f"  {event.new_owner} took {event.planet_id}")
    return lines


class HumanPlayer:
    """Human player controller class.

    Reads one command per call. Parsing and validation are left to the
    command pipeline; this class only moves text in and out.
    """

    def __init__(
        self,
        player_id: str,
        input_fn: Callable[[str], str] = input,
        output_fn: Callable[[str], None] = print,
    ):
        """Initialize human player controller.

        Args:
            player_id: Player this controller speaks for
            input_fn: Line reader (defaults to the built-in input)
            output_fn: Line writer (defaults to print)
        """
        self.player_id = player_id
        self.input_fn = input_fn
        self.output_fn = output_fn
        self._announced: tuple[int, str] | None = None

    def next_command(self, game: GameState, report: TurnReport) -> str:
        """Show the pre-turn report once per turn, then read a command line."""
        key = (game.turn, report.player_id)
        if self._announced != key:
            self._announced = key
            player = game.players[self.player_id]
            self.output_fn(f"\n=== Turn {game.turn}: {player.name} ({self.player_id}) ===")
            for line in format_report(report):
                self.output_fn(line)
        return self.input_fn(f"{self.player_id}> ")

    def on_result(self, result: CommandResult) -> None:
        self.output_fn(result.message)

    def on_error(self, error: Exception) -> None:
        """Print an error, adding the command list for unknown commands."""
        message = f"❌ {error}"
        if isinstance(error, ParseError) and error.error_type in (
            ErrorType.UNKNOWN_ENTITY,
            ErrorType.UNKNOWN_ACTION,
            ErrorType.EMPTY_COMMAND,
        ):
            message += "\n\n" + HELP_TEXT
        self.output_fn(message)
