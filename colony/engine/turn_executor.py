"""Pre-turn processing for the acting player.

Before a player issues commands, their slice of the world is advanced in
this fixed order:
1. Arrival flags of the player's fleets are cleared
2. Pending actions tick (completed effects apply in insertion order)
3. Production on the player's planets, then shield regeneration
4. The player's in-transit fleets advance one distance unit
5. Fleet vs fleet combat at every planet (fresh arrivals included)
6. Bombardment by the player's fleets holding a bombard order
7. Conquest check at every planet bombarded in step 6

Architecture:
Each phase is an independent method returning its events. process()
composes them and collects the events into a TurnReport that the
scheduler hands to the acting player.
"""

import logging
from dataclasses import dataclass, field

from ..models.game import GameState
from .combat import (
    BombardmentEvent,
    CombatEvent,
    ConquestEvent,
    attempt_conquest,
    process_bombardment,
    process_combat,
)
from .movement import ArrivalEvent, clear_arrival_flags, process_fleet_movement
from .pending_actions import CompletedAction, tick
from .production import ProductionEvent, ShieldEvent, process_production, process_shields

logger = logging.getLogger(__name__)


@dataclass
class TurnReport:
    """Everything that happened during one player's pre-turn.

    The rendering layer formats this; the engine only produces data.
    """

    player_id: str
    turn: int
    completed: list[CompletedAction] = field(default_factory=list)
    production: list[ProductionEvent] = field(default_factory=list)
    shields_restored: list[ShieldEvent] = field(default_factory=list)
    arrivals: list[ArrivalEvent] = field(default_factory=list)
    combats: list[CombatEvent] = field(default_factory=list)
    bombardments: list[BombardmentEvent] = field(default_factory=list)
    conquests: list[ConquestEvent] = field(default_factory=list)


class PlanetaryProcessor:
    """Runs the pre-turn phases for one player.

    Each phase is an independent method that can be tested separately.
    """

    # =========================================================================
    # INDEPENDENT PHASE METHODS
    # =========================================================================

    def execute_phase_actions(self, game: GameState, player_id: str) -> list[CompletedAction]:
        """Clear arrival flags and tick the player's pending actions."""
        clear_arrival_flags(game, player_id)
        return tick(game, player_id)

    def execute_phase_production(
        self, game: GameState, player_id: str
    ) -> tuple[list[ProductionEvent], list[ShieldEvent]]:
        """Produce resources, then regenerate shields."""
        production = process_production(game, player_id)
        shields = process_shields(game, player_id)
        return production, shields

    def execute_phase_movement(self, game: GameState, player_id: str) -> list[ArrivalEvent]:
        return process_fleet_movement(game, player_id)

    def execute_phase_combat(
        self, game: GameState, player_id: str
    ) -> tuple[list[CombatEvent], list[BombardmentEvent], list[ConquestEvent]]:
        """Fleet battles, then bombardment, then conquest checks.

        Args:
            game: Current game state
            player_id: Acting player

        Returns:
            Tuple of (combat events, bombardment events, conquest events)
        """
        combats = process_combat(game)
        bombardments = process_bombardment(game, player_id)

        conquests = []
        checked = set()
        for event in bombardments:
            if event.planet_id in checked:
                continue
            checked.add(event.planet_id)
            conquest = attempt_conquest(game, player_id, event.planet_id)
            if conquest is not None:
                conquests.append(conquest)
        return combats, bombardments, conquests

    # =========================================================================
    # ORCHESTRATION
    # =========================================================================

    def process(self, game: GameState, player_id: str) -> TurnReport:
        """Run all pre-turn phases for the acting player.

        Args:
            game: Current game state
            player_id: Acting player

        Returns:
            TurnReport, also stored as game.last_report
        """
        report = TurnReport(player_id=player_id, turn=game.turn)
        report.completed = self.execute_phase_actions(game, player_id)
        report.production, report.shields_restored = self.execute_phase_production(
            game, player_id
        )
        report.arrivals = self.execute_phase_movement(game, player_id)
        report.combats, report.bombardments, report.conquests = self.execute_phase_combat(
            game, player_id
        )

        game.last_report = report
        logger.info(
            f"Pre-turn {game.turn} for {player_id}: {len(report.completed)} completed, "
            f"{len(report.arrivals)} arrivals, {len(report.combats)} battles, "
            f"{len(report.conquests)} conquests"
        )
        return report
