"""Rule-based AI strategy.

The strategy walks a fixed priority list of candidate commands and
returns the first one the command pipeline would accept on its private
snapshot. When nothing is left to do it ends the turn.

Priorities:
1. Colonize where a colony ship sits on a planet with its shield down
2. Bombard enemy planets with fleets that can
3. Queue economy buildings, then shipyard and shield upgrades, then ships
4. Send fleets with colony ships to unclaimed neighbors and bombers to enemy neighbors
5. End turn
"""

import logging

from ..engine.commands import CommandPipeline
from ..errors import ActionNotFound, ValidationError
from ..models.command import Action, Command, Entity
from ..models.game import GameState
from ..utils import DEFENSE_SHIELD, ORBITAL_SHIPYARD, PLANETARY_CAPITAL, GameRNG
from .strategy import WorldView

logger = logging.getLogger(__name__)

ECONOMY_STRUCTURES = ["mineral_mine", "gas_extractor", "solar_array"]
SHIP_PRIORITY = [("ravager", 2), ("interceptor", 2)]


class HeuristicStrategy:
    """Deterministic (per seed) rule-based AI."""

    def __init__(self, seed: int = 0):
        self.rng = GameRNG(seed)
        self.pipeline = CommandPipeline()
        self._turn_seen: int | None = None
        self._tried: set[str] = set()

    def decide(self, view: WorldView) -> Command:
        """Return the highest-priority command valid on the snapshot.

        Args:
            view: Snapshot of the world for this player

        Returns:
            A command; advance_cycle when nothing else applies
        """
        if view.turn != self._turn_seen:
            self._turn_seen = view.turn
            self._tried = set()

        for command in self._candidates(view.game, view.player_id):
            key = str(command)
            if key in self._tried:
                continue
            try:
                self.pipeline.validate(view.game, view.player_id, command)
            except (ValidationError, ActionNotFound):
                continue
            self._tried.add(key)
            logger.debug(f"{view.player_id} chose: {key}")
            return command

        return Command(entity=Entity.GENERAL, action=Action.ADVANCE_CYCLE)

    def _candidates(self, game: GameState, player_id: str):
        """Yield candidate commands in priority order."""
        fleets = [f for f in game.fleets_owned_by(player_id) if f.is_stationed]
        has_colonizer = any(game.ships.has_colonizer(f.ships) for f in game.fleets_owned_by(player_id))

        for fleet in fleets:
            yield Command(entity=Entity.FLEET, action=Action.COLONIZE, target=fleet.id)
        for fleet in fleets:
            yield Command(entity=Entity.FLEET, action=Action.BOMBARD, target=fleet.id)

        for planet in game.planets_owned_by(player_id):
            for structure_id in ECONOMY_STRUCTURES:
                yield Command(entity=Entity.PLANET, action=Action.BUILD, target=planet.id, argument=structure_id)
            for structure_id in (ORBITAL_SHIPYARD, DEFENSE_SHIELD, PLANETARY_CAPITAL):
                yield Command(entity=Entity.PLANET, action=Action.UPGRADE, target=planet.id, argument=structure_id)
            if not has_colonizer:
                for ship_id in game.ships.colonizers():
                    yield Command(entity=Entity.FLEET, action=Action.BUILD_SHIPS, target=planet.id, argument=ship_id)
            for ship_id, count in SHIP_PRIORITY:
                if ship_id in game.ships:
                    yield Command(
                        entity=Entity.FLEET, action=Action.BUILD_SHIPS, target=planet.id, argument=ship_id, count=count
                    )

        for fleet in fleets:
            destination = self._pick_destination(game, player_id, fleet)
            if destination is not None:
                yield Command(entity=Entity.FLEET, action=Action.MOVE, target=fleet.id, argument=destination)

    def _pick_destination(self, game: GameState, player_id: str, fleet) -> str | None:
        """Choose a neighboring planet worth moving to, or None to stay."""
        if fleet.order is not None or fleet.just_arrived:
            return None
        here = game.planets[fleet.location]
        if here.owner != player_id and here.shield > 0 and game.ships.bombardment_power(fleet.ships) > 0:
            return None

        neighbors = sorted(game.graph.neighbors(fleet.location))
        if game.ships.has_colonizer(fleet.ships):
            targets = [pid for pid in neighbors if game.planets[pid].owner is None]
        elif game.ships.bombardment_power(fleet.ships) > 0:
            targets = [
                pid for pid in neighbors if game.planets[pid].owner not in (None, player_id)
            ] or [pid for pid in neighbors if game.planets[pid].owner != player_id]
        else:
            return None
        if not targets:
            return None
        return self.rng.choice(targets)
