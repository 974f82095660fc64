"""Game state container."""

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Optional

from ..utils import GameRNG, name_to_id
from .fleet import Fleet
from .graph import WorldGraph
from .pending_action import PendingAction
from .planet import Planet
from .player import Player
from .resources import Resources

if TYPE_CHECKING:
    from ..configs import ShipConfig, StructureConfig


@dataclass
class GameState:
    """Main game state container.

    One GameState is owned by the scheduler and passed explicitly to every
    engine function; there is no global game instance. Planets and fleets
    reference each other only by id.
    """

    seed: int  # RNG seed
    graph: WorldGraph
    planets: dict[str, Planet]  # planet id -> Planet
    players: dict[str, Player]  # player id -> Player
    turn_order: list[str]  # Fixed player queue
    structures: "StructureConfig"
    ships: "ShipConfig"
    fleets: dict[str, Fleet] = field(default_factory=dict)  # Insertion ordered
    turn: int = 1  # Full rounds of the queue, starting at 1
    current_index: int = 0  # Position of the acting player in turn_order
    winner: Optional[str] = None
    fleet_counter: int = 0  # Fleet id generation
    action_counter: int = 0  # Pending action id generation
    rng: Optional[GameRNG] = None
    last_report: Optional[Any] = None  # TurnReport of the latest pre-turn

    def __post_init__(self):
        """Initialize RNG and validate cross references."""
        if self.rng is None:
            self.rng = GameRNG(self.seed)
        if set(self.planets) != set(self.graph.planet_ids):
            raise ValueError("Planets do not match world graph")
        if not self.turn_order:
            raise ValueError("Turn order cannot be empty")
        if len(set(self.turn_order)) != len(self.turn_order):
            raise ValueError("Turn order contains duplicates")
        for player_id in self.turn_order:
            if player_id not in self.players:
                raise ValueError(f"Unknown player in turn order: {player_id}")
        if not (0 <= self.current_index < len(self.turn_order)):
            raise ValueError(f"Invalid current_index: {self.current_index}")

    # =========================================================================
    # PLAYERS
    # =========================================================================

    @property
    def current_player(self) -> Player:
        return self.players[self.turn_order[self.current_index]]

    def planets_owned_by(self, player_id: str) -> list[Planet]:
        return [p for p in self.planets.values() if p.owner == player_id]

    def fleets_owned_by(self, player_id: str) -> list[Fleet]:
        return [f for f in self.fleets.values() if f.owner == player_id]

    # =========================================================================
    # FLEETS
    # =========================================================================

    def fleets_at(self, planet_id: str) -> list[Fleet]:
        """Return fleets stationed at a planet, oldest first."""
        return [f for f in self.fleets.values() if f.location == planet_id]

    def first_stationed_fleet(self, player_id: str, planet_id: str) -> Fleet | None:
        for fleet in self.fleets_at(planet_id):
            if fleet.owner == player_id:
                return fleet
        return None

    def new_fleet(
        self, owner: str, location: str, name: str | None = None, ships: dict[str, int] | None = None
    ) -> Fleet:
        """Create and register an empty (or pre-filled) stationed fleet."""
        self.fleet_counter += 1
        fleet = Fleet(
            id=f"fleet-{self.fleet_counter}",
            owner=owner,
            ships=dict(ships or {}),
            location=location,
            name=name,
        )
        self.fleets[fleet.id] = fleet
        return fleet

    def remove_fleet(self, fleet_id: str) -> Fleet:
        return self.fleets.pop(fleet_id)

    # =========================================================================
    # PLANETS AND ACTIONS
    # =========================================================================

    def refresh_storage(self, planet: Planet) -> Resources:
        """Recompute planet storage from its structures.

        Returns:
            Amount discarded if capacity shrank
        """
        return planet.ledger.set_capacity(self.structures.storage_for(planet.structures))

    def max_shield(self, planet: Planet) -> int:
        return self.structures.max_shield(planet.structures)

    def next_action_id(self) -> str:
        self.action_counter += 1
        return f"act-{self.action_counter}"

    def pending_action_on(self, planet_id: str) -> PendingAction | None:
        for player in self.players.values():
            for action in player.pending_actions:
                if action.planet_id == planet_id:
                    return action
        return None

    # =========================================================================
    # NAME RESOLUTION
    # =========================================================================

    def find_planet(self, ref: str) -> Planet | None:
        """Resolve a planet by id, slug of its name, or name (case-insensitive)."""
        if ref in self.planets:
            return self.planets[ref]
        slug = name_to_id(ref)
        if slug in self.planets:
            return self.planets[slug]
        for planet in self.planets.values():
            if planet.name.lower() == ref.lower():
                return planet
        return None

    def find_fleet(self, ref: str) -> Fleet | None:
        """Resolve a fleet by id or name (case-insensitive)."""
        if ref in self.fleets:
            return self.fleets[ref]
        lowered = ref.lower()
        for fleet in self.fleets.values():
            if fleet.id == lowered or (fleet.name and fleet.name.lower() == lowered):
                return fleet
        return None
