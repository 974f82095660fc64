"""Queued effects waiting for their cooldown to run out.

Each variant carries the same remaining_ticks counter and reservation
snapshot and knows how to apply its own effect when the counter hits 0.
Fleet movement is not queued here: travel time lives in the fleet's
transit state.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

from .resources import Resources

if TYPE_CHECKING:
    from .game import GameState


class ActionKind(Enum):
    """Kinds of pending action."""

    BUILD = "build"
    UPGRADE = "upgrade"
    SHIP_BUILD = "ship_build"


@dataclass
class PendingAction(ABC):
    """Common fields of every queued action.

    Only the StructureAction and ShipBuildAction variants are instantiated.
    """

    id: str  # e.g., "act-4"
    player_id: str
    planet_id: str
    kind: ActionKind
    subject: str  # Structure or ship kind
    remaining_ticks: int
    reserved: Resources  # Set aside at creation, never changes

    def __post_init__(self):
        """Validate pending action data after initialization."""
        if self.remaining_ticks < 1:
            raise ValueError(
                f"Invalid remaining_ticks: {self.remaining_ticks} (must be >= 1)"
            )

    @abstractmethod
    def apply_effect(self, game: "GameState") -> None:
        """Apply the completed action to the game state."""

    def describe(self) -> str:
        return f"{self.kind.value} {self.subject} on {self.planet_id}"


@dataclass
class StructureAction(PendingAction):
    """Build (level 0 -> 1) or upgrade (level n -> n+1) a structure."""

    target_level: int = 1

    def apply_effect(self, game: "GameState") -> None:
        planet = game.planets[self.planet_id]
        old_max_shield = game.structures.max_shield(planet.structures)
        planet.structures[self.subject] = self.target_level
        game.refresh_storage(planet)

        # New shield capacity comes online charged
        gained = game.structures.max_shield(planet.structures) - old_max_shield
        if gained > 0:
            planet.shield = min(
                planet.shield + gained, game.structures.max_shield(planet.structures)
            )

    def describe(self) -> str:
        return f"{self.subject} level {self.target_level} on {self.planet_id}"


@dataclass
class ShipBuildAction(PendingAction):
    """Construct a batch of ships at a planet's shipyard."""

    count: int = 1

    def apply_effect(self, game: "GameState") -> None:
        fleet = game.first_stationed_fleet(self.player_id, self.planet_id)
        if fleet is None:
            fleet = game.new_fleet(self.player_id, self.planet_id)
        fleet.add_ships(self.subject, self.count)

    def describe(self) -> str:
        return f"{self.count}x {self.subject} at {self.planet_id}"
