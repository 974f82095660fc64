"""Structured player command produced by the parser or by an AI."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Optional


class Entity(Enum):
    """Command entity (first word)."""

    GENERAL = "general"
    PLANET = "planet"
    FLEET = "fleet"


class Action(Enum):
    """Command action (second word)."""

    # general
    STATUS = "status"
    TURN = "turn"
    STATS = "stats"
    HELP = "help"
    MAP = "map"
    SHIPS = "ships"
    ADVANCE_CYCLE = "advance_cycle"
    # planet
    BUILD = "build"
    UPGRADE = "upgrade"
    CANCEL = "cancel"
    # fleet
    MOVE = "move"
    BUILD_SHIPS = "build_ships"
    BOMBARD = "bombard"
    CANCEL_BOMBARD = "cancel_bombard"
    COLONIZE = "colonize"
    MERGE = "merge"
    SPLIT = "split"
    CREATE = "create"
    ADD = "add"
    REMOVE = "remove"
    DISBAND = "disband"


@dataclass(frozen=True)
class Command:
    """One player command.

    target is the primary planet or fleet reference (as typed; resolution
    to ids happens during validation). argument is the secondary reference:
    a destination planet, a structure or ship kind, a fleet name, or a
    second fleet. ships carries kind:count pairs for split/add/remove.
    """

    entity: Entity
    action: Action
    target: Optional[str] = None
    argument: Optional[str] = None
    count: int = 1
    ships: Dict[str, int] = field(default_factory=dict)

    def __post_init__(self):
        """Validate command data after initialization."""
        if self.count < 1:
            raise ValueError(f"Invalid count: {self.count} (must be > 0)")

    @property
    def ends_turn(self) -> bool:
        return self.entity is Entity.GENERAL and self.action is Action.ADVANCE_CYCLE

    def __str__(self) -> str:
        parts = [self.entity.value, self.action.value]
        if self.target:
            parts.append(self.target)
        if self.argument:
            parts.append(self.argument)
        if self.action is Action.BUILD_SHIPS and self.count != 1:
            parts.append(str(self.count))
        parts.extend(f"{kind}:{count}" for kind, count in self.ships.items())
        return " ".join(parts)
