"""Player data model."""

from dataclasses import dataclass, field
from typing import List

from .pending_action import PendingAction


@dataclass
class Player:
    """A participant in the fixed turn queue.

    Humans and AIs share this model; how a player picks commands is decided
    by the decision source the scheduler pairs with it.
    """

    id: str  # e.g., "CMDR-001"
    name: str  # Display name
    is_ai: bool = False
    pending_actions: List[PendingAction] = field(
        default_factory=list
    )  # In-flight builds, in insertion order

    def __post_init__(self):
        """Validate player data after initialization."""
        if not self.id:
            raise ValueError("Player id cannot be empty")
        if not self.name:
            raise ValueError("Player name cannot be empty")
