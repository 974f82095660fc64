"""Planet data model."""

from dataclasses import dataclass, field
from typing import Dict, Optional

from .ledger import ResourceLedger


@dataclass
class Planet:
    """A node of the star map that can be owned, built on and besieged.

    Planets are created at setup and never destroyed. Fleets present at a
    planet are not stored here; they are found through GameState.fleets_at.
    """

    id: str  # Stable slug (e.g., "new-terra")
    name: str  # Display name
    owner: Optional[str] = None  # Player id or None
    structures: Dict[str, int] = field(default_factory=dict)  # kind -> level (>= 1)
    shield: int = 0  # Current defense shield
    turns_since_attacked: int = 0  # Regeneration counter
    bombarded_since_tick: bool = False  # Bombarded since the last regeneration tick
    ledger: ResourceLedger = field(default_factory=ResourceLedger)

    def __post_init__(self):
        """Validate planet data after initialization."""
        if not self.id:
            raise ValueError("Planet id cannot be empty")
        if self.shield < 0:
            raise ValueError(f"Invalid shield: {self.shield} (must be >= 0)")
        if self.turns_since_attacked < 0:
            raise ValueError(
                f"Invalid turns_since_attacked: {self.turns_since_attacked} (must be >= 0)"
            )
        for kind, level in self.structures.items():
            if level < 1:
                raise ValueError(f"Invalid level for {kind}: {level} (must be >= 1)")
        if self.ledger.planet_id is None:
            self.ledger.planet_id = self.id

    def level_of(self, structure_id: str) -> int:
        """Return the level of a structure, 0 when absent."""
        return self.structures.get(structure_id, 0)
