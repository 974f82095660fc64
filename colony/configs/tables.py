"""Read-only lookup tables for structures and ships.

Tables are validated once when built; any malformed or dangling entry
raises ConfigurationError, which aborts game setup.
"""

from typing import Iterable

from pydantic import TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from ..errors import ConfigurationError
from ..models.resources import Resources
from ..utils.constants import DEFENSE_SHIELD, SHIELD_REGEN_TURNS
from .schemas import ShipDefinition, StructureDefinition

_STRUCTURE_LIST = TypeAdapter(list[StructureDefinition])
_SHIP_LIST = TypeAdapter(list[ShipDefinition])


class StructureConfig:
    """Structure definitions keyed by id."""

    def __init__(self, definitions: Iterable[StructureDefinition]):
        self._definitions: dict[str, StructureDefinition] = {}
        for definition in definitions:
            if definition.id in self._definitions:
                raise ConfigurationError(f"Duplicate structure id: {definition.id}")
            self._definitions[definition.id] = definition

        for definition in self._definitions.values():
            for prereq in definition.prerequisites:
                if prereq.structure_id not in self._definitions:
                    raise ConfigurationError(
                        f"Structure {definition.id} requires unknown structure "
                        f"{prereq.structure_id}"
                    )

    @classmethod
    def from_json(cls, text: str) -> "StructureConfig":
        """Build table from a JSON array of structure definitions.

        Raises:
            ConfigurationError: If the JSON does not match the schema
        """
        try:
            return cls(_STRUCTURE_LIST.validate_json(text))
        except PydanticValidationError as e:
            raise ConfigurationError(f"Invalid structure configuration: {e}") from e

    def __deepcopy__(self, memo):
        return self

    def __contains__(self, structure_id: str) -> bool:
        return structure_id in self._definitions

    def ids(self) -> list[str]:
        return list(self._definitions)

    def get(self, structure_id: str) -> StructureDefinition | None:
        return self._definitions.get(structure_id)

    def require(self, structure_id: str) -> StructureDefinition:
        """Return a definition or fail with ConfigurationError."""
        definition = self._definitions.get(structure_id)
        if definition is None:
            raise ConfigurationError(f"Unknown structure kind: {structure_id}")
        return definition

    # Aggregates over a planet's structures (kind -> level)

    def storage_for(self, structures: dict[str, int]) -> Resources:
        total = Resources()
        for structure_id, level in structures.items():
            total = total + self.require(structure_id).storage_at(level)
        return total

    def production_for(self, structures: dict[str, int]) -> Resources:
        total = Resources()
        for structure_id, level in structures.items():
            total = total + self.require(structure_id).production_at(level)
        return total

    def max_shield(self, structures: dict[str, int]) -> int:
        level = structures.get(DEFENSE_SHIELD, 0)
        if level == 0 or DEFENSE_SHIELD not in self._definitions:
            return 0
        return self._definitions[DEFENSE_SHIELD].hitpoints_at(level)

    def regen_turns(self) -> int:
        definition = self._definitions.get(DEFENSE_SHIELD)
        if definition is None or definition.shield_regen_turns is None:
            return SHIELD_REGEN_TURNS
        return definition.shield_regen_turns

    def missing_prerequisites(
        self, structures: dict[str, int], structure_id: str, level: int
    ) -> list[str]:
        """List unmet prerequisites for raising structure_id to level.

        Returns:
            Human-readable descriptions, empty when everything is satisfied
        """
        missing = []
        for prereq in self.require(structure_id).prerequisites:
            needed = prereq.required_levels[level - 1]
            if structures.get(prereq.structure_id, 0) < needed:
                missing.append(f"{prereq.structure_id} level {needed}")
        return missing


class ShipConfig:
    """Ship definitions keyed by id."""

    def __init__(self, definitions: Iterable[ShipDefinition]):
        self._definitions: dict[str, ShipDefinition] = {}
        for definition in definitions:
            if definition.id in self._definitions:
                raise ConfigurationError(f"Duplicate ship id: {definition.id}")
            self._definitions[definition.id] = definition

        for definition in self._definitions.values():
            for countered in definition.counters:
                if countered not in self._definitions:
                    raise ConfigurationError(
                        f"Ship {definition.id} counters unknown ship {countered}"
                    )

    @classmethod
    def from_json(cls, text: str) -> "ShipConfig":
        """Build table from a JSON array of ship definitions.

        Raises:
            ConfigurationError: If the JSON does not match the schema
        """
        try:
            return cls(_SHIP_LIST.validate_json(text))
        except PydanticValidationError as e:
            raise ConfigurationError(f"Invalid ship configuration: {e}") from e

    def __deepcopy__(self, memo):
        return self

    def __contains__(self, ship_id: str) -> bool:
        return ship_id in self._definitions

    def ids(self) -> list[str]:
        return list(self._definitions)

    def get(self, ship_id: str) -> ShipDefinition | None:
        return self._definitions.get(ship_id)

    def require(self, ship_id: str) -> ShipDefinition:
        """Return a definition or fail with ConfigurationError."""
        definition = self._definitions.get(ship_id)
        if definition is None:
            raise ConfigurationError(f"Unknown ship kind: {ship_id}")
        return definition

    def colonizers(self) -> list[str]:
        return [d.id for d in self._definitions.values() if d.colonizer]

    def bombardment_power(self, ships: dict[str, int]) -> int:
        return sum(self.require(kind).bombardment * count for kind, count in ships.items())

    def has_colonizer(self, ships: dict[str, int]) -> bool:
        return any(self.require(kind).colonizer for kind, count in ships.items() if count > 0)
