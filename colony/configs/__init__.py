"""Structure and ship configuration tables."""

from .defaults import DEFAULT_SHIPS, DEFAULT_STRUCTURES, default_ship_config, default_structure_config
from .schemas import Prerequisite, ShipDefinition, StructureDefinition
from .tables import ShipConfig, StructureConfig

__all__ = [
    "DEFAULT_SHIPS",
    "DEFAULT_STRUCTURES",
    "default_ship_config",
    "default_structure_config",
    "Prerequisite",
    "ShipDefinition",
    "StructureDefinition",
    "ShipConfig",
    "StructureConfig",
]
