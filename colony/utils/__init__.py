"""Utility functions and constants for Colony Protocol."""

from .constants import (
    COUNTER_MULTIPLIER,
    DEFENSE_SHIELD,
    MAP_SIZES,
    MAX_AI_COMMANDS_PER_TURN,
    ORBITAL_SHIPYARD,
    PLANETARY_CAPITAL,
    RNG_SEED_DEFAULT,
    SHIELD_REGEN_TURNS,
)
from .naming import generate_planet_names, name_to_id
from .rng import GameRNG

__all__ = [
    "COUNTER_MULTIPLIER",
    "DEFENSE_SHIELD",
    "MAP_SIZES",
    "MAX_AI_COMMANDS_PER_TURN",
    "ORBITAL_SHIPYARD",
    "PLANETARY_CAPITAL",
    "RNG_SEED_DEFAULT",
    "SHIELD_REGEN_TURNS",
    "generate_planet_names",
    "name_to_id",
    "GameRNG",
]
