"""Game configuration constants."""

# Structure ids the engine depends on
PLANETARY_CAPITAL = "planetary_capital"
ORBITAL_SHIPYARD = "orbital_shipyard"
DEFENSE_SHIELD = "defense_shield"
REQUIRED_STRUCTURES = (PLANETARY_CAPITAL, ORBITAL_SHIPYARD, DEFENSE_SHIELD)

# Shields
SHIELD_REGEN_TURNS = 3  # Quiet turns before a shield is restored

# Combat
COUNTER_MULTIPLIER = 2  # Attack multiplier against fully countered enemies

# Map generation
MAP_SIZES = {"small": 10, "medium": 20, "large": 30}  # Planet counts
EDGE_DISTANCE_RANGE = (1, 3)  # Lane weights in turns
EXTRA_EDGE_RATIO = 0.25  # Extra lanes on top of the spanning tree, per planet

# Starting assets
STARTING_STRUCTURES = {PLANETARY_CAPITAL: 1, ORBITAL_SHIPYARD: 1, DEFENSE_SHIELD: 1}
STARTING_SHIPS = {"ark": 1, "interceptor": 2}

# Players
PLAYER_ID_FORMAT = "CMDR-{:03d}"
MAX_AI_COMMANDS_PER_TURN = 50  # Attempts before an AI turn is force-ended

# Testing
RNG_SEED_DEFAULT = 42  # Default seed for testing
