"""Built-in structure and ship tables used when no custom tables are given."""

from ..models.resources import Resources as R
from .schemas import Prerequisite, ShipDefinition, StructureDefinition
from .tables import ShipConfig, StructureConfig

NO_STORAGE = [R(), R(), R()]


def _capital_prereq(levels: list[int]) -> list[Prerequisite]:
    return [Prerequisite(structure_id="planetary_capital", required_levels=levels)]


DEFAULT_STRUCTURES = [
    StructureDefinition(
        id="planetary_capital",
        name="Planetary Capital",
        description="Seat of government. Provides base production and storage.",
        max_level=3,
        costs=[R(minerals=100), R(minerals=300, gas=100, energy=100), R(minerals=600, gas=300, energy=300)],
        build_time=[3, 5, 8],
        production=[R(minerals=20, gas=10, energy=10), R(minerals=40, gas=20, energy=20), R(minerals=60, gas=30, energy=30)],
        storage_capacity=[R(minerals=500, gas=300, energy=300), R(minerals=1000, gas=600, energy=600), R(minerals=2000, gas=1200, energy=1200)],
        hitpoints=[0, 0, 0],
    ),
    StructureDefinition(
        id="mineral_mine",
        name="Mineral Mine",
        description="Extracts minerals from the planet's crust.",
        max_level=3,
        costs=[R(minerals=50, energy=10), R(minerals=120, energy=30), R(minerals=250, energy=60)],
        build_time=[2, 3, 4],
        production=[R(minerals=20), R(minerals=40), R(minerals=70)],
        storage_capacity=NO_STORAGE,
        prerequisites=_capital_prereq([1, 1, 2]),
    ),
    StructureDefinition(
        id="gas_extractor",
        name="Gas Extractor",
        description="Harvests atmospheric gas.",
        max_level=3,
        costs=[R(minerals=60, energy=10), R(minerals=140, energy=30), R(minerals=280, energy=60)],
        build_time=[2, 3, 4],
        production=[R(gas=15), R(gas=30), R(gas=50)],
        prerequisites=_capital_prereq([1, 1, 2]),
    ),
    StructureDefinition(
        id="solar_array",
        name="Solar Array",
        description="Collects stellar energy.",
        max_level=3,
        costs=[R(minerals=60, gas=10), R(minerals=140, gas=30), R(minerals=280, gas=60)],
        build_time=[2, 3, 4],
        production=[R(energy=15), R(energy=30), R(energy=50)],
        prerequisites=_capital_prereq([1, 1, 2]),
    ),
    StructureDefinition(
        id="storage_depot",
        name="Storage Depot",
        description="Expands resource storage.",
        max_level=3,
        costs=[R(minerals=80), R(minerals=200, gas=40), R(minerals=400, gas=100, energy=50)],
        build_time=[2, 3, 5],
        storage_capacity=[R(minerals=500, gas=300, energy=300), R(minerals=1000, gas=600, energy=600), R(minerals=2000, gas=1200, energy=1200)],
        prerequisites=_capital_prereq([1, 1, 2]),
    ),
    StructureDefinition(
        id="orbital_shipyard",
        name="Orbital Shipyard",
        description="Constructs ships. Higher levels unlock heavier hulls.",
        max_level=3,
        costs=[R(minerals=150, gas=50, energy=50), R(minerals=300, gas=120, energy=100), R(minerals=600, gas=250, energy=200)],
        build_time=[3, 4, 6],
        prerequisites=_capital_prereq([1, 2, 3]),
    ),
    StructureDefinition(
        id="defense_shield",
        name="Defense Shield",
        description="Planetary shield. Must be broken before the planet can be colonized.",
        max_level=3,
        costs=[R(minerals=100, gas=50, energy=50), R(minerals=250, gas=120, energy=120), R(minerals=500, gas=250, energy=250)],
        build_time=[3, 4, 6],
        hitpoints=[100, 200, 400],
        shield_regen_turns=3,
        prerequisites=_capital_prereq([1, 2, 2]),
    ),
]

DEFAULT_SHIPS = [
    ShipDefinition(
        id="interceptor",
        name="Interceptor",
        description="Fast attack craft, effective against other hulls.",
        attack=10,
        shield=5,
        bombardment=0,
        cost=R(minerals=40, gas=10, energy=10),
        build_time=2,
        counters=["interceptor", "ravager"],
        required_shipyard_level=1,
    ),
    ShipDefinition(
        id="ravager",
        name="Ravager",
        description="Heavy bomber built to break planetary shields.",
        attack=5,
        shield=15,
        bombardment=25,
        cost=R(minerals=80, gas=40, energy=20),
        build_time=3,
        required_shipyard_level=2,
    ),
    ShipDefinition(
        id="ark",
        name="Ark",
        description="Colony ship. Consumed when it settles a planet.",
        attack=0,
        shield=10,
        bombardment=0,
        cost=R(minerals=200, gas=100, energy=100),
        build_time=4,
        required_shipyard_level=1,
        colonizer=True,
    ),
]


def default_structure_config() -> StructureConfig:
    return StructureConfig(DEFAULT_STRUCTURES)


def default_ship_config() -> ShipConfig:
    return ShipConfig(DEFAULT_SHIPS)
