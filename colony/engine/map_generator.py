"""Game setup: star map generation and starting positions."""

import logging
from collections import deque
from typing import Optional, Sequence

from ..configs import ShipConfig, StructureConfig, default_ship_config, default_structure_config
from ..errors import ConfigurationError
from ..models import GameState, Planet, Player, ResourceLedger, WorldGraph
from ..utils import GameRNG, MAP_SIZES, generate_planet_names, name_to_id
from ..utils.constants import (
    EDGE_DISTANCE_RANGE,
    EXTRA_EDGE_RATIO,
    PLAYER_ID_FORMAT,
    REQUIRED_STRUCTURES,
    STARTING_SHIPS,
    STARTING_STRUCTURES,
)

logger = logging.getLogger(__name__)


def generate_graph(planet_ids: Sequence[str], rng: GameRNG) -> WorldGraph:
    """Build a connected random graph over the given planets.

    Algorithm:
    1. Random spanning tree: each planet (in shuffled order) links to a
       random planet already in the tree
    2. A few extra lanes between unlinked pairs to create loops
    3. Every lane gets a random distance in EDGE_DISTANCE_RANGE

    Args:
        planet_ids: Planet identifiers
        rng: Seeded RNG

    Returns:
        Connected WorldGraph
    """
    order = list(planet_ids)
    rng.shuffle(order)
    low, high = EDGE_DISTANCE_RANGE
    edges: dict[frozenset, int] = {}

    for index in range(1, len(order)):
        parent = order[rng.randint(0, index - 1)]
        edges[frozenset((order[index], parent))] = rng.randint(low, high)

    extra = int(len(order) * EXTRA_EDGE_RATIO)
    attempts = 0
    while extra > 0 and attempts < extra * 20 and len(order) > 2:
        attempts += 1
        a, b = rng.sample(order, 2)
        key = frozenset((a, b))
        if key in edges:
            continue
        edges[key] = rng.randint(low, high)
        extra -= 1

    return WorldGraph.from_edges(planet_ids, [(*sorted(key), weight) for key, weight in edges.items()])


def _hops_from(graph: WorldGraph, start: str) -> dict[str, int]:
    hops = {start: 0}
    queue = deque([start])
    while queue:
        current = queue.popleft()
        for other in graph.neighbors(current):
            if other not in hops:
                hops[other] = hops[current] + 1
                queue.append(other)
    return hops


def pick_start_planets(graph: WorldGraph, count: int, rng: GameRNG) -> list[str]:
    """Choose count start planets spread as far apart as possible.

    The first is random; each next one maximizes its hop distance to the
    closest already chosen planet.
    """
    planet_ids = graph.planet_ids
    if count > len(planet_ids):
        raise ValueError(f"Cannot place {count} players on {len(planet_ids)} planets")
    chosen = [rng.choice(planet_ids)]
    nearest = _hops_from(graph, chosen[0])
    while len(chosen) < count:
        best = max((pid for pid in planet_ids if pid not in chosen), key=lambda pid: nearest[pid])
        chosen.append(best)
        for pid, hops in _hops_from(graph, best).items():
            nearest[pid] = min(nearest[pid], hops)
    return chosen


def check_required_kinds(structures: StructureConfig, ships: ShipConfig) -> None:
    """Fail setup if tables lack kinds the engine relies on.

    Raises:
        ConfigurationError: If a required structure or ship kind is missing
    """
    for structure_id in REQUIRED_STRUCTURES:
        structures.require(structure_id)
    for structure_id in STARTING_STRUCTURES:
        structures.require(structure_id)
    for ship_id in STARTING_SHIPS:
        ships.require(ship_id)
    if not ships.colonizers():
        raise ConfigurationError("Ship table defines no colonizer ship")


def generate_game(
    player_names: Sequence[str],
    ai_players: Sequence[bool] | None = None,
    size: str = "small",
    seed: int = 42,
    structures: Optional[StructureConfig] = None,
    ships: Optional[ShipConfig] = None,
) -> GameState:
    """Create a new game ready for the first pre-turn.

    Each player starts on their own planet with the starting structures,
    full storage, a charged shield and a fleet of starting ships. All
    other planets are unclaimed and empty.

    Args:
        player_names: Display names in turn order
        ai_players: Per-player AI flags (default: all human)
        size: "small", "medium" or "large"
        seed: RNG seed for deterministic generation
        structures: Structure table (default: built-in)
        ships: Ship table (default: built-in)

    Returns:
        New GameState

    Raises:
        ConfigurationError: If a required kind is missing from the tables
        ValueError: If size is unknown or there are too many players
    """
    if size not in MAP_SIZES:
        raise ValueError(f"Unknown map size: {size} (expected one of {', '.join(MAP_SIZES)})")
    if len(player_names) < 2:
        raise ValueError("A game needs at least two players")
    ai_players = list(ai_players) if ai_players is not None else [False] * len(player_names)
    if len(ai_players) != len(player_names):
        raise ValueError("ai_players must have one flag per player")

    structures = structures or default_structure_config()
    ships = ships or default_ship_config()
    check_required_kinds(structures, ships)

    rng = GameRNG(seed)
    names = generate_planet_names(MAP_SIZES[size], rng)
    planets = {name_to_id(name): Planet(id=name_to_id(name), name=name) for name in names}
    graph = generate_graph(list(planets), rng)

    players = {}
    for index, (name, is_ai) in enumerate(zip(player_names, ai_players), start=1):
        player_id = PLAYER_ID_FORMAT.format(index)
        players[player_id] = Player(id=player_id, name=name, is_ai=is_ai)

    game = GameState(
        seed=seed,
        graph=graph,
        planets=planets,
        players=players,
        turn_order=list(players),
        structures=structures,
        ships=ships,
        rng=rng,
    )

    for player_id, planet_id in zip(players, pick_start_planets(graph, len(players), rng)):
        planet = game.planets[planet_id]
        planet.owner = player_id
        planet.structures = dict(STARTING_STRUCTURES)
        planet.ledger = ResourceLedger(planet_id=planet_id)
        game.refresh_storage(planet)
        planet.ledger.fill()
        planet.shield = game.max_shield(planet)
        game.new_fleet(player_id, planet_id, ships=STARTING_SHIPS)
        logger.debug(f"{player_id} starts at {planet_id}")

    logger.info(
        f"Generated {size} map with {len(planets)} planets for {len(players)} players (seed {seed})"
    )
    return game
