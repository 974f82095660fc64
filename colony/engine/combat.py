"""Combat resolution: fleet vs fleet, bombardment and conquest.

This module handles:
1. Fleet vs fleet combat wherever fleets of different owners share a planet
2. Bombardment of planetary shields by fleets holding a bombard order
3. Conquest of planets whose shield is down by fleets carrying a colonizer

Fleet combat is decided by aggregate power. Each ship contributes its
attack plus its shield, and its attack is scaled up by how much of the
opposing force it counters:

    m = 1 + (COUNTER_MULTIPLIER - 1) * (enemy ships it counters / enemy ships)
    power = sum(count * (attack * m + shield))

The strongest owner wins outright and loses nothing; every other owner's
fleets at the planet are destroyed. On equal power the owner holding the
earliest-created fleet at the planet prevails.
"""

import logging
from dataclasses import dataclass, field
from fractions import Fraction
from typing import Optional

from ..configs import ShipConfig
from ..models.fleet import Fleet
from ..models.game import GameState
from ..utils import COUNTER_MULTIPLIER, PLANETARY_CAPITAL
from . import pending_actions

logger = logging.getLogger(__name__)


@dataclass
class CombatEvent:
    """Record of a fleet battle.

    Attributes:
        planet_id: Where the battle took place
        forces: Owner -> pooled ship counts before the battle
        power: Owner -> aggregate power
        winner: Owner whose fleets survived
        destroyed_fleets: IDs of fleets removed from the game
        tie_break: True if the winner was decided by fleet age
    """

    planet_id: str
    forces: dict[str, dict[str, int]]
    power: dict[str, Fraction]
    winner: str
    destroyed_fleets: list[str] = field(default_factory=list)
    tie_break: bool = False


@dataclass
class BombardmentEvent:
    """Record of a shield bombardment."""

    planet_id: str
    fleet_id: str
    attacker: str
    damage: int
    shield_before: int
    shield_after: int


@dataclass
class ConquestEvent:
    """Record of a planet changing hands.

    Attributes:
        planet_id: Conquered planet
        previous_owner: Owner before conquest (None for unclaimed planets)
        new_owner: Conquering player
        fleet_id: Fleet that supplied the colonizer
        colonizer: Ship kind consumed
        founded: True if a new colony was founded on an unclaimed planet
        cancelled_actions: Previous owner's pending actions dropped
    """

    planet_id: str
    previous_owner: Optional[str]
    new_owner: str
    fleet_id: str
    colonizer: str
    founded: bool = False
    cancelled_actions: list[str] = field(default_factory=list)


# =========================================================================
# FLEET VS FLEET
# =========================================================================


def pool_ships(fleets: list[Fleet]) -> dict[str, int]:
    """Sum ship counts of several fleets by kind."""
    pooled: dict[str, int] = {}
    for fleet in fleets:
        for kind, count in fleet.ships.items():
            pooled[kind] = pooled.get(kind, 0) + count
    return pooled


def calculate_power(ships: ShipConfig, own: dict[str, int], enemy: dict[str, int]) -> Fraction:
    """Aggregate power of a force against an opposing force.

    Args:
        ships: Ship table
        own: Ship kind -> count of the force being scored
        enemy: Ship kind -> count of the opposing force

    Returns:
        Exact power value
    """
    enemy_total = sum(enemy.values())
    power = Fraction(0)
    for kind, count in own.items():
        definition = ships.require(kind)
        multiplier = Fraction(1)
        if enemy_total:
            countered = sum(enemy.get(target, 0) for target in definition.counters)
            multiplier += (COUNTER_MULTIPLIER - 1) * Fraction(countered, enemy_total)
        power += count * (definition.attack * multiplier + definition.shield)
    return power


def resolve_fleet_combat(game: GameState, planet_id: str) -> CombatEvent | None:
    """Resolve a battle at one planet if two or more owners are present.

    Args:
        game: Current game state
        planet_id: Planet to check

    Returns:
        CombatEvent, or None if no battle took place
    """
    present = [fleet for fleet in game.fleets_at(planet_id) if not fleet.is_empty]
    by_owner: dict[str, list[Fleet]] = {}
    for fleet in present:
        by_owner.setdefault(fleet.owner, []).append(fleet)
    if len(by_owner) < 2:
        return None

    forces = {owner: pool_ships(fleets) for owner, fleets in by_owner.items()}
    power = {}
    for owner, own in forces.items():
        enemy = pool_ships([f for f in present if f.owner != owner])
        power[owner] = calculate_power(game.ships, own, enemy)

    best = max(power.values())
    contenders = [owner for owner, value in power.items() if value == best]
    winner = min(contenders, key=lambda owner: min(f.number for f in by_owner[owner]))

    # Every losing fleet at the planet goes, empty named fleets included
    destroyed = []
    for fleet in game.fleets_at(planet_id):
        if fleet.owner != winner:
            game.remove_fleet(fleet.id)
            destroyed.append(fleet.id)

    logger.info(
        f"Battle at {planet_id}: {winner} wins "
        f"({', '.join(f'{o}={float(p):.1f}' for o, p in power.items())})"
    )
    return CombatEvent(
        planet_id=planet_id,
        forces=forces,
        power=power,
        winner=winner,
        destroyed_fleets=destroyed,
        tie_break=len(contenders) > 1,
    )


def process_combat(game: GameState) -> list[CombatEvent]:
    """Resolve fleet battles at every planet.

    Args:
        game: Current game state

    Returns:
        Combat events in planet order
    """
    events = []
    for planet_id in game.graph.planet_ids:
        event = resolve_fleet_combat(game, planet_id)
        if event is not None:
            events.append(event)
    return events


# =========================================================================
# BOMBARDMENT
# =========================================================================


def bombard(game: GameState, fleet: Fleet) -> BombardmentEvent:
    """Apply a fleet's bombardment to the planet it is stationed at.

    The shield is floored at 0 and the planet's regeneration counter is
    reset.
    """
    planet = game.planets[fleet.location]
    damage = game.ships.bombardment_power(fleet.ships)
    before = planet.shield
    planet.shield = max(0, planet.shield - damage)
    planet.turns_since_attacked = 0
    planet.bombarded_since_tick = True
    logger.debug(f"{fleet.id} bombarded {planet.id}: shield {before} -> {planet.shield}")
    return BombardmentEvent(
        planet_id=planet.id,
        fleet_id=fleet.id,
        attacker=fleet.owner,
        damage=damage,
        shield_before=before,
        shield_after=planet.shield,
    )


def process_bombardment(game: GameState, player_id: str) -> list[BombardmentEvent]:
    """Run every standing bombard order of the acting player.

    Orders only fire for fleets stationed at their target that did not
    arrive this pre-turn. Orders against planets the player now owns are
    dropped.

    Args:
        game: Current game state
        player_id: Acting player

    Returns:
        Bombardment events in fleet creation order
    """
    events = []
    for fleet in game.fleets_owned_by(player_id):
        order = fleet.order
        if order is None or order.kind != "bombard":
            continue
        if game.planets[order.target].owner == player_id:
            fleet.order = None
            continue
        if fleet.location != order.target or fleet.just_arrived:
            continue
        events.append(bombard(game, fleet))
    return events


# =========================================================================
# CONQUEST
# =========================================================================


def find_colonizer(game: GameState, player_id: str, planet_id: str) -> tuple[Fleet, str] | None:
    """Find the player's first eligible fleet at a planet carrying a colonizer.

    Returns:
        (fleet, colonizer ship kind), or None
    """
    for fleet in game.fleets_at(planet_id):
        if fleet.owner != player_id or fleet.just_arrived:
            continue
        for kind in fleet.ships:
            if game.ships.require(kind).colonizer:
                return fleet, kind
    return None


def attempt_conquest(
    game: GameState, player_id: str, planet_id: str, fleet: Fleet | None = None
) -> ConquestEvent | None:
    """Transfer a planet to player_id if its shield is down and a colonizer is present.

    Structures and stored resources stay with the planet. The colonizer is
    consumed and an emptied fleet is removed. Pending actions of the
    previous owner on this planet are cancelled with refund. An unclaimed
    planet without a capital gets one at level 1 and full storage.

    Args:
        game: Current game state
        player_id: Conquering player
        planet_id: Target planet
        fleet: Fleet to take the colonizer from (default: first eligible)

    Returns:
        ConquestEvent, or None if the preconditions are not met
    """
    planet = game.planets[planet_id]
    if planet.owner == player_id or planet.shield > 0:
        return None
    if fleet is None:
        found = find_colonizer(game, player_id, planet_id)
        if found is None:
            return None
        fleet, colonizer = found
    else:
        colonizer = next((k for k in fleet.ships if game.ships.require(k).colonizer), None)
        if colonizer is None or fleet.location != planet_id:
            return None

    fleet.remove_ships(colonizer, 1)
    if fleet.is_empty:
        game.remove_fleet(fleet.id)

    previous_owner = planet.owner
    planet.owner = player_id
    cancelled = pending_actions.drop_for_planet(game, planet_id, keep_owner=player_id)

    for own_fleet in game.fleets_owned_by(player_id):
        if own_fleet.order is not None and own_fleet.order.target == planet_id:
            own_fleet.order = None

    founded = False
    if previous_owner is None and planet.level_of(PLANETARY_CAPITAL) == 0:
        planet.structures[PLANETARY_CAPITAL] = 1
        game.refresh_storage(planet)
        planet.ledger.fill()
        founded = True

    logger.info(
        f"{player_id} took {planet_id} from {previous_owner or 'no one'}"
        + (" (new colony)" if founded else "")
    )
    return ConquestEvent(
        planet_id=planet_id,
        previous_owner=previous_owner,
        new_owner=player_id,
        fleet_id=fleet.id,
        colonizer=colonizer,
        founded=founded,
        cancelled_actions=cancelled,
    )
