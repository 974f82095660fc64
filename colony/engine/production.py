"""Resource production and shield regeneration.

This module handles, for the acting player's planets:
1. Adding structure output to each planet's ledger (overflow is wasted)
2. Advancing the shield regeneration counter and restoring shields
"""

import logging
from dataclasses import dataclass

from ..models.game import GameState
from ..models.planet import Planet
from ..models.resources import Resources

logger = logging.getLogger(__name__)


@dataclass
class ProductionEvent:
    """Record of one planet's production.

    Attributes:
        planet_id: Producing planet
        produced: Amount added to available
        wasted: Amount lost to full storage
    """

    planet_id: str
    produced: Resources
    wasted: Resources


@dataclass
class ShieldEvent:
    """Record of a shield restored to full strength."""

    planet_id: str
    shield: int


def process_production(game: GameState, player_id: str) -> list[ProductionEvent]:
    """Credit one turn of production to every planet the player owns.

    Args:
        game: Current game state
        player_id: Acting player

    Returns:
        One event per producing planet
    """
    events = []
    for planet in game.planets_owned_by(player_id):
        output = game.structures.production_for(planet.structures)
        if output.is_zero():
            continue
        wasted = planet.ledger.produce(output)
        produced = Resources.from_mapping(
            {kind: amount - wasted.get(kind) for kind, amount in output.items()}
        )
        events.append(ProductionEvent(planet_id=planet.id, produced=produced, wasted=wasted))
    return events


def regenerate_shield(game: GameState, planet: Planet) -> bool:
    """Advance one planet's shield regeneration by one tick.

    A planet bombarded since its previous tick only has its flag cleared.
    Otherwise the quiet-turn counter grows while the shield is below max,
    and the shield is restored to max when the counter reaches the
    configured number of turns.

    Returns:
        True if the shield was restored this tick
    """
    max_shield = game.max_shield(planet)
    if planet.bombarded_since_tick:
        planet.bombarded_since_tick = False
        return False
    if planet.shield >= max_shield:
        planet.turns_since_attacked = 0
        return False

    planet.turns_since_attacked += 1
    if planet.turns_since_attacked >= game.structures.regen_turns():
        planet.shield = max_shield
        planet.turns_since_attacked = 0
        logger.debug(f"Shield on {planet.id} restored to {max_shield}")
        return True
    return False


def process_shields(game: GameState, player_id: str) -> list[ShieldEvent]:
    """Run shield regeneration on every planet the player owns."""
    events = []
    for planet in game.planets_owned_by(player_id):
        if regenerate_shield(game, planet):
            events.append(ShieldEvent(planet_id=planet.id, shield=planet.shield))
    return events
