"""Fleet movement along travel lanes.

A fleet covers one distance unit per owner pre-turn, so crossing a lane
takes as many turns as the lane's weight. Departure is immediate (set by
the move command); arrival happens here and sets the just_arrived flag,
which is cleared at the owner's next pre-turn.
"""

import logging
from dataclasses import dataclass

from ..models.fleet import Fleet, Transit
from ..models.game import GameState

logger = logging.getLogger(__name__)


@dataclass
class ArrivalEvent:
    """Record of a fleet reaching its destination.

    Attributes:
        fleet_id: ID of the arriving fleet
        owner: Owner of the fleet
        origin: Planet the fleet left from
        destination: Planet the fleet arrived at
    """

    fleet_id: str
    owner: str
    origin: str
    destination: str


def depart(game: GameState, fleet: Fleet, destination: str) -> Transit:
    """Put a stationed fleet on the lane towards an adjacent planet.

    Args:
        game: Current game state
        fleet: Stationed fleet
        destination: Adjacent planet id

    Returns:
        The new transit state

    Raises:
        ValueError: If the fleet is not stationed or the planets are not adjacent
    """
    if not fleet.is_stationed:
        raise ValueError(f"Fleet {fleet.id} is already in transit")
    origin = fleet.location
    distance = game.graph.distance(origin, destination)
    transit = Transit(origin=origin, destination=destination, distance=distance, remaining=distance)
    fleet.depart(transit)
    fleet.order = None
    logger.debug(f"{fleet.id} departed {origin} -> {destination} ({distance} turns)")
    return transit


def advance(fleet: Fleet) -> bool:
    """Move an in-transit fleet one distance unit.

    Returns:
        True if the fleet arrived
    """
    if fleet.transit is None:
        return False
    fleet.transit.remaining -= 1
    if fleet.transit.remaining > 0:
        return False
    fleet.station(fleet.transit.destination)
    fleet.just_arrived = True
    return True


def cancel_move(fleet: Fleet) -> None:
    """Turn an in-transit fleet around.

    The time already spent on the lane becomes the distance back to the
    origin. A fleet that has not yet covered any distance is simply
    stationed at its origin again.

    Raises:
        ValueError: If the fleet is not in transit
    """
    transit = fleet.transit
    if transit is None:
        raise ValueError(f"Fleet {fleet.id} is not in transit")
    back = transit.distance - transit.remaining
    if back == 0:
        fleet.station(transit.origin)
        return
    fleet.transit = Transit(
        origin=transit.destination,
        destination=transit.origin,
        distance=transit.distance,
        remaining=back,
    )


def clear_arrival_flags(game: GameState, player_id: str) -> None:
    for fleet in game.fleets_owned_by(player_id):
        fleet.just_arrived = False


def process_fleet_movement(game: GameState, player_id: str) -> list[ArrivalEvent]:
    """Advance every in-transit fleet of the acting player.

    Args:
        game: Current game state
        player_id: Acting player

    Returns:
        Arrival events in fleet creation order
    """
    arrivals = []
    for fleet in game.fleets_owned_by(player_id):
        if fleet.transit is None:
            continue
        origin = fleet.transit.origin
        destination = fleet.transit.destination
        if advance(fleet):
            arrivals.append(
                ArrivalEvent(
                    fleet_id=fleet.id, owner=player_id, origin=origin, destination=destination
                )
            )
            logger.debug(f"{fleet.id} arrived at {destination}")
    return arrivals
