"""Pending action queue: cooldown ticking, completion and cancellation.

Each player keeps its pending actions in insertion order. When several
actions finish on the same tick they are applied in that order, and every
finished action is removed in the same pass.
"""

import logging
from dataclasses import dataclass

from ..errors import ActionNotFound
from ..models.game import GameState
from ..models.pending_action import PendingAction
from ..models.resources import Resources

logger = logging.getLogger(__name__)


@dataclass
class CompletedAction:
    """Record of a pending action that took effect.

    Attributes:
        action_id: ID of the finished action
        player_id: Owner of the action
        planet_id: Planet the action targeted
        kind: "build", "upgrade" or "ship_build"
        subject: Structure or ship kind
        description: Human-readable summary
    """

    action_id: str
    player_id: str
    planet_id: str
    kind: str
    subject: str
    description: str


def enqueue(game: GameState, action: PendingAction) -> PendingAction:
    """Reserve an action's cost on its planet and append it to the queue.

    Nothing is queued if the reservation fails.

    Args:
        game: Current game state
        action: New action; action.reserved is the amount to set aside

    Returns:
        The queued action

    Raises:
        InsufficientResources: If the planet cannot cover action.reserved
    """
    planet = game.planets[action.planet_id]
    planet.ledger.reserve(action.reserved)
    game.players[action.player_id].pending_actions.append(action)
    logger.debug(
        f"{action.player_id} queued {action.id}: {action.describe()} "
        f"({action.remaining_ticks} ticks, reserved {action.reserved})"
    )
    return action


def tick(game: GameState, player_id: str) -> list[CompletedAction]:
    """Advance every pending action of one player by one tick.

    Actions reaching 0 consume their reservation and apply their effect
    immediately, in insertion order.

    Args:
        game: Current game state
        player_id: Player whose queue is ticked

    Returns:
        Completed actions in the order they were applied
    """
    player = game.players[player_id]
    completed = []
    still_pending = []

    for action in player.pending_actions:
        action.remaining_ticks -= 1
        if action.remaining_ticks > 0:
            still_pending.append(action)
            continue

        game.planets[action.planet_id].ledger.consume(action.reserved)
        action.apply_effect(game)
        completed.append(
            CompletedAction(
                action_id=action.id,
                player_id=player_id,
                planet_id=action.planet_id,
                kind=action.kind.value,
                subject=action.subject,
                description=action.describe(),
            )
        )
        logger.info(f"{player_id} completed {action.describe()}")

    player.pending_actions = still_pending
    return completed


def cancel(game: GameState, player_id: str, action_id: str) -> Resources:
    """Cancel a pending action and refund its reservation.

    Args:
        game: Current game state
        player_id: Owner of the action
        action_id: ID of the action to cancel

    Returns:
        Amount wasted because the planet's storage could not hold the refund

    Raises:
        ActionNotFound: If the player has no action with that id
    """
    player = game.players[player_id]
    for index, action in enumerate(player.pending_actions):
        if action.id == action_id:
            wasted = game.planets[action.planet_id].ledger.refund(action.reserved)
            del player.pending_actions[index]
            logger.debug(f"{player_id} cancelled {action_id} (wasted {wasted})")
            return wasted
    raise ActionNotFound(action_id)


def find_on_planet(game: GameState, player_id: str, planet_id: str) -> PendingAction | None:
    for action in game.players[player_id].pending_actions:
        if action.planet_id == planet_id:
            return action
    return None


def drop_for_planet(game: GameState, planet_id: str, keep_owner: str | None = None) -> list[str]:
    """Cancel, with refund, every action on a planet not owned by keep_owner.

    Used when a planet changes hands.

    Returns:
        IDs of the cancelled actions
    """
    dropped = []
    for player in game.players.values():
        if player.id == keep_owner:
            continue
        for action in list(player.pending_actions):
            if action.planet_id == planet_id:
                cancel(game, player.id, action.id)
                dropped.append(action.id)
    return dropped
