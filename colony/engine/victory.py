"""Victory condition checking.

The check runs only when the acting player advances the cycle. The game
ends once at most one player still owns planets.
"""

from ..models.game import GameState


def planet_owners(game: GameState) -> set[str]:
    return {planet.owner for planet in game.planets.values() if planet.owner is not None}


def check_victory(game: GameState, acting_player_id: str) -> bool:
    """Decide whether the game is over.

    Victory logic:
    - Two or more players own planets -> game continues
    - Exactly one owner left -> that owner wins
    - Nobody owns a planet -> the acting player wins

    Args:
        game: Current game state
        acting_player_id: Player who just ended their turn

    Returns:
        True if game.winner was set
    """
    owners = planet_owners(game)
    if len(owners) > 1:
        game.winner = None
        return False
    game.winner = owners.pop() if owners else acting_player_id
    return True
