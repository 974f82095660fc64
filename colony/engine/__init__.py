"""Game engine components."""

from .commands import CommandPipeline, CommandResult
from .map_generator import generate_game
from .scheduler import Phase, TurnScheduler
from .turn_executor import PlanetaryProcessor, TurnReport

__all__ = [
    "CommandPipeline",
    "CommandResult",
    "generate_game",
    "Phase",
    "TurnScheduler",
    "PlanetaryProcessor",
    "TurnReport",
]
