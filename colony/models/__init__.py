"""Data models for Colony Protocol."""

from .command import Action, Command, Entity
from .fleet import Fleet, FleetOrder, Transit
from .game import GameState
from .graph import WorldGraph
from .ledger import ResourceLedger
from .pending_action import ActionKind, PendingAction, ShipBuildAction, StructureAction
from .planet import Planet
from .player import Player
from .resources import ResourceKind, Resources

__all__ = [
    "Action",
    "Command",
    "Entity",
    "Fleet",
    "FleetOrder",
    "Transit",
    "GameState",
    "WorldGraph",
    "ResourceLedger",
    "ActionKind",
    "PendingAction",
    "ShipBuildAction",
    "StructureAction",
    "Planet",
    "Player",
    "ResourceKind",
    "Resources",
]
