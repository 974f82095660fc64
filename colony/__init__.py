"""Colony Protocol: a turn-based strategy engine.

Players take turns in a fixed order. Before each turn the engine advances
the acting player's builds, production, fleet movement and combat; the
player then issues commands until they end their turn.
"""

__version__ = "0.1.0"
