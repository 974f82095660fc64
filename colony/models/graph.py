"""Star map topology: planets joined by weighted travel lanes."""

from collections import deque
from types import MappingProxyType
from typing import Iterable, Mapping


class WorldGraph:
    """Immutable, connected, undirected graph keyed by planet id.

    Edge weight is the travel time in turns (>= 1). Entities refer to
    planets only by id, so planets can be mutated freely without touching
    the graph.
    """

    def __init__(self, adjacency: Mapping[str, Mapping[str, int]]):
        """Build graph from an adjacency mapping.

        Args:
            adjacency: planet id -> {neighbor id -> distance}

        Raises:
            ValueError: If the graph is empty, asymmetric, has a self loop,
                a non-positive weight, or is not connected
        """
        if not adjacency:
            raise ValueError("World graph must contain at least one planet")

        frozen = {}
        for planet_id, neighbors in adjacency.items():
            for other, weight in neighbors.items():
                if other == planet_id:
                    raise ValueError(f"Self loop on planet {planet_id}")
                if other not in adjacency:
                    raise ValueError(f"Edge {planet_id}-{other} references unknown planet")
                if weight < 1:
                    raise ValueError(
                        f"Invalid distance {weight} on edge {planet_id}-{other} (must be >= 1)"
                    )
                if adjacency[other].get(planet_id) != weight:
                    raise ValueError(f"Edge {planet_id}-{other} is not symmetric")
            frozen[planet_id] = MappingProxyType(dict(neighbors))
        self._adjacency = MappingProxyType(frozen)

        if not self._is_connected():
            raise ValueError("World graph is not connected")

    @classmethod
    def from_edges(
        cls, planet_ids: Iterable[str], edges: Iterable[tuple[str, str, int]]
    ) -> "WorldGraph":
        """Build graph from a planet list and (a, b, distance) edges."""
        adjacency: dict[str, dict[str, int]] = {pid: {} for pid in planet_ids}
        for a, b, weight in edges:
            if a not in adjacency or b not in adjacency:
                raise ValueError(f"Edge {a}-{b} references unknown planet")
            if b in adjacency[a]:
                raise ValueError(f"Duplicate edge {a}-{b}")
            adjacency[a][b] = weight
            adjacency[b][a] = weight
        return cls(adjacency)

    def __deepcopy__(self, memo):
        return self

    @property
    def planet_ids(self) -> list[str]:
        return list(self._adjacency)

    def __contains__(self, planet_id: str) -> bool:
        return planet_id in self._adjacency

    def neighbors(self, planet_id: str) -> Mapping[str, int]:
        """Return {neighbor id: distance} for a planet.

        Raises:
            KeyError: If planet_id is not on the map
        """
        return self._adjacency[planet_id]

    def are_adjacent(self, a: str, b: str) -> bool:
        return a in self._adjacency and b in self._adjacency[a]

    def distance(self, a: str, b: str) -> int:
        """Return the weight of the edge a-b.

        Raises:
            KeyError: If a and b are not adjacent
        """
        if not self.are_adjacent(a, b):
            raise KeyError(f"No lane between {a} and {b}")
        return self._adjacency[a][b]

    def edges(self) -> list[tuple[str, str, int]]:
        """Return each undirected edge once as (a, b, distance)."""
        seen = []
        for a, neighbors in self._adjacency.items():
            for b, weight in neighbors.items():
                if a < b:
                    seen.append((a, b, weight))
        return seen

    def _is_connected(self) -> bool:
        start = next(iter(self._adjacency))
        visited = {start}
        queue = deque([start])
        while queue:
            current = queue.popleft()
            for other in self._adjacency[current]:
                if other not in visited:
                    visited.add(other)
                    queue.append(other)
        return len(visited) == len(self._adjacency)
