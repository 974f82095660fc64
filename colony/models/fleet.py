"""Fleet data model for groups of ships."""

from dataclasses import dataclass, field
from typing import Dict, Optional


@dataclass
class Transit:
    """A fleet's position on a travel lane.

    remaining counts the distance units still to cover towards destination.
    """

    origin: str
    destination: str
    distance: int  # Lane weight
    remaining: int

    def __post_init__(self):
        """Validate transit data after initialization."""
        if self.origin == self.destination:
            raise ValueError("Transit origin and destination must differ")
        if self.distance < 1:
            raise ValueError(f"Invalid distance: {self.distance} (must be >= 1)")
        if not (0 < self.remaining <= self.distance):
            raise ValueError(
                f"Invalid remaining: {self.remaining} (must be 1-{self.distance})"
            )


@dataclass
class FleetOrder:
    """Standing order carried by a stationed fleet."""

    kind: str  # "bombard"
    target: str  # Planet id


@dataclass
class Fleet:
    """A group of ships belonging to one owner.

    A fleet is either stationed at exactly one planet (location set) or
    travelling along exactly one lane (transit set), never both.
    """

    id: str  # Unique identifier (e.g., "fleet-7")
    owner: str  # Player id
    ships: Dict[str, int] = field(default_factory=dict)  # ship kind -> count
    location: Optional[str] = None  # Planet id while stationed
    transit: Optional[Transit] = None  # Lane position while moving
    name: Optional[str] = None  # Optional player-given name
    just_arrived: bool = False  # Arrived during the current pre-turn
    order: Optional[FleetOrder] = None

    def __post_init__(self):
        """Validate fleet data after initialization."""
        if (self.location is None) == (self.transit is None):
            raise ValueError(
                f"Fleet {self.id} must be either stationed or in transit"
            )
        for kind, count in self.ships.items():
            if count < 0:
                raise ValueError(f"Invalid count for {kind}: {count} (must be >= 0)")
        self.ships = {kind: count for kind, count in self.ships.items() if count > 0}

    @property
    def number(self) -> int:
        """Creation sequence number parsed from the id."""
        return int(self.id.rsplit("-", 1)[-1])

    @property
    def is_stationed(self) -> bool:
        return self.location is not None

    @property
    def is_empty(self) -> bool:
        return not self.ships

    @property
    def ship_total(self) -> int:
        return sum(self.ships.values())

    def add_ships(self, kind: str, count: int) -> None:
        if count <= 0:
            raise ValueError(f"Invalid count: {count} (must be > 0)")
        self.ships[kind] = self.ships.get(kind, 0) + count

    def remove_ships(self, kind: str, count: int) -> None:
        """Remove ships of one kind.

        Raises:
            ValueError: If the fleet holds fewer than count ships of kind
        """
        held = self.ships.get(kind, 0)
        if count <= 0 or count > held:
            raise ValueError(f"Fleet {self.id} cannot remove {count} {kind} (has {held})")
        if held == count:
            del self.ships[kind]
        else:
            self.ships[kind] = held - count

    def station(self, planet_id: str) -> None:
        self.location = planet_id
        self.transit = None

    def depart(self, transit: Transit) -> None:
        self.location = None
        self.transit = transit
        self.just_arrived = False
