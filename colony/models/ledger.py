"""Per-planet resource accounting.

Every planet owns one ResourceLedger tracking, per resource kind, the
storage capacity, the amount available for spending, and the amount
reserved by pending actions. After every operation:

    0 <= available, 0 <= reserved, available + reserved <= capacity

Overflow on produce/refund is discarded and reported as waste; it is never
an error.
"""

from ..errors import InsufficientResources
from .resources import ResourceKind, Resources


def _zeros() -> dict[ResourceKind, int]:
    return {kind: 0 for kind in ResourceKind}


class ResourceLedger:
    """Capacity, available and reserved pools for a single planet."""

    def __init__(
        self,
        capacity: Resources | None = None,
        available: Resources | None = None,
        planet_id: str | None = None,
    ):
        """Initialize ledger.

        Args:
            capacity: Storage capacity per kind (default: zero)
            available: Starting stock, must fit in capacity (default: zero)
            planet_id: Owning planet, used in error messages

        Raises:
            ValueError: If the starting stock exceeds capacity
        """
        self.planet_id = planet_id
        self._capacity = _zeros()
        self._available = _zeros()
        self._reserved = _zeros()
        if capacity is not None:
            self._capacity.update(dict(capacity.items()))
        if available is not None:
            for kind, amount in available.items():
                if amount > self._capacity[kind]:
                    raise ValueError(
                        f"Invalid available {kind.value}: {amount} "
                        f"(exceeds capacity {self._capacity[kind]})"
                    )
                self._available[kind] = amount

    @property
    def capacity(self) -> Resources:
        return Resources.from_mapping(self._capacity)

    @property
    def available(self) -> Resources:
        return Resources.from_mapping(self._available)

    @property
    def reserved(self) -> Resources:
        return Resources.from_mapping(self._reserved)

    def free_space(self, kind: ResourceKind) -> int:
        return self._capacity[kind] - self._available[kind] - self._reserved[kind]

    # =========================================================================
    # SPENDING
    # =========================================================================

    def can_afford(self, cost: Resources) -> bool:
        """Dry-run check: would reserve(cost) succeed?"""
        return self.available.covers(cost)

    def reserve(self, cost: Resources) -> Resources:
        """Move cost from available to reserved.

        All kinds succeed together or nothing changes.

        Args:
            cost: Amount to set aside

        Returns:
            The reserved snapshot (equal to cost)

        Raises:
            InsufficientResources: If any kind has less available than cost
        """
        if not self.can_afford(cost):
            raise InsufficientResources(cost, self.available, self.planet_id)
        for kind, amount in cost.items():
            self._available[kind] -= amount
            self._reserved[kind] += amount
        return cost

    def refund(self, amount: Resources) -> Resources:
        """Return a reservation to available, clamped to capacity.

        Args:
            amount: Reserved snapshot being released

        Returns:
            Amount discarded because storage was full

        Raises:
            ValueError: If amount exceeds what is currently reserved
        """
        self._check_reserved(amount)
        wasted = _zeros()
        for kind, value in amount.items():
            self._reserved[kind] -= value
            room = self._capacity[kind] - self._reserved[kind] - self._available[kind]
            kept = min(value, max(room, 0))
            self._available[kind] += kept
            wasted[kind] = value - kept
        return Resources.from_mapping(wasted)

    def consume(self, amount: Resources) -> None:
        """Permanently spend a reservation (pending action completed)."""
        self._check_reserved(amount)
        for kind, value in amount.items():
            self._reserved[kind] -= value

    # =========================================================================
    # INCOME AND STORAGE
    # =========================================================================

    def produce(self, amount: Resources) -> Resources:
        """Add income to available, clamped to free storage.

        Returns:
            Amount discarded because storage was full
        """
        wasted = _zeros()
        for kind, value in amount.items():
            kept = min(value, max(self.free_space(kind), 0))
            self._available[kind] += kept
            wasted[kind] = value - kept
        return Resources.from_mapping(wasted)

    def fill(self) -> None:
        """Top up every kind to capacity (new colonies start full)."""
        for kind in ResourceKind:
            self._available[kind] = self._capacity[kind] - self._reserved[kind]

    def set_capacity(self, capacity: Resources) -> Resources:
        """Replace storage capacity, trimming available if it no longer fits.

        Returns:
            Amount of available resources discarded

        Raises:
            ValueError: If the new capacity cannot hold current reservations
        """
        wasted = _zeros()
        for kind, value in capacity.items():
            if value < self._reserved[kind]:
                raise ValueError(
                    f"Capacity {value} for {kind.value} below reserved "
                    f"{self._reserved[kind]}"
                )
            self._capacity[kind] = value
            excess = self._available[kind] + self._reserved[kind] - value
            if excess > 0:
                self._available[kind] -= excess
                wasted[kind] = excess
        return Resources.from_mapping(wasted)

    def _check_reserved(self, amount: Resources) -> None:
        for kind, value in amount.items():
            if value > self._reserved[kind]:
                raise ValueError(
                    f"Cannot release {value} {kind.value}: only "
                    f"{self._reserved[kind]} reserved"
                )

    def __repr__(self) -> str:
        return (
            f"ResourceLedger(capacity=({self.capacity}), "
            f"available=({self.available}), reserved=({self.reserved}))"
        )
