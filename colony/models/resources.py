"""Resource quantities shared by costs, storage and production."""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class ResourceKind(str, Enum):
    """The three stockpiled resources."""

    MINERALS = "minerals"
    GAS = "gas"
    ENERGY = "energy"


class Resources(BaseModel):
    """Immutable bundle of resource amounts.

    Used for structure and ship costs, production rates, storage capacity
    and reservation snapshots.
    """

    model_config = ConfigDict(frozen=True)

    minerals: int = Field(default=0, ge=0)
    gas: int = Field(default=0, ge=0)
    energy: int = Field(default=0, ge=0)

    def get(self, kind: ResourceKind) -> int:
        return getattr(self, kind.value)

    def items(self) -> list[tuple[ResourceKind, int]]:
        return [(kind, self.get(kind)) for kind in ResourceKind]

    def is_zero(self) -> bool:
        return all(amount == 0 for _, amount in self.items())

    def scaled(self, factor: int) -> "Resources":
        """Return this bundle multiplied by a non-negative integer factor."""
        if factor < 0:
            raise ValueError(f"Invalid factor: {factor} (must be >= 0)")
        return Resources(
            minerals=self.minerals * factor,
            gas=self.gas * factor,
            energy=self.energy * factor,
        )

    def covers(self, other: "Resources") -> bool:
        """Return True if every amount here is at least the one in other."""
        return all(self.get(kind) >= amount for kind, amount in other.items())

    def __add__(self, other: "Resources") -> "Resources":
        return Resources(
            minerals=self.minerals + other.minerals,
            gas=self.gas + other.gas,
            energy=self.energy + other.energy,
        )

    @classmethod
    def from_mapping(cls, amounts: dict[ResourceKind, int]) -> "Resources":
        return cls(**{kind.value: amount for kind, amount in amounts.items()})

    def __str__(self) -> str:
        return ", ".join(f"{kind.value}={amount}" for kind, amount in self.items())
