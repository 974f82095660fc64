"""Pydantic schemas for structure and ship definition tables."""

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from ..models.resources import Resources

# ========== Structures ==========


class Prerequisite(BaseModel):
    """Level of another structure needed before each level can be reached.

    required_levels[i] is the level of structure_id needed to reach level i+1.
    """

    model_config = ConfigDict(frozen=True)

    structure_id: str
    required_levels: list[int] = Field(description="Required level per target level")

    @field_validator("required_levels")
    @classmethod
    def non_negative_levels(cls, v: list[int]) -> list[int]:
        """Reject negative level requirements."""
        if any(level < 0 for level in v):
            raise ValueError("required_levels must be >= 0")
        return v


class StructureDefinition(BaseModel):
    """One structure kind with per-level stats.

    Every per-level list holds exactly max_level entries; entry i describes
    level i+1.
    """

    model_config = ConfigDict(frozen=True)

    id: str = Field(min_length=1)
    name: str
    description: str = ""
    max_level: int = Field(ge=1)
    costs: list[Resources]
    build_time: list[int] = Field(description="Cooldown ticks per level")
    production: list[Resources] | None = None
    storage_capacity: list[Resources] | None = None
    hitpoints: list[int] | None = None
    shield_regen_turns: int | None = Field(default=None, ge=1)
    prerequisites: list[Prerequisite] = Field(default_factory=list)

    @model_validator(mode="after")
    def check_level_tables(self) -> "StructureDefinition":
        """Check every per-level table matches max_level."""
        tables = {
            "costs": self.costs,
            "build_time": self.build_time,
            "production": self.production,
            "storage_capacity": self.storage_capacity,
            "hitpoints": self.hitpoints,
        }
        for table_name, values in tables.items():
            if values is not None and len(values) != self.max_level:
                raise ValueError(
                    f"{self.id}: {table_name} has {len(values)} entries, "
                    f"expected {self.max_level}"
                )
        for prereq in self.prerequisites:
            if len(prereq.required_levels) != self.max_level:
                raise ValueError(
                    f"{self.id}: prerequisite {prereq.structure_id} has "
                    f"{len(prereq.required_levels)} levels, expected {self.max_level}"
                )
        if any(ticks < 1 for ticks in self.build_time):
            raise ValueError(f"{self.id}: build_time entries must be >= 1")
        if self.hitpoints is not None and any(hp < 0 for hp in self.hitpoints):
            raise ValueError(f"{self.id}: hitpoints must be >= 0")
        return self

    def cost(self, level: int) -> Resources:
        return self.costs[level - 1]

    def ticks(self, level: int) -> int:
        return self.build_time[level - 1]

    def production_at(self, level: int) -> Resources:
        if self.production is None or level < 1:
            return Resources()
        return self.production[level - 1]

    def storage_at(self, level: int) -> Resources:
        if self.storage_capacity is None or level < 1:
            return Resources()
        return self.storage_capacity[level - 1]

    def hitpoints_at(self, level: int) -> int:
        if self.hitpoints is None or level < 1:
            return 0
        return self.hitpoints[level - 1]


# ========== Ships ==========


class ShipDefinition(BaseModel):
    """One ship kind with combat stats and build requirements."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(min_length=1)
    name: str
    description: str = ""
    attack: int = Field(ge=0)
    shield: int = Field(ge=0)
    bombardment: int = Field(ge=0)
    cost: Resources
    build_time: int = Field(ge=1)
    counters: list[str] = Field(
        default_factory=list, description="Ship kinds this kind has the advantage against"
    )
    required_shipyard_level: int = Field(default=1, ge=1)
    colonizer: bool = False
