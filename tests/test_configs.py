"""Tests for structure and ship tables."""

import json

import pytest
from pydantic import ValidationError as PydanticValidationError

from colony.configs import (
    ShipConfig,
    StructureConfig,
    StructureDefinition,
    default_ship_config,
    default_structure_config,
)
from colony.errors import ConfigurationError
from colony.models import Resources


def structure_entry(**overrides):
    entry = {
        "id": "mine",
        "name": "Mine",
        "max_level": 2,
        "costs": [{"minerals": 10}, {"minerals": 20}],
        "build_time": [1, 2],
        "production": [{"minerals": 5}, {"minerals": 9}],
    }
    entry.update(overrides)
    return entry


def ship_entry(**overrides):
    entry = {
        "id": "scout",
        "name": "Scout",
        "attack": 1,
        "shield": 1,
        "bombardment": 0,
        "cost": {"minerals": 5},
        "build_time": 1,
    }
    entry.update(overrides)
    return entry


class TestStructureConfig:
    """Test structure table loading and lookups."""

    def test_from_json(self):
        """Test loading a valid table."""
        config = StructureConfig.from_json(json.dumps([structure_entry()]))

        definition = config.require("mine")
        assert definition.cost(2) == Resources(minerals=20)
        assert definition.ticks(1) == 1
        assert definition.storage_at(1).is_zero()
        assert config.production_for({"mine": 2}) == Resources(minerals=9)

    def test_level_table_length_checked(self):
        """Test that per-level tables must match max_level."""
        with pytest.raises(ConfigurationError, match="expected 2"):
            StructureConfig.from_json(json.dumps([structure_entry(build_time=[1])]))

    def test_direct_definition_raises_pydantic_error(self):
        """Test schema validation outside from_json."""
        with pytest.raises(PydanticValidationError):
            StructureDefinition(**structure_entry(max_level=0))

    def test_negative_cost_rejected(self):
        """Test that resource amounts are non-negative."""
        with pytest.raises(ConfigurationError):
            StructureConfig.from_json(
                json.dumps([structure_entry(costs=[{"minerals": -1}, {"minerals": 2}])])
            )

    def test_malformed_json(self):
        """Test that broken JSON is a configuration error."""
        with pytest.raises(ConfigurationError):
            StructureConfig.from_json("[{")

    def test_duplicate_ids(self):
        """Test duplicate structure ids."""
        with pytest.raises(ConfigurationError, match="Duplicate structure id"):
            StructureConfig.from_json(json.dumps([structure_entry(), structure_entry()]))

    def test_unknown_prerequisite(self):
        """Test dangling prerequisite references."""
        entry = structure_entry(prerequisites=[{"structure_id": "forge", "required_levels": [1, 1]}])

        with pytest.raises(ConfigurationError, match="unknown structure forge"):
            StructureConfig.from_json(json.dumps([entry]))

    def test_require_unknown(self):
        """Test lookup of a missing kind."""
        with pytest.raises(ConfigurationError, match="Unknown structure kind"):
            default_structure_config().require("forge")
        assert default_structure_config().get("forge") is None

    def test_default_storage_and_shield(self):
        """Test aggregates over the built-in table."""
        config = default_structure_config()
        structures = {"planetary_capital": 1, "storage_depot": 1, "defense_shield": 2}

        assert config.storage_for(structures) == Resources(minerals=1000, gas=600, energy=600)
        assert config.max_shield(structures) == 200
        assert config.max_shield({"planetary_capital": 1}) == 0
        assert config.regen_turns() == 3

    def test_missing_prerequisites(self):
        """Test prerequisite listing."""
        config = default_structure_config()

        assert config.missing_prerequisites({"planetary_capital": 1}, "orbital_shipyard", 2) == [
            "planetary_capital level 2"
        ]
        assert config.missing_prerequisites({"planetary_capital": 2}, "orbital_shipyard", 2) == []


class TestShipConfig:
    """Test ship table loading and lookups."""

    def test_from_json(self):
        """Test loading a valid table."""
        config = ShipConfig.from_json(json.dumps([ship_entry(colonizer=True)]))

        assert config.colonizers() == ["scout"]
        assert config.require("scout").required_shipyard_level == 1

    def test_unknown_counter(self):
        """Test dangling counter references."""
        with pytest.raises(ConfigurationError, match="counters unknown ship"):
            ShipConfig.from_json(json.dumps([ship_entry(counters=["titan"])]))

    def test_build_time_positive(self):
        """Test ship schema bounds."""
        with pytest.raises(ConfigurationError):
            ShipConfig.from_json(json.dumps([ship_entry(build_time=0)]))

    def test_bombardment_power(self):
        """Test fleet bombardment sums."""
        ships = default_ship_config()

        assert ships.bombardment_power({"ravager": 3, "interceptor": 5}) == 75
        assert ships.bombardment_power({"interceptor": 5}) == 0

    def test_has_colonizer(self):
        """Test colonizer detection."""
        ships = default_ship_config()

        assert ships.has_colonizer({"ark": 1})
        assert not ships.has_colonizer({"interceptor": 2})
