"""Tests for command validation and execution."""

import copy

import pytest

from colony.configs import default_ship_config, default_structure_config
from colony.engine import CommandPipeline
from colony.errors import ActionNotFound, InsufficientResources, ValidationError
from colony.models import FleetOrder, GameState, Planet, Player, ResourceLedger, Resources, WorldGraph


def create_basic_game():
    """Two players on a three-planet line: alpha -2- beta -1- gamma."""
    graph = WorldGraph.from_edges(
        ["alpha", "beta", "gamma"], [("alpha", "beta", 2), ("beta", "gamma", 1)]
    )
    game = GameState(
        seed=42,
        graph=graph,
        planets={pid: Planet(id=pid, name=pid.title()) for pid in graph.planet_ids},
        players={"p1": Player(id="p1", name="Player One"), "p2": Player(id="p2", name="Player Two")},
        turn_order=["p1", "p2"],
        structures=default_structure_config(),
        ships=default_ship_config(),
    )
    for planet_id, player_id in (("alpha", "p1"), ("gamma", "p2")):
        planet = game.planets[planet_id]
        planet.owner = player_id
        planet.structures = {"planetary_capital": 1, "orbital_shipyard": 1, "defense_shield": 1}
        game.refresh_storage(planet)
        planet.ledger.fill()
        planet.shield = game.max_shield(planet)
    return game


def snapshot(game):
    """Comparable view of everything a command may change."""
    return (
        {pid: (p.owner, dict(p.structures), p.shield, repr(p.ledger)) for pid, p in game.planets.items()},
        {fid: (f.owner, dict(f.ships), f.location, f.transit, f.order) for fid, f in game.fleets.items()},
        {pid: [a.id for a in p.pending_actions] for pid, p in game.players.items()},
    )


class PipelineTest:
    """Shared fixture: fresh game and pipeline per test."""

    def setup_method(self):
        self.game = create_basic_game()
        self.pipeline = CommandPipeline()

    def run(self, text, player_id="p1"):
        return self.pipeline.run(self.game, player_id, text)

    def assert_rejected(self, text, error=ValidationError, match=None, player_id="p1"):
        """Run a command expected to fail and check nothing changed."""
        before = snapshot(self.game)
        with pytest.raises(error, match=match):
            self.run(text, player_id)
        assert snapshot(self.game) == before


class TestGeneralCommands(PipelineTest):
    def test_advance_cycle_ends_turn(self):
        """Test that end ends the turn without touching state."""
        before = snapshot(self.game)

        result = self.run("general end")

        assert result.ends_turn
        assert snapshot(self.game) == before

    def test_status(self):
        """Test the acting player's overview."""
        self.game.new_fleet("p1", "alpha", ships={"ark": 1})

        result = self.run("general status")

        assert result.data["planets"] == ["alpha"]
        assert result.data["fleets"] == ["fleet-1"]
        assert not result.ends_turn

    def test_stats_covers_every_player(self):
        """Test the all-player summary."""
        self.game.new_fleet("p2", "gamma", ships={"interceptor": 4})

        result = self.run("general stats")

        assert set(result.data) == {"p1", "p2"}
        assert result.data["p2"]["ships"] == 4

    def test_turn(self):
        """Test turn query."""
        assert self.run("general turn").data == {"turn": 1, "player": "p1"}

    def test_help_lists_commands(self):
        """Test that help returns the command reference."""
        result = self.run("general help")

        assert "fleet split <fleet> <ship:count>..." in result.message
        assert not result.ends_turn

    def test_map_shows_every_planet(self):
        """Test the map query: owners and lanes for all planets."""
        before = snapshot(self.game)

        result = self.run("general map")

        assert result.data["alpha"] == {"name": "Alpha", "owner": "p1", "lanes": {"beta": 2}}
        assert result.data["beta"] == {"name": "Beta", "owner": None, "lanes": {"alpha": 2, "gamma": 1}}
        assert result.data["gamma"]["owner"] == "p2"
        assert "* Alpha (alpha) [Player One]" in result.message
        assert "Beta (beta) [unclaimed]" in result.message
        assert snapshot(self.game) == before

    def test_ships_grouped_by_location(self):
        """Test the ship list: own ships only, in-transit fleets apart."""
        self.game.new_fleet("p1", "alpha", ships={"interceptor": 2})
        self.game.new_fleet("p1", "alpha", ships={"interceptor": 1, "ark": 1})
        self.game.new_fleet("p1", "alpha", ships={"ravager": 1})
        self.game.new_fleet("p1", "alpha", name="Reserve")
        self.game.new_fleet("p2", "gamma", ships={"interceptor": 9})
        self.run("fleet move fleet-3 beta")

        result = self.run("general ships")

        assert result.data == {"alpha": {"interceptor": 3, "ark": 1}, "in_transit": {"ravager": 1}}
        assert "  Alpha: ark:1, interceptor:3" in result.message
        assert "  In transit: ravager:1" in result.message
        assert result.message.endswith("Total ships: 5")

    def test_ships_when_none(self):
        """Test the ship list without any ships."""
        result = self.run("general ships")

        assert result.message == "No ships"
        assert result.data == {}


class TestPlanetCommands(PipelineTest):
    def test_build_reserves_and_queues(self):
        """Test a successful build."""
        result = self.run("planet build alpha mineral_mine")

        planet = self.game.planets["alpha"]
        action = self.game.players["p1"].pending_actions[0]
        assert result.data["action_id"] == action.id
        assert action.remaining_ticks == 2
        assert planet.ledger.reserved == Resources(minerals=50, energy=10)
        assert planet.ledger.available == Resources(minerals=450, gas=300, energy=290)
        assert planet.level_of("mineral_mine") == 0

    def test_build_by_planet_name(self):
        """Test that planets can be referenced by display name."""
        self.run("planet build Alpha gas_extractor")

        assert self.game.players["p1"].pending_actions[0].planet_id == "alpha"

    def test_one_action_per_planet(self):
        """Test that a busy planet rejects more work."""
        self.run("planet build alpha mineral_mine")

        self.assert_rejected("planet build alpha solar_array", match="busy")
        self.assert_rejected("fleet build_ships alpha interceptor", match="busy")

    def test_build_on_foreign_planet(self):
        """Test ownership check."""
        self.assert_rejected("planet build gamma mineral_mine", match="do not control")
        self.assert_rejected("planet build beta mineral_mine", match="do not control")

    def test_build_unknown_structure(self):
        """Test unknown structure kind."""
        self.assert_rejected("planet build alpha death_ray", match="Unknown structure")

    def test_build_existing_structure(self):
        """Test that build is only for new structures."""
        self.assert_rejected("planet build alpha defense_shield", match="use upgrade")

    def test_upgrade_missing_structure(self):
        """Test that upgrade needs an existing structure."""
        self.assert_rejected("planet upgrade alpha mineral_mine", match="not built")

    def test_upgrade_prerequisite(self):
        """Test that shipyard level 2 needs capital level 2."""
        self.assert_rejected(
            "planet upgrade alpha orbital_shipyard", match="requires planetary_capital level 2"
        )

    def test_upgrade_at_max_level(self):
        """Test max level check."""
        self.game.planets["alpha"].structures["defense_shield"] = 3

        self.assert_rejected("planet upgrade alpha defense_shield", match="max level")

    def test_upgrade_capital(self):
        """Test a successful upgrade."""
        self.run("planet upgrade alpha planetary_capital")

        action = self.game.players["p1"].pending_actions[0]
        assert action.target_level == 2
        assert action.reserved == Resources(minerals=300, gas=100, energy=100)

    def test_insufficient_resources(self):
        """Test that a short planet rejects the build and keeps its stock."""
        planet = self.game.planets["alpha"]
        planet.ledger = ResourceLedger(
            capacity=planet.ledger.capacity,
            available=Resources(minerals=40, energy=100),
            planet_id="alpha",
        )

        self.assert_rejected(
            "planet build alpha mineral_mine", error=InsufficientResources, match="minerals 50/40"
        )

    def test_cancel_refunds(self):
        """Test cancelling a queued build."""
        self.run("planet build alpha mineral_mine")

        result = self.run("planet cancel alpha")

        planet = self.game.planets["alpha"]
        assert result.data["refunded"] == Resources(minerals=50, energy=10)
        assert result.data["wasted"].is_zero()
        assert planet.ledger.available == Resources(minerals=500, gas=300, energy=300)
        assert self.game.players["p1"].pending_actions == []

    def test_cancel_without_action(self):
        """Test cancelling on an idle planet."""
        self.assert_rejected("planet cancel alpha", error=ActionNotFound)

    def test_planet_status(self):
        """Test planet status data."""
        result = self.run("planet status alpha")

        data = result.data["alpha"]
        assert data["owner"] == "p1"
        assert data["shield"] == 100
        assert data["neighbors"] == {"beta": 2}


class TestFleetMovement(PipelineTest):
    def setup_method(self):
        super().setup_method()
        self.fleet = self.game.new_fleet("p1", "alpha", ships={"interceptor": 2, "ark": 1})

    def test_move_departs(self):
        """Test a successful move."""
        result = self.run("fleet move fleet-1 beta")

        assert result.data["eta"] == 2
        assert self.fleet.transit.destination == "beta"

    def test_move_to_non_adjacent(self):
        """Test that moves follow lanes."""
        self.assert_rejected("fleet move fleet-1 gamma", match="No lane")

    def test_move_to_current_location(self):
        """Test moving nowhere."""
        self.assert_rejected("fleet move fleet-1 alpha", match="already at")

    def test_move_unknown_planet(self):
        """Test unknown destination."""
        self.assert_rejected("fleet move fleet-1 omega", match="Unknown planet")

    def test_move_foreign_fleet(self):
        """Test ownership check on fleets."""
        self.game.new_fleet("p2", "gamma", ships={"interceptor": 1})

        self.assert_rejected("fleet move fleet-2 beta", match="does not belong")

    def test_move_empty_fleet(self):
        """Test that empty fleets stay put."""
        self.run("fleet create alpha Reserve")

        self.assert_rejected("fleet move Reserve beta", match="no ships")

    def test_move_while_bombarding(self):
        """Test that a standing order must be cancelled first."""
        self.fleet.order = FleetOrder(kind="bombard", target="alpha")

        self.assert_rejected("fleet move fleet-1 beta", match="cancel bombardment")

    def test_redirect_in_transit_rejected(self):
        """Test that an in-transit fleet can only turn back."""
        self.run("fleet move fleet-1 beta")

        self.assert_rejected("fleet move fleet-1 gamma", match="only turn back")

    def test_turn_back(self):
        """Test cancelling a move by ordering the fleet home."""
        self.run("fleet move fleet-1 beta")

        self.run("fleet move fleet-1 alpha")

        assert self.fleet.location == "alpha"


class TestShipBuilding(PipelineTest):
    def test_build_ships_scales_cost(self):
        """Test that the reserved cost is per ship times count."""
        self.run("fleet build_ships alpha interceptor 3")

        action = self.game.players["p1"].pending_actions[0]
        assert action.reserved == Resources(minerals=120, gas=30, energy=30)
        assert action.count == 3
        assert action.remaining_ticks == 2

    def test_shipyard_level_required(self):
        """Test that ravagers need a level 2 shipyard."""
        self.assert_rejected("fleet build_ships alpha ravager", match="shipyard level 2")

    def test_unknown_ship(self):
        """Test unknown ship kind."""
        self.assert_rejected("fleet build_ships alpha dreadnought", match="Unknown ship kind")

    def test_no_shipyard(self):
        """Test a planet without a shipyard."""
        del self.game.planets["alpha"].structures["orbital_shipyard"]

        self.assert_rejected("fleet build_ships alpha interceptor", match="have 0")

    def test_count_limited_by_resources(self):
        """Test that a large batch can be unaffordable."""
        self.assert_rejected(
            "fleet build_ships alpha interceptor 20", error=InsufficientResources
        )


class TestBombardAndColonize(PipelineTest):
    def test_bombard_sets_order(self):
        """Test a successful bombard order."""
        fleet = self.game.new_fleet("p1", "gamma", ships={"ravager": 2})

        self.run("fleet bombard fleet-1")

        assert fleet.order == FleetOrder(kind="bombard", target="gamma")
        assert self.game.planets["gamma"].shield == 100

    def test_bombard_needs_bombers(self):
        """Test bombard without bombardment power."""
        self.game.new_fleet("p1", "gamma", ships={"interceptor": 5})

        self.assert_rejected("fleet bombard fleet-1", match="no bombardment capability")

    def test_bombard_own_planet(self):
        """Test bombarding your own planet."""
        self.game.new_fleet("p1", "alpha", ships={"ravager": 1})

        self.assert_rejected("fleet bombard fleet-1", match="your own planet")

    def test_bombard_unclaimed_planet(self):
        """Test bombarding empty space."""
        self.game.new_fleet("p1", "beta", ships={"ravager": 1})

        self.assert_rejected("fleet bombard fleet-1", match="unclaimed")

    def test_bombard_just_arrived(self):
        """Test that a fresh arrival waits a turn."""
        fleet = self.game.new_fleet("p1", "gamma", ships={"ravager": 1})
        fleet.just_arrived = True

        self.assert_rejected("fleet bombard fleet-1", match="just arrived")

    def test_bombard_twice(self):
        """Test duplicate order."""
        self.game.new_fleet("p1", "gamma", ships={"ravager": 1})
        self.run("fleet bombard fleet-1")

        self.assert_rejected("fleet bombard fleet-1", match="already bombarding")

    def test_cancel_bombard(self):
        """Test clearing an order."""
        fleet = self.game.new_fleet("p1", "gamma", ships={"ravager": 1})
        self.run("fleet bombard fleet-1")

        self.run("fleet cancel_bombard fleet-1")

        assert fleet.order is None
        self.assert_rejected("fleet cancel_bombard fleet-1", match="no bombard order")

    def test_colonize_unclaimed(self):
        """Test founding a colony."""
        self.game.new_fleet("p1", "beta", ships={"ark": 1, "interceptor": 1})

        result = self.run("fleet colonize fleet-1")

        assert "founded a colony" in result.message
        assert self.game.planets["beta"].owner == "p1"
        assert self.game.fleets["fleet-1"].ships == {"interceptor": 1}

    def test_colonize_just_arrived(self):
        """Test that a colony ship that just arrived waits a turn."""
        fleet = self.game.new_fleet("p1", "beta", ships={"ark": 1})
        fleet.just_arrived = True

        self.assert_rejected("fleet colonize fleet-1", match="just arrived")
        assert self.game.planets["beta"].owner is None

    def test_colonize_shield_up(self):
        """Test that the shield must be down."""
        self.game.new_fleet("p1", "gamma", ships={"ark": 1})

        self.assert_rejected("fleet colonize fleet-1", match="shield is still up")

    def test_colonize_with_hostiles_present(self):
        """Test that defenders block colonization."""
        self.game.planets["gamma"].shield = 0
        self.game.new_fleet("p1", "gamma", ships={"ark": 1})
        self.game.new_fleet("p2", "gamma", ships={"interceptor": 1})

        self.assert_rejected("fleet colonize fleet-1", match="Hostile fleets")

    def test_colonize_without_colonizer(self):
        """Test that a colony ship is needed."""
        self.game.planets["gamma"].shield = 0
        self.game.new_fleet("p1", "gamma", ships={"ravager": 1})

        self.assert_rejected("fleet colonize fleet-1", match="no colony ship")

    def test_colonize_enemy_planet(self):
        """Test conquering a broken enemy planet."""
        self.game.planets["gamma"].shield = 0
        self.game.new_fleet("p1", "gamma", ships={"ark": 1})

        result = self.run("fleet colonize fleet-1")

        assert result.data["previous_owner"] == "p2"
        assert self.game.planets["gamma"].owner == "p1"
        assert "fleet-1" not in self.game.fleets


class TestJustArrivedCarryOver(PipelineTest):
    """Ships that just arrived keep waiting whichever fleet they end up in."""

    def setup_method(self):
        super().setup_method()
        self.settled = self.game.new_fleet("p1", "beta", ships={"interceptor": 1})
        self.arrived = self.game.new_fleet("p1", "beta", ships={"ark": 1, "interceptor": 1})
        self.arrived.just_arrived = True

    def test_add_marks_receiving_fleet(self):
        """Test that ships added from a fresh arrival cannot colonize this turn."""
        self.run("fleet add fleet-1 fleet-2 ark:1")

        assert self.settled.just_arrived
        self.assert_rejected("fleet colonize fleet-1", match="just arrived")
        assert self.game.planets["beta"].owner is None

    def test_add_from_settled_fleet_keeps_flag_clear(self):
        """Test that moving ships between settled fleets changes nothing."""
        other = self.game.new_fleet("p1", "beta", ships={"ark": 1})

        self.run(f"fleet add fleet-1 {other.id} ark:1")

        assert not self.settled.just_arrived
        self.run("fleet colonize fleet-1")
        assert self.game.planets["beta"].owner == "p1"

    def test_merge_marks_receiving_fleet(self):
        """Test that merging a fresh arrival delays the merged fleet."""
        self.run("fleet merge fleet-2 fleet-1")

        assert self.settled.just_arrived
        self.assert_rejected("fleet colonize fleet-1", match="just arrived")

    def test_split_copies_flag(self):
        """Test that a fleet split off a fresh arrival is also fresh."""
        result = self.run("fleet split fleet-2 ark:1")

        new = self.game.fleets[result.data["fleet_id"]]
        assert new.just_arrived
        self.assert_rejected(f"fleet colonize {new.id}", match="just arrived")


class TestFleetOrganisation(PipelineTest):
    def setup_method(self):
        super().setup_method()
        self.fleet = self.game.new_fleet("p1", "alpha", ships={"interceptor": 3, "ark": 1})

    def test_split(self):
        """Test splitting ships into a new fleet."""
        result = self.run("fleet split fleet-1 interceptor:2")

        new = self.game.fleets[result.data["fleet_id"]]
        assert new.ships == {"interceptor": 2}
        assert new.location == "alpha"
        assert self.fleet.ships == {"interceptor": 1, "ark": 1}

    def test_split_everything_rejected(self):
        """Test that split leaves something behind."""
        self.assert_rejected("fleet split fleet-1 interceptor:3 ark:1", match="at least one ship")

    def test_split_too_many(self):
        """Test splitting more ships than held."""
        self.assert_rejected("fleet split fleet-1 interceptor:5", match="has only 3")

    def test_merge(self):
        """Test merging two fleets."""
        other = self.game.new_fleet("p1", "alpha", ships={"interceptor": 1})

        self.run(f"fleet merge {other.id} fleet-1")

        assert other.id not in self.game.fleets
        assert self.fleet.ships == {"interceptor": 4, "ark": 1}

    def test_merge_different_planets(self):
        """Test that merging needs the same location."""
        self.game.planets["beta"].owner = "p1"
        self.game.new_fleet("p1", "beta", ships={"interceptor": 1})

        self.assert_rejected("fleet merge fleet-2 fleet-1", match="not at the same planet")

    def test_create_named_fleet(self):
        """Test creating an empty named fleet."""
        result = self.run("fleet create alpha Vanguard")

        fleet = self.game.fleets[result.data["fleet_id"]]
        assert fleet.name == "Vanguard"
        assert fleet.is_empty
        assert self.game.find_fleet("vanguard") is fleet

    def test_create_rejects_reserved_and_duplicate_names(self):
        """Test fleet name rules."""
        self.assert_rejected("fleet create alpha fleet-9", match="may not start")
        self.run("fleet create alpha Vanguard")
        self.assert_rejected("fleet create alpha vanguard", match="already in use")

    def test_add_moves_ships_and_removes_emptied_source(self):
        """Test transferring all ships of one fleet."""
        self.run("fleet create alpha Vanguard")

        self.run("fleet add Vanguard fleet-1 interceptor:3 ark:1")

        vanguard = self.game.find_fleet("Vanguard")
        assert vanguard.ships == {"interceptor": 3, "ark": 1}
        assert "fleet-1" not in self.game.fleets

    def test_remove_ships(self):
        """Test decommissioning part of a fleet."""
        self.run("fleet remove fleet-1 interceptor:2")

        assert self.fleet.ships == {"interceptor": 1, "ark": 1}

    def test_remove_all_ships_dissolves_fleet(self):
        """Test that an emptied fleet is dropped."""
        self.run("fleet remove fleet-1 interceptor:3 ark:1")

        assert "fleet-1" not in self.game.fleets

    def test_disband(self):
        """Test disbanding a fleet."""
        self.run("fleet disband fleet-1")

        assert self.game.fleets == {}

    def test_fleet_status(self):
        """Test fleet status lists only own fleets."""
        self.game.new_fleet("p2", "gamma", ships={"interceptor": 1})

        result = self.run("fleet status")

        assert list(result.data) == ["fleet-1"]
        assert result.data["fleet-1"]["location"] == "alpha"


def test_validate_does_not_mutate():
    """Test that validation alone never changes the game."""
    game = create_basic_game()
    pipeline = CommandPipeline()
    game.new_fleet("p1", "alpha", ships={"interceptor": 2})
    before = copy.deepcopy(snapshot(game))

    pipeline.validate(game, "p1", pipeline.parse("planet build alpha mineral_mine"))
    pipeline.validate(game, "p1", pipeline.parse("fleet move fleet-1 beta"))

    assert snapshot(game) == before
