"""Command pipeline: parse, validate and execute player commands.

Humans and AIs go through the same pipeline. Validation never mutates
state; execution only runs on a validated command, so a command either
takes full effect or none at all.

Command kinds:
- Queries (status, turn, stats, help, map, ships): read state, return data
- Queued (build, upgrade, build_ships): reserve resources, enqueue a pending action
- Immediate (move, bombard, fleet management, colonize, cancel): mutate now
- advance_cycle: ends the acting player's turn
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Callable

from ..errors import ActionNotFound, InsufficientResources, ValidationError
from ..interface.command_parser import HELP_TEXT, CommandParser
from ..models.command import Action, Command, Entity
from ..models.fleet import Fleet, FleetOrder
from ..models.game import GameState
from ..models.pending_action import ActionKind, ShipBuildAction, StructureAction
from ..models.planet import Planet
from ..models.resources import Resources
from ..utils import ORBITAL_SHIPYARD
from . import movement, pending_actions
from .combat import attempt_conquest

logger = logging.getLogger(__name__)


@dataclass
class CommandResult:
    """Outcome of a successfully executed command.

    Attributes:
        message: Human-readable summary
        data: Structured payload for queries and the rendering layer
        ends_turn: True if the acting player's turn is over
    """

    message: str
    data: dict[str, Any] = field(default_factory=dict)
    ends_turn: bool = False


# Zero-argument callable returned by validation; runs the command
Executor = Callable[[], CommandResult]


class CommandPipeline:
    """Parse -> validate -> execute, one command per call."""

    def __init__(self, parser: CommandParser | None = None):
        self.parser = parser or CommandParser()
        # Each entry validates first and returns a closure that executes
        self._validators = {
            (Entity.GENERAL, Action.STATUS): self._general_status,
            (Entity.GENERAL, Action.TURN): self._general_turn,
            (Entity.GENERAL, Action.STATS): self._general_stats,
            (Entity.GENERAL, Action.HELP): self._general_help,
            (Entity.GENERAL, Action.MAP): self._general_map,
            (Entity.GENERAL, Action.SHIPS): self._general_ships,
            (Entity.GENERAL, Action.ADVANCE_CYCLE): self._general_advance,
            (Entity.PLANET, Action.BUILD): self._planet_build,
            (Entity.PLANET, Action.UPGRADE): self._planet_upgrade,
            (Entity.PLANET, Action.CANCEL): self._planet_cancel,
            (Entity.PLANET, Action.STATUS): self._planet_status,
            (Entity.FLEET, Action.MOVE): self._fleet_move,
            (Entity.FLEET, Action.BUILD_SHIPS): self._fleet_build_ships,
            (Entity.FLEET, Action.BOMBARD): self._fleet_bombard,
            (Entity.FLEET, Action.CANCEL_BOMBARD): self._fleet_cancel_bombard,
            (Entity.FLEET, Action.COLONIZE): self._fleet_colonize,
            (Entity.FLEET, Action.MERGE): self._fleet_merge,
            (Entity.FLEET, Action.SPLIT): self._fleet_split,
            (Entity.FLEET, Action.STATUS): self._fleet_status,
            (Entity.FLEET, Action.CREATE): self._fleet_create,
            (Entity.FLEET, Action.ADD): self._fleet_add,
            (Entity.FLEET, Action.REMOVE): self._fleet_remove,
            (Entity.FLEET, Action.DISBAND): self._fleet_disband,
        }

    # =========================================================================
    # PUBLIC API
    # =========================================================================

    def parse(self, text: str) -> Command:
        return self.parser.parse(text)

    def validate(self, game: GameState, player_id: str, command: Command) -> Executor:
        """Check a command against the current state.

        Args:
            game: Current game state
            player_id: Acting player
            command: Parsed command

        Returns:
            Zero-argument callable that executes the command

        Raises:
            ValidationError: If the command is not allowed right now
            ActionNotFound: If a cancel has nothing to cancel
        """
        validator = self._validators.get((command.entity, command.action))
        if validator is None:
            raise ValidationError(
                f"Unsupported command: {command.entity.value} {command.action.value}"
            )
        return validator(game, player_id, command)

    def execute(self, game: GameState, player_id: str, command: Command) -> CommandResult:
        """Validate and, if valid, execute a parsed command."""
        run = self.validate(game, player_id, command)
        result = run()
        logger.debug(f"{player_id}: {command} -> {result.message}")
        return result

    def run(self, game: GameState, player_id: str, command: str | Command) -> CommandResult:
        """Parse (if text), validate and execute a command.

        Raises:
            ParseError: If text is malformed
            ValidationError: If the command is invalid for the current state
            ActionNotFound: If a cancel has nothing to cancel
        """
        if isinstance(command, str):
            command = self.parse(command)
        return self.execute(game, player_id, command)

    # =========================================================================
    # RESOLUTION HELPERS
    # =========================================================================

    def _planet(self, game: GameState, ref: str | None) -> Planet:
        planet = game.find_planet(ref) if ref else None
        if planet is None:
            raise ValidationError(f"Unknown planet: {ref}")
        return planet

    def _owned_planet(self, game: GameState, player_id: str, ref: str | None) -> Planet:
        planet = self._planet(game, ref)
        if planet.owner != player_id:
            raise ValidationError(f"You do not control {planet.name}")
        return planet

    def _own_fleet(self, game: GameState, player_id: str, ref: str | None) -> Fleet:
        fleet = game.find_fleet(ref) if ref else None
        if fleet is None:
            raise ValidationError(f"Unknown fleet: {ref}")
        if fleet.owner != player_id:
            raise ValidationError(f"Fleet {fleet.id} does not belong to you")
        return fleet

    def _stationed_fleet(self, game: GameState, player_id: str, ref: str | None) -> Fleet:
        fleet = self._own_fleet(game, player_id, ref)
        if not fleet.is_stationed:
            raise ValidationError(f"Fleet {fleet.id} is in transit")
        return fleet

    def _ship_counts(self, game: GameState, fleet: Fleet, ships: dict[str, int]) -> None:
        """Check that a fleet holds at least the given ship counts."""
        for kind, count in ships.items():
            if kind not in game.ships:
                raise ValidationError(f"Unknown ship kind: {kind}")
            held = fleet.ships.get(kind, 0)
            if held < count:
                raise ValidationError(f"Fleet {fleet.id} has only {held} {kind}")

    def _check_afford(self, planet: Planet, cost: Resources) -> None:
        if not planet.ledger.can_afford(cost):
            raise InsufficientResources(cost, planet.ledger.available, planet.id)

    def _check_free_slot(self, game: GameState, planet: Planet) -> None:
        action = game.pending_action_on(planet.id)
        if action is not None:
            raise ValidationError(
                f"{planet.name} is busy with {action.describe()} "
                f"({action.remaining_ticks} turns left)"
            )

    # =========================================================================
    # GENERAL
    # =========================================================================

    def _general_status(self, game: GameState, player_id: str, command: Command) -> Executor:
        def run():
            player = game.players[player_id]
            data = {
                "turn": game.turn,
                "player": player_id,
                "planets": [p.id for p in game.planets_owned_by(player_id)],
                "fleets": [f.id for f in game.fleets_owned_by(player_id)],
                "pending_actions": [
                    {"id": a.id, "planet": a.planet_id, "what": a.describe(), "remaining": a.remaining_ticks}
                    for a in player.pending_actions
                ],
            }
            return CommandResult(
                message=(
                    f"Turn {game.turn}: {player.name} controls {len(data['planets'])} planets "
                    f"and {len(data['fleets'])} fleets"
                ),
                data=data,
            )

        return run

    def _general_turn(self, game: GameState, player_id: str, command: Command) -> Executor:
        def run():
            return CommandResult(
                message=f"Turn {game.turn}, {game.current_player.name} to act",
                data={"turn": game.turn, "player": game.current_player.id},
            )

        return run

    def _general_stats(self, game: GameState, player_id: str, command: Command) -> Executor:
        def run():
            stats = {}
            for pid in game.turn_order:
                fleets = game.fleets_owned_by(pid)
                stats[pid] = {
                    "planets": len(game.planets_owned_by(pid)),
                    "fleets": len(fleets),
                    "ships": sum(f.ship_total for f in fleets),
                    "pending_actions": len(game.players[pid].pending_actions),
                }
            lines = [
                f"{pid}: {s['planets']} planets, {s['fleets']} fleets, {s['ships']} ships"
                for pid, s in stats.items()
            ]
            return CommandResult(message="\n".join(lines), data=stats)

        return run

    def _general_help(self, game: GameState, player_id: str, command: Command) -> Executor:
        def run():
            return CommandResult(message=HELP_TEXT)

        return run

    def _general_map(self, game: GameState, player_id: str, command: Command) -> Executor:
        """Every planet with its owner and lanes; the map has no fog of war."""

        def run():
            data = {}
            lines = ["=== Star Map ==="]
            for planet_id in game.graph.planet_ids:
                planet = game.planets[planet_id]
                lanes = dict(game.graph.neighbors(planet_id))
                data[planet_id] = {"name": planet.name, "owner": planet.owner, "lanes": lanes}
                owner = game.players[planet.owner].name if planet.owner else "unclaimed"
                marker = "*" if planet.owner == player_id else " "
                lane_text = ", ".join(f"{pid} ({weight})" for pid, weight in lanes.items())
                lines.append(f"{marker} {planet.name} ({planet_id}) [{owner}] -> {lane_text}")
            return CommandResult(message="\n".join(lines), data=data)

        return run

    def _general_ships(self, game: GameState, player_id: str, command: Command) -> Executor:
        """Ship counts of the acting player, grouped by planet.

        Fleets in transit are grouped under "in_transit".
        """

        def run():
            data: dict[str, dict[str, int]] = {}
            for fleet in game.fleets_owned_by(player_id):
                where = fleet.location or "in_transit"
                counts = data.setdefault(where, {})
                for kind, count in fleet.ships.items():
                    counts[kind] = counts.get(kind, 0) + count
            total = sum(sum(counts.values()) for counts in data.values())
            if total == 0:
                return CommandResult(message="No ships", data={})

            lines = ["=== Your Ships ==="]
            for where, counts in data.items():
                if not counts:
                    continue
                label = game.planets[where].name if where in game.planets else "In transit"
                ships = ", ".join(f"{kind}:{count}" for kind, count in sorted(counts.items()))
                lines.append(f"  {label}: {ships}")
            lines.append(f"Total ships: {total}")
            data = {where: counts for where, counts in data.items() if counts}
            return CommandResult(message="\n".join(lines), data=data)

        return run

    def _general_advance(self, game: GameState, player_id: str, command: Command) -> Executor:
        def run():
            return CommandResult(message=f"{player_id} ends turn", ends_turn=True)

        return run

    # =========================================================================
    # PLANET
    # =========================================================================

    def _structure_work(
        self, game: GameState, player_id: str, command: Command, upgrade: bool
    ) -> Executor:
        planet = self._owned_planet(game, player_id, command.target)
        definition = game.structures.get(command.argument)
        if definition is None:
            raise ValidationError(f"Unknown structure: {command.argument}")

        level = planet.level_of(definition.id)
        if upgrade:
            if level == 0:
                raise ValidationError(f"{definition.name} is not built on {planet.name}")
            if level >= definition.max_level:
                raise ValidationError(f"{definition.name} is already at max level {level}")
        elif level > 0:
            raise ValidationError(
                f"{definition.name} already exists on {planet.name}; use upgrade"
            )
        target_level = level + 1

        self._check_free_slot(game, planet)
        missing = game.structures.missing_prerequisites(planet.structures, definition.id, target_level)
        if missing:
            raise ValidationError(f"{definition.name} level {target_level} requires {', '.join(missing)}")
        cost = definition.cost(target_level)
        self._check_afford(planet, cost)

        def run():
            action = pending_actions.enqueue(
                game,
                StructureAction(
                    id=game.next_action_id(),
                    player_id=player_id,
                    planet_id=planet.id,
                    kind=ActionKind.UPGRADE if upgrade else ActionKind.BUILD,
                    subject=definition.id,
                    remaining_ticks=definition.ticks(target_level),
                    reserved=cost,
                    target_level=target_level,
                ),
            )
            return CommandResult(
                message=(
                    f"Queued {definition.name} level {target_level} on {planet.name} "
                    f"({action.remaining_ticks} turns)"
                ),
                data={"action_id": action.id},
            )

        return run

    def _planet_build(self, game: GameState, player_id: str, command: Command) -> Executor:
        return self._structure_work(game, player_id, command, upgrade=False)

    def _planet_upgrade(self, game: GameState, player_id: str, command: Command) -> Executor:
        return self._structure_work(game, player_id, command, upgrade=True)

    def _planet_cancel(self, game: GameState, player_id: str, command: Command) -> Executor:
        """Cancel the single pending action on a planet and refund its reservation."""
        planet = self._owned_planet(game, player_id, command.target)
        action = pending_actions.find_on_planet(game, player_id, planet.id)
        if action is None:
            raise ActionNotFound(planet.id)

        def run():
            wasted = pending_actions.cancel(game, player_id, action.id)
            refunded = Resources.from_mapping(
                {kind: amount - wasted.get(kind) for kind, amount in action.reserved.items()}
            )
            message = f"Cancelled {action.describe()}, refunded {refunded}"
            if not wasted.is_zero():
                message += f" (lost to full storage: {wasted})"
            return CommandResult(
                message=message,
                data={"action_id": action.id, "refunded": refunded, "wasted": wasted},
            )

        return run

    def _planet_status(self, game: GameState, player_id: str, command: Command) -> Executor:
        if command.target is None:
            planets = game.planets_owned_by(player_id)
        else:
            planets = [self._planet(game, command.target)]

        def run():
            data = {}
            for planet in planets:
                action = game.pending_action_on(planet.id)
                data[planet.id] = {
                    "name": planet.name,
                    "owner": planet.owner,
                    "structures": dict(planet.structures),
                    "shield": planet.shield,
                    "max_shield": game.max_shield(planet),
                    "capacity": planet.ledger.capacity,
                    "available": planet.ledger.available,
                    "reserved": planet.ledger.reserved,
                    "pending_action": action.describe() if action else None,
                    "fleets": [f.id for f in game.fleets_at(planet.id)],
                    "neighbors": dict(game.graph.neighbors(planet.id)),
                }
            lines = [
                f"{d['name']} ({pid}) owner={d['owner']} shield={d['shield']}/{d['max_shield']} "
                f"available=({d['available']})"
                for pid, d in data.items()
            ]
            return CommandResult(message="\n".join(lines) or "No planets", data=data)

        return run

    # =========================================================================
    # FLEET: MOVEMENT AND COMBAT ORDERS
    # =========================================================================

    def _fleet_move(self, game: GameState, player_id: str, command: Command) -> Executor:
        """Send a stationed fleet along a lane, or turn an in-transit fleet back."""
        fleet = self._own_fleet(game, player_id, command.target)
        destination = self._planet(game, command.argument)

        if fleet.transit is not None:
            if destination.id != fleet.transit.origin:
                raise ValidationError(
                    f"Fleet {fleet.id} is in transit to {fleet.transit.destination}; "
                    f"it can only turn back to {fleet.transit.origin}"
                )

            def turn_back():
                movement.cancel_move(fleet)
                where = fleet.location or f"{fleet.transit.remaining} turns out"
                return CommandResult(
                    message=f"Fleet {fleet.id} turning back to {destination.name} ({where})",
                    data={"fleet_id": fleet.id},
                )

            return turn_back

        if fleet.is_empty:
            raise ValidationError(f"Fleet {fleet.id} has no ships")
        if fleet.order is not None:
            raise ValidationError(f"Fleet {fleet.id} is bombarding; cancel bombardment first")
        if destination.id == fleet.location:
            raise ValidationError(f"Fleet {fleet.id} is already at {destination.name}")
        if not game.graph.are_adjacent(fleet.location, destination.id):
            raise ValidationError(f"No lane from {fleet.location} to {destination.id}")

        def run():
            transit = movement.depart(game, fleet, destination.id)
            return CommandResult(
                message=f"Fleet {fleet.id} departing for {destination.name} ({transit.distance} turns)",
                data={"fleet_id": fleet.id, "eta": transit.distance},
            )

        return run

    def _fleet_build_ships(self, game: GameState, player_id: str, command: Command) -> Executor:
        planet = self._owned_planet(game, player_id, command.target)
        definition = game.ships.get(command.argument)
        if definition is None:
            raise ValidationError(f"Unknown ship kind: {command.argument}")
        shipyard = planet.level_of(ORBITAL_SHIPYARD)
        if shipyard < definition.required_shipyard_level:
            raise ValidationError(
                f"{definition.name} requires shipyard level {definition.required_shipyard_level} "
                f"(have {shipyard})"
            )
        self._check_free_slot(game, planet)
        cost = definition.cost.scaled(command.count)
        self._check_afford(planet, cost)

        def run():
            action = pending_actions.enqueue(
                game,
                ShipBuildAction(
                    id=game.next_action_id(),
                    player_id=player_id,
                    planet_id=planet.id,
                    kind=ActionKind.SHIP_BUILD,
                    subject=definition.id,
                    remaining_ticks=definition.build_time,
                    reserved=cost,
                    count=command.count,
                ),
            )
            return CommandResult(
                message=(
                    f"Queued {command.count}x {definition.name} at {planet.name} "
                    f"({action.remaining_ticks} turns)"
                ),
                data={"action_id": action.id},
            )

        return run

    def _fleet_bombard(self, game: GameState, player_id: str, command: Command) -> Executor:
        fleet = self._stationed_fleet(game, player_id, command.target)
        planet = game.planets[fleet.location]
        if fleet.just_arrived:
            raise ValidationError(f"Fleet {fleet.id} just arrived; it can act next turn")
        if fleet.order is not None:
            raise ValidationError(f"Fleet {fleet.id} is already bombarding {fleet.order.target}")
        if game.ships.bombardment_power(fleet.ships) <= 0:
            raise ValidationError(f"Fleet {fleet.id} has no bombardment capability")
        if planet.owner == player_id:
            raise ValidationError("Cannot bombard your own planet")
        if planet.owner is None:
            raise ValidationError(f"{planet.name} is unclaimed; colonize it instead")

        def run():
            fleet.order = FleetOrder(kind="bombard", target=planet.id)
            return CommandResult(
                message=f"Fleet {fleet.id} will bombard {planet.name} each turn",
                data={"fleet_id": fleet.id, "target": planet.id},
            )

        return run

    def _fleet_cancel_bombard(self, game: GameState, player_id: str, command: Command) -> Executor:
        fleet = self._own_fleet(game, player_id, command.target)
        if fleet.order is None:
            raise ValidationError(f"Fleet {fleet.id} has no bombard order")

        def run():
            fleet.order = None
            return CommandResult(message=f"Fleet {fleet.id} stopped bombardment")

        return run

    def _fleet_colonize(self, game: GameState, player_id: str, command: Command) -> Executor:
        """Take an unshielded planet with a colony ship that has been stationed a full turn."""
        fleet = self._stationed_fleet(game, player_id, command.target)
        planet = game.planets[fleet.location]
        if fleet.just_arrived:
            raise ValidationError(f"Fleet {fleet.id} just arrived; it can act next turn")
        if not game.ships.has_colonizer(fleet.ships):
            raise ValidationError(f"Fleet {fleet.id} carries no colony ship")
        if planet.owner == player_id:
            raise ValidationError(f"You already control {planet.name}")
        if planet.shield > 0:
            raise ValidationError(f"{planet.name} shield is still up ({planet.shield})")
        hostile = [f.id for f in game.fleets_at(planet.id) if f.owner != player_id and not f.is_empty]
        if hostile:
            raise ValidationError(f"Hostile fleets present at {planet.name}: {', '.join(hostile)}")

        def run():
            event = attempt_conquest(game, player_id, planet.id, fleet=fleet)
            verb = "founded a colony on" if event.founded else "conquered"
            return CommandResult(
                message=f"{player_id} {verb} {planet.name}",
                data={"planet_id": planet.id, "previous_owner": event.previous_owner},
            )

        return run

    # =========================================================================
    # FLEET: ORGANISATION
    # =========================================================================

    def _fleet_merge(self, game: GameState, player_id: str, command: Command) -> Executor:
        fleet = self._stationed_fleet(game, player_id, command.target)
        into = self._stationed_fleet(game, player_id, command.argument)
        if fleet.id == into.id:
            raise ValidationError("Cannot merge a fleet into itself")
        if fleet.location != into.location:
            raise ValidationError(f"Fleets {fleet.id} and {into.id} are not at the same planet")

        def run():
            for kind, count in fleet.ships.items():
                into.add_ships(kind, count)
            into.just_arrived = into.just_arrived or fleet.just_arrived
            game.remove_fleet(fleet.id)
            return CommandResult(
                message=f"Fleet {fleet.id} merged into {into.id}",
                data={"fleet_id": into.id, "ships": dict(into.ships)},
            )

        return run

    def _fleet_split(self, game: GameState, player_id: str, command: Command) -> Executor:
        fleet = self._stationed_fleet(game, player_id, command.target)
        self._ship_counts(game, fleet, command.ships)
        if sum(command.ships.values()) >= fleet.ship_total:
            raise ValidationError("Split must leave at least one ship in the original fleet")

        def run():
            for kind, count in command.ships.items():
                fleet.remove_ships(kind, count)
            new = game.new_fleet(player_id, fleet.location, ships=command.ships)
            new.just_arrived = fleet.just_arrived
            return CommandResult(
                message=f"Split {new.id} off {fleet.id}",
                data={"fleet_id": new.id, "ships": dict(new.ships)},
            )

        return run

    def _fleet_status(self, game: GameState, player_id: str, command: Command) -> Executor:
        if command.target is None:
            fleets = game.fleets_owned_by(player_id)
        else:
            fleets = [self._own_fleet(game, player_id, command.target)]

        def run():
            data = {}
            for fleet in fleets:
                data[fleet.id] = {
                    "name": fleet.name,
                    "ships": dict(fleet.ships),
                    "location": fleet.location,
                    "transit": (
                        {
                            "origin": fleet.transit.origin,
                            "destination": fleet.transit.destination,
                            "remaining": fleet.transit.remaining,
                        }
                        if fleet.transit
                        else None
                    ),
                    "order": fleet.order.target if fleet.order else None,
                    "just_arrived": fleet.just_arrived,
                }
            lines = []
            for fid, d in data.items():
                where = d["location"] or f"-> {d['transit']['destination']} ({d['transit']['remaining']})"
                ships = ", ".join(f"{k}:{v}" for k, v in d["ships"].items()) or "empty"
                lines.append(f"{fid} [{where}] {ships}")
            return CommandResult(message="\n".join(lines) or "No fleets", data=data)

        return run

    def _fleet_create(self, game: GameState, player_id: str, command: Command) -> Executor:
        planet = self._owned_planet(game, player_id, command.target)
        name = command.argument
        if name.lower().startswith("fleet-"):
            raise ValidationError("Fleet names may not start with 'fleet-'")
        if game.find_fleet(name) is not None:
            raise ValidationError(f"Fleet name already in use: {name}")

        def run():
            fleet = game.new_fleet(player_id, planet.id, name=name)
            return CommandResult(
                message=f"Created fleet {name} ({fleet.id}) at {planet.name}",
                data={"fleet_id": fleet.id},
            )

        return run

    def _fleet_add(self, game: GameState, player_id: str, command: Command) -> Executor:
        """Move ships from the source fleet (argument) into the target fleet.

        Ships that just arrived stay unable to bombard or colonize, so the
        receiving fleet takes on the source fleet's just_arrived flag.
        """
        fleet = self._stationed_fleet(game, player_id, command.target)
        source = self._stationed_fleet(game, player_id, command.argument)
        if fleet.id == source.id:
            raise ValidationError("Source and target fleet are the same")
        if fleet.location != source.location:
            raise ValidationError(f"Fleets {fleet.id} and {source.id} are not at the same planet")
        self._ship_counts(game, source, command.ships)

        def run():
            for kind, count in command.ships.items():
                source.remove_ships(kind, count)
                fleet.add_ships(kind, count)
            fleet.just_arrived = fleet.just_arrived or source.just_arrived
            if source.is_empty:
                game.remove_fleet(source.id)
            return CommandResult(
                message=f"Transferred ships from {source.id} to {fleet.id}",
                data={"fleet_id": fleet.id, "ships": dict(fleet.ships)},
            )

        return run

    def _fleet_remove(self, game: GameState, player_id: str, command: Command) -> Executor:
        fleet = self._stationed_fleet(game, player_id, command.target)
        self._ship_counts(game, fleet, command.ships)

        def run():
            for kind, count in command.ships.items():
                fleet.remove_ships(kind, count)
            removed = fleet.is_empty
            if removed:
                game.remove_fleet(fleet.id)
            return CommandResult(
                message=f"Decommissioned ships from {fleet.id}" + (" (fleet dissolved)" if removed else ""),
                data={"fleet_id": fleet.id, "ships": dict(fleet.ships)},
            )

        return run

    def _fleet_disband(self, game: GameState, player_id: str, command: Command) -> Executor:
        fleet = self._own_fleet(game, player_id, command.target)

        def run():
            game.remove_fleet(fleet.id)
            return CommandResult(
                message=f"Fleet {fleet.id} disbanded ({fleet.ship_total} ships decommissioned)",
                data={"fleet_id": fleet.id},
            )

        return run
