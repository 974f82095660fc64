"""Command parser for the `<entity> <action> [args...]` grammar.

Parsing is purely syntactic: it checks words, argument counts and number
formats, and never looks at game state. Planet and fleet references are
kept as typed and resolved later by validation.

Examples:
    planet build new-terra mineral_mine
    fleet move fleet-3 kepler-prime
    fleet split fleet-3 interceptor:2 ravager:1
    general end
"""

from ..errors import ErrorType, ParseError
from ..models.command import Action, Command, Entity

# Argument slots:
#   target   primary planet/fleet reference (required)
#   target?  optional primary reference
#   ref      secondary planet/fleet reference or name, kept as typed
#   kind     structure or ship kind, normalized to snake_case
#   count?   optional positive integer
#   ships+   one or more kind:count pairs
GRAMMAR: dict[Entity, dict[Action, tuple[str, ...]]] = {
    Entity.GENERAL: {
        Action.STATUS: (),
        Action.TURN: (),
        Action.STATS: (),
        Action.HELP: (),
        Action.MAP: (),
        Action.SHIPS: (),
        Action.ADVANCE_CYCLE: (),
    },
    Entity.PLANET: {
        Action.BUILD: ("target", "kind"),
        Action.UPGRADE: ("target", "kind"),
        Action.CANCEL: ("target",),
        Action.STATUS: ("target?",),
    },
    Entity.FLEET: {
        Action.MOVE: ("target", "ref"),
        Action.BUILD_SHIPS: ("target", "kind", "count?"),
        Action.BOMBARD: ("target",),
        Action.CANCEL_BOMBARD: ("target",),
        Action.COLONIZE: ("target",),
        Action.MERGE: ("target", "ref"),
        Action.SPLIT: ("target", "ships+"),
        Action.STATUS: ("target?",),
        Action.CREATE: ("target", "ref"),
        Action.ADD: ("target", "ref", "ships+"),
        Action.REMOVE: ("target", "ships+"),
        Action.DISBAND: ("target",),
    },
}

USAGE = {
    (Entity.PLANET, Action.BUILD): "planet build <planet> <structure>",
    (Entity.PLANET, Action.UPGRADE): "planet upgrade <planet> <structure>",
    (Entity.PLANET, Action.CANCEL): "planet cancel <planet>",
    (Entity.PLANET, Action.STATUS): "planet status [planet]",
    (Entity.FLEET, Action.MOVE): "fleet move <fleet> <planet>",
    (Entity.FLEET, Action.BUILD_SHIPS): "fleet build_ships <planet> <ship> [count]",
    (Entity.FLEET, Action.BOMBARD): "fleet bombard <fleet>",
    (Entity.FLEET, Action.CANCEL_BOMBARD): "fleet cancel_bombard <fleet>",
    (Entity.FLEET, Action.COLONIZE): "fleet colonize <fleet>",
    (Entity.FLEET, Action.MERGE): "fleet merge <fleet> <into_fleet>",
    (Entity.FLEET, Action.SPLIT): "fleet split <fleet> <ship:count>...",
    (Entity.FLEET, Action.STATUS): "fleet status [fleet]",
    (Entity.FLEET, Action.CREATE): "fleet create <planet> <name>",
    (Entity.FLEET, Action.ADD): "fleet add <fleet> <source_fleet> <ship:count>...",
    (Entity.FLEET, Action.REMOVE): "fleet remove <fleet> <ship:count>...",
    (Entity.FLEET, Action.DISBAND): "fleet disband <fleet>",
}

HELP_TEXT = """Commands:
  general status | turn | stats | map | ships | help | end
  planet build|upgrade <planet> <structure>
  planet cancel <planet>
  planet status [planet]
  fleet move <fleet> <planet>
  fleet build_ships <planet> <ship> [count]
  fleet bombard|cancel_bombard|colonize|disband <fleet>
  fleet merge <fleet> <into_fleet>
  fleet split <fleet> <ship:count>...
  fleet create <planet> <name>
  fleet add <fleet> <source_fleet> <ship:count>...
  fleet remove <fleet> <ship:count>...
  fleet status [fleet]"""

ACTION_ALIASES = {
    "end": "advance_cycle",
    "end_turn": "advance_cycle",
    "next": "advance_cycle",
}


def normalize_word(word: str) -> str:
    """Lowercase a keyword and accept '-' in place of '_'."""
    return word.lower().replace("-", "_")


class CommandParser:
    """Parse command text into Command objects."""

    def parse(self, text: str) -> Command:
        """Parse one command line.

        Args:
            text: Raw command text

        Returns:
            Parsed Command

        Raises:
            ParseError: If the entity, action or arguments are malformed
        """
        tokens = text.split()
        if not tokens:
            raise ParseError(ErrorType.EMPTY_COMMAND, "Empty command")

        entity = self._parse_entity(tokens[0])
        if len(tokens) < 2:
            actions = ", ".join(a.value for a in GRAMMAR[entity])
            raise ParseError(
                ErrorType.SYNTAX_ERROR,
                f"Missing action for '{entity.value}'. Available: {actions}",
            )
        action = self._parse_action(entity, tokens[1])
        return self._parse_arguments(entity, action, tokens[2:])

    def _parse_entity(self, word: str) -> Entity:
        try:
            return Entity(word.lower())
        except ValueError:
            raise ParseError(
                ErrorType.UNKNOWN_ENTITY,
                f"Unknown entity: '{word}' (expected general, planet or fleet)",
            ) from None

    def _parse_action(self, entity: Entity, word: str) -> Action:
        name = normalize_word(word)
        if entity is Entity.GENERAL:
            name = ACTION_ALIASES.get(name, name)
        for action in GRAMMAR[entity]:
            if action.value == name:
                return action
        actions = ", ".join(a.value for a in GRAMMAR[entity])
        raise ParseError(
            ErrorType.UNKNOWN_ACTION,
            f"Unknown {entity.value} action: '{word}'. Available: {actions}",
        )

    def _parse_arguments(self, entity: Entity, action: Action, args: list[str]) -> Command:
        """Fill the grammar slots of (entity, action) from args.

        Raises:
            ParseError: If a required slot is missing or arguments are left over
        """
        values: dict = {}
        remaining = list(args)

        for slot in GRAMMAR[entity][action]:
            optional = slot.endswith("?")
            name = slot.rstrip("?+")

            if name == "ships":
                if not remaining:
                    raise self._syntax_error(entity, action, "expected at least one ship:count pair")
                values["ships"] = self._parse_ship_pairs(remaining)
                remaining = []
                continue

            if not remaining:
                if optional:
                    continue
                raise self._syntax_error(entity, action, f"missing {name}")

            word = remaining.pop(0)
            if name == "target":
                values["target"] = word
            elif name == "ref":
                values["argument"] = word
            elif name == "kind":
                values["argument"] = normalize_word(word)
            elif name == "count":
                values["count"] = self._parse_count(word)

        if remaining:
            raise self._syntax_error(
                entity, action, f"unexpected argument(s): {' '.join(remaining)}"
            )
        return Command(entity=entity, action=action, **values)

    def _parse_count(self, word: str) -> int:
        try:
            count = int(word)
        except ValueError:
            raise ParseError(
                ErrorType.SYNTAX_ERROR, f"Invalid count: '{word}' is not a number"
            ) from None
        if count <= 0:
            raise ParseError(
                ErrorType.SYNTAX_ERROR, f"Invalid count: must be positive (got {count})"
            )
        return count

    def _parse_ship_pairs(self, words: list[str]) -> dict[str, int]:
        """Parse kind:count pairs, summing repeated kinds."""
        ships: dict[str, int] = {}
        for word in words:
            kind, sep, count_text = word.partition(":")
            if not sep or not kind:
                raise ParseError(
                    ErrorType.SYNTAX_ERROR,
                    f"Invalid ship pair: '{word}' (expected ship:count)",
                )
            kind = normalize_word(kind)
            ships[kind] = ships.get(kind, 0) + self._parse_count(count_text)
        return ships

    def _syntax_error(self, entity: Entity, action: Action, problem: str) -> ParseError:
        usage = USAGE.get((entity, action), f"{entity.value} {action.value}")
        return ParseError(
            ErrorType.SYNTAX_ERROR,
            f"Syntax error: {problem}\nCorrect format: {usage}",
        )
