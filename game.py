#!/usr/bin/env python3
"""Colony Protocol - Main entry point.

A turn-based strategy game where commanders expand across a star map,
build up their planets and fleets, and break rival shields to take
their worlds. The last commander holding planets wins.
"""

import argparse
import logging
import sys
from pathlib import Path

from colony.agent import HeuristicStrategy, StrategyPlayer
from colony.configs import ShipConfig, StructureConfig
from colony.engine import TurnScheduler, generate_game
from colony.errors import ConfigurationError
from colony.interface.human_player import HumanPlayer
from colony.models import GameState
from colony.utils import MAP_SIZES, RNG_SEED_DEFAULT


class GameOrchestrator:
    """Pairs players with decision sources and runs the scheduler."""

    def __init__(self, game: GameState, ai_seed: int = 0):
        """Initialize game orchestrator.

        Args:
            game: Freshly generated game
            ai_seed: Base seed for AI strategies
        """
        self.game = game
        sources = {}
        for index, player in enumerate(game.players.values()):
            if player.is_ai:
                sources[player.id] = StrategyPlayer(player.id, HeuristicStrategy(seed=ai_seed + index))
            else:
                sources[player.id] = HumanPlayer(player.id)
        self.scheduler = TurnScheduler(game, sources)

    def run(self, max_turns: int | None = None) -> str | None:
        """Main game loop."""
        print("\n" + "=" * 60)
        print("Colony Protocol")
        print("=" * 60)
        print("\nGoal: be the last commander holding planets.")
        print("Type 'general end' to end your turn. Press Ctrl+C to quit.\n")

        try:
            winner = self.scheduler.run(max_turns=max_turns)
        except KeyboardInterrupt:
            print("\n\nGame interrupted by user. Exiting...")
            sys.exit(0)

        if winner:
            print(f"\n{self.game.players[winner].name} ({winner}) wins on turn {self.game.turn}!")
        else:
            print(f"\nNo winner after {max_turns} turns.")
        return winner


def _load_tables(args) -> tuple[StructureConfig | None, ShipConfig | None]:
    structures = ships = None
    if args.structures:
        structures = StructureConfig.from_json(Path(args.structures).read_text())
    if args.ships:
        ships = ShipConfig.from_json(Path(args.ships).read_text())
    return structures, ships


def main():
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="Colony Protocol - Turn-based Strategy Game",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python game.py --humans 1 --ai 1
  python game.py --humans 0 --ai 3 --size medium --max-turns 100
  python game.py --humans 2 --seed 7 --debug
        """,
    )
    parser.add_argument("--humans", type=int, default=1, help="Number of human players (default: 1)")
    parser.add_argument("--ai", type=int, default=1, help="Number of AI players (default: 1)")
    parser.add_argument(
        "--size",
        choices=list(MAP_SIZES),
        default="small",
        help="Map size (default: small)",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=RNG_SEED_DEFAULT,
        help=f"Random seed for map generation (default: {RNG_SEED_DEFAULT})",
    )
    parser.add_argument("--max-turns", type=int, default=None, help="Stop after this many turns")
    parser.add_argument("--structures", type=str, metavar="FILE", help="Structure table (JSON)")
    parser.add_argument("--ships", type=str, metavar="FILE", help="Ship table (JSON)")
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging",
    )

    args = parser.parse_args()

    log_level = logging.DEBUG if args.debug else logging.INFO
    logging.basicConfig(
        level=log_level,
        format="[%(levelname)s] %(message)s",
        handlers=[logging.StreamHandler(sys.stdout)],
    )

    if args.humans < 0 or args.ai < 0 or args.humans + args.ai < 2:
        print("Error: a game needs at least two players")
        sys.exit(1)

    names = [f"Commander {i + 1}" for i in range(args.humans)]
    names += [f"AI {i + 1}" for i in range(args.ai)]
    ai_flags = [False] * args.humans + [True] * args.ai

    try:
        structures, ships = _load_tables(args)
        game = generate_game(
            names, ai_flags, size=args.size, seed=args.seed, structures=structures, ships=ships
        )
    except (ConfigurationError, OSError, ValueError) as e:
        print(f"Error: {e}")
        sys.exit(1)

    print(f"Generated {args.size} map with seed {args.seed}")
    GameOrchestrator(game, ai_seed=args.seed).run(max_turns=args.max_turns)


if __name__ == "__main__":
    main()
