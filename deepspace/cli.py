"""
Deep Space CLI - Command-line interface for the engine.

Usage:
    deepspace simulate [--games N] [--policy P]   Autoplay games with a bot
    deepspace deck [--difficulty D]               Print a shuffled threat deck
    deepspace validate                            Validate the card catalogue
"""

import argparse
import logging
import sys

from .config import Settings, configure_logging
from .engine_core.state import Difficulty

logger = logging.getLogger(__name__)


def main(argv=None):
    """Main CLI entry point."""
    settings = Settings.from_env()

    parser = argparse.ArgumentParser(
        description="Deep Space - Solo Dice Survival Engine",
        prog="deepspace",
    )
    parser.add_argument("--log-level", default=settings.log_level, help="Logging level")
    subparsers = parser.add_subparsers(dest="command", help="Commands")

    difficulties = [d.value for d in Difficulty]

    # Simulate command
    simulate_parser = subparsers.add_parser("simulate", help="Autoplay games with a bot policy")
    simulate_parser.add_argument("--games", "-n", type=int, default=10, help="Number of games")
    simulate_parser.add_argument(
        "--policy", choices=["random", "heuristic"], default="heuristic", help="Bot policy"
    )
    simulate_parser.add_argument(
        "--difficulty", choices=difficulties, default=settings.difficulty.value
    )
    simulate_parser.add_argument("--seed", type=int, default=settings.seed, help="Base seed")
    simulate_parser.add_argument("--verbose", "-v", action="store_true", help="Print game logs")

    # Deck command
    deck_parser = subparsers.add_parser("deck", help="Print a shuffled threat deck")
    deck_parser.add_argument("--difficulty", choices=difficulties, default=settings.difficulty.value)
    deck_parser.add_argument("--seed", type=int, default=settings.seed)

    # Validate command
    subparsers.add_parser("validate", help="Validate the card catalogue")

    args = parser.parse_args(argv)
    configure_logging(args.log_level)

    if args.command == "simulate":
        cmd_simulate(args, settings)
    elif args.command == "deck":
        cmd_deck(args)
    elif args.command == "validate":
        cmd_validate(args)
    else:
        parser.print_help()
        sys.exit(1)


def cmd_simulate(args, settings: Settings):
    """Play several games with a bot and report the results."""
    from .bots import HeuristicPolicy, RandomPolicy
    from .session import GameLoop, SessionManager

    manager = SessionManager(session_ttl=settings.session_ttl)
    difficulty = Difficulty(args.difficulty)
    wins = 0
    reasons: dict[str, int] = {}

    for game in range(args.games):
        seed = args.seed + game if args.seed is not None else None
        policy = RandomPolicy(seed) if args.policy == "random" else HeuristicPolicy()
        session = manager.create_session(difficulty=difficulty, seed=seed)
        summary = GameLoop(session, policy).run()
        manager.end_session(session.session_id)

        if summary.won:
            wins += 1
            outcome = "won"
        else:
            outcome = summary.loss_reason.value if summary.loss_reason else summary.status.value
            reasons[outcome] = reasons.get(outcome, 0) + 1

        print(f"Game {game + 1}: {outcome} on turn {summary.turns} (hull {summary.hull})")
        if args.verbose:
            for line in summary.log:
                print(f"  {line}")

    print(f"\n{policy.get_name()} on {difficulty.value}: {wins}/{args.games} won")
    for reason, count in sorted(reasons.items()):
        print(f"  {reason}: {count}")


def cmd_deck(args):
    """Print a freshly built threat deck, top first."""
    from .engine_core.deck import build_deck
    from .engine_core.dice import RandomSource

    deck = build_deck(Difficulty(args.difficulty), RandomSource(args.seed))
    print(f"Deck ({len(deck)} cards):")
    for i, card in enumerate(deck, 1):
        print(f"  {i:2d}. {card.name} [{card.kind.value}, {card.activation.value}]")


def cmd_validate(args):
    """Validate the card catalogue."""
    from .card_schema import validate_catalogue
    from .catalogue import ALL_CARDS

    result = validate_catalogue(ALL_CARDS)
    if result.valid:
        print(f"Catalogue valid ({len(ALL_CARDS)} cards)")
    else:
        print("Catalogue invalid")
        for error in result.errors:
            print(f"  Error: {error}")

    for warning in result.warnings:
        print(f"  Warning: {warning}")

    sys.exit(0 if result.valid else 1)


if __name__ == "__main__":
    main()
