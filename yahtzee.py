#!/usr/bin/env python3
"""
Unified entry point for the Yahtzee advisor.

Usage:
    python yahtzee.py advise 1 2 2 3 4 --rerolls 2    # Which dice to keep
    python yahtzee.py advise 3 3 3 3 3 --rerolls 0    # Where to score
    python yahtzee.py bot 2 3 3 5 6 --strength pro    # Simulate a bot turn
    python yahtzee.py web --port 8080                 # JSON API server
    python yahtzee.py benchmark --games 20            # Bot score distributions
    python yahtzee.py config --bot-strength pro       # Save preferences

Categories and scores are given by name, e.g. --open Ones Chance
--scores Ones=3 Twos=6.
"""
import argparse
import logging
import sys

from game_engine import Category, normalize_categories, to_category
from settings import load_settings, save_settings
from weights import STRENGTHS

logger = logging.getLogger(__name__)


def _parse_scores(pairs):
    """Turn ["Ones=3", "Twos=6"] into {Category.ONES: 3, Category.TWOS: 6}."""
    scores = {}
    for pair in pairs or []:
        name, sep, value = pair.partition("=")
        if not sep:
            raise ValueError(f"Expected CATEGORY=SCORE, got {pair!r}")
        scores[to_category(name)] = int(value)
    return scores


def _open_categories(args, scores):
    if args.open:
        return normalize_categories(args.open)
    return tuple(cat for cat in Category if cat not in scores)


def _cmd_advise(args, settings):
    from ai import advise

    scores = _parse_scores(args.scores)
    strength = args.strength or settings["advisor_strength"]
    result = advise(args.dice, args.rerolls, _open_categories(args, scores), scores, strength)
    if args.rerolls:
        print(f"Keep {list(result.kept)} (EV {result.expected_value:.2f})")
    if result.category is not None:
        print(f"Best to score now: {result.category.value} (utility {result.utility:.2f})")


def _cmd_bot(args, settings):
    from ai import simulate_turn

    scores = _parse_scores(args.scores)
    strength = args.strength or settings["bot_strength"]
    result = simulate_turn(args.dice, _open_categories(args, scores), scores, strength)
    for step in result.history:
        print(f"  {step.rerolls_left} rerolls left: {list(step.hand_before)} keep {list(step.kept)}")
    print(f"Scored {result.category.value} for {result.score} with {list(result.final_hand)}")


def _cmd_config(args, settings):
    if args.bot_strength:
        settings["bot_strength"] = args.bot_strength
    if args.advisor_strength:
        settings["advisor_strength"] = args.advisor_strength
    if args.host is not None:
        settings["host"] = args.host
    if args.port is not None:
        settings["port"] = args.port
    save_settings(settings)
    for key, value in settings.items():
        print(f"{key} = {value}")


def build_parser():
    parser = argparse.ArgumentParser(description="Yahtzee advisor and bot")
    parser.add_argument("--log-level", default="WARNING",
                        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
                        help="Logging level (default: WARNING)")
    sub = parser.add_subparsers(dest="command", required=True)

    for name, help_text in (("advise", "Suggest dice to keep and a category"),
                            ("bot", "Simulate one bot turn")):
        cmd = sub.add_parser(name, help=help_text)
        cmd.add_argument("dice", type=int, nargs=5, help="The five dice")
        cmd.add_argument("--strength", choices=STRENGTHS)
        cmd.add_argument("--open", nargs="+", metavar="CATEGORY",
                         help="Open categories (default: all not in --scores)")
        cmd.add_argument("--scores", nargs="+", metavar="CATEGORY=SCORE",
                         help="Scores already recorded")
        if name == "advise":
            cmd.add_argument("--rerolls", type=int, choices=[0, 1, 2], default=2,
                             help="Rerolls left (default: 2)")

    sub.add_parser("web", help="Run the JSON API server", add_help=False)
    sub.add_parser("benchmark", help="Benchmark the bot strengths", add_help=False)

    config = sub.add_parser("config", help="Show or change saved preferences")
    config.add_argument("--bot-strength", choices=STRENGTHS)
    config.add_argument("--advisor-strength", choices=STRENGTHS)
    config.add_argument("--host")
    config.add_argument("--port", type=int)
    return parser


def main(argv=None):
    argv = sys.argv[1:] if argv is None else argv
    args, remaining = build_parser().parse_known_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level),
                        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s")

    # web and benchmark keep their own argument parsers
    if args.command == "web":
        from web import main as run_web
        return run_web(remaining)
    if args.command == "benchmark":
        from ai_benchmark import main as run_benchmark
        return run_benchmark(remaining)
    if remaining:
        build_parser().error(f"unrecognized arguments: {' '.join(remaining)}")

    settings = load_settings()
    handlers = {"advise": _cmd_advise, "bot": _cmd_bot, "config": _cmd_config}
    try:
        handlers[args.command](args, settings)
    except ValueError as exc:
        logger.error("%s", exc)
        return 2
    return 0


if __name__ == "__main__":
    sys.exit(main())
