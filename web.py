#!/usr/bin/env python3
"""
Yahtzee Web — Flask JSON API over the scoring rules, advisor and bot.

The browser front end owns rendering and turn order; it posts the current
hand, rerolls left, open categories and recorded scores, and gets back
decisions. No game state is kept on the server.
"""
import logging

logger = logging.getLogger(__name__)

from flask import Flask, jsonify, request

from ai import advise, simulate_turn
from game_engine import Category, normalize_categories, parse_hand, score_all, to_category
from settings import load_settings
from solver import mask_indices
from weights import weights_for

app = Flask(__name__)
app.config.setdefault("YAHTZEE_SETTINGS", None)


class InvalidRequest(ValueError):
    """Request payload that cannot be turned into engine inputs."""


def _settings():
    return app.config["YAHTZEE_SETTINGS"] or load_settings()


def _payload():
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise InvalidRequest("Expected a JSON object")
    return data


def _hand(data):
    if "hand" not in data:
        raise InvalidRequest("Missing 'hand'")
    if not isinstance(data["hand"], list):
        raise InvalidRequest("'hand' must be a list of five dice")
    return parse_hand(data["hand"])


def _strength(data, setting):
    strength = data.get("strength", _settings()[setting])
    if not isinstance(strength, str):
        raise InvalidRequest("'strength' must be a string")
    return strength


def _rerolls_left(data):
    rerolls_left = data.get("rerolls_left", 2)
    if isinstance(rerolls_left, bool) or not isinstance(rerolls_left, int) \
            or rerolls_left not in (0, 1, 2):
        raise InvalidRequest("'rerolls_left' must be 0, 1 or 2")
    return rerolls_left


def _open_categories(data):
    names = data.get("open_categories")
    if names is None:
        return tuple(Category)
    if not isinstance(names, list):
        raise InvalidRequest("'open_categories' must be a list of category names")
    return normalize_categories(names)


def _current_scores(data):
    scores = data.get("current_scores") or {}
    if not isinstance(scores, dict):
        raise InvalidRequest("'current_scores' must be an object")
    result = {}
    for name, value in scores.items():
        if isinstance(value, bool) or not isinstance(value, int) or value < 0:
            raise InvalidRequest(f"Score for {name!r} must be a non-negative integer")
        result[to_category(name)] = value
    return result


def _scores_json(scores):
    return {cat.value: value for cat, value in scores.items()}


@app.errorhandler(ValueError)
def _invalid_input(exc):
    """Engine and payload validation errors become 400 responses."""
    logger.warning("Rejected %s %s: %s", request.method, request.path, exc)
    return jsonify({"error": str(exc)}), 400


@app.route("/api/score", methods=["POST"])
def score():
    """Raw score of the hand in every (or every requested) category."""
    data = _payload()
    hand = _hand(data)
    return jsonify({"hand": list(hand),
                    "scores": _scores_json(score_all(hand, _open_categories(data)))})


@app.route("/api/weights", methods=["POST"])
def weights():
    """Weight table a given strength would use for this game state."""
    data = _payload()
    strength = _strength(data, "advisor_strength")
    table = weights_for(strength, _current_scores(data), _open_categories(data))
    return jsonify({"strength": strength, "weights": _scores_json(table)})


@app.route("/api/advice", methods=["POST"])
def advice():
    """Best keep-mask and expected value for the human player's hand."""
    data = _payload()
    hand = _hand(data)
    rerolls_left = _rerolls_left(data)
    open_cats = _open_categories(data)
    if not open_cats:
        raise InvalidRequest("No open categories")

    strength = _strength(data, "advisor_strength")
    result = advise(hand, rerolls_left, open_cats, _current_scores(data), strength)
    return jsonify({
        "hand": list(hand),
        "keep_mask": result.keep_mask,
        "hold": list(mask_indices(result.keep_mask)),
        "kept": list(result.kept),
        "expected_value": result.expected_value,
        "category": result.category.value if result.category else None,
        "utility": result.utility,
    })


@app.route("/api/bot-turn", methods=["POST"])
def bot_turn():
    """Play the bot's turn from the given opening roll."""
    data = _payload()
    hand = _hand(data)
    open_cats = _open_categories(data)
    if not open_cats:
        raise InvalidRequest("No open categories")

    strength = _strength(data, "bot_strength")
    result = simulate_turn(hand, open_cats, _current_scores(data), strength)
    return jsonify({
        "start_hand": list(hand),
        "final_hand": list(result.final_hand),
        "category": result.category.value,
        "score": result.score,
        "history": [
            {"rerolls_left": step.rerolls_left,
             "hand": list(step.hand_before),
             "kept": list(step.kept)}
            for step in result.history
        ],
    })


def main(argv=None):
    """Entry point for the web server."""
    import argparse
    settings = load_settings()
    parser = argparse.ArgumentParser(description="Yahtzee Advisor Web API")
    parser.add_argument("--host", default=settings["host"],
                        help=f"Host to bind (default: {settings['host']})")
    parser.add_argument("--port", type=int, default=settings["port"],
                        help=f"Port (default: {settings['port']})")
    parser.add_argument("--debug", action="store_true", help="Enable debug mode")
    args = parser.parse_args(argv)

    app.config["YAHTZEE_SETTINGS"] = settings
    print(f"Starting Yahtzee advisor API at http://{args.host}:{args.port}")
    app.run(host=args.host, port=args.port, debug=args.debug)


if __name__ == "__main__":
    main()
