"""Persistent settings for the Yahtzee advisor.

Stores user preferences in ~/.yahtzee_advisor.json. Only preferences live
here (bot strengths, server address); game state is never saved.
"""

import json
from pathlib import Path

from weights import STRENGTHS

DEFAULTS = {
    "bot_strength": "standard",
    "advisor_strength": "pro",
    "host": "127.0.0.1",
    "port": 5000,
}

_STRENGTH_KEYS = ("bot_strength", "advisor_strength")


def _default_path():
    """Return the default path for the settings file."""
    return Path.home() / ".yahtzee_advisor.json"


def load_settings(path=None):
    """Load settings from JSON file. Returns DEFAULTS on missing/corrupt.

    Merges with DEFAULTS so missing keys get default values.
    Unknown keys are ignored, and so are strengths no bot plays.
    """
    if path is None:
        path = _default_path()
    path = Path(path)
    try:
        data = json.loads(path.read_text())
        if not isinstance(data, dict):
            return dict(DEFAULTS)
        # Merge: only keep known keys, fill missing from defaults
        result = dict(DEFAULTS)
        for key in DEFAULTS:
            if key in data:
                result[key] = data[key]
        for key in _STRENGTH_KEYS:
            if result[key] not in STRENGTHS:
                result[key] = DEFAULTS[key]
        return result
    except (FileNotFoundError, json.JSONDecodeError, OSError):
        return dict(DEFAULTS)


def save_settings(settings, path=None):
    """Write settings dict to JSON. Silently ignores write errors."""
    if path is None:
        path = _default_path()
    path = Path(path)
    try:
        path.write_text(json.dumps(settings, indent=2))
    except OSError:
        pass
