"""
Settings Test Suite

Tests for persistent settings load/save.

Sections:
    1. Load — missing file, corrupt file, partial, unknown keys, bad strengths
    2. Save — round-trip, bad path
"""
import json

from settings import DEFAULTS, load_settings, save_settings

# ── 1. Load ──────────────────────────────────────────────────────────────────


def test_load_missing_file_returns_defaults(tmp_path):
    """Loading from a nonexistent file returns DEFAULTS."""
    result = load_settings(path=tmp_path / "no_such_file.json")
    assert result == DEFAULTS


def test_load_corrupt_file_returns_defaults(tmp_path):
    """Loading from a corrupt (non-JSON) file returns DEFAULTS."""
    path = tmp_path / "bad.json"
    path.write_text("not json at all {{{")
    assert load_settings(path=path) == DEFAULTS


def test_load_non_dict_returns_defaults(tmp_path):
    path = tmp_path / "list.json"
    path.write_text("[1, 2, 3]")
    assert load_settings(path=path) == DEFAULTS


def test_partial_file_fills_missing_keys(tmp_path):
    """A file with only some keys gets missing ones filled from DEFAULTS."""
    path = tmp_path / "settings.json"
    path.write_text(json.dumps({"bot_strength": "pro"}))
    result = load_settings(path=path)
    assert result["bot_strength"] == "pro"
    assert result["advisor_strength"] == DEFAULTS["advisor_strength"]
    assert result["port"] == DEFAULTS["port"]


def test_unknown_keys_ignored(tmp_path):
    path = tmp_path / "settings.json"
    path.write_text(json.dumps({"dark_mode": True, "port": 8080}))
    result = load_settings(path=path)
    assert "dark_mode" not in result
    assert result["port"] == 8080


def test_unknown_strength_falls_back(tmp_path):
    path = tmp_path / "settings.json"
    path.write_text(json.dumps({"bot_strength": "grandmaster", "advisor_strength": "standard"}))
    result = load_settings(path=path)
    assert result["bot_strength"] == DEFAULTS["bot_strength"]
    assert result["advisor_strength"] == "standard"


def test_defaults_not_shared(tmp_path):
    result = load_settings(path=tmp_path / "missing.json")
    result["bot_strength"] = "pro"
    assert DEFAULTS["bot_strength"] == "standard"


# ── 2. Save ──────────────────────────────────────────────────────────────────


def test_save_load_round_trip(tmp_path):
    """Settings survive a save/load round trip."""
    path = tmp_path / "settings.json"
    settings = {"bot_strength": "pro", "advisor_strength": "standard",
                "host": "0.0.0.0", "port": 8000}
    save_settings(settings, path=path)
    assert load_settings(path=path) == settings


def test_save_to_bad_path_does_not_raise(tmp_path):
    save_settings(DEFAULTS, path=tmp_path / "missing_dir" / "settings.json")
