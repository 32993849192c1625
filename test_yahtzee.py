"""Tests for yahtzee.py — command-line subcommands."""
import json

import pytest

import settings
from game_engine import Category
from yahtzee import _parse_scores, main


@pytest.fixture(autouse=True)
def settings_file(tmp_path, monkeypatch):
    """Point the settings file at a temporary location."""
    path = tmp_path / "advisor.json"
    monkeypatch.setattr(settings, "_default_path", lambda: path)
    return path


class TestParseScores:

    def test_pairs(self):
        assert _parse_scores(["Ones=3", "Chance=22"]) == {Category.ONES: 3, Category.CHANCE: 22}

    def test_none(self):
        assert _parse_scores(None) == {}

    def test_missing_equals(self):
        with pytest.raises(ValueError):
            _parse_scores(["Ones"])

    def test_unknown_category(self):
        with pytest.raises(ValueError):
            _parse_scores(["Pair=3"])


class TestAdvise:

    def test_keep_suggestion(self, capsys):
        code = main(["advise", "6", "1", "6", "1", "6", "--rerolls", "1",
                     "--open", "Chance", "--strength", "standard"])
        assert code == 0
        out = capsys.readouterr().out
        assert "Keep [6, 6, 6]" in out
        assert "EV 3.00" in out

    def test_scoring_suggestion(self, capsys):
        code = main(["advise", "3", "3", "3", "3", "3", "--rerolls", "0",
                     "--open", "ThreeOfAKind", "Yahtzee", "Chance",
                     "--strength", "standard"])
        assert code == 0
        out = capsys.readouterr().out
        assert "Keep" not in out
        assert "Yahtzee" in out

    def test_bad_category_exit_code(self):
        assert main(["advise", "1", "2", "3", "4", "5", "--open", "Pair"]) == 2

    def test_bad_die_exit_code(self):
        assert main(["advise", "1", "2", "3", "4", "9", "--rerolls", "0"]) == 2


class TestBot:

    def test_bot_turn(self, capsys):
        code = main(["bot", "6", "6", "6", "6", "6", "--strength", "standard"])
        assert code == 0
        out = capsys.readouterr().out
        assert "Scored Sixes for 30" in out
        assert "2 rerolls left" in out

    def test_scores_close_categories(self, capsys):
        code = main(["bot", "6", "6", "6", "6", "6", "--scores", "Sixes=24",
                     "--strength", "standard"])
        assert code == 0
        assert "Scored Sixes" not in capsys.readouterr().out


class TestConfig:

    def test_saves_preferences(self, settings_file, capsys):
        assert main(["config", "--bot-strength", "pro", "--port", "8080"]) == 0
        saved = json.loads(settings_file.read_text())
        assert saved["bot_strength"] == "pro"
        assert saved["port"] == 8080
        assert "bot_strength = pro" in capsys.readouterr().out

    def test_zero_port_and_empty_host_are_saved(self, settings_file):
        assert main(["config", "--port", "0", "--host", ""]) == 0
        saved = json.loads(settings_file.read_text())
        assert saved["port"] == 0
        assert saved["host"] == ""

    def test_no_flags_keeps_saved_values(self, settings_file):
        settings_file.write_text(json.dumps({"host": "0.0.0.0", "port": 8080}))
        assert main(["config"]) == 0
        saved = json.loads(settings_file.read_text())
        assert saved["host"] == "0.0.0.0"
        assert saved["port"] == 8080

    def test_bot_uses_saved_strength(self, settings_file, capsys):
        settings_file.write_text(json.dumps({"bot_strength": "pro"}))
        assert main(["bot", "6", "6", "6", "6", "6"]) == 0
        assert "Scored" in capsys.readouterr().out
