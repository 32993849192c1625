"""
Game Log Test Suite

Tests for the game log recording system.

Sections:
    1. Individual logging — keep and score field verification
    2. Turn logging — a simulated turn becomes keep entries plus a score
    3. Filtering — get_turn_entries, get_score_entries
    4. Clear — empties all entries
"""

from ai import TurnResult, TurnStep
from game_engine import Category
from game_log import GameLog

# ── 1. Individual logging ────────────────────────────────────────────────────


def test_log_keep():
    """log_keep creates an entry with correct fields."""
    log = GameLog()
    log.log_keep(turn=1, rerolls_left=2, dice_values=[1, 2, 3, 4, 6], kept=[6])
    assert len(log.entries) == 1
    e = log.entries[0]
    assert e.turn == 1
    assert e.event_type == "keep"
    assert e.dice_values == (1, 2, 3, 4, 6)
    assert e.kept == (6,)
    assert e.rerolls_left == 2
    assert e.category is None
    assert e.score is None


def test_log_score():
    """log_score creates an entry with category and score."""
    log = GameLog()
    log.log_score(turn=3, category=Category.FULL_HOUSE, score=25, dice_values=[2, 2, 3, 3, 3])
    e = log.entries[0]
    assert e.event_type == "score"
    assert e.category == Category.FULL_HOUSE
    assert e.score == 25
    assert e.dice_values == (2, 2, 3, 3, 3)
    assert e.kept is None


# ── 2. Turn logging ──────────────────────────────────────────────────────────


def _two_step_turn():
    return TurnResult(
        final_hand=(5, 5, 6, 6, 6),
        category=Category.CHANCE,
        score=28,
        history=(
            TurnStep(rerolls_left=2, hand_before=(1, 2, 3, 4, 6), kept=(6,)),
            TurnStep(rerolls_left=1, hand_before=(1, 2, 5, 5, 6), kept=(5, 5, 6)),
        ),
    )


def test_log_turn_records_steps_then_score():
    log = GameLog()
    log.log_turn(4, _two_step_turn())
    assert [e.event_type for e in log.entries] == ["keep", "keep", "score"]
    assert [e.rerolls_left for e in log.entries[:2]] == [2, 1]
    assert log.entries[1].kept == (5, 5, 6)
    assert log.entries[2].dice_values == (5, 5, 6, 6, 6)
    assert log.entries[2].score == 28
    assert all(e.turn == 4 for e in log.entries)


# ── 3. Filtering ─────────────────────────────────────────────────────────────


def test_get_turn_entries():
    log = GameLog()
    log.log_turn(1, _two_step_turn())
    log.log_score(turn=2, category=Category.ONES, score=3, dice_values=[1, 1, 1, 4, 5])
    assert len(log.get_turn_entries(1)) == 3
    assert len(log.get_turn_entries(2)) == 1
    assert log.get_turn_entries(3) == []


def test_get_score_entries():
    log = GameLog()
    log.log_turn(1, _two_step_turn())
    log.log_score(turn=2, category=Category.ONES, score=3, dice_values=[1, 1, 1, 4, 5])
    scores = log.get_score_entries()
    assert [e.category for e in scores] == [Category.CHANCE, Category.ONES]


# ── 4. Clear ─────────────────────────────────────────────────────────────────


def test_clear():
    log = GameLog()
    log.log_turn(1, _two_step_turn())
    log.clear()
    assert log.entries == []
