"""Game log for Yahtzee — records the bot's decisions for post-game replay.

Pure Python. Captures each reroll decision and the scoring decision of every
simulated turn. The log is output only; nothing reads it back into a decision.
"""
from __future__ import annotations

from dataclasses import dataclass

from game_engine import Category


@dataclass
class LogEntry:
    """A single logged game event."""
    turn: int                                   # 1-13
    event_type: str                             # "keep", "score"
    dice_values: tuple[int, ...]
    kept: tuple[int, ...] | None = None
    rerolls_left: int = 0
    category: Category | None = None
    score: int | None = None


class GameLog:
    """Accumulates LogEntry records during a game."""

    def __init__(self) -> None:
        self.entries: list[LogEntry] = []

    def log_keep(self, turn: int, rerolls_left: int, dice_values, kept) -> None:
        """Record which dice were held before a reroll."""
        self.entries.append(LogEntry(
            turn=turn,
            event_type="keep",
            dice_values=tuple(dice_values),
            kept=tuple(kept),
            rerolls_left=rerolls_left,
        ))

    def log_score(self, turn: int, category: Category, score: int, dice_values) -> None:
        """Record a scoring decision."""
        self.entries.append(LogEntry(
            turn=turn,
            event_type="score",
            dice_values=tuple(dice_values),
            category=category,
            score=score,
        ))

    def log_turn(self, turn: int, result) -> None:
        """Record every step of a simulated turn followed by its score."""
        for step in result.history:
            self.log_keep(turn, step.rerolls_left, step.hand_before, step.kept)
        self.log_score(turn, result.category, result.score, result.final_hand)

    def get_turn_entries(self, turn: int) -> list[LogEntry]:
        """Return all entries for a specific turn."""
        return [e for e in self.entries if e.turn == turn]

    def get_score_entries(self) -> list[LogEntry]:
        """Return only scoring entries."""
        return [e for e in self.entries if e.event_type == "score"]

    def clear(self) -> None:
        """Remove all entries."""
        self.entries = []
