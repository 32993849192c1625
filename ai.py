"""
Yahtzee AI — Autoplay turn simulator, move advisor, and solo game loop.

Contains:
- TurnStep / TurnResult records for a simulated turn
- simulate_turn(): the bot's full turn (up to two rerolls, then a category)
- advise(): the suggestion shown to a human player
- play_game(): 13 simulated turns, used by the benchmark
"""
from dataclasses import dataclass
from typing import Optional, Tuple
import logging
import random

from game_engine import (
    Category, calculate_score, grand_total, normalize_categories,
    parse_hand, reroll, roll_hand,
)
from game_log import GameLog
from solver import KEEP_ALL, MAX_REROLLS, best_move, kept_dice, potential_score
from weights import weights_for

logger = logging.getLogger(__name__)


# ── Result Types ────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class TurnStep:
    """One reroll decision made during a simulated turn."""
    rerolls_left: int
    hand_before: Tuple[int, ...]
    kept: Tuple[int, ...]


@dataclass(frozen=True)
class TurnResult:
    """Outcome of a simulated turn."""
    final_hand: Tuple[int, ...]
    category: Category
    score: int
    history: Tuple[TurnStep, ...]


@dataclass(frozen=True)
class Advice:
    """Suggestion for a human player's current decision point."""
    keep_mask: int
    kept: Tuple[int, ...]
    expected_value: float
    category: Optional[Category]  # best category to score the hand as it stands
    utility: float


# ── Turn Simulator ──────────────────────────────────────────────────────────

def simulate_turn(starting_hand, open_categories, current_scores,
                  strength="standard", rng=None):
    """Play one bot turn from the opening roll.

    At each decision point the solver picks a keep-mask; keeping all five dice
    ends the rerolling early. After the last reroll the best weighted category
    is committed, falling back to the first open category.

    Args:
        starting_hand: The 5 dice of the opening roll
        open_categories: Categories the bot has not used yet (non-empty)
        current_scores: {category: score} the bot has recorded so far
        strength: "standard" (static weights) or "pro" (dynamic weights)
        rng: Object with randint(a, b) used for rerolls; defaults to random

    Returns:
        TurnResult with the final hand, category, raw score and step history
    """
    rng = rng or random
    hand = parse_hand(starting_hand)
    open_cats = normalize_categories(open_categories)
    if not open_cats:
        raise ValueError("simulate_turn needs at least one open category")

    # One weight table for the whole turn
    weights = weights_for(strength, current_scores, open_cats)

    rerolls_left = MAX_REROLLS
    history = []

    while rerolls_left > 0:
        move = best_move(hand, rerolls_left, open_cats, weights)
        kept = kept_dice(hand, move.keep_mask)
        history.append(TurnStep(rerolls_left=rerolls_left, hand_before=hand, kept=kept))
        logger.debug("bot (%s) rerolls=%d hand=%s keeps %s", strength,
                     rerolls_left, hand, kept)

        if move.keeps_all:
            break

        hand = reroll(hand, move.keep_mask, rng)
        rerolls_left -= 1

    _, best_cat = potential_score(hand, open_cats, weights)
    category = best_cat or open_cats[0]
    score = calculate_score(category, hand)
    logger.debug("bot (%s) scores %s for %d with %s", strength, category.value, score, hand)

    return TurnResult(final_hand=hand, category=category, score=score,
                      history=tuple(history))


# ── Advisor ─────────────────────────────────────────────────────────────────

def advise(hand, rerolls_left, open_categories, current_scores, strength="pro"):
    """Suggest which dice to keep (and where the hand would score now).

    With rerolls left, returns the solver's best keep-mask and its expected
    value. With none left the suggestion is to keep everything and the
    expected value is the utility of the best category.
    """
    hand = parse_hand(hand)
    open_cats = normalize_categories(open_categories)
    if not open_cats:
        raise ValueError("advise needs at least one open category")

    weights = weights_for(strength, current_scores, open_cats)
    utility, category = potential_score(hand, open_cats, weights)

    if rerolls_left == 0:
        return Advice(keep_mask=KEEP_ALL, kept=hand, expected_value=utility,
                      category=category, utility=utility)

    move = best_move(hand, rerolls_left, open_cats, weights)
    return Advice(keep_mask=move.keep_mask, kept=kept_dice(hand, move.keep_mask),
                  expected_value=move.expected_value, category=category,
                  utility=utility)


# ── Solo Game Loop ──────────────────────────────────────────────────────────

@dataclass
class GameResult:
    """A finished 13-turn bot game."""
    scores: dict
    log: GameLog

    @property
    def total(self):
        return grand_total(self.scores)


def play_game(strength="standard", rng=None):
    """Play a complete 13-round game with the bot.

    Args:
        strength: "standard" or "pro"
        rng: Dice source shared by opening rolls and rerolls

    Returns:
        GameResult with every category scored
    """
    rng = rng or random
    scores = {}
    log = GameLog()

    for turn in range(1, len(Category) + 1):
        open_cats = tuple(cat for cat in Category if cat not in scores)
        result = simulate_turn(roll_hand(rng), open_cats, scores, strength, rng)
        scores[result.category] = result.score
        log.log_turn(turn, result)

    return GameResult(scores=scores, log=log)
