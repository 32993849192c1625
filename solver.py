"""
Expected-value solver — backward induction over the rerolls left in a turn.

A state is (sorted hand, rerolls left). With no rerolls left its value is the
best weighted category utility (potential_score). Otherwise it is the best of
the 32 keep-masks, each valued as the probability-weighted value of the hands
it can lead to with one reroll fewer. A turn has at most two rerolls, so the
recursion is at most two levels deep.

The solver is oblivious to where its weight table came from (see weights.py).
"""
from dataclasses import dataclass
import logging

from dice_tables import ROLL_OUTCOMES
from game_engine import (
    Category, UPPER_FACES, NUM_DICE,
    calculate_score, normalize_categories, parse_hand, to_category,
)

logger = logging.getLogger(__name__)

MAX_REROLLS = 2
KEEP_ALL = (1 << NUM_DICE) - 1
ALL_MASKS = range(KEEP_ALL + 1)

# Same-kind bonus for upper categories: 3+ matching dice also feed the
# of-a-kind boxes, 4+ even more so
_SAME_KIND_BONUS = ((3, 5.0), (4, 2.0))

_CATEGORY_BITS = {cat: 1 << i for i, cat in enumerate(Category)}


@dataclass(frozen=True)
class Move:
    """Best keep decision for a hand and its expected weighted value."""
    keep_mask: int       # bit i set = hold die i of the sorted hand
    expected_value: float

    @property
    def keeps_all(self):
        return self.keep_mask == KEEP_ALL


# ── Keep-mask helpers ───────────────────────────────────────────────────────

def mask_indices(mask):
    """Dice positions selected by a keep-mask."""
    return tuple(i for i in range(NUM_DICE) if mask & (1 << i))


def kept_dice(hand, mask):
    """Sorted values of the dice a keep-mask holds."""
    return tuple(sorted(hand[i] for i in mask_indices(mask)))


def category_mask(categories):
    """Bitset over the 13 categories, used as the open-set part of cache keys."""
    mask = 0
    for cat in categories:
        mask |= _CATEGORY_BITS[to_category(cat)]
    return mask


# ── Terminal evaluation ─────────────────────────────────────────────────────

def _normalize_weights(weights):
    return {to_category(cat): float(value) for cat, value in weights.items()}


def _best_category(hand, open_categories, weights):
    """Best (utility, category) over already-normalised open categories."""
    best_score = float("-inf")
    best_cat = None

    for cat in open_categories:
        utility = calculate_score(cat, hand) - weights.get(cat, 0.0)

        face = UPPER_FACES.get(cat)
        if face is not None:
            count = hand.count(face)
            for needed, bonus in _SAME_KIND_BONUS:
                if count >= needed:
                    utility += bonus

        if utility > best_score:
            best_score = utility
            best_cat = cat

    return best_score, best_cat


def potential_score(hand, open_categories, weights):
    """
    Best weighted utility for scoring this hand right now.

    Utility is score minus the category's weight, plus the same-kind bonus
    for upper categories (+5 with 3+ matching dice, +2 more with 4+).
    Ties go to the earliest category in enumeration order.

    Args:
        hand: 5 die values
        open_categories: Categories still available
        weights: {category: threshold}; missing categories weigh 0

    Returns:
        (best_utility, best_category); (-inf, None) if nothing is open
    """
    return _best_category(tuple(hand), normalize_categories(open_categories),
                          _normalize_weights(weights))


# ── Solver ──────────────────────────────────────────────────────────────────

class ExpectedValueSolver:
    """Exhaustive 32-mask backward induction for one decision.

    Owns its expected-value cache, which is only valid for the open
    categories and weights it was built with. Build a new solver for every
    top-level query.
    """

    def __init__(self, open_categories, weights, roll_outcomes=None):
        self.open_categories = normalize_categories(open_categories)
        if not self.open_categories:
            raise ValueError("At least one category must be open")
        self.weights = _normalize_weights(weights)
        self.roll_outcomes = roll_outcomes or ROLL_OUTCOMES
        self._open_mask = category_mask(self.open_categories)
        self._cache = {}

    def potential_score(self, hand):
        """(utility, category) for scoring hand now."""
        return _best_category(hand, self.open_categories, self.weights)

    def expected_value(self, hand, rerolls_left):
        """Expected weighted utility of a sorted hand with rerolls_left to go."""
        key = (hand, rerolls_left, self._open_mask)
        cached = self._cache.get(key)
        if cached is not None:
            return cached

        if rerolls_left == 0:
            value, _ = self.potential_score(hand)
        else:
            value = max(ev for _, ev in self._mask_values(hand, rerolls_left))

        self._cache[key] = value
        return value

    def _mask_values(self, hand, rerolls_left):
        """Yield (mask, expected value) for all 32 keep-masks.

        Masks keeping the same multiset of values share one evaluation.
        """
        by_kept = {}
        for mask in ALL_MASKS:
            kept = kept_dice(hand, mask)
            ev = by_kept.get(kept)
            if ev is None:
                ev = sum(prob * self.expected_value(next_hand, rerolls_left - 1)
                         for next_hand, prob in self.roll_outcomes.transition(kept))
                by_kept[kept] = ev
            yield mask, ev

    def best_move(self, hand, rerolls_left):
        """Arg-max keep-mask at the top level (lowest mask wins ties)."""
        if rerolls_left < 1:
            raise ValueError("best_move needs at least one reroll left; "
                             "use potential_score to pick a category")

        best_mask = 0
        best_ev = float("-inf")
        for mask, ev in self._mask_values(hand, rerolls_left):
            if ev > best_ev:
                best_ev = ev
                best_mask = mask
        return Move(keep_mask=best_mask, expected_value=best_ev)

    @property
    def cache_size(self):
        return len(self._cache)


def best_move(hand, rerolls_left, open_categories, weights, roll_outcomes=None):
    """
    Find the keep-mask that maximises expected weighted utility.

    Args:
        hand: 5 die values (any order; the mask refers to the sorted hand)
        rerolls_left: 1 or 2
        open_categories: Non-empty collection of categories still available
        weights: {category: threshold}
        roll_outcomes: RollOutcomes cache (defaults to the shared one)

    Returns:
        Move(keep_mask, expected_value)

    Raises:
        ValueError: invalid hand, rerolls_left outside 1-2, or nothing open
    """
    hand = parse_hand(hand)
    if not 1 <= rerolls_left <= MAX_REROLLS:
        raise ValueError(f"rerolls_left must be 1-{MAX_REROLLS}, got {rerolls_left}")

    solver = ExpectedValueSolver(open_categories, weights, roll_outcomes)
    move = solver.best_move(hand, rerolls_left)
    logger.debug("best_move hand=%s rerolls=%d -> keep %s (EV %.2f, %d states)",
                 hand, rerolls_left, kept_dice(hand, move.keep_mask),
                 move.expected_value, solver.cache_size)
    return move
