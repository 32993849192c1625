"""
Category weights — reference thresholds subtracted from raw scores.

A weight is the "par" score for a category. Subtracting it puts categories
with very different raw scales (Ones vs Yahtzee) on a comparable footing when
the solver picks where to score. Weights never reach the displayed score.

Two strategies share one signature (current_scores, open_categories):
    static_weights  — the fixed table, used by the standard bot
    dynamic_weights — adjusted for upper bonus progress and game stage (pro bot)
"""
from game_engine import (
    Category, UPPER_CATEGORIES, UPPER_BONUS_THRESHOLD,
    normalize_categories, to_category,
)

# Heuristic "par" values for the standard bot
STATIC_WEIGHTS = {
    Category.ONES: 2.0, Category.TWOS: 5.0, Category.THREES: 8.0,
    Category.FOURS: 11.0, Category.FIVES: 14.0, Category.SIXES: 17.0,
    Category.THREE_OF_KIND: 21.0, Category.FOUR_OF_KIND: 16.0,
    Category.FULL_HOUSE: 22.0, Category.SMALL_STRAIGHT: 27.0,
    Category.LARGE_STRAIGHT: 35.0, Category.YAHTZEE: 50.0,
    Category.CHANCE: 22.0,
}

# Average per open upper slot above which the bonus counts as at risk
_BONUS_PRESSURE = 3.0
_RELAXED_UPPER_WEIGHT = 1.0
_EARLY_GAME_CHANCE = 26.0
_LATE_GAME_CHANCE = 15.0


def _recorded(current_scores):
    """Normalise a {category-or-name: score} mapping to Category keys."""
    return {to_category(cat): score for cat, score in current_scores.items()
            if score is not None}


def static_weights(current_scores=None, open_categories=None):
    """Return a copy of the fixed weight table. Game state is ignored."""
    return dict(STATIC_WEIGHTS)


def dynamic_weights(current_scores, open_categories):
    """
    Recompute weights from the live game state.

    Upper thresholds rise when the 63-point bonus needs more than 3 points per
    remaining upper slot, and drop to 1.0 once the bonus is secured. Chance is
    worth less early (26.0 with more than 7 open) and more late (15.0 with
    fewer than 4 open). Yahtzee is always 50.0.

    Args:
        current_scores: {category: score} for categories already played
        open_categories: Categories still available

    Returns:
        Dict of Category -> float
    """
    weights = dict(STATIC_WEIGHTS)
    scores = _recorded(current_scores)
    open_cats = normalize_categories(open_categories)

    upper_score = sum(scores[cat] for cat in UPPER_CATEGORIES if cat in scores)
    upper_slots_left = sum(1 for cat in UPPER_CATEGORIES if cat not in scores)
    deficit = UPPER_BONUS_THRESHOLD - upper_score

    if upper_slots_left > 0:
        if deficit <= 0:
            # Bonus secured: upper boxes no longer compete with the lower section
            for cat in UPPER_CATEGORIES:
                if cat in open_cats:
                    weights[cat] = _RELAXED_UPPER_WEIGHT
        else:
            average_needed = deficit / upper_slots_left
            if average_needed > _BONUS_PRESSURE:
                for cat in UPPER_CATEGORIES:
                    if cat in open_cats:
                        weights[cat] += average_needed * 2

    if len(open_cats) > 7:
        weights[Category.CHANCE] = _EARLY_GAME_CHANCE
    elif len(open_cats) < 4:
        weights[Category.CHANCE] = _LATE_GAME_CHANCE

    weights[Category.YAHTZEE] = 50.0
    return weights


# Playing strength -> weight strategy
WEIGHTING = {
    "standard": static_weights,
    "pro": dynamic_weights,
}

STRENGTHS = tuple(WEIGHTING)


def weights_for(strength, current_scores, open_categories):
    """Build the weight table for a playing strength ("standard" or "pro").

    Raises:
        ValueError: unknown strength
    """
    try:
        strategy = WEIGHTING[strength]
    except KeyError:
        raise ValueError(
            f"Unknown strength {strength!r}, expected one of {', '.join(STRENGTHS)}"
        ) from None
    return strategy(current_scores, open_categories)
