"""
Yahtzee Game Engine - Pure scoring rules and dice handling

This module contains the category scoring rules and the hand helpers shared by
the solver and the turn simulator. Hands are plain tuples of ints kept sorted
ascending so they can be used directly as cache keys.
"""
from enum import Enum
from collections import Counter
import random


class Category(Enum):
    """Yahtzee score categories"""
    ONES = "Ones"
    TWOS = "Twos"
    THREES = "Threes"
    FOURS = "Fours"
    FIVES = "Fives"
    SIXES = "Sixes"
    THREE_OF_KIND = "ThreeOfAKind"
    FOUR_OF_KIND = "FourOfAKind"
    FULL_HOUSE = "FullHouse"
    SMALL_STRAIGHT = "SmallStraight"
    LARGE_STRAIGHT = "LargeStraight"
    YAHTZEE = "Yahtzee"
    CHANCE = "Chance"


UPPER_CATEGORIES = (Category.ONES, Category.TWOS, Category.THREES,
                    Category.FOURS, Category.FIVES, Category.SIXES)

LOWER_CATEGORIES = (Category.THREE_OF_KIND, Category.FOUR_OF_KIND,
                    Category.FULL_HOUSE, Category.SMALL_STRAIGHT,
                    Category.LARGE_STRAIGHT, Category.YAHTZEE, Category.CHANCE)

# Upper section categories mapped to their face value
UPPER_FACES = {cat: face for face, cat in enumerate(UPPER_CATEGORIES, start=1)}

UPPER_BONUS_THRESHOLD = 63
UPPER_BONUS = 35

NUM_DICE = 5


def to_category(value):
    """Coerce a Category or its identifier string to a Category.

    Raises ValueError for anything outside the 13 fixed categories.
    """
    if isinstance(value, Category):
        return value
    return Category(value)


def normalize_categories(categories):
    """Return the given categories as a tuple in enumeration order, deduplicated."""
    wanted = {to_category(c) for c in categories}
    return tuple(cat for cat in Category if cat in wanted)


# ── Hands ────────────────────────────────────────────────────────────────────

def parse_hand(values):
    """
    Validate dice values and return the canonical (sorted) hand.

    Args:
        values: Iterable of exactly 5 integers in 1-6

    Returns:
        Sorted tuple of 5 ints

    Raises:
        ValueError: wrong number of dice or a value outside 1-6
    """
    hand = tuple(values)
    if len(hand) != NUM_DICE:
        raise ValueError(f"A hand has {NUM_DICE} dice, got {len(hand)}")
    for v in hand:
        if isinstance(v, bool) or not isinstance(v, int) or not 1 <= v <= 6:
            raise ValueError(f"Die values must be integers 1-6, got {v!r}")
    return tuple(sorted(hand))


def roll_hand(rng=None):
    """Roll 5 fresh dice and return them as a sorted hand."""
    rng = rng or random
    return tuple(sorted(rng.randint(1, 6) for _ in range(NUM_DICE)))


def reroll(hand, keep_mask, rng=None):
    """
    Keep the dice selected by keep_mask and redraw the rest.

    Args:
        hand: Sorted 5-die hand
        keep_mask: 5-bit selector, bit i set = die i is held
        rng: Object with randint(a, b); defaults to the random module

    Returns:
        New sorted hand
    """
    rng = rng or random
    kept = [hand[i] for i in range(NUM_DICE) if keep_mask & (1 << i)]
    rolled = [rng.randint(1, 6) for _ in range(NUM_DICE - len(kept))]
    return tuple(sorted(kept + rolled))


# ── Scoring rules ────────────────────────────────────────────────────────────

def count_values(hand):
    """
    Count occurrences of each die value

    Args:
        hand: Sequence of die values

    Returns:
        Counter object with die values as keys
    """
    return Counter(hand)


def has_n_of_kind(hand, n):
    """Check if the hand contains at least n of the same value"""
    return max(count_values(hand).values()) >= n


def has_full_house(hand):
    """
    Check if the hand forms a full house

    Three of one value and two of another; five of a kind also counts.
    """
    counts = set(count_values(hand).values())
    return (3 in counts and 2 in counts) or 5 in counts


def has_small_straight(hand):
    """Check if the hand contains a small straight (4 consecutive values)"""
    values = set(hand)
    # Possible small straights: 1-2-3-4, 2-3-4-5, 3-4-5-6
    small_straights = [{1, 2, 3, 4}, {2, 3, 4, 5}, {3, 4, 5, 6}]
    return any(straight.issubset(values) for straight in small_straights)


def has_large_straight(hand):
    """Check if the hand contains a large straight (5 consecutive values)"""
    values = set(hand)
    large_straights = [{1, 2, 3, 4, 5}, {2, 3, 4, 5, 6}]
    return any(straight.issubset(values) for straight in large_straights)


def has_yahtzee(hand):
    """Check if all dice have the same value"""
    return 5 in count_values(hand).values()


def calculate_score(category, hand):
    """
    Calculate the score for a given category and hand

    Args:
        category: Category enum value (or its identifier string)
        hand: Sequence of 5 die values, any order

    Returns:
        Integer score for the category (0 if doesn't qualify)

    Raises:
        ValueError: category is not one of the 13 categories
    """
    category = to_category(category)
    total = sum(hand)
    counts = count_values(hand)

    # Upper section - sum of matching dice
    if category in UPPER_FACES:
        face = UPPER_FACES[category]
        return counts[face] * face

    elif category == Category.THREE_OF_KIND:
        return total if has_n_of_kind(hand, 3) else 0

    elif category == Category.FOUR_OF_KIND:
        return total if has_n_of_kind(hand, 4) else 0

    elif category == Category.FULL_HOUSE:
        return 25 if has_full_house(hand) else 0

    elif category == Category.SMALL_STRAIGHT:
        return 30 if has_small_straight(hand) else 0

    elif category == Category.LARGE_STRAIGHT:
        return 40 if has_large_straight(hand) else 0

    elif category == Category.YAHTZEE:
        return 50 if has_yahtzee(hand) else 0

    # Chance - sum of all dice
    return total


def score_all(hand, categories=None):
    """Return {category: score} for every category (or just the given ones)."""
    if categories is None:
        categories = tuple(Category)
    return {cat: calculate_score(cat, hand) for cat in normalize_categories(categories)}


# ── Score totals ─────────────────────────────────────────────────────────────

def upper_section_total(scores):
    """Sum of recorded upper section scores (Ones through Sixes)"""
    return sum(scores.get(cat, 0) or 0 for cat in UPPER_CATEGORIES)


def upper_section_bonus(scores):
    """35 points if the upper section reaches 63, else 0"""
    return UPPER_BONUS if upper_section_total(scores) >= UPPER_BONUS_THRESHOLD else 0


def lower_section_total(scores):
    """Sum of recorded lower section scores"""
    return sum(scores.get(cat, 0) or 0 for cat in LOWER_CATEGORIES)


def grand_total(scores):
    """Upper total + bonus + lower total"""
    return (upper_section_total(scores) +
            upper_section_bonus(scores) +
            lower_section_total(scores))
