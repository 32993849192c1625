"""
Dice Tables — Exact roll distributions for Yahtzee probability calculations.

Rolling n dice is modelled by enumerating all 6^n ordered outcomes and
collapsing each to its sorted form, so a sorted outcome's probability is
proportional to the number of orderings that produce it.

Contents:
    RollOutcomes     — process-lifetime cache of roll distributions per dice count
    ROLL_OUTCOMES    — shared instance used by default everywhere
    roll_outcomes(n) — distribution {sorted n-tuple: probability}
    transition(held, num_rolling) — distribution over resulting 5-dice hands
"""
import itertools
from collections import Counter

MAX_DICE = 5


def _build_roll_outcomes(num_dice):
    """Probability of each sorted outcome when rolling num_dice fresh dice."""
    if num_dice == 0:
        # Nothing rolls: one empty outcome
        return {(): 1.0}

    total = 6 ** num_dice
    counts = Counter(
        tuple(sorted(roll))
        for roll in itertools.product(range(1, 7), repeat=num_dice)
    )
    return {outcome: count / total for outcome, count in counts.items()}


def _combine(held, outcomes):
    """Add held dice to every roll outcome, keeping each hand sorted."""
    return [(tuple(sorted(held + outcome)), prob) for outcome, prob in outcomes.items()]


class RollOutcomes:
    """Compute-or-fetch cache of roll distributions.

    Both tables are pure functions of their key (dice count, held dice), so
    entries are never invalidated and a racing recomputation stores an
    identical value.
    """

    def __init__(self):
        self._outcomes = {}
        self._transitions = {}

    def get(self, num_dice):
        """Return {sorted outcome tuple: probability} for rolling num_dice dice.

        Raises:
            ValueError: num_dice outside 0-5
        """
        if not 0 <= num_dice <= MAX_DICE:
            raise ValueError(f"Can roll 0-{MAX_DICE} dice, got {num_dice}")
        outcomes = self._outcomes.get(num_dice)
        if outcomes is None:
            outcomes = _build_roll_outcomes(num_dice)
            self._outcomes[num_dice] = outcomes
        return outcomes

    def transition(self, held):
        """Distribution over sorted 5-dice hands after rerolling everything not held.

        Args:
            held: Held die values (0-5 dice)

        Returns:
            List of (hand, probability) pairs; probabilities sum to 1.0
        """
        held = tuple(sorted(held))
        result = self._transitions.get(held)
        if result is None:
            result = _combine(held, self.get(MAX_DICE - len(held)))
            self._transitions[held] = result
        return result

    def clear(self):
        """Drop every cached table."""
        self._outcomes.clear()
        self._transitions.clear()


ROLL_OUTCOMES = RollOutcomes()


def roll_outcomes(num_dice):
    """Distribution for rolling num_dice fresh dice (shared cache)."""
    return ROLL_OUTCOMES.get(num_dice)


def transition(held, num_rolling):
    """
    Combine held dice with a fresh roll of num_rolling dice (shared cache).

    Args:
        held: Die values being kept
        num_rolling: How many dice are rerolled; held plus rolling must be 5

    Returns:
        List of (sorted hand, probability) pairs

    Raises:
        ValueError: held and rolling dice do not add up to a full hand
    """
    held = tuple(held)
    if len(held) + num_rolling != MAX_DICE:
        raise ValueError(f"Held and rolled dice must total {MAX_DICE}, "
                         f"got {len(held)} + {num_rolling}")
    return ROLL_OUTCOMES.transition(held)
