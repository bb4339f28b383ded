"""Dice pool utilities for backgammon.

A roll of two dice gives a pool of 2 die values, or 4 for doubles. Moves
consume values from the pool one at a time.
"""

from typing import List
from backgammon_rules.core.types import Dice, DicePool


def is_doubles(dice: Dice) -> bool:
    """Check if dice roll is doubles.

    Args:
        dice: Dice roll tuple

    Returns:
        True if both dice show the same value
    """
    return dice[0] == dice[1]


def dice_values(dice: Dice) -> DicePool:
    """Get the dice values to use for moves.

    For doubles, you get 4 moves. For non-doubles, you get 2 moves.

    Args:
        dice: Dice roll tuple

    Returns:
        List of dice values (length 2 or 4)

    Examples:
        >>> dice_values((3, 5))
        [3, 5]
        >>> dice_values((4, 4))
        [4, 4, 4, 4]
    """
    if is_doubles(dice):
        return [dice[0]] * 4
    else:
        return [dice[0], dice[1]]


def consume_die(pool: DicePool, die: int) -> DicePool:
    """Remove exactly one instance of a die value from the pool.

    Args:
        pool: Current dice pool
        die: Die value to consume

    Returns:
        New pool with one instance of ``die`` removed (unchanged copy if absent)

    Examples:
        >>> consume_die([4, 4, 4, 4], 4)
        [4, 4, 4]
    """
    remaining = list(pool)
    if die in remaining:
        remaining.remove(die)
    return remaining


def remaining_dice(dice: DicePool, dice_used: DicePool) -> DicePool:
    """Multiset difference ``dice - dice_used``."""
    remaining = list(dice)
    for used in dice_used:
        if used in remaining:
            remaining.remove(used)
    return remaining


def distinct_dice(pool: DicePool) -> List[int]:
    """Distinct die values in first-seen order.

    Duplicates of a double branch identically, so the search only needs
    to try each value once.
    """
    return list(dict.fromkeys(pool))


def dice_to_string(pool: DicePool) -> str:
    """Convert a dice pool to readable string.

    Examples:
        >>> dice_to_string([3, 5])
        '3-5'
        >>> dice_to_string([4, 4, 4, 4])
        'Double 4s'
    """
    if len(pool) == 4 and len(set(pool)) == 1:
        return f"Double {pool[0]}s"
    return "-".join(str(d) for d in pool)
