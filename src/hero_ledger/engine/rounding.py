"""Rounding rules for cost and effect values.

Costs and effects round to the nearest whole number but break exact
halves in opposite directions: a half point of cost rounds down, a half
point of effect rounds up. Both favor the player.

The fractional part usually comes out of a floating-point division, so
"exactly one half" is tested within a tolerance.
"""

from __future__ import annotations

import math

from hero_ledger.core.constants import ROUNDING_TOLERANCE


def _is_half(value: float, tolerance: float) -> bool:
    return abs((value - math.floor(value)) - 0.5) < tolerance


def round_for_cost(value: float, tolerance: float = ROUNDING_TOLERANCE) -> int:
    """Round a cost to the nearest whole point, halves down.

    Args:
        value: The unrounded cost.
        tolerance: Distance from .5 still treated as an exact half.

    Returns:
        The rounded cost.

    Example:
        >>> round_for_cost(22.5)
        22
        >>> round_for_cost(22.6)
        23
    """
    if _is_half(value, tolerance):
        return math.floor(value)
    return math.floor(value + 0.5)


def round_for_effect(value: float, tolerance: float = ROUNDING_TOLERANCE) -> int:
    """Round an effect to the nearest whole number, halves up.

    Args:
        value: The unrounded effect.
        tolerance: Distance from .5 still treated as an exact half.

    Returns:
        The rounded effect.

    Example:
        >>> round_for_effect(22.5)
        23
    """
    if _is_half(value, tolerance):
        return math.ceil(value)
    return math.floor(value + 0.5)


__all__ = [
    "round_for_cost",
    "round_for_effect",
]
