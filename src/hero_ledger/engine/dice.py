"""Dice notation and the figures derived from characteristics.

Parsing never raises: a damage field a player is still typing must not
stop the rest of the sheet from being computed, so unparseable notation
comes back as the neutral DiceNotation().
"""

from __future__ import annotations

import re
from typing import Any

from hero_ledger.core.constants import (
    CHAR_ROLL_BASE,
    CHAR_ROLL_DENOMINATOR,
    LIFT_BEYOND_TABLE,
    LIFT_TABLE,
)
from hero_ledger.core.logging import get_logger
from hero_ledger.models.character import Power
from hero_ledger.models.results import DiceNotation


logger = get_logger(__name__)

DICE_PATTERN = re.compile(r"^(\d+)d(\d+)([+-]\d+)?(.*)$", re.IGNORECASE)

STR_PER_DIE = 5
KILLING_DC_PER_DIE = 3


def parse_dice_notation(notation: Any) -> DiceNotation:
    """Parse ``NdS[+M][suffix]`` notation such as ``"4d6 AVAD"``.

    Args:
        notation: The text to parse.

    Returns:
        The parsed notation, or ``DiceNotation()`` (0d6+0) when the text
        is not dice notation.

    Example:
        >>> parse_dice_notation("2d6+1")
        DiceNotation(dice=2, sides=6, modifier=1, suffix='')
    """
    if not isinstance(notation, str):
        return DiceNotation()

    match = DICE_PATTERN.match(notation.strip())
    if match is None:
        logger.debug("Unparseable dice notation", notation=notation)
        return DiceNotation()

    dice, sides, modifier, suffix = match.groups()
    return DiceNotation(
        dice=int(dice),
        sides=int(sides),
        modifier=int(modifier) if modifier else 0,
        suffix=suffix.strip(),
    )


def damage_classes(dice: int, killing: bool = False) -> int:
    """Damage classes of an attack; killing dice are worth three each."""
    return dice * KILLING_DC_PER_DIE if killing else dice


def power_damage_classes(power: Power) -> int:
    """Damage classes of a power's effect dice; 0 when it has none.

    Example:
        >>> power_damage_classes(Power(effect_dice="2d6+1", killing=True))
        6
    """
    return damage_classes(parse_dice_notation(power.effect_dice).dice, power.killing)


def characteristic_roll(
    value: int | float,
    roll_base: int = CHAR_ROLL_BASE,
    roll_denominator: int = CHAR_ROLL_DENOMINATOR,
) -> int:
    """Success roll for a characteristic-based skill (9 + value/5).

    Example:
        >>> characteristic_roll(18)
        12
    """
    return roll_base + int(value // roll_denominator)


def format_with_sign(value: int | float) -> str:
    """Render a number with an explicit sign; zero is ``"+0"``."""
    return f"+{value}" if value >= 0 else f"{value}"


def hth_damage(strength: int) -> str:
    """Hand-to-hand damage of a punch at the given STR.

    Every 5 STR is 1d6. A remainder of 1 or 2 adds pips, 3 adds a half
    die, 4 rounds up to the next die less one pip.

    Example:
        >>> hth_damage(23)
        '4½d6'
    """
    strength = int(strength)
    if strength <= 0:
        return "0d6"

    full_dice, remainder = divmod(strength, STR_PER_DIE)
    if remainder == 0:
        return f"{full_dice}d6"
    if remainder in (1, 2):
        return f"{full_dice}d6+{remainder}" if full_dice > 0 else f"+{remainder}"
    if remainder == 3:
        return f"{full_dice}½d6" if full_dice > 0 else "½d6"
    return f"{full_dice + 1}d6-1"


def lift_capacity(strength: int) -> str:
    """Maximum lift at the given STR."""
    strength = int(strength)
    if strength <= 0:
        return "0 kg"
    for threshold, lift in LIFT_TABLE:
        if strength <= threshold:
            return lift
    return LIFT_BEYOND_TABLE


__all__ = [
    "parse_dice_notation",
    "damage_classes",
    "power_damage_classes",
    "characteristic_roll",
    "format_with_sign",
    "hth_damage",
    "lift_capacity",
]
