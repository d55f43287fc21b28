"""Availability calculator: points a character still has to spend."""

from __future__ import annotations

from hero_ledger.core.logging import character_context, get_logger
from hero_ledger.engine.aggregation import cost_breakdown, total_points_spent
from hero_ledger.models.character import Character
from hero_ledger.models.results import PointSummary


logger = get_logger(__name__)


def disadvantage_total(character: Character) -> int | float:
    """Points offered by every complication on the sheet."""
    total: int | float = 0
    for disadvantage in character.disadvantages:
        total += disadvantage.points
    return total


def disadvantages_earned(character: Character) -> int | float:
    """Complication points actually granted, capped by the campaign limit."""
    return min(disadvantage_total(character), character.basic_configuration.disad_points)


def total_points(character: Character) -> int | float:
    """Every point the character has to spend: base, experience and complications."""
    config = character.basic_configuration
    return config.base_points + config.experience + disadvantages_earned(character)


def available_points(character: Character) -> int | float:
    """Points left after spending; negative when the sheet is overspent.

    Example:
        >>> character = Character.from_document({
        ...     "basicConfiguration": {"basePoints": 400, "disadPoints": 150},
        ...     "disadvantages": [{"points": 200}],
        ...     "skills": [{"baseCost": 380}],
        ... })
        >>> available_points(character)
        170
    """
    return total_points(character) - total_points_spent(character)


def character_summary(character: Character) -> PointSummary:
    """Full point accounting for a character.

    Args:
        character: The character to account for.

    Returns:
        Where the points come from, where they went and what is left.
    """
    config = character.basic_configuration
    with character_context(character.character_info.character_name):
        breakdown = cost_breakdown(character)
        earned = disadvantages_earned(character)
        available = config.base_points + config.experience + earned - breakdown.total

        summary = PointSummary(
            base_points=config.base_points,
            experience=config.experience,
            disadvantages_total=disadvantage_total(character),
            disadvantages_earned=earned,
            spent=breakdown.total,
            available=available,
            breakdown=breakdown,
        )
        logger.info(
            "Character points summarized",
            spent=summary.spent,
            available=summary.available,
        )
    return summary


__all__ = [
    "disadvantage_total",
    "disadvantages_earned",
    "total_points",
    "available_points",
    "character_summary",
]
