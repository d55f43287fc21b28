"""Result models returned by the engine.

Every result is a frozen value with no references back into the input
document, so it can be handed across a process boundary unchanged.
``model_dump(by_alias=True)`` yields the camelCase wire shape.
"""

from __future__ import annotations

from pydantic import Field, computed_field

from hero_ledger.models.base import DocumentModel


class StatModification(DocumentModel):
    """A provenance-tagged change to a named statistic.

    Attributes:
        source: Display name of the power or item responsible.
        stat: Characteristic code or derived stat name (``"rPD"``, ...).
        amount: Signed change.
        active: Whether the change currently applies.
    """

    source: str
    stat: str
    amount: int
    active: bool = True


class PricedCost(DocumentModel):
    """Full price of a single priced entity.

    Attributes:
        base_cost: Raw cost before adders and modifiers.
        adder_cost: Total contributed by the entity's adders.
        active_cost: Cost after advantages.
        real_cost: Cost after limitations; what the budget is charged.
    """

    base_cost: int | float
    adder_cost: int | float = 0
    active_cost: int
    real_cost: int


class CostBreakdown(DocumentModel):
    """Points spent per priced category of a character."""

    characteristics: int | float = 0
    skills: int | float = 0
    perks: int | float = 0
    talents: int | float = 0
    martial_arts: int | float = 0
    powers: int | float = 0

    @computed_field  # type: ignore[prop-decorator]
    @property
    def total(self) -> int | float:
        """Grand total across all categories."""
        return (
            self.characteristics
            + self.skills
            + self.perks
            + self.talents
            + self.martial_arts
            + self.powers
        )


class PointSummary(DocumentModel):
    """Where a character's points come from and where they went.

    Attributes:
        base_points: Campaign starting points.
        experience: Experience awarded.
        disadvantages_total: Points offered by all complications.
        disadvantages_earned: Complication points actually granted (capped).
        spent: Points spent across all categories.
        available: Points left to spend (negative when overspent).
        breakdown: Per-category spending.
    """

    base_points: int | float
    experience: int | float
    disadvantages_total: int | float
    disadvantages_earned: int | float
    spent: int | float
    available: int | float
    breakdown: CostBreakdown


class EffectiveCharacteristic(DocumentModel):
    """A characteristic's stored value plus bonuses from powers and items."""

    base: int | float
    bonus: int
    effective: int | float


class EffectiveStat(DocumentModel):
    """A statistic with every contribution listed.

    Attributes:
        stat: Characteristic code or derived stat name.
        base: Stored (or default) value before bonuses.
        bonus: Sum of active modifications.
        total: ``base + bonus``.
        sources: One ``"<source>: +N"`` line per modification.
    """

    stat: str
    base: int | float = 0
    bonus: int = 0
    total: int | float = 0
    sources: tuple[str, ...] = Field(default_factory=tuple)


class DiceNotation(DocumentModel):
    """A parsed ``NdS+M`` dice expression.

    Attributes:
        dice: Number of dice (0 when the notation could not be parsed).
        sides: Sides per die.
        modifier: Flat modifier.
        suffix: Trailing text such as ``"AVAD"``.
    """

    dice: int = 0
    sides: int = 6
    modifier: int = 0
    suffix: str = ""


__all__ = [
    "StatModification",
    "PricedCost",
    "CostBreakdown",
    "PointSummary",
    "EffectiveCharacteristic",
    "EffectiveStat",
    "DiceNotation",
]
