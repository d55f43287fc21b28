"""Aggregation engine: points spent per category and in total.

Each entity is charged its cached real cost, falling back to its base
cost. Powers may be slots of a framework or compound power; a slot's
cost is already part of its container's price, so any power whose
``parent_id`` names another power in the same collection is left out.
A parent id that resolves to nothing in the collection does not hide
the entry.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from hero_ledger.catalog.definitions import RulesCatalog
from hero_ledger.core.config import CostSettings
from hero_ledger.core.logging import get_logger
from hero_ledger.engine.costs import price_power
from hero_ledger.models.character import Character, PricedEntity
from hero_ledger.models.results import CostBreakdown


logger = get_logger(__name__)


def category_total(entities: Iterable[PricedEntity]) -> int | float:
    """Flat sum of charged costs."""
    total: int | float = 0
    for entity in entities:
        total += entity.charged_cost
    return total


def contained_total(entities: Sequence[PricedEntity]) -> int | float:
    """Sum of charged costs, skipping entries contained by another entry.

    Membership is checked against the ids of this collection only, so a
    dangling or cross-collection ``parent_id`` still gets charged. Every
    nested entry names a parent in the collection, so grandchildren are
    excluded as well.

    Example:
        >>> contained_total([
        ...     Power(id="p1", base_cost=10),
        ...     Power(id="p2", base_cost=5, parent_id="p1"),
        ... ])
        10
    """
    ids = {entity.id for entity in entities if entity.id}
    total: int | float = 0
    for entity in entities:
        if entity.parent_id in ids and entity.parent_id != entity.id:
            logger.debug(
                "Contained entry excluded from total",
                entity_id=entity.id,
                parent_id=entity.parent_id,
            )
            continue
        total += entity.charged_cost
    return total


def characteristic_total(character: Character) -> int | float:
    return category_total(character.characteristics)


def skill_total(character: Character) -> int | float:
    return category_total(character.skills)


def perk_total(character: Character) -> int | float:
    return category_total(character.perks)


def talent_total(character: Character) -> int | float:
    return category_total(character.talents)


def martial_arts_total(character: Character) -> int | float:
    return category_total(character.martial_arts)


def power_total(character: Character) -> int | float:
    """Points spent on powers, counting framework slots once."""
    return contained_total(character.powers)


calculate_power_total = power_total


def repriced_power_total(
    character: Character,
    catalog: RulesCatalog | None = None,
    settings: CostSettings | None = None,
) -> int | float:
    """Points spent on powers, pricing each top-level power afresh.

    Unlike power_total, cached costs are ignored: containers are rolled
    up from their slots with price_power.

    Raises:
        InvalidModifierSumError: See cost_multiplier.
    """
    ids = {power.id for power in character.powers if power.id}
    total: int | float = 0
    for power in character.powers:
        if power.parent_id in ids and power.parent_id != power.id:
            continue
        total += price_power(power, character.powers, catalog, settings).real_cost
    return total


def cost_breakdown(character: Character) -> CostBreakdown:
    """Points spent in each priced category, plus the grand total."""
    breakdown = CostBreakdown(
        characteristics=characteristic_total(character),
        skills=skill_total(character),
        perks=perk_total(character),
        talents=talent_total(character),
        martial_arts=martial_arts_total(character),
        powers=power_total(character),
    )
    logger.debug("Cost breakdown computed", total=breakdown.total)
    return breakdown


def total_points_spent(character: Character) -> int | float:
    """Points spent across all six priced categories."""
    return cost_breakdown(character).total


# =============================================================================
# Equipment
# =============================================================================


def equipment_total(character: Character) -> int | float:
    """Points charged for every item, carried or not."""
    return category_total(character.equipment)


def equipment_price(character: Character) -> int | float:
    """Money value of every item; items without a price count as 0."""
    total: int | float = 0
    for item in character.equipment:
        total += item.price or 0
    return total


def carried_weight(character: Character) -> int | float:
    """Weight of the carried items; items without a weight count as 0."""
    total: int | float = 0
    for item in character.equipment:
        if item.carried:
            total += item.weight or 0
    return total


__all__ = [
    "category_total",
    "contained_total",
    "characteristic_total",
    "skill_total",
    "perk_total",
    "talent_total",
    "martial_arts_total",
    "power_total",
    "calculate_power_total",
    "repriced_power_total",
    "equipment_total",
    "equipment_price",
    "carried_weight",
    "cost_breakdown",
    "total_points_spent",
]
