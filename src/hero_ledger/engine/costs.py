"""Cost engine: active and real cost of a single priced entity.

Active cost applies advantages to the base cost; real cost applies
limitations to the active cost. Both round with round_for_cost.
Containers (lists, compound powers, compound equipment) cost what their
slots cost. Characteristics are priced per point above their starting
value.

A modifier total that would make the cost multiplier zero or negative
has no meaningful price. Depending on CostSettings the engine either
raises InvalidModifierSumError or clamps the multiplier and logs a
warning.
"""

from __future__ import annotations

import math
from collections.abc import Iterable, Sequence

from hero_ledger.catalog.definitions import RulesCatalog
from hero_ledger.catalog.pricing import catalog_base_cost, catalog_modifier_value
from hero_ledger.core.config import CostSettings, get_settings
from hero_ledger.core.constants import CHARACTERISTIC_COSTS, DEFAULT_CHARACTERISTIC_VALUES
from hero_ledger.core.exceptions import InvalidModifierSumError
from hero_ledger.core.logging import get_logger
from hero_ledger.engine.rounding import round_for_cost
from hero_ledger.models.character import (
    Adder,
    Characteristic,
    Equipment,
    Modifier,
    Power,
    PricedEntity,
)
from hero_ledger.models.enums import ModifierKind
from hero_ledger.models.results import PricedCost


logger = get_logger(__name__)


# =============================================================================
# Modifier Totals
# =============================================================================


def advantage_sum(modifiers: Iterable[Modifier] | None) -> float:
    """Sum the values of all advantages; missing values count as 0."""
    return sum((m.value or 0) for m in modifiers or () if m.is_advantage)


def limitation_sum(modifiers: Iterable[Modifier] | None) -> float:
    """Sum the magnitudes of all limitations; missing values count as 0."""
    return sum(abs(m.value or 0) for m in modifiers or () if m.is_limitation)


def cost_multiplier(
    modifier_sum: float,
    kind: ModifierKind,
    settings: CostSettings | None = None,
) -> float:
    """Turn a modifier total into the factor ``1 + modifier_sum``.

    Args:
        modifier_sum: Summed advantage values or limitation magnitudes.
        kind: Which side of the formula the total belongs to.
        settings: Cost policy; defaults to the configured one.

    Returns:
        The multiplier (advantages) or denominator (limitations).

    Raises:
        InvalidModifierSumError: If the factor is not positive and the
            policy is 'reject'.
    """
    multiplier = 1 + modifier_sum
    if multiplier > 0:
        return multiplier

    settings = settings or get_settings().cost
    if settings.invalid_modifier_policy == "reject":
        raise InvalidModifierSumError(
            f"{kind.value.capitalize()} total leaves no positive cost multiplier",
            modifier_sum=modifier_sum,
            denominator=multiplier,
            kind=kind.value,
        )

    logger.warning(
        "Modifier total clamped",
        kind=kind.value,
        modifier_sum=modifier_sum,
        multiplier=multiplier,
        clamped_to=settings.min_denominator,
    )
    return settings.min_denominator


# =============================================================================
# Cost Formulas
# =============================================================================


def active_cost(
    base_cost: float,
    modifiers: Iterable[Modifier] | None = None,
    settings: CostSettings | None = None,
) -> int:
    """Cost after advantages.

    Args:
        base_cost: Raw cost, including any adders.
        modifiers: The entity's modifiers; only advantages are read.
        settings: Cost policy; defaults to the configured one.

    Returns:
        ``round_for_cost(base_cost * (1 + advantage_sum))``.

    Raises:
        InvalidModifierSumError: See cost_multiplier.

    Example:
        >>> active_cost(60, [Modifier(value=0.5, is_advantage=True)])
        90
    """
    modifiers = list(modifiers or ())
    multiplier = cost_multiplier(advantage_sum(modifiers), ModifierKind.ADVANTAGE, settings)
    tolerance = (settings or get_settings().cost).rounding_tolerance
    return round_for_cost(base_cost * multiplier, tolerance)


def real_cost(
    active: int | float,
    modifiers: Iterable[Modifier] | None = None,
    settings: CostSettings | None = None,
) -> int | float:
    """Cost after limitations; what the character's budget is charged.

    Without limitations the active cost is returned untouched.

    Args:
        active: The active cost.
        modifiers: The entity's modifiers; only limitations are read.
        settings: Cost policy; defaults to the configured one.

    Returns:
        ``round_for_cost(active / (1 + limitation_sum))``.

    Raises:
        InvalidModifierSumError: See cost_multiplier.

    Example:
        >>> real_cost(90, [Modifier(value=-0.25, is_limitation=True)])
        72
    """
    total = limitation_sum(modifiers)
    if total == 0:
        return active
    denominator = cost_multiplier(total, ModifierKind.LIMITATION, settings)
    tolerance = (settings or get_settings().cost).rounding_tolerance
    return round_for_cost(active / denominator, tolerance)


def adder_cost(adders: Iterable[Adder] | None) -> int | float:
    """Linear sum of ``base_cost + levels * lvl_cost`` over the adders."""
    total: int | float = 0
    for adder in adders or ():
        total += adder.total_cost
    return total


# =============================================================================
# Whole-Entity Pricing
# =============================================================================


def resolve_modifiers(
    modifiers: Sequence[Modifier],
    catalog: RulesCatalog | None,
) -> list[Modifier]:
    """Fill in modifier values and sides the document left out.

    A modifier without a value takes the value its catalog definition
    computes for the chosen option, levels and adders. A modifier marked
    neither advantage nor limitation takes its side from the catalog.
    Modifiers the catalog does not know are returned unchanged.
    """
    if catalog is None:
        return list(modifiers)

    resolved = []
    for modifier in modifiers:
        definition = catalog.modifier(modifier.xml_id)
        if definition is None:
            resolved.append(modifier)
            continue

        update: dict[str, object] = {}
        if modifier.value is None:
            update["value"] = catalog_modifier_value(
                definition,
                option_id=modifier.option_id,
                levels=modifier.levels,
                adders=modifier.adders,
            )
        if not modifier.is_advantage and not modifier.is_limitation:
            update["is_advantage"] = definition.is_advantage
            update["is_limitation"] = definition.is_limitation
        resolved.append(modifier.model_copy(update=update) if update else modifier)
    return resolved


def price_entity(
    entity: PricedEntity,
    catalog: RulesCatalog | None = None,
    settings: CostSettings | None = None,
    *,
    inherited: Sequence[Modifier] = (),
) -> PricedCost:
    """Price one entity from its document fields and the rules catalog.

    When the entity's ``xml_id`` (or ``type``) names a catalog power and
    the entity has levels, the base cost comes from the catalog;
    otherwise the document's ``base_cost`` is used. Adders are added to
    the base before advantages apply.

    Args:
        entity: The power, skill or other priced entity.
        catalog: Rules catalog for base costs and modifier values. When
            None, only the values stored in the document are used.
        settings: Cost policy; defaults to the configured one.
        inherited: Modifiers of the list the entity sits in. They count
            alongside the entity's own modifiers.

    Returns:
        The base, adder, active and real cost.

    Raises:
        InvalidModifierSumError: See cost_multiplier.
    """
    base: int | float = entity.base_cost
    if catalog is not None and entity.levels is not None:
        definition = catalog.power(entity.xml_id) or catalog.power(entity.type)
        if definition is not None:
            base = catalog_base_cost(definition, entity.levels, entity.option_id)

    adders = adder_cost(entity.adders)
    modifiers = resolve_modifiers([*entity.modifiers, *inherited], catalog)
    active = active_cost(base + adders, modifiers, settings)
    real = real_cost(active, modifiers, settings)

    logger.debug(
        "Entity priced",
        entity_id=entity.id,
        base_cost=base,
        adder_cost=adders,
        active_cost=active,
        real_cost=real,
    )
    return PricedCost(base_cost=base, adder_cost=adders, active_cost=active, real_cost=real)


# =============================================================================
# Containers
# =============================================================================


def rollup_cost(costs: Iterable[PricedCost]) -> PricedCost:
    """Price of a container: the summed active and real cost of its slots.

    The summed active cost is also reported as the container's base cost.
    """
    active = 0
    real = 0
    for cost in costs:
        active += cost.active_cost
        real += cost.real_cost
    return PricedCost(base_cost=active, active_cost=active, real_cost=real)


def list_discount(container: Power) -> int | float:
    """Reduction to each slot's real cost from a list's first negative adder."""
    return next((adder.base_cost for adder in container.adders if adder.base_cost < 0), 0)


def _children_by_parent(powers: Iterable[Power]) -> dict[str, list[Power]]:
    children: dict[str, list[Power]] = {}
    for power in powers:
        if power.parent_id and power.parent_id != power.id:
            children.setdefault(power.parent_id, []).append(power)
    return children


def _price_tree(
    power: Power,
    children: dict[str, list[Power]],
    catalog: RulesCatalog | None,
    settings: CostSettings | None,
    inherited: tuple[Modifier, ...],
    path: frozenset[str],
) -> PricedCost:
    slots = [slot for slot in children.get(power.id, ()) if slot.id not in path]
    if not (slots or power.is_list or power.is_compound):
        return price_entity(power, catalog, settings, inherited=inherited)

    discount: int | float = 0
    if power.is_list:
        inherited = (*inherited, *power.modifiers)
        discount = list_discount(power)

    priced = []
    for slot in slots:
        cost = _price_tree(slot, children, catalog, settings, inherited, path | {power.id})
        if discount:
            reduced = round_for_cost(max(0, cost.real_cost + discount))
            cost = cost.model_copy(update={"real_cost": reduced})
        priced.append(cost)

    total = rollup_cost(priced)
    logger.debug(
        "Container priced",
        entity_id=power.id,
        slots=len(priced),
        active_cost=total.active_cost,
        real_cost=total.real_cost,
    )
    return total


def price_power(
    power: Power,
    powers: Sequence[Power],
    catalog: RulesCatalog | None = None,
    settings: CostSettings | None = None,
) -> PricedCost:
    """Price a power, rolling containers up from their slots.

    A list, a compound power, or any power that others name as their
    parent costs what its slots cost. Slots of a list count the list's
    modifiers alongside their own, and a list's discount adder lowers
    each slot's real cost, never below 0. Slots of slots are rolled up
    the same way. Every other power is priced by price_entity.

    Args:
        power: The power to price.
        powers: The character's flat power list, where slots are found.
        catalog: Rules catalog; see price_entity.
        settings: Cost policy; defaults to the configured one.

    Returns:
        The power's price.

    Raises:
        InvalidModifierSumError: See cost_multiplier.

    Example:
        >>> powers = [
        ...     Power(id="mp", type="LIST", modifiers=[Modifier(value=-1, is_limitation=True)]),
        ...     Power(id="a", base_cost=30, parent_id="mp"),
        ...     Power(id="b", base_cost=20, parent_id="mp"),
        ... ]
        >>> price_power(powers[0], powers).real_cost
        25
    """
    inherited: tuple[Modifier, ...] = ()
    parent = next(
        (p for p in powers if p.id and p.id == power.parent_id and p is not power),
        None,
    )
    if parent is not None and parent.is_list:
        inherited = tuple(parent.modifiers)
    return _price_tree(
        power, _children_by_parent(powers), catalog, settings, inherited, frozenset()
    )


def price_equipment(
    item: Equipment,
    catalog: RulesCatalog | None = None,
    settings: CostSettings | None = None,
) -> PricedCost:
    """Price an item; a compound item costs what its component powers cost."""
    if not item.is_compound:
        return price_entity(item, catalog, settings)
    ids = {power.id for power in item.sub_powers if power.id}
    return rollup_cost(
        price_power(power, item.sub_powers, catalog, settings)
        for power in item.sub_powers
        if power.parent_id not in ids or power.parent_id == power.id
    )


# =============================================================================
# Characteristics
# =============================================================================


def characteristic_cost(code: str, value: int | float) -> int:
    """Points to raise a characteristic from its starting value to ``value``.

    Each point above the start costs the characteristic's rate, with
    the total rounded up. Values below the start give points back.
    Unknown codes cost nothing.

    Example:
        >>> characteristic_cost("DEX", 18)
        16
        >>> characteristic_cost("STUN", 25)
        3
    """
    code = code.upper()
    rate = CHARACTERISTIC_COSTS.get(code)
    if rate is None:
        return 0
    levels = value - DEFAULT_CHARACTERISTIC_VALUES[code]
    # 15 * 0.2 is 3.0000000000000004 in floating point
    return math.ceil(round(levels * rate, 6))


def price_characteristic(characteristic: Characteristic) -> PricedCost:
    """Price a bought characteristic from its total value.

    Without a total value the value is the starting value plus the
    levels bought.
    """
    code = characteristic.type.upper()
    value = characteristic.total_value
    if value is None:
        start = characteristic.base_value
        if start is None:
            start = DEFAULT_CHARACTERISTIC_VALUES.get(code, 0)
        value = start + (characteristic.levels or 0)

    cost = characteristic_cost(code, value)
    logger.debug("Characteristic priced", code=code, value=value, cost=cost)
    return PricedCost(base_cost=cost, active_cost=cost, real_cost=cost)


__all__ = [
    "advantage_sum",
    "limitation_sum",
    "cost_multiplier",
    "active_cost",
    "real_cost",
    "adder_cost",
    "resolve_modifiers",
    "price_entity",
    "rollup_cost",
    "list_discount",
    "price_power",
    "price_equipment",
    "characteristic_cost",
    "price_characteristic",
]
