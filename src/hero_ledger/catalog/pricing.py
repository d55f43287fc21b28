"""Cost helpers that read prices straight from catalog definitions."""

from __future__ import annotations

from collections.abc import Iterable
from fractions import Fraction

from hero_ledger.catalog.definitions import ModifierDefinition, PowerDefinition
from hero_ledger.models.character import Adder


def catalog_base_cost(
    definition: PowerDefinition,
    levels: int,
    option_id: str | None = None,
) -> float:
    """Raw cost of a catalog power bought at the given number of levels.

    A chosen option replaces the definition's flat base cost; every level
    then adds ``lvl_cost``.

    Args:
        definition: The power's catalog entry.
        levels: Levels bought.
        option_id: Selected option, if the power offers a choice.

    Returns:
        The raw cost before adders and modifiers.

    Example:
        >>> blast = PowerDefinition(xml_id="ENERGYBLAST", lvl_cost=5)
        >>> catalog_base_cost(blast, 12)
        60.0
    """
    option = definition.option(option_id)
    base = option.base_cost if option is not None else definition.base_cost
    return base + definition.lvl_cost * levels


def catalog_modifier_value(
    definition: ModifierDefinition,
    option_id: str | None = None,
    levels: int | None = None,
    adders: Iterable[Adder] = (),
) -> float:
    """Fractional value of a modifier as configured on an entity.

    When the modifier has a non-zero base value the first level is
    included in it, so each level beyond the first adds ``lvl_cost``;
    otherwise every level adds ``lvl_cost``. Adders the definition does
    not know are ignored.

    Args:
        definition: The modifier's catalog entry.
        option_id: Selected option; its base value replaces the
            definition's.
        levels: Levels bought, for leveled modifiers.
        adders: Adders attached to the modifier in the document.

    Returns:
        The signed modifier value (for example ``0.5`` or ``-0.25``).
    """
    total = definition.base_cost
    option = definition.option(option_id)
    if option is not None:
        total = option.base_cost

    if levels and definition.has_levels and definition.lvl_cost:
        included = 1 if total else 0
        total += definition.lvl_cost * (levels - included)

    for adder in adders:
        adder_definition = definition.adder(adder.xml_id or "")
        if adder_definition is None:
            continue
        adder_option = next(
            (o for o in adder_definition.options if o.xml_id == adder.option_id),
            None,
        )
        if adder.option_id and adder_option is not None:
            total += adder_option.base_cost
            continue
        total += adder_definition.base_cost
        if adder.levels and adder_definition.lvl_cost:
            total += adder_definition.lvl_cost * (adder.levels - 1)

    return total


def format_modifier_value(value: float) -> str:
    """Render a modifier value the way rulebooks print it.

    Args:
        value: Signed fractional value.

    Returns:
        ``"0"`` for zero, otherwise a signed whole-and-fraction string.

    Example:
        >>> format_modifier_value(0.25)
        '+1/4'
        >>> format_modifier_value(-1.5)
        '-1 1/2'
    """
    if value == 0:
        return "0"

    sign = "+" if value > 0 else "-"
    magnitude = Fraction(abs(value)).limit_denominator(4)
    if abs(float(magnitude) - abs(value)) > 1e-9:
        # Not a quarter step; print the decimal
        return f"{sign}{abs(value):g}"
    whole, remainder = divmod(magnitude.numerator, magnitude.denominator)
    if remainder == 0:
        return f"{sign}{whole}"

    fraction = f"{remainder}/{magnitude.denominator}"
    if whole == 0:
        return f"{sign}{fraction}"
    return f"{sign}{whole} {fraction}"


__all__ = [
    "catalog_base_cost",
    "catalog_modifier_value",
    "format_modifier_value",
]
