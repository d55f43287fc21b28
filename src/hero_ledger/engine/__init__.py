"""Point accounting and stat derivation engine.

Every function here is a pure computation over a Character (or a single
priced entity) and returns plain, serialisable results.

Submodules:
    rounding: Half-down cost rounding and half-up effect rounding
    costs: Active, real and adder cost; containers and characteristics
    aggregation: Points spent per category, counting framework slots once
    availability: Points remaining from base, experience and complications
    derivation: Stat modifications granted by powers and equipment
    dice: Dice notation, damage classes and STR-derived figures

Example:
    >>> from hero_ledger.engine import available_points, derive_stat_modifications
    >>> character = Character.from_document(document)
    >>> available_points(character)
    170
"""

from __future__ import annotations

# =============================================================================
# Rounding & Costs
# =============================================================================
from hero_ledger.engine.rounding import round_for_cost, round_for_effect
from hero_ledger.engine.costs import (
    active_cost,
    adder_cost,
    advantage_sum,
    characteristic_cost,
    cost_multiplier,
    limitation_sum,
    list_discount,
    price_characteristic,
    price_entity,
    price_equipment,
    price_power,
    real_cost,
    resolve_modifiers,
    rollup_cost,
)

# =============================================================================
# Aggregation & Availability
# =============================================================================
from hero_ledger.engine.aggregation import (
    calculate_power_total,
    carried_weight,
    category_total,
    characteristic_total,
    contained_total,
    cost_breakdown,
    equipment_price,
    equipment_total,
    martial_arts_total,
    perk_total,
    power_total,
    repriced_power_total,
    skill_total,
    talent_total,
    total_points_spent,
)
from hero_ledger.engine.availability import (
    available_points,
    character_summary,
    disadvantage_total,
    disadvantages_earned,
    total_points,
)

# =============================================================================
# Stat Derivation
# =============================================================================
from hero_ledger.engine.derivation import (
    DERIVATION_RULES,
    DefenseCandidates,
    DerivationRule,
    base_characteristic,
    derive_stat_modifications,
    effective_characteristic,
    effective_stats,
    match_rules,
    stat_total,
)
from hero_ledger.engine.dice import (
    characteristic_roll,
    damage_classes,
    format_with_sign,
    hth_damage,
    lift_capacity,
    parse_dice_notation,
    power_damage_classes,
)


__all__ = [
    # Rounding
    "round_for_cost",
    "round_for_effect",
    # Costs
    "active_cost",
    "adder_cost",
    "advantage_sum",
    "characteristic_cost",
    "cost_multiplier",
    "limitation_sum",
    "list_discount",
    "price_characteristic",
    "price_entity",
    "price_equipment",
    "price_power",
    "real_cost",
    "resolve_modifiers",
    "rollup_cost",
    # Aggregation
    "calculate_power_total",
    "carried_weight",
    "category_total",
    "characteristic_total",
    "contained_total",
    "cost_breakdown",
    "equipment_price",
    "equipment_total",
    "martial_arts_total",
    "perk_total",
    "power_total",
    "repriced_power_total",
    "skill_total",
    "talent_total",
    "total_points_spent",
    # Availability
    "available_points",
    "character_summary",
    "disadvantage_total",
    "disadvantages_earned",
    "total_points",
    # Derivation
    "DERIVATION_RULES",
    "DefenseCandidates",
    "DerivationRule",
    "base_characteristic",
    "derive_stat_modifications",
    "effective_characteristic",
    "effective_stats",
    "match_rules",
    "stat_total",
    # Dice
    "characteristic_roll",
    "damage_classes",
    "format_with_sign",
    "hth_damage",
    "lift_capacity",
    "parse_dice_notation",
    "power_damage_classes",
]
