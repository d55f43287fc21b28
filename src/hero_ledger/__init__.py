"""Hero Ledger - point accounting and stat derivation for HERO System sheets.

A pure computation library: the host application loads a character
document, hands it to the engine, and displays what comes back.

- Costs: active and real cost of every power, skill and perk
- Budget: points spent per category and points still available
- Stats: characteristics, defenses and movement after powers and gear

Example:
    >>> from hero_ledger import Character, character_summary, effective_stats
    >>>
    >>> character = Character.from_document(document)
    >>> summary = character_summary(character)
    >>> print(summary.available)
    >>>
    >>> stats = effective_stats(character)
    >>> print(stats["STR"].total, stats["STR"].sources)

Modules:
    core: Configuration, logging, and base exceptions.
    models: Pydantic V2 schemas for documents and results.
    catalog: Read-only rules catalog of powers and modifiers.
    engine: Cost, aggregation, availability and derivation logic.
"""

from __future__ import annotations

# Core
from hero_ledger.core.config import Settings, get_settings
from hero_ledger.core.exceptions import HeroLedgerError, InvalidModifierSumError
from hero_ledger.core.logging import configure_logging, get_logger

# Models
from hero_ledger.models import (
    Character,
    CostBreakdown,
    EffectiveCharacteristic,
    EffectiveStat,
    PointSummary,
    PricedCost,
    StatModification,
)

# Catalog
from hero_ledger.catalog import RulesCatalog, get_default_catalog, load_catalog

# Engine
from hero_ledger.engine import (
    active_cost,
    available_points,
    calculate_power_total,
    character_summary,
    cost_breakdown,
    derive_stat_modifications,
    effective_characteristic,
    effective_stats,
    price_entity,
    price_equipment,
    price_power,
    real_cost,
    round_for_cost,
    round_for_effect,
    stat_total,
    total_points_spent,
)


__version__ = "0.1.0"
__all__ = [
    # Version info
    "__version__",
    # Core
    "HeroLedgerError",
    "InvalidModifierSumError",
    "Settings",
    "get_settings",
    "configure_logging",
    "get_logger",
    # Models
    "Character",
    "CostBreakdown",
    "EffectiveCharacteristic",
    "EffectiveStat",
    "PointSummary",
    "PricedCost",
    "StatModification",
    # Catalog
    "RulesCatalog",
    "get_default_catalog",
    "load_catalog",
    # Engine
    "active_cost",
    "available_points",
    "calculate_power_total",
    "character_summary",
    "cost_breakdown",
    "derive_stat_modifications",
    "effective_characteristic",
    "effective_stats",
    "price_entity",
    "price_equipment",
    "price_power",
    "real_cost",
    "round_for_cost",
    "round_for_effect",
    "stat_total",
    "total_points_spent",
]
