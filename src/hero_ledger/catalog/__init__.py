"""Rules catalog: read-only definitions of powers and modifiers.

Exports:
    Definitions:
        RulesCatalog: Lookup of definitions by catalog id.
        PowerDefinition, ModifierDefinition: Catalog entries.
        CatalogOption, CatalogAdder: Entry parts.

    Loading:
        load_catalog: Load a catalog from a JSON file.
        get_default_catalog: Configured or bundled catalog, loaded once.

    Pricing:
        catalog_base_cost: Raw cost of a power at a number of levels.
        catalog_modifier_value: Value of a configured modifier.
        format_modifier_value: Rulebook rendering of a modifier value.
"""

from __future__ import annotations

from hero_ledger.catalog.definitions import (
    CatalogAdder,
    CatalogOption,
    ModifierDefinition,
    PowerDefinition,
    RulesCatalog,
)
from hero_ledger.catalog.loader import (
    clear_catalog_cache,
    get_default_catalog,
    load_bundled_catalog,
    load_catalog,
    parse_catalog,
)
from hero_ledger.catalog.pricing import (
    catalog_base_cost,
    catalog_modifier_value,
    format_modifier_value,
)


__all__ = [
    # Definitions
    "CatalogAdder",
    "CatalogOption",
    "ModifierDefinition",
    "PowerDefinition",
    "RulesCatalog",
    # Loading
    "clear_catalog_cache",
    "get_default_catalog",
    "load_bundled_catalog",
    "load_catalog",
    "parse_catalog",
    # Pricing
    "catalog_base_cost",
    "catalog_modifier_value",
    "format_modifier_value",
]
