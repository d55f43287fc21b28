"""Core module providing configuration, logging, and base exceptions.

Exports:
    Exceptions:
        HeroLedgerError: Base exception for all engine errors.
        InvalidModifierSumError: Modifiers produced a non-positive multiplier.
        CatalogError and subclasses: Rules catalog failures.
        ConfigurationError: Configuration-related errors.

    Configuration:
        Settings: Main settings class.
        get_settings: Get the settings singleton.
        clear_settings_cache: Force settings reload.

    Logging:
        configure_logging: Set up logging.
        get_logger: Get a configured logger instance.
        character_context: Tag log events with the character evaluated.
"""

from __future__ import annotations

from hero_ledger.core.config import (
    CatalogSettings,
    CostSettings,
    Settings,
    clear_settings_cache,
    get_settings,
)
from hero_ledger.core.exceptions import (
    CatalogError,
    CatalogLoadError,
    ConfigurationError,
    CostEngineError,
    HeroLedgerError,
    InvalidModifierSumError,
    UnknownCatalogEntryError,
    ValidationError,
)
from hero_ledger.core.logging import (
    character_context,
    configure_logging,
    get_logger,
)


__all__ = [
    # Base exception
    "HeroLedgerError",
    # Catalog exceptions
    "CatalogError",
    "CatalogLoadError",
    "UnknownCatalogEntryError",
    # Cost exceptions
    "CostEngineError",
    "InvalidModifierSumError",
    # Configuration exceptions
    "ConfigurationError",
    "ValidationError",
    # Configuration
    "Settings",
    "CostSettings",
    "CatalogSettings",
    "get_settings",
    "clear_settings_cache",
    # Logging
    "configure_logging",
    "get_logger",
    "character_context",
]
