"""Configuration management for the Hero Ledger engine.

Centralized configuration using pydantic-settings, supporting environment
variables, .env files, and explicit overrides. The engine functions
accept these settings objects as arguments; get_settings() only supplies
the default when a caller passes nothing.

Example:
    >>> from hero_ledger.core.config import get_settings
    >>> settings = get_settings()
    >>> settings.cost.invalid_modifier_policy
    'reject'

Environment Variables:
    HERO_LEDGER_LOG_LEVEL: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    HERO_LEDGER_JSON_LOGS: Render logs as JSON lines
    HERO_LEDGER_COST_INVALID_MODIFIER_POLICY: 'reject' or 'clamp'
    HERO_LEDGER_COST_MIN_DENOMINATOR: Smallest multiplier used when clamping
    HERO_LEDGER_CATALOG_CATALOG_PATH: JSON rules catalog replacing the bundled one
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from hero_ledger.core.constants import ROUNDING_TOLERANCE
from hero_ledger.core.exceptions import ConfigurationError


class CostSettings(BaseSettings):
    """Policy knobs for the cost engine.

    Attributes:
        invalid_modifier_policy: What to do when modifiers produce a
            non-positive multiplier. 'reject' raises
            InvalidModifierSumError; 'clamp' raises the multiplier to
            min_denominator and carries on.
        min_denominator: Floor applied to the multiplier under 'clamp'.
        rounding_tolerance: Distance from .5 still treated as a half.
    """

    model_config = SettingsConfigDict(
        env_prefix="HERO_LEDGER_COST_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    invalid_modifier_policy: Literal["reject", "clamp"] = Field(
        default="reject",
        description="Handling of non-positive cost multipliers",
    )
    min_denominator: float = Field(
        default=0.01,
        description="Smallest multiplier used when clamping",
    )
    rounding_tolerance: float = Field(
        default=ROUNDING_TOLERANCE,
        description="Tolerance for detecting an exact half",
    )

    @model_validator(mode="after")
    def validate_bounds(self) -> "CostSettings":
        """Ensure the clamp floor and rounding tolerance are usable.

        Returns:
            Self if validation passes.

        Raises:
            ConfigurationError: If either value is out of range.
        """
        if self.min_denominator <= 0:
            raise ConfigurationError(
                f"min_denominator must be positive, got {self.min_denominator}",
                config_key="min_denominator",
            )
        if not 0 < self.rounding_tolerance < 0.5:
            raise ConfigurationError(
                f"rounding_tolerance must be between 0 and 0.5, got {self.rounding_tolerance}",
                config_key="rounding_tolerance",
            )
        return self


class CatalogSettings(BaseSettings):
    """Where the rules catalog comes from.

    Attributes:
        catalog_path: JSON file replacing the bundled catalog. When
            unset, the catalog shipped with the package is used.
    """

    model_config = SettingsConfigDict(
        env_prefix="HERO_LEDGER_CATALOG_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    catalog_path: Path | None = Field(
        default=None,
        description="Path to a JSON rules catalog",
    )


class Settings(BaseSettings):
    """Main settings aggregating all configuration domains.

    Attributes:
        app_name: Application name used in log context.
        debug: Enable debug mode.
        log_level: Application logging level.
        json_logs: Render logs as JSON lines.
        cost: Cost engine policy.
        catalog: Rules catalog source.
    """

    model_config = SettingsConfigDict(
        env_prefix="HERO_LEDGER_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        env_nested_delimiter="__",
    )

    app_name: str = Field(
        default="Hero Ledger",
        description="Application name",
    )
    debug: bool = Field(
        default=False,
        description="Enable debug mode",
    )
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        description="Logging level",
    )
    json_logs: bool = Field(
        default=False,
        description="Render logs as JSON lines",
    )

    cost: CostSettings = Field(default_factory=CostSettings)
    catalog: CatalogSettings = Field(default_factory=CatalogSettings)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get the settings singleton.

    Returns:
        The application Settings instance.

    Raises:
        ConfigurationError: If configuration is missing or invalid.
    """
    try:
        return Settings()
    except ConfigurationError:
        raise
    except Exception as exc:
        raise ConfigurationError(
            f"Failed to load settings: {exc}",
            details={"original_error": str(exc)},
        ) from exc


def clear_settings_cache() -> None:
    """Clear the settings cache, forcing a reload on next access."""
    get_settings.cache_clear()


__all__ = [
    "CostSettings",
    "CatalogSettings",
    "Settings",
    "get_settings",
    "clear_settings_cache",
]
