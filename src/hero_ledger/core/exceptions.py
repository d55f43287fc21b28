"""Custom exception hierarchy for the Hero Ledger point-accounting engine.

All exceptions inherit from HeroLedgerError so the host application can
catch engine failures at a single boundary while still telling the
catalog, configuration and cost domains apart.

The engine is deliberately forgiving about document shape (missing or
malformed numbers default to zero), so the only error the cost path
raises on its own is InvalidModifierSumError.

Example:
    >>> from hero_ledger.core.exceptions import InvalidModifierSumError
    >>> raise InvalidModifierSumError("Limitations exceed cost", modifier_sum=-1.25)
"""

from __future__ import annotations

from typing import Any


class HeroLedgerError(Exception):
    """Base exception for all Hero Ledger errors.

    Attributes:
        message: Human-readable error description.
        details: Optional dictionary containing additional error context.
    """

    def __init__(self, message: str, *, details: dict[str, Any] | None = None) -> None:
        """Initialize the base exception.

        Args:
            message: Human-readable error description.
            details: Optional dictionary containing additional error context.
        """
        self.message = message
        self.details = details or {}
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format the exception message with optional details.

        Returns:
            Formatted error message including any provided details.
        """
        if self.details:
            detail_str = ", ".join(f"{k}={v!r}" for k, v in self.details.items())
            return f"{self.message} [{detail_str}]"
        return self.message

    def __repr__(self) -> str:
        """Return a detailed representation of the exception."""
        return f"{self.__class__.__name__}(message={self.message!r}, details={self.details!r})"


# =============================================================================
# Rules Catalog Exceptions
# =============================================================================


class CatalogError(HeroLedgerError):
    """Base exception for rules catalog errors."""


class CatalogLoadError(CatalogError):
    """Raised when a rules catalog file cannot be read or parsed."""

    def __init__(
        self,
        message: str,
        *,
        source: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize catalog load error with source context.

        Args:
            message: Human-readable error description.
            source: Path or name of the catalog source that failed.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        if source:
            combined_details["source"] = source
        super().__init__(message, details=combined_details)


class UnknownCatalogEntryError(CatalogError):
    """Raised when a required power or modifier id is missing from the catalog."""

    def __init__(
        self,
        message: str,
        *,
        xml_id: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize unknown entry error with the requested id.

        Args:
            message: Human-readable error description.
            xml_id: The catalog identifier that could not be resolved.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        if xml_id:
            combined_details["xml_id"] = xml_id
        super().__init__(message, details=combined_details)


# =============================================================================
# Cost Engine Exceptions
# =============================================================================


class CostEngineError(HeroLedgerError):
    """Base exception for cost calculation errors."""


class InvalidModifierSumError(CostEngineError):
    """Raised when modifiers produce a non-positive cost multiplier.

    A limitation total that drives the real-cost denominator to zero or
    below (or an advantage total that drives the active-cost multiplier
    to zero or below) has no meaningful price. The host application is
    expected to flag the character as having an invalid configuration.
    """

    def __init__(
        self,
        message: str,
        *,
        modifier_sum: float | None = None,
        denominator: float | None = None,
        kind: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize invalid modifier error with the offending totals.

        Args:
            message: Human-readable error description.
            modifier_sum: The summed advantage or limitation value.
            denominator: The resulting multiplier or denominator.
            kind: Either 'advantage' or 'limitation'.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        if kind:
            combined_details["kind"] = kind
        if modifier_sum is not None:
            combined_details["modifier_sum"] = modifier_sum
        if denominator is not None:
            combined_details["denominator"] = denominator
        super().__init__(message, details=combined_details)


# =============================================================================
# Configuration & Validation Exceptions
# =============================================================================


class ConfigurationError(HeroLedgerError):
    """Raised when engine configuration is invalid."""

    def __init__(
        self,
        message: str,
        *,
        config_key: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize configuration error with config key context.

        Args:
            message: Human-readable error description.
            config_key: The configuration key that caused the error.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        if config_key:
            combined_details["config_key"] = config_key
        super().__init__(message, details=combined_details)


class ValidationError(HeroLedgerError):
    """Raised when a character document cannot be turned into a model at all.

    Numeric sloppiness never reaches this point; it is reserved for
    documents whose overall shape is unusable (for example a list where
    the character root object is expected).
    """

    def __init__(
        self,
        message: str,
        *,
        field_name: str | None = None,
        invalid_value: Any | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize validation error with field context.

        Args:
            message: Human-readable error description.
            field_name: Name of the field that failed validation.
            invalid_value: The value that failed validation.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        if field_name:
            combined_details["field_name"] = field_name
        if invalid_value is not None:
            combined_details["invalid_value"] = invalid_value
        super().__init__(message, details=combined_details)


__all__ = [
    # Base exception
    "HeroLedgerError",
    # Catalog exceptions
    "CatalogError",
    "CatalogLoadError",
    "UnknownCatalogEntryError",
    # Cost engine exceptions
    "CostEngineError",
    "InvalidModifierSumError",
    # Configuration exceptions
    "ConfigurationError",
    "ValidationError",
]
