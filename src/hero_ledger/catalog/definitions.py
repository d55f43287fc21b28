"""Rules catalog schemas.

The catalog is read-only reference data: what each power and modifier
costs, which options and adders it offers, and what kind of ability it
is. It is loaded once and handed to the engine explicitly, so tests and
house-rule campaigns can substitute their own.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pydantic import Field, model_validator

from hero_ledger.core.exceptions import UnknownCatalogEntryError
from hero_ledger.models.base import DocumentModel


# =============================================================================
# Definition Parts
# =============================================================================


class CatalogOption(DocumentModel):
    """One choice of a mutually exclusive option set."""

    xml_id: str
    display: str = ""
    base_cost: float = 0
    lvl_cost: float | None = None
    lvl_val: float | None = None
    lvl_multiplier: float | None = None


class CatalogAdder(DocumentModel):
    """An adder a power or modifier may carry."""

    xml_id: str
    display: str = ""
    abbreviation: str | None = None
    base_cost: float = 0
    lvl_cost: float | None = None
    lvl_val: float | None = None
    min_val: float | None = None
    level_start: int | None = None
    exclusive: bool = False
    required: bool = False
    include_in_base: bool = False
    excludes: tuple[str, ...] = ()
    options: tuple[CatalogOption, ...] = ()


# =============================================================================
# Power & Modifier Definitions
# =============================================================================


class PowerDefinition(DocumentModel):
    """Catalog entry for a power.

    Attributes:
        xml_id: Catalog identifier (``"ENERGYBLAST"``).
        display: Name shown to players (``"Blast"``).
        base_cost: Flat cost before levels.
        lvl_cost: Cost per level.
        lvl_val: What one level buys (dice, meters, DEF points).
        types: Categories such as ``"ATTACK"`` or ``"MOVEMENT"``.
    """

    xml_id: str
    display: str = ""
    abbreviation: str | None = None
    description: str = ""
    base_cost: float = 0
    lvl_cost: float = 0
    lvl_val: float = 0
    level_start: int | None = None
    min_val: float | None = None
    duration: str | None = None
    range: str | None = None
    target: str | None = None
    defense: str | None = None
    types: tuple[str, ...] = ()
    does_damage: bool = False
    does_knockback: bool = False
    does_body: bool = False
    is_killing: bool = False
    standard_effect_allowed: bool = False
    uses_end: bool = False
    visible: bool = False
    exclusive: bool = False
    adders: tuple[CatalogAdder, ...] = ()
    options: tuple[CatalogOption, ...] = ()

    def option(self, option_id: str | None) -> CatalogOption | None:
        """Return the option with the given id, if offered."""
        if option_id is None:
            return None
        return next((o for o in self.options if o.xml_id == option_id), None)


class ModifierDefinition(DocumentModel):
    """Catalog entry for an advantage or limitation.

    ``base_cost`` is the fractional value: positive for advantages,
    negative for limitations.
    """

    xml_id: str
    display: str = ""
    abbreviation: str | None = None
    description: str = ""
    base_cost: float = 0
    lvl_cost: float | None = None
    lvl_val: float | None = None
    lvl_power: float | None = None
    min_cost: float | None = None
    max_cost: float | None = None
    min_val: float | None = None
    max_val: float | None = None
    level_start: int | None = None
    exclusive: bool = False
    is_advantage: bool = False
    is_limitation: bool = False
    has_options: bool = False
    has_levels: bool = False
    options: tuple[CatalogOption, ...] = ()
    adders: tuple[CatalogAdder, ...] = ()

    @model_validator(mode="after")
    def validate_side(self) -> "ModifierDefinition":
        """Ensure the modifier is exactly one of advantage or limitation."""
        if self.is_advantage == self.is_limitation:
            msg = f"Modifier {self.xml_id} must be either an advantage or a limitation"
            raise ValueError(msg)
        return self

    def option(self, option_id: str | None) -> CatalogOption | None:
        """Return the option with the given id, if offered."""
        if option_id is None:
            return None
        return next((o for o in self.options if o.xml_id == option_id), None)

    def adder(self, xml_id: str) -> CatalogAdder | None:
        """Return the adder with the given id, if offered."""
        return next((a for a in self.adders if a.xml_id == xml_id), None)


# =============================================================================
# Catalog
# =============================================================================


class RulesCatalog(DocumentModel):
    """Immutable lookup of power and modifier definitions by catalog id.

    Example:
        >>> catalog = RulesCatalog.from_mapping({
        ...     "powers": {"ENERGYBLAST": {"xmlId": "ENERGYBLAST", "lvlCost": 5}},
        ... })
        >>> catalog.require_power("ENERGYBLAST").lvl_cost
        5.0
    """

    name: str = "custom"
    powers: dict[str, PowerDefinition] = Field(default_factory=dict)
    modifiers: dict[str, ModifierDefinition] = Field(default_factory=dict)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "RulesCatalog":
        """Build a catalog from a JSON-like mapping.

        ``powers`` and ``modifiers`` may each be either a mapping keyed
        by catalog id or a list of definitions carrying ``xmlId``. A
        ``modifiers`` section may also be split into ``advantages`` and
        ``limitations``.

        Args:
            data: The raw catalog data.

        Returns:
            The validated catalog.
        """
        modifiers: list[Any] = []
        for key in ("modifiers", "advantages", "limitations"):
            modifiers.extend(_entries(data.get(key)))
        return cls.model_validate(
            {
                "name": data.get("name", "custom"),
                "powers": {_entry_id(entry): entry for entry in _entries(data.get("powers"))},
                "modifiers": {_entry_id(entry): entry for entry in modifiers},
            }
        )

    def power(self, xml_id: str | None) -> PowerDefinition | None:
        """Look up a power definition; None when unknown."""
        if not xml_id:
            return None
        return self.powers.get(xml_id)

    def modifier(self, xml_id: str | None) -> ModifierDefinition | None:
        """Look up a modifier definition; None when unknown."""
        if not xml_id:
            return None
        return self.modifiers.get(xml_id)

    def require_power(self, xml_id: str) -> PowerDefinition:
        """Look up a power definition that must exist.

        Raises:
            UnknownCatalogEntryError: If the id is not in the catalog.
        """
        definition = self.power(xml_id)
        if definition is None:
            raise UnknownCatalogEntryError("Unknown power", xml_id=xml_id)
        return definition

    def require_modifier(self, xml_id: str) -> ModifierDefinition:
        """Look up a modifier definition that must exist.

        Raises:
            UnknownCatalogEntryError: If the id is not in the catalog.
        """
        definition = self.modifier(xml_id)
        if definition is None:
            raise UnknownCatalogEntryError("Unknown modifier", xml_id=xml_id)
        return definition

    def powers_by_type(self, power_type: str) -> list[PowerDefinition]:
        """All powers carrying the given category, in catalog order."""
        return [p for p in self.powers.values() if power_type in p.types]

    def power_display_name(self, xml_id: str) -> str:
        """Player-facing name of a power, falling back to its id."""
        definition = self.power(xml_id)
        return definition.display if definition and definition.display else xml_id

    def advantages(self) -> list[ModifierDefinition]:
        """All advantage definitions, in catalog order."""
        return [m for m in self.modifiers.values() if m.is_advantage]

    def limitations(self) -> list[ModifierDefinition]:
        """All limitation definitions, in catalog order."""
        return [m for m in self.modifiers.values() if m.is_limitation]

    def __contains__(self, xml_id: object) -> bool:
        return xml_id in self.powers or xml_id in self.modifiers

    def __len__(self) -> int:
        return len(self.powers) + len(self.modifiers)


def _entries(section: Any) -> list[dict[str, Any]]:
    if not section:
        return []
    if isinstance(section, Mapping):
        return [{"xmlId": key, **dict(value)} for key, value in section.items()]
    return [dict(entry) for entry in section]


def _entry_id(entry: Mapping[str, Any]) -> str:
    return str(entry.get("xmlId") or entry.get("xml_id") or "")


__all__ = [
    "CatalogOption",
    "CatalogAdder",
    "PowerDefinition",
    "ModifierDefinition",
    "RulesCatalog",
]
