"""Pydantic V2 schemas for the character document.

These models mirror the in-memory document an external loader produces
from a character sheet file. Every collection, number and flag is
optional; absence is read as empty, zero or "not said" so the engine can
price a sheet that is still being edited.

Example:
    >>> character = Character.from_document({
    ...     "basicConfiguration": {"basePoints": 400, "disadPoints": 150},
    ...     "powers": [{"id": "p1", "name": "Blast", "baseCost": 60}],
    ... })
    >>> character.powers[0].charged_cost
    60
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Annotated, Any

from pydantic import BeforeValidator, Field
from pydantic import ValidationError as PydanticValidationError

from hero_ledger.core.exceptions import ValidationError
from hero_ledger.models.base import (
    Count,
    DocumentModel,
    Flag,
    Number,
    OptionalCount,
    OptionalFlag,
    OptionalNumber,
    OptionalText,
    Text,
    as_list,
    as_mapping,
)


# =============================================================================
# Modifiers & Adders
# =============================================================================


class Adder(DocumentModel):
    """A fixed or leveled add-on bundled with an ability or modifier.

    Contributes ``base_cost + levels * lvl_cost``. The sign is whatever
    the catalog says; adders may lower a cost as well as raise it.
    """

    id: Text = ""
    xml_id: OptionalText = None
    name: Text = ""
    alias: OptionalText = None
    base_cost: Number = 0
    levels: Count = 0
    lvl_cost: Number = 0
    option_id: OptionalText = None

    @property
    def total_cost(self) -> int | float:
        """Cost this adder contributes."""
        return self.base_cost + self.levels * self.lvl_cost


class Modifier(DocumentModel):
    """An advantage or limitation attached to a priced entity.

    Attributes:
        value: Signed fractional multiplier (``0.5`` for +1/2,
            ``-0.25`` for -1/4). None when the document left it out; the
            cost engine then falls back to the catalog definition.
        is_advantage: Counts towards active cost.
        is_limitation: Counts towards real cost.
        option_id: The chosen entry of the catalog's option set.
    """

    id: Text = ""
    xml_id: OptionalText = None
    name: Text = ""
    alias: OptionalText = None
    value: OptionalNumber = None
    is_advantage: Flag = False
    is_limitation: Flag = False
    levels: OptionalCount = None
    adders: Annotated[list[Adder], BeforeValidator(as_list)] = Field(default_factory=list)
    option_id: OptionalText = None


# =============================================================================
# Priced Entities
# =============================================================================


class PricedEntity(DocumentModel):
    """Any ability or trait that is bought with character points.

    ``active_cost`` and ``real_cost`` are the values cached in the
    document; the aggregation engine charges ``real_cost`` and falls back
    to ``base_cost`` when it is missing.

    Attributes:
        id: Document-unique identifier.
        parent_id: Identifier of the containing entity, if any.
        type: Document type code (characteristic code, power type, ...).
        xml_id: Catalog identifier, when the entity comes from the catalog.
    """

    id: Text = ""
    name: Text = ""
    alias: OptionalText = None
    type: Text = ""
    xml_id: OptionalText = None
    option_id: OptionalText = None
    levels: OptionalCount = None
    base_cost: Number = 0
    active_cost: OptionalNumber = None
    real_cost: OptionalNumber = None
    parent_id: OptionalText = None
    modifiers: Annotated[list[Modifier], BeforeValidator(as_list)] = Field(
        default_factory=list
    )
    adders: Annotated[list[Adder], BeforeValidator(as_list)] = Field(default_factory=list)

    @property
    def display_name(self) -> str:
        """Name shown to the player: the alias when set, else the name."""
        return self.alias or self.name

    @property
    def charged_cost(self) -> int | float:
        """Points charged against the budget (real cost, else base cost)."""
        return self.real_cost if self.real_cost is not None else self.base_cost


class Characteristic(PricedEntity):
    """A bought characteristic such as STR or SPD."""

    base_value: OptionalNumber = None
    total_value: OptionalNumber = None
    affects_primary: OptionalFlag = None
    affects_total: OptionalFlag = None
    roll: OptionalCount = None


class Skill(PricedEntity):
    """A skill, skill enhancer or skill group."""

    characteristic: OptionalText = None
    roll: OptionalCount = None
    is_group: Flag = False


class Perk(PricedEntity):
    """A perk (contacts, money, reputation, ...)."""


class Talent(PricedEntity):
    """A talent (combat luck, danger sense, ...)."""


class MartialManeuver(PricedEntity):
    """A martial arts maneuver."""

    ocv: Count = 0
    dcv: Count = 0
    damage: OptionalText = None


class Power(PricedEntity):
    """A power, a framework container, or a slot inside one.

    Attributes:
        affects_primary: ``False`` stops the power changing characteristics.
        affects_total: ``False`` stops the power adding derived defenses
            and movement.
        pd_levels: Explicit physical share of a resistant defense.
        ed_levels: Explicit energy share of a resistant defense.
        effect_dice: Damage or effect dice such as ``"12d6"``.
        killing: The dice are killing damage.
        is_container: True for list entries grouping slots.
    """

    affects_primary: OptionalFlag = None
    affects_total: OptionalFlag = None
    pd_levels: OptionalCount = None
    ed_levels: OptionalCount = None
    effect_dice: OptionalText = None
    killing: Flag = False
    is_container: Flag = False

    @property
    def is_compound(self) -> bool:
        """Whether the power is a compound power built from its slots."""
        return self.type.upper() == "COMPOUNDPOWER"

    @property
    def is_list(self) -> bool:
        """Whether the power is a list whose slots share its modifiers."""
        return (self.is_container or self.type.upper() == "LIST") and not self.is_compound


class Equipment(PricedEntity):
    """A piece of equipment, optionally built from component powers."""

    carried: Flag = False
    price: OptionalNumber = None
    weight: OptionalNumber = None
    sub_powers: Annotated[list[Power], BeforeValidator(as_list)] = Field(
        default_factory=list
    )

    @property
    def is_compound(self) -> bool:
        """Whether the item is defined by component powers."""
        return bool(self.sub_powers)


class Disadvantage(DocumentModel):
    """A complication that grants points rather than costing them."""

    id: Text = ""
    name: Text = ""
    alias: OptionalText = None
    type: Text = ""
    points: Number = 0


# =============================================================================
# Character
# =============================================================================


class BasicConfiguration(DocumentModel):
    """Campaign point budget for the character.

    Attributes:
        base_points: Points every character starts with.
        disad_points: Cap on points that complications can earn.
        experience: Experience points awarded so far.
    """

    base_points: Number = 0
    disad_points: Number = 0
    experience: Number = 0


class CharacterInfo(DocumentModel):
    """Descriptive header of the sheet."""

    character_name: Text = ""
    player_name: OptionalText = None
    campaign_name: OptionalText = None


class Character(DocumentModel):
    """Aggregate root of a character document.

    Attributes:
        basic_configuration: Point budget.
        characteristics: Bought characteristics.
        skills: Skills, including enhancers and groups.
        perks: Perks.
        talents: Talents.
        martial_arts: Martial maneuvers.
        powers: Flat list of powers; slots link to containers by parent_id.
        disadvantages: Point-granting complications.
        equipment: Carried or stored equipment.
    """

    version: Text = ""
    basic_configuration: Annotated[BasicConfiguration, BeforeValidator(as_mapping)] = Field(
        default_factory=BasicConfiguration
    )
    character_info: Annotated[CharacterInfo, BeforeValidator(as_mapping)] = Field(
        default_factory=CharacterInfo
    )
    characteristics: Annotated[list[Characteristic], BeforeValidator(as_list)] = Field(
        default_factory=list
    )
    skills: Annotated[list[Skill], BeforeValidator(as_list)] = Field(default_factory=list)
    perks: Annotated[list[Perk], BeforeValidator(as_list)] = Field(default_factory=list)
    talents: Annotated[list[Talent], BeforeValidator(as_list)] = Field(default_factory=list)
    martial_arts: Annotated[list[MartialManeuver], BeforeValidator(as_list)] = Field(
        default_factory=list
    )
    powers: Annotated[list[Power], BeforeValidator(as_list)] = Field(default_factory=list)
    disadvantages: Annotated[list[Disadvantage], BeforeValidator(as_list)] = Field(
        default_factory=list
    )
    equipment: Annotated[list[Equipment], BeforeValidator(as_list)] = Field(
        default_factory=list
    )

    @classmethod
    def from_document(cls, document: Mapping[str, Any]) -> "Character":
        """Build a character from a loader-supplied document.

        Args:
            document: The parsed character document (camelCase keys).

        Returns:
            The validated Character.

        Raises:
            ValidationError: If the document's structure is unusable, for
                example a collection that is not a list. Malformed numbers
                and flags never raise.
        """
        if not isinstance(document, Mapping):
            raise ValidationError(
                "Character document must be a mapping",
                invalid_value=type(document).__name__,
            )
        try:
            return cls.model_validate(dict(document))
        except PydanticValidationError as exc:
            first = exc.errors()[0]
            raise ValidationError(
                f"Character document is malformed: {first['msg']}",
                field_name=".".join(str(part) for part in first["loc"]),
                details={"error_count": exc.error_count()},
            ) from exc

    def find_characteristic(self, code: str) -> Characteristic | None:
        """Return the characteristic entry with the given type code."""
        return next((c for c in self.characteristics if c.type == code), None)

    def find_power(self, power_id: str) -> Power | None:
        """Return the power with the given id."""
        return next((p for p in self.powers if p.id == power_id), None)


__all__ = [
    "Adder",
    "Modifier",
    "PricedEntity",
    "Characteristic",
    "Skill",
    "Perk",
    "Talent",
    "MartialManeuver",
    "Power",
    "Equipment",
    "Disadvantage",
    "BasicConfiguration",
    "CharacterInfo",
    "Character",
]
