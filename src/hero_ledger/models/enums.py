"""Enumeration types for the Hero Ledger engine."""

from __future__ import annotations

from enum import StrEnum


class CharacteristicType(StrEnum):
    """Characteristic codes a character buys directly.

    The same codes appear as power types when a power or item grants a
    flat characteristic bonus.
    """

    # Primary
    STR = "STR"
    DEX = "DEX"
    CON = "CON"
    INT = "INT"
    EGO = "EGO"
    PRE = "PRE"

    # Combat
    OCV = "OCV"
    DCV = "DCV"
    OMCV = "OMCV"
    DMCV = "DMCV"

    # Secondary
    SPD = "SPD"
    PD = "PD"
    ED = "ED"
    REC = "REC"
    END = "END"
    BODY = "BODY"
    STUN = "STUN"

    # Movement
    RUNNING = "RUNNING"
    SWIMMING = "SWIMMING"
    LEAPING = "LEAPING"


class CostCategory(StrEnum):
    """The priced collections of a character sheet."""

    CHARACTERISTICS = "characteristics"
    SKILLS = "skills"
    PERKS = "perks"
    TALENTS = "talents"
    MARTIAL_ARTS = "martialArts"
    POWERS = "powers"


class RuleGate(StrEnum):
    """Which document flag switches a stat derivation rule off.

    PRIMARY rules are skipped when a power has ``affectsPrimary: false``;
    TOTAL rules when it has ``affectsTotal: false``. An absent flag never
    disables a rule.
    """

    PRIMARY = "affects_primary"
    TOTAL = "affects_total"


class ModifierKind(StrEnum):
    """Which side of the cost formula a modifier total feeds."""

    ADVANTAGE = "advantage"
    LIMITATION = "limitation"


__all__ = [
    "CharacteristicType",
    "CostCategory",
    "RuleGate",
    "ModifierKind",
]
