"""Pydantic models for character documents and engine results.

Exports:
    Document models:
        Character, BasicConfiguration, CharacterInfo
        Characteristic, Skill, Perk, Talent, MartialManeuver, Power
        Equipment, Disadvantage, Modifier, Adder, PricedEntity

    Results:
        StatModification, PricedCost, CostBreakdown, PointSummary
        EffectiveCharacteristic, EffectiveStat, DiceNotation

    Enums:
        CharacteristicType, CostCategory, RuleGate, ModifierKind
"""

from __future__ import annotations

from hero_ledger.models.base import DocumentModel, parse_number
from hero_ledger.models.character import (
    Adder,
    BasicConfiguration,
    Character,
    CharacterInfo,
    Characteristic,
    Disadvantage,
    Equipment,
    MartialManeuver,
    Modifier,
    Perk,
    Power,
    PricedEntity,
    Skill,
    Talent,
)
from hero_ledger.models.enums import (
    CharacteristicType,
    CostCategory,
    ModifierKind,
    RuleGate,
)
from hero_ledger.models.results import (
    CostBreakdown,
    DiceNotation,
    EffectiveCharacteristic,
    EffectiveStat,
    PointSummary,
    PricedCost,
    StatModification,
)


__all__ = [
    # Base
    "DocumentModel",
    "parse_number",
    # Document
    "Adder",
    "BasicConfiguration",
    "Character",
    "CharacterInfo",
    "Characteristic",
    "Disadvantage",
    "Equipment",
    "MartialManeuver",
    "Modifier",
    "Perk",
    "Power",
    "PricedEntity",
    "Skill",
    "Talent",
    # Enums
    "CharacteristicType",
    "CostCategory",
    "ModifierKind",
    "RuleGate",
    # Results
    "CostBreakdown",
    "DiceNotation",
    "EffectiveCharacteristic",
    "EffectiveStat",
    "PointSummary",
    "PricedCost",
    "StatModification",
]
