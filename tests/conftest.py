"""Pytest configuration and shared fixtures.

This module provides common fixtures and configuration for all tests
in the Hero Ledger test suite.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import pytest

from hero_ledger.catalog import RulesCatalog, load_bundled_catalog
from hero_ledger.models import Character


if TYPE_CHECKING:
    from collections.abc import Generator


# =============================================================================
# Configuration Fixtures
# =============================================================================


@pytest.fixture(autouse=True)
def reset_settings_cache() -> Generator[None, None, None]:
    """Reset the settings and catalog caches before and after each test."""
    from hero_ledger.catalog.loader import clear_catalog_cache
    from hero_ledger.core.config import clear_settings_cache

    clear_settings_cache()
    clear_catalog_cache()
    yield
    clear_settings_cache()
    clear_catalog_cache()


@pytest.fixture
def clamp_env(monkeypatch: pytest.MonkeyPatch) -> dict[str, str]:
    """Switch the cost engine to the clamping policy through the environment.

    Returns:
        Dictionary of environment variables that were set.
    """
    env_vars = {
        "HERO_LEDGER_COST_INVALID_MODIFIER_POLICY": "clamp",
        "HERO_LEDGER_COST_MIN_DENOMINATOR": "0.5",
    }
    for key, value in env_vars.items():
        monkeypatch.setenv(key, value)
    return env_vars


# =============================================================================
# Catalog Fixtures
# =============================================================================


@pytest.fixture(scope="session")
def catalog() -> RulesCatalog:
    """Provide the catalog bundled with the package."""
    return load_bundled_catalog()


@pytest.fixture
def catalog_data() -> dict[str, Any]:
    """Provide a small hand-written catalog mapping."""
    return {
        "name": "test",
        "powers": {
            "ENERGYBLAST": {"display": "Blast", "lvlCost": 5, "types": ["ATTACK"]},
            "FLIGHT": {"display": "Flight", "lvlCost": 1, "types": ["MOVEMENT"]},
        },
        "advantages": [
            {"xmlId": "PENETRATING", "baseCost": 0, "lvlCost": 0.5, "isAdvantage": True,
             "hasLevels": True},
        ],
        "limitations": [
            {"xmlId": "GESTURES", "baseCost": -0.25, "isLimitation": True},
        ],
    }


# =============================================================================
# Character Fixtures
# =============================================================================


@pytest.fixture
def sample_document() -> dict[str, Any]:
    """Provide a character document as a loader would supply it.

    The budget matches a 400 point campaign with a 150 point cap on
    complications; the sheet takes 200 points of complications and
    spends 380.

    Returns:
        Dictionary in the loader's camelCase shape.
    """
    return {
        "version": "6E",
        "basicConfiguration": {"basePoints": 400, "disadPoints": 150, "experience": 0},
        "characterInfo": {"characterName": "Ironclad", "playerName": "Sam"},
        "characteristics": [
            {"id": "c1", "type": "STR", "name": "Strength", "baseValue": 10,
             "totalValue": 20, "baseCost": 10, "realCost": 10},
            {"id": "c2", "type": "DEX", "name": "Dexterity", "baseValue": 10,
             "totalValue": 18, "baseCost": 16, "realCost": 16},
            {"id": "c3", "type": "CON", "name": "Constitution", "baseValue": 10,
             "totalValue": 15, "baseCost": 5},
        ],
        "skills": [
            {"id": "s1", "name": "Acrobatics", "baseCost": 3, "characteristic": "DEX"},
            {"id": "s2", "name": "Stealth", "baseCost": 5, "realCost": 5},
        ],
        "perks": [{"id": "k1", "name": "Money", "baseCost": 5}],
        "talents": [{"id": "t1", "name": "Combat Luck", "baseCost": 6}],
        "martialArts": [
            {"id": "m1", "name": "Martial Strike", "baseCost": 4, "ocv": 0, "dcv": 2},
            {"id": "m2", "name": "Martial Block", "baseCost": 4, "ocv": 2, "dcv": 2},
        ],
        "powers": [
            {"id": "p1", "name": "Force Blast", "type": "ENERGYBLAST", "xmlId": "ENERGYBLAST",
             "levels": 12, "baseCost": 60, "activeCost": 90, "realCost": 72,
             "modifiers": [
                 {"id": "m-adv", "xmlId": "PENETRATING", "value": 0.5, "isAdvantage": True},
                 {"id": "m-lim", "xmlId": "GESTURES", "value": -0.25, "isLimitation": True},
             ]},
            {"id": "p2", "name": "Battle Suit", "type": "COMPOUNDPOWER", "baseCost": 100,
             "realCost": 100},
            {"id": "p3", "name": "Suit Strength", "type": "STR", "levels": 10,
             "baseCost": 10, "parentId": "p2"},
            {"id": "p4", "name": "Suit Armor", "type": "FORCEFIELD", "levels": 8,
             "pdLevels": 10, "edLevels": 6, "baseCost": 24, "parentId": "p2"},
            {"id": "p5", "name": "Rocket Boots", "type": "FLIGHT", "levels": 20,
             "baseCost": 20, "realCost": 20},
            {"id": "p6", "name": "Mind Shield", "type": "MENTAL_DEFENSE", "levels": 10,
             "baseCost": 10, "realCost": 10},
            {"id": "p7", "name": "Jet Sprint", "type": "RUNNING", "levels": 8,
             "baseCost": 8, "realCost": 8},
            {"id": "p8", "name": "Heavy Frame", "type": "DENSITY_INCREASE", "levels": 2,
             "baseCost": 8, "realCost": 8},
            {"id": "p9", "name": "Orphan Slot", "type": "SHRINKING", "levels": 3,
             "baseCost": 18, "realCost": 18, "parentId": "missing"},
            {"id": "p10", "name": "Lucky Charm", "type": "CUSTOM", "baseCost": 86,
             "realCost": 86},
        ],
        "disadvantages": [
            {"id": "d1", "name": "Hunted", "points": 20},
            {"id": "d2", "name": "Secret Identity", "points": 15},
            {"id": "d3", "name": "Psychological Complication", "points": "165"},
        ],
        "equipment": [
            {"id": "e1", "name": "Kevlar Armor", "carried": True, "activeCost": 10,
             "levels": 5},
            {"id": "e2", "name": "Riot Shield", "alias": "Old Reliable", "carried": True,
             "activeCost": 12, "levels": 8},
            {"id": "e3", "name": "Spare Armor", "carried": False, "activeCost": 30,
             "levels": 20},
            {"id": "e4", "name": "Power Gauntlets", "carried": True, "subPowers": [
                {"id": "g1", "name": "Gauntlet Strength", "type": "STR", "levels": 5},
                {"id": "g2", "name": "Gauntlet Plating", "type": "ARMOR", "levels": 6},
            ]},
        ],
    }


@pytest.fixture
def sample_character(sample_document: dict[str, Any]) -> Character:
    """Provide the sample document as a validated Character."""
    return Character.from_document(sample_document)


@pytest.fixture
def empty_character() -> Character:
    """Provide a character with nothing on the sheet."""
    return Character.from_document({})
