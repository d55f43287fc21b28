"""Rules constants shared across the Hero Ledger engine.

Characteristic codes, their rules defaults, and the attribution markers
used when a stat bonus is credited to a containing power or item.
"""

from __future__ import annotations

# =============================================================================
# Rounding
# =============================================================================

ROUNDING_TOLERANCE = 1e-4
"""Distance from an exact .5 fractional part still treated as a half."""

# =============================================================================
# Characteristics
# =============================================================================

PRIMARY_CHARACTERISTICS = ("STR", "DEX", "CON", "INT", "EGO", "PRE")
COMBAT_CHARACTERISTICS = ("OCV", "DCV", "OMCV", "DMCV")
SECONDARY_CHARACTERISTICS = ("SPD", "PD", "ED", "REC", "END", "BODY", "STUN")
MOVEMENT_CHARACTERISTICS = ("RUNNING", "SWIMMING", "LEAPING")

CHARACTERISTIC_CODES = frozenset(
    PRIMARY_CHARACTERISTICS
    + COMBAT_CHARACTERISTICS
    + SECONDARY_CHARACTERISTICS
    + MOVEMENT_CHARACTERISTICS
)
"""Power type codes that buy a characteristic directly."""

CHARACTERISTIC_ORDER = (
    PRIMARY_CHARACTERISTICS
    + COMBAT_CHARACTERISTICS
    + SECONDARY_CHARACTERISTICS
    + MOVEMENT_CHARACTERISTICS
)

DEFAULT_CHARACTERISTIC_VALUES = {
    "STR": 10,
    "DEX": 10,
    "CON": 10,
    "INT": 10,
    "EGO": 10,
    "PRE": 10,
    "OCV": 3,
    "DCV": 3,
    "OMCV": 3,
    "DMCV": 3,
    "SPD": 2,
    "PD": 2,
    "ED": 2,
    "REC": 4,
    "END": 20,
    "BODY": 10,
    "STUN": 20,
    "RUNNING": 12,
    "SWIMMING": 4,
    "LEAPING": 4,
}
"""Starting value of each characteristic before any points are spent."""

CHARACTERISTIC_COSTS = {
    "STR": 1,
    "DEX": 2,
    "CON": 2,
    "INT": 1,
    "EGO": 1,
    "PRE": 1,
    "OCV": 5,
    "DCV": 5,
    "OMCV": 3,
    "DMCV": 3,
    "SPD": 10,
    "PD": 1,
    "ED": 1,
    "REC": 1,
    "END": 0.2,
    "BODY": 1,
    "STUN": 0.5,
    "RUNNING": 1,
    "SWIMMING": 1,
    "LEAPING": 1,
}
"""Character points per point of each characteristic above its starting value."""

CHAR_ROLL_BASE = 9
CHAR_ROLL_DENOMINATOR = 5

# =============================================================================
# Derived Stat Names
# =============================================================================

STAT_RESISTANT_PD = "rPD"
STAT_RESISTANT_ED = "rED"
STAT_FLASH_DEFENSE = "Flash Def"
STAT_MENTAL_DEFENSE = "Mental Def"
STAT_POWER_DEFENSE = "Power Def"
STAT_KNOCKBACK_RESISTANCE = "KB Resist"
STAT_FLIGHT = "Flight"
STAT_RUNNING = "Running"
STAT_SWIMMING = "Swimming"
STAT_LEAPING = "Leaping"
STAT_TELEPORT = "Teleport"
STAT_MASS = "Mass"
STAT_PERCEPTION = "Perception"

# =============================================================================
# Attribution
# =============================================================================

COMPOUND_SOURCE_TEMPLATE = "{name} (Compound)"
"""Source label for a bonus credited to the power or item containing it."""

DENSITY_MASS_PER_LEVEL = 100
"""Approximate extra mass (kg) per level of Density Increase."""

# =============================================================================
# Strength Tables
# =============================================================================

LIFT_TABLE = (
    (5, "50 kg"),
    (10, "100 kg"),
    (15, "200 kg"),
    (20, "400 kg"),
    (25, "800 kg"),
    (30, "1,600 kg"),
    (35, "3,200 kg"),
    (40, "6,400 kg"),
    (45, "12.5 tons"),
    (50, "25 tons"),
    (55, "50 tons"),
    (60, "100 tons"),
    (65, "200 tons"),
    (70, "400 tons"),
    (75, "800 tons"),
    (80, "1,600 tons"),
)
"""Highest STR covered by each lifting capacity."""

LIFT_BEYOND_TABLE = "3,200+ tons"


__all__ = [
    "ROUNDING_TOLERANCE",
    # Characteristics
    "PRIMARY_CHARACTERISTICS",
    "COMBAT_CHARACTERISTICS",
    "SECONDARY_CHARACTERISTICS",
    "MOVEMENT_CHARACTERISTICS",
    "CHARACTERISTIC_CODES",
    "CHARACTERISTIC_ORDER",
    "DEFAULT_CHARACTERISTIC_VALUES",
    "CHARACTERISTIC_COSTS",
    "CHAR_ROLL_BASE",
    "CHAR_ROLL_DENOMINATOR",
    # Stat names
    "STAT_RESISTANT_PD",
    "STAT_RESISTANT_ED",
    "STAT_FLASH_DEFENSE",
    "STAT_MENTAL_DEFENSE",
    "STAT_POWER_DEFENSE",
    "STAT_KNOCKBACK_RESISTANCE",
    "STAT_FLIGHT",
    "STAT_RUNNING",
    "STAT_SWIMMING",
    "STAT_LEAPING",
    "STAT_TELEPORT",
    "STAT_MASS",
    "STAT_PERCEPTION",
    # Attribution
    "COMPOUND_SOURCE_TEMPLATE",
    "DENSITY_MASS_PER_LEVEL",
    # Strength
    "LIFT_TABLE",
    "LIFT_BEYOND_TABLE",
]
