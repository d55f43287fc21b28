"""Stat derivation engine.

Walks a character's powers and carried equipment and lists every change
they make to characteristics, defenses, movement and perception. Each
change is a StatModification naming its source, so a sheet can show
where a bonus comes from.

Powers are resolved in three steps:

1. A power whose type is a characteristic code grants that many points
   of the characteristic. A slot of a compound power is credited to its
   container.
2. Other powers are looked up in DERIVATION_RULES, first by type code.
   Only when no rule claims the type is the power's name searched for
   the labels players commonly give those powers.
3. Anything still unmatched is a custom power and contributes nothing.

Resistant defenses from equipment do not stack: only the best carried
item for each of rPD and rED counts. Powers always stack.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass, replace

from hero_ledger.core.constants import (
    CHARACTERISTIC_CODES,
    CHARACTERISTIC_ORDER,
    COMPOUND_SOURCE_TEMPLATE,
    DEFAULT_CHARACTERISTIC_VALUES,
    DENSITY_MASS_PER_LEVEL,
    STAT_FLASH_DEFENSE,
    STAT_FLIGHT,
    STAT_KNOCKBACK_RESISTANCE,
    STAT_LEAPING,
    STAT_MASS,
    STAT_MENTAL_DEFENSE,
    STAT_PERCEPTION,
    STAT_POWER_DEFENSE,
    STAT_RESISTANT_ED,
    STAT_RESISTANT_PD,
    STAT_RUNNING,
    STAT_SWIMMING,
    STAT_TELEPORT,
)
from hero_ledger.core.logging import character_context, get_logger
from hero_ledger.engine.dice import format_with_sign
from hero_ledger.models.character import Character, Equipment, Power
from hero_ledger.models.enums import RuleGate
from hero_ledger.models.results import (
    EffectiveCharacteristic,
    EffectiveStat,
    StatModification,
)


logger = get_logger(__name__)

Emitter = Callable[[Power, str, int], list[StatModification]]

DEFENSIVE_EQUIPMENT_TYPES = frozenset({"FORCEFIELD", "RESISTANT_PROTECTION", "ARMOR"})
DEFENSIVE_ITEM_WORDS = ("armor", "protection", "shield")

GROWTH_DCV_THRESHOLDS = (6, 12)


def _levels(power: Power | Equipment) -> int:
    return power.levels if power.levels is not None else 1


def _mod(source: str, stat: str, amount: int) -> StatModification:
    return StatModification(source=source, stat=stat, amount=amount)


# =============================================================================
# Rule Emitters
# =============================================================================


def _density_increase(power: Power, source: str, levels: int) -> list[StatModification]:
    return [
        _mod(source, "STR", 5 * levels),
        _mod(source, "PD", levels),
        _mod(source, "ED", levels),
        _mod(source, STAT_MASS, DENSITY_MASS_PER_LEVEL * levels),
    ]


def _growth(power: Power, source: str, levels: int) -> list[StatModification]:
    mods = [
        _mod(source, "STR", 5 * levels),
        _mod(source, "CON", levels),
        _mod(source, "PD", levels),
        _mod(source, "ED", levels),
        _mod(source, "BODY", levels),
        _mod(source, "STUN", 2 * levels),
    ]
    # One penalty per threshold reached, not per level
    mods.extend(
        _mod(source, "DCV", -1) for threshold in GROWTH_DCV_THRESHOLDS if levels >= threshold
    )
    return mods


def _shrinking(power: Power, source: str, levels: int) -> list[StatModification]:
    return [
        _mod(source, "DCV", levels // 3),
        _mod(source, STAT_PERCEPTION, -2 * levels),
    ]


def _resistant_defense(power: Power, source: str, levels: int) -> list[StatModification]:
    pd = power.pd_levels if power.pd_levels is not None else levels
    ed = power.ed_levels if power.ed_levels is not None else levels
    return [_mod(source, STAT_RESISTANT_PD, pd), _mod(source, STAT_RESISTANT_ED, ed)]


def _single(stat: str) -> Emitter:
    def emit(power: Power, source: str, levels: int) -> list[StatModification]:
        return [_mod(source, stat, levels)]

    return emit


# =============================================================================
# Rule Table
# =============================================================================


@dataclass(frozen=True)
class DerivationRule:
    """How one kind of power changes a character's stats.

    Attributes:
        name: Rule label used in log events.
        type_codes: Power type codes the rule claims. Both the document
            spelling and the catalog id are listed where they differ.
            Empty for movement characteristics, which are claimed as
            characteristic powers before any rule is consulted.
        name_patterns: Lower-case labels searched for in the power name
            when no rule claims the power's type.
        gate: Document flag that switches the rule off when False.
        emit: Builds the modifications from (power, source, levels).
        exact_name: Match the whole name instead of a substring.
    """

    name: str
    type_codes: frozenset[str]
    name_patterns: tuple[str, ...]
    gate: RuleGate
    emit: Emitter
    exact_name: bool = False

    def matches_type(self, power: Power) -> bool:
        return power.type.upper() in self.type_codes

    def matches_name(self, power: Power) -> bool:
        label = power.name.lower()
        if self.exact_name:
            return label in self.name_patterns
        return any(pattern in label for pattern in self.name_patterns)

    def is_enabled(self, power: Power) -> bool:
        return getattr(power, self.gate.value) is not False


DERIVATION_RULES: tuple[DerivationRule, ...] = (
    DerivationRule(
        name="density_increase",
        type_codes=frozenset({"DENSITY_INCREASE", "DENSITYINCREASE"}),
        name_patterns=("density increase",),
        gate=RuleGate.PRIMARY,
        emit=_density_increase,
    ),
    DerivationRule(
        name="growth",
        type_codes=frozenset({"GROWTH"}),
        name_patterns=("growth",),
        gate=RuleGate.PRIMARY,
        emit=_growth,
    ),
    DerivationRule(
        name="shrinking",
        type_codes=frozenset({"SHRINKING"}),
        name_patterns=("shrinking",),
        gate=RuleGate.PRIMARY,
        emit=_shrinking,
    ),
    DerivationRule(
        name="resistant_protection",
        type_codes=frozenset({"RESISTANT_PROTECTION", "FORCEFIELD"}),
        name_patterns=("resistant protection", "forcefield", "force field"),
        gate=RuleGate.TOTAL,
        emit=_resistant_defense,
    ),
    DerivationRule(
        name="armor",
        type_codes=frozenset({"ARMOR"}),
        name_patterns=("armor",),
        gate=RuleGate.TOTAL,
        emit=_resistant_defense,
    ),
    DerivationRule(
        name="flash_defense",
        type_codes=frozenset({"FLASH_DEFENSE", "FLASHDEFENSE"}),
        name_patterns=("flash defense",),
        gate=RuleGate.TOTAL,
        emit=_single(STAT_FLASH_DEFENSE),
    ),
    DerivationRule(
        name="mental_defense",
        type_codes=frozenset({"MENTAL_DEFENSE", "MENTALDEFENSE"}),
        name_patterns=("mental defense",),
        gate=RuleGate.TOTAL,
        emit=_single(STAT_MENTAL_DEFENSE),
    ),
    DerivationRule(
        name="power_defense",
        type_codes=frozenset({"POWER_DEFENSE", "POWERDEFENSE"}),
        name_patterns=("power defense",),
        gate=RuleGate.TOTAL,
        emit=_single(STAT_POWER_DEFENSE),
    ),
    DerivationRule(
        name="knockback_resistance",
        type_codes=frozenset({"KNOCKBACK_RESISTANCE", "KBRESISTANCE"}),
        name_patterns=("knockback resist",),
        gate=RuleGate.TOTAL,
        emit=_single(STAT_KNOCKBACK_RESISTANCE),
    ),
    DerivationRule(
        name="flight",
        type_codes=frozenset({"FLIGHT"}),
        name_patterns=("flight",),
        gate=RuleGate.TOTAL,
        emit=_single(STAT_FLIGHT),
    ),
    DerivationRule(
        name="running",
        type_codes=frozenset(),
        name_patterns=("running",),
        gate=RuleGate.TOTAL,
        emit=_single(STAT_RUNNING),
        exact_name=True,
    ),
    DerivationRule(
        name="swimming",
        type_codes=frozenset(),
        name_patterns=("swimming",),
        gate=RuleGate.TOTAL,
        emit=_single(STAT_SWIMMING),
        exact_name=True,
    ),
    DerivationRule(
        name="leaping",
        type_codes=frozenset(),
        name_patterns=("leaping",),
        gate=RuleGate.TOTAL,
        emit=_single(STAT_LEAPING),
        exact_name=True,
    ),
    DerivationRule(
        name="teleport",
        type_codes=frozenset({"TELEPORTATION", "TELEPORT"}),
        name_patterns=("teleport",),
        gate=RuleGate.TOTAL,
        emit=_single(STAT_TELEPORT),
    ),
)


def match_rules(
    power: Power,
    rules: Sequence[DerivationRule] = DERIVATION_RULES,
) -> list[DerivationRule]:
    """Rules that apply to a power: by type code, else by name."""
    by_type = [rule for rule in rules if rule.matches_type(power)]
    if by_type:
        return by_type
    return [rule for rule in rules if rule.matches_name(power)]


# =============================================================================
# Equipment Defenses
# =============================================================================


@dataclass(frozen=True)
class DefenseCandidates:
    """Best resistant defenses offered by carried equipment so far.

    An offer replaces the current candidate only when strictly greater,
    so the earlier item keeps a tie.
    """

    pd: int = 0
    pd_source: str | None = None
    ed: int = 0
    ed_source: str | None = None

    def offer(self, source: str, pd: int, ed: int) -> DefenseCandidates:
        """Return the candidates after an item offers ``pd``/``ed``."""
        updated = self
        if pd > updated.pd:
            updated = replace(updated, pd=pd, pd_source=source)
        if ed > updated.ed:
            updated = replace(updated, ed=ed, ed_source=source)
        if updated is not self:
            logger.debug("Equipment defense candidate replaced", source=source, pd=pd, ed=ed)
        return updated

    def modifications(self) -> list[StatModification]:
        """At most one rPD and one rED modification, from the winning items."""
        mods = []
        if self.pd > 0 and self.pd_source is not None:
            mods.append(_mod(self.pd_source, STAT_RESISTANT_PD, self.pd))
        if self.ed > 0 and self.ed_source is not None:
            mods.append(_mod(self.ed_source, STAT_RESISTANT_ED, self.ed))
        return mods


def _is_characteristic_power(power: Power) -> bool:
    return power.type.upper() in CHARACTERISTIC_CODES


def _equipment_modifications(
    items: Iterable[Equipment],
) -> tuple[list[StatModification], DefenseCandidates]:
    mods: list[StatModification] = []
    candidates = DefenseCandidates()

    for item in items:
        if not item.carried:
            continue
        item_name = item.display_name

        if item.is_compound:
            item_pd = 0
            item_ed = 0
            for sub_power in item.sub_powers:
                code = sub_power.type.upper()
                if code in CHARACTERISTIC_CODES:
                    if sub_power.affects_primary is not False:
                        source = COMPOUND_SOURCE_TEMPLATE.format(name=item_name)
                        mods.append(_mod(source, code, _levels(sub_power)))
                elif code in DEFENSIVE_EQUIPMENT_TYPES and sub_power.affects_total is not False:
                    half = _levels(sub_power) // 2
                    item_pd += sub_power.pd_levels if sub_power.pd_levels is not None else half
                    item_ed += sub_power.ed_levels if sub_power.ed_levels is not None else half
            candidates = candidates.offer(item_name, item_pd, item_ed)
            continue

        if not item.active_cost:
            continue
        label = item.name.lower()
        if any(word in label for word in DEFENSIVE_ITEM_WORDS):
            levels = _levels(item)
            candidates = candidates.offer(item_name, levels, levels)

    return mods, candidates


# =============================================================================
# Derivation
# =============================================================================


def _compound_parent(power: Power, powers_by_id: dict[str, Power]) -> Power | None:
    if power.parent_id is None:
        return None
    parent = powers_by_id.get(power.parent_id)
    if parent is None or parent is power:
        return None
    return parent


def derive_stat_modifications(
    character: Character,
    rules: Sequence[DerivationRule] = DERIVATION_RULES,
) -> list[StatModification]:
    """List every stat change a character's powers and equipment make.

    Args:
        character: The character to evaluate.
        rules: Special-case power rules; defaults to DERIVATION_RULES.

    Returns:
        Power modifications in power order, then characteristic bonuses
        from compound equipment, then the equipment rPD and rED.
    """
    mods: list[StatModification] = []
    powers_by_id = {power.id: power for power in character.powers if power.id}

    for power in character.powers:
        levels = _levels(power)

        if _is_characteristic_power(power):
            if power.affects_primary is not False:
                parent = _compound_parent(power, powers_by_id)
                source = (
                    COMPOUND_SOURCE_TEMPLATE.format(name=parent.display_name)
                    if parent is not None
                    else power.display_name
                )
                mods.append(_mod(source, power.type.upper(), levels))
            continue

        matched = match_rules(power, rules)
        if not matched:
            logger.debug(
                "Power not recognized for stat derivation",
                power_id=power.id,
                power_type=power.type,
            )
            continue

        for rule in matched:
            if rule.is_enabled(power):
                mods.extend(rule.emit(power, power.display_name, levels))

    equipment_mods, candidates = _equipment_modifications(character.equipment)
    mods.extend(equipment_mods)
    mods.extend(candidates.modifications())

    logger.debug("Stat modifications derived", count=len(mods))
    return mods


def stat_total(modifications: Iterable[StatModification], stat: str) -> int:
    """Sum of the active modifications to one stat."""
    return sum(mod.amount for mod in modifications if mod.stat == stat and mod.active)


def base_characteristic(character: Character, code: str) -> int | float:
    """Stored value of a characteristic, or its rules default."""
    entry = character.find_characteristic(code)
    if entry is not None:
        if entry.total_value is not None:
            return entry.total_value
        if entry.base_value is not None:
            return entry.base_value
    return DEFAULT_CHARACTERISTIC_VALUES.get(code, 0)


def effective_characteristic(
    character: Character,
    code: str,
    modifications: Sequence[StatModification] | None = None,
) -> EffectiveCharacteristic:
    """A characteristic's stored value plus every bonus granted to it.

    Args:
        character: The character to evaluate.
        code: Characteristic code such as ``"STR"``.
        modifications: Previously derived modifications; derived from
            the character when omitted.

    Returns:
        Base, bonus and effective value.
    """
    if modifications is None:
        with character_context(character.character_info.character_name):
            modifications = derive_stat_modifications(character)
    base = base_characteristic(character, code)
    bonus = stat_total(modifications, code)
    return EffectiveCharacteristic(base=base, bonus=bonus, effective=base + bonus)


def effective_stats(
    character: Character,
    modifications: Sequence[StatModification] | None = None,
) -> dict[str, EffectiveStat]:
    """Every characteristic, plus each derived stat that was modified.

    Characteristics come first in sheet order; derived stats follow in
    the order they were first modified. Each stat lists its sources as
    ``"<source>: +N"``.
    """
    if modifications is None:
        modifications = derive_stat_modifications(character)

    bases: dict[str, int | float] = {
        code: base_characteristic(character, code) for code in CHARACTERISTIC_ORDER
    }
    bonuses: dict[str, int] = dict.fromkeys(bases, 0)
    sources: dict[str, list[str]] = {code: [] for code in bases}

    for mod in modifications:
        if not mod.active:
            continue
        if mod.stat not in bases:
            bases[mod.stat] = 0
            bonuses[mod.stat] = 0
            sources[mod.stat] = []
        bonuses[mod.stat] += mod.amount
        sources[mod.stat].append(f"{mod.source}: {format_with_sign(mod.amount)}")

    return {
        stat: EffectiveStat(
            stat=stat,
            base=base,
            bonus=bonuses[stat],
            total=base + bonuses[stat],
            sources=tuple(sources[stat]),
        )
        for stat, base in bases.items()
    }


__all__ = [
    "DerivationRule",
    "DERIVATION_RULES",
    "DefenseCandidates",
    "match_rules",
    "derive_stat_modifications",
    "stat_total",
    "base_characteristic",
    "effective_characteristic",
    "effective_stats",
]
