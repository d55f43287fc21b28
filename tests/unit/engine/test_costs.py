"""Tests for the cost engine."""

from __future__ import annotations

import pytest

from hero_ledger.catalog import RulesCatalog
from hero_ledger.core.config import CostSettings
from hero_ledger.core.exceptions import InvalidModifierSumError
from hero_ledger.engine.costs import (
    active_cost,
    adder_cost,
    advantage_sum,
    characteristic_cost,
    cost_multiplier,
    limitation_sum,
    list_discount,
    price_characteristic,
    price_entity,
    price_equipment,
    price_power,
    real_cost,
    resolve_modifiers,
)
from hero_ledger.engine.rounding import round_for_cost
from hero_ledger.models import Adder, Characteristic, Equipment, Modifier, Power, Skill
from hero_ledger.models.enums import ModifierKind


def advantage(value: float | None, **kwargs: object) -> Modifier:
    return Modifier(value=value, is_advantage=True, **kwargs)


def limitation(value: float | None, **kwargs: object) -> Modifier:
    return Modifier(value=value, is_limitation=True, **kwargs)


class TestModifierSums:
    """Tests for advantage and limitation totals."""

    def test_advantage_sum(self) -> None:
        """Test only advantages are summed."""
        mods = [advantage(0.5), advantage(0.25), limitation(-0.5)]
        assert advantage_sum(mods) == 0.75

    def test_limitation_sum_uses_magnitudes(self) -> None:
        """Test limitations are summed by magnitude whatever their sign."""
        mods = [limitation(-0.25), limitation(0.5), advantage(1)]
        assert limitation_sum(mods) == 0.75

    def test_missing_values_count_as_zero(self) -> None:
        """Test modifiers without a value contribute nothing."""
        assert advantage_sum([advantage(None)]) == 0
        assert limitation_sum([limitation(None)]) == 0

    def test_absent_list(self) -> None:
        """Test that no modifiers sum to zero."""
        assert advantage_sum(None) == 0
        assert limitation_sum([]) == 0


class TestActiveCost:
    """Tests for cost after advantages."""

    @pytest.mark.parametrize("base", [0, 7, 22.5, 60, 13.4])
    def test_no_modifiers_is_rounded_base(self, base: float) -> None:
        """Test active cost without modifiers is the rounded base."""
        assert active_cost(base, []) == round_for_cost(base)
        assert active_cost(base) == round_for_cost(base)

    def test_advantage_applies(self) -> None:
        """Test a +1/2 advantage on 60 points."""
        assert active_cost(60, [advantage(0.5), limitation(-0.25)]) == 90

    def test_half_point_rounds_down(self) -> None:
        """Test a half point of active cost favors the player."""
        assert active_cost(15, [advantage(0.5)]) == 22

    def test_negative_multiplier_rejected(self) -> None:
        """Test an advantage total of -1 or less is an invalid configuration."""
        with pytest.raises(InvalidModifierSumError) as exc_info:
            active_cost(30, [advantage(-1.25)], CostSettings())

        assert exc_info.value.details["kind"] == "advantage"
        assert exc_info.value.details["modifier_sum"] == -1.25

    def test_negative_multiplier_clamped(self) -> None:
        """Test the clamp policy prices against the minimum multiplier."""
        settings = CostSettings(invalid_modifier_policy="clamp", min_denominator=0.1)
        assert active_cost(30, [advantage(-1)], settings) == 3


class TestRealCost:
    """Tests for cost after limitations."""

    @pytest.mark.parametrize("active", [0, 1, 72, 22.5])
    def test_no_limitations_is_identity(self, active: float) -> None:
        """Test real cost without limitations returns the active cost unchanged."""
        assert real_cost(active, []) == active
        assert real_cost(active, [advantage(0.5)]) == active

    def test_limitation_applies(self) -> None:
        """Test a -1/4 limitation on 90 active points."""
        assert real_cost(90, [limitation(-0.25)]) == 72

    def test_multiple_limitations(self) -> None:
        """Test limitations add before dividing."""
        assert real_cost(60, [limitation(-0.5), limitation(-1)]) == 24

    def test_half_point_rounds_down(self) -> None:
        """Test a half point of real cost favors the player."""
        # 45 / 2 = 22.5
        assert real_cost(45, [limitation(-1)]) == 22


class TestCostMultiplier:
    """Tests for the multiplier guard."""

    def test_positive_multiplier(self) -> None:
        """Test a valid total passes through."""
        assert cost_multiplier(0.75, ModifierKind.LIMITATION) == 1.75

    @pytest.mark.parametrize("modifier_sum", [-1, -1.5])
    def test_reject_policy(self, modifier_sum: float) -> None:
        """Test that zero and negative factors are rejected by default."""
        with pytest.raises(InvalidModifierSumError) as exc_info:
            cost_multiplier(modifier_sum, ModifierKind.LIMITATION)

        assert exc_info.value.details["denominator"] == 1 + modifier_sum

    def test_clamp_policy_from_env(self, clamp_env: dict[str, str]) -> None:
        """Test the configured clamp floor is used when no settings are passed."""
        assert cost_multiplier(-2, ModifierKind.LIMITATION) == 0.5


class TestAdderCost:
    """Tests for adder totals."""

    def test_linear_sum(self) -> None:
        """Test adders sum base plus levels times level cost."""
        adders = [Adder(base_cost=5), Adder(base_cost=2, levels=3, lvl_cost=1), Adder(base_cost=-3)]
        assert adder_cost(adders) == 7

    def test_no_adders(self) -> None:
        """Test no adders cost nothing."""
        assert adder_cost([]) == 0
        assert adder_cost(None) == 0

    def test_fractional_adders_are_not_rounded(self) -> None:
        """Test adder totals keep fractions."""
        assert adder_cost([Adder(base_cost=0.25), Adder(base_cost=0.5)]) == 0.75


class TestPriceEntity:
    """Tests for whole-entity pricing."""

    def test_blast_from_catalog(self, catalog: RulesCatalog) -> None:
        """Test a 12d6 Blast with +1/2 and -1/4 prices at 90 active, 72 real."""
        blast = Power(
            xml_id="ENERGYBLAST",
            base_cost=0,
            levels=12,
            modifiers=[advantage(0.5), limitation(-0.25)],
        )

        priced = price_entity(blast, catalog)

        assert priced.base_cost == 60
        assert priced.active_cost == 90
        assert priced.real_cost == 72

    def test_document_base_without_catalog(self) -> None:
        """Test the stored base cost is used when no catalog is given."""
        skill = Skill(base_cost=3, adders=[Adder(base_cost=2)])

        priced = price_entity(skill)

        assert priced.base_cost == 3
        assert priced.adder_cost == 2
        assert priced.active_cost == 5
        assert priced.real_cost == 5

    def test_type_resolves_when_xml_id_missing(self, catalog: RulesCatalog) -> None:
        """Test the entity type is tried as a catalog id."""
        flight = Power(type="FLIGHT", levels=20, base_cost=999)
        assert price_entity(flight, catalog).base_cost == 20

    def test_unknown_power_keeps_document_base(self, catalog: RulesCatalog) -> None:
        """Test house-rule powers keep their own base cost."""
        custom = Power(type="HOMEBREW", levels=4, base_cost=17)
        assert price_entity(custom, catalog).real_cost == 17

    def test_adders_before_advantages(self, catalog: RulesCatalog) -> None:
        """Test adder cost is part of what advantages multiply."""
        blast = Power(
            xml_id="ENERGYBLAST",
            levels=6,
            adders=[Adder(xml_id="PLUSONEPIP", base_cost=2)],
            modifiers=[advantage(0.5)],
        )
        # (30 + 2) * 1.5
        assert price_entity(blast, catalog).active_cost == 48

    def test_modifier_values_from_catalog(self, catalog: RulesCatalog) -> None:
        """Test missing modifier values and sides come from the catalog."""
        blast = Power(
            xml_id="ENERGYBLAST",
            levels=12,
            modifiers=[
                Modifier(xml_id="PENETRATING", levels=1),
                Modifier(xml_id="FOCUS", option_id="OAF"),
            ],
        )

        priced = price_entity(blast, catalog)

        assert priced.active_cost == 90
        assert priced.real_cost == 45

    def test_invalid_advantages_rejected(self, catalog: RulesCatalog) -> None:
        """Test an invalid advantage total propagates from price_entity."""
        power = Power(base_cost=10, modifiers=[advantage(-3)])
        with pytest.raises(InvalidModifierSumError):
            price_entity(power, catalog, CostSettings())


class TestResolveModifiers:
    """Tests for filling modifier values from the catalog."""

    def test_document_values_win(self, catalog: RulesCatalog) -> None:
        """Test a stored value is not overwritten."""
        mod = Modifier(xml_id="PENETRATING", value=1.5, is_advantage=True)
        assert resolve_modifiers([mod], catalog)[0].value == 1.5

    def test_unknown_modifier_unchanged(self, catalog: RulesCatalog) -> None:
        """Test modifiers outside the catalog pass through."""
        mod = Modifier(xml_id="HOMEBREW")
        assert resolve_modifiers([mod], catalog) == [mod]

    def test_without_catalog(self) -> None:
        """Test nothing is resolved without a catalog."""
        mod = Modifier(xml_id="PENETRATING")
        assert resolve_modifiers([mod], None)[0].value is None


class TestPricePower:
    """Tests for pricing containers from their slots."""

    def test_list_slots_inherit_modifiers(self) -> None:
        """Test a list's limitation applies to every slot."""
        powers = [
            Power(id="mp", type="LIST", modifiers=[limitation(-1)]),
            Power(id="a", base_cost=30, parent_id="mp"),
            Power(id="b", base_cost=20, parent_id="mp"),
        ]

        priced = price_power(powers[0], powers)

        assert (priced.base_cost, priced.active_cost, priced.real_cost) == (50, 50, 25)

    def test_slot_priced_alone_inherits(self) -> None:
        """Test a slot priced on its own still carries its list's modifiers."""
        powers = [
            Power(id="mp", is_container=True, modifiers=[limitation(-1)]),
            Power(id="a", base_cost=30, parent_id="mp"),
        ]
        assert price_power(powers[1], powers).real_cost == 15

    def test_compound_sums_slots(self) -> None:
        """Test a compound power costs its slots, ignoring its own modifiers."""
        powers = [
            Power(id="cp", type="COMPOUNDPOWER", modifiers=[limitation(-1)]),
            Power(id="x", base_cost=10, parent_id="cp", modifiers=[advantage(0.5)]),
            Power(id="y", base_cost=20, parent_id="cp", modifiers=[limitation(-0.5)]),
        ]

        priced = price_power(powers[0], powers)

        # 15 + 20 active; 15 + 13 real
        assert (priced.active_cost, priced.real_cost) == (35, 28)

    def test_list_discount(self) -> None:
        """Test a list's negative adder lowers each slot, never below 0."""
        powers = [
            Power(id="spells", type="LIST", adders=[Adder(base_cost=-1)]),
            Power(id="a", base_cost=10, parent_id="spells"),
            Power(id="b", base_cost=0, parent_id="spells"),
        ]

        assert list_discount(powers[0]) == -1
        assert price_power(powers[0], powers).real_cost == 9

    def test_nested_containers(self) -> None:
        """Test a compound slot of a list rolls up with the list's modifiers."""
        powers = [
            Power(id="list", type="LIST", modifiers=[limitation(-1)]),
            Power(id="cp", type="COMPOUNDPOWER", parent_id="list"),
            Power(id="s1", base_cost=20, parent_id="cp"),
            Power(id="s2", base_cost=10, parent_id="cp"),
        ]

        priced = price_power(powers[0], powers)

        assert (priced.active_cost, priced.real_cost) == (30, 15)

    def test_plain_power_matches_price_entity(self, catalog: RulesCatalog) -> None:
        """Test a power without slots is priced as a single entity."""
        blast = Power(id="p1", xml_id="ENERGYBLAST", levels=12, modifiers=[advantage(0.5)])
        assert price_power(blast, [blast], catalog) == price_entity(blast, catalog)

    def test_parent_cycle_terminates(self) -> None:
        """Test powers naming each other as parent are each counted once."""
        powers = [
            Power(id="a", base_cost=10, parent_id="b"),
            Power(id="b", base_cost=10, parent_id="a"),
        ]
        assert price_power(powers[0], powers).real_cost == 10

    def test_self_parent_is_not_a_container(self) -> None:
        """Test a power naming itself as parent is priced on its own."""
        power = Power(id="p", base_cost=12, parent_id="p")
        assert price_power(power, [power]).real_cost == 12


class TestPriceEquipment:
    """Tests for pricing equipment."""

    def test_plain_item(self) -> None:
        """Test an item without component powers is priced directly."""
        assert price_equipment(Equipment(base_cost=5)).real_cost == 5

    def test_compound_item_sums_components(self) -> None:
        """Test a compound item costs what its component powers cost."""
        item = Equipment(
            sub_powers=[
                Power(base_cost=10, modifiers=[limitation(-1)]),
                Power(base_cost=6),
            ]
        )

        priced = price_equipment(item)

        assert (priced.active_cost, priced.real_cost) == (16, 11)


class TestCharacteristicCost:
    """Tests for characteristic pricing."""

    @pytest.mark.parametrize(
        ("code", "value", "expected"),
        [
            ("STR", 20, 10),
            ("DEX", 18, 16),
            ("SPD", 4, 20),
            ("OCV", 3, 0),
            ("END", 35, 3),
            ("END", 22, 1),
            ("STUN", 25, 3),
            ("str", 15, 5),
        ],
    )
    def test_cost_above_start(self, code: str, value: int, expected: int) -> None:
        """Test each point above the start costs the rate, rounded up."""
        assert characteristic_cost(code, value) == expected

    def test_below_start_refunds(self) -> None:
        """Test selling a characteristic down gives points back."""
        assert characteristic_cost("STR", 8) == -2

    def test_unknown_code_is_free(self) -> None:
        """Test a code without a rate costs nothing."""
        assert characteristic_cost("LUCK", 20) == 0

    def test_price_from_total_value(self) -> None:
        """Test the total value drives the price."""
        priced = price_characteristic(Characteristic(type="CON", total_value=15))
        assert (priced.base_cost, priced.active_cost, priced.real_cost) == (10, 10, 10)

    def test_price_from_levels(self) -> None:
        """Test the value falls back to the start plus levels bought."""
        assert price_characteristic(Characteristic(type="PRE", levels=5)).real_cost == 5
        bought = Characteristic(type="STR", base_value=12, levels=3)
        assert price_characteristic(bought).real_cost == 5
