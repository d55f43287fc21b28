"""Tests for the character document models."""

from __future__ import annotations

from typing import Any

import pytest
from pydantic import ValidationError as PydanticValidationError

from hero_ledger.core.exceptions import ValidationError
from hero_ledger.models import (
    Adder,
    Character,
    Equipment,
    Modifier,
    Power,
    StatModification,
    parse_number,
)


class TestParseNumber:
    """Tests for lenient number parsing."""

    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            (12, 12),
            (1.5, 1.5),
            ("12", 12),
            (" 0.25 ", 0.25),
            ("7.0", 7),
        ],
    )
    def test_numbers(self, raw: Any, expected: float) -> None:
        """Test values that are numbers."""
        assert parse_number(raw) == expected

    @pytest.mark.parametrize("raw", [None, "", "abc", "1/2", True, float("nan"), [], {}])
    def test_not_numbers(self, raw: Any) -> None:
        """Test values that are not usable numbers."""
        assert parse_number(raw) is None


class TestLenientFields:
    """Tests that malformed document values never raise."""

    def test_missing_costs_default_to_zero(self) -> None:
        """Test that absent costs are read as 0 and cached costs as None."""
        power = Power.model_validate({"id": "p1"})

        assert power.base_cost == 0
        assert power.real_cost is None
        assert power.active_cost is None
        assert power.charged_cost == 0

    def test_malformed_costs(self) -> None:
        """Test that non-numeric costs are treated as absent."""
        power = Power.model_validate({"baseCost": "lots", "realCost": "n/a", "levels": "x"})

        assert power.base_cost == 0
        assert power.real_cost is None
        assert power.levels is None

    def test_numeric_strings_are_parsed(self) -> None:
        """Test that numeric strings become numbers."""
        power = Power.model_validate({"baseCost": "30", "realCost": "20", "levels": "6"})

        assert power.base_cost == 30
        assert power.charged_cost == 20
        assert power.levels == 6

    @pytest.mark.parametrize(
        ("raw", "expected"),
        [(True, True), ("true", True), ("No", False), (False, False), (None, None), ("?", None)],
    )
    def test_tri_state_flags(self, raw: Any, expected: bool | None) -> None:
        """Test that affects flags keep 'not said' apart from False."""
        assert Power.model_validate({"affectsPrimary": raw}).affects_primary is expected

    def test_carried_defaults_to_false(self) -> None:
        """Test that equipment is not carried unless the document says so."""
        assert Equipment.model_validate({"carried": "maybe"}).carried is False

    def test_null_collections(self) -> None:
        """Test that null collections are read as empty."""
        power = Power.model_validate({"modifiers": None, "adders": None})

        assert power.modifiers == []
        assert power.adders == []

    @pytest.mark.parametrize("section", ["basicConfiguration", "characterInfo"])
    def test_null_sections(self, section: str) -> None:
        """Test that a null header section is read as its defaults."""
        character = Character.from_document({section: None, "skills": [{"baseCost": 3}]})

        assert character.basic_configuration.base_points == 0
        assert character.character_info.character_name == ""
        assert character.skills[0].base_cost == 3


class TestPricedEntity:
    """Tests for priced entity helpers."""

    def test_display_name_prefers_alias(self) -> None:
        """Test the alias is shown when set."""
        power = Power(name="Energy Blast", alias="Plasma Bolt")
        assert power.display_name == "Plasma Bolt"

    def test_display_name_falls_back_to_name(self) -> None:
        """Test the name is shown without an alias."""
        assert Power(name="Energy Blast", alias="").display_name == "Energy Blast"

    def test_charged_cost_prefers_real_cost(self) -> None:
        """Test the budget is charged the real cost."""
        assert Power(base_cost=60, real_cost=72).charged_cost == 72

    def test_adder_total(self) -> None:
        """Test an adder contributes base plus levels times level cost."""
        assert Adder(base_cost=5, levels=3, lvl_cost=2).total_cost == 11

    def test_negative_adder(self) -> None:
        """Test that adders may lower a cost."""
        assert Adder(base_cost=-5).total_cost == -5

    def test_models_are_frozen(self) -> None:
        """Test that document models cannot be mutated."""
        modifier = Modifier(value=0.5, is_advantage=True)
        with pytest.raises(PydanticValidationError):
            modifier.value = 1  # type: ignore[misc]


class TestCharacter:
    """Tests for the Character aggregate."""

    def test_from_document(self, sample_document: dict[str, Any]) -> None:
        """Test a full document loads with camelCase keys."""
        character = Character.from_document(sample_document)

        assert character.basic_configuration.base_points == 400
        assert character.character_info.character_name == "Ironclad"
        assert len(character.powers) == 10
        assert character.powers[0].modifiers[0].is_advantage is True
        assert character.equipment[3].is_compound is True
        assert character.disadvantages[2].points == 165

    def test_empty_document(self, empty_character: Character) -> None:
        """Test that an empty document is a valid, empty character."""
        assert empty_character.powers == []
        assert empty_character.basic_configuration.base_points == 0

    def test_unknown_fields_are_ignored(self) -> None:
        """Test presentation-only fields do not break loading."""
        character = Character.from_document({"portrait": "data:...", "powers": [{"color": "red"}]})
        assert len(character.powers) == 1

    def test_non_mapping_document(self) -> None:
        """Test that a document which is not a mapping is rejected."""
        with pytest.raises(ValidationError) as exc_info:
            Character.from_document(["not", "a", "character"])  # type: ignore[arg-type]

        assert exc_info.value.details["invalid_value"] == "list"

    def test_malformed_collection(self) -> None:
        """Test that a collection which is not a list is rejected."""
        with pytest.raises(ValidationError) as exc_info:
            Character.from_document({"powers": 42})

        assert exc_info.value.details["field_name"].startswith("powers")

    def test_find_helpers(self, sample_character: Character) -> None:
        """Test lookups by characteristic code and power id."""
        assert sample_character.find_characteristic("STR").total_value == 20
        assert sample_character.find_characteristic("EGO") is None
        assert sample_character.find_power("p5").name == "Rocket Boots"
        assert sample_character.find_power("nope") is None


class TestResultModels:
    """Tests for result serialisation."""

    def test_stat_modification_wire_shape(self) -> None:
        """Test results dump to the camelCase wire shape."""
        mod = StatModification(source="Growth", stat="STR", amount=15)

        assert mod.model_dump(by_alias=True) == {
            "source": "Growth",
            "stat": "STR",
            "amount": 15,
            "active": True,
        }
