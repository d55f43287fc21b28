"""Tests for the availability calculator."""

from __future__ import annotations

from hero_ledger.engine.availability import (
    available_points,
    character_summary,
    disadvantage_total,
    disadvantages_earned,
    total_points,
)
from hero_ledger.models import Character


class TestDisadvantages:
    """Tests for complication points."""

    def test_total(self, sample_character: Character) -> None:
        """Test complication points are summed, including numeric strings."""
        assert disadvantage_total(sample_character) == 200

    def test_earned_is_capped(self, sample_character: Character) -> None:
        """Test complications earn no more than the campaign cap."""
        assert disadvantages_earned(sample_character) == 150

    def test_earned_below_cap(self) -> None:
        """Test complications under the cap are earned in full."""
        character = Character.from_document(
            {
                "basicConfiguration": {"disadPoints": 75},
                "disadvantages": [{"points": 25}, {"points": None}, {"points": "x"}],
            }
        )
        assert disadvantages_earned(character) == 25


class TestAvailablePoints:
    """Tests for points remaining."""

    def test_scenario(self, sample_character: Character) -> None:
        """Test 400 base + 150 earned - 380 spent leaves 170."""
        assert total_points(sample_character) == 550
        assert available_points(sample_character) == 170

    def test_experience_is_added(self) -> None:
        """Test experience adds to the budget."""
        character = Character.from_document(
            {
                "basicConfiguration": {"basePoints": 175, "experience": 12},
                "skills": [{"baseCost": 10}],
            }
        )
        assert available_points(character) == 177

    def test_overspent_is_negative(self) -> None:
        """Test an overspent sheet reports a negative balance."""
        character = Character.from_document(
            {"basicConfiguration": {"basePoints": 10}, "perks": [{"baseCost": 15}]}
        )
        assert available_points(character) == -5

    def test_empty_character(self, empty_character: Character) -> None:
        """Test a blank sheet has nothing to spend."""
        assert available_points(empty_character) == 0


class TestCharacterSummary:
    """Tests for the full point summary."""

    def test_summary(self, sample_character: Character) -> None:
        """Test the summary of the sample sheet."""
        summary = character_summary(sample_character)

        assert summary.base_points == 400
        assert summary.experience == 0
        assert summary.disadvantages_total == 200
        assert summary.disadvantages_earned == 150
        assert summary.spent == 380
        assert summary.available == 170
        assert summary.breakdown.powers == 322

    def test_summary_agrees_with_available_points(self, sample_character: Character) -> None:
        """Test the summary and the scalar function agree."""
        assert character_summary(sample_character).available == available_points(sample_character)

    def test_wire_shape(self, sample_character: Character) -> None:
        """Test the summary serialises to camelCase."""
        data = character_summary(sample_character).model_dump(by_alias=True)

        assert data["disadvantagesEarned"] == 150
        assert data["breakdown"]["total"] == 380
