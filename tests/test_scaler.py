"""Tests for calorie rebalancing of recipes."""

from datetime import date

import pytest

from dietplanner.catalog import load_catalog
from dietplanner.plan.scaler import (
    MealDistribution,
    RecipeScaler,
    organize_by_day,
    summarize_day,
    week_days,
)
from dietplanner.schemas import DietType, MealType

# =============================================================================
# Scaling Factor Tests
# =============================================================================


class TestScalingFactor:
    """Tests for RecipeScaler.scaling_factor."""

    def test_ratio_of_target_to_current(self):
        """Test the factor is target divided by current."""
        assert RecipeScaler.scaling_factor(900, 700) == pytest.approx(0.7778, abs=1e-4)
        assert RecipeScaler.scaling_factor(500, 1000) == 2.0

    def test_zero_current_calories(self):
        """Test a zero-calorie meal is left unscaled."""
        assert RecipeScaler.scaling_factor(0, 700) == 1.0


# =============================================================================
# Day Scaling Tests
# =============================================================================


class TestScaleDay:
    """Tests for RecipeScaler.scale_day."""

    @pytest.fixture
    def scaler(self):
        return RecipeScaler()

    def test_shared_factor_across_meal(self, scaler, breakfast_trio):
        """Test every recipe of a meal is scaled by the same factor."""
        scaled = scaler.scale_day(breakfast_trio, {MealType.BREAKFAST: 700})

        assert [r.calories for r in scaled] == [233, 233, 233]
        assert scaled[0].ingredients[1].quantity == "31.1 g"
        assert scaled[0].ingredients[0].quantity == "1.6 units"
        assert scaled[1].ingredients[0].quantity == "77.8 g"

    def test_meal_total_within_rounding_tolerance(self, scaler, breakfast_trio):
        """Test the scaled meal total lands within one kcal per recipe of target."""
        scaled = scaler.scale_day(breakfast_trio, {MealType.BREAKFAST: 700})
        assert abs(sum(r.calories for r in scaled) - 700) <= len(scaled)

    def test_originals_are_untouched(self, scaler, breakfast_trio):
        """Test scaling returns copies."""
        scaler.scale_day(breakfast_trio, {MealType.BREAKFAST: 700})
        assert breakfast_trio[0].calories == 300
        assert breakfast_trio[0].ingredients[1].quantity == "40g"

    def test_each_meal_scaled_independently(self, scaler, sample_day):
        """Test each meal gets its own factor."""
        targets = {MealType.BREAKFAST: 600, MealType.LUNCH: 400, MealType.DINNER: 600}
        scaled = scaler.scale_day(sample_day, targets)

        assert [r.meal_type for r in scaled] == [MealType.BREAKFAST, MealType.LUNCH, MealType.DINNER]
        assert [r.calories for r in scaled] == [600, 400, 600]
        assert scaled[0].ingredients[0].quantity == "4.5 units"
        assert scaled[1].ingredients[0].quantity == "100 g"
        assert scaled[2].ingredients[0].quantity == "180 g"

    def test_free_text_quantity_is_scaled_from_one(self, scaler, sample_day):
        """Test unparseable quantities scale from the 1.0 fallback."""
        targets = {MealType.BREAKFAST: 400, MealType.LUNCH: 800, MealType.DINNER: 1200}
        scaled = scaler.scale_day(sample_day, targets)
        assert scaled[2].ingredients[1].quantity == "2 To taste"

    def test_missing_target_scales_to_zero(self, scaler, sample_day):
        """Test a meal without a target is scaled to zero calories."""
        scaled = scaler.scale_day(sample_day, {MealType.BREAKFAST: 400, MealType.LUNCH: 800})
        assert scaled[2].calories == 0
        assert scaled[2].ingredients[0].quantity == "0 g"

    def test_zero_calorie_meal_is_unchanged(self, scaler, recipe_factory):
        """Test recipes with no calories keep their quantities."""
        water = recipe_factory("Water", MealType.LUNCH, 0, [("agua", "500 ml")])
        scaled = scaler.scale_day([water], {MealType.LUNCH: 800})
        assert scaled[0].calories == 0
        assert scaled[0].ingredients[0].quantity == "500 ml"

    def test_meal_order_is_canonical(self, scaler, sample_day):
        """Test output order does not depend on input order."""
        targets = {MealType.BREAKFAST: 400, MealType.LUNCH: 800, MealType.DINNER: 600}
        scaled = scaler.scale_day(list(reversed(sample_day)), targets)
        assert [r.title for r in scaled] == ["Omelette", "Chicken Salad", "Salmon Plate"]


# =============================================================================
# Week Scaling Tests
# =============================================================================


class TestScaleWeek:
    """Tests for weekly organization and scaling."""

    def test_organize_by_day_chunks_in_order(self, sample_day):
        """Test a flat list is chunked three at a time."""
        recipes = sample_day * 2 + sample_day[:1]
        chunks = organize_by_day(recipes)
        assert [len(c) for c in chunks] == [3, 3, 1]
        assert chunks[2][0].title == "Omelette"

    def test_week_days_start_on_monday(self):
        """Test the week contains the reference date and starts on Monday."""
        days = week_days(date(2026, 10, 22))
        assert days[0] == date(2026, 10, 19)
        assert days[-1] == date(2026, 10, 25)
        assert len(days) == 7

    def test_extra_chunks_are_dropped(self, sample_day):
        """Test chunks beyond the available days are ignored."""
        days = week_days(date(2026, 10, 19))[:2]
        plan = RecipeScaler().scale_week(sample_day * 3, {}, days)
        assert list(plan) == days

    @pytest.mark.parametrize("diet", list(DietType))
    def test_catalog_week_hits_targets(self, diet):
        """Test every meal of every catalog day lands on its target."""
        targets = MealDistribution.custom(35, 40, 25).targets_for(2000)
        days = week_days(date(2026, 10, 19))
        plan = RecipeScaler().scale_week(list(load_catalog(diet)), targets, days)

        assert list(plan) == days
        for recipes in plan.values():
            for meal_type, target in targets.items():
                group = [r for r in recipes if r.meal_type == meal_type]
                assert abs(sum(r.calories for r in group) - target) <= len(group)


# =============================================================================
# Distribution and Summary Tests
# =============================================================================


class TestMealDistribution:
    """Tests for MealDistribution presets."""

    @pytest.mark.parametrize(
        "distribution",
        [MealDistribution.balanced(), MealDistribution.front_loaded(), MealDistribution.back_loaded()],
    )
    def test_presets_sum_to_one(self, distribution):
        """Test presets split the whole day."""
        total = distribution.breakfast + distribution.lunch + distribution.dinner
        assert total == pytest.approx(1.0)

    def test_custom_weights_are_normalized(self):
        """Test relative weights become shares."""
        targets = MealDistribution.custom(35, 40, 25).targets_for(2000)
        assert targets[MealType.BREAKFAST] == pytest.approx(700)
        assert targets[MealType.LUNCH] == pytest.approx(800)
        assert targets[MealType.DINNER] == pytest.approx(500)

    def test_custom_without_weight_is_balanced(self):
        """Test all-zero weights fall back to the balanced split."""
        assert MealDistribution.custom(0, 0, 0) == MealDistribution.balanced()


class TestSummarizeDay:
    """Tests for day summaries."""

    def test_totals_and_progress(self, sample_day):
        """Test consumed and target totals."""
        targets = {MealType.BREAKFAST: 400, MealType.LUNCH: 1000, MealType.DINNER: 600}
        summary = summarize_day(sample_day, targets)

        assert summary.consumed_calories == 1800
        assert summary.target_calories == 2000
        assert summary.remaining_calories == 200
        assert summary.progress == pytest.approx(0.9)

    def test_meal_completion(self, sample_day):
        """Test a meal counts as complete from 95% of its target."""
        targets = {MealType.BREAKFAST: 400, MealType.LUNCH: 1000, MealType.DINNER: 620}
        meals = summarize_day(sample_day, targets).meals

        assert meals[MealType.BREAKFAST].is_complete
        assert not meals[MealType.LUNCH].is_complete
        assert meals[MealType.DINNER].is_complete
        assert meals[MealType.LUNCH].remaining_calories == 200
