"""Facade that keeps the weekly plan and grocery list in sync with user choices."""

import itertools
from datetime import date

from dietplanner.catalog import load_catalog
from dietplanner.config import Settings, get_settings
from dietplanner.logging_config import LoggingContext, get_logger
from dietplanner.matching.matcher import IngredientNameMatcher
from dietplanner.matching.reference import DEFAULT_REFERENCE, ReferenceData
from dietplanner.plan.grocery_list import GroceryItem, GroceryList, GroceryListAggregator
from dietplanner.plan.scaler import DaySummary, MealDistribution, RecipeScaler, summarize_day, week_days
from dietplanner.plan.shopping import ShoppableQuantityConverter
from dietplanner.schemas import DietType, MealCalorieTarget, MealType, Recipe, UnitSystem, WeeklyPlan
from dietplanner.store import (
    CheckedItemsRepository,
    DietSelectionRepository,
    PreferenceStore,
    SqlPreferenceStore,
)

logger = get_logger(__name__)

DEFAULT_DAILY_CALORIES = 2000.0
DEFAULT_DISTRIBUTION = MealDistribution.custom(breakfast=35, lunch=40, dinner=25)

DIET_LABELS: dict[DietType, str] = {
    DietType.KETO: "Keto",
    DietType.LOW_CARB: "Low Carb",
    DietType.CALORIE_DEFICIT: "Calorie Deficit",
}


class MealPlanEngine:
    """
    Recomputes the scaled week and its grocery list on every user change.

    Three events trigger a full recompute: a diet change, a profile change
    (new calorie targets) and a day selection. Each run reloads the catalog,
    rescales all seven days and rebuilds the grocery list, merging back the
    persisted checked names.
    """

    def __init__(
        self,
        store: PreferenceStore,
        settings: Settings | None = None,
        reference: ReferenceData = DEFAULT_REFERENCE,
        today: date | None = None,
        daily_calories: float = DEFAULT_DAILY_CALORIES,
        meal_targets: MealCalorieTarget | None = None,
    ):
        self.settings = settings or get_settings()
        self.unit_system: UnitSystem = self.settings.unit_system

        self.diet_selection = DietSelectionRepository(store, default=self.settings.default_diet)
        self.diet: DietType = self.diet_selection.load()

        matcher = IngredientNameMatcher(reference, fuzzy_threshold=self.settings.fuzzy_match_threshold)
        self.aggregator = GroceryListAggregator(
            CheckedItemsRepository(store),
            ShoppableQuantityConverter(matcher),
        )
        self.scaler = RecipeScaler(self.settings.recipes_per_day)

        self.days = week_days(today or date.today())
        self.selected_day = self.days[0]

        self.daily_calories = daily_calories
        self.meal_targets = meal_targets or DEFAULT_DISTRIBUTION.targets_for(daily_calories)

        self.weekly_plan: WeeklyPlan = {}
        self._run_ids = itertools.count(1)
        self.recompute()

    @classmethod
    def from_settings(cls, settings: Settings | None = None, **kwargs) -> "MealPlanEngine":
        """Engine whose preferences live in the database at ``settings.preferences_url``."""
        settings = settings or get_settings()
        return cls(SqlPreferenceStore.from_url(settings.preferences_url), settings=settings, **kwargs)

    # ------------------------------------------------------------------
    # Triggers
    # ------------------------------------------------------------------

    def select_diet(self, label: str | DietType) -> DietType:
        """Switch catalogs; unknown labels fall back to calorie deficit."""
        self.diet = label if isinstance(label, DietType) else DietType.from_label(label)
        self.diet_selection.save(self.diet)
        self.recompute()
        return self.diet

    def update_profile(
        self,
        daily_calories: float,
        meal_targets: MealCalorieTarget | None = None,
        distribution: MealDistribution | None = None,
    ) -> None:
        """
        Apply new profile-derived calorie targets.

        Args:
            daily_calories: Daily calorie target computed by the host app.
            meal_targets: Absolute calories per meal; takes precedence.
            distribution: Used to derive meal targets when none are given.
        """
        self.daily_calories = daily_calories
        if meal_targets is None:
            meal_targets = (distribution or DEFAULT_DISTRIBUTION).targets_for(daily_calories)
        self.meal_targets = meal_targets
        self.recompute()

    def select_day(self, day: date) -> None:
        if day not in self.days:
            logger.warning(f"{day.isoformat()} is outside the planned week")
        self.selected_day = day
        self.recompute()

    def set_unit_system(self, unit_system: UnitSystem) -> GroceryList:
        """Re-render purchase quantities; the plan itself does not change."""
        self.unit_system = unit_system
        return self.aggregator.recompute(self.weekly_plan, unit_system)

    def recompute(self) -> GroceryList:
        """Rescale the week from the catalog and rebuild the grocery list."""
        with LoggingContext(diet_type=self.diet.value, run_id=next(self._run_ids)):
            recipes = list(load_catalog(self.diet))
            self.weekly_plan = self.scaler.scale_week(recipes, self.meal_targets, self.days)
            return self.aggregator.recompute(self.weekly_plan, self.unit_system)

    # ------------------------------------------------------------------
    # Plan views
    # ------------------------------------------------------------------

    def recipes_for(self, meal_type: MealType, day: date | None = None) -> list[Recipe]:
        recipes = self.weekly_plan.get(day or self.selected_day, [])
        return [r for r in recipes if r.meal_type == meal_type]

    def consumed_calories(self, day: date | None = None) -> dict[MealType, int]:
        return {
            meal_type: sum(r.calories for r in self.recipes_for(meal_type, day)) for meal_type in MealType
        }

    def total_daily_calories(self, day: date | None = None) -> int:
        return sum(self.consumed_calories(day).values())

    def calorie_progress(self, day: date | None = None) -> float:
        """Consumed share of the daily target, capped at 1.0."""
        if self.daily_calories <= 0:
            return 0.0
        return min(self.total_daily_calories(day) / self.daily_calories, 1.0)

    def day_summary(self, day: date | None = None) -> DaySummary:
        return summarize_day(self.weekly_plan.get(day or self.selected_day, []), self.meal_targets)

    # ------------------------------------------------------------------
    # Grocery list
    # ------------------------------------------------------------------

    @property
    def grocery_list(self) -> GroceryList:
        return self.aggregator.grocery_list

    def toggle_check(self, name: str) -> GroceryItem | None:
        return self.aggregator.toggle(name)

    def clear_checked(self) -> None:
        self.aggregator.clear_checked()

    def grocery_list_text(self) -> str:
        return self.grocery_list.to_text(DIET_LABELS[self.diet])
