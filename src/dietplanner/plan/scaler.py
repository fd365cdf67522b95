"""Calorie rebalancing of daily recipes against per-meal targets."""

from dataclasses import dataclass, field
from datetime import date, timedelta

from dietplanner.logging_config import get_logger
from dietplanner.normalize.quantity import format_quantity, parse_quantity, round_half_up
from dietplanner.schemas import Ingredient, MealCalorieTarget, MealType, Recipe, WeeklyPlan

logger = get_logger(__name__)

RECIPES_PER_DAY = 3
DAYS_PER_WEEK = 7


@dataclass(frozen=True)
class MealDistribution:
    """Share of the daily calories assigned to each meal."""

    breakfast: float
    lunch: float
    dinner: float

    @classmethod
    def balanced(cls) -> "MealDistribution":
        return cls(0.30, 0.40, 0.30)

    @classmethod
    def front_loaded(cls) -> "MealDistribution":
        return cls(0.40, 0.35, 0.25)

    @classmethod
    def back_loaded(cls) -> "MealDistribution":
        return cls(0.25, 0.35, 0.40)

    @classmethod
    def custom(cls, breakfast: float, lunch: float, dinner: float) -> "MealDistribution":
        """Build a distribution from relative weights, e.g. custom(35, 40, 25)."""
        total = breakfast + lunch + dinner
        if total <= 0:
            return cls.balanced()
        return cls(breakfast / total, lunch / total, dinner / total)

    def targets_for(self, daily_calories: float) -> MealCalorieTarget:
        """Absolute calorie target per meal for a daily total."""
        return {
            MealType.BREAKFAST: daily_calories * self.breakfast,
            MealType.LUNCH: daily_calories * self.lunch,
            MealType.DINNER: daily_calories * self.dinner,
        }


@dataclass
class MealSummary:
    """Consumed versus target calories for one meal."""

    meal_type: MealType
    target_calories: float
    consumed_calories: float

    @property
    def progress(self) -> float:
        if self.target_calories <= 0:
            return 0.0
        return self.consumed_calories / self.target_calories

    @property
    def is_complete(self) -> bool:
        return self.progress >= 0.95

    @property
    def remaining_calories(self) -> float:
        return max(self.target_calories - self.consumed_calories, 0.0)


@dataclass
class DaySummary:
    """Calorie totals for one day of the plan."""

    target_calories: float
    consumed_calories: float
    meals: dict[MealType, MealSummary] = field(default_factory=dict)

    @property
    def remaining_calories(self) -> float:
        return max(self.target_calories - self.consumed_calories, 0.0)

    @property
    def progress(self) -> float:
        if self.target_calories <= 0:
            return 0.0
        return min(self.consumed_calories / self.target_calories, 1.0)


def week_days(reference: date) -> list[date]:
    """The seven dates of the Monday-started week containing ``reference``."""
    start = reference - timedelta(days=reference.weekday())
    return [start + timedelta(days=offset) for offset in range(DAYS_PER_WEEK)]


def organize_by_day(recipes: list[Recipe], recipes_per_day: int = RECIPES_PER_DAY) -> list[list[Recipe]]:
    """Chunk a flat weekly list into days; a trailing partial chunk is its own day."""
    return [recipes[i : i + recipes_per_day] for i in range(0, len(recipes), recipes_per_day)]


def summarize_day(recipes: list[Recipe], targets: MealCalorieTarget) -> DaySummary:
    """Compare a day's recipe calories with its meal targets."""
    meals: dict[MealType, MealSummary] = {}
    for meal_type in MealType:
        consumed = sum(r.calories for r in recipes if r.meal_type == meal_type)
        meals[meal_type] = MealSummary(
            meal_type=meal_type,
            target_calories=targets.get(meal_type, 0.0),
            consumed_calories=float(consumed),
        )

    return DaySummary(
        target_calories=sum(m.target_calories for m in meals.values()),
        consumed_calories=sum(m.consumed_calories for m in meals.values()),
        meals=meals,
    )


class RecipeScaler:
    """
    Rescales recipes so each meal of a day hits its calorie target.

    All recipes of one meal share a single factor (target / current calories),
    so ingredient proportions inside the meal are preserved. Scaling never
    raises: a zero-calorie meal keeps factor 1.0 and unparseable quantities
    are scaled from the parser's 1.0 fallback.
    """

    def __init__(self, recipes_per_day: int = RECIPES_PER_DAY):
        self.recipes_per_day = recipes_per_day

    @staticmethod
    def scaling_factor(current_calories: float, target_calories: float) -> float:
        """Factor that turns the current meal total into the target."""
        if current_calories > 0:
            return target_calories / current_calories
        return 1.0

    @staticmethod
    def scale_ingredient(ingredient: Ingredient, factor: float) -> Ingredient:
        value, unit = parse_quantity(ingredient.quantity)
        return ingredient.model_copy(update={"quantity": format_quantity(value * factor, unit)})

    def scale_recipe(self, recipe: Recipe, factor: float) -> Recipe:
        """Copy of a recipe with calories and every ingredient quantity scaled."""
        return recipe.model_copy(
            update={
                "calories": int(round_half_up(max(recipe.calories * factor, 0.0))),
                "ingredients": [self.scale_ingredient(i, factor) for i in recipe.ingredients],
            }
        )

    def scale_day(self, recipes: list[Recipe], targets: MealCalorieTarget) -> list[Recipe]:
        """
        Rescale one day's recipes meal by meal.

        Args:
            recipes: The day's recipes, normally one per meal type.
            targets: Absolute calorie target per meal type.

        Returns:
            Scaled copies in breakfast, lunch, dinner order.
        """
        scaled: list[Recipe] = []

        for meal_type in MealType:
            group = [r for r in recipes if r.meal_type == meal_type]
            if not group:
                continue

            current = sum(r.calories for r in group)
            target = targets.get(meal_type, 0.0)
            factor = self.scaling_factor(current, target)
            logger.debug(
                f"{meal_type.value}: {current} kcal -> target {target:.0f} kcal (factor {factor:.3f})"
            )

            scaled.extend(self.scale_recipe(recipe, factor) for recipe in group)

        return scaled

    def scale_week(
        self,
        recipes: list[Recipe],
        targets: MealCalorieTarget,
        days: list[date],
    ) -> WeeklyPlan:
        """
        Distribute a flat weekly recipe list over days and rescale each day.

        Chunks beyond the number of available days are dropped.
        """
        plan: WeeklyPlan = {}
        for day, day_recipes in zip(days, organize_by_day(recipes, self.recipes_per_day)):
            plan[day] = self.scale_day(day_recipes, targets)

        logger.info(
            f"Scaled {sum(len(v) for v in plan.values())} recipes over {len(plan)} days"
        )
        return plan
