"""Common data schemas for the planning pipeline."""

from datetime import date
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class MealType(str, Enum):
    """Meal slot a recipe belongs to, in canonical day order."""

    BREAKFAST = "Breakfast"
    LUNCH = "Lunch"
    DINNER = "Dinner"


class UnitSystem(str, Enum):
    """Measurement system used to name purchase units."""

    METRIC = "metric"
    IMPERIAL = "imperial"


class DietType(str, Enum):
    """Recipe catalog identifiers."""

    KETO = "keto"
    LOW_CARB = "lowcarb"
    CALORIE_DEFICIT = "caloriedeficit"

    @classmethod
    def from_label(cls, label: str | None) -> "DietType":
        """
        Resolve a free-form diet label to a catalog identifier.

        Labels are lower-cased and stripped of non-letters ("Low Carb" -> lowcarb).
        Unrecognized labels fall back to the calorie deficit catalog.
        """
        normalized = "".join(ch for ch in (label or "").lower() if ch.isalpha())
        if normalized == "deficit":
            return cls.CALORIE_DEFICIT
        try:
            return cls(normalized)
        except ValueError:
            return cls.CALORIE_DEFICIT


class Ingredient(BaseModel):
    """Ingredient line of a recipe."""

    model_config = ConfigDict(frozen=True)

    name: str
    quantity: str
    checked: bool = False


class Recipe(BaseModel):
    """Catalog recipe. Scaled variants are produced as copies."""

    model_config = ConfigDict(frozen=True)

    title: str
    meal_type: MealType
    image_name: str = ""
    ingredients: list[Ingredient] = Field(default_factory=list)
    instructions: str = ""
    calories: int = Field(ge=0)


# Calorie target per meal slot, in absolute kcal
MealCalorieTarget = dict[MealType, float]

# Scaled recipes for each day of the week
WeeklyPlan = dict[date, list[Recipe]]
