"""Meal plan scaling and grocery list generation."""

from dietplanner.plan.grocery_list import GroceryItem, GroceryList, GroceryListAggregator
from dietplanner.plan.scaler import (
    DaySummary,
    MealDistribution,
    MealSummary,
    RecipeScaler,
    organize_by_day,
    summarize_day,
    week_days,
)
from dietplanner.plan.shopping import ShoppableQuantityConverter

__all__ = [
    "DaySummary",
    "GroceryItem",
    "GroceryList",
    "GroceryListAggregator",
    "MealDistribution",
    "MealSummary",
    "RecipeScaler",
    "ShoppableQuantityConverter",
    "organize_by_day",
    "summarize_day",
    "week_days",
]
