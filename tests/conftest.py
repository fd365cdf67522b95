"""Pytest configuration and shared fixtures."""

from datetime import date

import pytest

from dietplanner.config import Settings
from dietplanner.database import create_preferences_engine
from dietplanner.matching import IngredientNameMatcher
from dietplanner.plan import GroceryListAggregator, ShoppableQuantityConverter
from dietplanner.schemas import Ingredient, MealType, Recipe
from dietplanner.store import CheckedItemsRepository, InMemoryStore, SqlPreferenceStore


def make_recipe(title, meal_type, calories, ingredients=()):
    """Build a recipe from (name, quantity) pairs."""
    return Recipe(
        title=title,
        meal_type=meal_type,
        calories=calories,
        ingredients=[Ingredient(name=name, quantity=quantity) for name, quantity in ingredients],
    )


# =============================================================================
# Recipe Fixtures
# =============================================================================


@pytest.fixture
def recipe_factory():
    """The make_recipe helper, for tests that build their own recipes."""
    return make_recipe


@pytest.fixture
def breakfast_trio():
    """Three breakfast recipes worth 900 kcal in total."""
    return [
        make_recipe("Egg Scramble", MealType.BREAKFAST, 300, [("huevo", "2 units"), ("queso", "40g")]),
        make_recipe("Avocado Toast", MealType.BREAKFAST, 300, [("aguacate", "100 g")]),
        make_recipe("Yogurt Bowl", MealType.BREAKFAST, 300, [("yogur griego", "150g")]),
    ]


@pytest.fixture
def sample_day():
    """One recipe per meal, 1800 kcal in total."""
    return [
        make_recipe("Omelette", MealType.BREAKFAST, 400, [("huevo", "3 units"), ("espinaca", "50g")]),
        make_recipe("Chicken Salad", MealType.LUNCH, 800, [("pollo", "200g"), ("lechuga", "100g")]),
        make_recipe("Salmon Plate", MealType.DINNER, 600, [("salmón", "180g"), ("limón", "To taste")]),
    ]


@pytest.fixture
def weekly_plan():
    """Two days sharing some ingredients."""
    return {
        date(2026, 10, 19): [
            make_recipe("Avocado Salad", MealType.LUNCH, 500, [("tomate", "100g"), ("aguacate", "300 g")]),
        ],
        date(2026, 10, 20): [
            make_recipe(
                "Guacamole",
                MealType.DINNER,
                450,
                [("tomate", "200 g"), ("aguacate", "250 g"), ("ajo", "2 cloves")],
            ),
        ],
    }


# =============================================================================
# Component Fixtures
# =============================================================================


@pytest.fixture
def settings():
    """Settings with defaults, ignoring any local .env file."""
    return Settings(_env_file=None)


@pytest.fixture
def matcher():
    """Matcher over the bundled reference tables."""
    return IngredientNameMatcher()


@pytest.fixture
def converter(matcher):
    """Converter over the bundled reference tables."""
    return ShoppableQuantityConverter(matcher)


@pytest.fixture
def memory_store():
    """Empty in-memory preference store."""
    return InMemoryStore()


@pytest.fixture
def aggregator(memory_store, converter):
    """Aggregator persisting checked items to the in-memory store."""
    return GroceryListAggregator(CheckedItemsRepository(memory_store), converter)


@pytest.fixture
def sql_engine():
    """In-memory SQLite engine with the preferences table created."""
    engine = create_preferences_engine("sqlite://")
    yield engine
    engine.dispose()


@pytest.fixture
def sql_store(sql_engine):
    """Preference store backed by in-memory SQLite."""
    return SqlPreferenceStore(sql_engine)
