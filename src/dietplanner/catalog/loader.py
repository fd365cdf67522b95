"""Static weekly recipe catalogs, one per diet type."""

from functools import lru_cache
from importlib import resources

from pydantic import TypeAdapter, ValidationError

from dietplanner.logging_config import get_logger
from dietplanner.schemas import DietType, Recipe

logger = get_logger(__name__)

_RECIPE_LIST = TypeAdapter(list[Recipe])


class CatalogError(Exception):
    """Raised when a bundled catalog file is missing or invalid."""

    def __init__(self, message: str, diet: DietType | None = None):
        super().__init__(message)
        self.diet = diet


@lru_cache
def load_catalog(diet: DietType) -> tuple[Recipe, ...]:
    """
    Load the template recipes for a diet, in weekly order.

    The catalog lists 21 recipes: breakfast, lunch and dinner for seven days.
    Results are cached; recipes are frozen so callers cannot alter the cache.
    """
    resource = resources.files("dietplanner.catalog").joinpath("data", f"{diet.value}.json")
    try:
        raw = resource.read_text(encoding="utf-8")
    except FileNotFoundError as e:
        raise CatalogError(f"No catalog file for diet '{diet.value}'", diet=diet) from e

    try:
        recipes = _RECIPE_LIST.validate_json(raw)
    except ValidationError as e:
        raise CatalogError(f"Invalid catalog for diet '{diet.value}': {e}", diet=diet) from e

    logger.debug(f"Loaded {len(recipes)} recipes for diet '{diet.value}'")
    return tuple(recipes)


def load_catalog_for_label(label: str | None) -> tuple[Recipe, ...]:
    """Load a catalog from a free-form diet label, falling back to calorie deficit."""
    return load_catalog(DietType.from_label(label))
