"""Ingredient name matching against purchase-unit reference data."""

from dietplanner.matching.matcher import IngredientNameMatcher, MatchResult
from dietplanner.matching.reference import (
    DEFAULT_REFERENCE,
    INGREDIENT_CONVERSIONS,
    INGREDIENT_SYNONYMS,
    ConversionEntry,
    ReferenceData,
)

__all__ = [
    "DEFAULT_REFERENCE",
    "INGREDIENT_CONVERSIONS",
    "INGREDIENT_SYNONYMS",
    "ConversionEntry",
    "IngredientNameMatcher",
    "MatchResult",
    "ReferenceData",
]
