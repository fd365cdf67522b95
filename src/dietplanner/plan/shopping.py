"""Conversion of aggregated recipe quantities into purchasable amounts."""

import math

from dietplanner.logging_config import get_logger
from dietplanner.matching.matcher import IngredientNameMatcher
from dietplanner.matching.reference import ConversionEntry
from dietplanner.normalize.quantity import format_value, parse_quantity, split_segments
from dietplanner.schemas import UnitSystem

logger = get_logger(__name__)


# Weight conversions (base unit: g)
WEIGHT_UNITS: dict[str, float] = {
    "g": 1.0,
    "gr": 1.0,
    "grs": 1.0,
    "kg": 1000.0,
}

# Volume units handled alongside weights (1 ml is counted as 1 g)
VOLUME_UNITS = frozenset({"ml"})

# Placeholder count units, replaced by the ingredient's own purchase unit
GENERIC_COUNT_UNITS = frozenset({"unit", "units", "unidad", "unidades"})

GRAMS_PER_OUNCE = 28.3495
OUNCES_PER_GRAM = 0.035274
POUNDS_PER_GRAM = 0.00220462
FL_OZ_PER_ML = 0.033814


def ceil_count(value: float) -> int:
    """Round up, ignoring float noise left over from summing decimals."""
    return math.ceil(round(value, 6))


def collapse_to_grams(combined: str) -> tuple[float, str]:
    """
    Collapse a combined quantity into a single total.

    Weight segments are summed in grams ("150 g + 1 kg" -> (1150.0, "g")).
    The first segment in any other unit is returned unchanged instead.
    """
    total = 0.0
    unit = ""

    for segment in split_segments(combined):
        value, segment_unit = parse_quantity(segment)
        factor = WEIGHT_UNITS.get(segment_unit.lower())
        if factor is None:
            return value, segment_unit
        total += value * factor
        unit = "g"

    return total, unit


def format_weight(grams: float, system: UnitSystem) -> str:
    """Render a weight rounded up to a sensible shelf size."""
    if system == UnitSystem.METRIC:
        if grams < 5:
            return f"{format_value(grams)} g"
        if grams < 20:
            return f"{ceil_count(grams / 5) * 5} g"
        if grams < 100:
            return f"{ceil_count(grams / 10) * 10} g"
        if grams >= 1000:
            return f"{format_value(ceil_count(grams / 100) / 10)} kg"
        return f"{ceil_count(grams / 50) * 50} g"

    if grams < GRAMS_PER_OUNCE:
        ounces = grams * OUNCES_PER_GRAM
        if ounces < 0.1:
            return "⅛ oz"
        if ounces < 0.25:
            return "¼ oz"
        if ounces < 0.5:
            return "½ oz"
        if ounces < 0.75:
            return "¾ oz"
        return "1 oz"

    pounds = grams * POUNDS_PER_GRAM
    if pounds < 1:
        return f"{ceil_count(grams * OUNCES_PER_GRAM)} oz"

    whole = math.floor(pounds)
    remainder = pounds - whole
    if remainder < 0.125:
        return f"{whole} lb"
    if remainder < 0.375:
        return f"{whole}¼ lb"
    if remainder < 0.625:
        return f"{whole}½ lb"
    if remainder < 0.875:
        return f"{whole}¾ lb"
    return f"{whole + 1} lb"


def format_volume(ml: float, system: UnitSystem) -> str:
    """Render a volume rounded up to a sensible container size."""
    if system == UnitSystem.METRIC:
        if ml >= 1000:
            return f"{format_value(ceil_count(ml / 100) / 10)} L"
        return f"{ceil_count(ml / 50) * 50} ml"

    fl_oz = ml * FL_OZ_PER_ML
    if fl_oz < 0.25:
        return "¼ fl oz"
    if fl_oz < 0.5:
        return "½ fl oz"
    if fl_oz < 1:
        return "1 fl oz"
    if fl_oz <= 32:
        return f"{ceil_count(fl_oz)} fl oz"

    quarts = fl_oz / 32
    if quarts < 2:
        return "1 qt"
    if quarts < 4:
        return f"{ceil_count(quarts)} qt"
    return f"{ceil_count(quarts / 4)} gal"


class ShoppableQuantityConverter:
    """
    Turns combined recipe quantities into what you would actually buy.

    "550 g" of aguacate becomes "3 aguacates"; unmatched ingredients get
    generic kg/L rollups or countable hints. Counts are always rounded up so
    the list never under-buys.
    """

    def __init__(self, matcher: IngredientNameMatcher | None = None):
        self.matcher = matcher or IngredientNameMatcher()

    def convert(
        self,
        name: str,
        combined_quantity: str,
        unit_system: UnitSystem = UnitSystem.METRIC,
    ) -> str:
        """
        Convert a combined quantity for one ingredient.

        Args:
            name: Ingredient display name.
            combined_quantity: Output of combine_quantities, e.g. "150 g + 50 g".
            unit_system: Which purchase unit names to use.

        Returns:
            Purchasable quantity string.
        """
        value, unit = collapse_to_grams(combined_quantity)

        normalized = self.matcher.normalize(name)
        entry = self.matcher.resolve(normalized)
        if entry is None:
            logger.debug(f"No conversion entry for '{name}' (normalized '{normalized}')")
            return self._convert_generic(name, combined_quantity, value, unit)

        return self._convert_with_entry(name, value, unit, entry, unit_system)

    def _convert_with_entry(
        self,
        name: str,
        value: float,
        unit: str,
        entry: ConversionEntry,
        unit_system: UnitSystem,
    ) -> str:
        unit_key = unit.lower()

        # Already in discrete units ("2 cloves"): buy whole items, naming
        # "3 units" of aguacate as "3 aguacates"
        if unit and unit_key not in WEIGHT_UNITS and unit_key not in VOLUME_UNITS:
            count = ceil_count(value)
            if unit_key in GENERIC_COUNT_UNITS:
                return f"{count} {entry.unit_name(unit_system, count)}"
            return f"{count} {unit}"

        if entry.keep_in_grams:
            if unit_key in VOLUME_UNITS:
                return format_volume(value, unit_system)
            return format_weight(value, unit_system)

        # Liquids are bought in containers too; ml counts against the container size like grams
        if self.matcher.reference.is_liquid(name):
            logger.debug(f"Counting '{name}' in {entry.unit} containers")

        units = max(1, ceil_count(value / entry.average_weight))
        return f"{units} {entry.unit_name(unit_system, units)}"

    def _convert_generic(self, name: str, combined_quantity: str, value: float, unit: str) -> str:
        unit_key = unit.lower()

        if unit_key == "g" and value >= 1000:
            return f"{format_value(ceil_count(value / 100) / 10)} kg"

        if unit_key in VOLUME_UNITS and value >= 1000:
            return f"{format_value(ceil_count(value / 100) / 10)} L"

        lowered = name.lower()
        for hint in self.matcher.reference.countable_hints:
            if hint in lowered:
                count = max(1, ceil_count(value))
                return f"{count} {hint}{'s' if count > 1 else ''}"

        return combined_quantity
