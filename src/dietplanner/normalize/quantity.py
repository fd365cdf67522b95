"""Free-text quantity parsing and combination."""

import math
import re
from collections import defaultdict
from collections.abc import Iterable

from dietplanner.logging_config import get_logger

logger = get_logger(__name__)

# Leading integer or decimal, then the rest of the string as the unit.
# Signs are not accepted, so parsed values are never negative.
QUANTITY_PATTERN = re.compile(r"^([0-9]*\.?[0-9]+)\s*(.*)$", re.DOTALL)

SEGMENT_SEPARATOR = " + "


def round_half_up(value: float, digits: int = 0) -> float:
    """Round a non-negative value half away from zero (not banker's rounding)."""
    scale = 10**digits
    return math.floor(value * scale + 0.5) / scale


def parse_quantity(text: str) -> tuple[float, str]:
    """
    Split a quantity string into its numeric value and unit.

    Examples:
        "150g" -> (150.0, "g")
        "2 cloves" -> (2.0, "cloves")
        "To taste" -> (1.0, "To taste")
        "1/2 unit" -> (1.0, "1/2 unit")

    Text without a leading number, and fractions written with a slash, fall
    back to a value of 1.0 with the original text as the unit.
    """
    trimmed = text.strip()
    match = QUANTITY_PATTERN.match(trimmed)
    if not match:
        return 1.0, trimmed

    unit = match.group(2).strip()
    if unit.startswith("/"):
        return 1.0, trimmed

    return float(match.group(1)), unit


def format_value(value: float) -> str:
    """Format a value rounded to one decimal, dropping ".0" for whole numbers."""
    rounded = round_half_up(value, 1)
    if rounded == int(rounded):
        return str(int(rounded))
    return f"{rounded:.1f}"


def format_quantity(value: float, unit: str) -> str:
    """Format a value with its unit, omitting the separator when unit is empty."""
    formatted = format_value(value)
    if unit:
        return f"{formatted} {unit}"
    return formatted


def combine_quantities(quantities: Iterable[str]) -> str:
    """
    Sum quantity strings that share a unit.

    Unitless values come first, then one segment per unit in unit-name
    order, joined with " + ":

        ["40g", "60g"] -> "100 g"
        ["150 g", "2 units"] -> "150 g + 2 units"
    """
    unit_totals: dict[str, float] = defaultdict(float)

    for quantity in quantities:
        value, unit = parse_quantity(quantity)
        unit_totals[unit] += value

    segments: list[str] = []
    if "" in unit_totals:
        segments.append(format_value(unit_totals.pop("")))

    for unit in sorted(unit_totals):
        segments.append(format_quantity(unit_totals[unit], unit))

    return SEGMENT_SEPARATOR.join(segments)


def split_segments(combined: str) -> list[str]:
    """Split a combined quantity back into its trimmed segments."""
    return [segment.strip() for segment in combined.split(SEGMENT_SEPARATOR)]
