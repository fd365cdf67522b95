"""Normalize free-text recipe quantities."""

from dietplanner.normalize.quantity import (
    combine_quantities,
    format_quantity,
    format_value,
    parse_quantity,
    round_half_up,
    split_segments,
)

__all__ = [
    "combine_quantities",
    "format_quantity",
    "format_value",
    "parse_quantity",
    "round_half_up",
    "split_segments",
]
