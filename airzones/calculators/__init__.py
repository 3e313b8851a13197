"""Pure calculation helpers for classification and labelling.

All helpers are stateless and testable without spatial data.
"""

from airzones.calculators.bands import find_band, locate_band, select_levels
from airzones.calculators.formatting import (
    build_popup,
    fix_unit_spacing,
    format_band_text,
    format_number,
    format_value,
    station_count_phrase,
    strip_unit_prefix,
)

__all__ = [
    "select_levels",
    "find_band",
    "locate_band",
    "fix_unit_spacing",
    "strip_unit_prefix",
    "format_number",
    "format_band_text",
    "format_value",
    "station_count_phrase",
    "build_popup",
]
