"""Label, tooltip and popup text formatting."""

import html
import re

from airzones.config import PALETTE
from airzones.models.enums import LevelKind

# A digit directly followed by a letter or unit symbol (µ, °, ...)
_NUMBER_UNIT = re.compile(r"(\d)([^\W\d_]|[°%‰])")


def fix_unit_spacing(text: str) -> str:
    """Insert a space between a number and a following unit marker.

    Example:
        >>> fix_unit_spacing("up to 60µg/m³")
        'up to 60 µg/m³'
    """
    return _NUMBER_UNIT.sub(r"\1 \2", text)


def strip_unit_prefix(text: str, unit: str) -> str:
    """Remove a leading unit from a band label so the unit is printed once."""
    stripped = text.strip()
    if unit and stripped.startswith(unit):
        stripped = stripped[len(unit) :].lstrip(" :-")
    return stripped


def format_number(value: float) -> str:
    """Format a band cut without trailing zeros (60.0 -> "60", 8.8 -> "8.8")."""
    return f"{value:g}"


def format_band_text(
    kind: LevelKind,
    cut_low: float | None,
    cut_high: float | None,
    unit: str,
) -> str | None:
    """Build a band label from its cuts when the scoring library gives none.

    Returns:
        Band text with the unit attached to the numbers (spacing is fixed
        separately), or None for a band covering every value
    """
    open_low = cut_low is None or cut_low == 0
    if open_low and cut_high is None:
        return None

    if kind is LevelKind.ACHIEVEMENT:
        if open_low:
            return f"up to {format_number(cut_high)}{unit}"
        if cut_high is None:
            return f"{format_number(cut_low)}{unit} or more"
    else:
        if open_low:
            return f"< {format_number(cut_high)}{unit}"
        if cut_high is None:
            return f"≥ {format_number(cut_low)}{unit}"

    return f"{format_number(cut_low)} - {format_number(cut_high)}{unit}"


def station_count_phrase(count: int) -> str:
    """Pluralize the monitoring station count (only exactly 1 is singular)."""
    if count == 1:
        return f"{count} {PALETTE.STATION_PHRASE_SINGULAR}"
    return f"{count} {PALETTE.STATION_PHRASE_PLURAL}"


def format_value(value: float, unit: str, precision: int = 1) -> str:
    """Format a metric value with its unit for display."""
    return f"{value:.{precision}f} {unit}"


def build_popup(heading: str, rows: list[tuple[str, str]]) -> str:
    """Build popup HTML shared by station and zone features.

    Args:
        heading: Popup title (station or zone name)
        rows: (label, value) pairs shown beneath the heading

    Returns:
        HTML fragment for the rendering layer
    """
    body = "".join(
        f"<p><b>{html.escape(label)}:</b> {html.escape(value)}</p>" for label, value in rows
    )
    return f'<div class="popup"><h4>{html.escape(heading)}</h4>{body}</div>'
