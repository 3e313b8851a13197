"""Numeric band lookup for achievement and management levels."""

import math

from airzones.errors import ConfigurationError, OutOfRangeValue
from airzones.models.domain import LevelDefinition
from airzones.models.enums import AchievementCategory, LevelKind, ManagementCategory, MetricKind

# Categories every metric must define exactly once on each scale
_SCALE_CATEGORIES = {
    LevelKind.ACHIEVEMENT: frozenset(
        {AchievementCategory.NOT_ACHIEVED, AchievementCategory.ACHIEVED}
    ),
    LevelKind.MANAGEMENT: frozenset(ManagementCategory),
}


def _check_categories(levels: list[LevelDefinition], metric: MetricKind, kind: LevelKind) -> None:
    categories = [level.category for level in levels]
    duplicates = sorted({c.value for c in categories if categories.count(c) > 1})
    if duplicates:
        msg = (
            f"{kind.value.capitalize()} levels for metric '{metric.value}' define "
            f"categories more than once: {duplicates}"
        )
        raise ConfigurationError(msg)

    missing = sorted(c.value for c in _SCALE_CATEGORIES[kind] - set(categories))
    if missing:
        msg = (
            f"{kind.value.capitalize()} levels for metric '{metric.value}' are missing "
            f"categories: {missing}"
        )
        raise ConfigurationError(msg)


def select_levels(
    table: tuple[LevelDefinition, ...],
    metric: MetricKind,
    kind: LevelKind,
) -> list[LevelDefinition]:
    """Select the levels of one scale for a metric, ordered by lower bound.

    Raises:
        ConfigurationError: If the metric has no levels of this kind, a
            category is missing or defined twice, or the bands leave a gap
            or overlap
    """
    levels = sorted(
        (d for d in table if d.metric is metric and d.kind is kind),
        key=lambda d: d.low,
    )
    if not levels:
        msg = f"No {kind.value} levels defined for metric '{metric.value}'"
        raise ConfigurationError(msg)

    _check_categories(levels, metric, kind)

    for lower, upper in zip(levels, levels[1:]):
        if lower.high != upper.low:
            msg = (
                f"{kind.value.capitalize()} levels for metric '{metric.value}' are not "
                f"contiguous: {lower.category.value} ends at {lower.high}, "
                f"{upper.category.value} starts at {upper.low}"
            )
            raise ConfigurationError(msg)

    return levels


def locate_band(levels: list[LevelDefinition], value: float) -> LevelDefinition | None:
    """Find the level whose band contains value, or None.

    Bands are [cut_low, cut_high); the top band is also closed on its high
    end so a value equal to the top cut still classifies.
    """
    if value is None or math.isnan(value):
        return None

    last = len(levels) - 1
    for i, level in enumerate(levels):
        if level.low <= value < level.high:
            return level
        if i == last and value == level.high:
            return level
    return None


def find_band(levels: list[LevelDefinition], metric: MetricKind, value: float) -> LevelDefinition:
    """Find the level whose band contains value.

    Args:
        levels: Contiguous levels ordered by lower bound (see select_levels)
        metric: Metric being classified (for error reporting)
        value: Metric value

    Returns:
        The containing LevelDefinition

    Raises:
        OutOfRangeValue: If value is NaN or outside the union of the bands
    """
    level = locate_band(levels, value)
    if level is None:
        raise OutOfRangeValue(metric, value)
    return level
