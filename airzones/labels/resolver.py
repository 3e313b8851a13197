"""Label Resolver.

Derives, per metric, the ordered achievement and management label tables
from the Level Definition Table. Both tables are resolved once per run and
shared read-only by the station classifier, zone aggregator and map-layer
assembler.
"""

import logging

from pydantic import BaseModel, ConfigDict

from airzones.calculators import (
    fix_unit_spacing,
    format_band_text,
    select_levels,
    strip_unit_prefix,
)
from airzones.config import DEFAULT_MAP_CONFIG, PALETTE, MapConfig
from airzones.errors import MissingLabelMapping
from airzones.models.domain import LabelEntry, LevelDefinition
from airzones.models.enums import AchievementCategory, LevelKind, ManagementCategory, MetricKind

logger = logging.getLogger(__name__)


class LabelTables(BaseModel):
    """Ordered label tables for every metric.

    Attributes:
        achievement: Metric -> entries ordered Not Achieved, Achieved,
            Insufficient Data
        management: Metric -> entries ordered least to most severe
    """

    model_config = ConfigDict(frozen=True)

    achievement: dict[MetricKind, tuple[LabelEntry, ...]]
    management: dict[MetricKind, tuple[LabelEntry, ...]]

    def entries(self, kind: LevelKind, metric: MetricKind) -> tuple[LabelEntry, ...]:
        table = self.achievement if kind is LevelKind.ACHIEVEMENT else self.management
        return table.get(metric, ())

    def lookup(
        self,
        kind: LevelKind,
        metric: MetricKind,
        category: AchievementCategory | ManagementCategory,
    ) -> LabelEntry:
        """Find the label entry for (metric, category).

        Raises:
            MissingLabelMapping: If the metric has no entry for the category
        """
        for entry in self.entries(kind, metric):
            if entry.category is category:
                return entry
        raise MissingLabelMapping(metric, category.value)


def metric_display_name(metric: MetricKind, config: MapConfig = DEFAULT_MAP_CONFIG) -> str:
    """Display name of a metric, e.g. "NO₂ Annual Metric"."""
    return f"{config.pollutant_label} {metric.period} Metric"


def _band_label(level: LevelDefinition) -> str | None:
    if level.band_text is not None:
        text = level.band_text
        # Management band text from the scoring library is headed by its unit
        if level.kind is LevelKind.MANAGEMENT:
            text = strip_unit_prefix(text, level.unit)
    else:
        text = format_band_text(level.kind, level.cut_low, level.cut_high, level.unit)
    return fix_unit_spacing(text) if text else None


def resolve_achievement_labels(
    table: tuple[LevelDefinition, ...],
    metric: MetricKind,
    config: MapConfig = DEFAULT_MAP_CONFIG,
) -> tuple[LabelEntry, ...]:
    """Resolve the achievement label table for one metric.

    Appends a synthetic Insufficient Data entry (no band, grey, unit
    inherited from the defined levels) and orders the table
    Not Achieved, Achieved, Insufficient Data.

    Raises:
        ConfigurationError: If the metric has no achievement levels
    """
    levels = select_levels(table, metric, LevelKind.ACHIEVEMENT)
    display_name = metric_display_name(metric, config)
    unit = levels[0].unit

    entries = []
    for level in levels:
        band = _band_label(level)
        label = f"{level.category.value} ({band})" if band else level.category.value
        entries.append(
            LabelEntry(
                metric=metric,
                metric_display_name=display_name,
                kind=LevelKind.ACHIEVEMENT,
                category=level.category,
                order_rank=level.category.order_rank,
                colour=PALETTE.ACHIEVEMENT_COLOURS[level.category],
                display_label=label,
                unit=level.unit,
            )
        )

    insufficient = AchievementCategory.INSUFFICIENT_DATA
    entries.append(
        LabelEntry(
            metric=metric,
            metric_display_name=display_name,
            kind=LevelKind.ACHIEVEMENT,
            category=insufficient,
            order_rank=insufficient.order_rank,
            colour=PALETTE.ACHIEVEMENT_COLOURS[insufficient],
            display_label=insufficient.value,
            unit=unit,
        )
    )

    return tuple(sorted(entries, key=lambda e: e.order_rank))


def resolve_management_labels(
    table: tuple[LevelDefinition, ...],
    metric: MetricKind,
    config: MapConfig = DEFAULT_MAP_CONFIG,
) -> tuple[LabelEntry, ...]:
    """Resolve the management label table for one metric.

    Entries are ordered least to most severe; colours follow the greyscale
    ramp and icons are assigned round-robin in that order.

    Raises:
        ConfigurationError: If the metric has no management levels
    """
    levels = sorted(
        select_levels(table, metric, LevelKind.MANAGEMENT),
        key=lambda level: level.category.order_rank,
    )
    display_name = metric_display_name(metric, config)
    ramp = PALETTE.MANAGEMENT_COLOURS
    icons = PALETTE.MANAGEMENT_ICONS

    return tuple(
        LabelEntry(
            metric=metric,
            metric_display_name=display_name,
            kind=LevelKind.MANAGEMENT,
            category=level.category,
            order_rank=rank,
            colour=ramp[level.category.order_rank],
            icon=icons[rank % len(icons)],
            display_label=_band_label(level) or level.category.value,
            unit=level.unit,
        )
        for rank, level in enumerate(levels)
    )


def resolve_labels(
    table: tuple[LevelDefinition, ...],
    config: MapConfig = DEFAULT_MAP_CONFIG,
) -> LabelTables:
    """Resolve achievement and management label tables for every metric.

    Args:
        table: Level Definition Table
        config: Map configuration (pollutant naming)

    Returns:
        LabelTables shared by the classifiers and the layer assembler

    Raises:
        ConfigurationError: If any metric lacks achievement or management levels
    """
    achievement = {}
    management = {}
    for metric in MetricKind:
        achievement[metric] = resolve_achievement_labels(table, metric, config)
        management[metric] = resolve_management_labels(table, metric, config)
        logger.debug(
            f"Resolved {len(achievement[metric])} achievement and "
            f"{len(management[metric])} management labels for {metric.value}"
        )
    return LabelTables(achievement=achievement, management=management)
