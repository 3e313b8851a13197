"""Map-Layer Assembler.

Builds one layer per metric from the classified stations and zones: the zone
fill palette, the two legends and the station marker icons.
"""

import logging

import geopandas as gpd

from airzones.config import StationColumns, ZoneColumns
from airzones.errors import UnmappedPaletteValue
from airzones.labels.resolver import LabelTables
from airzones.models.domain import LabelEntry, LegendEntry, MapLayer
from airzones.models.enums import LevelKind, MetricKind

logger = logging.getLogger(__name__)


def build_palette(entries: tuple[LabelEntry, ...]) -> dict[str, str]:
    """Map achievement display labels to colours, in legend order."""
    return {entry.display_label: entry.colour for entry in entries}


def check_palette(metric: MetricKind, palette: dict[str, str], labels) -> None:
    """Ensure every zone display label has a palette colour.

    Raises:
        UnmappedPaletteValue: For the first label missing from the palette
    """
    for label in labels:
        if label not in palette:
            raise UnmappedPaletteValue(metric, label)


def zone_legend(entries: tuple[LabelEntry, ...]) -> tuple[LegendEntry, ...]:
    """Achievement legend ascending by rank (Not Achieved first)."""
    return tuple(
        LegendEntry(colour=e.colour, label=e.display_label)
        for e in sorted(entries, key=lambda e: e.order_rank)
    )


def station_legend(entries: tuple[LabelEntry, ...]) -> tuple[LegendEntry, ...]:
    """Management legend, most severe level first."""
    return tuple(
        LegendEntry(colour=e.colour, label=e.display_label, icon=e.icon)
        for e in sorted(entries, key=lambda e: e.order_rank, reverse=True)
    )


def build_map_layer(
    metric: MetricKind,
    stations: gpd.GeoDataFrame,
    zones: gpd.GeoDataFrame,
    labels: LabelTables,
) -> MapLayer:
    """Assemble the map layer for one metric.

    Args:
        metric: Metric to assemble
        stations: Classified stations (all metrics)
        zones: Classified zones (all metrics)
        labels: Resolved label tables

    Returns:
        MapLayer with metric-scoped data slices

    Raises:
        UnmappedPaletteValue: If a zone display label has no palette colour
    """
    achievement = labels.entries(LevelKind.ACHIEVEMENT, metric)
    management = labels.entries(LevelKind.MANAGEMENT, metric)

    metric_stations = stations[stations[StationColumns.METRIC] == metric].copy()
    metric_zones = zones[zones[ZoneColumns.METRIC] == metric].copy()

    palette = build_palette(achievement)
    check_palette(metric, palette, metric_zones["ambient_label"].unique())

    present = set(metric_stations["mgmt_category"])
    marker_set = {e.category.value: e.icon for e in management if e.category in present}
    station_icons = dict(zip(metric_stations["station_key"], metric_stations["mgmt_icon"]))

    logger.info(
        f"Assembled {metric.value} layer: {len(metric_zones)} zones, "
        f"{len(metric_stations)} stations"
    )

    return MapLayer(
        metric=metric,
        metric_display_name=achievement[0].metric_display_name,
        palette=palette,
        zone_legend=zone_legend(achievement),
        station_legend=station_legend(management),
        marker_set=marker_set,
        station_icons=station_icons,
        stations=metric_stations,
        zones=metric_zones,
    )


def build_map_layers(
    stations: gpd.GeoDataFrame,
    zones: gpd.GeoDataFrame,
    labels: LabelTables,
) -> dict[MetricKind, MapLayer]:
    """Assemble one map layer per metric."""
    return {metric: build_map_layer(metric, stations, zones, labels) for metric in MetricKind}
