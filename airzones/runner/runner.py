"""Pipeline execution

This module wires the label resolver, classifiers and layer assembler into a
single batch run.
"""

import logging
import time

import geopandas as gpd

from airzones.classifiers import StationClassifier, ZoneAggregator
from airzones.config import DEFAULT_MAP_CONFIG, MapConfig, ZoneColumns
from airzones.labels import resolve_labels
from airzones.layers import build_map_layers
from airzones.levels import LevelTable, default_level_table
from airzones.models.domain import MapLayer
from airzones.models.enums import MetricKind
from airzones.validation import StationInputValidator, ZoneInputValidator

logger = logging.getLogger(__name__)


def validate_inputs(stations_gdf: gpd.GeoDataFrame, zones_gdf: gpd.GeoDataFrame) -> None:
    """Validate both input datasets before any classification.

    Raises:
        ValueError: With every validation message joined, if any check fails
    """
    errors = StationInputValidator().validate(stations_gdf) + ZoneInputValidator().validate(
        zones_gdf
    )
    if errors:
        error_msg = "; ".join(str(e) for e in errors)
        logger.error(f"Input validation failed: {[str(e) for e in errors]}")
        msg = f"Input validation failed: {error_msg}"
        raise ValueError(msg)


def _zone_names(zones_gdf: gpd.GeoDataFrame) -> dict:
    zones = zones_gdf.rename(
        columns={
            k: v
            for k, v in ZoneColumns.INPUT_COLUMN_MAP.items()
            if k in zones_gdf.columns and v not in zones_gdf.columns
        }
    )
    if ZoneColumns.ZONE_ID not in zones.columns or ZoneColumns.ZONE_NAME not in zones.columns:
        return {}
    return dict(zip(zones[ZoneColumns.ZONE_ID], zones[ZoneColumns.ZONE_NAME]))


def run_pipeline(
    stations_gdf: gpd.GeoDataFrame,
    zones_gdf: gpd.GeoDataFrame,
    level_table: LevelTable | None = None,
    config: MapConfig = DEFAULT_MAP_CONFIG,
) -> dict[MetricKind, MapLayer]:
    """Classify stations and zones and assemble one map layer per metric.

    The run either classifies every station and zone cleanly or fails; there
    is no partial result.

    Args:
        stations_gdf: Station points, one row per (station, metric)
        zones_gdf: Zone polygons, one row per (zone, metric)
        level_table: Level definitions (defaults to the NO₂ CAAQS levels)
        config: Map configuration

    Returns:
        MapLayer per MetricKind

    Raises:
        ValueError: If input validation fails
        ConfigurationError: If level definitions are missing or inconsistent
        OutOfRangeValue: If a station value lies outside every band
        MissingLabelMapping: If a category has no label entry
        UnmappedPaletteValue: If a zone label has no palette colour
    """
    logger.info("Running air zone classification pipeline")
    t_total = time.perf_counter()

    validate_inputs(stations_gdf, zones_gdf)
    if level_table is None:
        level_table = default_level_table()

    t0 = time.perf_counter()
    labels = resolve_labels(level_table, config)
    logger.info(f"[timing] resolve_labels: {time.perf_counter() - t0:.3f}s")

    station_results = StationClassifier(
        stations_gdf,
        labels,
        level_table,
        zone_names=_zone_names(zones_gdf),
        config=config,
    ).run()

    zone_results = ZoneAggregator(
        zones_gdf,
        labels,
        station_counts=station_results["station_counts"],
    ).run()

    t0 = time.perf_counter()
    layers = build_map_layers(station_results["stations"], zone_results["zones"], labels)
    logger.info(f"[timing] build_map_layers: {time.perf_counter() - t0:.3f}s")

    logger.info(f"Pipeline complete in {time.perf_counter() - t_total:.3f}s")
    return layers
