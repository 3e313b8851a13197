"""Station Classifier.

Classifies each monitoring station's metric value into a management level
(and its own ambient achievement level), joins the resolved label metadata
and attaches popup content. Every value must fall in a management band; a
value outside the achievement bands is Insufficient Data for that station.
Stations with no metric value are excluded from the zone station counts and
from the classified output.
"""

import logging
import time

import geopandas as gpd
import pandas as pd

from airzones.calculators import (
    build_popup,
    find_band,
    format_value,
    locate_band,
    select_levels,
)
from airzones.config import DEFAULT_MAP_CONFIG, MapConfig, StationColumns
from airzones.labels.resolver import LabelTables
from airzones.levels import LevelTable
from airzones.models.domain import LevelDefinition
from airzones.models.enums import AchievementCategory, LevelKind, MetricKind

logger = logging.getLogger(__name__)

COUNT_COLUMN = "station_count"


def count_stations(stations: pd.DataFrame) -> pd.DataFrame:
    """Count stations with a metric value per (metric, zone_id).

    Args:
        stations: Station rows with metric already parsed to MetricKind

    Returns:
        DataFrame with columns metric, zone_id, station_count
    """
    qualifying = stations[stations[StationColumns.METRIC_VALUE].notna()]
    return (
        qualifying.groupby([StationColumns.METRIC, StationColumns.ZONE_ID], sort=False)
        .size()
        .reset_index(name=COUNT_COLUMN)
    )


class StationClassifier:
    """Classify monitoring stations for every metric.

    Pipeline:
    - Normalize columns and parse metric identifiers
    - Count qualifying stations per (metric, zone)
    - Drop stations with no metric value
    - Assign management and ambient categories by band
    - Join label metadata and build popup fields
    """

    def __init__(
        self,
        stations_gdf: gpd.GeoDataFrame,
        labels: LabelTables,
        level_table: LevelTable,
        zone_names: dict[str, str] | None = None,
        config: MapConfig = DEFAULT_MAP_CONFIG,
    ):
        """Initialize station classifier.

        Args:
            stations_gdf: One row per (station, metric) with point geometry
            labels: Resolved label tables
            level_table: Level definitions used for band lookup
            zone_names: Zone id -> zone name, used when stations carry no
                zone_name column
            config: Map configuration
        """
        self.stations_gdf = stations_gdf
        self.labels = labels
        self.level_table = level_table
        self.zone_names = zone_names or {}
        self.config = config

    def run(self) -> dict[str, pd.DataFrame]:
        """Run station classification.

        Returns:
            Dictionary with:
            - "stations": GeoDataFrame of classified stations (null values dropped)
            - "station_counts": DataFrame of qualifying counts per (metric, zone_id)

        Raises:
            ValueError: If required columns are missing or a metric is unknown
            OutOfRangeValue: If a value lies outside every band
            MissingLabelMapping: If a category has no label entry
        """
        logger.info(f"Classifying {len(self.stations_gdf)} station records")
        t0 = time.perf_counter()

        stations = self._prepare_input(self.stations_gdf)
        station_counts = count_stations(stations)

        null_mask = stations[StationColumns.METRIC_VALUE].isna()
        if null_mask.any():
            logger.warning(
                f"Excluding {int(null_mask.sum())} station records with no metric value"
            )
        stations = stations[~null_mask].copy()

        stations = self._assign_categories(stations)
        stations = self._join_labels(stations)
        stations = self._attach_popups(stations)

        logger.info(f"[timing] classify_stations: {time.perf_counter() - t0:.3f}s")
        return {"stations": stations, "station_counts": station_counts}

    def _prepare_input(self, stations_gdf: gpd.GeoDataFrame) -> gpd.GeoDataFrame:
        """Normalize column names, parse metrics and coerce values to numeric.

        Raises:
            ValueError: If required columns are missing
        """
        stations = stations_gdf.copy()

        columns_to_rename = {
            k: v
            for k, v in StationColumns.INPUT_COLUMN_MAP.items()
            if k in stations.columns and v not in stations.columns
        }
        if columns_to_rename:
            stations = stations.rename(columns=columns_to_rename)

        required = StationColumns.required()
        missing_cols = [col for col in required if col not in stations.columns]
        if missing_cols:
            msg = (
                f"Required columns missing from stations: {missing_cols}. "
                f"Expected columns: {required}"
            )
            raise ValueError(msg)

        stations[StationColumns.METRIC] = stations[StationColumns.METRIC].map(MetricKind.parse)
        stations[StationColumns.METRIC_VALUE] = pd.to_numeric(
            stations[StationColumns.METRIC_VALUE], errors="coerce"
        )
        if StationColumns.STATION_ID not in stations.columns:
            stations[StationColumns.STATION_ID] = stations[StationColumns.STATION_NAME]
        # Station row, then zone lookup, then zone id
        fallback_names = stations[StationColumns.ZONE_ID].map(
            lambda zone_id: self.zone_names.get(zone_id, zone_id)
        )
        if StationColumns.ZONE_NAME in stations.columns:
            stations[StationColumns.ZONE_NAME] = stations[StationColumns.ZONE_NAME].where(
                stations[StationColumns.ZONE_NAME].notna(), fallback_names
            )
        else:
            stations[StationColumns.ZONE_NAME] = fallback_names

        return stations

    def _assign_categories(self, stations: gpd.GeoDataFrame) -> gpd.GeoDataFrame:
        """Locate the management and achievement band of every station value."""
        management_levels = {
            metric: select_levels(self.level_table, metric, LevelKind.MANAGEMENT)
            for metric in stations[StationColumns.METRIC].unique()
        }
        achievement_levels = {
            metric: select_levels(self.level_table, metric, LevelKind.ACHIEVEMENT)
            for metric in stations[StationColumns.METRIC].unique()
        }

        metrics = stations[StationColumns.METRIC]
        values = stations[StationColumns.METRIC_VALUE]
        stations["mgmt_category"] = [
            find_band(management_levels[metric], metric, value).category
            for metric, value in zip(metrics, values)
        ]
        stations["ambient_category"] = [
            self._ambient_category(achievement_levels[metric], value)
            for metric, value in zip(metrics, values)
        ]

        unbanded = stations["ambient_category"] == AchievementCategory.INSUFFICIENT_DATA
        if unbanded.any():
            logger.info(
                f"{int(unbanded.sum())} station values lie outside the achievement bands; "
                f"marked {AchievementCategory.INSUFFICIENT_DATA.value}"
            )
        return stations

    @staticmethod
    def _ambient_category(levels: list[LevelDefinition], value: float) -> AchievementCategory:
        # Only the management scale must cover every value
        level = locate_band(levels, value)
        return AchievementCategory.INSUFFICIENT_DATA if level is None else level.category

    def _join_labels(self, stations: gpd.GeoDataFrame) -> gpd.GeoDataFrame:
        """Attach colour, icon, rank and display label from the label tables."""
        metrics = stations[StationColumns.METRIC]

        mgmt_entries = [
            self.labels.lookup(LevelKind.MANAGEMENT, metric, category)
            for metric, category in zip(metrics, stations["mgmt_category"])
        ]
        stations["mgmt_rank"] = [e.order_rank for e in mgmt_entries]
        stations["mgmt_colour"] = [e.colour for e in mgmt_entries]
        stations["mgmt_icon"] = [e.icon for e in mgmt_entries]
        stations["mgmt_label"] = [e.display_label for e in mgmt_entries]

        ambient_entries = [
            self.labels.lookup(LevelKind.ACHIEVEMENT, metric, category)
            for metric, category in zip(metrics, stations["ambient_category"])
        ]
        stations["ambient_colour"] = [e.colour for e in ambient_entries]
        stations["ambient_label"] = [e.display_label for e in ambient_entries]

        stations["metric_display_name"] = [e.metric_display_name for e in mgmt_entries]
        stations["unit"] = [e.unit for e in mgmt_entries]
        return stations

    def _attach_popups(self, stations: gpd.GeoDataFrame) -> gpd.GeoDataFrame:
        """Build station keys and popup HTML."""
        prefix = self.config.pollutant_prefix
        stations["station_key"] = [
            f"{name}_{metric.suffix(prefix)}"
            for name, metric in zip(
                stations[StationColumns.STATION_NAME], stations[StationColumns.METRIC]
            )
        ]
        stations["popup"] = [
            build_popup(
                str(row[StationColumns.STATION_NAME]),
                [
                    ("Air Zone", str(row[StationColumns.ZONE_NAME])),
                    (
                        row["metric_display_name"],
                        format_value(
                            row[StationColumns.METRIC_VALUE],
                            row["unit"],
                            self.config.value_precision,
                        ),
                    ),
                    ("Management Level", row["mgmt_category"].value),
                ],
            )
            for _, row in stations.iterrows()
        ]
        return stations
