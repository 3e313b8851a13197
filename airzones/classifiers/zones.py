"""Zone Aggregator.

Attaches achievement labels and station counts to air zones, filling the
Insufficient Data state wherever the source leaves a zone unclassified.
"""

import html
import logging
import time

import geopandas as gpd
import pandas as pd

from airzones.calculators import build_popup, station_count_phrase
from airzones.classifiers.stations import COUNT_COLUMN
from airzones.config import ZoneColumns
from airzones.errors import MissingLabelMapping
from airzones.labels.resolver import LabelTables
from airzones.models.enums import AchievementCategory, LevelKind, MetricKind

logger = logging.getLogger(__name__)


def _parse_ambient(metric: MetricKind, value) -> AchievementCategory:
    if not isinstance(value, AchievementCategory) and pd.isna(value):
        return AchievementCategory.INSUFFICIENT_DATA
    try:
        return AchievementCategory.parse(value)
    except ValueError as e:
        raise MissingLabelMapping(metric, value) from e


class ZoneAggregator:
    """Summarize air zones for every metric.

    Pipeline:
    - Normalize columns; missing ambient category -> Insufficient Data
    - Left-join qualifying station counts (missing -> 0)
    - Join achievement label metadata
    - Build tooltip and popup (no popup for Insufficient Data)
    """

    def __init__(
        self,
        zones_gdf: gpd.GeoDataFrame,
        labels: LabelTables,
        station_counts: pd.DataFrame | None = None,
    ):
        """Initialize zone aggregator.

        Args:
            zones_gdf: One row per (zone, metric) with polygon geometry
            labels: Resolved label tables
            station_counts: Output "station_counts" of StationClassifier
        """
        self.zones_gdf = zones_gdf
        self.labels = labels
        self.station_counts = station_counts

    def run(self) -> dict[str, pd.DataFrame]:
        """Run zone aggregation.

        Returns:
            Dictionary with:
            - "zones": GeoDataFrame of classified zones

        Raises:
            ValueError: If required columns are missing or a metric is unknown
            MissingLabelMapping: If an ambient category has no label entry
        """
        logger.info(f"Aggregating {len(self.zones_gdf)} zone records")
        t0 = time.perf_counter()

        zones = self._prepare_input(self.zones_gdf)
        zones = self._join_station_counts(zones)
        zones = self._join_labels(zones)
        zones = self._attach_popups(zones)

        insufficient = zones[ZoneColumns.AMBIENT_CATEGORY] == AchievementCategory.INSUFFICIENT_DATA
        logger.info(f"{int(insufficient.sum())} of {len(zones)} zone records have insufficient data")
        logger.info(f"[timing] aggregate_zones: {time.perf_counter() - t0:.3f}s")
        return {"zones": zones}

    def _prepare_input(self, zones_gdf: gpd.GeoDataFrame) -> gpd.GeoDataFrame:
        """Normalize column names and parse metric and ambient category.

        Raises:
            ValueError: If required columns are missing
        """
        zones = zones_gdf.copy()

        columns_to_rename = {
            k: v
            for k, v in ZoneColumns.INPUT_COLUMN_MAP.items()
            if k in zones.columns and v not in zones.columns
        }
        if columns_to_rename:
            zones = zones.rename(columns=columns_to_rename)

        # An unset category column is the same as every zone being unclassified
        if ZoneColumns.AMBIENT_CATEGORY not in zones.columns:
            zones[ZoneColumns.AMBIENT_CATEGORY] = None

        required = ZoneColumns.required()
        missing_cols = [col for col in required if col not in zones.columns]
        if missing_cols:
            msg = (
                f"Required columns missing from zones: {missing_cols}. "
                f"Expected columns: {required}"
            )
            raise ValueError(msg)

        zones[ZoneColumns.METRIC] = zones[ZoneColumns.METRIC].map(MetricKind.parse)
        zones[ZoneColumns.AMBIENT_CATEGORY] = [
            _parse_ambient(metric, value)
            for metric, value in zip(zones[ZoneColumns.METRIC], zones[ZoneColumns.AMBIENT_CATEGORY])
        ]
        return zones

    def _join_station_counts(self, zones: gpd.GeoDataFrame) -> gpd.GeoDataFrame:
        """Left-join qualifying station counts on (zone_id, metric)."""
        keys = [ZoneColumns.METRIC, ZoneColumns.ZONE_ID]
        if self.station_counts is None or self.station_counts.empty:
            zones[COUNT_COLUMN] = 0
            return zones

        counts = self.station_counts[keys + [COUNT_COLUMN]]
        zones = zones.drop(columns=[COUNT_COLUMN], errors="ignore").merge(
            counts, on=keys, how="left"
        )
        zones[COUNT_COLUMN] = zones[COUNT_COLUMN].fillna(0).astype(int)
        return zones

    def _join_labels(self, zones: gpd.GeoDataFrame) -> gpd.GeoDataFrame:
        """Attach colour, rank, display label and unit from the achievement table."""
        entries = [
            self.labels.lookup(LevelKind.ACHIEVEMENT, metric, category)
            for metric, category in zip(
                zones[ZoneColumns.METRIC], zones[ZoneColumns.AMBIENT_CATEGORY]
            )
        ]
        zones["ambient_rank"] = [e.order_rank for e in entries]
        zones["ambient_colour"] = [e.colour for e in entries]
        zones["ambient_label"] = [e.display_label for e in entries]
        zones["unit"] = [e.unit for e in entries]
        zones["metric_display_name"] = [e.metric_display_name for e in entries]
        return zones

    def _attach_popups(self, zones: gpd.GeoDataFrame) -> gpd.GeoDataFrame:
        """Build tooltips for every zone and popups for classified zones."""
        zones["tooltip"] = [
            f"{html.escape(str(name))}<br>{station_count_phrase(count)}"
            for name, count in zip(zones[ZoneColumns.ZONE_NAME], zones[COUNT_COLUMN])
        ]
        zones["popup"] = [self._zone_popup(row) for _, row in zones.iterrows()]
        return zones

    def _zone_popup(self, row: pd.Series) -> str | None:
        if row[ZoneColumns.AMBIENT_CATEGORY] is AchievementCategory.INSUFFICIENT_DATA:
            return None

        rows = [
            (row["metric_display_name"], row["ambient_label"]),
            ("Monitoring Stations", str(row[COUNT_COLUMN])),
        ]
        rep_station = row.get(ZoneColumns.REP_STATION_ID)
        if rep_station is not None and pd.notna(rep_station):
            rows.append(("Representative Station", str(rep_station)))
        n_years = row.get(ZoneColumns.N_YEARS)
        if n_years is not None and pd.notna(n_years):
            rows.append(("Years of Data", f"{float(n_years):g}"))
        return build_popup(str(row[ZoneColumns.ZONE_NAME]), rows)
