"""Shared fixtures: small station and zone datasets and level tables."""

import geopandas as gpd
import pytest
from shapely.geometry import Point, Polygon

from airzones.classifiers import StationClassifier, ZoneAggregator
from airzones.labels import resolve_labels
from airzones.levels import default_level_table
from airzones.models import (
    AchievementCategory,
    LevelDefinition,
    LevelKind,
    ManagementCategory,
    MetricKind,
)


def square(x: float, y: float, size: float = 1.0) -> Polygon:
    return Polygon([(x, y), (x + size, y), (x + size, y + size), (x, y + size)])


@pytest.fixture
def level_table():
    """Default NO2 level table."""
    return default_level_table()


@pytest.fixture
def labels(level_table):
    """Label tables resolved from the default level table."""
    return resolve_labels(level_table)


@pytest.fixture
def microgram_level_table():
    """Annual levels in µg/m³ with scoring-library band text; 1-hour levels from the default."""
    annual = MetricKind.ANNUAL
    one_hour = [d for d in default_level_table() if d.metric is MetricKind.ONE_HOUR]
    return tuple(
        one_hour
        + [
            LevelDefinition(
                metric=annual,
                kind=LevelKind.ACHIEVEMENT,
                category=AchievementCategory.ACHIEVED,
                cut_low=40,
                cut_high=60,
                unit="µg/m³",
                band_text="up to 60µg/m³",
            ),
            LevelDefinition(
                metric=annual,
                kind=LevelKind.ACHIEVEMENT,
                category=AchievementCategory.NOT_ACHIEVED,
                cut_low=60,
                cut_high=None,
                unit="µg/m³",
                band_text="over 60µg/m³",
            ),
            LevelDefinition(
                metric=annual,
                kind=LevelKind.MANAGEMENT,
                category=ManagementCategory.KEEPING_CLEAN,
                cut_low=0,
                cut_high=20,
                unit="µg/m³",
            ),
            LevelDefinition(
                metric=annual,
                kind=LevelKind.MANAGEMENT,
                category=ManagementCategory.PREVENTING_DETERIORATION,
                cut_low=20,
                cut_high=40,
                unit="µg/m³",
            ),
            LevelDefinition(
                metric=annual,
                kind=LevelKind.MANAGEMENT,
                category=ManagementCategory.PREVENTING_EXCEEDANCE,
                cut_low=40,
                cut_high=60,
                unit="µg/m³",
            ),
            LevelDefinition(
                metric=annual,
                kind=LevelKind.MANAGEMENT,
                category=ManagementCategory.ACHIEVING,
                cut_low=60,
                cut_high=100,
                unit="µg/m³",
            ),
        ]
    )


@pytest.fixture
def stations_gdf() -> gpd.GeoDataFrame:
    """Stations in two zones for both metrics, including records without values.

    Qualifying counts:
    - annual: Z1 = 2, Z2 = 1
    - 1-hour: Z1 = 1
    """
    return gpd.GeoDataFrame(
        {
            "station_id": ["S1", "S2", "S3", "S4", "S1", "S2"],
            "station_name": [
                "Station A",
                "Station B",
                "Station C",
                "Station D",
                "Station A",
                "Station B",
            ],
            "zone_id": ["Z1", "Z1", "Z1", "Z2", "Z1", "Z1"],
            "metric": ["no2_1yr", "no2_1yr", "no2_1yr", "no2_1yr", "no2_3yr", "no2_3yr"],
            "metric_value": [5.0, 20.0, None, 1.0, 45.0, None],
            "geometry": [
                Point(0.2, 0.2),
                Point(0.5, 0.5),
                Point(0.8, 0.8),
                Point(2.5, 0.5),
                Point(0.2, 0.2),
                Point(0.5, 0.5),
            ],
        },
        crs="EPSG:4326",
    )


@pytest.fixture
def zones_gdf() -> gpd.GeoDataFrame:
    """Three zones with a mix of classified and unclassified metrics."""
    return gpd.GeoDataFrame(
        {
            "zone_id": ["Z1", "Z2", "Z3", "Z1", "Z2"],
            "zone_name": ["Zone One", "Zone Two", "Zone Three", "Zone One", "Zone Two"],
            "metric": ["no2_1yr", "no2_1yr", "no2_1yr", "no2_3yr", "no2_3yr"],
            "ambient_category": ["Not Achieved", "Achieved", None, None, "Achieved"],
            "rep_station_id": ["S2", "S4", None, "S1", None],
            "n_years": [3, 2, None, 1, None],
            "geometry": [
                square(0, 0),
                square(2, 0),
                square(4, 0),
                square(0, 0),
                square(2, 0),
            ],
        },
        crs="EPSG:4326",
    )


@pytest.fixture
def station_results(stations_gdf, labels, level_table, zones_gdf):
    zone_names = dict(zip(zones_gdf["zone_id"], zones_gdf["zone_name"]))
    return StationClassifier(stations_gdf, labels, level_table, zone_names=zone_names).run()


@pytest.fixture
def classified_stations(station_results):
    return station_results["stations"]


@pytest.fixture
def classified_zones(zones_gdf, labels, station_results):
    return ZoneAggregator(
        zones_gdf, labels, station_counts=station_results["station_counts"]
    ).run()["zones"]


@pytest.fixture
def without_crs():
    """Rebuild a GeoDataFrame with the same rows and no CRS."""

    def _drop(gdf: gpd.GeoDataFrame) -> gpd.GeoDataFrame:
        return gpd.GeoDataFrame(
            gdf.drop(columns="geometry"), geometry=list(gdf.geometry), crs=None
        )

    return _drop
