"""Configuration and constants for the air zone achievement map.

This module defines the fixed display palette and the configurable settings
used when classifying stations and air zones.

Includes configuration for:
- Achievement and management colours, management icons (PaletteConstants)
- Pollutant naming and output projection (MapConfig with AQMAP_ prefix)
- Input column names for station and zone datasets

Configuration can be overridden via:
1. Environment variables (e.g., AQMAP_POLLUTANT_PREFIX=so2_, AQMAP_VALUE_PRECISION=2)
2. .env file in the current directory
3. Default values in code
"""

from dataclasses import dataclass, field

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from airzones.models.enums import AchievementCategory


@dataclass(frozen=True)
class PaletteConstants:
    """Fixed colours and icons attached to achievement and management levels.

    These are NOT configurable - the map legends of every published report
    must use the same colours for the same category.

    All attributes are immutable (frozen=True prevents modification).
    """

    ACHIEVEMENT_COLOURS: dict[AchievementCategory, str] = field(
        default_factory=lambda: {
            AchievementCategory.NOT_ACHIEVED: "#cd7277",
            AchievementCategory.ACHIEVED: "#72a4cd",
            AchievementCategory.INSUFFICIENT_DATA: "#dbdbdb",
        }
    )

    # Least to most severe
    MANAGEMENT_COLOURS: tuple[str, ...] = ("#f0f0f0", "#bdbdbd", "#737373", "#252525")
    MANAGEMENT_ICONS: tuple[str, ...] = (
        "icons/management_1.svg",
        "icons/management_2.svg",
        "icons/management_3.svg",
        "icons/management_4.svg",
    )

    STATION_PHRASE_SINGULAR: str = "Monitoring Station"
    STATION_PHRASE_PLURAL: str = "Monitoring Stations"


# Module-level singleton for palette constants
PALETTE = PaletteConstants()


class MapConfig(BaseSettings):
    """Settings for labelling and exporting map layers.

    Can be overridden via environment variables with AQMAP_ prefix:
    - AQMAP_POLLUTANT_PREFIX
    - AQMAP_POLLUTANT_LABEL
    - AQMAP_OUTPUT_CRS
    - AQMAP_VALUE_PRECISION

    Attributes:
        pollutant_prefix: Prefix of the scoring library's metric identifiers,
            stripped when building station keys (e.g. "no2_1yr" -> "1yr")
        pollutant_label: Pollutant name used in metric display names
        output_crs: Coordinate reference system of exported layers
        value_precision: Decimal places shown for metric values in popups
    """

    model_config = SettingsConfigDict(
        env_prefix="AQMAP_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    pollutant_prefix: str = Field(
        default="no2_", description="Prefix stripped from metric identifiers"
    )
    pollutant_label: str = Field(default="NO₂", description="Pollutant display name")
    output_crs: str = Field(
        default="EPSG:4326", description="CRS for exported GeoJSON layers (web maps)"
    )
    value_precision: int = Field(
        default=1, ge=0, le=6, description="Decimal places for metric values in popups"
    )


DEFAULT_MAP_CONFIG = MapConfig()


class StationColumns:
    """Column names in the station input dataset (normalized snake_case)."""

    STATION_ID = "station_id"
    STATION_NAME = "station_name"
    ZONE_ID = "zone_id"
    ZONE_NAME = "zone_name"
    METRIC = "metric"
    METRIC_VALUE = "metric_value"
    GEOMETRY = "geometry"

    # Legacy column names found in exported station files
    INPUT_COLUMN_MAP = {
        "ems_id": "station_id",
        "site": "station_name",
        "airzone": "zone_id",
        "metric_value_mgmt": "metric_value",
    }

    @classmethod
    def required(cls) -> list[str]:
        """Get list of columns that must be present in the input."""
        return [
            cls.STATION_NAME,
            cls.ZONE_ID,
            cls.METRIC,
            cls.METRIC_VALUE,
            cls.GEOMETRY,
        ]


class ZoneColumns:
    """Column names in the air zone input dataset (normalized snake_case)."""

    ZONE_ID = "zone_id"
    ZONE_NAME = "zone_name"
    METRIC = "metric"
    AMBIENT_CATEGORY = "ambient_category"
    REP_STATION_ID = "rep_station_id"
    N_YEARS = "n_years"
    GEOMETRY = "geometry"

    INPUT_COLUMN_MAP = {
        "airzone": "zone_name",
        "caaqs_ambient": "ambient_category",
        "rep_stn_id": "rep_station_id",
    }

    @classmethod
    def required(cls) -> list[str]:
        """Get list of columns that must be present in the input."""
        return [
            cls.ZONE_ID,
            cls.ZONE_NAME,
            cls.METRIC,
            cls.AMBIENT_CATEGORY,
            cls.GEOMETRY,
        ]
