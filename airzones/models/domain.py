"""Core domain models for air zone classification and map layers.

These models represent reference levels, resolved labels and assembled map
layers as immutable value objects, separate from the spatial data frames that
flow through the classifiers.
"""

import math

import geopandas as gpd
from pydantic import BaseModel, ConfigDict, Field, model_validator

from airzones.models.enums import AchievementCategory, LevelKind, ManagementCategory, MetricKind


class LevelDefinition(BaseModel):
    """One level of the achievement or management scale for a metric.

    The band is half-open: a value belongs to the level when
    cut_low <= value < cut_high. A missing cut_low is -inf and a missing
    cut_high is +inf.

    Attributes:
        metric: Metric the level applies to
        kind: Achievement or management scale
        category: Category assigned to values inside the band
        cut_low: Lower bound of the band (inclusive)
        cut_high: Upper bound of the band (exclusive, except for the top band)
        unit: Unit string for the metric (e.g. "ppb", "µg/m³")
        band_text: Band label supplied by the scoring library, if any
    """

    model_config = ConfigDict(frozen=True)

    metric: MetricKind
    kind: LevelKind
    category: AchievementCategory | ManagementCategory
    cut_low: float | None = Field(default=None, description="Inclusive lower bound")
    cut_high: float | None = Field(default=None, description="Exclusive upper bound")
    unit: str = Field(description="Unit of the metric value")
    band_text: str | None = Field(default=None, description="Band label from the scoring library")

    @model_validator(mode="after")
    def _check_band(self) -> "LevelDefinition":
        expected = (
            AchievementCategory if self.kind is LevelKind.ACHIEVEMENT else ManagementCategory
        )
        if not isinstance(self.category, expected):
            msg = f"Category {self.category} does not belong to the {self.kind.value} scale"
            raise ValueError(msg)
        if self.category is AchievementCategory.INSUFFICIENT_DATA:
            msg = "Insufficient Data has no numeric band and cannot be defined as a level"
            raise ValueError(msg)
        if self.cut_low is not None and self.cut_high is not None:
            if self.cut_low >= self.cut_high:
                msg = f"cut_low ({self.cut_low}) must be below cut_high ({self.cut_high})"
                raise ValueError(msg)
        return self

    @property
    def low(self) -> float:
        return -math.inf if self.cut_low is None else self.cut_low

    @property
    def high(self) -> float:
        return math.inf if self.cut_high is None else self.cut_high


class LabelEntry(BaseModel):
    """Resolved display metadata for one category of one metric.

    Attributes:
        metric: Metric the entry belongs to
        metric_display_name: Metric name shown in popups and legend titles
        kind: Achievement or management scale
        category: Category the entry describes
        order_rank: Position within the metric's table (total order)
        colour: Hex colour
        icon: Marker icon (management entries only)
        display_label: Formatted, unit-annotated label
        unit: Unit of the metric value
    """

    model_config = ConfigDict(frozen=True)

    metric: MetricKind
    metric_display_name: str
    kind: LevelKind
    category: AchievementCategory | ManagementCategory
    order_rank: int = Field(ge=0)
    colour: str
    icon: str | None = None
    display_label: str
    unit: str


class LegendEntry(BaseModel):
    """A single swatch in a map legend."""

    model_config = ConfigDict(frozen=True)

    colour: str
    label: str
    icon: str | None = None


class MapLayer(BaseModel):
    """Layer-ready data for one metric.

    Attributes:
        metric: Metric the layer shows
        metric_display_name: Layer title
        palette: Zone display label -> fill colour
        zone_legend: Achievement legend, Not Achieved first
        station_legend: Management legend, most severe first
        marker_set: Management category label -> icon, for categories present
        station_icons: Station key -> icon, for this metric's stations only
        stations: Classified stations for this metric
        zones: Classified zones for this metric
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    metric: MetricKind
    metric_display_name: str
    palette: dict[str, str]
    zone_legend: tuple[LegendEntry, ...]
    station_legend: tuple[LegendEntry, ...]
    marker_set: dict[str, str]
    station_icons: dict[str, str]
    stations: gpd.GeoDataFrame
    zones: gpd.GeoDataFrame

    def legend_dict(self) -> dict:
        """Serializable legend and palette metadata (no geometry)."""
        return {
            "metric": self.metric.value,
            "title": self.metric_display_name,
            "palette": self.palette,
            "zone_legend": [entry.model_dump() for entry in self.zone_legend],
            "station_legend": [entry.model_dump() for entry in self.station_legend],
            "marker_set": self.marker_set,
        }
