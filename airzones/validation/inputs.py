"""Validation of station and zone input datasets."""

from collections.abc import Mapping

import geopandas as gpd

from airzones.config import StationColumns, ZoneColumns
from airzones.models.enums import MetricKind
from airzones.validation.errors import ValidationError


class _InputValidator:
    """Shared checks for vector inputs.

    Checks:
    - Required columns present (after legacy column renames)
    - Metric identifiers recognised
    - Valid CRS
    - Geometry type
    - No null geometries
    """

    dataset: str
    required_columns: tuple[str, ...]
    column_map: Mapping[str, str]
    valid_geom_types: frozenset[str]

    def validate(self, gdf: gpd.GeoDataFrame) -> list[ValidationError]:
        """Validate an input GeoDataFrame.

        Returns:
            List of validation errors (empty if valid)
        """
        errors = []

        present = set(gdf.columns) | {
            target for source, target in self.column_map.items() if source in gdf.columns
        }
        missing = [col for col in self.required_columns if col not in present]
        if missing:
            errors.append(
                ValidationError(
                    dataset=self.dataset,
                    message=f"missing required columns: {', '.join(missing)}",
                    field="columns",
                )
            )

        if StationColumns.METRIC in gdf.columns:
            errors.extend(self._validate_metrics(gdf))

        if gdf.crs is None:
            errors.append(
                ValidationError(dataset=self.dataset, message="no CRS defined", field="crs")
            )

        if "geometry" not in gdf.columns:
            return errors

        null_count = int(gdf.geometry.isna().sum())
        if null_count > 0:
            errors.append(
                ValidationError(
                    dataset=self.dataset,
                    message=f"{null_count} null geometries",
                    field="geometry",
                )
            )

        geom_types = set(gdf.geometry.dropna().geom_type.unique())
        invalid_types = geom_types - self.valid_geom_types
        if invalid_types:
            errors.append(
                ValidationError(
                    dataset=self.dataset,
                    message=f"invalid geometry types: "
                    f"{', '.join(sorted(invalid_types))}. "
                    f"Expected: {' or '.join(sorted(self.valid_geom_types))}",
                    field="geometry",
                )
            )

        return errors

    def _validate_metrics(self, gdf: gpd.GeoDataFrame) -> list[ValidationError]:
        unknown = []
        for value in gdf[StationColumns.METRIC].dropna().unique():
            try:
                MetricKind.parse(value)
            except ValueError:
                unknown.append(str(value))
        if gdf[StationColumns.METRIC].isna().any():
            unknown.append("<missing>")
        if not unknown:
            return []
        return [
            ValidationError(
                dataset=self.dataset,
                message=f"unknown metric identifiers: {', '.join(unknown)}",
                field=StationColumns.METRIC,
            )
        ]


class StationInputValidator(_InputValidator):
    """Validates the monitoring station point dataset."""

    dataset = "Stations"
    required_columns = tuple(StationColumns.required())
    column_map = StationColumns.INPUT_COLUMN_MAP
    valid_geom_types = frozenset({"Point"})


class ZoneInputValidator(_InputValidator):
    """Validates the air zone polygon dataset."""

    dataset = "Zones"
    # A zone file without categories is valid: every zone is Insufficient Data
    required_columns = tuple(
        c for c in ZoneColumns.required() if c != ZoneColumns.AMBIENT_CATEGORY
    )
    column_map = ZoneColumns.INPUT_COLUMN_MAP
    valid_geom_types = frozenset({"Polygon", "MultiPolygon"})
