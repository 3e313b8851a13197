"""GeoJSON output strategy for assembled map layers.

Writes, per metric, the classified station points and zone polygons as
GeoJSON (reprojected for web maps) plus a JSON file holding the palette,
legends and marker set the rendering component needs.
"""

import json
import logging
from enum import Enum
from pathlib import Path

import geopandas as gpd

from airzones.config import DEFAULT_MAP_CONFIG, MapConfig
from airzones.models.domain import MapLayer
from airzones.models.enums import MetricKind

logger = logging.getLogger(__name__)


def _to_serializable(gdf: gpd.GeoDataFrame, crs: str) -> gpd.GeoDataFrame:
    """Replace enum members by their values and reproject to crs.

    Raises:
        ValueError: If the GeoDataFrame has no CRS defined
    """
    if gdf.crs is None:
        msg = "Cannot export layer: GeoDataFrame has no CRS defined"
        raise ValueError(msg)

    gdf = gdf.copy()
    for col in gdf.columns:
        if col != gdf.geometry.name and gdf[col].dtype == object:
            gdf[col] = gdf[col].map(lambda v: v.value if isinstance(v, Enum) else v)

    if gdf.crs != crs:
        gdf = gdf.to_crs(crs)
    return gdf


class GeoJSONOutputStrategy:
    """Writes one stations file, one zones file and one legend file per metric."""

    def __init__(self, config: MapConfig = DEFAULT_MAP_CONFIG):
        self.config = config

    def write(self, layers: dict[MetricKind, MapLayer], output_dir: Path) -> list[Path]:
        """Write map layers to GeoJSON and JSON files.

        Args:
            layers: Map layers keyed by metric
            output_dir: Directory where files should be written

        Returns:
            Paths of the written files

        Raises:
            ValueError: If layers is empty or a layer has no CRS
        """
        if not layers:
            raise ValueError("Cannot write map layers: no layers given")

        output_dir.mkdir(parents=True, exist_ok=True)
        written = []

        for metric, layer in layers.items():
            suffix = metric.suffix(self.config.pollutant_prefix)

            for name, gdf in (("stations", layer.stations), ("zones", layer.zones)):
                path = output_dir / f"{name}_{suffix}.geojson"
                if gdf.empty:
                    logger.warning(f"No {name} for {metric.value}, skipping {path.name}")
                    continue
                _to_serializable(gdf, self.config.output_crs).to_file(path, driver="GeoJSON")
                written.append(path)

            legend_path = output_dir / f"legend_{suffix}.json"
            legend_path.write_text(
                json.dumps(layer.legend_dict(), ensure_ascii=False, indent=2), encoding="utf-8"
            )
            written.append(legend_path)

        logger.info(f"Wrote {len(written)} output files to {output_dir}")
        return written
