"""Output strategies for assembled map layers."""

from airzones.outputs.base import OutputStrategy
from airzones.outputs.geojson import GeoJSONOutputStrategy

__all__ = ["OutputStrategy", "GeoJSONOutputStrategy"]
