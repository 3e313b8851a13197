"""Map-layer assembly."""

from airzones.layers.assembler import (
    build_map_layer,
    build_map_layers,
    build_palette,
    check_palette,
    station_legend,
    zone_legend,
)

__all__ = [
    "build_map_layer",
    "build_map_layers",
    "build_palette",
    "check_palette",
    "station_legend",
    "zone_legend",
]
