"""Station and zone classification.

Each classifier follows the same pattern:
- Constructor: __init__(gdf, labels, ...)
- Run method: run() -> dict[str, DataFrame]
"""

from airzones.classifiers.stations import StationClassifier, count_stations
from airzones.classifiers.zones import ZoneAggregator

__all__ = ["StationClassifier", "ZoneAggregator", "count_stations"]
