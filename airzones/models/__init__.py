"""Domain models for air zone classification."""

from airzones.models.domain import LabelEntry, LegendEntry, LevelDefinition, MapLayer
from airzones.models.enums import AchievementCategory, LevelKind, ManagementCategory, MetricKind

__all__ = [
    "MetricKind",
    "LevelKind",
    "AchievementCategory",
    "ManagementCategory",
    "LevelDefinition",
    "LabelEntry",
    "LegendEntry",
    "MapLayer",
]
