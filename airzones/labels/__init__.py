"""Label resolution for achievement and management levels."""

from airzones.labels.resolver import (
    LabelTables,
    metric_display_name,
    resolve_achievement_labels,
    resolve_labels,
    resolve_management_labels,
)

__all__ = [
    "LabelTables",
    "metric_display_name",
    "resolve_achievement_labels",
    "resolve_management_labels",
    "resolve_labels",
]
