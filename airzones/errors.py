"""Exceptions raised by the classification pipeline.

All of these indicate a defect in upstream data or reference configuration.
None are retried: they propagate and abort the run, identifying the offending
metric, category or value.
"""

from airzones.models.enums import MetricKind


class AirZoneError(Exception):
    """Base class for classification pipeline errors."""


class ConfigurationError(AirZoneError):
    """Level definitions are missing or inconsistent for a metric."""


class MissingLabelMapping(AirZoneError):
    """A classified category has no entry in the label tables."""

    def __init__(self, metric: MetricKind, category: object):
        self.metric = metric
        self.category = category
        super().__init__(f"No label entry for metric '{metric.value}', category '{category}'")


class OutOfRangeValue(AirZoneError):
    """A metric value falls outside every defined band."""

    def __init__(self, metric: MetricKind, value: float):
        self.metric = metric
        self.value = value
        super().__init__(f"Value {value} for metric '{metric.value}' is outside all level bands")


class UnmappedPaletteValue(AirZoneError):
    """A zone display label is not in the layer palette."""

    def __init__(self, metric: MetricKind, label: str):
        self.metric = metric
        self.label = label
        super().__init__(f"Display label '{label}' for metric '{metric.value}' has no palette colour")
