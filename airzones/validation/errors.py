"""Validation error definitions."""

from dataclasses import dataclass


@dataclass(frozen=True)
class ValidationError:
    """A problem found in one input dataset.

    Attributes:
        dataset: Name of the dataset checked ("Stations" or "Zones")
        message: Description of the problem
        field: Column or property concerned (columns, metric, crs, geometry)
    """

    dataset: str
    message: str
    field: str | None = None

    def __str__(self) -> str:
        return f"{self.dataset}: {self.message}"
