"""Base output strategy interface for assembled map layers."""

from pathlib import Path
from typing import Protocol

from airzones.models.domain import MapLayer
from airzones.models.enums import MetricKind


class OutputStrategy(Protocol):
    """Protocol for output strategies that serialize map layers.

    The classification core only produces in-memory MapLayer values; the
    caller decides when/where to write them using an appropriate strategy
    for the rendering component that consumes them.
    """

    def write(self, layers: dict[MetricKind, MapLayer], output_dir: Path) -> list[Path]:
        """Write map layers to files.

        Args:
            layers: Map layers keyed by metric
            output_dir: Directory where output files should be written

        Returns:
            Paths of the written files

        Raises:
            IOError: If writing fails
            ValueError: If layers cannot be serialized
        """
        ...
