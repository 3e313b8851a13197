#!/usr/bin/env python

"""Build air zone map layers from station and zone files.

Reads the monitoring station points and air zone polygons, classifies them
against the achievement and management levels, and writes one set of
GeoJSON/legend files per metric for the map rendering component.

Usage:
    uv run python scripts/build_layers.py <stations> <zones> <output_dir>
    uv run python scripts/build_layers.py stations.geojson airzones.gpkg out/ \\
        --achievement-levels achievement.csv --management-levels management.csv
    uv run python scripts/build_layers.py --help
"""

import logging
from pathlib import Path

import geopandas as gpd
import typer

from airzones.config import MapConfig
from airzones.errors import AirZoneError
from airzones.levels import read_level_table
from airzones.outputs import GeoJSONOutputStrategy, OutputStrategy
from airzones.runner import run_pipeline

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

app = typer.Typer(help="Classify air zones and monitoring stations into map layers")


@app.command()
def build(
    stations_file: Path = typer.Argument(
        ...,
        help="Station points (any format readable by geopandas)",
        exists=True,
    ),
    zones_file: Path = typer.Argument(
        ...,
        help="Air zone polygons (any format readable by geopandas)",
        exists=True,
    ),
    output_dir: Path = typer.Argument(
        ...,
        help="Directory for the GeoJSON and legend files",
    ),
    achievement_levels: Path = typer.Option(
        None,
        "--achievement-levels",
        help="CSV of achievement levels (defaults to the built-in NO2 levels)",
        exists=True,
    ),
    management_levels: Path = typer.Option(
        None,
        "--management-levels",
        help="CSV of management levels (defaults to the built-in NO2 levels)",
        exists=True,
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
):
    """Classify stations and zones and write one layer per metric."""
    if verbose:
        logging.getLogger().setLevel(logging.DEBUG)

    if (achievement_levels is None) != (management_levels is None):
        typer.secho(
            "--achievement-levels and --management-levels must be given together",
            fg=typer.colors.RED,
            err=True,
        )
        raise typer.Exit(code=1)

    level_table = None
    if achievement_levels is not None:
        level_table = read_level_table(achievement_levels, management_levels)

    logger.info(f"Stations: {stations_file}")
    logger.info(f"Zones: {zones_file}")
    stations = gpd.read_file(stations_file)
    zones = gpd.read_file(zones_file)

    config = MapConfig()
    try:
        layers = run_pipeline(stations, zones, level_table=level_table, config=config)
    except (AirZoneError, ValueError) as e:
        typer.secho(f"Classification failed: {e}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1) from e

    output: OutputStrategy = GeoJSONOutputStrategy(config)
    written = output.write(layers, output_dir)
    for path in written:
        typer.echo(f"  {path}")
    typer.secho(f"Wrote {len(written)} files to {output_dir}", fg=typer.colors.GREEN)


if __name__ == "__main__":
    app()
