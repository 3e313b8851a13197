"""Level Definition Table: reference achievement and management levels.

The bands themselves are owned by the external scoring library; this module
only holds them as immutable reference data. The default table carries the
2020 Canadian Ambient Air Quality Standards for NO₂.
"""

import logging
from pathlib import Path

import pandas as pd

from airzones.models.domain import LevelDefinition
from airzones.models.enums import AchievementCategory, LevelKind, ManagementCategory, MetricKind

logger = logging.getLogger(__name__)

LevelTable = tuple[LevelDefinition, ...]

LEVEL_TABLE_COLUMNS = ["metric", "category", "cut_low", "cut_high", "unit"]


def _levels(
    metric: MetricKind,
    kind: LevelKind,
    unit: str,
    bands: list[tuple[AchievementCategory | ManagementCategory, float | None, float | None]],
) -> list[LevelDefinition]:
    return [
        LevelDefinition(
            metric=metric, kind=kind, category=category, cut_low=low, cut_high=high, unit=unit
        )
        for category, low, high in bands
    ]


def default_level_table() -> LevelTable:
    """NO₂ achievement and management levels (CAAQS 2020, ppb)."""
    mgmt = ManagementCategory
    ach = AchievementCategory
    return tuple(
        _levels(
            MetricKind.ONE_HOUR,
            LevelKind.ACHIEVEMENT,
            "ppb",
            [(ach.ACHIEVED, 0, 60), (ach.NOT_ACHIEVED, 60, None)],
        )
        + _levels(
            MetricKind.ONE_HOUR,
            LevelKind.MANAGEMENT,
            "ppb",
            [
                (mgmt.KEEPING_CLEAN, 0, 31),
                (mgmt.PREVENTING_DETERIORATION, 31, 42),
                (mgmt.PREVENTING_EXCEEDANCE, 42, 60),
                (mgmt.ACHIEVING, 60, None),
            ],
        )
        + _levels(
            MetricKind.ANNUAL,
            LevelKind.ACHIEVEMENT,
            "ppb",
            [(ach.ACHIEVED, 0, 17), (ach.NOT_ACHIEVED, 17, None)],
        )
        + _levels(
            MetricKind.ANNUAL,
            LevelKind.MANAGEMENT,
            "ppb",
            [
                (mgmt.KEEPING_CLEAN, 0, 2),
                (mgmt.PREVENTING_DETERIORATION, 2, 7),
                (mgmt.PREVENTING_EXCEEDANCE, 7, 17),
                (mgmt.ACHIEVING, 17, None),
            ],
        )
    )


def _optional_float(value) -> float | None:
    return None if pd.isna(value) else float(value)


def _definitions_from_frame(df: pd.DataFrame, kind: LevelKind) -> list[LevelDefinition]:
    missing_cols = [col for col in LEVEL_TABLE_COLUMNS if col not in df.columns]
    if missing_cols:
        msg = (
            f"Required columns missing from {kind.value} levels: {missing_cols}. "
            f"Expected columns: {LEVEL_TABLE_COLUMNS}"
        )
        raise ValueError(msg)

    category_type = AchievementCategory if kind is LevelKind.ACHIEVEMENT else ManagementCategory
    definitions = []
    skipped = 0
    for _, row in df.iterrows():
        try:
            metric = MetricKind.parse(row["metric"])
        except ValueError:
            # Scoring library tables cover every pollutant; keep this one's metrics
            skipped += 1
            continue
        band_text = row.get("band_text")
        definitions.append(
            LevelDefinition(
                metric=metric,
                kind=kind,
                category=category_type(str(row["category"]).strip()),
                cut_low=_optional_float(row["cut_low"]),
                cut_high=_optional_float(row["cut_high"]),
                unit=str(row["unit"]),
                band_text=None if pd.isna(band_text) else str(band_text),
            )
        )
    if skipped:
        logger.debug(f"Skipped {skipped} {kind.value} level rows for other metrics")
    return definitions


def level_table_from_frames(
    achievement_df: pd.DataFrame,
    management_df: pd.DataFrame,
) -> LevelTable:
    """Build a level table from the scoring library's two tables.

    Args:
        achievement_df: Columns metric, category, cut_low, cut_high, unit and
            optionally band_text
        management_df: Same columns for the management levels

    Returns:
        Immutable tuple of LevelDefinition

    Raises:
        ValueError: If required columns are missing or a category is unknown
    """
    return tuple(
        _definitions_from_frame(achievement_df, LevelKind.ACHIEVEMENT)
        + _definitions_from_frame(management_df, LevelKind.MANAGEMENT)
    )


def read_level_table(achievement_path: Path, management_path: Path) -> LevelTable:
    """Read achievement and management levels from CSV files."""
    logger.info(f"Reading level definitions from {achievement_path} and {management_path}")
    return level_table_from_frames(
        pd.read_csv(achievement_path, encoding="utf-8"),
        pd.read_csv(management_path, encoding="utf-8"),
    )
