"""Unit tests for the Level Definition Table."""

import pandas as pd
import pytest

from airzones.levels import default_level_table, level_table_from_frames, read_level_table
from airzones.models import AchievementCategory, LevelKind, ManagementCategory, MetricKind


@pytest.fixture
def achievement_df():
    return pd.DataFrame(
        {
            "metric": ["no2_1yr", "no2_1yr", "no2_3yr", "no2_3yr", "pm2.5_annual"],
            "category": ["Achieved", "Not Achieved", "Achieved", "Not Achieved", "Achieved"],
            "cut_low": [0, 17, 0, 60, 0],
            "cut_high": [17, None, 60, None, 8.8],
            "unit": ["ppb", "ppb", "ppb", "ppb", "µg/m³"],
        }
    )


@pytest.fixture
def management_df():
    return pd.DataFrame(
        {
            "metric": ["no2_1yr"] * 4,
            "category": [c.value for c in ManagementCategory],
            "cut_low": [0, 2, 7, 17],
            "cut_high": [2, 7, 17, None],
            "unit": ["ppb"] * 4,
            "band_text": ["ppb: <2ppb", None, None, None],
        }
    )


def test_default_table_covers_both_metrics_and_scales():
    table = default_level_table()

    for metric in MetricKind:
        achievement = [d for d in table if d.metric is metric and d.kind is LevelKind.ACHIEVEMENT]
        management = [d for d in table if d.metric is metric and d.kind is LevelKind.MANAGEMENT]
        assert {d.category for d in achievement} == {
            AchievementCategory.ACHIEVED,
            AchievementCategory.NOT_ACHIEVED,
        }
        assert {d.category for d in management} == set(ManagementCategory)


def test_table_from_frames_skips_other_pollutants(achievement_df, management_df):
    """Rows for metrics of other pollutants are ignored."""
    table = level_table_from_frames(achievement_df, management_df)

    assert len(table) == 8
    assert all(d.unit == "ppb" for d in table)
    first_management = next(d for d in table if d.kind is LevelKind.MANAGEMENT)
    assert first_management.band_text == "ppb: <2ppb"
    top = next(d for d in table if d.category is ManagementCategory.ACHIEVING)
    assert top.cut_high is None


def test_table_from_frames_missing_columns(achievement_df, management_df):
    with pytest.raises(ValueError, match="Required columns missing"):
        level_table_from_frames(achievement_df.drop(columns=["unit"]), management_df)


def test_table_from_frames_unknown_category(achievement_df, management_df):
    achievement_df.loc[0, "category"] = "Mostly Achieved"

    with pytest.raises(ValueError):
        level_table_from_frames(achievement_df, management_df)


def test_read_level_table_from_csv(tmp_path, achievement_df, management_df):
    achievement_path = tmp_path / "achievement.csv"
    management_path = tmp_path / "management.csv"
    achievement_df.to_csv(achievement_path, index=False)
    management_df.to_csv(management_path, index=False)

    table = read_level_table(achievement_path, management_path)

    assert table == level_table_from_frames(achievement_df, management_df)
