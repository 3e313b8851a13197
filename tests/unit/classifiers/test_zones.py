"""Unit tests for ZoneAggregator."""

import pytest

from airzones.classifiers import ZoneAggregator
from airzones.errors import MissingLabelMapping
from airzones.models import AchievementCategory, MetricKind


def _zone(zones, zone_id: str, metric: MetricKind):
    return zones[(zones["zone_id"] == zone_id) & (zones["metric"] == metric)].iloc[0]


class TestZoneCategories:
    """Tests for ambient categories and label metadata."""

    def test_missing_category_is_insufficient_data(self, classified_zones):
        zone = _zone(classified_zones, "Z3", MetricKind.ANNUAL)

        assert zone["ambient_category"] is AchievementCategory.INSUFFICIENT_DATA
        assert zone["ambient_label"] == "Insufficient Data"
        assert zone["ambient_colour"] == "#dbdbdb"
        assert zone["ambient_rank"] == 2

    def test_labels_joined(self, classified_zones):
        zone = _zone(classified_zones, "Z1", MetricKind.ANNUAL)

        assert zone["ambient_category"] is AchievementCategory.NOT_ACHIEVED
        assert zone["ambient_label"] == "Not Achieved (17 ppb or more)"
        assert zone["ambient_colour"] == "#cd7277"
        assert zone["unit"] == "ppb"

    def test_every_zone_kept(self, zones_gdf, classified_zones):
        assert len(classified_zones) == len(zones_gdf)

    def test_unknown_category_raises(self, zones_gdf, labels):
        zones_gdf.loc[1, "ambient_category"] = "Mostly Achieved"

        with pytest.raises(MissingLabelMapping) as exc_info:
            ZoneAggregator(zones_gdf, labels).run()

        assert exc_info.value.metric is MetricKind.ANNUAL
        assert exc_info.value.category == "Mostly Achieved"

    def test_category_column_absent(self, zones_gdf, labels):
        """Without a category column every zone is Insufficient Data."""
        zones = ZoneAggregator(zones_gdf.drop(columns=["ambient_category"]), labels).run()["zones"]

        assert (zones["ambient_category"] == AchievementCategory.INSUFFICIENT_DATA).all()
        assert zones["popup"].isna().all()


class TestZoneStationCounts:
    """Tests for station counts, tooltips and popups."""

    @pytest.mark.parametrize(
        ("zone_id", "metric", "expected"),
        [
            ("Z1", MetricKind.ANNUAL, 2),
            ("Z2", MetricKind.ANNUAL, 1),
            ("Z3", MetricKind.ANNUAL, 0),
            ("Z1", MetricKind.ONE_HOUR, 1),
            ("Z2", MetricKind.ONE_HOUR, 0),
        ],
    )
    def test_station_counts(self, classified_zones, zone_id, metric, expected):
        assert _zone(classified_zones, zone_id, metric)["station_count"] == expected

    def test_tooltips(self, classified_zones):
        assert _zone(classified_zones, "Z1", MetricKind.ANNUAL)["tooltip"] == (
            "Zone One<br>2 Monitoring Stations"
        )
        assert _zone(classified_zones, "Z2", MetricKind.ANNUAL)["tooltip"] == (
            "Zone Two<br>1 Monitoring Station"
        )
        assert _zone(classified_zones, "Z3", MetricKind.ANNUAL)["tooltip"] == (
            "Zone Three<br>0 Monitoring Stations"
        )

    def test_tooltip_escapes_zone_name(self, zones_gdf, labels):
        zones_gdf.loc[1, "zone_name"] = "Fraser & <Valley>"

        zones = ZoneAggregator(zones_gdf, labels).run()["zones"]

        assert _zone(zones, "Z2", MetricKind.ANNUAL)["tooltip"] == (
            "Fraser &amp; &lt;Valley&gt;<br>0 Monitoring Stations"
        )

    def test_popup_for_classified_zone(self, classified_zones):
        popup = _zone(classified_zones, "Z1", MetricKind.ANNUAL)["popup"]

        assert popup == (
            '<div class="popup"><h4>Zone One</h4>'
            "<p><b>NO₂ Annual Metric:</b> Not Achieved (17 ppb or more)</p>"
            "<p><b>Monitoring Stations:</b> 2</p>"
            "<p><b>Representative Station:</b> S2</p>"
            "<p><b>Years of Data:</b> 3</p>"
            "</div>"
        )

    def test_popup_skips_missing_details(self, classified_zones):
        popup = _zone(classified_zones, "Z2", MetricKind.ONE_HOUR)["popup"]

        assert "Representative Station" not in popup
        assert "Years of Data" not in popup

    def test_unclassified_zone_with_stations(self, zones_gdf, labels, station_results):
        """Stations are still counted for a zone with no category, but no popup is shown."""
        zones_gdf.loc[0, "ambient_category"] = None

        zones = ZoneAggregator(
            zones_gdf, labels, station_counts=station_results["station_counts"]
        ).run()["zones"]
        zone = _zone(zones, "Z1", MetricKind.ANNUAL)

        assert zone["ambient_category"] is AchievementCategory.INSUFFICIENT_DATA
        assert zone["station_count"] == 2
        assert zone["tooltip"] == "Zone One<br>2 Monitoring Stations"
        assert zone["popup"] is None

    def test_no_station_counts(self, zones_gdf, labels):
        zones = ZoneAggregator(zones_gdf, labels).run()["zones"]

        assert (zones["station_count"] == 0).all()
        assert zones["tooltip"].str.endswith("0 Monitoring Stations").all()
