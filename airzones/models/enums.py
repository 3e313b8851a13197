"""Enums for metrics, level kinds and classification categories.

Category enums replace free-text matching on labels: every join between
classified data and the label tables is keyed on these members.
"""

from enum import Enum


class MetricKind(Enum):
    """The two regulatory averaging periods tracked by the standard.

    Values are the scoring library's internal metric identifiers.
    """

    ONE_HOUR = "no2_3yr"
    ANNUAL = "no2_1yr"

    @property
    def period(self) -> str:
        """Human readable averaging period."""
        return "1-Hour" if self is MetricKind.ONE_HOUR else "Annual"

    def suffix(self, prefix: str) -> str:
        """Metric identifier with the pollutant prefix stripped."""
        return self.value.removeprefix(prefix)

    @classmethod
    def parse(cls, value: "str | MetricKind") -> "MetricKind":
        """Parse a metric identifier or alias from input data.

        Raises:
            ValueError: If the identifier is not recognised
        """
        if isinstance(value, cls):
            return value
        key = str(value).strip().lower()
        metric = _METRIC_ALIASES.get(key)
        if metric is None:
            msg = f"Unknown metric identifier: {value!r}"
            raise ValueError(msg)
        return metric


_METRIC_ALIASES: dict[str, MetricKind] = {
    "no2_3yr": MetricKind.ONE_HOUR,
    "1hr": MetricKind.ONE_HOUR,
    "1-hour": MetricKind.ONE_HOUR,
    "one_hour": MetricKind.ONE_HOUR,
    "3yr": MetricKind.ONE_HOUR,
    "no2_1yr": MetricKind.ANNUAL,
    "annual": MetricKind.ANNUAL,
    "1yr": MetricKind.ANNUAL,
}


class LevelKind(Enum):
    """Whether a level belongs to the achievement or the management scale."""

    ACHIEVEMENT = "achievement"
    MANAGEMENT = "management"


class AchievementCategory(Enum):
    """Achievement of the standard by an air zone (or station).

    INSUFFICIENT_DATA has no numeric band; it stands in for any missing
    classification.
    """

    NOT_ACHIEVED = "Not Achieved"
    ACHIEVED = "Achieved"
    INSUFFICIENT_DATA = "Insufficient Data"

    @property
    def order_rank(self) -> int:
        """Fixed legend position (not alphabetical)."""
        return _ACHIEVEMENT_ORDER.index(self)

    @classmethod
    def parse(cls, value) -> "AchievementCategory":
        """Parse a category label; missing values are INSUFFICIENT_DATA.

        Raises:
            ValueError: If the label is not a known category
        """
        if isinstance(value, cls):
            return value
        if value is None or (isinstance(value, float) and value != value):
            return cls.INSUFFICIENT_DATA
        text = str(value).strip()
        if not text:
            return cls.INSUFFICIENT_DATA
        for member in cls:
            if member.value.lower() == text.lower():
                return member
        msg = f"Unknown achievement category: {value!r}"
        raise ValueError(msg)


_ACHIEVEMENT_ORDER = (
    AchievementCategory.NOT_ACHIEVED,
    AchievementCategory.ACHIEVED,
    AchievementCategory.INSUFFICIENT_DATA,
)


class ManagementCategory(Enum):
    """Management actions for a station, ordered least to most severe."""

    KEEPING_CLEAN = "Actions for Keeping Clean Areas Clean"
    PREVENTING_DETERIORATION = "Actions for Preventing Air Quality Deterioration"
    PREVENTING_EXCEEDANCE = "Actions for Preventing CAAQS Exceedance"
    ACHIEVING = "Actions for Achieving Air Zone CAAQS"

    @property
    def order_rank(self) -> int:
        return list(ManagementCategory).index(self)
