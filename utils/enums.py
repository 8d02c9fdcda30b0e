from enum import Enum


class DowntimeType(Enum):
    """Kinds of logged downtime"""

    PLANNED = "planned"
    UNPLANNED = "unplanned"

    @classmethod
    def from_value(cls, value: str | None) -> "DowntimeType":
        """Anything other than an explicit `planned` is counted as unplanned."""
        if value == cls.PLANNED.value:
            return cls.PLANNED
        return cls.UNPLANNED


class Granularity(Enum):
    """Reporting period sizes of the availability series"""

    DAY = "day"
    WEEK = "week"
    MONTH = "month"
    QUARTER = "quarter"
    YEAR = "year"


class Preset(Enum):
    """Named shorthands of analysis windows"""

    TODAY = "today"
    YESTERDAY = "yesterday"
    LAST_7_DAYS = "last_7_days"
    LAST_30_DAYS = "last_30_days"
    LAST_90_DAYS = "last_90_days"
    THIS_WEEK = "this_week"
    LAST_WEEK = "last_week"
    THIS_MONTH = "this_month"
    LAST_MONTH = "last_month"
    THIS_QUARTER = "this_quarter"
    THIS_YEAR = "this_year"
    CUSTOM = "custom"


class Severity(Enum):
    """Downtime severity levels"""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"
