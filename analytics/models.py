from dataclasses import dataclass, field
from datetime import date, datetime, time, timedelta

from dataclasses_json import LetterCase, config, dataclass_json

from exceptions import ValidationError
from utils.enums import DowntimeType
from utils.functions import parse_calendar_date

END_OF_DAY = time(23, 59, 59, 999000)


def _isoformat(value: datetime) -> str:
    return value.isoformat(timespec="milliseconds")


def datetime_field():
    return field(metadata=config(encoder=_isoformat))


def internal_field(default=0):
    """Field kept on the object but never written to the wire format."""
    return field(default=default, metadata=config(exclude=lambda _: True))


@dataclass(frozen=True)
class DateRange:
    """Inclusive analysis window, from 00:00:00.000 of the first day to 23:59:59.999 of the last."""
    start_date: datetime
    end_date: datetime

    @classmethod
    def from_days(cls, first_day: date, last_day: date) -> "DateRange":
        return cls(
            start_date=datetime.combine(first_day, time.min),
            end_date=datetime.combine(last_day, END_OF_DAY),
        )

    @classmethod
    def from_bounds(cls, start_date: date | datetime | str | None, end_date: date | datetime | str | None) -> "DateRange":
        """
        Builds a window from explicit bounds. Only the calendar day of each bound is used.

        Args:
            start_date (date | datetime | str): First day of the window.
            end_date (date | datetime | str): Last day of the window.

        Raises:
            ValidationError: If a bound is missing or is not a valid date, or the start is after the end.

        Returns:
            DateRange: Inclusive window.
        """
        if start_date in (None, "") or end_date in (None, ""):
            raise ValidationError("Both start date and end date are required")
        first_day = parse_calendar_date(start_date)
        last_day = parse_calendar_date(end_date)
        if first_day > last_day:
            raise ValidationError("Start date must be before end date")
        return cls.from_days(first_day, last_day)

    @property
    def first_day(self) -> date:
        return self.start_date.date()

    @property
    def last_day(self) -> date:
        return self.end_date.date()

    @property
    def total_days(self) -> int:
        return (self.end_date - self.start_date) // timedelta(days=1) + 1

    def contains(self, day: date) -> bool:
        return self.first_day <= day <= self.last_day


@dataclass
class NormalizedIncident:
    """One downtime incident with a resolved duration."""
    date: date
    duration_minutes: float
    type: DowntimeType
    source_id: str
    start_minute: int | None = None
    start_time: str | None = None
    end_time: str | None = None


@dataclass_json(letter_case=LetterCase.CAMEL)
@dataclass
class Bucket:
    """Contiguous reporting period of the availability series."""
    period_start: datetime = datetime_field()
    period_end: datetime = datetime_field()
    total_minutes_in_period: int = 0
    downtime_minutes: float = 0
    planned_minutes: float = 0
    unplanned_minutes: float = 0
    incident_count: int = 0
    availability_pct: float = 100.0
    raw_downtime_minutes: float = internal_field()
    clamped: bool = internal_field(False)

    @property
    def days(self) -> int:
        return (self.period_end.date() - self.period_start.date()).days + 1


@dataclass_json(letter_case=LetterCase.CAMEL)
@dataclass
class AnalysisPeriod:
    start_date: datetime = datetime_field()
    end_date: datetime = datetime_field()
    total_days: int = 0


@dataclass_json(letter_case=LetterCase.CAMEL)
@dataclass
class Summary:
    overall_availability: float
    total_downtime_minutes: float
    raw_total_downtime_minutes: float
    total_incidents: int
    planned_downtime_minutes: float
    unplanned_downtime_minutes: float
    dropped_records: int


@dataclass_json(letter_case=LetterCase.CAMEL)
@dataclass
class DowntimeTypeBreakdown:
    total: float = 0
    percentage: float = 0.0
    incidents: int = 0


@dataclass_json(letter_case=LetterCase.CAMEL)
@dataclass
class DowntimeBreakdown:
    planned: DowntimeTypeBreakdown
    unplanned: DowntimeTypeBreakdown


@dataclass_json(letter_case=LetterCase.CAMEL)
@dataclass
class Diagnostics:
    """
    Data quality indicators of the report.

    `merged_downtime_minutes` is the downtime with overlapping incidents of the same day
    counted once; `overlap_minutes` is how much the naive sum exceeds it.
    """
    clamped_buckets: int = 0
    merged_downtime_minutes: float = 0
    overlap_minutes: float = 0


@dataclass_json(letter_case=LetterCase.CAMEL)
@dataclass
class PeriodReliability:
    """Uptime and repair statistics of one bucket of the series."""
    period_start: datetime = datetime_field()
    period_end: datetime = datetime_field()
    uptime_minutes: float = 0
    mtbf_minutes: float = 0
    mttr_minutes: float = 0
    average_incident_duration_minutes: float = 0


@dataclass_json(letter_case=LetterCase.CAMEL)
@dataclass
class Reliability:
    """
    Uptime and repair statistics of the window.

    MTBF is the period length divided by the gaps between incidents (`incidents - 1`),
    or the whole period length with fewer than two incidents. MTTR and the average
    incident duration are based on the logged (pre-clamp) downtime.
    """
    uptime_minutes: float = 0
    mtbf_minutes: float = 0
    mttr_minutes: float = 0
    average_incident_duration_minutes: float = 0
    periods: list[PeriodReliability] = field(default_factory=list)


@dataclass_json(letter_case=LetterCase.CAMEL)
@dataclass
class IncidentEntry:
    """Incident of the report incident list."""
    id: str
    date: date = field(metadata=config(encoder=date.isoformat))
    start_time: str | None = None
    end_time: str = "Ongoing"
    duration_minutes: float = 0
    type: str = DowntimeType.UNPLANNED.value


@dataclass_json(letter_case=LetterCase.CAMEL)
@dataclass
class AnalysisReport:
    """Availability report of one asset over an analysis window."""
    asset_id: str
    asset_name: str
    department: str | None
    analysis_period: AnalysisPeriod
    summary: Summary
    series: list[Bucket]
    downtime_breakdown: DowntimeBreakdown
    diagnostics: Diagnostics
    reliability: Reliability
    incidents: list[IncidentEntry]
