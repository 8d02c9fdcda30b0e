from datetime import date, datetime
from typing import Iterable

from analytics.bucketer import assign_incidents, build_buckets
from analytics.calculator import (
    calculate_bucket_availability,
    calculate_diagnostics,
    calculate_downtime_breakdown,
    calculate_reliability,
    calculate_summary,
)
from analytics.models import AnalysisPeriod, AnalysisReport, DateRange, IncidentEntry, NormalizedIncident
from analytics.normalizer import normalize_incidents
from constants import DEFAULT_GRANULARITY
from db.models import RawActivityRecord
from exceptions import ValidationError
from utils.enums import Granularity
from utils.log import get_logger

_logger = get_logger("AnalyticsAssembler")


def parse_granularity(value: Granularity | str | None) -> Granularity:
    """
    Converts a period name to a Granularity.

    Args:
        value (Granularity | str | None): "day", "week", "month", "quarter" or "year".
            `None` or an empty string selects the default granularity.

    Raises:
        ValidationError: If the period name is unknown.

    Returns:
        Granularity: Parsed granularity.
    """
    if isinstance(value, Granularity):
        return value
    if not value:
        return Granularity(DEFAULT_GRANULARITY)
    try:
        return Granularity(str(value).strip().lower())
    except ValueError as exc:
        raise ValidationError(f"Unknown period {value!r}") from exc


def _incident_entries(incidents: list[NormalizedIncident]) -> list[IncidentEntry]:
    return [
        IncidentEntry(
            id=incident.source_id,
            date=incident.date,
            start_time=incident.start_time,
            end_time=incident.end_time or "Ongoing",
            duration_minutes=incident.duration_minutes,
            type=incident.type.value,
        )
        for incident in incidents
    ]


def compute_asset_analytics(
    asset_id: str,
    asset_name: str,
    department: str | None,
    incidents: Iterable[RawActivityRecord | dict],
    start_date: date | datetime | str,
    end_date: date | datetime | str,
    granularity: Granularity | str | None = None,
) -> AnalysisReport:
    """
    Builds the availability report of one asset.

    The function is pure: the result depends only on its arguments. Records that cannot
    be turned into incidents are counted in `summary.dropped_records`; the report is
    always complete.

    Args:
        asset_id (str): Id of the asset.
        asset_name (str): Display name of the asset.
        department (str | None): Department owning the asset.
        incidents (Iterable[RawActivityRecord | dict]): Logged activities of the asset.
            Raw storage documents are parsed into RawActivityRecord first.
        start_date (date | datetime | str): First day of the analysis window.
        end_date (date | datetime | str): Last day of the analysis window.
        granularity (Granularity | str, optional): Period of the series. Defaults to days.

    Raises:
        ValidationError: If dates, granularity or relied-upon clock values are malformed.

    Returns:
        AnalysisReport: Report with the window, summary, series, reliability statistics,
            incident list and diagnostics.
    """
    date_range = DateRange.from_bounds(start_date, end_date)
    period = parse_granularity(granularity)
    records = [
        record if isinstance(record, RawActivityRecord) else RawActivityRecord.from_document(record)
        for record in incidents
    ]

    normalized = normalize_incidents(records, date_range)
    buckets = assign_incidents(build_buckets(date_range, period), normalized.incidents)
    series = [calculate_bucket_availability(bucket) for bucket in buckets]
    summary = calculate_summary(series, normalized.dropped_records)

    report = AnalysisReport(
        asset_id=asset_id,
        asset_name=asset_name,
        department=department,
        analysis_period=AnalysisPeriod(
            start_date=date_range.start_date,
            end_date=date_range.end_date,
            total_days=date_range.total_days,
        ),
        summary=summary,
        series=series,
        downtime_breakdown=calculate_downtime_breakdown(normalized.incidents),
        diagnostics=calculate_diagnostics(series, normalized.incidents),
        reliability=calculate_reliability(series),
        incidents=_incident_entries(normalized.incidents),
    )

    _logger.info(
        "Calculated analytics of asset %s for %d days: availability %s%%, %d incidents",
        asset_id, date_range.total_days, summary.overall_availability, summary.total_incidents,
    )
    return report
