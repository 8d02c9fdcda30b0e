from itertools import groupby

from analytics.models import (
    Bucket,
    Diagnostics,
    DowntimeBreakdown,
    DowntimeTypeBreakdown,
    NormalizedIncident,
    PeriodReliability,
    Reliability,
    Summary,
)
from utils.enums import DowntimeType
from utils.log import get_logger

_logger = get_logger("AvailabilityCalculator")


def availability_percentage(total_minutes: float, downtime_minutes: float) -> float:
    """
    Share of the period during which the asset was not down.

    Args:
        total_minutes (float): Length of the period in minutes.
        downtime_minutes (float): Downtime inside the period, already clamped to its length.

    Returns:
        float: Percentage rounded to 2 decimals. A zero-length period is fully available.
    """
    if total_minutes <= 0:
        return 100.0
    return round((total_minutes - downtime_minutes) / total_minutes * 100, 2)


def calculate_bucket_availability(bucket: Bucket) -> Bucket:
    """
    Saturates the bucket downtime to the bucket length and computes its availability.

    Overlapping or duplicated incidents can log more downtime than the period holds.
    That is not an error: the downtime is clamped and the raw value is kept on the bucket.

    Args:
        bucket (Bucket): Bucket with accumulated raw downtime.

    Returns:
        Bucket: The same bucket with `downtime_minutes` and `availability_pct` filled in.
    """
    bucket.downtime_minutes = min(bucket.raw_downtime_minutes, bucket.total_minutes_in_period)
    bucket.clamped = bucket.raw_downtime_minutes > bucket.total_minutes_in_period
    if bucket.clamped:
        _logger.warning(
            "Downtime of period %s - %s clamped: %s logged minutes exceed %s minutes of the period",
            bucket.period_start.date(), bucket.period_end.date(),
            bucket.raw_downtime_minutes, bucket.total_minutes_in_period,
        )
    bucket.availability_pct = availability_percentage(bucket.total_minutes_in_period, bucket.downtime_minutes)
    return bucket


def calculate_summary(buckets: list[Bucket], dropped_records: int = 0) -> Summary:
    """
    Calculates window-level statistics.

    Minutes are summed over all buckets before the single availability ratio is taken;
    per-bucket percentages are never averaged because clipped buckets are shorter.

    Args:
        buckets (list[Bucket]): Buckets after calculate_bucket_availability.
        dropped_records (int, optional): Number of records excluded by normalization.

    Returns:
        Summary: Window statistics.
    """
    total_minutes = sum(bucket.total_minutes_in_period for bucket in buckets)
    total_downtime = sum(bucket.downtime_minutes for bucket in buckets)

    return Summary(
        overall_availability=availability_percentage(total_minutes, total_downtime),
        total_downtime_minutes=total_downtime,
        raw_total_downtime_minutes=sum(bucket.raw_downtime_minutes for bucket in buckets),
        total_incidents=sum(bucket.incident_count for bucket in buckets),
        planned_downtime_minutes=sum(bucket.planned_minutes for bucket in buckets),
        unplanned_downtime_minutes=sum(bucket.unplanned_minutes for bucket in buckets),
        dropped_records=dropped_records,
    )


def calculate_downtime_breakdown(incidents: list[NormalizedIncident]) -> DowntimeBreakdown:
    """Splits the logged downtime into planned and unplanned shares."""
    planned = DowntimeTypeBreakdown()
    unplanned = DowntimeTypeBreakdown()

    for incident in incidents:
        breakdown = planned if incident.type == DowntimeType.PLANNED else unplanned
        breakdown.total += incident.duration_minutes
        breakdown.incidents += 1

    total = planned.total + unplanned.total
    if total > 0:
        planned.percentage = round(planned.total / total * 100, 2)
        unplanned.percentage = round(unplanned.total / total * 100, 2)
    return DowntimeBreakdown(planned=planned, unplanned=unplanned)


def calculate_merged_downtime(incidents: list[NormalizedIncident]) -> float:
    """
    Calculates the downtime with overlapping incidents of the same day counted once.

    Incidents with a start time are intervals [start, start + duration); overlapping
    intervals of one day are merged. Incidents without a start time cannot be placed
    on the clock and are added as logged.

    Args:
        incidents (list[NormalizedIncident]): Incidents sorted by date.

    Returns:
        float: Interval-union downtime in minutes.
    """
    merged_total = 0
    for _, day_incidents in groupby(incidents, key=lambda incident: incident.date):
        intervals = []
        for incident in day_incidents:
            if incident.start_minute is None:
                merged_total += incident.duration_minutes
            else:
                intervals.append((incident.start_minute, incident.start_minute + incident.duration_minutes))

        current_start = current_end = None
        for start, end in sorted(intervals):
            if current_end is None or start > current_end:
                if current_end is not None:
                    merged_total += current_end - current_start
                current_start, current_end = start, end
            else:
                current_end = max(current_end, end)
        if current_end is not None:
            merged_total += current_end - current_start

    return merged_total


def calculate_diagnostics(buckets: list[Bucket], incidents: list[NormalizedIncident]) -> Diagnostics:
    """Collects data quality indicators: clamped buckets and double-logged downtime."""
    raw_total = sum(incident.duration_minutes for incident in incidents)
    merged_total = calculate_merged_downtime(incidents)
    return Diagnostics(
        clamped_buckets=sum(1 for bucket in buckets if bucket.clamped),
        merged_downtime_minutes=round(merged_total, 2),
        overlap_minutes=round(raw_total - merged_total, 2),
    )


def _repair_statistics(total_minutes: float, downtime_minutes: float, raw_downtime_minutes: float,
                       incidents: int) -> dict:
    mtbf = total_minutes / (incidents - 1) if incidents > 1 else total_minutes
    mttr = raw_downtime_minutes / incidents if incidents > 0 else 0
    return {
        "uptime_minutes": round(max(0, total_minutes - downtime_minutes), 2),
        "mtbf_minutes": round(mtbf, 2),
        "mttr_minutes": round(mttr, 2),
        "average_incident_duration_minutes": round(mttr, 2),
    }


def calculate_reliability(buckets: list[Bucket]) -> Reliability:
    """
    Calculates uptime, MTBF and MTTR of every bucket and of the whole window.

    Args:
        buckets (list[Bucket]): Buckets after calculate_bucket_availability.

    Returns:
        Reliability: Window statistics with one entry per bucket.
    """
    periods = [
        PeriodReliability(
            period_start=bucket.period_start,
            period_end=bucket.period_end,
            **_repair_statistics(
                bucket.total_minutes_in_period, bucket.downtime_minutes,
                bucket.raw_downtime_minutes, bucket.incident_count,
            ),
        )
        for bucket in buckets
    ]

    return Reliability(
        periods=periods,
        **_repair_statistics(
            sum(bucket.total_minutes_in_period for bucket in buckets),
            sum(bucket.downtime_minutes for bucket in buckets),
            sum(bucket.raw_downtime_minutes for bucket in buckets),
            sum(bucket.incident_count for bucket in buckets),
        ),
    )
