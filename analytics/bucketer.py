from datetime import date, datetime, time, timedelta

from dateutil.relativedelta import relativedelta

from analytics.models import END_OF_DAY, Bucket, DateRange, NormalizedIncident
from constants import MINUTES_PER_DAY
from utils.enums import DowntimeType, Granularity


def _period_start(day: date, granularity: Granularity) -> date:
    """Natural (unclipped) start of the period containing `day`."""
    match granularity:
        case Granularity.WEEK:
            return day - timedelta(days=day.weekday())
        case Granularity.MONTH:
            return day.replace(day=1)
        case Granularity.QUARTER:
            return day.replace(month=(day.month - 1) // 3 * 3 + 1, day=1)
        case Granularity.YEAR:
            return day.replace(month=1, day=1)
        case _:
            return day


def _period_step(granularity: Granularity) -> relativedelta:
    match granularity:
        case Granularity.WEEK:
            return relativedelta(weeks=1)
        case Granularity.MONTH:
            return relativedelta(months=1)
        case Granularity.QUARTER:
            return relativedelta(months=3)
        case Granularity.YEAR:
            return relativedelta(years=1)
        case _:
            return relativedelta(days=1)


def build_buckets(date_range: DateRange, granularity: Granularity = Granularity.DAY) -> list[Bucket]:
    """
    Partitions the analysis window into ordered, gapless reporting periods.

    The first and last buckets are clipped to the window, so a monthly series over a
    window starting mid-month begins with a partial month.

    Args:
        date_range (DateRange): Analysis window.
        granularity (Granularity, optional): Size of the periods. Defaults to Granularity.DAY.

    Returns:
        list[Bucket]: Empty buckets covering exactly the window.
    """
    step = _period_step(granularity)
    buckets = []
    natural_start = _period_start(date_range.first_day, granularity)

    while natural_start <= date_range.last_day:
        next_start = natural_start + step
        first_day = max(natural_start, date_range.first_day)
        last_day = min(next_start - timedelta(days=1), date_range.last_day)
        days = (last_day - first_day).days + 1
        buckets.append(
            Bucket(
                period_start=datetime.combine(first_day, time.min),
                period_end=datetime.combine(last_day, END_OF_DAY),
                total_minutes_in_period=days * MINUTES_PER_DAY,
            )
        )
        natural_start = next_start

    return buckets


def assign_incidents(buckets: list[Bucket], incidents: list[NormalizedIncident]) -> list[Bucket]:
    """
    Adds incidents to the buckets containing their dates.

    Both lists must be sorted ascending, so a single forward pass over the buckets is
    enough: the bucket pointer only moves when an incident lies past the current bucket.

    Args:
        buckets (list[Bucket]): Ordered buckets covering the window.
        incidents (list[NormalizedIncident]): Incidents sorted by date, all inside the window.

    Returns:
        list[Bucket]: The same buckets with accumulated raw downtime and incident counts.
    """
    index = 0
    for incident in incidents:
        while index < len(buckets) and incident.date > buckets[index].period_end.date():
            index += 1
        if index == len(buckets):
            break

        bucket = buckets[index]
        bucket.incident_count += 1
        bucket.raw_downtime_minutes += incident.duration_minutes
        if incident.type == DowntimeType.PLANNED:
            bucket.planned_minutes += incident.duration_minutes
        else:
            bucket.unplanned_minutes += incident.duration_minutes

    return buckets
