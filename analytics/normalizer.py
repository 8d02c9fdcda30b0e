from dataclasses import dataclass, field
from typing import Iterable

from analytics.models import DateRange, NormalizedIncident
from db.models import RawActivityRecord
from utils.enums import DowntimeType
from utils.functions import calculate_clock_duration, is_valid_clock_time, parse_clock_time
from utils.log import get_logger

_logger = get_logger("IncidentNormalizer")


@dataclass
class NormalizationResult:
    incidents: list[NormalizedIncident] = field(default_factory=list)
    dropped_records: int = 0


def resolve_duration(record: RawActivityRecord) -> float | None:
    """
    Resolves the downtime duration of a record.

    A positive operator-entered `downtime` wins. Otherwise the duration is computed
    from the `startTime`/`endTime` clock values.

    Args:
        record (RawActivityRecord): Logged activity.

    Raises:
        ValidationError: If the clock values are needed but are not valid `HH:MM` times.

    Returns:
        float | None: Duration in minutes, or `None` if the record has no positive duration.
    """
    if record.downtime is not None and record.downtime > 0:
        return record.downtime
    if record.start_time and record.end_time:
        duration = calculate_clock_duration(record.start_time, record.end_time)
        if duration > 0:
            return duration
    return None


def _sort_key(incident: NormalizedIncident) -> tuple:
    return incident.date, incident.start_minute or 0


def normalize_incidents(records: Iterable[RawActivityRecord], date_range: DateRange) -> NormalizationResult:
    """
    Converts logged activities to incidents with resolved durations.

    Records without a valid date, without a resolvable positive duration, or dated
    outside the window are dropped and counted instead of failing the whole analysis.

    Args:
        records (Iterable[RawActivityRecord]): Activities of one asset.
        date_range (DateRange): Analysis window.

    Raises:
        ValidationError: If a record relies on malformed `HH:MM` clock values.

    Returns:
        NormalizationResult: Incidents sorted by date and start time, and the number of dropped records.
    """
    result = NormalizationResult()

    for record in records:
        if record.date is None:
            _logger.debug("Record %s has no valid date", record._id)
            result.dropped_records += 1
            continue

        if not date_range.contains(record.date):
            _logger.debug("Record %s dated %s is outside of the window", record._id, record.date)
            result.dropped_records += 1
            continue

        duration = resolve_duration(record)
        if duration is None:
            _logger.debug("Record %s has no resolvable downtime", record._id)
            result.dropped_records += 1
            continue

        start_minute = parse_clock_time(record.start_time) if is_valid_clock_time(record.start_time) else None
        result.incidents.append(
            NormalizedIncident(
                date=record.date,
                duration_minutes=duration,
                type=record.downtime_type or DowntimeType.UNPLANNED,
                source_id=record._id,
                start_minute=start_minute,
                start_time=record.start_time,
                end_time=record.end_time,
            )
        )

    result.incidents.sort(key=_sort_key)
    if result.dropped_records:
        _logger.info("%d of %d records were dropped", result.dropped_records,
                     result.dropped_records + len(result.incidents))
    return result
