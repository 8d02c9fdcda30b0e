import re
from datetime import date, datetime

from constants import MINUTES_PER_DAY
from exceptions import ValidationError
from utils.enums import Severity

CLOCK_TIME_PATTERN = re.compile(r"^([0-1]?[0-9]|2[0-3]):([0-5][0-9])$")


def parse_calendar_date(value: date | datetime | str) -> date:
    """
    Converts a date-like value to a calendar day. Time of day and timezone are ignored.

    Args:
        value (date | datetime | str): A date, a datetime or an ISO-8601 string
            ("2024-03-01" or "2024-03-01T10:15:00Z").

    Raises:
        ValidationError: If the value is not a valid calendar date.

    Returns:
        date: Calendar day of the value.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str) and value.strip():
        try:
            return datetime.fromisoformat(value.strip()).date()
        except ValueError:
            pass
    raise ValidationError(f"Invalid date {value!r}")


def parse_clock_time(value: str) -> int:
    """
    Converts an `HH:MM` clock value to minutes since midnight.

    Args:
        value (str): Clock value, e.g. "07:30" or "7:30".

    Raises:
        ValidationError: If the value is not a valid `HH:MM` time.

    Returns:
        int: Number of minutes since midnight.
    """
    match = CLOCK_TIME_PATTERN.match(value.strip()) if isinstance(value, str) else None
    if match is None:
        raise ValidationError(f"Invalid clock time {value!r}, expected HH:MM")
    return int(match.group(1)) * 60 + int(match.group(2))


def is_valid_clock_time(value: str) -> bool:
    return isinstance(value, str) and CLOCK_TIME_PATTERN.match(value.strip()) is not None


def calculate_clock_duration(start_time: str, end_time: str) -> int:
    """
    Calculates the number of minutes between two clock values.
    An end time earlier than the start time means the interval crosses midnight.

    Args:
        start_time (str): Start of the interval in `HH:MM` format.
        end_time (str): End of the interval in `HH:MM` format.

    Returns:
        int: Duration in minutes, always in range [0, 1440).
    """
    duration = parse_clock_time(end_time) - parse_clock_time(start_time)
    if duration < 0:
        duration += MINUTES_PER_DAY
    return duration


def format_duration(minutes: float | None) -> str:
    """
    Formats the downtime duration into a readable format

    Args:
        minutes (float | None): Number of minutes.

    Returns:
        str: Human-readable time format, e.g. "1d 3h 15m".
    """
    if minutes is None:
        return "Not calculated"
    minutes = int(round(minutes))
    if minutes == 0:
        return "No downtime"

    days, rest = divmod(minutes, MINUTES_PER_DAY)
    hours, minutes = divmod(rest, 60)
    parts = []
    if days:
        parts.append(f"{days}d")
    if hours:
        parts.append(f"{hours}h")
    if minutes or not parts:
        parts.append(f"{minutes}m")
    return " ".join(parts)


def get_downtime_severity(minutes: float | None) -> Severity:
    """
    Classifies a downtime duration.

    Args:
        minutes (float | None): Downtime in minutes.

    Returns:
        Severity: low up to 15 minutes, medium up to an hour, high up to 4 hours, critical above.
    """
    if minutes is None or minutes <= 15:
        return Severity.LOW
    if minutes <= 60:
        return Severity.MEDIUM
    if minutes <= 240:
        return Severity.HIGH
    return Severity.CRITICAL
