from datetime import date, datetime, timedelta

from dateutil.relativedelta import relativedelta

from analytics.models import DateRange
from constants import DEFAULT_PRESET
from utils.enums import Preset


def _start_of_week(day: date) -> date:
    return day - timedelta(days=day.weekday())


def _start_of_quarter(day: date) -> date:
    return day.replace(month=(day.month - 1) // 3 * 3 + 1, day=1)


def get_date_range_for_preset(preset: Preset, now: datetime | None = None) -> DateRange:
    """
    Computes the analysis window of a named preset relative to `now`.

    Args:
        preset (Preset): Preset to resolve. `custom` has no fixed window and resolves
            to the last 30 days.
        now (datetime, optional): Reference moment. Defaults to datetime.now().

    Returns:
        DateRange: Window from the first day at 00:00:00.000 to the last day at 23:59:59.999.
    """
    today = (now or datetime.now()).date()

    match preset:
        case Preset.TODAY:
            return DateRange.from_days(today, today)
        case Preset.YESTERDAY:
            yesterday = today - timedelta(days=1)
            return DateRange.from_days(yesterday, yesterday)
        case Preset.LAST_7_DAYS:
            return DateRange.from_days(today - timedelta(days=6), today)
        case Preset.LAST_30_DAYS:
            return DateRange.from_days(today - timedelta(days=29), today)
        case Preset.LAST_90_DAYS:
            return DateRange.from_days(today - timedelta(days=89), today)
        case Preset.THIS_WEEK:
            return DateRange.from_days(_start_of_week(today), today)
        case Preset.LAST_WEEK:
            last_monday = _start_of_week(today) - timedelta(days=7)
            return DateRange.from_days(last_monday, last_monday + timedelta(days=6))
        case Preset.THIS_MONTH:
            return DateRange.from_days(today.replace(day=1), today)
        case Preset.LAST_MONTH:
            first_day = today.replace(day=1) - relativedelta(months=1)
            return DateRange.from_days(first_day, today.replace(day=1) - timedelta(days=1))
        case Preset.THIS_QUARTER:
            return DateRange.from_days(_start_of_quarter(today), today)
        case Preset.THIS_YEAR:
            return DateRange.from_days(today.replace(month=1, day=1), today)
        case _:
            return DateRange.from_days(today - timedelta(days=29), today)


def _parse_preset(preset: Preset | str | None) -> Preset | None:
    if preset is None or isinstance(preset, Preset):
        return preset
    try:
        return Preset(preset.strip().lower())
    except (AttributeError, ValueError):
        return None


def resolve_date_range(
    preset: Preset | str | None = None,
    start_date: date | datetime | str | None = None,
    end_date: date | datetime | str | None = None,
    now: datetime | None = None,
) -> DateRange:
    """
    Maps a preset or explicit bounds to a concrete analysis window.

    A known preset other than `custom` wins over explicit bounds. Without a usable preset
    the explicit bounds are used, and without any of them the window falls back to the
    default preset (last 30 days).

    Args:
        preset (Preset | str, optional): Named preset, e.g. "last_7_days". Unknown values are ignored.
        start_date (date | datetime | str, optional): First day of a custom window.
        end_date (date | datetime | str, optional): Last day of a custom window.
        now (datetime, optional): Reference moment of presets. Defaults to datetime.now().

    Raises:
        ValidationError: If a bound is not a valid date, only one bound is given,
            or the start is after the end.

    Returns:
        DateRange: Resolved inclusive window.
    """
    resolved_preset = _parse_preset(preset)
    if resolved_preset is not None and resolved_preset != Preset.CUSTOM:
        return get_date_range_for_preset(resolved_preset, now)

    if start_date in (None, "") and end_date in (None, ""):
        return get_date_range_for_preset(_parse_preset(DEFAULT_PRESET) or Preset.LAST_30_DAYS, now)
    return DateRange.from_bounds(start_date, end_date)
