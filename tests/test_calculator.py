from datetime import date, datetime

import pytest

from analytics.calculator import (
    availability_percentage,
    calculate_bucket_availability,
    calculate_diagnostics,
    calculate_downtime_breakdown,
    calculate_merged_downtime,
    calculate_reliability,
    calculate_summary,
)
from analytics.models import END_OF_DAY, Bucket, NormalizedIncident
from utils.enums import DowntimeType


def bucket(first_day, last_day, raw_downtime=0, planned=0, incidents=0):
    days = (last_day - first_day).days + 1
    return Bucket(
        period_start=datetime.combine(first_day, datetime.min.time()),
        period_end=datetime.combine(last_day, END_OF_DAY),
        total_minutes_in_period=days * 1440,
        planned_minutes=planned,
        unplanned_minutes=raw_downtime - planned,
        incident_count=incidents,
        raw_downtime_minutes=raw_downtime,
    )


def incident(day, minutes, start_minute=None, downtime_type=DowntimeType.UNPLANNED):
    return NormalizedIncident(
        date=day, duration_minutes=minutes, type=downtime_type, source_id="i", start_minute=start_minute
    )


class TestBucketAvailability:

    @pytest.mark.parametrize("downtime, expected", [(0, 100.0), (30, 97.92), (90, 93.75), (720, 50.0), (1440, 0.0)])
    def test_availability(self, downtime, expected):
        result = calculate_bucket_availability(bucket(date(2024, 3, 1), date(2024, 3, 1), downtime))

        assert result.availability_pct == expected
        assert result.downtime_minutes == downtime
        assert not result.clamped

    def test_downtime_is_clamped_to_period_length(self):
        result = calculate_bucket_availability(bucket(date(2024, 3, 1), date(2024, 3, 1), 1500, incidents=1))

        assert result.downtime_minutes == 1440
        assert result.availability_pct == 0.0
        assert result.raw_downtime_minutes == 1500
        assert result.clamped

    def test_zero_length_period_is_available(self):
        assert availability_percentage(0, 0) == 100.0
        assert availability_percentage(0, 25) == 100.0


class TestSummary:

    def test_minutes_are_summed_before_the_ratio(self):
        buckets = [
            calculate_bucket_availability(bucket(date(2024, 3, 3), date(2024, 3, 3), 720, incidents=1)),
            calculate_bucket_availability(bucket(date(2024, 3, 4), date(2024, 3, 9))),
        ]
        summary = calculate_summary(buckets)

        # a plain average of 50% and 100% would give 75%
        assert summary.overall_availability == 92.86
        assert summary.total_downtime_minutes == 720

    def test_raw_and_clamped_totals(self):
        buckets = [
            calculate_bucket_availability(bucket(date(2024, 3, 1), date(2024, 3, 1), 1500, planned=500, incidents=2)),
            calculate_bucket_availability(bucket(date(2024, 3, 2), date(2024, 3, 2), 60, incidents=1)),
        ]
        summary = calculate_summary(buckets, dropped_records=4)

        assert summary.total_downtime_minutes == 1500
        assert summary.raw_total_downtime_minutes == 1560
        assert summary.planned_downtime_minutes == 500
        assert summary.unplanned_downtime_minutes == 1060
        assert summary.total_incidents == 3
        assert summary.dropped_records == 4
        assert summary.overall_availability == 47.92

    def test_empty_series(self):
        summary = calculate_summary([])

        assert summary.overall_availability == 100.0
        assert summary.total_downtime_minutes == 0


class TestBreakdown:

    def test_planned_and_unplanned_shares(self):
        breakdown = calculate_downtime_breakdown([
            incident(date(2024, 3, 1), 30),
            incident(date(2024, 3, 2), 90, downtime_type=DowntimeType.PLANNED),
        ])

        assert (breakdown.planned.total, breakdown.planned.percentage, breakdown.planned.incidents) == (90, 75.0, 1)
        assert (breakdown.unplanned.total, breakdown.unplanned.percentage, breakdown.unplanned.incidents) == (30, 25.0, 1)

    def test_no_downtime(self):
        breakdown = calculate_downtime_breakdown([])
        assert breakdown.planned.percentage == breakdown.unplanned.percentage == 0.0


class TestMergedDowntime:

    def test_overlapping_incidents_are_counted_once(self):
        incidents = [
            incident(date(2024, 3, 1), 60, start_minute=480),
            incident(date(2024, 3, 1), 60, start_minute=510),
            incident(date(2024, 3, 1), 30, start_minute=600),
        ]
        assert calculate_merged_downtime(incidents) == 120

    def test_same_times_on_different_days_do_not_overlap(self):
        incidents = [
            incident(date(2024, 3, 1), 60, start_minute=480),
            incident(date(2024, 3, 2), 60, start_minute=480),
        ]
        assert calculate_merged_downtime(incidents) == 120

    def test_incidents_without_start_time_are_added_as_logged(self):
        incidents = [
            incident(date(2024, 3, 1), 15),
            incident(date(2024, 3, 1), 60, start_minute=480),
            incident(date(2024, 3, 1), 60, start_minute=480),
        ]
        assert calculate_merged_downtime(incidents) == 75

    def test_diagnostics(self):
        incidents = [
            incident(date(2024, 3, 1), 60, start_minute=480),
            incident(date(2024, 3, 1), 60, start_minute=510),
        ]
        buckets = [calculate_bucket_availability(bucket(date(2024, 3, 1), date(2024, 3, 1), 120))]
        diagnostics = calculate_diagnostics(buckets, incidents)

        assert diagnostics.clamped_buckets == 0
        assert diagnostics.merged_downtime_minutes == 90
        assert diagnostics.overlap_minutes == 30


class TestReliability:

    def test_periods_and_window(self):
        buckets = [
            calculate_bucket_availability(bucket(date(2024, 3, 4), date(2024, 3, 10), 90, incidents=3)),
            calculate_bucket_availability(bucket(date(2024, 3, 11), date(2024, 3, 11))),
        ]
        reliability = calculate_reliability(buckets)

        week, day = reliability.periods
        assert (week.uptime_minutes, week.mtbf_minutes, week.mttr_minutes) == (9990, 5040, 30)
        assert (day.uptime_minutes, day.mtbf_minutes, day.mttr_minutes) == (1440, 1440, 0)
        assert reliability.mtbf_minutes == 5760
        assert reliability.mttr_minutes == 30
        assert reliability.uptime_minutes == 11430

    def test_no_buckets(self):
        reliability = calculate_reliability([])
        assert (reliability.mtbf_minutes, reliability.mttr_minutes, reliability.periods) == (0, 0, [])
