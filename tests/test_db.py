import asyncio
from datetime import date, datetime

import pytest

from db.db_handler import DBHandler, build_downtime_activities_query
from db.models import Asset, RawActivityRecord
from exceptions import ValidationError
from utils.enums import DowntimeType


class TestRawActivityRecord:

    def test_from_document(self):
        record = RawActivityRecord.from_document({
            "_id": 42,
            "assetId": "a1",
            "date": "2024-03-01",
            "startTime": " 08:00 ",
            "endTime": "",
            "downtime": "45",
            "downtimeType": "planned",
            "natureOfProblem": "belt slipped",
        })

        assert record._id == "42"
        assert record.date == date(2024, 3, 1)
        assert record.start_time == "08:00"
        assert record.end_time is None
        assert record.downtime == 45
        assert record.downtime_type == DowntimeType.PLANNED

    def test_optional_fields(self):
        record = RawActivityRecord.from_document({"_id": "x", "assetId": "a1", "date": datetime(2024, 3, 1, 9)})

        assert record.date == date(2024, 3, 1)
        assert record.downtime is None
        assert record.downtime_type is None
        assert record.start_time is None

    def test_fractional_downtime(self):
        assert RawActivityRecord("x", "a1", "2024-03-01", downtime=12.5).downtime == 12.5

    def test_unknown_downtime_type_is_unplanned(self):
        record = RawActivityRecord("x", "a1", "2024-03-01", downtime_type="breakdown")
        assert record.downtime_type == DowntimeType.UNPLANNED

    @pytest.mark.parametrize("downtime", ["ten", "n/a", True, [30], "inf", float("inf"), float("-inf"), float("nan")])
    def test_unusable_downtime_is_absent(self, downtime):
        record = RawActivityRecord("x", "a1", "2024-03-01", start_time="08:00", end_time="09:00", downtime=downtime)

        assert record.downtime is None
        assert record.start_time == "08:00"

    @pytest.mark.parametrize("day", [None, "", "2024-02-30", "01.03.2024", "not-a-date"])
    def test_invalid_date_is_absent(self, day):
        assert RawActivityRecord("x", "a1", day, downtime=30).date is None


class TestAsset:

    def test_name_fallback(self):
        assert Asset.from_document({"_id": "a1", "name": "Chiller"}).asset_name == "Chiller"
        assert Asset.from_document({"_id": "a1", "assetName": "Boiler", "name": "B"}).asset_name == "Boiler"

    def test_department(self):
        asset = Asset.from_document({"_id": 7, "assetName": "Boiler", "department": "Utilities"})
        assert (asset._id, asset.department) == ("7", "Utilities")


class TestDowntimeActivitiesQuery:

    def test_date_range_uses_day_strings(self):
        query = build_downtime_activities_query("a1", datetime(2024, 3, 1), datetime(2024, 3, 31, 23, 59, 59))

        assert query["assetId"] == "a1"
        assert query["date"] == {"$gte": "2024-03-01", "$lte": "2024-03-31"}

    def test_requires_downtime_or_clock_times(self):
        query = build_downtime_activities_query("a1", date(2024, 3, 1), date(2024, 3, 2))

        downtime_filter, clock_filter = query["$or"]
        assert downtime_filter == {"downtime": {"$exists": True, "$gt": 0}}
        assert [list(condition) for condition in clock_filter["$and"]] == [["startTime"], ["endTime"]]


class TestDBHandler:

    def test_invalid_asset_id_is_rejected_before_querying(self):
        handler = object.__new__(DBHandler.__wrapped__)

        with pytest.raises(ValidationError):
            asyncio.run(handler.get_asset("not-an-object-id"))
