from datetime import date, datetime

import pymongo
from bson import ObjectId

from constants import MONGO_DB, MONGO_TIMEOUT_MS, MONGO_URI
from db.models import Asset, RawActivityRecord
from exceptions import ValidationError
from utils.decorators import Singleton
from utils.meta import ExceptionHandlingMeta


def _day_string(value: date | datetime) -> str:
    if isinstance(value, datetime):
        value = value.date()
    return value.isoformat()


def build_downtime_activities_query(asset_id: str, start_date: date | datetime, end_date: date | datetime) -> dict:
    """
    Builds the filter of activities that carry downtime data.

    Activity dates are stored as `YYYY-MM-DD` strings, so a string range selects whole days.
    An activity qualifies when it has a positive `downtime` or both clock values set.

    Args:
        asset_id (str): Id of the asset.
        start_date (date | datetime): First day of the period.
        end_date (date | datetime): Last day of the period.

    Returns:
        dict: MongoDB filter document.
    """
    return {
        "assetId": asset_id,
        "date": {"$gte": _day_string(start_date), "$lte": _day_string(end_date)},
        "$or": [
            {"downtime": {"$exists": True, "$gt": 0}},
            {
                "$and": [
                    {"startTime": {"$exists": True, "$nin": [None, ""]}},
                    {"endTime": {"$exists": True, "$nin": [None, ""]}},
                ]
            },
        ],
    }


@Singleton
class DBHandler(metaclass=ExceptionHandlingMeta):
    """
    Singleton Adapter for database.
    """

    def __init__(self):
        self._client = pymongo.AsyncMongoClient(MONGO_URI, timeoutMS=MONGO_TIMEOUT_MS)
        self._db = self._client[MONGO_DB]

    async def get_asset(self, asset_id: str) -> Asset | None:
        """
        Gets an asset from database by id.

        Args:
            asset_id (str): Id of the asset.

        Raises:
            ValidationError: If the id is not a valid ObjectId.

        Returns:
            Asset|None: asset information or `None` if there is no such asset.
        """
        if not ObjectId.is_valid(asset_id):
            raise ValidationError(f"Invalid asset id {asset_id!r}")
        if (asset_record := await self._db.assets.find_one({"_id": ObjectId(asset_id)})) is not None:
            asset_record = Asset.from_document(asset_record)
        return asset_record

    async def get_downtime_activities(
        self, asset_id: str, start_date: date | datetime, end_date: date | datetime
    ) -> list[RawActivityRecord]:
        """
        Finds in the database all activities of the asset with downtime data for the specified period.

        Args:
            asset_id (str): Id of the asset.
            start_date (date | datetime): First day of search period.
            end_date (date | datetime): Last day of search period.

        Returns:
            list[RawActivityRecord]: Activities sorted by date and start time.
        """
        cursor = self._db.dailylogactivities.find(
            build_downtime_activities_query(asset_id, start_date, end_date)
        ).sort([("date", pymongo.ASCENDING), ("startTime", pymongo.ASCENDING)])
        return [RawActivityRecord.from_document(record) for record in await cursor.to_list()]
