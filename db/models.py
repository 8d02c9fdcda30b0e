import math
from dataclasses import dataclass
from datetime import date
from numbers import Real

from exceptions import ValidationError
from utils.enums import DowntimeType
from utils.functions import parse_calendar_date
from utils.log import get_logger

_logger = get_logger("ActivityRecords")


def _clean_clock(value) -> str | None:
    if not isinstance(value, str):
        return None
    return value.strip() or None


@dataclass
class Asset:
    """Object of asset record in db."""
    _id: str
    asset_name: str
    department: str | None = None

    def __post_init__(self):
        self._id = str(self._id)

    @classmethod
    def from_document(cls, document: dict) -> "Asset":
        """
        Builds an asset from a raw `assets` document.

        Args:
            document (dict): Document from the `assets` collection.

        Returns:
            Asset: Asset object.
        """
        return cls(
            _id=document["_id"],
            asset_name=document.get("assetName") or document.get("name") or "",
            department=document.get("department"),
        )


@dataclass
class RawActivityRecord:
    """
    Object of an operator-logged downtime activity in db.

    Values are parsed once on creation, so the analytics code can rely on their types:
    `date` is a calendar day, `downtime` is a finite number, empty clock values are `None`
    and `downtime_type` is a DowntimeType or `None` when the operator did not set it.
    Operator input is not trusted: a `date` that is not a calendar day and a `downtime`
    that is not a finite number are replaced with `None` and logged, so a single broken
    record is dropped from the analysis instead of failing it.
    """
    _id: str
    asset_id: str
    date: date | None
    start_time: str | None = None
    end_time: str | None = None
    downtime: float | None = None
    downtime_type: DowntimeType | None = None

    def __post_init__(self):
        self._id = str(self._id)
        self.asset_id = str(self.asset_id)
        self.date = self._parse_date(self.date)
        self.start_time = _clean_clock(self.start_time)
        self.end_time = _clean_clock(self.end_time)
        self.downtime = self._parse_downtime(self.downtime)
        if self.downtime_type is not None and not isinstance(self.downtime_type, DowntimeType):
            self.downtime_type = DowntimeType.from_value(self.downtime_type)

    def _parse_date(self, value) -> date | None:
        try:
            return parse_calendar_date(value)
        except ValidationError:
            _logger.warning("Record %s has invalid date %r", self._id, value)
            return None

    def _parse_downtime(self, value) -> float | None:
        if value is None or value == "":
            return None
        if isinstance(value, str):
            try:
                value = float(value)
            except ValueError:
                pass
        if isinstance(value, bool) or not isinstance(value, Real) or not math.isfinite(value):
            _logger.warning("Record %s has invalid downtime %r, clock values are used instead", self._id, value)
            return None
        if float(value).is_integer():
            return int(value)
        return float(value)

    @classmethod
    def from_document(cls, document: dict) -> "RawActivityRecord":
        """
        Builds a record from a raw `dailylogactivities` document.

        Args:
            document (dict): Document with camelCase fields as stored by the application.

        Returns:
            RawActivityRecord: Parsed record.
        """
        return cls(
            _id=document.get("_id", ""),
            asset_id=document.get("assetId", ""),
            date=document.get("date"),
            start_time=document.get("startTime"),
            end_time=document.get("endTime"),
            downtime=document.get("downtime"),
            downtime_type=document.get("downtimeType"),
        )
