from datetime import date, datetime

from analytics.assembler import compute_asset_analytics, parse_granularity
from analytics.date_range import resolve_date_range
from analytics.models import AnalysisReport
from db.db_handler import DBHandler
from exceptions import AssetNotFoundError, StorageError
from utils.enums import Preset
from utils.log import get_logger


class AssetAnalyticsService:
    """
    Builds asset availability reports from the activities stored in the database.

    Maps request parameters to the analytics engine: resolves the window, loads the asset
    and its downtime activities with a single query and computes the report.
    """
    _logger = get_logger("AssetAnalyticsService")

    def __init__(self, db: "DBHandler | None" = None):
        self.db = db or DBHandler()

    async def generate_report(
        self,
        asset_id: str,
        preset: Preset | str | None = None,
        start_date: date | datetime | str | None = None,
        end_date: date | datetime | str | None = None,
        period: str | None = None,
        now: datetime | None = None,
    ) -> AnalysisReport:
        """
        Generates the availability report of an asset.

        Args:
            asset_id (str): Id of the asset.
            preset (Preset | str, optional): Named window, e.g. "last_7_days".
            start_date (date | datetime | str, optional): First day of a custom window.
            end_date (date | datetime | str, optional): Last day of a custom window.
            period (str, optional): Granularity of the series. Defaults to days.
            now (datetime, optional): Reference moment of presets. Defaults to datetime.now().

        Raises:
            ValidationError: If the window or the period is malformed.
            AssetNotFoundError: If the asset does not exist.
            StorageError: If the activities could not be loaded.

        Returns:
            AnalysisReport: Availability report.
        """
        date_range = resolve_date_range(preset, start_date, end_date, now=now)
        granularity = parse_granularity(period)

        asset = await self.db.get_asset(asset_id)
        if asset is None:
            raise AssetNotFoundError(asset_id)

        activities = await self.db.get_downtime_activities(asset_id, date_range.first_day, date_range.last_day)
        if activities is None:
            self._logger.error("Error loading activities of asset %s", asset_id)
            raise StorageError(f"Activities of asset {asset_id} could not be loaded")
        self._logger.info(
            "Found %d activities of asset %s from %s to %s",
            len(activities), asset_id, date_range.first_day, date_range.last_day,
        )

        return compute_asset_analytics(
            asset_id,
            asset.asset_name,
            asset.department,
            activities,
            date_range.start_date,
            date_range.end_date,
            granularity,
        )
