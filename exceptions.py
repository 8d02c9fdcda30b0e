class AnalyticsException(Exception):
    """Base class for all errors raised by the analytics system."""


class ValidationError(AnalyticsException):
    """Input dates, clock values or parameters are malformed."""


class AssetNotFoundError(AnalyticsException):
    """The requested asset does not exist in the storage."""

    def __init__(self, asset_id: str):
        super().__init__(f"Asset {asset_id} not found")
        self.asset_id = asset_id


class StorageError(AnalyticsException):
    """The storage failed to return the requested data."""
