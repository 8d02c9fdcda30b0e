import os
import tempfile

os.environ["LOGS_DIR"] = os.path.join(tempfile.gettempdir(), "asset-availability-test-logs")

import pytest

from db.models import RawActivityRecord


@pytest.fixture
def make_record():
    """Factory of activity records of asset `a1`."""
    counter = iter(range(1, 10_000))

    def factory(day: str, **kwargs) -> RawActivityRecord:
        kwargs.setdefault("_id", f"r{next(counter)}")
        kwargs.setdefault("asset_id", "a1")
        return RawActivityRecord(date=day, **kwargs)

    return factory
