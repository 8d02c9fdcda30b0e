import os
from dotenv import load_dotenv
from pathlib import Path

load_dotenv(override=True)

MINUTES_PER_DAY = 24 * 60

DEFAULT_PRESET = os.getenv("DEFAULT_PRESET", "last_30_days")
DEFAULT_GRANULARITY = os.getenv("DEFAULT_GRANULARITY", "day")

LOGS_DIR = Path(os.getenv("LOGS_DIR", "logs"))
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

MONGO_URI = os.getenv("MONGO_URI", "mongodb://localhost:27017")
MONGO_DB = os.getenv("MONGO_DB", "facility")
MONGO_TIMEOUT_MS = int(os.getenv("MONGO_TIMEOUT_MS", "2000"))
