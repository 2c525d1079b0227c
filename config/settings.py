"""Example configuration file. Copy this to settings.py and adjust the values."""

import logging
import os
from pathlib import Path

from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

# Base directory
BASE_DIR = Path(__file__).parent.parent


def _get_int_env(key: str, default: int) -> int:
    """Safely get integer from environment variable."""
    try:
        value = os.getenv(key)
        if value is None:
            return default
        return int(value)
    except (ValueError, TypeError):
        logging.warning(f"Invalid value for {key}, using default: {default}")
        return default


def _get_float_env(key: str, default: float) -> float:
    """Safely get float from environment variable."""
    try:
        value = os.getenv(key)
        if value is None:
            return default
        return float(value)
    except (ValueError, TypeError):
        logging.warning(f"Invalid value for {key}, using default: {default}")
        return default


# Database settings
DATABASE_PATH = os.getenv("DATABASE_PATH", str(BASE_DIR / "data" / "job_postings.db"))

# Scraping settings
REQUEST_TIMEOUT = _get_float_env("REQUEST_TIMEOUT", 10.0)
USER_AGENT = os.getenv(
    "USER_AGENT",
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36"
)
# Postings older than this many days are not ingested
RECENCY_DAYS = _get_int_env("RECENCY_DAYS", 3)

# Scheduler settings (local time in SCRAPE_TIMEZONE, not the host timezone)
SCRAPE_TIME = os.getenv("SCRAPE_TIME", "08:00")
SCRAPE_TIMEZONE = os.getenv("SCRAPE_TIMEZONE", "America/New_York")
SCHEDULER_POLL_SECONDS = _get_float_env("SCHEDULER_POLL_SECONDS", 30.0)

# Web settings
DEFAULT_PAGE_SIZE = _get_int_env("DEFAULT_PAGE_SIZE", 50)
MAX_PAGE_SIZE = _get_int_env("MAX_PAGE_SIZE", 200)

# Logging settings
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
VERBOSE = os.getenv("VERBOSE", "false").lower() == "true"
