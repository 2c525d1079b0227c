"""Conversion of source "age" labels ("2d", "Jul 01") into day offsets and dates."""

import re
import logging
from datetime import datetime, timedelta
from typing import Optional

from config.settings import RECENCY_DAYS

logger = logging.getLogger(__name__)


MONTHS = {
    'jan': 1, 'feb': 2, 'mar': 3, 'apr': 4, 'may': 5, 'jun': 6,
    'jul': 7, 'aug': 8, 'sep': 9, 'oct': 10, 'nov': 11, 'dec': 12,
}

# Full names and the "Sept" spelling are accepted too; any other word is not a month
MONTH_NAMES = dict(MONTHS, sept=9)
for _number, _name in enumerate(
        ['january', 'february', 'march', 'april', 'may', 'june', 'july',
         'august', 'september', 'october', 'november', 'december'], start=1):
    MONTH_NAMES[_name] = _number

_DAYS_PATTERN = re.compile(r'(\d+)\s*d', re.IGNORECASE)
_MONTH_DAY_PATTERN = re.compile(r'([a-z]+)\.?\s*(\d{1,2})', re.IGNORECASE)


def _month_day_to_days(month_text: str, day: int, now: datetime) -> Optional[int]:
    month = MONTH_NAMES.get(month_text.lower())
    if month is None:
        logger.debug(f"Unrecognized month in age text: {month_text!r}")
        return None

    # Sources lag around new year, so a date after "now" belongs to last year
    for year in (now.year, now.year - 1):
        try:
            posted = datetime(year, month, day)
        except ValueError:
            continue
        if posted <= now:
            return max((now - posted).days, 0)

    return None


def parse_age_to_days(age_text: str, now: Optional[datetime] = None) -> Optional[int]:
    """Convert an age label into a whole number of days ago.

    Recognizes ``<N>d`` and ``<Mon> <Day>``. Returns None for anything else;
    callers must treat that as an unknown age, not as zero.
    """
    if not age_text:
        return None

    text = age_text.strip()
    now = now or datetime.now()

    match = _DAYS_PATTERN.fullmatch(text)
    if match:
        return int(match.group(1))

    match = _MONTH_DAY_PATTERN.fullmatch(text)
    if match:
        return _month_day_to_days(match.group(1), int(match.group(2)), now)

    return None


def age_to_date(age_text: str, now: Optional[datetime] = None) -> Optional[datetime]:
    """Estimate the posting date, or None when the age text is unparseable."""
    now = now or datetime.now()
    days = parse_age_to_days(age_text, now=now)
    if days is None:
        return None
    return now - timedelta(days=days)


def is_recent(age_text: str, max_days: Optional[int] = None, now: Optional[datetime] = None) -> bool:
    """Check whether a posting falls inside the recency window."""
    if max_days is None:
        max_days = RECENCY_DAYS
    days = parse_age_to_days(age_text, now=now)
    return days is not None and days <= max_days
