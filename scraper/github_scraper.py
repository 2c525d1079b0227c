"""Scraper for the community-maintained job lists hosted on GitHub."""

import logging
import requests
from datetime import datetime
from typing import List, Optional

from config.settings import REQUEST_TIMEOUT, USER_AGENT, RECENCY_DAYS
from processor.age_parser import is_recent
from scraper.models import ScrapedJob, SourceDefinition
from scraper.row_parser import parse_row
from scraper.sources import MarkerTableLocator

# Configure logging with datetime prefix
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(levelname)s - %(message)s',
    datefmt='%Y-%m-%d %H:%M:%S'
)
logger = logging.getLogger(__name__)


def fetch_source(source: SourceDefinition) -> str:
    """Download the raw markdown document of a source.

    Network errors, timeouts and non-2xx responses propagate to the caller.
    """
    logger.info(f"Downloading {source.name} from {source.raw_url}")
    response = requests.get(
        source.raw_url,
        timeout=REQUEST_TIMEOUT,
        headers={'User-Agent': USER_AGENT}
    )
    response.raise_for_status()
    response.encoding = 'utf-8'
    logger.info(f"Downloaded {len(response.content)} bytes from {source.name}")
    return response.text


def parse_document(
    text: str,
    source: SourceDefinition,
    now: Optional[datetime] = None,
    max_age_days: Optional[int] = None
) -> List[ScrapedJob]:
    """Extract the recent postings from a source document, in document order."""
    if max_age_days is None:
        max_age_days = RECENCY_DAYS
    now = now or datetime.now()

    locator = MarkerTableLocator(source)
    jobs = []
    skipped = 0

    for line in locator.iter_rows(text.splitlines()):
        try:
            job = parse_row(line, source.columns, min_cells=source.min_cells, now=now)
        except Exception as e:
            logger.warning(f"Failed to parse {source.name} row {line!r}: {e}")
            continue

        if job is None:
            skipped += 1
            continue

        if is_recent(job.age_text, max_days=max_age_days, now=now):
            jobs.append(job)

    logger.info(
        f"Parsed {len(jobs)} recent jobs from {source.name} "
        f"({skipped} rows skipped)"
    )
    return jobs


def scrape_source(source: SourceDefinition, now: Optional[datetime] = None) -> List[ScrapedJob]:
    """Fetch a source and return its recent postings."""
    content = fetch_source(source)
    return parse_document(content, source, now=now)
