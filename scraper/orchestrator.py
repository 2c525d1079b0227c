"""Run every configured source through scraping and deduplication."""

import logging
from typing import Any, Dict, List, Optional

from database.dedup import save_jobs
from scraper.github_scraper import scrape_source
from scraper.models import SourceDefinition
from scraper.sources import SOURCES

logger = logging.getLogger(__name__)


def scrape_all(sources: Optional[List[SourceDefinition]] = None) -> Dict[str, Any]:
    """Scrape all sources and store their postings.

    Sources run one after another. A source that fails to download or
    parse is reported in ``errors`` and contributes nothing; the remaining
    sources still run.
    """
    if sources is None:
        sources = SOURCES

    results: Dict[str, Any] = {
        'new_jobs': 0,
        'total_jobs': 0,
        'errors': [],
    }

    for source in sources:
        try:
            jobs = scrape_source(source)
            new_count = save_jobs(jobs, source.name, source.url)
        except Exception as e:
            error_msg = f"{source.name} scraping failed: {e}"
            logger.error(error_msg)
            results['errors'].append(error_msg)
            continue

        results['new_jobs'] += new_count
        results['total_jobs'] += len(jobs)
        logger.info(f"{source.name}: found {len(jobs)} jobs, {new_count} new")

    logger.info(
        f"Scrape cycle complete: {results['new_jobs']} new of {results['total_jobs']} jobs, "
        f"{len(results['errors'])} source errors"
    )
    return results
