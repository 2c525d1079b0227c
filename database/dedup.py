"""Insert-or-touch persistence of scraped postings keyed by their unique key."""

import logging
from datetime import datetime
from typing import Iterable, Optional

from database.job_db import get_db_connection
from processor.text_processor import make_unique_key

logger = logging.getLogger(__name__)


def upsert_job(
    job,
    source: str,
    source_url: str,
    now: Optional[datetime] = None
) -> bool:
    """Store a scraped posting (a ScrapedJob) unless it is already known.

    A new key inserts a full record with status 'new'. A known key only has
    its scraped_at refreshed; status, notes and posted_date set earlier are
    left alone. Returns True when a record was inserted. Errors propagate.
    """
    now = now or datetime.now()
    scraped_at = now.isoformat(timespec='seconds')
    unique_key = make_unique_key(job.company, job.title, job.location)

    with get_db_connection() as conn:
        existing = conn.execute(
            "SELECT id FROM job_postings WHERE unique_key = ?", (unique_key,)
        ).fetchone()

        if existing is not None:
            conn.execute(
                "UPDATE job_postings SET scraped_at = ? WHERE id = ?",
                (scraped_at, existing['id'])
            )
            return False

        conn.execute("""
            INSERT INTO job_postings (
                unique_key, title, company, location, salary, application_url,
                source, source_url, posted_date, age_text, scraped_at,
                status, is_active, created_at, updated_at
            ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, 'new', 1, ?, ?)
        """, (
            unique_key,
            job.title,
            job.company,
            job.location,
            job.salary,
            job.application_url,
            source,
            source_url,
            job.posted_date.date().isoformat(),
            job.age_text,
            scraped_at,
            scraped_at,
            scraped_at,
        ))
        return True


def save_jobs(jobs: Iterable, source: str, source_url: str) -> int:
    """Upsert a batch of postings and return how many were new.

    A failure on one posting is logged and does not stop the rest.
    """
    new_count = 0
    for job in jobs:
        try:
            if upsert_job(job, source, source_url):
                new_count += 1
        except Exception as e:
            logger.error(f"Failed to save job: {job.company} - {job.title}: {e}")
    return new_count
