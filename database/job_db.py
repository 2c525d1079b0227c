"""Database operations for job postings."""

import sqlite3
import logging
from datetime import datetime, timedelta
from pathlib import Path
from typing import Optional, List, Dict, Any, Tuple
from contextlib import contextmanager
from fasteners import InterProcessLock

from config.settings import DATABASE_PATH
from database.models import JOB_POSTINGS_SCHEMA, CREATE_INDEXES, JOB_STATUSES, EDITABLE_FIELDS
from processor.text_processor import make_unique_key

# Configure logging with datetime prefix
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(levelname)s - %(message)s',
    datefmt='%Y-%m-%d %H:%M:%S'
)
logger = logging.getLogger(__name__)


class InvalidStatusError(ValueError):
    """Raised when a posting is given a status outside JOB_STATUSES."""


@contextmanager
def get_db_connection():
    """Context manager for database connections with WAL and locking."""
    conn = None
    db_path = Path(DATABASE_PATH)
    db_path.parent.mkdir(parents=True, exist_ok=True)
    lock = InterProcessLock(str(db_path.with_suffix('.lock')))
    lock.acquire()
    try:
        conn = sqlite3.connect(str(db_path), timeout=30.0, isolation_level=None)
        conn.row_factory = sqlite3.Row
        conn.execute('PRAGMA journal_mode=WAL;')
        conn.execute('PRAGMA busy_timeout = 30000;')
        conn.execute('BEGIN IMMEDIATE;')

        yield conn
        conn.commit()
    except Exception as e:
        if conn:
            conn.rollback()
        logger.error(f"Database error: {e}")
        raise
    finally:
        if conn:
            conn.close()
        lock.release()


def _row_to_dict(row: sqlite3.Row) -> Dict[str, Any]:
    job = dict(row)
    if 'is_active' in job:
        job['is_active'] = bool(job['is_active'])
    return job


def _now() -> str:
    return datetime.now().isoformat(timespec='seconds')


def init_database():
    """Initialize the database with tables and indexes."""
    try:
        with get_db_connection() as conn:
            conn.executescript(JOB_POSTINGS_SCHEMA)
            conn.executescript(CREATE_INDEXES)
            logger.info(f"Database initialized at {DATABASE_PATH}")
    except Exception as e:
        logger.error(f"Failed to initialize database: {e}")
        raise


def get_job(job_id: int) -> Optional[Dict[str, Any]]:
    """Get a job posting by ID."""
    try:
        with get_db_connection() as conn:
            cursor = conn.cursor()
            cursor.execute("SELECT * FROM job_postings WHERE id = ?", (job_id,))
            row = cursor.fetchone()
            if row:
                return _row_to_dict(row)
            return None
    except Exception as e:
        logger.error(f"Failed to get job {job_id}: {e}")
        return None


def get_job_by_key(unique_key: str) -> Optional[Dict[str, Any]]:
    """Get a job posting by its deduplication key."""
    try:
        with get_db_connection() as conn:
            row = conn.execute(
                "SELECT * FROM job_postings WHERE unique_key = ?", (unique_key,)
            ).fetchone()
            return _row_to_dict(row) if row else None
    except Exception as e:
        logger.error(f"Failed to get job {unique_key}: {e}")
        return None


def get_jobs(
    days: Optional[int] = None,
    status: Optional[str] = None,
    company: Optional[str] = None,
    location: Optional[str] = None,
    source: Optional[str] = None,
    include_inactive: bool = False,
    limit: Optional[int] = None,
    offset: int = 0
) -> Tuple[List[Dict[str, Any]], int]:
    """Get job postings with optional filters.

    Returns the requested page and the total number of matching postings.
    """
    try:
        with get_db_connection() as conn:
            where = " WHERE 1=1"
            params: List[Any] = []

            if not include_inactive:
                where += " AND is_active = 1"

            if days is not None:
                cutoff = (datetime.now() - timedelta(days=days)).date().isoformat()
                where += " AND posted_date >= ?"
                params.append(cutoff)

            if status:
                where += " AND status = ?"
                params.append(status)

            if source:
                where += " AND source = ?"
                params.append(source)

            # LIKE is case-insensitive for ASCII in SQLite
            if company:
                where += " AND company LIKE ?"
                params.append(f"%{company}%")

            if location:
                where += " AND location LIKE ?"
                params.append(f"%{location}%")

            total = conn.execute(f"SELECT COUNT(*) FROM job_postings{where}", params).fetchone()[0]

            query = f"SELECT * FROM job_postings{where} ORDER BY posted_date DESC, scraped_at DESC"
            page_params = list(params)
            if limit is not None:
                query += " LIMIT ? OFFSET ?"
                page_params.extend([limit, offset])

            rows = conn.execute(query, page_params).fetchall()
            return [_row_to_dict(row) for row in rows], total
    except Exception as e:
        logger.error(f"Failed to get jobs: {e}")
        return [], 0


def get_recent_jobs(days: int = 3) -> List[Dict[str, Any]]:
    """Get active postings from the last N days that were not rejected."""
    try:
        cutoff = (datetime.now() - timedelta(days=days)).date().isoformat()
        with get_db_connection() as conn:
            rows = conn.execute("""
                SELECT * FROM job_postings
                WHERE posted_date >= ? AND is_active = 1 AND status != 'rejected'
                ORDER BY posted_date DESC, scraped_at DESC
            """, (cutoff,)).fetchall()
            return [_row_to_dict(row) for row in rows]
    except Exception as e:
        logger.error(f"Failed to get recent jobs: {e}")
        return []


def update_job(job_id: int, job_data: Dict[str, Any]) -> bool:
    """Update the editable fields of an existing job posting.

    Moving to 'applied' stamps applied_at once, and renaming the company,
    title or location recomputes the unique key.
    """
    fields = {key: value for key, value in job_data.items() if key in EDITABLE_FIELDS}
    if not fields:
        return False

    if 'status' in fields and fields['status'] not in JOB_STATUSES:
        raise InvalidStatusError(f"Invalid status '{fields['status']}'")

    try:
        with get_db_connection() as conn:
            existing = conn.execute(
                "SELECT * FROM job_postings WHERE id = ?", (job_id,)
            ).fetchone()
            if existing is None:
                return False

            now = _now()
            if fields.get('status') == 'applied' and not existing['applied_at']:
                fields['applied_at'] = now

            if 'is_active' in fields:
                fields['is_active'] = 1 if fields['is_active'] else 0

            identity = {
                name: fields.get(name, existing[name])
                for name in ('company', 'title', 'location')
            }
            if any(identity[name] != existing[name] for name in identity):
                fields['unique_key'] = make_unique_key(
                    identity['company'], identity['title'], identity['location']
                )

            fields['updated_at'] = now
            assignments = ', '.join(f"{key} = ?" for key in fields)
            cursor = conn.execute(
                f"UPDATE job_postings SET {assignments} WHERE id = ?",
                list(fields.values()) + [job_id]
            )
            return cursor.rowcount > 0
    except Exception as e:
        logger.error(f"Failed to update job {job_id}: {e}")
        return False


def update_status(job_id: int, status: str, notes: Optional[str] = None) -> bool:
    """Update the application status (and optionally notes) for a job."""
    job_data: Dict[str, Any] = {'status': status}
    if notes is not None:
        job_data['notes'] = notes
    return update_job(job_id, job_data)


def deactivate_job(job_id: int) -> bool:
    """Soft-delete a job posting."""
    return update_job(job_id, {'is_active': False})


def get_job_stats(top_companies: int = 10, day_window: int = 30) -> Dict[str, Any]:
    """Aggregate active postings by status, source, company and posted day."""
    stats: Dict[str, Any] = {
        'total': 0,
        'by_status': {},
        'by_source': {},
        'by_company': {},
        'by_day': {},
    }
    try:
        with get_db_connection() as conn:
            stats['total'] = conn.execute(
                "SELECT COUNT(*) FROM job_postings WHERE is_active = 1"
            ).fetchone()[0]

            for column, key in (('status', 'by_status'), ('source', 'by_source')):
                rows = conn.execute(f"""
                    SELECT {column} AS name, COUNT(*) AS count FROM job_postings
                    WHERE is_active = 1 GROUP BY {column}
                """).fetchall()
                stats[key] = {row['name']: row['count'] for row in rows}

            rows = conn.execute("""
                SELECT company AS name, COUNT(*) AS count FROM job_postings
                WHERE is_active = 1 GROUP BY company
                ORDER BY count DESC, company ASC LIMIT ?
            """, (top_companies,)).fetchall()
            stats['by_company'] = {row['name']: row['count'] for row in rows}

            cutoff = (datetime.now() - timedelta(days=day_window)).date().isoformat()
            rows = conn.execute("""
                SELECT posted_date AS name, COUNT(*) AS count FROM job_postings
                WHERE is_active = 1 AND posted_date >= ?
                GROUP BY posted_date ORDER BY posted_date ASC
            """, (cutoff,)).fetchall()
            stats['by_day'] = {row['name']: row['count'] for row in rows}
        return stats
    except Exception as e:
        logger.error(f"Failed to compute job stats: {e}")
        return stats
