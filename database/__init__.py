"""Database module for job posting storage and management."""

from .job_db import (
    InvalidStatusError,
    init_database,
    get_job,
    get_job_by_key,
    get_jobs,
    get_recent_jobs,
    update_job,
    update_status,
    deactivate_job,
    get_job_stats,
)
from .dedup import upsert_job, save_jobs

__all__ = [
    "InvalidStatusError",
    "init_database",
    "get_job",
    "get_job_by_key",
    "get_jobs",
    "get_recent_jobs",
    "update_job",
    "update_status",
    "deactivate_job",
    "get_job_stats",
    "upsert_job",
    "save_jobs",
]
