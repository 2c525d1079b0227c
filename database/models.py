"""Database schema definitions for job postings."""

JOB_STATUSES = ['new', 'interested', 'applied', 'interview', 'rejected', 'offer']

# SQL schema for job_postings table
JOB_POSTINGS_SCHEMA = """
CREATE TABLE IF NOT EXISTS job_postings (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    unique_key TEXT NOT NULL UNIQUE,
    title TEXT NOT NULL,
    company TEXT NOT NULL,
    location TEXT NOT NULL,
    salary TEXT,
    application_url TEXT NOT NULL,
    source TEXT NOT NULL,
    source_url TEXT NOT NULL,
    posted_date DATE NOT NULL,
    age_text TEXT NOT NULL,
    scraped_at TIMESTAMP NOT NULL,
    status TEXT DEFAULT 'new',
    applied_at TIMESTAMP,
    notes TEXT,
    is_active INTEGER DEFAULT 1,
    created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
    updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
);
"""

# Index for faster queries
CREATE_INDEXES = """
CREATE UNIQUE INDEX IF NOT EXISTS idx_unique_key ON job_postings(unique_key);
CREATE INDEX IF NOT EXISTS idx_source_posted ON job_postings(source, posted_date DESC);
CREATE INDEX IF NOT EXISTS idx_status ON job_postings(status);
CREATE INDEX IF NOT EXISTS idx_scraped_at ON job_postings(scraped_at DESC);
"""

# Columns the web layer may change on an existing posting
EDITABLE_FIELDS = (
    'title', 'company', 'location', 'salary', 'application_url',
    'status', 'notes', 'is_active',
)
