"""Web interface for browsing job postings."""
