"""Scraper module for downloading and parsing markdown job lists."""

from .models import ScrapedJob, SourceDefinition, ColumnMap
from .sources import SOURCES, SOURCE_NAMES, get_source, MarkerTableLocator
from .row_parser import parse_row, split_row
from .github_scraper import fetch_source, parse_document, scrape_source
from .orchestrator import scrape_all
from .scheduler import ScrapeScheduler, ScrapeInProgressError, scheduler, run_scheduler

__all__ = [
    "ScrapedJob",
    "SourceDefinition",
    "ColumnMap",
    "SOURCES",
    "SOURCE_NAMES",
    "get_source",
    "MarkerTableLocator",
    "parse_row",
    "split_row",
    "fetch_source",
    "parse_document",
    "scrape_source",
    "scrape_all",
    "ScrapeScheduler",
    "ScrapeInProgressError",
    "scheduler",
    "run_scheduler",
]
