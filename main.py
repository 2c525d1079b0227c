"""Main application for the job posting scraper."""

import argparse
import logging
import sys
from typing import Optional

# Configure logging with datetime prefix
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(levelname)s - %(message)s',
    datefmt='%Y-%m-%d %H:%M:%S'
)
logger = logging.getLogger(__name__)

# Import modules
from database import init_database, get_job_stats, get_recent_jobs
from scraper import scrape_all, run_scheduler, get_source, SOURCE_NAMES
from config.settings import VERBOSE, LOG_LEVEL, RECENCY_DAYS


def setup_logging(verbose: bool = False):
    """Configure logging level."""
    level = logging.DEBUG if verbose else getattr(logging, LOG_LEVEL.upper(), logging.INFO)
    logging.getLogger().setLevel(level)
    if verbose:
        logger.info("Verbose logging enabled")


def update_jobs(source_name: Optional[str] = None) -> dict:
    """Run one scrape cycle, optionally limited to a single source, and log its outcome."""
    sources = [get_source(source_name)] if source_name else None
    logger.info(f"Starting job scraping ({source_name or 'all sources'})...")
    results = scrape_all(sources)
    logger.info(f"Scraped {results['total_jobs']} jobs, {results['new_jobs']} new")
    for error in results['errors']:
        logger.warning(f"  {error}")
    if results['total_jobs'] == 0:
        # An unparseable source format shows up only as a drop in counts
        logger.warning("No recent jobs found; check whether the source formats changed")
    return results


def print_summary():
    """Print summary statistics."""
    try:
        stats = get_job_stats()
        if stats['total'] == 0:
            logger.info("No jobs in database")
            return

        logger.info("=" * 50)
        logger.info("Database Summary")
        logger.info("=" * 50)
        logger.info(f"Total active jobs: {stats['total']}")
        for status, count in sorted(stats['by_status'].items()):
            logger.info(f"  {status}: {count}")
        logger.info("By source:")
        for source, count in sorted(stats['by_source'].items()):
            logger.info(f"  {source}: {count}")

        recent = get_recent_jobs(RECENCY_DAYS)
        if recent:
            logger.info(f"\nRecent postings (last {RECENCY_DAYS} days):")
            for i, job in enumerate(recent[:10], 1):
                logger.info(f"  {i}. {job['title']} at {job['company']} "
                            f"({job['location']}, posted {job['age_text']})")
        logger.info("=" * 50)

    except Exception as e:
        logger.error(f"Error printing summary: {e}")


def main():
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="Job posting scraper - collect recent postings from markdown job lists"
    )
    parser.add_argument(
        '--update',
        action='store_true',
        help='Run one scrape cycle now'
    )
    parser.add_argument(
        '--source',
        choices=SOURCE_NAMES,
        default=None,
        help='Limit --update to one source (default: all sources)'
    )
    parser.add_argument(
        '--schedule',
        action='store_true',
        help='Run the daily scraper in the foreground'
    )
    parser.add_argument(
        '--summary',
        action='store_true',
        help='Print database summary'
    )
    parser.add_argument(
        '--verbose',
        action='store_true',
        help='Enable detailed logging'
    )
    parser.add_argument(
        '--web',
        action='store_true',
        help='Start web server'
    )
    parser.add_argument(
        '--no-scheduler',
        action='store_true',
        help='Do not start the daily scheduler alongside the web server'
    )
    parser.add_argument(
        '--port',
        type=int,
        default=5000,
        help='Port for web server (default: 5000)'
    )

    args = parser.parse_args()

    setup_logging(args.verbose or VERBOSE)

    try:
        init_database()
    except Exception as e:
        logger.error(f"Failed to initialize database: {e}")
        sys.exit(1)

    if args.update:
        update_jobs(args.source)

    if args.summary:
        print_summary()

    if args.web:
        from webapp.app import run_web_server
        run_web_server(
            host='127.0.0.1',
            port=args.port,
            debug=args.verbose,
            start_scheduler=not args.no_scheduler
        )
    elif args.schedule:
        run_scheduler()
    elif not (args.update or args.summary):
        parser.print_help()


if __name__ == "__main__":
    main()
