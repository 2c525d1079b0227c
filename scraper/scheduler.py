"""Scheduler for the daily scrape cycle."""

import logging
import threading
import time
from datetime import datetime
from typing import Any, Callable, Dict, Optional

import schedule

from config.settings import SCRAPE_TIME, SCRAPE_TIMEZONE, SCHEDULER_POLL_SECONDS
from scraper.orchestrator import scrape_all

# Configure logging with datetime prefix
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(levelname)s - %(message)s',
    datefmt='%Y-%m-%d %H:%M:%S'
)
logger = logging.getLogger(__name__)


class ScrapeInProgressError(RuntimeError):
    """Raised when a manual scrape is requested while a cycle is running."""


class ScrapeScheduler:
    """Fires one scrape cycle per day at a fixed time in a fixed timezone.

    Scheduled and manual runs share a cycle lock, so two cycles never
    overlap: a manual trigger during a run raises ScrapeInProgressError and
    a scheduled tick during a run is skipped.
    """

    def __init__(
        self,
        run_func: Optional[Callable[[], Dict[str, Any]]] = None,
        at_time: Optional[str] = None,
        timezone: Optional[str] = None,
        poll_seconds: Optional[float] = None
    ):
        self.run_func = run_func
        self.at_time = at_time or SCRAPE_TIME
        self.timezone = timezone or SCRAPE_TIMEZONE
        self.poll_seconds = poll_seconds if poll_seconds is not None else SCHEDULER_POLL_SECONDS

        self._scheduler = schedule.Scheduler()
        self._job: Optional[schedule.Job] = None
        self._thread: Optional[threading.Thread] = None
        self._stop_event: Optional[threading.Event] = None
        self._state_lock = threading.Lock()
        self._cycle_lock = threading.Lock()

    def start(self) -> bool:
        """Start the daily trigger. Returns False if it was already running."""
        with self._state_lock:
            if self._job is not None:
                logger.info("Scheduler already running")
                return False

            self._job = self._scheduler.every().day.at(self.at_time, self.timezone).do(self._run_scheduled)
            self._stop_event = threading.Event()
            self._thread = threading.Thread(
                target=self._loop,
                args=(self._stop_event,),
                name='scrape-scheduler',
                daemon=True
            )
            self._thread.start()

        logger.info(
            f"Job scraping scheduler started - runs daily at {self.at_time} {self.timezone}, "
            f"next run {self.get_next_run()}"
        )
        return True

    def stop(self) -> bool:
        """Stop the daily trigger. Returns False if it was not running."""
        with self._state_lock:
            if self._job is None:
                return False
            self._scheduler.cancel_job(self._job)
            self._job = None
            self._stop_event.set()
            thread = self._thread
            self._thread = None
            self._stop_event = None

        if thread is not None and thread is not threading.current_thread():
            thread.join(timeout=5)
        logger.info("Job scraping scheduler stopped")
        return True

    def is_running(self) -> bool:
        return self._job is not None

    def is_scraping(self) -> bool:
        return self._cycle_lock.locked()

    def get_next_run(self) -> Optional[datetime]:
        job = self._job
        return job.next_run if job is not None else None

    def _loop(self, stop_event: threading.Event):
        while not stop_event.wait(self.poll_seconds):
            self._scheduler.run_pending()

    def _run_cycle(self) -> Dict[str, Any]:
        if not self._cycle_lock.acquire(blocking=False):
            raise ScrapeInProgressError("A scrape cycle is already in progress")
        try:
            run_func = self.run_func or scrape_all
            return run_func()
        finally:
            self._cycle_lock.release()

    def _run_scheduled(self):
        logger.info("Starting scheduled job scraping...")
        try:
            results = self._run_cycle()
        except ScrapeInProgressError:
            logger.warning("Skipping scheduled scraping: a scrape cycle is already running")
            return
        except Exception as e:
            logger.error(f"Scheduled scraping failed: {e}", exc_info=True)
            return

        if results['new_jobs'] > 0:
            logger.info(f"Found {results['new_jobs']} new jobs out of {results['total_jobs']} total")
        else:
            logger.info("No new jobs found in this scraping cycle")
        if results['errors']:
            logger.warning(f"Scraping errors: {results['errors']}")

    def trigger_manual_scrape(self) -> Dict[str, Any]:
        """Run a scrape cycle now, outside the schedule."""
        logger.info("Manual scraping triggered")
        try:
            results = self._run_cycle()
        except ScrapeInProgressError:
            logger.warning("Manual scraping rejected: a scrape cycle is already running")
            raise
        except Exception as e:
            logger.error(f"Manual scraping failed: {e}")
            raise
        logger.info(f"Manual scraping completed: {results}")
        return results

    def status(self) -> Dict[str, Any]:
        next_run = self.get_next_run()
        return {
            'running': self.is_running(),
            'scraping': self.is_scraping(),
            'schedule': f"{self.at_time} {self.timezone}",
            'next_run': next_run.isoformat() if next_run else None,
        }


scheduler = ScrapeScheduler()


def run_scheduler(run_now: bool = False):
    """Run the daily scheduler in a blocking loop until Ctrl+C."""
    scheduler.start()
    logger.info("Scheduler started. Press Ctrl+C to stop.")
    try:
        if run_now:
            scheduler.trigger_manual_scrape()
        while scheduler.is_running():
            time.sleep(60)
    except KeyboardInterrupt:
        logger.info("Scheduler stopped by user")
    finally:
        scheduler.stop()
