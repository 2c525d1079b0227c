import os
import tempfile
import unittest
from datetime import datetime
from unittest import mock

import requests

from database import job_db
from scraper import orchestrator
from scraper.models import ScrapedJob, SourceDefinition
from scraper.sources import SUMMER_2026


def make_source(name):
    return SourceDefinition(
        name=name,
        url=f"https://{name}.test/README.md",
        raw_url=f"https://raw.{name}.test/README.md",
        header_markers=("| Company |",),
    )


class ScrapeAllTests(unittest.TestCase):

    def setUp(self):
        now = datetime.now()
        self.jobs = [
            ScrapedJob(title="SWE", company="Acme", location="NYC", application_url="http://x.test/1",
                       age_text="1d", posted_date=now),
            ScrapedJob(title="SWE", company="Beta", location="NYC", application_url="http://x.test/2",
                       age_text="2d", posted_date=now),
        ]

    @mock.patch("scraper.orchestrator.save_jobs")
    @mock.patch("scraper.orchestrator.scrape_source")
    def test_failing_source_does_not_block_others(self, mock_scrape, mock_save):
        def scrape(source):
            if source.name == "alpha":
                raise requests.exceptions.ConnectionError("connection refused")
            return self.jobs

        mock_scrape.side_effect = scrape
        mock_save.return_value = 2

        results = orchestrator.scrape_all([make_source("alpha"), make_source("beta")])

        self.assertEqual(results, {
            "new_jobs": 2,
            "total_jobs": 2,
            "errors": ["alpha scraping failed: connection refused"],
        })
        mock_save.assert_called_once_with(self.jobs, "beta", "https://beta.test/README.md")

    @mock.patch("scraper.orchestrator.save_jobs")
    @mock.patch("scraper.orchestrator.scrape_source")
    def test_counts_accumulate_across_sources(self, mock_scrape, mock_save):
        mock_scrape.side_effect = [self.jobs, self.jobs[:1]]
        mock_save.side_effect = [2, 0]

        results = orchestrator.scrape_all([make_source("alpha"), make_source("beta")])

        self.assertEqual(results, {"new_jobs": 2, "total_jobs": 3, "errors": []})


class ScrapeAllEndToEndTests(unittest.TestCase):

    DOC = (
        "# Internships\n"
        "| Company | Role | Location | Application/Link | Date Posted |\n"
        "| --- | --- | --- | --- | --- |\n"
        "| Acme | SWE Intern | NYC, NY | [Apply](http://x.test/1) | 2d |\n"
        "| Old | SWE Intern | NYC, NY | [Apply](http://x.test/2) | 30d |\n"
    )

    def setUp(self):
        self.tmpdir = tempfile.TemporaryDirectory()
        self.db_patch = mock.patch(
            "database.job_db.DATABASE_PATH", os.path.join(self.tmpdir.name, "job_postings.db")
        )
        self.db_patch.start()
        job_db.init_database()

    def tearDown(self):
        self.db_patch.stop()
        self.tmpdir.cleanup()

    @mock.patch("scraper.github_scraper.requests.get")
    def test_repeated_cycles_do_not_duplicate(self, mock_get):
        mock_get.return_value = mock.Mock(text=self.DOC, content=self.DOC.encode("utf-8"))

        first = orchestrator.scrape_all([SUMMER_2026])
        second = orchestrator.scrape_all([SUMMER_2026])

        self.assertEqual(first, {"new_jobs": 1, "total_jobs": 1, "errors": []})
        self.assertEqual(second, {"new_jobs": 0, "total_jobs": 1, "errors": []})

        job = job_db.get_job_by_key("acme-swe-intern-nyc-ny")
        self.assertEqual(job["status"], "new")
        self.assertEqual(job["application_url"], "http://x.test/1")
        self.assertEqual(job["source"], SUMMER_2026.name)
        self.assertEqual(job["source_url"], SUMMER_2026.url)


if __name__ == "__main__":
    unittest.main()
