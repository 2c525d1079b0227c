import unittest
from unittest import mock

from database.job_db import InvalidStatusError
from scraper.scheduler import ScrapeInProgressError
from webapp.app import app


class JobsEndpointTests(unittest.TestCase):

    def setUp(self):
        self.client = app.test_client()
        app.config["TESTING"] = True

    @mock.patch("webapp.app.get_jobs")
    def test_list_passes_filters_and_pagination(self, mock_get_jobs):
        mock_get_jobs.return_value = ([{"id": 11, "company": "Acme"}], 12)

        response = self.client.get(
            "/api/jobs?days=3&status=applied&company=acme&location=NYC&source=summer2026-internships&page=2&limit=10"
        )
        self.assertEqual(response.status_code, 200)

        payload = response.get_json()
        self.assertTrue(payload["success"])
        self.assertEqual(payload["total"], 12)
        self.assertEqual(payload["count"], 1)
        self.assertEqual(payload["page"], 2)
        mock_get_jobs.assert_called_once_with(
            days=3,
            status="applied",
            company="acme",
            location="NYC",
            source="summer2026-internships",
            include_inactive=False,
            limit=10,
            offset=10,
        )

    @mock.patch("webapp.app.get_jobs")
    def test_list_defaults(self, mock_get_jobs):
        mock_get_jobs.return_value = ([], 0)

        response = self.client.get("/api/jobs?days=abc")
        self.assertEqual(response.status_code, 200)

        kwargs = mock_get_jobs.call_args.kwargs
        self.assertIsNone(kwargs["days"])
        self.assertEqual(kwargs["offset"], 0)
        self.assertIsNone(kwargs["status"])

    @mock.patch("webapp.app.get_jobs")
    def test_unknown_source_filter_is_rejected(self, mock_get_jobs):
        response = self.client.get("/api/jobs?source=bogus")
        self.assertEqual(response.status_code, 400)

        payload = response.get_json()
        self.assertFalse(payload["success"])
        self.assertIn("summer2026-internships", payload["error"])
        mock_get_jobs.assert_not_called()

    @mock.patch("webapp.app.update_job")
    @mock.patch("webapp.app.get_job")
    def test_update_status_and_notes(self, mock_get_job, mock_update_job):
        mock_get_job.return_value = {"id": 1, "status": "applied", "notes": "Follow up"}
        mock_update_job.return_value = True

        response = self.client.put("/api/jobs/1", json={"status": "applied", "notes": "Follow up", "title": "x"})
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.get_json()["job"]["status"], "applied")
        mock_update_job.assert_called_once_with(1, {"status": "applied", "notes": "Follow up"})

    @mock.patch("webapp.app.update_job")
    @mock.patch("webapp.app.get_job")
    def test_update_with_invalid_status(self, mock_get_job, mock_update_job):
        mock_get_job.return_value = {"id": 1}
        mock_update_job.side_effect = InvalidStatusError("Invalid status 'hired'")

        response = self.client.put("/api/jobs/1", json={"status": "hired"})
        self.assertEqual(response.status_code, 400)
        self.assertFalse(response.get_json()["success"])

    @mock.patch("webapp.app.get_job", return_value=None)
    def test_update_missing_job(self, mock_get_job):
        response = self.client.put("/api/jobs/99", json={"notes": "hello"})
        self.assertEqual(response.status_code, 404)

    @mock.patch("webapp.app.deactivate_job", return_value=True)
    @mock.patch("webapp.app.get_job", return_value={"id": 1})
    def test_delete_is_soft(self, mock_get_job, mock_deactivate):
        response = self.client.delete("/api/jobs/1")
        self.assertEqual(response.status_code, 200)
        mock_deactivate.assert_called_once_with(1)

    @mock.patch("webapp.app.get_job_stats")
    def test_stats(self, mock_stats):
        mock_stats.return_value = {"total": 2, "by_status": {"new": 2}, "by_source": {}, "by_company": {}, "by_day": {}}
        response = self.client.get("/api/jobs/stats")
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.get_json()["stats"]["total"], 2)


class ScrapeEndpointTests(unittest.TestCase):

    def setUp(self):
        self.client = app.test_client()
        app.config["TESTING"] = True

    @mock.patch("webapp.app.scheduler")
    def test_scrape_returns_cycle_summary(self, mock_scheduler):
        mock_scheduler.trigger_manual_scrape.return_value = {
            "new_jobs": 2, "total_jobs": 5, "errors": ["alpha scraping failed: timeout"],
        }

        response = self.client.get("/api/jobs/scrape")
        self.assertEqual(response.status_code, 200)

        payload = response.get_json()
        self.assertTrue(payload["success"])
        self.assertEqual(payload["new_jobs"], 2)
        self.assertEqual(payload["total_jobs"], 5)
        self.assertEqual(payload["errors"], ["alpha scraping failed: timeout"])

    @mock.patch("webapp.app.scheduler")
    def test_scrape_while_running_conflicts(self, mock_scheduler):
        mock_scheduler.trigger_manual_scrape.side_effect = ScrapeInProgressError("A scrape cycle is already in progress")

        response = self.client.get("/api/jobs/scrape")
        self.assertEqual(response.status_code, 409)

    @mock.patch("webapp.app.scheduler")
    def test_scheduler_status(self, mock_scheduler):
        mock_scheduler.status.return_value = {"running": True, "scraping": False,
                                              "schedule": "08:00 America/New_York", "next_run": None}
        response = self.client.get("/api/scheduler")
        self.assertEqual(response.status_code, 200)
        self.assertTrue(response.get_json()["scheduler"]["running"])


if __name__ == "__main__":
    unittest.main()
