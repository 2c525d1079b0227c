import unittest
from datetime import datetime, timedelta

from scraper.models import ColumnMap
from scraper.row_parser import parse_row, split_row
from scraper.sources import SUMMER_2026, SWE_2025


class SplitRowTests(unittest.TestCase):

    def test_outer_pipes_are_dropped(self):
        self.assertEqual(split_row("| Acme | SWE | NYC |"), ["Acme", "SWE", "NYC"])

    def test_inner_empty_cells_keep_their_position(self):
        self.assertEqual(split_row("| Acme |  | NYC |"), ["Acme", "", "NYC"])


class ParseRowTests(unittest.TestCase):

    def setUp(self):
        self.now = datetime(2025, 7, 5, 9, 0)

    def test_well_formed_row(self):
        job = parse_row(
            "| Acme | SWE Intern | NYC, NY | [Apply](http://x.test/1) | 2d |",
            SUMMER_2026.columns,
            now=self.now,
        )
        self.assertIsNotNone(job)
        self.assertEqual(job.title, "SWE Intern")
        self.assertEqual(job.company, "Acme")
        self.assertEqual(job.location, "NYC, NY")
        self.assertEqual(job.application_url, "http://x.test/1")
        self.assertEqual(job.age_text, "2d")
        self.assertEqual(job.posted_date, self.now - timedelta(days=2))
        self.assertIsNone(job.salary)

    def test_html_cells(self):
        job = parse_row(
            '| **[Acme](https://acme.test)** | Software Engineer Intern | SF, CA<br>Remote '
            '| <a href="https://apply.test/42"><img src="apply.png" alt="Apply"></a> | Jul 03 |',
            SUMMER_2026.columns,
            now=self.now,
        )
        self.assertEqual(job.company, "Acme")
        self.assertEqual(job.location, "SF, CA Remote")
        self.assertEqual(job.application_url, "https://apply.test/42")
        self.assertEqual(job.posted_date, self.now - timedelta(days=2))

    def test_row_with_too_few_cells_is_skipped(self):
        self.assertIsNone(parse_row("| Acme | SWE | NYC |", SUMMER_2026.columns, now=self.now))

    def test_row_without_link_is_skipped(self):
        self.assertIsNone(
            parse_row("| Acme | SWE Intern | NYC | Closed | 1d |", SUMMER_2026.columns, now=self.now)
        )

    def test_row_without_company_is_skipped(self):
        self.assertIsNone(
            parse_row("| ** ** | SWE Intern | NYC | [Apply](http://x.test) | 1d |", SUMMER_2026.columns, now=self.now)
        )

    def test_fallback_link_cell_is_used(self):
        job = parse_row(
            "| [LinkCo](http://link.test) | Developer | Remote | Closed | 1d |",
            SWE_2025.columns,
            now=self.now,
        )
        self.assertEqual(job.company, "LinkCo")
        self.assertEqual(job.application_url, "http://link.test")

    def test_salary_column(self):
        columns = ColumnMap(company=0, title=1, location=2, salary=3, link=4, age=5)
        job = parse_row(
            "| Acme | SWE | NYC | $50/hr | [Apply](http://x.test) | 1d |",
            columns,
            min_cells=6,
            now=self.now,
        )
        self.assertEqual(job.salary, "$50/hr")
        self.assertEqual(job.application_url, "http://x.test")


if __name__ == "__main__":
    unittest.main()
