"""Parse markdown table rows into ScrapedJob candidates."""

import logging
from datetime import datetime
from typing import List, Optional

from processor.text_processor import extract_text, extract_url
from processor.age_parser import age_to_date
from scraper.models import ColumnMap, ScrapedJob

logger = logging.getLogger(__name__)


def split_row(line: str) -> List[str]:
    """Split a pipe-delimited row, dropping the empty cells outside the outer pipes."""
    cells = [cell.strip() for cell in line.strip().split('|')]
    if cells and not cells[0]:
        cells = cells[1:]
    if cells and not cells[-1]:
        cells = cells[:-1]
    return cells


def _cell(cells: List[str], index: Optional[int]) -> str:
    if index is None or index >= len(cells):
        return ''
    return cells[index]


def parse_row(
    line: str,
    columns: ColumnMap,
    min_cells: int = 5,
    now: Optional[datetime] = None
) -> Optional[ScrapedJob]:
    """Parse one table row using the source's column layout.

    Returns None for rows that are too short or lack a name or link.
    """
    cells = split_row(line)
    if len(cells) < min_cells:
        return None

    company = _cell(cells, columns.company)
    title = _cell(cells, columns.title)
    location = _cell(cells, columns.location)
    age = _cell(cells, columns.age)
    if not company or not title or not location or not age:
        return None

    company_name = extract_text(company)
    position_title = extract_text(title)
    application_url = extract_url(_cell(cells, columns.link))
    if not application_url and columns.fallback_link is not None:
        application_url = extract_url(_cell(cells, columns.fallback_link))

    if not application_url or not company_name or not position_title:
        return None

    now = now or datetime.now()
    age_text = extract_text(age)
    salary = extract_text(_cell(cells, columns.salary)) or None

    return ScrapedJob(
        title=position_title,
        company=company_name,
        location=extract_text(location),
        application_url=application_url,
        age_text=age_text,
        # Unparseable ages never pass the recency filter, so "now" is only a placeholder
        posted_date=age_to_date(age_text, now=now) or now,
        salary=salary,
    )
