"""Types shared by the source scrapers."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional, Tuple


@dataclass
class ScrapedJob:
    """A freshly parsed posting that has not been deduplicated yet."""

    title: str
    company: str
    location: str
    application_url: str
    age_text: str
    posted_date: datetime
    salary: Optional[str] = None


@dataclass(frozen=True)
class ColumnMap:
    """Ordinal cell positions of the fields in a source's table rows."""

    company: int = 0
    title: int = 1
    location: int = 2
    link: int = 3
    age: int = 4
    fallback_link: Optional[int] = None
    salary: Optional[int] = None


@dataclass(frozen=True)
class SourceDefinition:
    """Static description of one markdown job list and where its table lives."""

    name: str
    url: str
    raw_url: str
    header_markers: Tuple[str, ...]
    section_markers: Tuple[str, ...] = ()
    columns: ColumnMap = field(default_factory=ColumnMap)
    min_cells: int = 5
