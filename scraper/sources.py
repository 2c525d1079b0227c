"""Configured job sources and the table locator used to find their rows."""

import logging
from typing import Iterable, Iterator, List

from scraper.models import ColumnMap, SourceDefinition

logger = logging.getLogger(__name__)


# Lines shorter than this cannot hold a real row and end the table
MIN_ROW_LENGTH = 10


SUMMER_2026 = SourceDefinition(
    name='summer2026-internships',
    url='https://github.com/vanshb03/Summer2026-Internships/blob/dev/OFFSEASON_README.md',
    raw_url='https://raw.githubusercontent.com/vanshb03/Summer2026-Internships/dev/OFFSEASON_README.md',
    # | Company | Role | Location | Application/Link | Date Posted |
    header_markers=('| Company |', '| Location |'),
    columns=ColumnMap(company=0, title=1, location=2, link=3, age=4),
)

SWE_2025 = SourceDefinition(
    name='2025-swe-college-jobs',
    url='https://github.com/speedyapply/2025-SWE-College-Jobs/blob/main/README.md',
    raw_url='https://raw.githubusercontent.com/speedyapply/2025-SWE-College-Jobs/main/README.md',
    # | Company | Position | Location | Posting | Age |, only under the "Other" heading
    header_markers=('| Company', '| Position |'),
    section_markers=('## Other', '### Other'),
    columns=ColumnMap(company=0, title=1, location=2, link=3, age=4, fallback_link=0),
)

SOURCES: List[SourceDefinition] = [SUMMER_2026, SWE_2025]
SOURCE_NAMES = [source.name for source in SOURCES]


def get_source(name: str) -> SourceDefinition:
    """Look up a configured source by name."""
    for source in SOURCES:
        if source.name == name:
            return source
    raise KeyError(f"Unknown source: {name}")


def is_separator_line(line: str) -> bool:
    """Check for a markdown table separator such as ``|---|:---:|``."""
    return line.startswith('|') and '-' in line and set(line) <= set('|-: ')


class MarkerTableLocator:
    """Find a source's table by scanning for marker lines.

    Only this class knows about document layout; row parsing works on the
    lines it yields.
    """

    def __init__(self, source: SourceDefinition):
        self.source = source

    def is_section_marker(self, line: str) -> bool:
        return line in self.source.section_markers

    def is_header(self, line: str) -> bool:
        return all(marker in line for marker in self.source.header_markers)

    def is_table_end(self, line: str) -> bool:
        # Blank lines, prose and the next "#" heading all fail the pipe check
        return not line.startswith('|') or len(line) < MIN_ROW_LENGTH

    def iter_rows(self, lines: Iterable[str]) -> Iterator[str]:
        """Yield the raw row lines of the source's table in document order."""
        in_section = not self.source.section_markers
        in_table = False

        for raw_line in lines:
            line = raw_line.strip()

            if not in_section:
                if self.is_section_marker(line):
                    in_section = True
                continue

            if not in_table:
                if self.is_header(line):
                    in_table = True
                continue

            if is_separator_line(line):
                continue

            if self.is_table_end(line):
                break

            yield line

        if not in_table:
            logger.warning(f"No table header found for source {self.source.name}")
