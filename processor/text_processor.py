"""Text processing utilities for cleaning markdown/HTML table cells."""

import re
import logging
from typing import Optional

from bs4 import BeautifulSoup

# Configure logging with datetime prefix
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(levelname)s - %(message)s',
    datefmt='%Y-%m-%d %H:%M:%S'
)
logger = logging.getLogger(__name__)


_MARKDOWN_LINK = re.compile(r'\[([^\]]+)\]\(([^)]+)\)')
_HTML_BREAK = re.compile(r'</?br\s*/?>', re.IGNORECASE)
_HTML_TAG = re.compile(r'<[^>]+>')
_BOLD = re.compile(r'\*\*([^*]+)\*\*')
_ITALIC = re.compile(r'\*([^*]+)\*')
_CODE = re.compile(r'`([^`]+)`')


def extract_url(text: str) -> Optional[str]:
    """Return the first link target in a cell.

    HTML anchors win over markdown links because some sources mix both in
    one cell (an image badge wrapped in ``<a>`` next to a markdown link).
    """
    if not text:
        return None

    if '<a' in text.lower():
        soup = BeautifulSoup(text, 'html.parser')
        anchor = soup.find('a', href=True)
        if anchor and anchor['href'].strip():
            return anchor['href'].strip()

    match = _MARKDOWN_LINK.search(text)
    if match:
        return match.group(2).strip()

    return None


def _strip_markup_once(text: str) -> str:
    text = _HTML_BREAK.sub(' ', text)
    text = text.replace('&nbsp;', ' ')
    text = _HTML_TAG.sub('', text)
    text = _MARKDOWN_LINK.sub(r'\1', text)
    text = _BOLD.sub(r'\1', text)
    text = _ITALIC.sub(r'\1', text)
    text = _CODE.sub(r'\1', text)
    text = re.sub(r'\s+', ' ', text)
    return text.strip()


def extract_text(text: str) -> str:
    """Strip markdown/HTML markup from a cell and normalize whitespace."""
    if not text:
        return ""

    # Every pass only shortens the text, so this reaches a fixed point
    cleaned = _strip_markup_once(text)
    while True:
        again = _strip_markup_once(cleaned)
        if again == cleaned:
            return cleaned
        cleaned = again


def make_unique_key(company: str, title: str, location: str) -> str:
    """Build the deduplication key for a posting.

    >>> make_unique_key("Acme, Inc.", "Software Engineer II", "New York, NY")
    'acme-inc-software-engineer-ii-new-york-ny'
    """
    combined = f"{company or ''}-{title or ''}-{location or ''}".lower()
    combined = re.sub(r'[^a-z0-9-]', '-', combined)
    combined = re.sub(r'-+', '-', combined)
    return combined.strip('-')
