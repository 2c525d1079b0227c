"""Processor module for cell text cleanup and age normalization."""

from .text_processor import extract_text, extract_url, make_unique_key
from .age_parser import parse_age_to_days, age_to_date, is_recent

__all__ = [
    "extract_text",
    "extract_url",
    "make_unique_key",
    "parse_age_to_days",
    "age_to_date",
    "is_recent",
]
