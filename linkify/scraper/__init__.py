"""Scraper package: web fetch and heading extraction."""

from linkify.scraper.extractor import (
    extract_headings,
    extract_page_data,
    extract_title,
    load_page_data,
)
from linkify.scraper.fetcher import fetch_url
from linkify.scraper.models import RawPage

__all__ = [
    "fetch_url",
    "extract_title",
    "extract_headings",
    "extract_page_data",
    "load_page_data",
    "RawPage",
]
