"""Content extraction: turns a :class:`RawPage` into a :class:`PageData`."""

from __future__ import annotations

from typing import List

from bs4 import BeautifulSoup

from linkify.models import PageData
from linkify.scraper.fetcher import fetch_url
from linkify.scraper.models import RawPage


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------

def _soup(html: str) -> BeautifulSoup:
    return BeautifulSoup(html, "html.parser")


def _clean_text(text: str) -> str:
    """Collapse runs of whitespace (including newlines) to single spaces."""
    return " ".join(text.split())


def _title_from_soup(soup: BeautifulSoup) -> str:
    # only the first <title>; inline SVGs carry their own
    tag = soup.find("title")
    return _clean_text(tag.get_text()) if tag else ""


def _headings_from_soup(soup: BeautifulSoup, level: int) -> List[str]:
    return [_clean_text(tag.get_text()) for tag in soup.find_all(f"h{level}")]


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def extract_title(html: str) -> str:
    """Return the text of the page's ``<title>``, or an empty string."""
    return _title_from_soup(_soup(html))


def extract_headings(html: str, level: int) -> List[str]:
    """Return the texts of every ``<hN>`` tag for *level*, in document order.

    Raises:
        ValueError: If *level* is not between 1 and 6.
    """
    if level not in range(1, 7):
        raise ValueError(f"Heading level must be between 1 and 6, got {level!r}")
    return _headings_from_soup(_soup(html), level)


def extract_page_data(raw: RawPage) -> PageData:
    """Build a :class:`PageData` from *raw*: title plus ``h1`` and ``h2`` texts."""
    soup = _soup(raw.html)
    return PageData(
        url=raw.url,
        title=_title_from_soup(soup),
        h1s=_headings_from_soup(soup, 1),
        h2s=_headings_from_soup(soup, 2),
    )


def load_page_data(url: str) -> PageData:
    """Fetch *url* and extract its :class:`PageData`.

    Network and HTTP errors from :func:`~linkify.scraper.fetcher.fetch_url`
    propagate unchanged.
    """
    return extract_page_data(fetch_url(url))
