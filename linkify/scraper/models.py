"""Data models for the scraper."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class RawPage:
    """The raw HTTP response for a single URL fetch.

    ``url`` is the requested URL, not the one any redirects ended at.
    """

    url: str
    html: str
    status_code: int
