"""HTTP fetcher for the pages being linked to."""

from __future__ import annotations

import logging

import httpx

from linkify.config import settings
from linkify.scraper.models import RawPage

logger = logging.getLogger(__name__)


def _default_headers() -> dict[str, str]:
    return {"User-Agent": settings.user_agent}


def fetch_url(url: str) -> RawPage:
    """Fetch *url* and return a :class:`RawPage`.

    Redirects are followed, but the page keeps the URL that was asked for so
    the link points where the caller meant it to.  A
    successful response with an empty body is returned as-is; it is not an
    error.

    Raises:
        httpx.HTTPStatusError: If the server returns a 4xx/5xx status code.
        httpx.HTTPError: On any transport-level failure (DNS, timeout, …).
    """
    logger.debug("Fetching %s", url)
    with httpx.Client(
        headers=_default_headers(),
        timeout=settings.request_timeout,
        follow_redirects=True,
    ) as client:
        response = client.get(url)
        response.raise_for_status()
        html = response.text
        status_code = response.status_code
        final_url = str(response.url)

    logger.debug("Fetched %s via %s (HTTP %d, %d chars)", url, final_url, status_code, len(html))
    return RawPage(url=url, html=html, status_code=status_code)
