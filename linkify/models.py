"""Data models for the link-generation pipeline.

:class:`PageData` is what the scraper learns about a page; :class:`LinkData`
is what a transformer decides the link should look like.  Both are plain
dataclasses. The pipeline builds each instance once and only reads it
afterwards.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, List

from linkify.urls import UrlParts, normalize_url, parse_url


@dataclass
class PageData:
    """Data about a single fetched web page."""

    url: str
    title: str = ""
    h1s: List[str] = field(default_factory=list)
    h2s: List[str] = field(default_factory=list)

    def __post_init__(self) -> None:
        self.url = normalize_url(self.url)
        self.title = str(self.title)
        self.h1s = [str(h) for h in self.h1s]
        self.h2s = [str(h) for h in self.h2s]

    # ------------------------------------------------------------------
    # URL views
    # ------------------------------------------------------------------
    @property
    def uri(self) -> UrlParts:
        """The URL split into its components."""
        return parse_url(self.url)

    @property
    def domain(self) -> str:
        return self.uri.hostname

    @property
    def path(self) -> str:
        return self.uri.path

    # ------------------------------------------------------------------
    # Headings
    # ------------------------------------------------------------------
    @property
    def top_level_headings(self) -> List[str]:
        """A copy of the ``h1`` texts, in document order."""
        return list(self.h1s)

    @property
    def secondary_headings(self) -> List[str]:
        """A copy of the ``h2`` texts, in document order."""
        return list(self.h2s)

    @property
    def headings(self) -> dict[str, List[str]]:
        return {"h1": list(self.h1s), "h2": list(self.h2s)}

    @property
    def main_heading(self) -> str:
        """The first ``h1``, else the first ``h2``, else an empty string."""
        if self.h1s:
            return self.h1s[0]
        if self.h2s:
            return self.h2s[0]
        return ""

    def add_top_level_heading(self, text: str) -> PageData:
        self.h1s.append(str(text))
        return self

    def add_secondary_heading(self, text: str) -> PageData:
        self.h2s.append(str(text))
        return self


@dataclass
class LinkData:
    """The URL, text and description a link template is rendered with.

    ``text`` defaults to the URL and ``description`` defaults to the text.
    The defaults are resolved once, when the instance is built.
    """

    url: str
    text: str = ""
    description: str = ""

    def __post_init__(self) -> None:
        self.url = str(self.url)
        self.text = str(self.text) if self.text else self.url
        self.description = str(self.description) if self.description else self.text

    # ------------------------------------------------------------------
    # Copy-with helpers
    # ------------------------------------------------------------------
    def with_url(self, url: str) -> LinkData:
        return LinkData(url, self.text, self.description)

    def with_text(self, text: str) -> LinkData:
        return LinkData(self.url, text, self.description)

    def with_description(self, description: str) -> LinkData:
        return LinkData(self.url, self.text, description)

    # ------------------------------------------------------------------
    # Serialisation
    # ------------------------------------------------------------------
    def as_plain_dict(self) -> dict[str, str]:
        return {"url": self.url, "text": self.text, "description": self.description}

    def as_template_fields(self) -> dict[str, Any]:
        """Flatten into the mapping templates render against.

        Adds a ``uri`` entry holding the URL components
        (``uri.hostname``, ``uri.path``, ``uri.hasPath`` …).
        """
        return template_fields(self.as_plain_dict())


def template_fields(values: dict[str, str]) -> dict[str, Any]:
    """Return *values* plus the ``uri`` components derived from ``values['url']``."""
    return {**values, "uri": parse_url(values["url"]).as_template_dict()}


# A transformer turns what we know about a page into the link to render.
Transformer = Callable[[PageData], LinkData]
