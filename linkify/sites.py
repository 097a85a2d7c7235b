"""Link rules for specific news and blog sites.

Most sites need nothing more than dropping the site name from the page
title, or using the main heading instead of the title.  Install them all on
a generator with :func:`install_site_rules`.
"""

from __future__ import annotations

import re

from linkify.models import LinkData, PageData, Transformer
from linkify.templates import LinkTemplate
from linkify.urls import strip_query_string, strip_utm_parameters

# Markdown link with the site's host name appended, plus "/…" when the link
# points below the site root.
MD_TITLE = (
    "[{{ text|safe }} — {{ uri.hostname|safe }}{% if uri.hasPath %}/…{% endif %}]"
    "({{ url|safe }})"
)


# ---------------------------------------------------------------------------
# Transformer factories
# ---------------------------------------------------------------------------

def title_without(pattern: str) -> Transformer:
    """Link text is the page title with the first match of *pattern* removed."""
    regex = re.compile(pattern)

    def transform(page: PageData) -> LinkData:
        return LinkData(page.url, regex.sub("", page.title, count=1))

    return transform


def main_heading(page: PageData) -> LinkData:
    return LinkData(page.url, page.main_heading)


# ---------------------------------------------------------------------------
# Site-specific transformers
# ---------------------------------------------------------------------------

def appleinsider(page: PageData) -> LinkData:
    return LinkData(strip_utm_parameters(page.url), page.main_heading)


def cultofmac(page: PageData) -> LinkData:
    # the first h2 is the site banner
    h2s = page.secondary_headings
    return LinkData(page.url, h2s[1] if len(h2s) > 1 else page.title)


def macobserver(page: PageData) -> LinkData:
    return LinkData(strip_query_string(page.url), page.main_heading)


def overcast(page: PageData) -> LinkData:
    """``Episode — Podcast — Overcast`` becomes ``Podcast: Episode``."""
    parts = page.title.replace(" — Overcast", "", 1).split("—")
    podcast = parts.pop().strip()
    episode = re.sub(r" +", " ", " – ".join(parts)).replace(":", "-", 1).strip()
    return LinkData(page.url, f"{podcast}: {episode}" if episode else podcast)


SITE_TRANSFORMERS: dict[str, Transformer] = {
    "9to5mac.com": main_heading,
    "appleinsider.com": appleinsider,
    "bloomberg.com": title_without(r" - Bloomberg"),
    "cultofmac.com": cultofmac,
    "daringfireball.net": title_without(r"^Daring Fireball: "),
    "intego.com": title_without(r" [-|] The Mac Security Blog"),
    "krebsonsecurity.com": title_without(r" – Krebs on Security"),
    "macobserver.com": macobserver,
    "macstories.net": title_without(r" - MacStories"),
    "nakedsecurity.sophos.com": title_without(r" – Naked Security"),
    "overcast.fm": overcast,
    "sixcolors.com": main_heading,
    "theverge.com": title_without(r" - The Verge.*$"),
    "wired.com": main_heading,
}


def install_site_rules(generator) -> None:
    """Register every site transformer and the ``md-title`` template."""
    for domain, transformer in SITE_TRANSFORMERS.items():
        generator.register_transformer(domain, transformer)
    generator.register_template("md-title", LinkTemplate(MD_TITLE))
