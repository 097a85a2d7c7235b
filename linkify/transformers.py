"""Per-domain PageData → LinkData transformers.

A transformer is any callable taking a :class:`~linkify.models.PageData` and
returning a :class:`~linkify.models.LinkData`.  Transformers are registered
against a domain and looked up by the most specific registered suffix of a
page's host name:

- a transformer registered for ``example.com`` is used for ``example.com``,
  ``www.example.com`` and ``a.b.example.com``;
- a transformer registered for ``www.example.com`` is *not* used for
  ``example.com``;
- anything without a match falls back to the default transformer, stored
  under the root domain ``.``.

Keys are held in dot-terminated form so ``ample.com`` can never match
``example.com``.
"""

from __future__ import annotations

import logging
from typing import Optional

from linkify.models import LinkData, PageData, Transformer

logger = logging.getLogger(__name__)

ROOT_DOMAIN = "."


def default_transformer(page: PageData) -> LinkData:
    """Use the page title as link text, unless the page has exactly one ``h1``.

    A lone ``h1`` is taken to be the real headline; titles often carry a
    site-name suffix.
    """
    text = page.title
    if len(page.top_level_headings) == 1:
        text = page.main_heading
    return LinkData(page.url, text)


def to_fqdn(domain: str) -> str:
    """Return *domain* lower-cased, stripped and dot-terminated."""
    fqdn = str(domain).strip().lower()
    if not fqdn.endswith("."):
        fqdn += "."
    return fqdn


class TransformerRegistry:
    """Domain → transformer mapping with longest-suffix lookup."""

    def __init__(self, default: Optional[Transformer] = None):
        self._transformers: dict[str, Transformer] = {
            ROOT_DOMAIN: default or default_transformer,
        }

    def register(self, domain: str, transformer: Transformer) -> None:
        """Register *transformer* for *domain* and all its sub-domains.

        Re-registering a domain replaces the previous transformer.
        Registering ``.`` replaces the default.

        Raises:
            ValueError: If *domain* is not a non-empty string.
            TypeError: If *transformer* is not callable.
        """
        if not isinstance(domain, str) or not domain.strip():
            raise ValueError(f"Domain must be a non-empty string, got {domain!r}")
        if not callable(transformer):
            raise TypeError(f"Transformer for {domain!r} must be callable")

        fqdn = to_fqdn(domain)
        if fqdn in self._transformers:
            logger.debug("Replacing transformer for %s", fqdn)
        self._transformers[fqdn] = transformer

    def resolve(self, domain: str) -> Transformer:
        """Return the most specific transformer registered for *domain*.

        *domain* itself is always tried, even when it is a single label such
        as ``localhost``.  Parent domains are tried while they still contain
        an internal dot, so a registration for a bare top-level domain like
        ``com`` never captures ``example.com``.
        """
        fqdn = to_fqdn(domain)
        while True:
            transformer = self._transformers.get(fqdn)
            if transformer is not None:
                logger.debug("Resolved transformer for %s via %s", domain, fqdn)
                return transformer
            # strip the leftmost label; stop at a single label
            _, _, parent = fqdn.partition(".")
            if "." not in parent.rstrip("."):
                break
            fqdn = parent

        logger.debug("No transformer registered for %s; using default", domain)
        return self._transformers[ROOT_DOMAIN]

    @property
    def default(self) -> Transformer:
        return self._transformers[ROOT_DOMAIN]

    def domains(self) -> list[str]:
        """List registered domains (dot-terminated), excluding the root."""
        return sorted(d for d in self._transformers if d != ROOT_DOMAIN)

    def __contains__(self, domain: object) -> bool:
        return isinstance(domain, str) and to_fqdn(domain) in self._transformers

    def __len__(self) -> int:
        return len(self._transformers)
