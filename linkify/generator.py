"""Link generation: URL → PageData → LinkData → rendered link.

``LinkGenerator`` owns the transformer and template registries, so each
application (or test) builds its own and configures it before generating
links:

    generator = LinkGenerator()
    generator.register_transformer("example.com", my_transformer)
    generator.register_template("md-title", LinkTemplate("..."))
    generator.generate_link("https://www.example.com/post", "md-title")
"""

from __future__ import annotations

import logging
from typing import Callable, Optional

from linkify.config import settings
from linkify.models import LinkData, PageData, Transformer
from linkify.scraper.extractor import load_page_data
from linkify.templates import LinkTemplate, TemplateRegistry
from linkify.transformers import TransformerRegistry
from linkify.urls import is_web_url

logger = logging.getLogger(__name__)

PageLoader = Callable[[str], PageData]


class LinkGenerator:
    """Generates formatted links for URLs."""

    def __init__(
        self,
        transformers: Optional[TransformerRegistry] = None,
        templates: Optional[TemplateRegistry] = None,
        page_loader: PageLoader = load_page_data,
    ):
        self.transformers = transformers or TransformerRegistry()
        self.templates = templates or TemplateRegistry()
        self.page_loader = page_loader

    # ------------------------------------------------------------------
    # Setup
    # ------------------------------------------------------------------
    def register_transformer(self, domain: str, transformer: Transformer) -> None:
        self.transformers.register(domain, transformer)

    def register_template(self, name: str, template: LinkTemplate) -> None:
        self.templates.register(name, template)

    # ------------------------------------------------------------------
    # Generation
    # ------------------------------------------------------------------
    def link_data_for(self, page: PageData) -> LinkData:
        """Run the transformer registered for *page*'s domain.

        Raises:
            TypeError: If the transformer does not return a :class:`LinkData`.
        """
        transformer = self.transformers.resolve(page.domain)
        link = transformer(page)
        if not isinstance(link, LinkData):
            raise TypeError(
                f"Transformer for {page.domain!r} returned {type(link).__name__}, expected LinkData"
            )
        return link

    def generate_link(self, url: str, template_name: Optional[str] = None) -> str:
        """Fetch *url* and render a link to it with the named template.

        *template_name* defaults to ``settings.default_template`` (``html``
        unless configured otherwise).

        Raises:
            ValueError: If *url* is not an absolute http(s) URL.
            TemplateNotFoundError: If *template_name* is not registered.
            httpx.HTTPError: If the page cannot be fetched.
        """
        if not isinstance(url, str) or not is_web_url(url):
            raise ValueError(f"Expected an absolute http(s) URL, got {url!r}")
        name = settings.default_template if template_name is None else template_name

        # resolve the template first: an unknown name must not cost a fetch
        template = self.templates.resolve(name)

        page = self.page_loader(url)
        link = self.link_data_for(page)
        logger.debug("Rendering %s with template %r", link.url, name)
        return template.render(link)
