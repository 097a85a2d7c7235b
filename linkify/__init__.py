"""linkify: turn web page URLs into pretty HTML or Markdown links."""

from linkify.generator import LinkGenerator
from linkify.models import LinkData, PageData
from linkify.sites import install_site_rules
from linkify.templates import LinkTemplate, TemplateNotFoundError, TemplateRegistry
from linkify.transformers import TransformerRegistry, default_transformer

__all__ = [
    "LinkGenerator",
    "LinkData",
    "PageData",
    "LinkTemplate",
    "TemplateRegistry",
    "TemplateNotFoundError",
    "TransformerRegistry",
    "default_transformer",
    "install_site_rules",
]
