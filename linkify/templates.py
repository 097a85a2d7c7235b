"""Link templates and the template registry.

Templates are Jinja2 strings rendered with autoescaping on: ``{{ text }}``
is HTML-escaped, ``{{ url|safe }}`` is inserted raw.  The fields available
are ``url``, ``text``, ``description`` and the URL components under
``uri`` (``uri.hostname``, ``uri.path``, ``uri.hasPath`` …).

Each template carries filter chains.  Filters are plain ``str -> str``
callables applied to a field's value before it is substituted.  Filters
registered under ``all`` run first, for every field, followed by the
field's own filters, each in registration order.
"""

from __future__ import annotations

import logging
from functools import reduce
from typing import Callable, Dict, List, Optional

from jinja2 import Environment, BaseLoader, StrictUndefined

from linkify.models import LinkData, template_fields

logger = logging.getLogger(__name__)

Filter = Callable[[str], str]

FIELDS = ("url", "text", "description")
FILTER_SCOPES = ("all",) + FIELDS

_ENV = Environment(loader=BaseLoader(), autoescape=True, undefined=StrictUndefined)


class TemplateNotFoundError(LookupError):
    """Raised when a template name has not been registered."""

    def __init__(self, name: str):
        super().__init__(f"No link template registered as {name!r}")
        self.name = name


class LinkTemplate:
    """A template string plus per-field filter chains."""

    def __init__(self, template: str, filters: Optional[Dict[str, List[Filter]]] = None):
        if not isinstance(template, str):
            raise TypeError(f"Template must be a string, got {type(template).__name__}")
        self.template = template
        self._compiled = _ENV.from_string(template)
        self._filters: Dict[str, List[Filter]] = {scope: [] for scope in FILTER_SCOPES}
        for scope, fns in (filters or {}).items():
            for fn in fns:
                self.add_filter(scope, fn)

    def add_filter(self, field: str, fn: Filter) -> LinkTemplate:
        """Append *fn* to the filter chain for *field*.

        An unknown *field* or a non-callable *fn* is logged and ignored so a
        bad registration cannot abort setup.
        """
        if field not in FILTER_SCOPES:
            logger.warning(
                "Ignoring filter for unknown field %r (expected one of %s)",
                field,
                ", ".join(FILTER_SCOPES),
            )
            return self
        if not callable(fn):
            logger.warning("Ignoring non-callable filter %r for field %r", fn, field)
            return self
        self._filters[field].append(fn)
        return self

    def filters_for(self, field: str) -> List[Filter]:
        """Return the filters applied to *field*, in application order."""
        if field == "all":
            return list(self._filters["all"])
        if field in FIELDS:
            return self._filters["all"] + self._filters[field]
        return []

    def apply_filters(self, field: str, value: str) -> str:
        return reduce(lambda acc, fn: fn(acc), self.filters_for(field), value)

    def render(self, link: LinkData) -> str:
        """Filter each field of *link* and render the template with the results."""
        values = {name: self.apply_filters(name, value) for name, value in link.as_plain_dict().items()}
        return self._compiled.render(**template_fields(values))

    def __repr__(self) -> str:
        return f"LinkTemplate({self.template!r})"


# ---------------------------------------------------------------------------
# Built-in templates
# ---------------------------------------------------------------------------

HTML = '<a href="{{ url|safe }}" title="{{ description }}">{{ text }}</a>'
HTML_NEW_TAB = (
    '<a href="{{ url|safe }}" title="{{ description }}" '
    'target="_blank" rel="noopener">{{ text }}</a>'
)
MARKDOWN = "[{{ text|safe }}]({{ url|safe }})"


def builtin_templates() -> Dict[str, LinkTemplate]:
    """Fresh instances of the built-in templates, keyed by name."""
    return {
        "html": LinkTemplate(HTML),
        "htmlNewTab": LinkTemplate(HTML_NEW_TAB),
        "markdown": LinkTemplate(MARKDOWN),
    }


class TemplateRegistry:
    """Name → :class:`LinkTemplate` mapping, seeded with the built-ins."""

    def __init__(self):
        self._templates: Dict[str, LinkTemplate] = builtin_templates()

    def register(self, name: str, template: LinkTemplate) -> None:
        """Register *template* under *name*, replacing any existing entry.

        Raises:
            ValueError: If *name* is not a non-empty string.
            TypeError: If *template* is not a :class:`LinkTemplate`.
        """
        if not isinstance(name, str) or not name:
            raise ValueError(f"Template name must be a non-empty string, got {name!r}")
        if not isinstance(template, LinkTemplate):
            raise TypeError(f"Template {name!r} must be a LinkTemplate, got {type(template).__name__}")
        self._templates[name] = template

    def resolve(self, name: str) -> LinkTemplate:
        """Return the template registered as *name*.

        Raises:
            TemplateNotFoundError: If nothing is registered under *name*.
        """
        try:
            return self._templates[name]
        except (KeyError, TypeError):
            raise TemplateNotFoundError(name) from None

    def names(self) -> list[str]:
        return sorted(self._templates)

    def __contains__(self, name: object) -> bool:
        return name in self._templates

    def __len__(self) -> int:
        return len(self._templates)
