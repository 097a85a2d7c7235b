"""URL normalisation and parsing helpers.

Every URL that enters the pipeline is normalised here first so that
:class:`~linkify.models.PageData` always holds a canonical form and the
templates always see the same ``uri.*`` components for equivalent URLs.
"""

from __future__ import annotations

from dataclasses import dataclass
from urllib.parse import urlsplit, urlunsplit

_DEFAULT_PORTS = {"http": 80, "https": 443}


@dataclass(frozen=True)
class UrlParts:
    """The structured components of a normalised URL."""

    scheme: str
    hostname: str
    port: int | None
    path: str
    query: str
    fragment: str

    @property
    def has_path(self) -> bool:
        """``True`` when the path points somewhere below the site root."""
        return self.path not in ("", "/")

    def as_template_dict(self) -> dict[str, object]:
        """Return the components under the names templates use (``uri.*``)."""
        return {
            "scheme": self.scheme,
            "hostname": self.hostname,
            "port": self.port,
            "path": self.path,
            "query": self.query,
            "fragment": self.fragment,
            "hasPath": self.has_path,
        }


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------

def _remove_dot_segments(path: str) -> str:
    """Collapse ``.`` and ``..`` segments in an absolute path."""
    if not path:
        return path
    output: list[str] = []
    for segment in path.split("/"):
        if segment == ".":
            continue
        if segment == "..":
            if len(output) > 1:
                output.pop()
            continue
        output.append(segment)
    result = "/".join(output)
    if path.endswith(("/.", "/..")):
        result += "/"
    return result


def _normalise_netloc(url: str) -> str:
    parts = urlsplit(url)
    host = parts.hostname or ""
    if ":" in host:
        host = f"[{host}]"

    port = parts.port
    if port is not None and port != _DEFAULT_PORTS.get(parts.scheme.lower()):
        host = f"{host}:{port}"

    if parts.username is not None:
        userinfo = parts.username
        if parts.password is not None:
            userinfo += f":{parts.password}"
        host = f"{userinfo}@{host}"
    return host


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def normalize_url(url: str) -> str:
    """Return the canonical form of *url*.

    The scheme and host are lower-cased, a port matching the scheme's
    default is dropped, dot segments are removed from the path and an empty
    path on a URL with a host becomes ``/``.  Query and fragment are kept
    untouched.

    Raises:
        ValueError: If the URL carries a malformed port.
    """
    url = str(url).strip()
    parts = urlsplit(url)
    netloc = _normalise_netloc(url)
    path = _remove_dot_segments(parts.path)
    if netloc and not path:
        path = "/"
    return urlunsplit((parts.scheme.lower(), netloc, path, parts.query, parts.fragment))


def parse_url(url: str) -> UrlParts:
    """Normalise *url* and split it into a :class:`UrlParts`."""
    parts = urlsplit(normalize_url(url))
    return UrlParts(
        scheme=parts.scheme,
        hostname=parts.hostname or "",
        port=parts.port,
        path=parts.path,
        query=parts.query,
        fragment=parts.fragment,
    )


def is_web_url(url: str) -> bool:
    """Return ``True`` if *url* is an absolute ``http``/``https`` URL with a host."""
    try:
        parts = parse_url(url)
    except ValueError:
        return False
    return parts.scheme in _DEFAULT_PORTS and bool(parts.hostname)


def strip_query_string(url: str) -> str:
    """Remove the query string from *url*, keeping any fragment."""
    parts = urlsplit(str(url))
    return urlunsplit((parts.scheme, parts.netloc, parts.path, "", parts.fragment))


def strip_utm_parameters(url: str) -> str:
    """Remove Google Analytics ``utm_*`` tracking parameters from *url*.

    Other query parameters are kept byte-for-byte, in their original order.
    """
    parts = urlsplit(str(url))
    if not parts.query:
        return str(url)
    # work on the raw segments so kept parameters are not re-encoded
    kept = [
        segment
        for segment in parts.query.split("&")
        if not segment.partition("=")[0].lower().startswith("utm_")
    ]
    return urlunsplit((parts.scheme, parts.netloc, parts.path, "&".join(kept), parts.fragment))
