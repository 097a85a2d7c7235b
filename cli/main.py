"""linkify CLI: turn a URL into a formatted link.

Usage:
    python cli/main.py --help
    python cli/main.py link https://example.com/post --template markdown
"""

from __future__ import annotations

import sys
from pathlib import Path

# Ensure the project root is on sys.path so that `from linkify.xxx import ...`
# works when the CLI is invoked as `python cli/main.py` from any working
# directory.
_ROOT = Path(__file__).resolve().parent.parent
if str(_ROOT) not in sys.path:
    sys.path.insert(0, str(_ROOT))

import logging
from typing import Optional

import httpx
import typer

from linkify.config import settings
from linkify.generator import LinkGenerator
from linkify.sites import install_site_rules
from linkify.templates import TemplateNotFoundError

app = typer.Typer(
    name="linkify",
    help="Turn web page URLs into pretty HTML or Markdown links.",
    no_args_is_help=True,
)


def build_generator(site_rules: bool = True) -> LinkGenerator:
    """Return a generator with the built-in templates (and site rules)."""
    generator = LinkGenerator()
    if site_rules:
        install_site_rules(generator)
    return generator


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log debug output to stderr."),
) -> None:
    """Configure logging for every command."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else settings.log_level,
        format="[%(levelname)s] %(name)s: %(message)s",
    )


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------
@app.command("link")
def link(
    url: str = typer.Argument(..., help="URL of the page to link to."),
    template: Optional[str] = typer.Option(
        None, "--template", "-t", help="Template name (default: settings.default_template)."
    ),
    site_rules: bool = typer.Option(
        True, "--site-rules/--no-site-rules", help="Apply the built-in per-site rules."
    ),
) -> None:
    """Fetch URL and print a formatted link to it."""
    generator = build_generator(site_rules)
    try:
        result = generator.generate_link(url, template)
    except TemplateNotFoundError as exc:
        typer.echo(f"[link] {exc}. Available: {', '.join(generator.templates.names())}", err=True)
        raise typer.Exit(1)
    except ValueError as exc:
        typer.echo(f"[link] {exc}", err=True)
        raise typer.Exit(1)
    except httpx.HTTPError as exc:
        typer.echo(f"[link] Could not fetch {url!r}: {exc}", err=True)
        raise typer.Exit(1)
    typer.echo(result)


@app.command("templates")
def templates(
    site_rules: bool = typer.Option(
        True, "--site-rules/--no-site-rules", help="Include templates added by the site rules."
    ),
) -> None:
    """List the available template names."""
    generator = build_generator(site_rules)
    for name in generator.templates.names():
        typer.echo(f"  {name}  {generator.templates.resolve(name).template}")


# ---------------------------------------------------------------------------
# Entry-point
# ---------------------------------------------------------------------------
if __name__ == "__main__":
    app()
