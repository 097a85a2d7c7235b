"""Centralised settings for linkify.

All runtime configuration is resolved here in one place.  Values can be
overridden via environment variables or a `.env` file in the project root
(loaded automatically when this module is imported).
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import load_dotenv

# Load .env from the project root (one level up from the package)
_env_path = Path(__file__).resolve().parent.parent / ".env"
load_dotenv(_env_path, override=False)


@dataclass
class Settings:
    # ------------------------------------------------------------------
    # Fetcher
    # ------------------------------------------------------------------
    request_timeout: float = field(
        default_factory=lambda: float(os.environ.get("LINKIFY_REQUEST_TIMEOUT", "30.0"))
    )
    user_agent: str = field(
        default_factory=lambda: os.environ.get(
            "LINKIFY_USER_AGENT",
            "Mozilla/5.0 (compatible; linkify/1.0; +https://github.com/bartificer/linkify)",
        )
    )

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------
    default_template: str = field(
        default_factory=lambda: os.environ.get("LINKIFY_DEFAULT_TEMPLATE", "html")
    )

    # ------------------------------------------------------------------
    # Logging
    # ------------------------------------------------------------------
    log_level: str = field(
        default_factory=lambda: os.environ.get("LINKIFY_LOG_LEVEL", "WARNING").upper()
    )


# Module-level singleton, import this everywhere:
#   from linkify.config import settings
settings = Settings()
