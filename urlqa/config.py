"""Centralised settings for URL Context Q&A.

All runtime configuration is resolved here in one place.  Values can be
overridden via environment variables or a `.env` file in the project root
(loaded automatically when this module is imported).

The Gemini credential is read here but never consulted implicitly: callers
hand it to :class:`~urlqa.rag.llm.GeminiClient` at construction time.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import load_dotenv

# Load .env from the project root (one level up from the package)
_env_path = Path(__file__).resolve().parent.parent / ".env"
load_dotenv(_env_path, override=False)


# Public CORS relays, tried in this order.  ``{url}`` receives the raw target,
# ``{encoded}`` the percent-encoded target.
DEFAULT_PROXY_TEMPLATES = [
    "https://corsproxy.io/?{encoded}",
    "https://api.allorigins.win/raw?url={encoded}",
    "https://cors-anywhere.herokuapp.com/{url}",
]

DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) "
    "AppleWebKit/537.36 (KHTML, like Gecko) "
    "Chrome/122.0.0.0 Safari/537.36"
)


def _split_list(raw: str | None, default: list[str]) -> list[str]:
    """Parse a comma-separated env value, falling back to *default*."""
    if not raw:
        return list(default)
    items = [item.strip() for item in raw.split(",")]
    return [item for item in items if item] or list(default)


@dataclass
class Settings:
    # ------------------------------------------------------------------
    # Gemini (LLM) backend
    # ------------------------------------------------------------------
    gemini_api_key: str = field(
        default_factory=lambda: os.environ.get("GEMINI_API_KEY", "")
    )
    gemini_model: str = field(
        default_factory=lambda: os.environ.get("GEMINI_MODEL", "gemini-2.0-flash")
    )
    gemini_base_url: str = field(
        default_factory=lambda: os.environ.get(
            "GEMINI_BASE_URL", "https://generativelanguage.googleapis.com/v1beta"
        )
    )

    # ------------------------------------------------------------------
    # Scraper
    # ------------------------------------------------------------------
    proxy_templates: list[str] = field(
        default_factory=lambda: _split_list(
            os.environ.get("URLQA_PROXY_TEMPLATES"), DEFAULT_PROXY_TEMPLATES
        )
    )
    user_agent: str = field(
        default_factory=lambda: os.environ.get("URLQA_USER_AGENT", DEFAULT_USER_AGENT)
    )

    # ------------------------------------------------------------------
    # Logging
    # ------------------------------------------------------------------
    log_level: str = field(
        default_factory=lambda: os.environ.get("URLQA_LOG_LEVEL", "INFO").upper()
    )


# Module-level singleton, import this everywhere:
#   from urlqa.config import settings
settings = Settings()
