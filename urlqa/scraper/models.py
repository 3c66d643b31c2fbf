"""Data models for the scraper pipeline."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass
class ScrapedPage:
    """The outcome of fetching, extracting and formatting a single URL.

    Callers check :attr:`error` first; a page is only usable when it has no
    error and a non-empty :attr:`content`.
    """

    url: str
    title: str = ""
    description: str = ""
    content: str = ""
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None and bool(self.content)


@dataclass
class WebsiteMetadata:
    """Display record kept for every successfully scraped page."""

    url: str
    title: str
    description: str
    last_scraped: datetime
