"""Shared fixtures: canned pages and an in-memory fetcher.

``FakeFetcher`` stands in for :class:`~urlqa.scraper.fetcher.PageFetcher` so
pipeline tests can count fetches and choose per-URL outcomes without any
network traffic.
"""

from __future__ import annotations

from typing import Callable, Mapping

import pytest

from urlqa.errors import FetchError
from urlqa.scraper.fetcher import PageFetcher


def make_page(title: str, description: str, body: str) -> str:
    return (
        "<!DOCTYPE html><html><head>"
        f"<title>{title}</title>"
        f'<meta name="description" content="{description}">'
        "</head><body>"
        f"{body}"
        "</body></html>"
    )


class FakeFetcher(PageFetcher):
    """Serve HTML from a dict; a missing URL or an exception value fails."""

    def __init__(self, pages: Mapping[str, str | Exception]) -> None:
        super().__init__(strategies=[lambda url: url])
        self.pages = dict(pages)
        self.calls: list[str] = []

    async def fetch(self, url, client=None):  # type: ignore[override]
        self.calls.append(url)
        outcome = self.pages.get(url)
        if outcome is None:
            raise FetchError(url, "404 Not Found")
        if isinstance(outcome, Exception):
            raise outcome
        return outcome


@pytest.fixture()
def make_fetcher() -> Callable[[Mapping[str, str | Exception]], FakeFetcher]:
    return FakeFetcher


@pytest.fixture()
def page_a() -> str:
    return make_page("Page A", "About A", "<p>Alpha paragraph content.</p>")


@pytest.fixture()
def page_c() -> str:
    return make_page("Page C", "About C", "<p>Gamma paragraph content.</p>")
