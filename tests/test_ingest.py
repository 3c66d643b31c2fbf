"""Tests for the URL ingestion pipeline.

Most tests swap in ``FakeFetcher`` (see ``conftest.py``) to control per-URL
outcomes and count fetches.  One end-to-end test drives the real
``PageFetcher`` through ``respx``.
"""

from __future__ import annotations

from datetime import datetime, timezone
from unittest.mock import patch

import httpx
import pytest
import respx

from urlqa.errors import FetchError, InvalidUrlFormat, NoValidUrls
from urlqa.rag.ingestor import ingest_urls, scrape_page, validate_urls
from urlqa.scraper.fetcher import PageFetcher, proxy_from_template

_A = "https://a.test/page"
_B = "https://b.test/page"
_C = "https://c.test/page"

_BLOCK_A = "URL: https://a.test/page\nTITLE: Page A\nDESCRIPTION: About A\nCONTENT:\nAlpha paragraph content."
_BLOCK_C = "URL: https://c.test/page\nTITLE: Page C\nDESCRIPTION: About C\nCONTENT:\nGamma paragraph content."


# ---------------------------------------------------------------------------
# validate_urls
# ---------------------------------------------------------------------------

class TestValidateUrls:
    def test_blank_entries_dropped_and_schemes_added(self) -> None:
        assert validate_urls(["  a.test ", "", "http://b.test", "   "]) == [
            "https://a.test",
            "http://b.test",
        ]

    def test_only_blank_entries(self) -> None:
        with pytest.raises(NoValidUrls):
            validate_urls(["", "  ", "\n"])

    def test_all_offenders_named(self) -> None:
        with pytest.raises(InvalidUrlFormat) as excinfo:
            validate_urls(["a.test", "not a url", "http://", "b.test"])

        assert excinfo.value.offenders == ["not a url", "http://"]
        assert excinfo.value.message == "Invalid URL format: not a url, http://"


# ---------------------------------------------------------------------------
# scrape_page
# ---------------------------------------------------------------------------

class TestScrapePage:
    async def test_success_is_formatted(self, make_fetcher, page_a) -> None:
        page = await scrape_page(_A, make_fetcher({_A: page_a}))

        assert page.ok
        assert page.title == "Page A"
        assert page.description == "About A"
        assert page.content == _BLOCK_A

    async def test_fetch_failure_recorded_not_raised(self, make_fetcher) -> None:
        page = await scrape_page(_B, make_fetcher({_B: FetchError(_B, "503 Service Unavailable")}))

        assert not page.ok
        assert page.content == ""
        assert "503 Service Unavailable" in page.error

    async def test_unexpected_failure_recorded(self, make_fetcher) -> None:
        page = await scrape_page(_B, make_fetcher({_B: RuntimeError("parser exploded")}))
        assert page.error == "parser exploded"


# ---------------------------------------------------------------------------
# ingest_urls
# ---------------------------------------------------------------------------

class TestIngestUrls:
    async def test_no_valid_urls(self, make_fetcher) -> None:
        fetcher = make_fetcher({})
        result = await ingest_urls(["", "   "], fetcher=fetcher)

        assert result.success is False
        assert result.error_kind == "NoValidUrls"
        assert result.error == "Please enter at least one valid URL"
        assert fetcher.calls == []

    async def test_invalid_entry_blocks_every_fetch(self, make_fetcher, page_a) -> None:
        fetcher = make_fetcher({_A: page_a})
        result = await ingest_urls([_A, "not a url", "http://"], fetcher=fetcher)

        assert result.success is False
        assert result.error_kind == "InvalidUrlFormat"
        assert result.error == "Invalid URL format: not a url, http://"
        assert result.content == ""
        assert len(fetcher.calls) == 0

    async def test_all_fetches_fail(self, make_fetcher) -> None:
        fetcher = make_fetcher({_A: FetchError(_A, "refused"), _B: FetchError(_B, "refused")})
        result = await ingest_urls([_A, _B], fetcher=fetcher)

        assert result.success is False
        assert result.error_kind == "AllScrapesFailed"
        assert "different domains" in result.error
        assert result.content == ""
        assert result.metadata == []
        assert sorted(fetcher.calls) == [_A, _B]

    async def test_partial_failure_preserves_order(self, make_fetcher, page_a, page_c) -> None:
        fetcher = make_fetcher({_A: page_a, _C: page_c})
        result = await ingest_urls([_A, _B, _C], fetcher=fetcher)

        assert result.success is True
        assert result.content == _BLOCK_A + "\n\n" + _BLOCK_C
        assert [m.url for m in result.metadata] == [_A, _C]
        assert [m.title for m in result.metadata] == ["Page A", "Page C"]
        assert [p.url for p in result.failures] == [_B]
        assert result.urls == [_A, _B, _C]

    async def test_every_url_fetched_once(self, make_fetcher, page_a, page_c) -> None:
        fetcher = make_fetcher({_A: page_a, _C: page_c})
        await ingest_urls([_A, _B, _C], fetcher=fetcher)
        assert sorted(fetcher.calls) == [_A, _B, _C]

    async def test_metadata_timestamped(self, make_fetcher, page_a) -> None:
        before = datetime.now(timezone.utc)
        result = await ingest_urls([_A], fetcher=make_fetcher({_A: page_a}))

        stamp = result.metadata[0].last_scraped
        assert stamp.tzinfo is not None
        assert stamp >= before

    async def test_scheme_added_before_fetch(self, make_fetcher, page_a) -> None:
        fetcher = make_fetcher({"https://a.test": page_a})
        result = await ingest_urls(["a.test"], fetcher=fetcher)

        assert result.success is True
        assert fetcher.calls == ["https://a.test"]
        assert result.metadata[0].url == "https://a.test"

    async def test_unexpected_error_reported(self, make_fetcher, page_a) -> None:
        with patch("urlqa.rag.ingestor._aggregate", side_effect=RuntimeError("boom")):
            result = await ingest_urls([_A], fetcher=make_fetcher({_A: page_a}))

        assert result.success is False
        assert result.error_kind == "UnknownError"
        assert "boom" not in result.error

    async def test_end_to_end_through_relay(self, page_a) -> None:
        fetcher = PageFetcher([proxy_from_template("https://relay.test/raw?url={encoded}")])
        with respx.mock as mock:
            mock.get(host="relay.test", params={"url": "https://example.test"}).mock(
                return_value=httpx.Response(200, text=page_a)
            )
            result = await ingest_urls(["example.test"], fetcher=fetcher)

        assert result.success is True
        assert result.content.startswith("URL: https://example.test\nTITLE: Page A")
        assert result.metadata[0].description == "About A"
