"""URL ingestion pipeline.

``ingest_urls`` turns a batch of user-entered URL strings into one context
string:

    validate all → (fetch → extract → format) per URL, concurrently → join

Validation is all-or-nothing and happens before any request is sent.  The
fan-out is partial-failure tolerant: a page that cannot be fetched is logged
and left out, and the batch only fails when no page succeeded.
"""

from __future__ import annotations

import asyncio
import logging
from datetime import datetime, timezone
from typing import Sequence

import httpx

from urlqa.errors import (
    AllScrapesFailed,
    InvalidUrlFormat,
    NoValidUrls,
    UnknownError,
    UrlQaError,
)
from urlqa.rag.models import IngestResult
from urlqa.scraper.extractor import extract_description, extract_text, extract_title, parse_html
from urlqa.scraper.fetcher import PageFetcher
from urlqa.scraper.formatter import format_content
from urlqa.scraper.models import ScrapedPage, WebsiteMetadata
from urlqa.scraper.urls import is_absolute_url, normalise_scheme

logger = logging.getLogger(__name__)

_UNEXPECTED_MESSAGE = "An error occurred while processing the URLs. Please try again."


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------

def validate_urls(raw_urls: Sequence[str]) -> list[str]:
    """Return the normalised form of every non-blank entry in *raw_urls*.

    Raises:
        NoValidUrls: If nothing is left after dropping blank entries.
        InvalidUrlFormat: If any entry fails to parse; names all offenders.
    """
    entries = [u.strip() for u in raw_urls if u and u.strip()]
    if not entries:
        raise NoValidUrls()

    normalised: list[str] = []
    offenders: list[str] = []
    for entry in entries:
        url = normalise_scheme(entry)
        if is_absolute_url(url):
            normalised.append(url)
        else:
            offenders.append(entry)

    if offenders:
        raise InvalidUrlFormat(offenders)
    return normalised


async def scrape_page(
    url: str,
    fetcher: PageFetcher,
    client: httpx.AsyncClient | None = None,
) -> ScrapedPage:
    """Fetch, extract and format a single page.  Never raises.

    Any failure is recorded on the returned page's ``error`` field.
    """
    try:
        html = await fetcher.fetch(url, client=client)
        soup = parse_html(html)
        title = extract_title(soup)
        description = extract_description(soup)
        text = extract_text(soup)
    except Exception as exc:  # noqa: BLE001
        reason = getattr(exc, "message", None) or str(exc) or "Unknown error occurred"
        logger.warning("[ingest] ✗ %s: %s", url, reason)
        return ScrapedPage(url=url, error=reason)

    return ScrapedPage(
        url=url,
        title=title,
        description=description,
        content=format_content(url, title, description, text),
    )


async def _scrape_all(urls: list[str], fetcher: PageFetcher) -> list[ScrapedPage]:
    """Scrape every URL concurrently and wait for all of them to settle."""
    async with httpx.AsyncClient(follow_redirects=True) as client:
        settled = await asyncio.gather(
            *(scrape_page(url, fetcher, client) for url in urls),
            return_exceptions=True,
        )

    pages: list[ScrapedPage] = []
    for url, outcome in zip(urls, settled):
        if isinstance(outcome, BaseException):
            logger.warning("[ingest] ✗ %s: %r", url, outcome)
            pages.append(ScrapedPage(url=url, error=str(outcome) or repr(outcome)))
        else:
            pages.append(outcome)
    return pages


def _aggregate(urls: list[str], pages: list[ScrapedPage]) -> IngestResult:
    succeeded = [p for p in pages if p.ok]
    failed = [p for p in pages if not p.ok]

    if not succeeded:
        raise AllScrapesFailed()

    scraped_at = datetime.now(timezone.utc)
    metadata = [
        WebsiteMetadata(
            url=p.url,
            title=p.title,
            description=p.description,
            last_scraped=scraped_at,
        )
        for p in succeeded
    ]
    return IngestResult(
        success=True,
        content="\n\n".join(p.content for p in succeeded),
        urls=urls,
        metadata=metadata,
        failures=failed,
    )


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

async def ingest_urls(
    raw_urls: Sequence[str],
    fetcher: PageFetcher | None = None,
) -> IngestResult:
    """Build one context string from every page in *raw_urls*.

    Pipeline:
        1. Drop blank entries, normalise schemes and validate every URL.  A
           single invalid entry fails the batch before any fetch is issued.
        2. Fetch, extract and format all pages concurrently.  Each page
           settles on its own; failures never cancel siblings.
        3. Join the successful pages in input order, separated by a blank
           line, and record a :class:`WebsiteMetadata` entry for each.

    Args:
        raw_urls: URL strings as entered by the user.
        fetcher: Relay fetcher to use.  Defaults to the configured chain.

    Returns:
        An :class:`IngestResult`.  Failures are reported through
        ``success=False`` with ``error``/``error_kind`` set; this coroutine
        does not raise for pipeline failures.
    """
    try:
        urls = validate_urls(raw_urls)
        fetcher = fetcher or PageFetcher()

        logger.info("[ingest] Scraping %d URL(s) …", len(urls))
        pages = await _scrape_all(urls, fetcher)
        result = _aggregate(urls, pages)
    except UrlQaError as exc:
        logger.info("[ingest] %s: %s", exc.kind, exc.message)
        return IngestResult(success=False, error=exc.message, error_kind=exc.kind)
    except Exception:  # noqa: BLE001
        logger.exception("[ingest] unexpected failure")
        return IngestResult(
            success=False, error=_UNEXPECTED_MESSAGE, error_kind=UnknownError.kind
        )

    logger.info(
        "[ingest] ✓ %d/%d page(s) scraped, %d characters of context.",
        len(result.metadata),
        len(urls),
        len(result.content),
    )
    return result
