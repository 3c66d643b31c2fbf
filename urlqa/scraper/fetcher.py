"""HTTP fetcher that relays page requests through an ordered proxy chain.

Each :data:`ProxyStrategy` turns a target URL into the URL actually
requested.  :class:`PageFetcher` tries the strategies one after another and
returns the body of the first 2xx response; the remaining strategies are
never contacted.  Attempts are sequential on purpose so a healthy first relay
is the only one that spends quota.
"""

from __future__ import annotations

import logging
from typing import Callable, Sequence
from urllib.parse import quote

import httpx

from urlqa.config import settings
from urlqa.errors import FetchError
from urlqa.scraper.urls import normalise_scheme

logger = logging.getLogger(__name__)

ProxyStrategy = Callable[[str], str]


def proxy_from_template(template: str) -> ProxyStrategy:
    """Build a strategy from a ``{url}`` / ``{encoded}`` template string."""

    def strategy(url: str) -> str:
        return template.format(url=url, encoded=quote(url, safe=""))

    strategy.__name__ = f"proxy<{template}>"
    return strategy


def default_strategies() -> list[ProxyStrategy]:
    """Return the configured relay chain from ``settings.proxy_templates``."""
    return [proxy_from_template(t) for t in settings.proxy_templates]


class PageFetcher:
    """Fetch raw HTML through the first working proxy strategy.

    Args:
        strategies: Ordered relay strategies.  Defaults to the configured
            chain (see :func:`default_strategies`).
        user_agent: Browser identification sent with every attempt.
    """

    def __init__(
        self,
        strategies: Sequence[ProxyStrategy] | None = None,
        user_agent: str | None = None,
    ) -> None:
        self._strategies = list(strategies) if strategies is not None else default_strategies()
        if not self._strategies:
            raise ValueError("PageFetcher needs at least one proxy strategy")
        self._headers = {"User-Agent": user_agent or settings.user_agent}

    async def _attempt(self, client: httpx.AsyncClient, target: str) -> str:
        response = await client.get(target, headers=self._headers)
        if not response.is_success:
            raise httpx.HTTPStatusError(
                f"{response.status_code} {response.reason_phrase}",
                request=response.request,
                response=response,
            )
        return response.text

    async def fetch(self, url: str, client: httpx.AsyncClient | None = None) -> str:
        """Return the HTML of *url*.

        Args:
            url: Page to fetch; a missing scheme is replaced by ``https://``.
            client: Shared client to issue requests on.  A private client is
                opened (and closed) when omitted.

        Raises:
            FetchError: If every strategy failed.  Carries the last failure.
        """
        url = normalise_scheme(url)
        if client is None:
            async with httpx.AsyncClient(follow_redirects=True) as own_client:
                return await self._fetch_with(own_client, url)
        return await self._fetch_with(client, url)

    async def _fetch_with(self, client: httpx.AsyncClient, url: str) -> str:
        last_error = "no proxy strategy was attempted"
        total = len(self._strategies)
        for index, strategy in enumerate(self._strategies, start=1):
            try:
                target = strategy(url)
                html = await self._attempt(client, target)
            except (httpx.HTTPError, httpx.InvalidURL) as exc:
                last_error = str(exc) or exc.__class__.__name__
                logger.warning(
                    "[fetch] %s via strategy %d/%d failed: %s", url, index, total, last_error
                )
                continue
            logger.info("[fetch] %s via strategy %d/%d", url, index, total)
            return html

        raise FetchError(url, last_error)
