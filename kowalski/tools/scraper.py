"""Polite, rate-limited scraping of static pages."""

from __future__ import annotations

import asyncio
import math
import time
from collections.abc import AsyncIterator, Awaitable, Callable
from contextlib import asynccontextmanager

import httpx
from bs4 import BeautifulSoup

from kowalski.tools.base import Tool, ToolInput, ToolOutput
from kowalski.tools.exceptions import ToolRequestError

DEFAULT_USER_AGENT = "Kowalski Research Assistant"
DEFAULT_REQUESTS_PER_SECOND = 2
UNWANTED_SELECTORS = (
    "script",
    "style",
    "noscript",
    "iframe",
    "nav",
    "footer",
    "header",
    ".advertisement",
    "#cookie-notice",
)


def strip_unwanted(html: str) -> str:
    """Return the HTML with scripts, styles, navigation, ads and cookie notices removed."""
    soup = BeautifulSoup(html, "html.parser")
    for element in soup.select(", ".join(UNWANTED_SELECTORS)):
        element.extract()
    return str(soup)


class RateLimiter:
    """Allows a burst of up to per_second requests, refilled at per_second a second."""

    def __init__(
        self,
        per_second: int,
        *,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], Awaitable[object]] = asyncio.sleep,
    ) -> None:
        if per_second < 1:
            raise ValueError("per_second must be at least 1")
        self.per_second = per_second
        self._clock = clock
        self._sleep = sleep
        self._tokens = float(per_second)
        self._updated = clock()
        self._lock = asyncio.Lock()

    def _refill(self) -> None:
        now = self._clock()
        elapsed = max(now - self._updated, 0.0)
        self._tokens = min(float(self.per_second), self._tokens + elapsed * self.per_second)
        self._updated = now

    async def until_ready(self) -> None:
        """Wait until another request is allowed, then take it."""
        async with self._lock:
            self._refill()
            if self._tokens < 1:
                await self._sleep((1 - self._tokens) / self.per_second)
                self._refill()
            self._tokens -= 1


class WebScraper(Tool):
    """Downloads pages at a limited rate and strips boilerplate markup."""

    name = "web_scraper"
    description = (
        "Scrapes web content with rate limiting and polite behavior, because manners matter"
    )

    def __init__(self, client: httpx.AsyncClient | None = None) -> None:
        self.user_agent = DEFAULT_USER_AGENT
        self.rate_limiter = RateLimiter(DEFAULT_REQUESTS_PER_SECOND)
        self._client = client

    def with_rate_limit(self, seconds: float) -> WebScraper:
        """Allow one request per the given number of seconds, rounded up to whole requests a second."""
        if seconds <= 0:
            raise ValueError("seconds must be positive")
        self.rate_limiter = RateLimiter(max(1, math.ceil(1.0 / seconds)))
        return self

    def with_user_agent(self, user_agent: str) -> WebScraper:
        """Send the given User-Agent with every request."""
        self.user_agent = user_agent
        self._client = None
        return self

    @asynccontextmanager
    async def _session(self) -> AsyncIterator[httpx.AsyncClient]:
        if self._client is not None:
            yield self._client
            return
        async with httpx.AsyncClient(
            headers={"User-Agent": self.user_agent}, follow_redirects=True
        ) as client:
            yield client

    async def scrape_url(self, url: str) -> str:
        """Download a page after waiting for the rate limiter and strip unwanted elements."""
        await self.rate_limiter.until_ready()
        try:
            async with self._session() as client:
                response = await client.get(url)
                html = response.text
        except httpx.HTTPError as exc:
            raise ToolRequestError(exc) from exc
        return strip_unwanted(html)

    async def execute(self, tool_input: ToolInput) -> ToolOutput:
        """Scrape the page named by the query."""
        url = tool_input.query
        content = await self.scrape_url(url)
        return ToolOutput(content=content, metadata={}, source=url)