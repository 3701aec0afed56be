"""Fetch web pages and extract their readable text."""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import httpx
from bs4 import BeautifulSoup

from kowalski.config import Config
from kowalski.tools.base import Tool, ToolInput, ToolOutput
from kowalski.tools.exceptions import ScrapingError, ToolRequestError

logger = logging.getLogger(__name__)

USER_AGENT = "Kowalski/1.0"
TIMEOUT_SECONDS = 30.0
CONTENT_SELECTORS = (
    "article",
    "main",
    ".content",
    "#content",
    ".post-content",
    ".article-content",
)


def extract_content(html: str) -> str:
    """Return the text of the main content area, falling back to the body."""
    soup = BeautifulSoup(html, "html.parser")
    for selector in CONTENT_SELECTORS:
        element = soup.select_one(selector)
        if element is not None:
            return " ".join(element.strings)
    root = soup.body
    if root is None and soup.find(True) is not None:
        root = soup
    if root is None:
        raise ScrapingError("No content found")
    return " ".join(root.strings)


class WebBrowser(Tool):
    """Fetches a page and returns its main text."""

    name = "web_browser"
    description = "Fetches and processes web pages, because copy-pasting is too mainstream"

    def __init__(self, config: Config, client: httpx.AsyncClient | None = None) -> None:
        self.config = config
        self.user_agent = USER_AGENT
        self._client = client

    @asynccontextmanager
    async def _session(self) -> AsyncIterator[httpx.AsyncClient]:
        if self._client is not None:
            yield self._client
            return
        async with httpx.AsyncClient(
            headers={"User-Agent": self.user_agent},
            timeout=TIMEOUT_SECONDS,
            follow_redirects=True,
        ) as client:
            yield client

    async def execute(self, tool_input: ToolInput) -> ToolOutput:
        """Download the page named by the query and extract its text."""
        url = tool_input.query
        logger.debug("Executing web browser tool with URL: %s", url)
        try:
            async with self._session() as client:
                response = await client.get(url)
                html = response.text
        except httpx.HTTPError as exc:
            raise ToolRequestError(exc) from exc
        content = extract_content(html)
        logger.debug("Content: %r", content)
        return ToolOutput(content=content, metadata={}, source=url)