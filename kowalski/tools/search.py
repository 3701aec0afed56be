"""Web search through several public search providers."""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from dataclasses import dataclass
from enum import Enum
from urllib.parse import quote

import httpx

from kowalski.tools.base import Tool, ToolInput, ToolOutput
from kowalski.tools.exceptions import SearchError, ToolRequestError

logger = logging.getLogger(__name__)

BROWSER_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/91.0.4472.124 Safari/537.36"
)


class SearchProvider(Enum):
    """A search engine that can be queried over HTTP."""

    DUCKDUCKGO = "duckduckgo"
    BING = "bing"
    BRAVE = "brave"
    QWANT = "qwant"
    SEARX = "searx"
    GOOGLE_CUSTOM_SEARCH = "google_custom_search"

    def base_url(self) -> str:
        """Return the endpoint queries are sent to."""
        return _BASE_URLS[self]

    def query_param(self) -> str:
        """Return the name of the query parameter."""
        return "q"

    def requires_api_key(self) -> bool:
        """Whether requests must carry an API key."""
        return self is SearchProvider.GOOGLE_CUSTOM_SEARCH


_BASE_URLS: dict[SearchProvider, str] = {
    SearchProvider.DUCKDUCKGO: "https://duckduckgo.com/html",
    SearchProvider.BING: "https://www.bing.com/search",
    SearchProvider.BRAVE: "https://search.brave.com/search",
    SearchProvider.QWANT: "https://www.qwant.com",
    SearchProvider.SEARX: "https://searx.be/search",
    SearchProvider.GOOGLE_CUSTOM_SEARCH: "https://www.googleapis.com/customsearch/v1",
}

_SELECTORS: dict[SearchProvider, tuple[str, str, str]] = {
    SearchProvider.DUCKDUCKGO: (
        ".result__body,.nrn-react-div,.web-result",
        ".result__title,.result__a",
        ".result__snippet",
    ),
    SearchProvider.BING: (".b_algo", "h2", ".b_caption p"),
    SearchProvider.BRAVE: (".snippet", ".title", ".description"),
    SearchProvider.QWANT: (".web-result", ".title", ".desc"),
    SearchProvider.SEARX: (".result", ".result-title", ".result-content"),
    SearchProvider.GOOGLE_CUSTOM_SEARCH: (".g", "h3", ".snippet"),
}


@dataclass
class SearchResult:
    """One hit from a search results page."""

    title: str
    url: str
    snippet: str


class SearchTool(Tool):
    """Runs queries against a search provider and returns the raw results page."""

    name = "search"
    description = "Searches the web using various search providers"

    def __init__(
        self,
        provider: SearchProvider,
        api_key: str = "",
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self.provider = provider
        self.api_key = api_key
        self._client = client

    @asynccontextmanager
    async def _session(self) -> AsyncIterator[httpx.AsyncClient]:
        if self._client is not None:
            yield self._client
            return
        async with httpx.AsyncClient(
            headers={"User-Agent": BROWSER_USER_AGENT}, follow_redirects=True
        ) as client:
            yield client

    def selectors(self) -> tuple[str, str, str]:
        """Return the CSS selectors for result blocks, titles and snippets."""
        return _SELECTORS[self.provider]

    async def search(self, query: str) -> str:
        """Query the provider and return the response body."""
        params = {self.provider.query_param(): query}
        if self.provider.requires_api_key():
            params["key"] = self.api_key
        try:
            async with self._session() as client:
                response = await client.get(self.provider.base_url(), params=params)
                return response.text
        except httpx.HTTPError as exc:
            raise SearchError(exc) from exc

    async def execute(self, tool_input: ToolInput) -> ToolOutput:
        """Search for the query and return the results page."""
        url = (
            f"{self.provider.base_url()}/?{self.provider.query_param()}="
            f"{quote(tool_input.query, safe='')}"
        )
        logger.debug("URL: %s", url)
        try:
            async with self._session() as client:
                response = await client.get(url)
                body = response.text
        except httpx.HTTPError as exc:
            raise ToolRequestError(exc) from exc
        return ToolOutput(content=body, metadata={}, source=url)