"""An agent that searches the web and reads pages with its tools."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field

import httpx
from bs4 import BeautifulSoup

from kowalski.agent.base import BaseAgent
from kowalski.agent.errors import AgentError, AgentToolError
from kowalski.config import Config
from kowalski.tools.base import TaskType, ToolChain, ToolInput, ToolOutput
from kowalski.tools.browser import WebBrowser
from kowalski.tools.cache import ToolCache
from kowalski.tools.exceptions import ToolError
from kowalski.tools.scraper import WebScraper
from kowalski.tools.search import SearchProvider, SearchTool

logger = logging.getLogger(__name__)

RESULT_SELECTOR = ".result__body"
TITLE_SELECTOR = ".result__title, .result__a"
URL_SELECTOR = ".result__url"
SNIPPET_SELECTOR = ".result__snippet"
CONTENT_SELECTOR = "article, main, .content, .main-content, body"
META_SELECTOR = "meta[name][content], meta[property][content]"


@dataclass
class SearchHit:
    """One result found on a search results page."""

    title: str
    url: str
    snippet: str


@dataclass
class ProcessedPage:
    """The readable parts of a fetched page."""

    url: str
    title: str
    content: str
    metadata: dict[str, str] = field(default_factory=dict)


def parse_search_results(html: str) -> list[SearchHit]:
    """Extract search hits from a results page, falling back to absolute <link> elements."""
    soup = BeautifulSoup(html, "html.parser")
    for link in soup.select("link"):
        logger.debug("Link: %r", link.get("href"))

    hits: list[SearchHit] = []
    for element in soup.select(RESULT_SELECTOR):
        title_el = element.select_one(TITLE_SELECTOR)
        title = title_el.get_text() if title_el is not None else ""

        url_el = element.select_one(URL_SELECTOR)
        if url_el is not None:
            url = url_el.get_text()
        else:
            href = title_el.get("href") if title_el is not None else None
            url = href if isinstance(href, str) else ""

        snippet_el = element.select_one(SNIPPET_SELECTOR)
        snippet = snippet_el.get_text() if snippet_el is not None else ""

        if title:
            hits.append(SearchHit(title.strip(), url.strip(), snippet.strip()))

    if not hits:
        logger.info("No results found with primary selectors, trying alternatives")
        for link in soup.select("link"):
            href = link.get("href")
            if not isinstance(href, str):
                continue
            text = link.get_text()
            if href.startswith("http") and text.strip():
                hits.append(SearchHit(text.strip(), href, ""))

    logger.debug("Parsed %d search results", len(hits))
    return hits


def parse_page(url: str, html: str) -> ProcessedPage:
    """Extract the title, main text and meta tags of a page.

    A document without a body element is treated as if all of it were the body.
    """
    soup = BeautifulSoup(html, "html.parser")
    title_el = soup.select_one("title")
    title = title_el.get_text() if title_el is not None else ""
    logger.info("Title extracted: %s", title)

    elements: list = list(soup.select(CONTENT_SELECTOR))
    if soup.body is None:
        elements.insert(0, soup)
    content = "\n".join(element.get_text() for element in elements).strip()

    metadata: dict[str, str] = {}
    for meta in soup.select(META_SELECTOR):
        name = meta.get("name") or meta.get("property")
        value = meta.get("content")
        if isinstance(name, str) and isinstance(value, str):
            metadata[name] = value

    logger.info("Metadata entries: %d", len(metadata))
    return ProcessedPage(url=url, title=title, content=content, metadata=metadata)


class ToolingAgent(BaseAgent):
    """Uses a browser, a search tool and a scraper to gather information."""

    def __init__(self, config: Config, client: httpx.AsyncClient | None = None) -> None:
        super().__init__(
            config,
            "Tooling Agent",
            "A versatile agent that uses various tools to process information",
            client,
        )
        self.chain = ToolChain()
        self.chain.add_tool(WebBrowser(config), [TaskType.BROWSE_DYNAMIC])
        self.chain.add_tool(
            SearchTool(SearchProvider.DUCKDUCKGO, config.search.api_key or ""),
            [TaskType.SEARCH],
        )
        self.chain.add_tool(WebScraper(), [TaskType.SCRAP_STATIC])
        self.cache = ToolCache()

    async def _run(self, query: str) -> ToolOutput:
        try:
            return await self.chain.execute(ToolInput(query))
        except ToolError as exc:
            raise AgentToolError(exc) from exc

    async def prepare_content(self, content: str) -> str:
        """Replace a URL or a search request with what the tools return for it."""
        if content.startswith("http") or "search:" in content:
            return (await self._run(content)).content
        return content

    async def search(self, query: str) -> list[SearchHit]:
        """Run a query through the tools and parse the results page."""
        logger.debug("Searching for: %s", query)
        output = await self._run(query)
        return parse_search_results(output.content)

    async def fetch_page(self, url: str) -> ProcessedPage:
        """Fetch a page through the tools and extract its readable parts."""
        output = await self._run(url)
        return parse_page(url, output.content)

    async def collect_data(self, urls: Iterable[str]) -> list[ProcessedPage]:
        """Fetch several pages, leaving out those that fail."""
        pages: list[ProcessedPage] = []
        for url in urls:
            try:
                pages.append(await self.fetch_page(url))
            except AgentError as exc:
                logger.debug("Skipping %s: %s", url, exc)
        return pages