"""Errors raised by the web tools."""

from __future__ import annotations


class ToolError(Exception):
    """Base class for tool failures."""

    prefix = ""

    def __init__(self, detail: object = "") -> None:
        self.detail = str(detail)
        super().__init__(self.detail)

    def __str__(self) -> str:
        return f"{self.prefix}: {self.detail}" if self.prefix else self.detail


class ToolRequestError(ToolError):
    """An HTTP request made by a tool failed."""

    prefix = "Request error"


class NoOutputError(ToolError):
    """A tool finished without producing output."""

    def __init__(self) -> None:
        super().__init__("")

    def __str__(self) -> str:
        return "No output produced"


class CacheError(ToolError):
    """The tool cache failed."""

    prefix = "Cache error"


class RateLimitError(ToolError):
    """A rate limit prevented the request."""

    prefix = "Rate limit error"


class ScrapingError(ToolError):
    """Content could not be extracted from a page."""

    prefix = "Scraping error"


class BrowserError(ToolError):
    """The browser tool failed."""

    prefix = "Browser error"


class SearchError(ToolError):
    """A web search failed."""

    prefix = "Search error"


class NoSuitableToolError(ToolError):
    """No registered tool handles the requested task."""

    prefix = "No suitable tool found"