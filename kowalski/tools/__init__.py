"""Web tools: search, browsing, scraping, routing and caching."""

__all__ = ["base", "browser", "cache", "exceptions", "scraper", "search"]