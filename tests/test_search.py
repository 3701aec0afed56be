import httpx
import pytest
import respx

from kowalski.tools.base import ToolInput
from kowalski.tools.exceptions import SearchError, ToolRequestError
from kowalski.tools.search import SearchProvider, SearchResult, SearchTool


def test_duckduckgo_base_url():
    assert SearchProvider.DUCKDUCKGO.base_url() == "https://duckduckgo.com/html"


def test_only_google_requires_api_key():
    assert SearchProvider.GOOGLE_CUSTOM_SEARCH.requires_api_key() is True
    assert SearchProvider.DUCKDUCKGO.requires_api_key() is False
    assert SearchProvider.BING.requires_api_key() is False
    assert SearchProvider.BRAVE.requires_api_key() is False
    assert SearchProvider.SEARX.requires_api_key() is False


def test_every_provider_uses_q():
    assert SearchProvider.DUCKDUCKGO.query_param() == "q"
    assert SearchProvider.BING.query_param() == "q"
    assert SearchProvider.BRAVE.query_param() == "q"
    assert SearchProvider.SEARX.query_param() == "q"
    assert SearchProvider.GOOGLE_CUSTOM_SEARCH.query_param() == "q"


def test_provider_base_urls():
    assert SearchProvider.BING.base_url() == "https://www.bing.com/search"
    assert SearchProvider.BRAVE.base_url() == "https://search.brave.com/search"
    assert SearchProvider.SEARX.base_url() == "https://searx.be/search"
    assert (
        SearchProvider.GOOGLE_CUSTOM_SEARCH.base_url()
        == "https://www.googleapis.com/customsearch/v1"
    )


def test_selectors_for_bing():
    tool = SearchTool(SearchProvider.BING)
    assert tool.selectors() == (".b_algo", "h2", ".b_caption p")


def test_selectors_for_duckduckgo():
    tool = SearchTool(SearchProvider.DUCKDUCKGO)
    assert tool.selectors()[1] == ".result__title,.result__a"


def test_search_result_fields():
    hit = SearchResult(title="t", url="https://example.com", snippet="s")
    assert (hit.title, hit.url, hit.snippet) == ("t", "https://example.com", "s")


@pytest.mark.asyncio
async def test_execute_encodes_query():
    tool = SearchTool(SearchProvider.DUCKDUCKGO)
    with respx.mock:
        route = respx.route(method="GET", host="duckduckgo.com", path="/html/").mock(
            return_value=httpx.Response(200, text="<html>results</html>")
        )
        output = await tool.execute(ToolInput("rust async"))
    assert output.content == "<html>results</html>"
    assert output.source == "https://duckduckgo.com/html/?q=rust%20async"
    assert route.calls.last.request.url.params["q"] == "rust async"


@pytest.mark.asyncio
async def test_execute_failure_raises_request_error():
    tool = SearchTool(SearchProvider.BING)
    with respx.mock:
        respx.route(method="GET", host="www.bing.com").mock(
            side_effect=httpx.ConnectError("unreachable")
        )
        with pytest.raises(ToolRequestError):
            await tool.execute(ToolInput("query"))


@pytest.mark.asyncio
async def test_search_sends_api_key_when_required():
    tool = SearchTool(SearchProvider.GOOGLE_CUSTOM_SEARCH, api_key="placeholder")
    with respx.mock:
        route = respx.route(
            method="GET", host="www.googleapis.com", path="/customsearch/v1"
        ).mock(return_value=httpx.Response(200, text="{}"))
        body = await tool.search("rust")
    assert body == "{}"
    params = route.calls.last.request.url.params
    assert params["q"] == "rust"
    assert params["key"] == "placeholder"


@pytest.mark.asyncio
async def test_search_omits_key_when_not_required():
    tool = SearchTool(SearchProvider.SEARX, api_key="placeholder")
    with respx.mock:
        route = respx.route(method="GET", host="searx.be", path="/search").mock(
            return_value=httpx.Response(200, text="page")
        )
        body = await tool.search("rust")
    assert body == "page"
    assert "key" not in route.calls.last.request.url.params


@pytest.mark.asyncio
async def test_search_failure_raises_search_error():
    tool = SearchTool(SearchProvider.BRAVE)
    with respx.mock:
        respx.route(method="GET", host="search.brave.com").mock(
            side_effect=httpx.ConnectError("unreachable")
        )
        with pytest.raises(SearchError):
            await tool.search("rust")