"""MediaWikiClient 유닛 테스트 (httpx.MockTransport)"""
import httpx
import pytest

from src.core.exceptions import ContentSourceException, NetworkTimeoutException
from src.crawlers.wiki_client import MediaWikiClient

API_URL = "https://wiki.test/w/api.php"


def _client(handler) -> MediaWikiClient:
    http = httpx.Client(transport=httpx.MockTransport(handler))
    return MediaWikiClient(API_URL, timeout_s=1.0, client=http)


def test_search_sends_query_params():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen.update(request.url.params)
        return httpx.Response(200, json={"query": {"search": [{"title": "Barack Obama"}, {"title": "Obama"}]}})

    assert _client(handler).search("obama", 2) == ["Barack Obama", "Obama"]
    assert seen["action"] == "query"
    assert seen["list"] == "search"
    assert seen["srsearch"] == "obama"
    assert seen["format"] == "json"


def test_search_zero_limit_skips_request():
    def handler(request):
        raise AssertionError("no request expected")

    assert _client(handler).search("obama", 0) == []


def test_links_follow_continue_tokens():
    def handler(request: httpx.Request) -> httpx.Response:
        if "plcontinue" not in request.url.params:
            return httpx.Response(200, json={
                "continue": {"plcontinue": "next", "continue": "||"},
                "query": {"pages": [{"title": "A", "links": [{"title": "B"}]}]},
            })
        return httpx.Response(200, json={"query": {"pages": [{"title": "A", "links": [{"title": "C"}]}]}})

    assert _client(handler).links_on_page("A") == ["B", "C"]


def test_page_text_and_missing_page():
    def handler(request: httpx.Request) -> httpx.Response:
        if request.url.params["titles"] == "Missing":
            return httpx.Response(200, json={"query": {"pages": [{"title": "Missing", "missing": True}]}})
        return httpx.Response(200, json={"query": {"pages": [{
            "title": "A",
            "revisions": [{"slots": {"main": {"content": "hello"}}}],
        }]}})

    client = _client(handler)
    assert client.get_page_text("A") == "hello"
    assert client.get_page_text("Missing") == ""
    assert client.exists("A") is True
    assert client.exists("Missing") is False


def test_last_editor_and_categories():
    def handler(request: httpx.Request) -> httpx.Response:
        params = request.url.params
        if params.get("list") == "categorymembers":
            assert params["cmtitle"] == "Category:Cats"
            return httpx.Response(200, json={"query": {"categorymembers": [{"title": "Tom"}]}})
        if params.get("prop") == "categories":
            return httpx.Response(200, json={"query": {"pages": [{"categories": [{"title": "Category:Cats"}]}]}})
        return httpx.Response(200, json={"query": {"pages": [{"revisions": [{"user": "Alice"}]}]}})

    client = _client(handler)
    assert client.category_members("Category:Cats") == ["Tom"]
    assert client.categories_on_page("Tom") == ["Category:Cats"]
    assert client.last_editor("Tom") == "Alice"


def test_timeout_maps_to_network_timeout():
    def handler(request):
        raise httpx.ReadTimeout("slow", request=request)

    with pytest.raises(NetworkTimeoutException):
        _client(handler).links_on_page("A")


def test_http_error_status():
    with pytest.raises(ContentSourceException) as exc:
        _client(lambda request: httpx.Response(503)).search("x", 1)
    assert exc.value.error_code == "CONTENT_SOURCE_HTTP_ERROR"


def test_api_error_payload():
    def handler(request):
        return httpx.Response(200, json={"error": {"code": "badvalue", "info": "bad"}})

    with pytest.raises(ContentSourceException) as exc:
        _client(handler).search("x", 1)
    assert exc.value.error_code == "CONTENT_SOURCE_API_ERROR"


def test_invalid_json():
    with pytest.raises(ContentSourceException) as exc:
        _client(lambda request: httpx.Response(200, text="<html>")).search("x", 1)
    assert exc.value.error_code == "CONTENT_SOURCE_PARSE_ERROR"


def test_title_separator_is_an_invalid_page():
    def handler(request):
        raise AssertionError("no request expected")

    client = _client(handler)
    assert client.get_page_text("A|B") == ""
    assert client.links_on_page("A|B") == []
    assert client.categories_on_page("A|B") == []
    assert client.category_members("Category:A|B") == []
    assert client.last_editor("A|B") == ""
    assert client.exists("A|B") is False
