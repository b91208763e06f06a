import httpx
import pytest

from fetch.http_client import (
    fetch_url,
    fetch_resource,
    default_headers,
    FetchSuccess,
    TransportFailure,
    DEFAULT_USER_AGENT,
)


@pytest.fixture
def mock_transport(monkeypatch):
    """Route every AsyncClient created by the fetch layer through a MockTransport."""
    real_client = httpx.AsyncClient

    def install(handler):
        def factory(**kwargs):
            return real_client(transport=httpx.MockTransport(handler), **kwargs)
        monkeypatch.setattr(httpx, "AsyncClient", factory)

    return install


def test_default_headers_merge():
    assert default_headers() == {"User-Agent": DEFAULT_USER_AGENT}
    merged = default_headers({"Cookie": "a=1", "User-Agent": "custom"})
    assert merged == {"User-Agent": "custom", "Cookie": "a=1"}


@pytest.mark.asyncio
async def test_fetch_url_follows_redirects(mock_transport):
    def handler(request):
        if request.url.host == "example.com":
            return httpx.Response(301, headers={"Location": "https://www.example.com/home"})
        return httpx.Response(200, text="<html>ok</html>")

    mock_transport(handler)
    response = await fetch_url("https://example.com", headers={"User-Agent": "test"})

    assert response.status_code == 200
    assert str(response.url) == "https://www.example.com/home"
    assert response.text == "<html>ok</html>"


@pytest.mark.asyncio
async def test_fetch_url_returns_error_statuses(mock_transport):
    mock_transport(lambda request: httpx.Response(404, text="missing"))
    response = await fetch_url("https://example.com")

    assert response.status_code == 404


@pytest.mark.asyncio
async def test_fetch_url_raises_on_transport_error(mock_transport):
    def handler(request):
        raise httpx.ConnectError("Connection refused", request=request)

    mock_transport(handler)
    with pytest.raises(httpx.RequestError):
        await fetch_url("https://example.com")


@pytest.mark.asyncio
async def test_fetch_resource_success(mock_transport):
    def handler(request):
        assert request.headers["User-Agent"] == "scanner"
        return httpx.Response(200, text="User-agent: *", headers={"Content-Type": "text/plain"})

    mock_transport(handler)
    outcome = await fetch_resource("https://example.com/robots.txt", headers={"User-Agent": "scanner"})

    assert isinstance(outcome, FetchSuccess)
    assert outcome.ok
    assert outcome.text == "User-agent: *"
    assert outcome.headers["content-type"] == "text/plain"


@pytest.mark.asyncio
async def test_fetch_resource_not_found_is_not_a_failure(mock_transport):
    mock_transport(lambda request: httpx.Response(404, text="nope"))
    outcome = await fetch_resource("https://example.com/sitemap.xml")

    assert isinstance(outcome, FetchSuccess)
    assert not outcome.ok
    assert outcome.reason == "Not Found"


@pytest.mark.asyncio
@pytest.mark.parametrize("error", [httpx.ConnectError, httpx.ReadTimeout])
async def test_fetch_resource_transport_failure(mock_transport, error):
    def handler(request):
        raise error("boom", request=request)

    mock_transport(handler)
    outcome = await fetch_resource("https://example.com/robots.txt")

    assert outcome == TransportFailure(url="https://example.com/robots.txt", cause="boom")
