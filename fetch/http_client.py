import httpx
import logging
from dataclasses import dataclass, field
from typing import Optional, Dict, Union

# Timeout configuration (in seconds)
MAIN_PAGE_TIMEOUT = 15.0
AUX_TIMEOUT = 5.0
DEFAULT_CONNECT_TIMEOUT = 5.0

DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/91.0.4472.124 Safari/537.36"
)


@dataclass(frozen=True)
class FetchSuccess:
    """A completed HTTP exchange, whatever its status code."""
    url: str  # final URL after redirects
    status_code: int
    reason: str
    headers: Dict[str, str] = field(default_factory=dict)
    text: str = ""

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300


@dataclass(frozen=True)
class TransportFailure:
    """The exchange never completed (DNS, connection, TLS, timeout)."""
    url: str
    cause: str


FetchOutcome = Union[FetchSuccess, TransportFailure]


def default_headers(custom_headers: Optional[Dict[str, str]] = None) -> Dict[str, str]:
    headers = {"User-Agent": DEFAULT_USER_AGENT}
    if custom_headers:
        headers.update(custom_headers)
    return headers


async def fetch_url(
    url: str,
    timeout: Optional[float] = None,
    headers: Optional[Dict[str, str]] = None,
    follow_redirects: bool = True,
) -> httpx.Response:
    """
    Fetches a URL with a bounded timeout.

    Args:
        url: The URL to fetch
        timeout: Total request timeout in seconds (default: 15s)
        headers: Optional dictionary of HTTP headers
        follow_redirects: Whether redirects are followed (default: True)

    Returns:
        httpx.Response object; non-2xx responses are returned, not raised

    Raises:
        httpx.RequestError on transport failure, including timeouts
    """
    logger = logging.getLogger(__name__)
    total = timeout or MAIN_PAGE_TIMEOUT
    logger.debug(f"HTTP GET {url} (timeout: {total}s)")

    timeout_config = httpx.Timeout(
        timeout=total,
        connect=min(total, DEFAULT_CONNECT_TIMEOUT)
    )

    try:
        async with httpx.AsyncClient(timeout=timeout_config, follow_redirects=follow_redirects) as client:
            response = await client.get(url, headers=headers)
            logger.debug(f"HTTP {response.status_code} {url} ({len(response.text)} bytes)")
            # Don't raise for status - callers handle error codes
            return response
    except httpx.TimeoutException as e:
        logger.warning(f"HTTP timeout for {url}: {e}")
        raise
    except httpx.RequestError as e:
        logger.warning(f"HTTP request error for {url}: {e}")
        raise


async def fetch_resource(
    url: str,
    timeout: float = AUX_TIMEOUT,
    headers: Optional[Dict[str, str]] = None,
) -> FetchOutcome:
    """Fetch an auxiliary resource, mapping transport errors to a TransportFailure."""
    try:
        response = await fetch_url(url, timeout=timeout, headers=headers)
    except httpx.RequestError as e:
        return TransportFailure(url=url, cause=str(e) or type(e).__name__)

    return FetchSuccess(
        url=str(response.url),
        status_code=response.status_code,
        reason=response.reason_phrase,
        headers={k.lower(): v for k, v in response.headers.items()},
        text=response.text,
    )
