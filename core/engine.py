from urllib.parse import urlparse
from datetime import datetime, timezone
import re
import asyncio
import logging
import httpx
from typing import List, Dict, Optional, Set

from core.aggregator import MetricAggregator
from core.context import ScanContext
from core.document import Document
from core.errors import ScanError, ErrorCategory, EMPTY_CONTENT_MESSAGE, INVALID_DOMAIN_MESSAGE, UNEXPECTED_ERROR_MESSAGE
from core.metric_registry import MetricRegistry
from fetch.http_client import fetch_url, default_headers, MAIN_PAGE_TIMEOUT
from models.metric import MetricResult
from models.report import ScanReport

# Import all metric modules to trigger @MetricRegistry.register decorators
import metrics.meta_tags
import metrics.content
import metrics.links
import metrics.social
import metrics.infrastructure
# Active metrics (issue their own HTTP requests)
import metrics.crawl

SCHEME_PREFIX = re.compile(r"^https?://")
DOMAIN_PATTERN = re.compile(r"(?:[a-zA-Z0-9](?:[a-zA-Z0-9-]{0,61}[a-zA-Z0-9])?\.)+[a-zA-Z]{2,}")

logger = logging.getLogger(__name__)


def validate_domain(domain: Optional[str]) -> str:
    """Return the trimmed domain, or raise a validation ScanError before any network call."""
    domain = (domain or "").strip()
    if not domain:
        raise ScanError("Domain is required", category=ErrorCategory.VALIDATION)
    if not DOMAIN_PATTERN.fullmatch(SCHEME_PREFIX.sub("", domain)):
        raise ScanError(
            INVALID_DOMAIN_MESSAGE,
            category=ErrorCategory.VALIDATION,
            domain=domain,
        )
    return domain


def build_url(domain: str) -> str:
    return domain if SCHEME_PREFIX.match(domain) else f"https://{domain}"


def http_variant(url: str) -> str:
    """Plain-HTTP form of ``url`` used for the single protocol fallback."""
    if url.startswith("https:"):
        return "http:" + url[len("https:"):]
    return url


def base_url_of(url: str) -> str:
    """scheme://host[:port] of ``url``."""
    parsed = urlparse(url)
    host = parsed.netloc.rsplit("@", 1)[-1]
    return f"{parsed.scheme}://{host}"


def _describe(error: Exception) -> str:
    return str(error) or type(error).__name__


class Engine:
    def __init__(
        self,
        exclude_metrics: Set[str] = None,
        custom_headers: Optional[Dict[str, str]] = None,
        timeout: float = MAIN_PAGE_TIMEOUT,
    ):
        """Initialize the engine with the metric registry.

        Args:
            exclude_metrics: Set of metric names to leave out (e.g., {'page_speed'})
            custom_headers: Extra request headers sent with every fetch
            timeout: Main page timeout in seconds
        """
        self.logger = logging.getLogger(__name__)
        self.request_headers = default_headers(custom_headers)
        self.timeout = timeout

        self.metrics = MetricRegistry.instantiate_all(exclude=exclude_metrics)
        self.logger.info(f"Initialized {len(self.metrics)} metrics")

        if exclude_metrics:
            self.logger.info(f"Excluded metrics: {', '.join(sorted(exclude_metrics))}")

    async def scan(self, domain: str) -> ScanReport:
        """Validate, fetch, evaluate and aggregate. Raises ScanError on any failure."""
        domain = validate_domain(domain)
        url = build_url(domain)
        self.logger.info(f"Starting scan of {domain} ({url})")

        try:
            context = await self.scan_url(domain, url)
            results = await self.analyze_context(context)
        except ScanError:
            raise
        except Exception as e:
            self.logger.error(f"Unexpected error scanning {domain}: {e}", exc_info=True)
            raise ScanError(UNEXPECTED_ERROR_MESSAGE, category=ErrorCategory.UNKNOWN, domain=domain) from e

        overall = MetricAggregator.aggregate(results)
        self.logger.info(f"Scan of {domain} complete: overall score {overall}")
        return ScanReport(
            domain=domain,
            requested_url=url,
            final_url=context.url,
            base_url=context.base_url,
            overall_score=overall,
            metrics=results,
            scan_date=datetime.now(timezone.utc).isoformat(),
        )

    async def fetch_page(self, url: str, domain: str) -> httpx.Response:
        """Fetch the main page, retrying once over plain HTTP on transport failure."""
        try:
            return await fetch_url(url, timeout=self.timeout, headers=self.request_headers)
        except httpx.RequestError as first_error:
            fallback = http_variant(url)
            self.logger.info(f"Fetching {url} failed ({_describe(first_error)}), retrying {fallback}")
            try:
                return await fetch_url(fallback, timeout=self.timeout, headers=self.request_headers)
            except httpx.RequestError as second_error:
                raise ScanError(
                    f"Unable to connect to website: {_describe(first_error)}",
                    category=ErrorCategory.NETWORK,
                    domain=domain,
                ) from second_error

    async def scan_url(self, domain: str, url: str) -> ScanContext:
        response = await self.fetch_page(url, domain)
        self.logger.debug(f"HTTP response: status={response.status_code}, url={response.url}")

        # Error statuses end the scan, no protocol retry
        if not response.is_success:
            raise ScanError.from_status(response.status_code, response.reason_phrase, domain=domain)

        html_content = response.text
        if not html_content or not html_content.strip():
            raise ScanError(
                EMPTY_CONTENT_MESSAGE,
                category=ErrorCategory.SERVER_ERROR,
                domain=domain,
                http_status=422,
            )

        final_url = str(response.url)
        base_url = base_url_of(final_url)
        self.logger.debug(f"Final URL {final_url}, base URL {base_url}, {len(html_content)} chars of HTML")

        return ScanContext(
            domain=domain,
            url=final_url,
            base_url=base_url,
            document=Document(html_content),
            html=html_content,
            status_code=response.status_code,
            headers={k.lower(): v for k, v in response.headers.items()},
            request_headers=dict(self.request_headers),
        )

    async def analyze_context(self, context: ScanContext) -> List[MetricResult]:
        """Run every metric; results keep registry order."""

        async def run_metric(name: str, metric) -> MetricResult:
            self.logger.debug(f"Running {name} metric")
            result = await metric.analyze(context)
            self.logger.debug(f"{name} metric: score={result.score}, status={result.status.value}")
            return result

        results = await asyncio.gather(
            *(run_metric(name, metric) for name, metric in self.metrics.items())
        )
        return list(results)
