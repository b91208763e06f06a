"""Active metrics: robots.txt and XML sitemap discovery.

Both issue their own requests against the base URL. Every fetch comes back as a
FetchOutcome, so an unreachable resource only lowers the metric's own score.
"""
import logging
from typing import List, Optional
from core.context import ScanContext
from core.metric_registry import MetricRegistry
from core.scoring import Metric, Finding
from fetch.http_client import fetch_resource, FetchSuccess, TransportFailure, AUX_TIMEOUT
from models.metric import MetricResult, Status

logger = logging.getLogger(__name__)

# Probed in order; the first valid sitemap wins
SITEMAP_PATHS = (
    "/sitemap.xml",
    "/sitemap_index.xml",
    "/sitemaps.xml",
    "/sitemap1.xml",
)
SITEMAP_MARKERS = ("<urlset", "<sitemapindex")


@MetricRegistry.register("robots_txt", position=14, metric_type="active")
class RobotsTxtMetric(Metric):
    """Fetches /robots.txt and checks for User-agent and Sitemap directives."""

    name = "Robots.txt"
    description = "Search engine crawling instructions"
    recommendations = (
        "Create a robots.txt file in your root directory",
        "Include sitemap location in robots.txt",
        "Specify crawling rules for search engines",
        "Test robots.txt with Google Search Console",
    )

    async def analyze(self, context: ScanContext) -> MetricResult:
        url = f"{context.base_url}/robots.txt"
        outcome = await fetch_resource(url, timeout=AUX_TIMEOUT, headers=context.request_headers)
        findings: List[Finding] = []
        content = ""

        if isinstance(outcome, TransportFailure):
            logger.debug(f"robots.txt unreachable at {url}: {outcome.cause}")
            findings.append(Finding("Unable to fetch robots.txt", Status.WARNING, score=60))
        elif not outcome.ok:
            logger.debug(f"robots.txt returned HTTP {outcome.status_code} at {url}")
            findings.append(Finding("robots.txt file not found", Status.WARNING, score=60))
        else:
            content = outcome.text
            if not content.strip():
                findings.append(Finding("robots.txt file is empty", Status.WARNING, score=70))
            else:
                if "User-agent:" not in content:
                    findings.append(Finding("robots.txt missing User-agent directive", Status.WARNING, penalty=20))
                if "Sitemap:" not in content:
                    findings.append(Finding("robots.txt missing Sitemap directive", Status.WARNING, penalty=10))

        return self.result(findings, "Found and accessible" if content else "Not found")


@MetricRegistry.register("sitemap", position=15, metric_type="active")
class SitemapMetric(Metric):
    """Probes the well-known sitemap locations until one serves sitemap XML."""

    name = "XML Sitemap"
    description = "XML sitemap for search engine discovery"
    recommendations = (
        "Create an XML sitemap for your website",
        "Submit sitemap to Google Search Console",
        "Include sitemap URL in robots.txt",
        "Keep sitemap updated with new content",
        "Consider creating separate sitemaps for different content types",
    )

    async def analyze(self, context: ScanContext) -> MetricResult:
        found = await self._find_sitemap(context)
        findings = []
        if found is None:
            findings.append(Finding("No XML sitemap found", Status.FAIL, score=40))
        return self.result(findings, f"Found: {found}" if found else "Not found")

    async def _find_sitemap(self, context: ScanContext) -> Optional[str]:
        for path in SITEMAP_PATHS:
            url = f"{context.base_url}{path}"
            outcome = await fetch_resource(url, timeout=AUX_TIMEOUT, headers=context.request_headers)
            if isinstance(outcome, FetchSuccess) and outcome.ok:
                if any(marker in outcome.text for marker in SITEMAP_MARKERS):
                    logger.debug(f"Sitemap found at {url}")
                    return path
                logger.debug(f"{url} is not a sitemap")
            elif isinstance(outcome, FetchSuccess):
                logger.debug(f"No sitemap at {url} (HTTP {outcome.status_code})")
            else:
                logger.debug(f"Sitemap probe failed for {url}: {outcome.cause}")
        return None
