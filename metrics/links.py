from typing import List, Optional
from urllib.parse import urljoin, urlparse
from bs4.element import Tag
from core.context import ScanContext
from core.document import tag_attr
from core.metric_registry import MetricRegistry
from core.scoring import Metric, Finding
from models.metric import MetricResult, Status

MIN_INTERNAL_LINKS = 3
ICON_RELS = {"icon", "shortcut icon", "apple-touch-icon"}


def _resolved_hostname(href: str, base_url: str) -> Optional[str]:
    """Hostname of ``href`` resolved against ``base_url``; None for non-web or malformed links."""
    try:
        parsed = urlparse(urljoin(base_url, href))
        if parsed.scheme not in ("http", "https"):
            return None
        return parsed.hostname
    except ValueError:
        return None


def _anchors(context: ScanContext) -> List[Tag]:
    return context.document.select("a[href]")


@MetricRegistry.register("internal_links", position=5)
class InternalLinksMetric(Metric):
    """Counts links that start with '/' or mention the site's own hostname."""

    name = "Internal Links"
    description = "Internal linking structure for navigation and SEO"
    recommendations = (
        "Add more internal links to relevant pages",
        "Use descriptive anchor text",
        "Link to important pages from homepage",
    )

    async def analyze(self, context: ScanContext) -> MetricResult:
        hostname = context.hostname
        internal = []
        for a in _anchors(context):
            href = tag_attr(a, "href")
            if href and (href.startswith("/") or hostname in href):
                internal.append(a)
        findings = []

        if len(internal) < MIN_INTERNAL_LINKS:
            findings.append(Finding("Very few internal links found", Status.WARNING, score=60))
        if not internal:
            findings.append(Finding("No internal links found", Status.FAIL, score=0))

        return self.result(findings, f"{len(internal)} internal links found")


@MetricRegistry.register("external_links", position=19)
class ExternalLinksMetric(Metric):
    """Warns when most outbound links pass authority (no rel="nofollow")."""

    name = "External Links"
    description = "External link management and authority"
    recommendations = ('Consider adding rel="nofollow" to external links',)

    async def analyze(self, context: ScanContext) -> MetricResult:
        hostname = context.hostname
        external = []
        for a in _anchors(context):
            link_host = _resolved_hostname(tag_attr(a, "href"), context.base_url)
            if link_host is not None and link_host != hostname:
                external.append(a)

        followed = [a for a in external if "nofollow" not in tag_attr(a, "rel")]
        findings = []
        if len(followed) > len(external) * 0.5:
            findings.append(Finding("Many external links without nofollow attribute", Status.WARNING, score=80))

        return self.result(findings, f"{len(external)} external links found")


@MetricRegistry.register("favicon", position=20)
class FaviconMetric(Metric):
    name = "Favicon"
    description = "Website icon for browsers and bookmarks"
    recommendations = (
        "Add a favicon to improve brand recognition",
        "Include multiple sizes for different devices",
        "Use modern formats like PNG or SVG",
    )

    async def analyze(self, context: ScanContext) -> MetricResult:
        icons = [
            link for link in context.document.find_all("link")
            if tag_attr(link, "rel").strip().lower() in ICON_RELS
        ]
        findings = []
        if not icons:
            findings.append(Finding("No favicon found", Status.WARNING, score=70))
        return self.result(findings, "Found" if icons else "Not found")
