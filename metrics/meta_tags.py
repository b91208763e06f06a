"""Head-level tag checks: title, meta description, keywords, canonical, robots, viewport, lang."""
from typing import List
from core.context import ScanContext
from core.metric_registry import MetricRegistry
from core.scoring import Metric, Finding
from models.metric import MetricResult, Status

TITLE_MIN_LENGTH = 30
TITLE_MAX_LENGTH = 60
DESCRIPTION_MIN_LENGTH = 120
DESCRIPTION_MAX_LENGTH = 160


@MetricRegistry.register("title_tag", position=1)
class TitleTagMetric(Metric):
    """Checks presence and length of the page title."""

    name = "Title Tag"
    description = "Page title optimization for search engines and users"
    recommendations = (
        "Keep title between 30-60 characters",
        "Include primary keywords near the beginning",
        "Make it descriptive and compelling",
        "Each page should have a unique title",
    )

    async def analyze(self, context: ScanContext) -> MetricResult:
        document = context.document
        findings: List[Finding] = []
        title = document.text_content("title")

        if not document.exists("title"):
            findings.append(Finding("No title tag found", Status.FAIL, score=0))
        else:
            if len(title) < TITLE_MIN_LENGTH:
                findings.append(Finding(
                    f"Title is too short ({len(title)} characters, minimum {TITLE_MIN_LENGTH} recommended)",
                    Status.WARNING, penalty=30,
                ))
            if len(title) > TITLE_MAX_LENGTH:
                findings.append(Finding(
                    f"Title is too long ({len(title)} characters, maximum {TITLE_MAX_LENGTH} recommended)",
                    Status.WARNING, penalty=20,
                ))
            if not title.strip():
                findings.append(Finding("Title tag is empty", Status.FAIL, score=0))

        return self.result(findings, title or "Not found")


@MetricRegistry.register("meta_description", position=2)
class MetaDescriptionMetric(Metric):
    """Checks presence and length of the meta description."""

    name = "Meta Description"
    description = "Meta description tag for search result snippets"
    recommendations = (
        "Keep meta description between 120-160 characters",
        "Include relevant keywords naturally",
        "Write compelling copy that encourages clicks",
        "Make each page description unique",
    )

    async def analyze(self, context: ScanContext) -> MetricResult:
        findings: List[Finding] = []
        meta_description = context.document.meta_content(name="description")

        if not meta_description:
            findings.append(Finding("No meta description found", Status.FAIL, score=0))
        else:
            length = len(meta_description)
            if length < DESCRIPTION_MIN_LENGTH:
                findings.append(Finding(
                    f"Meta description is too short ({length} characters, minimum {DESCRIPTION_MIN_LENGTH} recommended)",
                    Status.WARNING, penalty=20,
                ))
            if length > DESCRIPTION_MAX_LENGTH:
                findings.append(Finding(
                    f"Meta description is too long ({length} characters, maximum {DESCRIPTION_MAX_LENGTH} recommended)",
                    Status.WARNING, penalty=20,
                ))

        return self.result(findings, meta_description or "Not found")


@MetricRegistry.register("meta_keywords", position=6)
class MetaKeywordsMetric(Metric):
    """Flags the legacy meta keywords tag, which search engines ignore."""

    name = "Meta Keywords"
    description = "Outdated meta keywords tag check"
    recommendations = ("Remove meta keywords tag - it's not used by search engines",)

    async def analyze(self, context: ScanContext) -> MetricResult:
        keywords = context.document.meta_content(name="keywords")
        findings = []
        if keywords:
            findings.append(Finding("Meta keywords tag is present (outdated)", Status.WARNING, penalty=20))
        return self.result(findings, keywords or "Not found (good)")


@MetricRegistry.register("canonical", position=7)
class CanonicalUrlMetric(Metric):
    name = "Canonical URL"
    description = "Canonical URL specification for duplicate content prevention"
    recommendations = ("Add canonical URL to prevent duplicate content issues",)

    async def analyze(self, context: ScanContext) -> MetricResult:
        canonical = context.document.attr('link[rel="canonical"]', "href")
        findings = []
        if not canonical:
            findings.append(Finding("No canonical URL specified", Status.WARNING, penalty=30))
        return self.result(findings, canonical or "Not found")


@MetricRegistry.register("meta_robots", position=8)
class MetaRobotsMetric(Metric):
    """noindex and nofollow are checked independently and their effects stack."""

    name = "Meta Robots"
    description = "Page-level crawling and indexing directives"

    async def analyze(self, context: ScanContext) -> MetricResult:
        meta_robots = context.document.meta_content(name="robots")
        findings = []
        if "noindex" in meta_robots:
            findings.append(Finding("Page set to noindex - won't appear in search results", Status.WARNING, score=20))
        if "nofollow" in meta_robots:
            findings.append(Finding("Page set to nofollow - links won't pass authority", Status.WARNING, penalty=30))
        return self.result(findings, meta_robots or "Not specified (default: index,follow)")


@MetricRegistry.register("viewport", position=9)
class ViewportMetric(Metric):
    name = "Mobile Viewport"
    description = "Mobile optimization and responsive design"
    recommendations = (
        "Add viewport meta tag for mobile optimization",
        "Use width=device-width for responsive design",
        "Test mobile-friendliness",
    )

    async def analyze(self, context: ScanContext) -> MetricResult:
        viewport = context.document.meta_content(name="viewport")
        findings = []
        if not viewport:
            findings.append(Finding("No viewport meta tag found", Status.FAIL, score=0))
        elif "width=device-width" not in viewport:
            findings.append(Finding("Viewport not optimized for mobile devices", Status.WARNING, score=60))
        return self.result(findings, viewport or "Not found")


@MetricRegistry.register("lang", position=10)
class LangAttributeMetric(Metric):
    name = "Language Declaration"
    description = "HTML language attribute for accessibility and SEO"
    recommendations = (
        "Add lang attribute to html element",
        "Specify the primary language of your content",
        "Use proper language codes (e.g., en, en-US)",
    )

    async def analyze(self, context: ScanContext) -> MetricResult:
        lang = context.document.attr("html", "lang")
        findings = []
        if not lang:
            findings.append(Finding("No language attribute specified", Status.WARNING, score=70))
        return self.result(findings, lang or "Not specified")
