"""Social sharing tags and structured data."""
from typing import List, Tuple
from core.context import ScanContext
from core.metric_registry import MetricRegistry
from core.scoring import Metric, Finding, status_by_score
from models.metric import MetricResult, Status

# (property, label, penalty)
OPEN_GRAPH_TAGS: List[Tuple[str, str, int]] = [
    ("og:title", "Title", 25),
    ("og:description", "Description", 25),
    ("og:image", "Image", 30),
    ("og:type", "Type", 10),
    ("og:url", "URL", 10),
]

TWITTER_TAGS: List[Tuple[str, str, int]] = [
    ("twitter:card", "Card", 40),
    ("twitter:title", "Title", 20),
    ("twitter:description", "Description", 20),
    ("twitter:image", "Image", 20),
]


def _yes_no(present: bool) -> str:
    return "Yes" if present else "No"


@MetricRegistry.register("open_graph", position=11)
class OpenGraphMetric(Metric):
    """Each missing og: tag costs a fixed penalty; the status grades the total."""

    name = "Open Graph Tags"
    description = "Open Graph meta tags for social media sharing"
    recommendations = (
        "Add Open Graph tags for better social media sharing",
        "Include og:title, og:description, og:image, og:type, and og:url",
        "Test with Facebook Sharing Debugger",
    )

    async def analyze(self, context: ScanContext) -> MetricResult:
        findings = []
        parts = []
        for prop, label, penalty in OPEN_GRAPH_TAGS:
            present = bool(context.document.meta_content(prop=prop))
            if not present:
                findings.append(Finding(f"Missing {prop}", Status.WARNING, penalty=penalty))
            parts.append(f"{label}: {_yes_no(present)}")
        return self.result(findings, ", ".join(parts), status_from_score=status_by_score)


@MetricRegistry.register("twitter_cards", position=12)
class TwitterCardsMetric(Metric):
    """Same grading as Open Graph, over the twitter: meta names."""

    name = "Twitter Cards"
    description = "Twitter social media optimization"
    recommendations = (
        "Add Twitter Card meta tags for better social sharing",
        "Include twitter:card, twitter:title, twitter:description, and twitter:image",
        "Test with Twitter Card Validator",
    )

    async def analyze(self, context: ScanContext) -> MetricResult:
        findings = []
        parts = []
        for name, label, penalty in TWITTER_TAGS:
            present = bool(context.document.meta_content(name=name))
            if not present:
                findings.append(Finding(f"Missing {name}", Status.WARNING, penalty=penalty))
            parts.append(f"{label}: {_yes_no(present)}")
        return self.result(findings, ", ".join(parts), status_from_score=status_by_score)


@MetricRegistry.register("schema_markup", position=13)
class SchemaMarkupMetric(Metric):
    name = "Schema Markup"
    description = "Structured data for rich search results"
    recommendations = (
        "Add structured data markup for better search results",
        "Consider adding Schema.org markup for your content type",
        "Test with Google Rich Results Test",
    )

    async def analyze(self, context: ScanContext) -> MetricResult:
        json_ld = context.document.count('script[type="application/ld+json"]')
        microdata = context.document.count("[itemscope]")
        findings = []
        if json_ld == 0 and microdata == 0:
            findings.append(Finding("No structured data found", Status.WARNING, score=60))
        return self.result(findings, f"JSON-LD: {json_ld}, Microdata: {microdata}")
