from typing import List, Optional
from core.context import ScanContext
from core.document import tag_attr
from core.metric_registry import MetricRegistry
from core.scoring import Metric, Finding
from models.metric import MetricResult, Status
from models.signature import Signature
from rules.rules_loader import load_signatures


@MetricRegistry.register("ssl", position=16)
class SslMetric(Metric):
    name = "SSL/HTTPS"
    description = "Secure connection and encryption"
    recommendations = (
        "Enable HTTPS/SSL certificate",
        "Redirect HTTP traffic to HTTPS",
        "Update internal links to use HTTPS",
        "Use HSTS headers for security",
    )

    async def analyze(self, context: ScanContext) -> MetricResult:
        findings = []
        if not context.is_https:
            findings.append(Finding("Website not using HTTPS", Status.FAIL, score=0))
        return self.result(findings, "HTTPS enabled" if context.is_https else "HTTP only (insecure)")


@MetricRegistry.register("page_speed", position=17)
class PageSpeedMetric(Metric):
    """Placeholder: no timing is measured, so the score is always 100.

    Unlike every other metric the generic performance advice is always attached.
    """

    name = "Page Speed"
    description = "Page loading performance optimization"
    recommendations = (
        "Optimize images and compress files",
        "Enable browser caching",
        "Minimize HTTP requests",
        "Use a CDN for static assets",
        "Minify CSS and JavaScript",
    )

    async def analyze(self, context: ScanContext) -> MetricResult:
        return self.result([], "Basic check completed", always_recommend=True)


@MetricRegistry.register("analytics", position=21)
class AnalyticsTrackingMetric(Metric):
    """Looks for known analytics and tag-manager snippets in scripts."""

    name = "Analytics Tracking"
    description = "Website analytics and tracking setup"
    recommendations = (
        "Install Google Analytics 4 for website tracking",
        "Consider using Google Tag Manager for easier tag management",
    )

    def __init__(self, signatures: Optional[List[Signature]] = None):
        self.signatures = signatures if signatures is not None else load_signatures()

    async def analyze(self, context: ScanContext) -> MetricResult:
        detected = self._detect(context)
        findings = []
        if detected is None:
            findings.append(Finding("No Google Analytics or Google Tag Manager detected", Status.WARNING, score=60))
            value = "Not detected"
        else:
            value = detected.label or f"{detected.name} detected"
        return self.result(findings, value)

    def _detect(self, context: ScanContext) -> Optional[Signature]:
        inline_text = context.document.text_content("script")
        sources = [tag_attr(script, "src") for script in context.document.select("script[src]")]

        for signature in self.signatures:
            for rule in signature.evidence_rules:
                if rule.type == "script_content" and rule.value in inline_text:
                    return signature
                if rule.type == "script_src" and any(rule.value in src for src in sources):
                    return signature
        return None
