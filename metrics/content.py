from typing import List
from core.context import ScanContext
from core.document import tag_attr
from core.metric_registry import MetricRegistry
from core.scoring import Metric, Finding
from models.metric import MetricResult, Status

# Images with alt text above this share only warn
ALT_COVERAGE_WARNING_ABOVE = 80
SHORT_CONTENT_WORDS = 300
THIN_CONTENT_WORDS = 500


@MetricRegistry.register("headings", position=3)
class HeadingStructureMetric(Metric):
    """Checks the H1 count and the presence of H2 subheadings.

    The H2 rule runs after the H1 rules and its status replaces theirs, so a page
    with neither H1 nor H2 ends up as a warning.
    """

    name = "Heading Structure"
    description = "Proper heading hierarchy (H1, H2, H3, etc.)"
    recommendations = (
        "Use exactly one H1 tag per page",
        "Structure content with H2, H3 tags hierarchically",
        "Include keywords in heading tags naturally",
        "Use headings to break up content logically",
    )

    async def analyze(self, context: ScanContext) -> MetricResult:
        counts = {level: context.document.count(f"h{level}") for level in range(1, 7)}
        findings: List[Finding] = []

        if counts[1] == 0:
            findings.append(Finding("No H1 tag found", Status.FAIL, penalty=40))
        elif counts[1] > 1:
            findings.append(Finding(f"Multiple H1 tags found ({counts[1]})", Status.WARNING, penalty=20))

        if counts[2] == 0:
            findings.append(Finding("No H2 tags found - consider adding subheadings", Status.WARNING, penalty=15))

        value = ", ".join(f"H{level}: {count}" for level, count in counts.items())
        return self.result(findings, value)


@MetricRegistry.register("image_alt", position=4)
class ImageAltTextMetric(Metric):
    """Scores the share of images carrying a non-empty alt attribute."""

    name = "Image Alt Text"
    description = "Alt text for accessibility and SEO"
    recommendations = (
        "Add descriptive alt text to all images",
        "Include relevant keywords in alt text naturally",
        "Keep alt text concise but descriptive",
    )

    async def analyze(self, context: ScanContext) -> MetricResult:
        images = context.document.find_all("img")
        missing = sum(1 for img in images if not tag_attr(img, "alt"))
        with_alt = len(images) - missing
        findings = []

        if images:
            coverage = with_alt / len(images) * 100
            if coverage < 100:
                status = Status.WARNING if coverage > ALT_COVERAGE_WARNING_ABOVE else Status.FAIL
                findings.append(Finding(f"{missing} images missing alt text", status, score=coverage))

        return self.result(findings, f"{len(images)} images, {with_alt} with alt text")


@MetricRegistry.register("content_length", position=18)
class ContentLengthMetric(Metric):
    name = "Content Length"
    description = "Page content depth and comprehensiveness"
    recommendations = (
        "Add more comprehensive content (aim for 500+ words)",
        "Create valuable, in-depth content",
        "Use headings to structure longer content",
    )

    async def analyze(self, context: ScanContext) -> MetricResult:
        word_count = len(context.document.visible_text().split())
        findings = []

        if word_count < SHORT_CONTENT_WORDS:
            findings.append(Finding(f"Content is very short ({word_count} words)", Status.FAIL, score=40))
        elif word_count < THIN_CONTENT_WORDS:
            findings.append(Finding(f"Content is short ({word_count} words)", Status.WARNING, score=70))

        return self.result(findings, f"{word_count} words")
