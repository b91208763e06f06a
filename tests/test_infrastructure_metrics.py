import pytest
from metrics.infrastructure import SslMetric, PageSpeedMetric, AnalyticsTrackingMetric
from models.metric import Status
from models.signature import Signature, EvidenceRule
from rules.rules_loader import load_signatures


@pytest.mark.asyncio
async def test_ssl(make_context):
    secure = await SslMetric().analyze(make_context("<html></html>", base_url="https://example.com"))
    plain = await SslMetric().analyze(make_context("<html></html>", base_url="http://example.com"))

    assert (secure.score, secure.status, secure.value) == (100, Status.PASS, "HTTPS enabled")
    assert (plain.score, plain.status, plain.value) == (0, Status.FAIL, "HTTP only (insecure)")
    assert len(plain.recommendations) == 4


@pytest.mark.asyncio
async def test_page_speed_always_recommends(make_context):
    result = await PageSpeedMetric().analyze(make_context("<html></html>"))

    assert (result.score, result.status) == (100, Status.PASS)
    assert result.issues == []
    assert len(result.recommendations) == 5
    assert result.value == "Basic check completed"


def test_load_signatures_keeps_file_order():
    signatures = load_signatures()

    assert [s.name for s in signatures][:2] == ["GA4", "GTM"]
    assert signatures[0].label == "GA4 detected"
    assert EvidenceRule(type="script_src", value="googletagmanager.com/gtm") in signatures[1].evidence_rules


def test_load_signatures_skips_invalid_entries(tmp_path):
    (tmp_path / "analytics.yaml").write_text(
        "- name: Broken\n"
        "- name: Plausible\n"
        "  category: Analytics\n"
        "  evidence:\n"
        "    - type: script_src\n"
        "      value: plausible.io/js\n"
        "    - type: cookie\n"
        "      value: _pk_id\n"
    )
    signatures = load_signatures(rules_dir=str(tmp_path))

    assert len(signatures) == 1
    assert signatures[0].evidence_rules == [EvidenceRule(type="script_src", value="plausible.io/js")]
    assert signatures[0].label is None


@pytest.mark.asyncio
async def test_analytics_inline_gtag(make_context):
    html = """
    <html><head>
    <script>
      window.dataLayer = window.dataLayer || [];
      function gtag(){dataLayer.push(arguments);}
      gtag('config', 'G-XXXX');
    </script>
    </head></html>
    """
    result = await AnalyticsTrackingMetric().analyze(make_context(html))

    assert (result.score, result.status, result.value) == (100, Status.PASS, "GA4 detected")
    assert result.recommendations == []


@pytest.mark.asyncio
async def test_analytics_tag_manager_source(make_context):
    html = '<html><head><script async src="https://www.googletagmanager.com/gtm.js?id=GTM-ABC"></script></head></html>'
    result = await AnalyticsTrackingMetric().analyze(make_context(html))

    assert result.value == "GTM detected"


@pytest.mark.asyncio
async def test_analytics_missing(make_context):
    html = '<html><head><script src="/app.js"></script><script>console.log("hi")</script></head></html>'
    result = await AnalyticsTrackingMetric().analyze(make_context(html))

    assert (result.score, result.status, result.value) == (60, Status.WARNING, "Not detected")
    assert result.issues == ["No Google Analytics or Google Tag Manager detected"]
    assert len(result.recommendations) == 2


@pytest.mark.asyncio
async def test_analytics_custom_signatures(make_context):
    signatures = [
        Signature(
            name="Plausible",
            category="Analytics",
            evidence_rules=[EvidenceRule(type="script_src", value="plausible.io/js")],
        )
    ]
    html = '<html><head><script defer src="https://plausible.io/js/script.js"></script></head></html>'
    result = await AnalyticsTrackingMetric(signatures).analyze(make_context(html))

    assert result.value == "Plausible detected"
