import pytest
from metrics.social import OpenGraphMetric, TwitterCardsMetric, SchemaMarkupMetric
from models.metric import Status


def _og(*props: str) -> str:
    tags = "".join(f'<meta property="{p}" content="x">' for p in props)
    return f"<html><head>{tags}</head><body></body></html>"


def _twitter(*names: str) -> str:
    tags = "".join(f'<meta name="{n}" content="x">' for n in names)
    return f"<html><head>{tags}</head><body></body></html>"


@pytest.mark.asyncio
async def test_open_graph_complete(make_context):
    html = _og("og:title", "og:description", "og:image", "og:type", "og:url")
    result = await OpenGraphMetric().analyze(make_context(html))

    assert (result.score, result.status) == (100, Status.PASS)
    assert result.recommendations == []
    assert result.value == "Title: Yes, Description: Yes, Image: Yes, Type: Yes, URL: Yes"


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "present,score,status",
    [
        (("og:title", "og:description", "og:type", "og:url"), 70, Status.WARNING),
        (("og:title", "og:description", "og:image"), 80, Status.WARNING),
        (("og:image", "og:type", "og:url"), 50, Status.FAIL),
        ((), 0, Status.FAIL),
    ],
)
async def test_open_graph_penalties(make_context, present, score, status):
    result = await OpenGraphMetric().analyze(make_context(_og(*present)))

    assert (result.score, result.status) == (score, status)
    assert len(result.recommendations) == 3


@pytest.mark.asyncio
async def test_open_graph_issues_name_missing_tags(make_context):
    result = await OpenGraphMetric().analyze(make_context(_og("og:title", "og:description", "og:image")))
    assert result.issues == ["Missing og:type", "Missing og:url"]


@pytest.mark.asyncio
async def test_twitter_cards(make_context):
    metric = TwitterCardsMetric()
    full = await metric.analyze(make_context(_twitter("twitter:card", "twitter:title", "twitter:description", "twitter:image")))
    no_card = await metric.analyze(make_context(_twitter("twitter:title", "twitter:description", "twitter:image")))
    no_image = await metric.analyze(make_context(_twitter("twitter:card", "twitter:title", "twitter:description")))

    assert (full.score, full.status) == (100, Status.PASS)
    # 60 is not above the warning threshold
    assert (no_card.score, no_card.status) == (60, Status.FAIL)
    assert no_card.value == "Card: No, Title: Yes, Description: Yes, Image: Yes"
    assert (no_image.score, no_image.status) == (80, Status.WARNING)


@pytest.mark.asyncio
async def test_schema_markup(make_context):
    metric = SchemaMarkupMetric()
    json_ld = await metric.analyze(make_context(
        '<html><head><script type="application/ld+json">{"@type": "Organization"}</script></head></html>'
    ))
    microdata = await metric.analyze(make_context(
        '<html><body><div itemscope itemtype="https://schema.org/Product"></div></body></html>'
    ))
    none = await metric.analyze(make_context("<html><body></body></html>"))

    assert (json_ld.score, json_ld.value) == (100, "JSON-LD: 1, Microdata: 0")
    assert (microdata.score, microdata.value) == (100, "JSON-LD: 0, Microdata: 1")
    assert (none.score, none.status) == (60, Status.WARNING)
    assert len(none.recommendations) == 3
