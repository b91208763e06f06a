import asyncio
import pytest
from core.aggregator import MetricAggregator, aggregate
from core.engine import Engine
from core.metric_registry import MetricRegistry
from core.scoring import Finding, fold_findings, build_result, round_half_up, status_by_score
from models.metric import MetricResult, Status


def _result(score: int, status: Status = Status.PASS) -> MetricResult:
    return MetricResult(name="m", description="d", score=score, status=status)


def test_round_half_up():
    assert round_half_up(87.5) == 88
    assert round_half_up(2.5) == 3
    assert round_half_up(74.4) == 74


def test_fold_findings_later_status_wins():
    score, status = fold_findings([
        Finding("a", Status.FAIL, penalty=40),
        Finding("b", Status.WARNING, penalty=15),
    ])
    assert (score, status) == (45, Status.WARNING)


def test_fold_findings_absolute_then_penalty():
    score, status = fold_findings([
        Finding("a", Status.WARNING, score=20),
        Finding("b", Status.WARNING, penalty=30),
    ])
    assert (score, status) == (-10, Status.WARNING)


def test_build_result_clamps_and_recommends():
    result = build_result("n", "d", [Finding("x", Status.FAIL, penalty=150)], ["do better"], "v")

    assert result.score == 0
    assert result.recommendations == ["do better"]
    assert result.issues == ["x"]


def test_build_result_no_findings_no_recommendations():
    result = build_result("n", "d", [], ["do better"], "v")

    assert (result.score, result.status) == (100, Status.PASS)
    assert result.recommendations == []


def test_build_result_status_from_score():
    findings = [Finding("x", Status.WARNING, penalty=40)]
    assert build_result("n", "d", findings, [], "v", status_from_score=status_by_score).status == Status.FAIL
    findings = [Finding("x", Status.FAIL, penalty=30)]
    assert build_result("n", "d", findings, [], "v", status_from_score=status_by_score).status == Status.WARNING


def test_aggregate_empty_is_zero():
    assert aggregate([]) == 0


def test_aggregate_mean():
    assert aggregate([_result(100), _result(0)]) == 50
    assert MetricAggregator.aggregate([_result(100), _result(99)]) == 100
    assert MetricAggregator.aggregate([_result(70), _result(60), _result(60)]) == 63


@pytest.mark.parametrize("scores", [[0], [100], [0, 0, 1], [100, 100, 99], list(range(0, 101))])
def test_aggregate_always_integer_in_range(scores):
    overall = aggregate([_result(s) for s in scores])
    assert isinstance(overall, int)
    assert 0 <= overall <= 100


def test_summarize_counts_statuses():
    counts = MetricAggregator.summarize([
        _result(100), _result(60, Status.WARNING), _result(0, Status.FAIL), _result(100),
    ])
    assert counts == {"pass": 2, "warning": 1, "fail": 1}


def test_registry_order():
    Engine()  # importing the engine registers every metric
    assert MetricRegistry.get_all_names() == [
        "title_tag", "meta_description", "headings", "image_alt", "internal_links",
        "meta_keywords", "canonical", "meta_robots", "viewport", "lang",
        "open_graph", "twitter_cards", "schema_markup", "robots_txt", "sitemap",
        "ssl", "page_speed", "content_length", "external_links", "favicon", "analytics",
    ]
    assert MetricRegistry.get_metrics_by_type("active") == ["robots_txt", "sitemap"]


def test_registry_rejects_duplicate_position():
    with pytest.raises(ValueError):
        MetricRegistry.register("duplicate", position=1)(type("Duplicate", (), {}))
    assert "duplicate" not in MetricRegistry.get_all_names()


def test_registry_rejects_unknown_type():
    with pytest.raises(ValueError):
        MetricRegistry.register("odd", position=99, metric_type="sideways")


def test_engine_excludes_metrics():
    engine = Engine(exclude_metrics={"page_speed", "sitemap"})
    assert "page_speed" not in engine.metrics
    assert len(engine.metrics) == 19


def test_passive_metrics_are_idempotent(make_context):
    html = """
    <html lang="en"><head><title>Widgets</title>
    <meta name="description" content="Short">
    </head><body><h1>Widgets</h1><img src="a.png"><a href="/x">x</a><a href="https://b.org">b</a></body></html>
    """
    context = make_context(html)
    engine = Engine(exclude_metrics=set(MetricRegistry.get_metrics_by_type("active")))

    first = asyncio.run(engine.analyze_context(context))
    second = asyncio.run(engine.analyze_context(context))

    assert first == second
    assert [r.to_dict() for r in first] == [r.to_dict() for r in second]
