"""Shared scoring idiom for metrics.

Every metric starts at 100/pass and folds an ordered list of findings. A finding
either subtracts a penalty or replaces the running score outright, and always
overwrites the running status, so later findings win. The result is clamped to
[0, 100] and rounded half up; the metric's recommendations are attached only when
the unrounded score ended below 100.
"""
import math
from dataclasses import dataclass
from typing import Callable, Iterable, List, Optional, Sequence, Tuple

from core.context import ScanContext
from models.metric import MetricResult, Status

MAX_SCORE = 100


@dataclass(frozen=True)
class Finding:
    issue: str
    status: Status
    penalty: float = 0
    score: Optional[float] = None  # absolute score; takes precedence over penalty


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def clamp_score(value: float) -> int:
    return max(0, min(MAX_SCORE, round_half_up(value)))


def fold_findings(findings: Iterable[Finding], start: float = MAX_SCORE) -> Tuple[float, Status]:
    score = start
    status = Status.PASS
    for finding in findings:
        if finding.score is not None:
            score = finding.score
        else:
            score -= finding.penalty
        status = finding.status
    return score, status


def status_by_score(score: float, warning_above: float = 60) -> Status:
    return Status.WARNING if score > warning_above else Status.FAIL


def build_result(
    name: str,
    description: str,
    findings: Sequence[Finding],
    recommendations: Sequence[str],
    value: str,
    status_from_score: Optional[Callable[[float], Status]] = None,
    always_recommend: bool = False,
) -> MetricResult:
    """Fold ``findings`` into a MetricResult.

    Args:
        status_from_score: Recomputes the status from the final score when it is
            below 100 (social tag metrics grade on the total, not per finding)
        always_recommend: Attach recommendations even on a perfect score
    """
    raw, status = fold_findings(findings)
    if status_from_score is not None and raw < MAX_SCORE:
        status = status_from_score(raw)

    emit = always_recommend or raw < MAX_SCORE
    return MetricResult(
        name=name,
        description=description,
        score=clamp_score(raw),
        status=status,
        issues=[f.issue for f in findings],
        recommendations=list(recommendations) if emit else [],
        value=value,
    )


class Metric:
    """Base for metric evaluators.

    Subclasses set ``name``, ``description`` and ``recommendations`` and implement
    ``analyze``. Metrics hold no per-scan state.
    """

    name: str = ""
    description: str = ""
    recommendations: Tuple[str, ...] = ()

    async def analyze(self, context: ScanContext) -> MetricResult:
        raise NotImplementedError

    def result(self, findings: List[Finding], value: str, **kwargs) -> MetricResult:
        return build_result(self.name, self.description, findings, self.recommendations, value, **kwargs)
