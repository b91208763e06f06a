"""Combines metric results into the overall page score."""
from typing import Dict, Sequence
import logging

from core.scoring import round_half_up, MAX_SCORE
from models.metric import MetricResult, Status

logger = logging.getLogger(__name__)


class MetricAggregator:
    """Aggregates results from all metrics."""

    @staticmethod
    def aggregate(results: Sequence[MetricResult]) -> int:
        """
        Overall score: unweighted mean of the metric scores, rounded half up.

        Args:
            results: Metric results in report order

        Returns:
            Integer in [0, 100]; 0 when there are no results
        """
        if not results:
            return 0

        total = sum(result.score for result in results)
        overall = round_half_up(total / len(results))
        logger.debug(f"Aggregated {len(results)} metrics: total={total}, overall={overall}")
        return max(0, min(MAX_SCORE, overall))

    @staticmethod
    def summarize(results: Sequence[MetricResult]) -> Dict[str, int]:
        """Count results per status, e.g. ``{"pass": 14, "warning": 5, "fail": 2}``."""
        counts = {status.value: 0 for status in Status}
        for result in results:
            counts[result.status.value] += 1
        return counts


def aggregate(results: Sequence[MetricResult]) -> int:
    return MetricAggregator.aggregate(results)
