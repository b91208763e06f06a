"""Static, ordered metric registration."""
import logging
from dataclasses import dataclass
from typing import Dict, Type, List, Set

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MetricSpec:
    """Registry record for one metric."""
    name: str
    position: int # Evaluation and report order
    metric_class: Type
    metric_type: str # "passive" (page only) or "active" (makes its own HTTP requests)


class MetricRegistry:
    """Registry of metric evaluators, ordered by declared position."""

    _metrics: Dict[str, MetricSpec] = {}

    @classmethod
    def register(cls, name: str, position: int, metric_type: str = "passive"):
        """Decorator to register a metric class.

        Args:
            name: Unique identifier for the metric (e.g., "title_tag", "sitemap")
            position: Place of the metric in the report; unique across the registry
            metric_type: Either "passive" (default) or "active" to indicate if it makes HTTP requests

        Example:
            @MetricRegistry.register("title_tag", position=1)
            class TitleTagMetric(Metric):
                async def analyze(self, context: ScanContext) -> MetricResult:
                    ...
        """
        if metric_type not in ("passive", "active"):
            raise ValueError(f"metric_type must be 'passive' or 'active', got {metric_type}")

        def decorator(metric_class: Type):
            if name in cls._metrics:
                logger.warning(f"Metric '{name}' already registered, overwriting")
            for spec in cls._metrics.values():
                if spec.position == position and spec.name != name:
                    raise ValueError(f"Position {position} already taken by metric '{spec.name}'")

            cls._metrics[name] = MetricSpec(
                name=name,
                position=position,
                metric_class=metric_class,
                metric_type=metric_type,
            )
            logger.debug(f"Registered metric: {name} #{position} ({metric_type}) -> {metric_class.__name__}")
            return metric_class
        return decorator

    @classmethod
    def specs(cls) -> List[MetricSpec]:
        """All registered metrics in report order."""
        return sorted(cls._metrics.values(), key=lambda spec: spec.position)

    @classmethod
    def get_all_names(cls) -> List[str]:
        return [spec.name for spec in cls.specs()]

    @classmethod
    def get_metrics_by_type(cls, metric_type: str) -> List[str]:
        return [spec.name for spec in cls.specs() if spec.metric_type == metric_type]

    @classmethod
    def instantiate_all(cls, exclude: Set[str] = None) -> Dict[str, object]:
        """Instantiate registered metrics in report order.

        Args:
            exclude: Set of metric names to leave out

        Returns:
            Dictionary mapping metric name to metric instance, in report order
        """
        exclude = exclude or set()
        instances = {}

        for spec in cls.specs():
            if spec.name in exclude:
                logger.info(f"Skipping excluded metric: {spec.name}")
                continue
            instances[spec.name] = spec.metric_class()
            logger.debug(f"Instantiated metric: {spec.name}")

        return instances
