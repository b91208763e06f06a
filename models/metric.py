from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List


class Status(str, Enum):
    """Summary of a metric score. Thresholds belong to each metric."""
    PASS = "pass"
    WARNING = "warning"
    FAIL = "fail"


@dataclass(frozen=True)
class MetricResult:
    """Outcome of a single SEO check."""
    name: str
    description: str
    score: int  # always within [0, 100]
    status: Status
    issues: List[str] = field(default_factory=list)
    recommendations: List[str] = field(default_factory=list)
    value: str = ""  # human-readable observed value

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "description": self.description,
            "score": self.score,
            "status": self.status.value,
            "issues": list(self.issues),
            "recommendations": list(self.recommendations),
            "value": self.value,
        }
