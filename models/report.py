from dataclasses import dataclass, field
from typing import Any, Dict, List

from models.metric import MetricResult


@dataclass(frozen=True)
class ScanReport:
    """Result of one successful scan. Built once, never mutated."""
    domain: str
    requested_url: str
    final_url: str
    base_url: str  # scheme://host[:port] of the final URL
    overall_score: int
    metrics: List[MetricResult] = field(default_factory=list)
    scan_date: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {
            "domain": self.domain,
            "url": self.final_url,
            "requestedUrl": self.requested_url,
            "baseUrl": self.base_url,
            "overallScore": self.overall_score,
            "metrics": [m.to_dict() for m in self.metrics],
            "scanDate": self.scan_date,
            "success": True,
        }
