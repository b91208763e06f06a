from dataclasses import dataclass, field
from typing import List, Optional

@dataclass(frozen=True)
class EvidenceRule:
    """Defines one way of recognising a tracking snippet."""
    type: str # 'script_content' (inline script text) or 'script_src' (script src attribute)
    value: str # Case-sensitive substring to look for

@dataclass(frozen=True)
class Signature:
    """An analytics or tag-manager product and the evidence that reveals it."""
    name: str
    category: str
    evidence_rules: List[EvidenceRule] = field(default_factory=list)
    label: Optional[str] = None # Shown as the metric value when detected
