import os
import logging
import yaml
from typing import List, Optional
from models.signature import Signature, EvidenceRule

RULES_DIR = os.path.dirname(os.path.abspath(__file__))

logger = logging.getLogger(__name__)

def load_signatures(rules_dir: Optional[str] = None, filename: str = "analytics.yaml") -> List[Signature]:
    """
    Loads tracking signatures from a YAML file, preserving file order.
    """
    filepath = os.path.join(rules_dir or RULES_DIR, filename)
    with open(filepath, "r", encoding="utf-8") as f:
        rules_data = yaml.safe_load(f)

    signatures: List[Signature] = []
    for rule_data in rules_data or []:
        # Basic validation
        if not all(k in rule_data for k in ["name", "category", "evidence"]):
            logger.warning(f"Skipping invalid signature in {filename}: {rule_data}")
            continue

        evidence_rules = []
        for evidence_item in rule_data["evidence"]:
            if evidence_item.get("type") not in ("script_content", "script_src") or not evidence_item.get("value"):
                logger.warning(f"Skipping invalid evidence for {rule_data['name']}: {evidence_item}")
                continue
            evidence_rules.append(
                EvidenceRule(
                    type=evidence_item["type"],
                    value=str(evidence_item["value"]),
                )
            )

        signatures.append(
            Signature(
                name=rule_data["name"],
                category=rule_data["category"],
                evidence_rules=evidence_rules,
                label=rule_data.get("label"),
            )
        )
    logger.debug(f"Loaded {len(signatures)} signatures from {filepath}")
    return signatures
