# protoready/compliance/evaluator.py
"""
Compliance Evaluator
Checks regulatory safeguards for the regulations the data inventory makes relevant
"""

from decimal import Decimal
from typing import Dict, List, Mapping, Optional, Tuple

from protoready.core.constants import COMPLIANCE_WEIGHTS, Regulation
from protoready.core.logging import get_logger
from protoready.scanners.data_classifier import DataClassifier, data_classifier
from protoready.schemas.compliance import (
    CertificationStatus,
    ComplianceAssessment,
    ComplianceViolation,
    DataInventory,
    RegulatoryScores,
)
from protoready.services.scoring import round_half_up
from .rules import (
    CERTIFICATION_REQUIRES_EMPTY_BUCKET,
    GENERAL_RECOMMENDATIONS,
    REGULATION_GATES,
    SAFEGUARDS,
    Safeguard,
)

logger = get_logger("compliance")


def estimate_effort(violation_count: int) -> str:
    """Rough time to close a regulation's open violations"""
    if violation_count == 0:
        return "ready"
    if violation_count <= 2:
        return "1-2 weeks"
    if violation_count <= 5:
        return "1-2 months"
    if violation_count <= 10:
        return "3-6 months"
    return "6+ months"


def regulation_score(violations: List[ComplianceViolation]) -> int:
    deduction = sum(COMPLIANCE_WEIGHTS.get(v.severity, 0) for v in violations)
    return max(0, 100 - deduction)


class ComplianceEvaluator:
    """
    Evaluates HIPAA, GDPR, CCPA and PCI DSS safeguards.

    A regulation is only checked when its gating inventory bucket holds
    evidence; an ungated regulation contributes no violations and scores 100.
    """

    def __init__(
        self,
        safeguards: Mapping[Regulation, Tuple[Safeguard, ...]] = SAFEGUARDS,
        classifier: DataClassifier = data_classifier,
    ):
        self.safeguards = safeguards
        self.classifier = classifier

    def applies(self, regulation: Regulation, inventory: DataInventory) -> bool:
        return inventory.has(REGULATION_GATES[Regulation(regulation)])

    def evaluate_regulation(
        self,
        regulation: Regulation,
        text: str,
        inventory: DataInventory,
    ) -> List[ComplianceViolation]:
        regulation = Regulation(regulation)
        if not self.applies(regulation, inventory):
            return []

        text = text or ""
        return [
            safeguard.to_violation()
            for safeguard in self.safeguards.get(regulation, ())
            if safeguard.is_violated(text)
        ]

    def evaluate(self, text: str, inventory: DataInventory) -> List[ComplianceViolation]:
        """All violations, in HIPAA, GDPR, CCPA, PCI order"""
        violations: List[ComplianceViolation] = []
        for regulation in Regulation:
            found = self.evaluate_regulation(regulation, text, inventory)
            if found:
                logger.debug(f"{regulation.value}: {len(found)} violations")
            violations.extend(found)
        return violations

    def assess(self, text: str, inventory: Optional[DataInventory] = None) -> ComplianceAssessment:
        """
        Full compliance report for text.

        Args:
            text: raw codebase dump
            inventory: precomputed data inventory; classified from text when omitted

        Returns:
            ComplianceAssessment with per-regulation scores, violations,
            recommendations and certification readiness
        """
        if inventory is None:
            inventory = self.classifier.classify(text or "")

        by_regulation: Dict[Regulation, List[ComplianceViolation]] = {
            regulation: self.evaluate_regulation(regulation, text, inventory)
            for regulation in Regulation
        }
        violations = [v for regulation in Regulation for v in by_regulation[regulation]]

        scores = RegulatoryScores(**{
            regulation.name.lower(): regulation_score(found)
            for regulation, found in by_regulation.items()
        })
        values = [scores.hipaa, scores.gdpr, scores.ccpa, scores.pci]
        overall = round_half_up(Decimal(sum(values)) / len(values))

        return ComplianceAssessment(
            overall_compliance=overall,
            regulatory_scores=scores,
            violations=violations,
            data_inventory=inventory,
            recommended_actions=self.recommended_actions(violations),
            certification_readiness=self.certification_readiness(by_regulation, inventory),
        )

    @staticmethod
    def recommended_actions(violations: List[ComplianceViolation]) -> List[str]:
        actions: List[str] = []
        for violation in violations:
            if violation.remediation not in actions:
                actions.append(violation.remediation)
        actions.extend(r for r in GENERAL_RECOMMENDATIONS if r not in actions)
        return actions

    def certification_readiness(
        self,
        by_regulation: Mapping[Regulation, List[ComplianceViolation]],
        inventory: DataInventory,
    ) -> Dict[str, CertificationStatus]:
        readiness: Dict[str, CertificationStatus] = {}
        for regulation in Regulation:
            found = by_regulation.get(regulation, [])
            ready = not found
            if regulation in CERTIFICATION_REQUIRES_EMPTY_BUCKET:
                ready = ready and not inventory.has(REGULATION_GATES[regulation])

            readiness[regulation.value] = CertificationStatus(
                ready=ready,
                missing_requirements=[v.category for v in found],
                estimated_effort=estimate_effort(len(found)),
            )
        return readiness


compliance_evaluator = ComplianceEvaluator()
