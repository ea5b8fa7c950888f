# protoready/services/scoring.py
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable, List

from protoready.core.constants import (
    DIMENSION_WEIGHTS,
    MAX_HIGH_FINDINGS_FOR_READY,
    NEEDS_WORK_SCORE,
    NOT_READY_SCORE,
    SCORE_WEIGHTS,
    DeploymentReadiness,
    FindingCategory,
    MaintainabilityGrade,
    SeverityLevel,
)
from protoready.schemas.assessment import DimensionScores
from protoready.schemas.finding import Finding

MAX_SCORE = 100

# Lower bound of each grade, best first
GRADE_THRESHOLDS = [
    (90, MaintainabilityGrade.A),
    (80, MaintainabilityGrade.B),
    (70, MaintainabilityGrade.C),
    (60, MaintainabilityGrade.D),
]

# Security score below which each rating applies, worst first
SECURITY_RATING_THRESHOLDS = [
    (40, SeverityLevel.CRITICAL),
    (60, SeverityLevel.HIGH),
    (80, SeverityLevel.MEDIUM),
]


def clamp(v: int, lo: int, hi: int) -> int:
    return max(lo, min(hi, v))


def round_half_up(value: Decimal) -> int:
    return int(value.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def dimension_score(findings: Iterable[Finding], category: FindingCategory) -> int:
    """100 minus the severity weights of the dimension's findings, floored at 0"""
    weights = SCORE_WEIGHTS[category]
    deduction = sum(weights.get(f.severity, 0) for f in findings if f.category == category)
    return clamp(MAX_SCORE - deduction, 0, MAX_SCORE)


def security_rating_for(security: int) -> SeverityLevel:
    for upper, rating in SECURITY_RATING_THRESHOLDS:
        if security < upper:
            return rating
    return SeverityLevel.LOW


def grade_for(maintainability: int) -> MaintainabilityGrade:
    for lower, grade in GRADE_THRESHOLDS:
        if maintainability >= lower:
            return grade
    return MaintainabilityGrade.F


def scalability_index_for(scalability: int) -> int:
    return clamp(round_half_up(Decimal(scalability) / 20), 1, 5)


def readiness_for(overall: int, findings: List[Finding]) -> DeploymentReadiness:
    severities = [f.severity for f in findings]
    if SeverityLevel.CRITICAL in severities or overall < NOT_READY_SCORE:
        return DeploymentReadiness.NOT_READY
    if severities.count(SeverityLevel.HIGH) > MAX_HIGH_FINDINGS_FOR_READY or overall < NEEDS_WORK_SCORE:
        return DeploymentReadiness.NEEDS_WORK
    return DeploymentReadiness.READY


@dataclass(frozen=True)
class ScoreCard:
    security: int
    performance: int
    scalability: int
    maintainability: int
    overall: int
    security_rating: SeverityLevel
    maintainability_grade: MaintainabilityGrade
    scalability_index: int
    deployment_readiness: DeploymentReadiness

    @property
    def dimensions(self) -> DimensionScores:
        return DimensionScores(
            security=self.security,
            performance=self.performance,
            scalability=self.scalability,
            maintainability=self.maintainability,
        )


class Scorer:
    """Turns findings into dimension scores and summary labels."""

    def score(self, findings: Iterable[Finding]) -> ScoreCard:
        findings = list(findings)
        scores = {category: dimension_score(findings, category) for category in FindingCategory}

        weighted = sum(
            Decimal(str(DIMENSION_WEIGHTS[category])) * scores[category]
            for category in FindingCategory
        )
        overall = clamp(round_half_up(weighted), 0, MAX_SCORE)

        return ScoreCard(
            security=scores[FindingCategory.SECURITY],
            performance=scores[FindingCategory.PERFORMANCE],
            scalability=scores[FindingCategory.SCALABILITY],
            maintainability=scores[FindingCategory.MAINTAINABILITY],
            overall=overall,
            security_rating=security_rating_for(scores[FindingCategory.SECURITY]),
            maintainability_grade=grade_for(scores[FindingCategory.MAINTAINABILITY]),
            scalability_index=scalability_index_for(scores[FindingCategory.SCALABILITY]),
            deployment_readiness=readiness_for(overall, findings),
        )


scorer = Scorer()
