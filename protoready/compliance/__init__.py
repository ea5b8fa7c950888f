"""
Regulatory compliance evaluation.

Usage:
    from protoready.compliance import compliance_evaluator

    report = compliance_evaluator.assess(code_output)
    for violation in report.violations:
        print(violation.regulation, violation.category)
"""

from .evaluator import (
    ComplianceEvaluator,
    compliance_evaluator,
    estimate_effort,
    regulation_score,
)
from .rules import GENERAL_RECOMMENDATIONS, REGULATION_GATES, SAFEGUARDS, Safeguard, Trigger

__all__ = [
    "ComplianceEvaluator",
    "compliance_evaluator",
    "estimate_effort",
    "regulation_score",
    "GENERAL_RECOMMENDATIONS",
    "REGULATION_GATES",
    "SAFEGUARDS",
    "Safeguard",
    "Trigger",
]
