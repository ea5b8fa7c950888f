from typing import Dict, NamedTuple, Optional

from protoready.core.constants import (
    DEFAULT_EFFORT_HOURS,
    EFFORT_HOURS,
    HOURLY_RATE_MAX,
    HOURLY_RATE_MIN,
    EffortLevel,
    SeverityLevel,
)
from .models import PhaseNumber


class PhasePlan(NamedTuple):
    phase: PhaseNumber
    title: str
    description: str
    estimated_days: int


# Severity tiers that get a roadmap phase, most urgent first.
# Low-severity findings never enter the roadmap.
PHASE_PLAN: Dict[SeverityLevel, PhasePlan] = {
    SeverityLevel.CRITICAL: PhasePlan(
        phase=PhaseNumber.CRITICAL,
        title="Critical Security & Stability Fixes",
        description="Address critical vulnerabilities and stability issues that prevent production deployment",
        estimated_days=15,
    ),
    SeverityLevel.HIGH: PhasePlan(
        phase=PhaseNumber.HIGH,
        title="High Priority Improvements",
        description="Implement important security and performance improvements",
        estimated_days=30,
    ),
    SeverityLevel.MEDIUM: PhasePlan(
        phase=PhaseNumber.MEDIUM,
        title="Quality & Performance Enhancements",
        description="Improve code quality, performance, and maintainability",
        estimated_days=45,
    ),
}


def effort_to_hours(effort: Optional[EffortLevel]) -> int:
    """
    Convert an effort level to remediation hours.

    low: 4, medium: 16, high: 40; anything else falls back to 8.
    """
    if effort is None:
        return DEFAULT_EFFORT_HOURS
    try:
        return EFFORT_HOURS[EffortLevel(effort)]
    except ValueError:
        return DEFAULT_EFFORT_HOURS


def hours_to_cost(hours: int) -> Dict[str, int]:
    return {"min": hours * HOURLY_RATE_MIN, "max": hours * HOURLY_RATE_MAX}
