from enum import IntEnum
from typing import List
from pydantic import Field

from protoready.core.constants import FindingCategory, SeverityLevel
from protoready.schemas.base import CamelModel


class PhaseNumber(IntEnum):
    """Roadmap phase numbers, fixed per severity tier"""
    CRITICAL = 1  # 0-15 days
    HIGH = 2      # 15-45 days
    MEDIUM = 3    # 45-90 days


class Task(CamelModel):
    """One remediation task, derived from exactly one finding."""
    id: str
    title: str
    description: str
    category: FindingCategory
    effort_hours: int


class RemediationPhase(CamelModel):
    """
    Severity-tier bucket of tasks with a fixed time budget.

    Phases are emitted most-urgent-first and only when they hold at
    least one task.
    """
    phase: PhaseNumber
    title: str
    description: str
    priority: SeverityLevel
    estimated_days: int
    tasks: List[Task] = Field(default_factory=list)

    @property
    def total_hours(self) -> int:
        return sum(task.effort_hours for task in self.tasks)


class CostEstimate(CamelModel):
    min: int = 0
    max: int = 0
