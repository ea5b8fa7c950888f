from typing import Iterable, List

from protoready.core.logging import get_logger
from protoready.schemas.finding import Finding
from .models import CostEstimate, RemediationPhase, Task
from .priorities import PHASE_PLAN, effort_to_hours, hours_to_cost

logger = get_logger("roadmap")


class RoadmapBuilder:
    """Groups findings into fixed severity-tier phases of remediation tasks."""

    def build_roadmap(self, findings: Iterable[Finding]) -> List[RemediationPhase]:
        """
        Convert findings into an ordered remediation roadmap.

        Process:
        1. Bucket findings by severity tier (critical, high, medium)
        2. Turn each finding into one Task, keeping scan order
        3. Drop tiers with no tasks

        Args:
            findings: scanner output; low-severity findings are ignored

        Returns:
            List[RemediationPhase] ordered critical -> high -> medium
        """
        findings = list(findings)
        roadmap: List[RemediationPhase] = []

        for severity, plan in PHASE_PLAN.items():
            tier = [f for f in findings if f.severity == severity]
            if not tier:
                continue

            tasks = [
                Task(
                    id=f"{severity.value}-{index}",
                    title=finding.title,
                    description=finding.recommendation,
                    category=finding.category,
                    effort_hours=effort_to_hours(finding.effort),
                )
                for index, finding in enumerate(tier)
            ]
            roadmap.append(RemediationPhase(
                phase=plan.phase,
                title=plan.title,
                description=plan.description,
                priority=severity,
                estimated_days=plan.estimated_days,
                tasks=tasks,
            ))

        logger.debug(f"Roadmap built: {len(roadmap)} phases, {sum(len(p.tasks) for p in roadmap)} tasks")
        return roadmap

    def estimate_cost(self, roadmap: Iterable[RemediationPhase]) -> CostEstimate:
        total_hours = sum(phase.total_hours for phase in roadmap)
        return CostEstimate(**hours_to_cost(total_hours))


roadmap_builder = RoadmapBuilder()
