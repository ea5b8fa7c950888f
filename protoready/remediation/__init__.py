"""
ProtoReady Remediation Roadmap

Turns scanner findings into a phased remediation plan with a cost range.

Core components:
- models: Pydantic data structures for Task, RemediationPhase, CostEstimate
- priorities: Severity tier -> phase plan table and effort-hour conversion
- roadmap: Builder that buckets findings into phases and prices them

Usage:
    from protoready.remediation import roadmap_builder

    roadmap = roadmap_builder.build_roadmap(findings)
    cost = roadmap_builder.estimate_cost(roadmap)

    for phase in roadmap:
        print(phase.phase, phase.title, len(phase.tasks))  # critical first
"""

from .models import CostEstimate, PhaseNumber, RemediationPhase, Task
from .priorities import PHASE_PLAN, effort_to_hours
from .roadmap import RoadmapBuilder, roadmap_builder

__all__ = [
    "CostEstimate",
    "PhaseNumber",
    "RemediationPhase",
    "Task",
    "PHASE_PLAN",
    "effort_to_hours",
    "RoadmapBuilder",
    "roadmap_builder",
]
