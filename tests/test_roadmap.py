# tests/test_roadmap.py
"""
Remediation roadmap tests
Tests: phase ordering, omission, task derivation, cost estimate
"""

import pytest

from protoready.core.constants import EffortLevel, FindingCategory, SeverityLevel
from protoready.remediation import PhaseNumber, effort_to_hours


class TestBuildRoadmap:
    """Test phase construction"""

    def test_empty(self, roadmap_builder):
        roadmap = roadmap_builder.build_roadmap([])

        assert roadmap == []
        cost = roadmap_builder.estimate_cost(roadmap)
        assert (cost.min, cost.max) == (0, 0)

    def test_low_findings_never_promoted(self, roadmap_builder, make_finding):
        findings = [make_finding(severity=SeverityLevel.LOW)] * 3
        assert roadmap_builder.build_roadmap(findings) == []

    def test_all_tiers(self, roadmap_builder, make_finding):
        findings = [
            make_finding(severity=SeverityLevel.MEDIUM, title="Medium"),
            make_finding(severity=SeverityLevel.LOW, title="Low"),
            make_finding(severity=SeverityLevel.CRITICAL, title="Critical"),
            make_finding(severity=SeverityLevel.HIGH, title="High"),
        ]

        roadmap = roadmap_builder.build_roadmap(findings)

        assert [p.phase for p in roadmap] == [PhaseNumber.CRITICAL, PhaseNumber.HIGH, PhaseNumber.MEDIUM]
        assert [p.priority for p in roadmap] == [SeverityLevel.CRITICAL, SeverityLevel.HIGH, SeverityLevel.MEDIUM]
        assert [p.estimated_days for p in roadmap] == [15, 30, 45]
        assert roadmap[0].title == "Critical Security & Stability Fixes"
        assert roadmap[1].title == "High Priority Improvements"
        assert roadmap[2].title == "Quality & Performance Enhancements"
        assert sum(len(p.tasks) for p in roadmap) == 3

    def test_missing_tier_omitted(self, roadmap_builder, make_finding):
        findings = [
            make_finding(severity=SeverityLevel.MEDIUM),
            make_finding(severity=SeverityLevel.HIGH),
        ]
        assert [p.phase for p in roadmap_builder.build_roadmap(findings)] == [2, 3]

    def test_tasks_derived_from_findings(self, roadmap_builder, make_finding):
        findings = [
            make_finding(FindingCategory.SECURITY, SeverityLevel.CRITICAL, EffortLevel.HIGH, "Leaked Key"),
            make_finding(FindingCategory.PERFORMANCE, SeverityLevel.CRITICAL, EffortLevel.LOW, "Slow Query"),
        ]

        tasks = roadmap_builder.build_roadmap(findings)[0].tasks

        assert [t.id for t in tasks] == ["critical-0", "critical-1"]
        assert tasks[0].title == "Leaked Key"
        assert tasks[0].description == findings[0].recommendation
        assert tasks[0].category == FindingCategory.SECURITY
        assert [t.effort_hours for t in tasks] == [40, 4]

    def test_wire_format(self, roadmap_builder, make_finding):
        phase = roadmap_builder.build_roadmap([make_finding(severity=SeverityLevel.HIGH)])[0]

        data = phase.to_json_dict()

        assert data["phase"] == 2
        assert data["priority"] == "high"
        assert data["estimatedDays"] == 30
        assert data["tasks"][0]["effortHours"] == 16


class TestCostEstimate:
    """Test hour and cost arithmetic"""

    def test_cost_range(self, roadmap_builder, make_finding):
        findings = [
            make_finding(severity=SeverityLevel.CRITICAL, effort=EffortLevel.HIGH),
            make_finding(severity=SeverityLevel.MEDIUM, effort=EffortLevel.LOW),
            make_finding(severity=SeverityLevel.LOW, effort=EffortLevel.HIGH),
        ]

        roadmap = roadmap_builder.build_roadmap(findings)
        cost = roadmap_builder.estimate_cost(roadmap)

        assert sum(p.total_hours for p in roadmap) == 44
        assert cost.min == 44 * 75
        assert cost.max == 44 * 150

    def test_finding_without_effort_costs_eight_hours(self, roadmap_builder, make_finding):
        finding = make_finding(severity=SeverityLevel.HIGH, effort=None)

        roadmap = roadmap_builder.build_roadmap([finding])

        assert finding.effort is None
        assert roadmap[0].tasks[0].effort_hours == 8
        assert roadmap_builder.estimate_cost(roadmap).min == 8 * 75

    @pytest.mark.parametrize("effort,hours", [
        (EffortLevel.LOW, 4),
        (EffortLevel.MEDIUM, 16),
        (EffortLevel.HIGH, 40),
        ("high", 40),
        (None, 8),
        ("enormous", 8),
    ])
    def test_effort_to_hours(self, effort, hours):
        assert effort_to_hours(effort) == hours
