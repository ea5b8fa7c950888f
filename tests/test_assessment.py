# tests/test_assessment.py
"""
End-to-end assessment engine tests
Tests: reference scenarios, score ranges, idempotence, monotonicity, gating
"""

import json
import logging
import pytest

from protoready.core.logging import get_logger
from protoready.core.constants import (
    DeploymentReadiness,
    FindingCategory,
    Regulation,
    SeverityLevel,
)
from protoready.scanners.rules import CATALOG_VERSION
from protoready.schemas.assessment import AssessmentInput


class TestScenarios:
    """Reference scenarios"""

    def test_hardcoded_password(self, engine):
        result = engine.assess('const password = "hunter2"')

        assert len(result.findings) == 1
        finding = result.findings[0]
        assert finding.category == FindingCategory.SECURITY
        assert finding.severity == SeverityLevel.CRITICAL
        assert finding.title == "Hardcoded Password Detected"
        assert result.scores.security == 75
        assert result.deployment_readiness == DeploymentReadiness.NOT_READY

        assert [p.phase for p in result.roadmap] == [1]
        assert (result.cost_estimate.min, result.cost_estimate.max) == (40 * 75, 40 * 150)

    def test_complex_state(self, engine):
        text = "\n".join(f"const [field{i}, setField{i}] = useState('')" for i in range(12))

        result = engine.assess(text, tool_type="cursor")

        scalability = [f for f in result.findings if f.category == FindingCategory.SCALABILITY]
        assert len(scalability) == 1
        assert scalability[0].severity == SeverityLevel.HIGH
        assert scalability[0].title == "Complex State Management"

    def test_email_without_consent(self, engine):
        result = engine.assess("const contact = 'user@example.com'")

        violations = result.compliance_assessment.violations
        critical_gdpr = [
            v for v in violations
            if v.regulation == Regulation.GDPR and v.severity == SeverityLevel.CRITICAL
        ]
        assert len(critical_gdpr) == 1
        assert critical_gdpr[0].category == "Lawful Basis"

    def test_card_number_without_encryption(self, engine):
        result = engine.assess("card = '4111111111111111'")
        compliance = result.compliance_assessment

        assert compliance.data_inventory.financial_data != []
        critical_pci = [
            v for v in compliance.violations
            if v.regulation == Regulation.PCI and v.severity == SeverityLevel.CRITICAL
        ]
        assert len(critical_pci) == 1
        assert critical_pci[0].category == "Data Storage"

    def test_neutral_hundred_characters(self, engine, neutral_dump):
        assert len(neutral_dump) == 100

        result = engine.assess(neutral_dump)

        assert result.overall_score == 100
        assert result.deployment_readiness == DeploymentReadiness.READY


class TestProperties:
    """Properties that hold for every input"""

    SAMPLES = [
        "",
        'const password = "hunter2"',
        "for (const a of xs) { for (const b of ys) { eval(a + b) } }\n" * 40,
        "patient user@example.com 4111111111111111 console.log(x)\n" * 20,
        "\n".join(["line"] * 200),
    ]

    def test_empty_input(self, engine):
        result = engine.assess("")

        assert result.scores.to_json_dict() == {
            "security": 100,
            "performance": 100,
            "scalability": 100,
            "maintainability": 100,
        }
        assert result.findings == []
        assert result.roadmap == []
        assert result.deployment_readiness == DeploymentReadiness.READY
        assert result.compliance_assessment.overall_compliance == 100

    @pytest.mark.parametrize("text", SAMPLES)
    def test_scores_in_range(self, engine, text):
        result = engine.assess(text)

        assert 0 <= result.overall_score <= 100
        for value in result.scores.to_json_dict().values():
            assert 0 <= value <= 100
        assert 1 <= result.scalability_index <= 5

    @pytest.mark.parametrize("text", SAMPLES)
    def test_idempotent(self, engine, text):
        first = json.dumps(engine.assess(text).to_json_dict())
        second = json.dumps(engine.assess(text).to_json_dict())
        assert first == second

    def test_added_critical_never_raises_score(self, engine):
        base = "render the dashboard header\nconsole.log(state)"
        worse = base + '\npassword = "hunter2"'

        assert engine.assess(worse).overall_score <= engine.assess(base).overall_score

    def test_added_credential_keeps_env_finding(self, engine):
        base = "const a = 1\nauth\n" + "x\n" * 58
        worse = base + 'const password = "hunter2"'

        before = engine.assess(base)
        after = engine.assess(worse)

        assert "Missing Environment Variable Usage" in [f.title for f in before.findings]
        assert "Missing Environment Variable Usage" in [f.title for f in after.findings]
        assert after.scores.security < before.scores.security
        assert after.overall_score <= before.overall_score

    def test_roadmap_order(self, engine):
        result = engine.assess('password = "hunter2"\neval(input)\nnew Date()')

        assert [p.priority for p in result.roadmap] == [
            SeverityLevel.CRITICAL,
            SeverityLevel.HIGH,
            SeverityLevel.MEDIUM,
        ]

    def test_tasks_match_phase_findings(self, engine, lovable_dump):
        result = engine.assess(lovable_dump, tool_type="lovable")

        phased = [f for f in result.findings if f.severity != SeverityLevel.LOW]
        tasks = [t for p in result.roadmap for t in p.tasks]
        assert len(tasks) == len(phased)

    def test_no_regulated_data_no_violations(self, engine):
        text = 'password = "hunter2"\nconsole.log(token)\nno consent, privacy policy or encryption'
        assert engine.assess(text).compliance_assessment.violations == []


class TestEngineInterface:
    """Test the engine entry points and wire format"""

    def test_analyze_input_model(self, engine, lovable_dump):
        payload = AssessmentInput(tool_type="lovable", code_output=lovable_dump, project_type="saas")

        result = engine.analyze(payload)

        assert result == engine.assess(lovable_dump, tool_type="lovable")
        assert "tool-missing-react-keys" in [f.rule_id for f in result.findings]

    def test_unknown_tool_type_is_tolerated(self, engine, lovable_dump):
        result = engine.assess(lovable_dump, tool_type="no-such-tool")
        assert all(not f.rule_id.startswith("tool-") for f in result.findings)

    def test_camel_case_output(self, engine, lovable_dump):
        data = engine.assess(lovable_dump).to_json_dict()

        assert set(data) == {
            "overallScore",
            "securityRating",
            "scalabilityIndex",
            "maintainabilityGrade",
            "deploymentReadiness",
            "scores",
            "findings",
            "roadmap",
            "costEstimate",
            "complianceAssessment",
            "catalogVersion",
        }
        assert data["catalogVersion"] == CATALOG_VERSION
        assert data["findings"][0]["ruleId"].startswith("sec-")

    def test_completion_log_context(self, engine):
        records = []
        handler = logging.Handler()
        handler.emit = records.append
        package_logger = get_logger()
        package_logger.addHandler(handler)
        try:
            engine.analyze(AssessmentInput(
                tool_type="bolt",
                code_output="const contact = 'user@example.com'",
                project_type="saas",
                project_description="Team task tracker",
                project_name="taskly",
            ))
        finally:
            package_logger.removeHandler(handler)

        record = next(r for r in records if r.getMessage() == "Assessment completed")
        assert record.project_name == "taskly"
        assert record.project_description == "Team task tracker"
        assert record.data_categories == ["Personal Identifiers"]

    def test_none_text(self, engine):
        assert engine.assess(None).overall_score == 100
