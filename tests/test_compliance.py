# tests/test_compliance.py
"""
Compliance and regulatory tests
Tests: HIPAA, GDPR, CCPA, PCI DSS gating, safeguards, scoring, certification
"""

import pytest

from protoready.compliance.evaluator import ComplianceEvaluator, estimate_effort, regulation_score
from protoready.compliance.rules import GENERAL_RECOMMENDATIONS, Safeguard, Trigger
from protoready.core.constants import InventoryBucket, Regulation, SeverityLevel

EMAIL_ONLY = "const contact = 'user@example.com'"
CARD_ONLY = "card = '4111111111111111'"


def _by(violations, regulation):
    return [v for v in violations if v.regulation == regulation]


class TestGating:
    """Test regulations only apply when their data is present"""

    @pytest.mark.parametrize("text", [
        "",
        "a" * 100,
        'password = "hunter2" and no consent, privacy or encryption anywhere',
    ])
    def test_no_regulated_data_no_violations(self, evaluator, text):
        report = evaluator.assess(text)

        assert report.violations == []
        assert report.overall_compliance == 100
        assert report.regulatory_scores.model_dump() == {"hipaa": 100, "gdpr": 100, "ccpa": 100, "pci": 100}

    def test_evaluate_regulation_skips_ungated(self, evaluator, classifier):
        inventory = classifier.classify(EMAIL_ONLY)

        assert evaluator.evaluate_regulation(Regulation.HIPAA, EMAIL_ONLY, inventory) == []
        assert evaluator.evaluate_regulation(Regulation.PCI, EMAIL_ONLY, inventory) == []
        assert evaluator.evaluate_regulation(Regulation.GDPR, EMAIL_ONLY, inventory) != []

    def test_regulation_order(self, evaluator, classifier):
        text = "patient user@example.com 4111111111111111"
        violations = evaluator.evaluate(text, classifier.classify(text))

        order = list(Regulation)
        positions = [order.index(v.regulation) for v in violations]
        assert positions == sorted(positions)
        assert set(v.regulation for v in violations) == set(Regulation)


class TestGDPRCompliance:
    """Test GDPR safeguards"""

    def test_email_without_consent(self, evaluator):
        report = evaluator.assess(EMAIL_ONLY)
        gdpr = _by(report.violations, Regulation.GDPR)

        critical = [v for v in gdpr if v.severity == SeverityLevel.CRITICAL]
        assert len(critical) == 1
        assert critical[0].category == "Lawful Basis"
        assert [v.category for v in gdpr] == [
            "Lawful Basis",
            "Data Subject Rights",
            "Data Protection by Design",
        ]
        assert report.regulatory_scores.gdpr == 50

    def test_international_transfer_reference(self, evaluator):
        gdpr = _by(evaluator.assess(EMAIL_ONLY + "\ncross-border replication").violations, Regulation.GDPR)
        assert "International Transfers" in [v.category for v in gdpr]

    def test_all_safeguards_present(self, evaluator):
        text = "\n".join([
            EMAIL_ONLY,
            "By signing up you accept our privacy policy",
            "Settings > delete account",
            "Collect only necessary fields",
            "Footer: opt out of data sale",
            "Support can delete data on request",
        ])

        report = evaluator.assess(text)

        assert _by(report.violations, Regulation.GDPR) == []
        assert _by(report.violations, Regulation.CCPA) == []
        assert report.certification_readiness["GDPR"].ready is True


class TestCCPACompliance:
    """Test CCPA safeguards"""

    def test_email_without_privacy_controls(self, evaluator):
        report = evaluator.assess(EMAIL_ONLY)
        ccpa = _by(report.violations, Regulation.CCPA)

        assert [(v.category, v.severity) for v in ccpa] == [
            ("Consumer Rights", SeverityLevel.HIGH),
            ("Transparency", SeverityLevel.MEDIUM),
            ("Consumer Rights", SeverityLevel.MEDIUM),
        ]
        assert report.regulatory_scores.ccpa == 65


class TestHIPAACompliance:
    """Test HIPAA safeguards"""

    def test_phi_without_safeguards(self, evaluator):
        report = evaluator.assess("patient record viewer")
        hipaa = _by(report.violations, Regulation.HIPAA)

        assert [v.category for v in hipaa] == [
            "Administrative Safeguards",
            "Physical Safeguards",
            "Technical Safeguards",
            "Technical Safeguards",
        ]
        assert hipaa[1].severity == SeverityLevel.CRITICAL
        assert report.regulatory_scores.hipaa == 100 - 15 - 25 - 15 - 10

    def test_phi_with_safeguards(self, evaluator):
        text = "\n".join([
            "patient record viewer",
            "security officer: on call rotation",
            "encrypt at rest with AES 256",
            "role based access control, authorize every request",
            "audit log of record access",
        ])

        report = evaluator.assess(text)

        assert _by(report.violations, Regulation.HIPAA) == []
        # Handling PHI at all blocks certification
        assert report.certification_readiness["HIPAA"].ready is False
        assert report.certification_readiness["HIPAA"].estimated_effort == "ready"


class TestPCICompliance:
    """Test PCI DSS safeguards"""

    def test_card_number_without_encryption(self, evaluator):
        report = evaluator.assess(CARD_ONLY)
        pci = _by(report.violations, Regulation.PCI)

        assert report.data_inventory.has(InventoryBucket.FINANCIAL)
        critical = [v for v in pci if v.severity == SeverityLevel.CRITICAL]
        assert len(critical) == 1
        assert critical[0].category == "Data Storage"
        assert report.regulatory_scores.pci == 35

        status = report.certification_readiness["PCI"]
        assert status.ready is False
        assert status.missing_requirements == ["Data Storage", "Data Transmission", "Access Control", "Monitoring"]
        assert status.estimated_effort == "1-2 months"

    def test_encrypted_card_data(self, evaluator):
        pci = _by(evaluator.assess("encrypt card 4111111111111111 before storing").violations, Regulation.PCI)
        assert "Data Storage" not in [v.category for v in pci]

    def test_financial_data_blocks_certification(self, evaluator):
        text = "\n".join([
            "card 4111111111111111 encrypted with kms",
            "POST https://api.example.com/payment",
            "require mfa for admins",
            "payment log retained for a year",
        ])

        report = evaluator.assess(text)

        assert _by(report.violations, Regulation.PCI) == []
        assert report.certification_readiness["PCI"].ready is False
        assert report.certification_readiness["PCI"].missing_requirements == []


class TestComplianceReport:
    """Test aggregate report fields"""

    def test_overall_is_rounded_mean(self, evaluator):
        report = evaluator.assess(EMAIL_ONLY)
        # (100 + 50 + 65 + 100) / 4 = 78.75
        assert report.overall_compliance == 79

    def test_half_mean_rounds_up(self, classifier):
        gdpr_gaps = tuple(
            Safeguard(
                id=f"gdpr-gap-{i}",
                regulation=Regulation.GDPR,
                predicate=lambda text: False,
                trigger=Trigger.ABSENT,
                severity=SeverityLevel.HIGH,
                category="Gap",
                description="Missing safeguard",
                location="Application",
                data_type="Personal Data",
                remediation="Add the safeguard",
            )
            for i in range(2)
        )
        evaluator = ComplianceEvaluator(safeguards={Regulation.GDPR: gdpr_gaps}, classifier=classifier)

        report = evaluator.assess(EMAIL_ONLY)

        assert report.regulatory_scores.gdpr == 70
        # (100 + 70 + 100 + 100) / 4 = 92.5
        assert report.overall_compliance == 93

    def test_recommended_actions(self, evaluator):
        report = evaluator.assess(EMAIL_ONLY)
        actions = report.recommended_actions

        assert actions[0] == "Implement clear, specific, and informed consent mechanisms"
        assert actions[-5:] == list(GENERAL_RECOMMENDATIONS)
        assert len(actions) == len(set(actions))

    def test_recommended_actions_without_violations(self, evaluator):
        assert evaluator.assess("").recommended_actions == list(GENERAL_RECOMMENDATIONS)

    def test_certification_keys(self, evaluator):
        report = evaluator.assess("")

        assert list(report.certification_readiness) == ["HIPAA", "GDPR", "CCPA", "PCI"]
        assert all(status.ready for status in report.certification_readiness.values())

    def test_precomputed_inventory_is_used(self, evaluator, classifier):
        inventory = classifier.classify(CARD_ONLY)
        report = evaluator.assess("no card data in this text", inventory)

        assert report.data_inventory == inventory
        assert _by(report.violations, Regulation.PCI) != []

    def test_camel_case_wire_format(self, evaluator):
        data = evaluator.assess(EMAIL_ONLY).to_json_dict()

        assert set(data) == {
            "overallCompliance",
            "regulatoryScores",
            "violations",
            "dataInventory",
            "recommendedActions",
            "certificationReadiness",
        }
        assert data["violations"][0]["regulation"] == "GDPR"
        assert data["violations"][0]["dataType"] == "Personal Data"
        assert data["dataInventory"]["personalData"] == ["user@example.com"]


class TestEffortAndScore:
    """Test helper step functions"""

    @pytest.mark.parametrize("count,expected", [
        (0, "ready"),
        (1, "1-2 weeks"),
        (2, "1-2 weeks"),
        (3, "1-2 months"),
        (5, "1-2 months"),
        (6, "3-6 months"),
        (10, "3-6 months"),
        (11, "6+ months"),
    ])
    def test_estimate_effort(self, count, expected):
        assert estimate_effort(count) == expected

    def test_regulation_score_floors_at_zero(self, evaluator):
        violations = evaluator.assess(CARD_ONLY).violations * 3
        assert regulation_score(violations) == 0
