# protoready/services/assessment.py
"""
Assessment Engine
Runs every analyzer over a codebase dump and assembles the readiness report
"""

import time
from typing import Optional

from protoready.compliance.evaluator import ComplianceEvaluator
from protoready.core.logging import logger
from protoready.remediation.roadmap import RoadmapBuilder
from protoready.scanners.catalog import PatternCatalog, default_catalog
from protoready.scanners.code_scanner import CodeScanner
from protoready.scanners.data_classifier import DataClassifier
from protoready.schemas.assessment import AssessmentInput, AssessmentResult
from protoready.services.scoring import Scorer


class AssessmentEngine:
    """
    Stateless coordinator over the scanner, classifier, compliance evaluator,
    scorer and roadmap builder.

    One instance is shared process-wide; ``assess`` never mutates the engine,
    so concurrent calls need no coordination. The engine does not validate
    input and never raises for empty or unusual text.
    """

    def __init__(self, catalog: PatternCatalog = default_catalog):
        self.catalog = catalog
        self.scanner = CodeScanner(catalog)
        self.classifier = DataClassifier()
        self.compliance = ComplianceEvaluator(classifier=self.classifier)
        self.scorer = Scorer()
        self.roadmap_builder = RoadmapBuilder()

    def assess(
        self,
        text: str,
        tool_type: Optional[str] = None,
        project_type: Optional[str] = None,
        project_description: Optional[str] = None,
        project_name: Optional[str] = None,
    ) -> AssessmentResult:
        started = time.perf_counter()
        text = text or ""

        findings = self.scanner.scan(text, {"tool_type": tool_type})
        inventory = self.classifier.classify(text)
        compliance = self.compliance.assess(text, inventory)
        card = self.scorer.score(findings)
        roadmap = self.roadmap_builder.build_roadmap(findings)

        result = AssessmentResult(
            overall_score=card.overall,
            security_rating=card.security_rating,
            scalability_index=card.scalability_index,
            maintainability_grade=card.maintainability_grade,
            deployment_readiness=card.deployment_readiness,
            scores=card.dimensions,
            findings=findings,
            roadmap=roadmap,
            cost_estimate=self.roadmap_builder.estimate_cost(roadmap),
            compliance_assessment=compliance,
            catalog_version=self.catalog.version,
        )

        logger.info(
            "Assessment completed",
            extra={
                "tool_type": tool_type,
                "project_type": project_type,
                "project_name": project_name,
                "project_description": project_description,
                "input_chars": len(text),
                "findings": len(findings),
                "violations": len(compliance.violations),
                "data_categories": self.classifier.detected_categories(text),
                "overall_score": card.overall,
                "deployment_readiness": card.deployment_readiness.value,
                "duration_ms": round((time.perf_counter() - started) * 1000, 2),
            },
        )
        return result

    def analyze(self, payload: AssessmentInput) -> AssessmentResult:
        tool_type = getattr(payload.tool_type, "value", payload.tool_type)
        return self.assess(
            payload.code_output,
            tool_type=tool_type,
            project_type=payload.project_type,
            project_description=payload.project_description,
            project_name=payload.project_name,
        )


assessment_engine = AssessmentEngine()
