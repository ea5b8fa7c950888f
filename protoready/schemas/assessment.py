# protoready/schemas/assessment.py
from typing import Dict, List, Optional
from pydantic import Field, field_validator

from protoready.core.config import settings
from protoready.core.constants import (
    DeploymentReadiness,
    MaintainabilityGrade,
    SeverityLevel,
    ToolType,
)
from protoready.remediation.models import CostEstimate, RemediationPhase
from protoready.schemas.base import CamelModel
from protoready.schemas.compliance import ComplianceAssessment
from protoready.schemas.finding import Finding


class AssessmentInput(CamelModel):
    """Engine input. Tool and project type are free text; unknown tools skip tool rules."""
    tool_type: Optional[str] = None
    code_output: str = ""
    project_type: Optional[str] = None
    project_description: Optional[str] = None
    project_name: Optional[str] = None


class AssessmentRequest(AssessmentInput):
    """Validated HTTP request body"""
    tool_type: ToolType
    code_output: str
    project_type: str = Field(..., min_length=1)

    @field_validator("code_output")
    @classmethod
    def require_substantial_output(cls, v: str) -> str:
        if len(v.strip()) < settings.MIN_CODE_OUTPUT_CHARS:
            raise ValueError(
                f"Code output is required and must be substantial "
                f"(minimum {settings.MIN_CODE_OUTPUT_CHARS} characters)"
            )
        return v

    @field_validator("project_type")
    @classmethod
    def require_project_type(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Project type is required")
        return v


class DimensionScores(CamelModel):
    security: int = Field(100, ge=0, le=100)
    performance: int = Field(100, ge=0, le=100)
    scalability: int = Field(100, ge=0, le=100)
    maintainability: int = Field(100, ge=0, le=100)


class AssessmentResult(CamelModel):
    overall_score: int = Field(..., ge=0, le=100)
    security_rating: SeverityLevel
    scalability_index: int = Field(..., ge=1, le=5)
    maintainability_grade: MaintainabilityGrade
    deployment_readiness: DeploymentReadiness
    scores: DimensionScores
    findings: List[Finding] = Field(default_factory=list)
    roadmap: List[RemediationPhase] = Field(default_factory=list)
    cost_estimate: CostEstimate
    compliance_assessment: ComplianceAssessment
    catalog_version: str


class ValidationResponse(CamelModel):
    valid: bool
    errors: List[str] = Field(default_factory=list)


class CatalogSummary(CamelModel):
    version: str
    rules: int
    signals: int
    groups: Dict[str, int]
