# protoready/schemas/compliance.py
from typing import Dict, List
from pydantic import ConfigDict, Field

from protoready.core.constants import InventoryBucket, Regulation, SeverityLevel
from protoready.schemas.base import CamelModel


class DataInventory(CamelModel):
    """
    Sensitive-data evidence found in the input, grouped into five buckets.

    Each bucket holds sample matched substrings (at most five per contributing
    pattern), in the order the classifier found them. The inventory is evidence,
    not an exhaustive listing.
    """
    personal_data: List[str] = Field(default_factory=list)
    sensitive_data: List[str] = Field(default_factory=list)
    financial_data: List[str] = Field(default_factory=list)
    health_data: List[str] = Field(default_factory=list)
    biometric_data: List[str] = Field(default_factory=list)

    def bucket(self, bucket: InventoryBucket) -> List[str]:
        return getattr(self, InventoryBucket(bucket).value)

    def has(self, bucket: InventoryBucket) -> bool:
        return len(self.bucket(bucket)) > 0

    @property
    def is_empty(self) -> bool:
        return not any(self.has(b) for b in InventoryBucket)


class ComplianceViolation(CamelModel):
    model_config = ConfigDict(frozen=True)

    regulation: Regulation
    severity: SeverityLevel
    category: str
    description: str
    location: str
    data_type: str
    remediation: str
    references: List[str] = Field(default_factory=list)


class RegulatoryScores(CamelModel):
    hipaa: int = 100
    gdpr: int = 100
    ccpa: int = 100
    pci: int = 100


class CertificationStatus(CamelModel):
    ready: bool
    missing_requirements: List[str] = Field(default_factory=list)
    estimated_effort: str


class ComplianceAssessment(CamelModel):
    overall_compliance: int
    regulatory_scores: RegulatoryScores
    violations: List[ComplianceViolation] = Field(default_factory=list)
    data_inventory: DataInventory
    recommended_actions: List[str] = Field(default_factory=list)
    certification_readiness: Dict[str, CertificationStatus] = Field(default_factory=dict)
