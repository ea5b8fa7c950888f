# protoready/core/constants.py
from enum import Enum
from typing import Dict


class ToolType(str, Enum):
    LOVABLE = "lovable"
    REPLIT = "replit"
    BOLT = "bolt"
    CURSOR = "cursor"
    GITHUB = "github"


class SeverityLevel(str, Enum):
    CRITICAL = "critical"
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class FindingCategory(str, Enum):
    SECURITY = "security"
    PERFORMANCE = "performance"
    SCALABILITY = "scalability"
    MAINTAINABILITY = "maintainability"


class EffortLevel(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class Regulation(str, Enum):
    HIPAA = "HIPAA"
    GDPR = "GDPR"
    CCPA = "CCPA"
    PCI = "PCI"


class DeploymentReadiness(str, Enum):
    READY = "ready"
    NEEDS_WORK = "needs-work"
    NOT_READY = "not-ready"


class MaintainabilityGrade(str, Enum):
    A = "A"
    B = "B"
    C = "C"
    D = "D"
    F = "F"


class InventoryBucket(str, Enum):
    PERSONAL = "personal_data"
    SENSITIVE = "sensitive_data"
    FINANCIAL = "financial_data"
    HEALTH = "health_data"
    BIOMETRIC = "biometric_data"


# Per-dimension score deductions
SCORE_WEIGHTS: Dict[FindingCategory, Dict[SeverityLevel, int]] = {
    FindingCategory.SECURITY: {
        SeverityLevel.CRITICAL: 25,
        SeverityLevel.HIGH: 15,
        SeverityLevel.MEDIUM: 8,
        SeverityLevel.LOW: 3,
    },
    FindingCategory.PERFORMANCE: {
        SeverityLevel.CRITICAL: 20,
        SeverityLevel.HIGH: 12,
        SeverityLevel.MEDIUM: 6,
        SeverityLevel.LOW: 2,
    },
    FindingCategory.SCALABILITY: {
        SeverityLevel.CRITICAL: 20,
        SeverityLevel.HIGH: 12,
        SeverityLevel.MEDIUM: 6,
        SeverityLevel.LOW: 2,
    },
    FindingCategory.MAINTAINABILITY: {
        SeverityLevel.CRITICAL: 15,
        SeverityLevel.HIGH: 10,
        SeverityLevel.MEDIUM: 5,
        SeverityLevel.LOW: 2,
    },
}

# Composite score weighting (sums to 1.0)
DIMENSION_WEIGHTS: Dict[FindingCategory, float] = {
    FindingCategory.SECURITY: 0.30,
    FindingCategory.PERFORMANCE: 0.25,
    FindingCategory.SCALABILITY: 0.25,
    FindingCategory.MAINTAINABILITY: 0.20,
}

# Regulation score deductions per violation
COMPLIANCE_WEIGHTS: Dict[SeverityLevel, int] = {
    SeverityLevel.CRITICAL: 25,
    SeverityLevel.HIGH: 15,
    SeverityLevel.MEDIUM: 10,
    SeverityLevel.LOW: 5,
}

# Remediation effort in hours
EFFORT_HOURS: Dict[EffortLevel, int] = {
    EffortLevel.LOW: 4,
    EffortLevel.MEDIUM: 16,
    EffortLevel.HIGH: 40,
}
DEFAULT_EFFORT_HOURS = 8

# Consultant hourly rates (USD)
HOURLY_RATE_MIN = 75
HOURLY_RATE_MAX = 150

# Deployment readiness thresholds
NOT_READY_SCORE = 40
NEEDS_WORK_SCORE = 70
MAX_HIGH_FINDINGS_FOR_READY = 3

# Sample matches kept per classifier pattern
INVENTORY_SAMPLE_LIMIT = 5

# OWASP Top 10 Web Vulnerabilities
OWASP_WEB_TOP_10 = [
    "A01:2021-Broken Access Control",
    "A02:2021-Cryptographic Failures",
    "A03:2021-Injection",
    "A04:2021-Insecure Design",
    "A05:2021-Security Misconfiguration",
    "A06:2021-Vulnerable and Outdated Components",
    "A07:2021-Identification and Authentication Failures",
    "A08:2021-Software and Data Integrity Failures",
    "A09:2021-Security Logging and Monitoring Failures",
    "A10:2021-Server-Side Request Forgery",
]
