# Regulatory safeguard checks.
#
# Each regulation owns an ordered tuple of safeguards. A safeguard is a boolean
# predicate over the raw text plus the violation it produces: most fire when
# the safeguard is ABSENT, storage/transfer prohibitions fire when PRESENT.
# A regulation is only evaluated when its gating inventory bucket has evidence.

import re
from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Callable, Mapping, Pattern, Tuple

from protoready.core.constants import InventoryBucket, Regulation, SeverityLevel
from protoready.scanners.data_classifier import DATA_TYPES
from protoready.schemas.compliance import ComplianceViolation

_I = re.IGNORECASE


class Trigger(str, Enum):
    ABSENT = "absent"
    PRESENT = "present"


@dataclass(frozen=True)
class Safeguard:
    id: str
    regulation: Regulation
    predicate: Callable[[str], bool]
    trigger: Trigger
    severity: SeverityLevel
    category: str
    description: str
    location: str
    data_type: str
    remediation: str
    references: Tuple[str, ...] = ()

    def is_violated(self, text: str) -> bool:
        present = bool(self.predicate(text))
        return present if self.trigger is Trigger.PRESENT else not present

    def to_violation(self) -> ComplianceViolation:
        return ComplianceViolation(
            regulation=self.regulation,
            severity=self.severity,
            category=self.category,
            description=self.description,
            location=self.location,
            data_type=self.data_type,
            remediation=self.remediation,
            references=list(self.references),
        )


# Inventory bucket that must be non-empty for a regulation to apply
REGULATION_GATES: Mapping[Regulation, InventoryBucket] = MappingProxyType({
    Regulation.HIPAA: InventoryBucket.HEALTH,
    Regulation.GDPR: InventoryBucket.PERSONAL,
    Regulation.CCPA: InventoryBucket.PERSONAL,
    Regulation.PCI: InventoryBucket.FINANCIAL,
})

# HIPAA and PCI certification also requires that no regulated data is handled
CERTIFICATION_REQUIRES_EMPTY_BUCKET = frozenset({Regulation.HIPAA, Regulation.PCI})


def _any(*patterns: Pattern[str]) -> Callable[[str], bool]:
    def check(text: str) -> bool:
        return any(p.search(text) for p in patterns)
    return check


def _all(*patterns: Pattern[str]) -> Callable[[str], bool]:
    def check(text: str) -> bool:
        return all(p.search(text) for p in patterns)
    return check


# ==================== Predicates ====================

has_security_officer = _any(
    re.compile(r"security.*(?:officer|manager|admin)", _I),
    re.compile(r"admin.*(?:security|privacy)", _I),
)
has_data_encryption = _all(
    re.compile(r"encrypt|AES|TLS|SSL|crypto", _I),
    re.compile(r"256|512|1024"),
)
has_access_controls = _all(
    re.compile(r"role.*based|RBAC|access.*control|permission", _I),
    re.compile(r"authenticate|authorize", _I),
)
has_audit_logging = _any(
    re.compile(r"(?:audit|log|track).*access", _I),
    re.compile(r"(?:winston|bunyan|sentry|structlog).*log", _I),
)

has_consent_mechanism = _any(
    re.compile(r"(?:consent|agree|accept).*privacy", _I),
    re.compile(r"gdpr|cookie.*consent", _I),
)
has_data_subject_rights = _any(
    re.compile(r"delete.*account|export.*data|download.*data", _I),
    re.compile(r"data.*portability|right.*erasure", _I),
)
has_data_minimization = _any(
    re.compile(r"only.*necessary|minimal.*data|required.*field", _I),
)
has_international_transfers = _any(
    re.compile(r"(?:amazonaws|cloudflare|googlecloud).*\beu(?:rope)?(?:\b|-)", _I),
    re.compile(r"transfer.*international|cross.*border", _I),
)

has_opt_out_mechanism = _any(re.compile(r"do.*not.*sell|opt.*out|unsubscribe", _I))
has_privacy_policy = _any(re.compile(r"privacy.*policy|data.*policy", _I))
has_data_deletion = _any(re.compile(r"delete.*data|remove.*information|purge.*records", _I))

_CARD_PERSISTENCE = _any(
    re.compile(r"(?:store|save|persist).*card", _I),
    re.compile(r"credit.*card.*number|cvv|card.*holder", _I),
)
_RAW_CARD_DATA = _any(
    *next(dt.patterns for dt in DATA_TYPES if dt.bucket is InventoryBucket.FINANCIAL)
)
_ENCRYPTION_MARKER = re.compile(r"encrypt|cipher|\baes\b|\bkms\b|tokeni[sz]|vault", _I)


def stores_unprotected_card_data(text: str) -> bool:
    """Raw or persisted cardholder data with no encryption in sight"""
    referenced = _CARD_PERSISTENCE(text) or _RAW_CARD_DATA(text)
    return bool(referenced) and not _ENCRYPTION_MARKER.search(text)


has_secure_transmission = _any(
    re.compile(r"(?:https|tls|ssl).*payment", _I),
    re.compile(r"(?:stripe|paypal).*secure", _I),
)
has_strong_authentication = _any(re.compile(r"mfa|2fa|multi.*factor|two.*factor", _I))
has_payment_auditing = _any(re.compile(r"payment.*log|transaction.*audit|payment.*monitor", _I))


# ==================== Safeguards ====================

HIPAA_SAFEGUARDS = (
    Safeguard(
        id="hipaa-security-officer",
        regulation=Regulation.HIPAA,
        predicate=has_security_officer,
        trigger=Trigger.ABSENT,
        severity=SeverityLevel.HIGH,
        category="Administrative Safeguards",
        description="No designated security officer or security management process",
        location="Application Configuration",
        data_type="PHI Management",
        remediation="Implement security management process and designate security officer",
        references=("45 CFR § 164.308(a)(2)",),
    ),
    Safeguard(
        id="hipaa-encryption",
        regulation=Regulation.HIPAA,
        predicate=has_data_encryption,
        trigger=Trigger.ABSENT,
        severity=SeverityLevel.CRITICAL,
        category="Physical Safeguards",
        description="PHI not encrypted at rest and in transit",
        location="Data Storage/Transmission",
        data_type="Protected Health Information",
        remediation="Implement AES-256 encryption for data at rest and TLS 1.3 for data in transit",
        references=("45 CFR § 164.312(a)(2)(iv)", "45 CFR § 164.312(e)(2)(ii)"),
    ),
    Safeguard(
        id="hipaa-access-controls",
        regulation=Regulation.HIPAA,
        predicate=has_access_controls,
        trigger=Trigger.ABSENT,
        severity=SeverityLevel.HIGH,
        category="Technical Safeguards",
        description="Insufficient access controls for PHI",
        location="Authentication System",
        data_type="Protected Health Information",
        remediation="Implement role-based access controls with unique user identification",
        references=("45 CFR § 164.312(a)(1)",),
    ),
    Safeguard(
        id="hipaa-audit-logging",
        regulation=Regulation.HIPAA,
        predicate=has_audit_logging,
        trigger=Trigger.ABSENT,
        severity=SeverityLevel.MEDIUM,
        category="Technical Safeguards",
        description="No audit logging for PHI access and modifications",
        location="Logging System",
        data_type="Protected Health Information",
        remediation="Implement comprehensive audit logging for all PHI access and modifications",
        references=("45 CFR § 164.312(b)",),
    ),
)

GDPR_SAFEGUARDS = (
    Safeguard(
        id="gdpr-consent",
        regulation=Regulation.GDPR,
        predicate=has_consent_mechanism,
        trigger=Trigger.ABSENT,
        severity=SeverityLevel.CRITICAL,
        category="Lawful Basis",
        description="No clear consent mechanism for personal data processing",
        location="Data Collection Forms",
        data_type="Personal Data",
        remediation="Implement clear, specific, and informed consent mechanisms",
        references=("GDPR Article 6", "GDPR Article 7"),
    ),
    Safeguard(
        id="gdpr-data-subject-rights",
        regulation=Regulation.GDPR,
        predicate=has_data_subject_rights,
        trigger=Trigger.ABSENT,
        severity=SeverityLevel.HIGH,
        category="Data Subject Rights",
        description="No mechanism for data subject rights (access, rectification, erasure)",
        location="User Account Management",
        data_type="Personal Data",
        remediation="Implement data portability, right to erasure, and rectification mechanisms",
        references=("GDPR Article 15-22",),
    ),
    Safeguard(
        id="gdpr-data-minimization",
        regulation=Regulation.GDPR,
        predicate=has_data_minimization,
        trigger=Trigger.ABSENT,
        severity=SeverityLevel.MEDIUM,
        category="Data Protection by Design",
        description="No evidence of data minimization principles",
        location="Data Collection",
        data_type="Personal Data",
        remediation="Implement data minimization - collect only necessary data",
        references=("GDPR Article 5(1)(c)", "GDPR Article 25"),
    ),
    Safeguard(
        id="gdpr-international-transfers",
        regulation=Regulation.GDPR,
        predicate=has_international_transfers,
        trigger=Trigger.PRESENT,
        severity=SeverityLevel.HIGH,
        category="International Transfers",
        description="International data transfers without adequate safeguards",
        location="Third-party Integrations",
        data_type="Personal Data",
        remediation="Implement Standard Contractual Clauses or adequacy decisions",
        references=("GDPR Chapter V (Articles 44-49)",),
    ),
)

CCPA_SAFEGUARDS = (
    Safeguard(
        id="ccpa-opt-out",
        regulation=Regulation.CCPA,
        predicate=has_opt_out_mechanism,
        trigger=Trigger.ABSENT,
        severity=SeverityLevel.HIGH,
        category="Consumer Rights",
        description='No "Do Not Sell My Personal Information" opt-out mechanism',
        location="Privacy Controls",
        data_type="Personal Information",
        remediation="Implement clear opt-out mechanism for data sale",
        references=("CCPA Section 1798.135",),
    ),
    Safeguard(
        id="ccpa-privacy-policy",
        regulation=Regulation.CCPA,
        predicate=has_privacy_policy,
        trigger=Trigger.ABSENT,
        severity=SeverityLevel.MEDIUM,
        category="Transparency",
        description="No comprehensive privacy policy addressing CCPA requirements",
        location="Legal Pages",
        data_type="Personal Information",
        remediation="Create detailed privacy policy with data categories and purposes",
        references=("CCPA Section 1798.130",),
    ),
    Safeguard(
        id="ccpa-data-deletion",
        regulation=Regulation.CCPA,
        predicate=has_data_deletion,
        trigger=Trigger.ABSENT,
        severity=SeverityLevel.MEDIUM,
        category="Consumer Rights",
        description="No mechanism for consumers to request data deletion",
        location="Account Management",
        data_type="Personal Information",
        remediation="Implement data deletion request and fulfillment process",
        references=("CCPA Section 1798.105",),
    ),
)

PCI_SAFEGUARDS = (
    Safeguard(
        id="pci-data-storage",
        regulation=Regulation.PCI,
        predicate=stores_unprotected_card_data,
        trigger=Trigger.PRESENT,
        severity=SeverityLevel.CRITICAL,
        category="Data Storage",
        description="Cardholder data stored without proper protection",
        location="Payment Processing",
        data_type="Payment Card Data",
        remediation="Do not store sensitive authentication data; encrypt stored cardholder data",
        references=("PCI DSS Requirement 3",),
    ),
    Safeguard(
        id="pci-data-transmission",
        regulation=Regulation.PCI,
        predicate=has_secure_transmission,
        trigger=Trigger.ABSENT,
        severity=SeverityLevel.HIGH,
        category="Data Transmission",
        description="Cardholder data transmitted without encryption",
        location="Payment API",
        data_type="Payment Card Data",
        remediation="Use strong cryptography (TLS 1.2+) for cardholder data transmission",
        references=("PCI DSS Requirement 4",),
    ),
    Safeguard(
        id="pci-access-control",
        regulation=Regulation.PCI,
        predicate=has_strong_authentication,
        trigger=Trigger.ABSENT,
        severity=SeverityLevel.HIGH,
        category="Access Control",
        description="Weak authentication for payment system access",
        location="Authentication System",
        data_type="Payment System Access",
        remediation="Implement multi-factor authentication and strong password policies",
        references=("PCI DSS Requirement 8",),
    ),
    Safeguard(
        id="pci-monitoring",
        regulation=Regulation.PCI,
        predicate=has_payment_auditing,
        trigger=Trigger.ABSENT,
        severity=SeverityLevel.MEDIUM,
        category="Monitoring",
        description="Insufficient logging of payment system access",
        location="Audit System",
        data_type="Payment System Logs",
        remediation="Implement comprehensive logging and monitoring of payment system access",
        references=("PCI DSS Requirement 10",),
    ),
)

# Evaluation and reporting order
SAFEGUARDS: Mapping[Regulation, Tuple[Safeguard, ...]] = MappingProxyType({
    Regulation.HIPAA: HIPAA_SAFEGUARDS,
    Regulation.GDPR: GDPR_SAFEGUARDS,
    Regulation.CCPA: CCPA_SAFEGUARDS,
    Regulation.PCI: PCI_SAFEGUARDS,
})

GENERAL_RECOMMENDATIONS = (
    "Conduct regular compliance audits and assessments",
    "Implement privacy by design principles in development",
    "Establish data governance and retention policies",
    "Train staff on data protection and privacy requirements",
    "Create incident response procedures for data breaches",
)
