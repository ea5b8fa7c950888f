# protoready/scanners/data_classifier.py
"""
Sensitive Data Classifier
Inventories personal, financial, health, biometric and credential evidence
"""

import re
from dataclasses import dataclass, field
from itertools import islice
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Optional, Pattern, Tuple

from protoready.core.constants import (
    INVENTORY_SAMPLE_LIMIT,
    InventoryBucket,
    Regulation,
    SeverityLevel,
)
from protoready.core.logging import get_logger
from protoready.schemas.compliance import DataInventory
from .base import BaseAnalyzer

logger = get_logger("classifier")

_I = re.IGNORECASE


@dataclass(frozen=True)
class DataType:
    """One sensitive-data category and where its evidence is inventoried"""
    category: str
    description: str
    bucket: InventoryBucket
    regulations: Tuple[Regulation, ...]
    risk_level: SeverityLevel
    patterns: Tuple[Pattern[str], ...]
    examples: Tuple[str, ...] = ()


@dataclass
class DataMatch:
    category: str
    bucket: InventoryBucket
    pattern_index: int
    samples: List[str] = field(default_factory=list)


DATA_TYPES: Tuple[DataType, ...] = (
    # Direct identifiers (GDPR Article 4, CCPA)
    DataType(
        category="Personal Identifiers",
        description="Direct identifiers that can identify an individual",
        bucket=InventoryBucket.PERSONAL,
        regulations=(Regulation.GDPR, Regulation.CCPA, Regulation.HIPAA),
        risk_level=SeverityLevel.CRITICAL,
        examples=("email addresses", "phone numbers", "social security numbers", "passport numbers"),
        patterns=(
            re.compile(r"\b[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,}\b"),  # Email
            re.compile(r"\b\d{3}-\d{2}-\d{4}\b"),  # SSN
            re.compile(r"\b\d{3}-\d{3}-\d{4}\b"),  # Phone
            re.compile(r"\b[A-Z]{1,2}\d{6,8}\b"),  # Passport
        ),
    ),
    # PCI DSS
    DataType(
        category="Payment Card Data",
        description="Credit card numbers, CVV, payment information",
        bucket=InventoryBucket.FINANCIAL,
        regulations=(Regulation.PCI, Regulation.GDPR, Regulation.CCPA),
        risk_level=SeverityLevel.CRITICAL,
        examples=("credit card numbers", "CVV codes", "payment tokens", "bank account numbers"),
        patterns=(
            re.compile(r"\b4[0-9]{12}(?:[0-9]{3})?\b"),  # Visa
            re.compile(r"\b5[1-5][0-9]{14}\b"),  # Mastercard
            re.compile(r"\b3[47][0-9]{13}\b"),  # Amex
            re.compile(r"\b(?:4\d{3}|5[1-5]\d{2})[ -]\d{4}[ -]\d{4}[ -]\d{4}\b"),  # Grouped PAN
            re.compile(r"\b(?:cvv2?|cvc|card[ _-]?security[ _-]?code)\b\W{0,3}\d{3,4}\b", _I),  # CVV
        ),
    ),
    # HIPAA
    DataType(
        category="Protected Health Information",
        description="Health records, medical data, treatment information",
        bucket=InventoryBucket.HEALTH,
        regulations=(Regulation.HIPAA, Regulation.GDPR),
        risk_level=SeverityLevel.CRITICAL,
        examples=("medical records", "prescription data", "health insurance info", "genetic data"),
        patterns=(
            re.compile(r"\b(?:medical|health|prescription|diagnosis|treatment|patient|hospital)\b", _I),
            re.compile(r"\b(?:BMI|blood pressure|cholesterol|glucose|medication)\b", _I),
            re.compile(r"\b(?:MRN|patient ID|medical record)\b", _I),
        ),
    ),
    # GDPR Article 9, CCPA
    DataType(
        category="Biometric Data",
        description="Fingerprints, facial recognition, retinal scans",
        bucket=InventoryBucket.BIOMETRIC,
        regulations=(Regulation.GDPR, Regulation.CCPA, Regulation.HIPAA),
        risk_level=SeverityLevel.CRITICAL,
        examples=("fingerprints", "facial recognition data", "voice prints", "retinal scans"),
        patterns=(
            re.compile(r"\b(?:biometric|fingerprint|facial recognition|voice print|retinal scan)\b", _I),
            re.compile(r"\b(?:face_recognition|biometric_auth|fingerprint_data)\b", _I),
        ),
    ),
    # Precise geolocation is "sensitive personal information" under CPRA
    DataType(
        category="Geolocation Data",
        description="GPS coordinates, IP addresses, location tracking",
        bucket=InventoryBucket.SENSITIVE,
        regulations=(Regulation.GDPR, Regulation.CCPA),
        risk_level=SeverityLevel.HIGH,
        examples=("GPS coordinates", "IP addresses", "location history", "geofencing data"),
        patterns=(
            re.compile(r"\b\d{1,3}\.\d{1,3}\.\d{1,3}\.\d{1,3}\b"),  # IP addresses
            re.compile(r"\b(?:latitude|longitude|GPS|geolocation)\b", _I),
            re.compile(r"\b(?:location|coords|position)\b", _I),
        ),
    ),
    DataType(
        category="Behavioral Data",
        description="Browsing history, preferences, analytics data",
        bucket=InventoryBucket.SENSITIVE,
        regulations=(Regulation.GDPR, Regulation.CCPA),
        risk_level=SeverityLevel.MEDIUM,
        examples=("browsing history", "search queries", "purchase behavior", "app usage"),
        patterns=(
            re.compile(r"\b(?:analytics|tracking|behavior|browsing|clicks|views)\b", _I),
            re.compile(r"\b(?:google_analytics|facebook_pixel|tracking_id)\b", _I),
        ),
    ),
    DataType(
        category="Authentication Data",
        description="Passwords, tokens, security credentials",
        bucket=InventoryBucket.SENSITIVE,
        regulations=(Regulation.GDPR, Regulation.CCPA, Regulation.PCI),
        risk_level=SeverityLevel.CRITICAL,
        examples=("passwords", "API keys", "access tokens", "security questions"),
        patterns=(
            re.compile(r"\b(?:password|passwd|pwd|token|api_key|secret)\b", _I),
            re.compile(r"\b(?:auth|login|credential|jwt|bearer)\b", _I),
        ),
    ),
    DataType(
        category="Communications Data",
        description="Messages, emails, call logs, communications metadata",
        bucket=InventoryBucket.PERSONAL,
        regulations=(Regulation.GDPR, Regulation.CCPA, Regulation.HIPAA),
        risk_level=SeverityLevel.HIGH,
        examples=("email content", "text messages", "call logs", "chat history"),
        patterns=(
            re.compile(r"\b(?:message|email|chat|communication|conversation)\b", _I),
            re.compile(r"\b(?:sms|call_log|voice_mail|messaging)\b", _I),
        ),
    ),
)

# Static category -> bucket lookup, built once
CATEGORY_BUCKETS: Mapping[str, InventoryBucket] = MappingProxyType(
    {data_type.category: data_type.bucket for data_type in DATA_TYPES}
)


class DataClassifier(BaseAnalyzer):
    """
    Pattern-based sensitive data inventory.

    The classifier only records what it sees; deciding what the evidence means
    for each regulation is the compliance evaluator's job.
    """

    name = "data_classifier"
    version = "1.0.0"
    description = "Sensitive data category detector"

    def __init__(
        self,
        data_types: Tuple[DataType, ...] = DATA_TYPES,
        sample_limit: int = INVENTORY_SAMPLE_LIMIT,
    ):
        self.data_types = data_types
        self.sample_limit = sample_limit

    def scan(self, text: str, options: Optional[Dict[str, Any]] = None) -> List[DataMatch]:
        """Return one DataMatch per (category, pattern) that matched"""
        matches: List[DataMatch] = []
        text = text or ""

        for data_type in self.data_types:
            for index, pattern in enumerate(data_type.patterns):
                samples = [
                    m.group(0)
                    for m in islice(pattern.finditer(text), self.sample_limit)
                ]
                if samples:
                    matches.append(DataMatch(
                        category=data_type.category,
                        bucket=data_type.bucket,
                        pattern_index=index,
                        samples=samples,
                    ))

        return matches

    def classify(self, text: str) -> DataInventory:
        """Build the five-bucket inventory for text"""
        buckets: Dict[InventoryBucket, List[str]] = {bucket: [] for bucket in InventoryBucket}

        for match in self.scan(text):
            buckets[match.bucket].extend(match.samples)

        inventory = DataInventory(**{bucket.value: samples for bucket, samples in buckets.items()})
        logger.debug(
            "Data inventory built",
            extra={"buckets": {b.value: len(s) for b, s in buckets.items()}},
        )
        return inventory

    def detected_categories(self, text: str) -> List[str]:
        """Names of data categories with at least one match, in table order"""
        seen: List[str] = []
        for match in self.scan(text):
            if match.category not in seen:
                seen.append(match.category)
        return seen


data_classifier = DataClassifier()
