"""
Pytest configuration and fixtures
Shared test setup for all test modules
"""

import pytest
from typing import Generator, Optional
from fastapi.testclient import TestClient

from protoready.main import app
from protoready.compliance.evaluator import ComplianceEvaluator
from protoready.core.constants import EffortLevel, FindingCategory, SeverityLevel
from protoready.remediation.roadmap import RoadmapBuilder
from protoready.scanners.catalog import PatternCatalog, default_catalog
from protoready.scanners.code_scanner import CodeScanner
from protoready.scanners.data_classifier import DataClassifier
from protoready.schemas.finding import Finding
from protoready.services.assessment import AssessmentEngine, assessment_engine
from protoready.services.scoring import Scorer


# A small Lovable-style export with a few deliberate problems
LOVABLE_DUMP = """=== PROTOREADY ANALYSIS START ===
=== PROJECT STRUCTURE ===
./src/App.tsx
./src/pages/Login.tsx
./src/components/UserList.tsx
=== SECURITY SCAN ===
./src/lib/api.ts:  const apiKey = "sk-live-1234567890"
./src/pages/Login.tsx:  console.log(user)
=== SOURCE ===
import React from 'react'

export default function UserList({ users }) {
  return users.map(user => <li>{user.name}</li>)
}
=== PROTOREADY ANALYSIS END ===
"""

# Plain text with no detectable patterns, exactly 100 characters
NEUTRAL_DUMP = "a" * 100


def _make_finding(
    category: FindingCategory = FindingCategory.SECURITY,
    severity: SeverityLevel = SeverityLevel.MEDIUM,
    effort: Optional[EffortLevel] = EffortLevel.MEDIUM,
    title: str = "Test Finding",
) -> Finding:
    """Build a finding without going through the scanner"""
    return Finding(
        category=category,
        severity=severity,
        title=title,
        description=f"{title} description",
        recommendation=f"Fix {title.lower()}",
        effort=effort,
    )


@pytest.fixture
def make_finding():
    """Factory for hand-built findings"""
    return _make_finding


@pytest.fixture
def catalog() -> PatternCatalog:
    return default_catalog


@pytest.fixture
def scanner(catalog: PatternCatalog) -> CodeScanner:
    return CodeScanner(catalog)


@pytest.fixture
def classifier() -> DataClassifier:
    return DataClassifier()


@pytest.fixture
def evaluator(classifier: DataClassifier) -> ComplianceEvaluator:
    return ComplianceEvaluator(classifier=classifier)


@pytest.fixture
def scorer() -> Scorer:
    return Scorer()


@pytest.fixture
def roadmap_builder() -> RoadmapBuilder:
    return RoadmapBuilder()


@pytest.fixture
def engine() -> AssessmentEngine:
    """The shared process-wide engine"""
    return assessment_engine


@pytest.fixture
def lovable_dump() -> str:
    return LOVABLE_DUMP


@pytest.fixture
def neutral_dump() -> str:
    return NEUTRAL_DUMP


@pytest.fixture
def assessment_payload() -> dict:
    """Valid camelCase request body"""
    return {
        "toolType": "lovable",
        "codeOutput": LOVABLE_DUMP,
        "projectType": "saas",
        "projectDescription": "Team task tracker",
        "projectName": "taskly",
    }


@pytest.fixture(scope="function")
def client() -> Generator[TestClient, None, None]:
    """Create test client"""

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()
