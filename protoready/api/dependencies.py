# protoready/api/dependencies.py
from fastapi import Request

from protoready.scanners.catalog import PatternCatalog
from protoready.services.assessment import AssessmentEngine, assessment_engine


def get_engine() -> AssessmentEngine:
    """Shared stateless engine"""
    return assessment_engine


def get_catalog() -> PatternCatalog:
    return assessment_engine.catalog


def get_request_id(request: Request) -> str:
    return getattr(request.state, "request_id", "")
