"""
Assessment API

Endpoints:
- POST /api/v1/assessment
- POST /api/v1/assessment/validate
- GET /api/v1/assessment/catalog
"""
import asyncio
import functools
from typing import Any, Dict

from fastapi import APIRouter, Body, Depends

from protoready.api.dependencies import get_catalog, get_engine, get_request_id
from protoready.core.config import settings
from protoready.core.exceptions import AssessmentTimeoutError, InputTooLargeError
from protoready.core.logging import logger
from protoready.scanners.catalog import PatternCatalog
from protoready.schemas.assessment import (
    AssessmentRequest,
    AssessmentResult,
    CatalogSummary,
    ValidationResponse,
)
from protoready.services.assessment import AssessmentEngine
from protoready.services.tool_prompts import validate_assessment_input

router = APIRouter()


@router.post("", response_model=AssessmentResult)
async def create_assessment(
    payload: AssessmentRequest,
    engine: AssessmentEngine = Depends(get_engine),
    request_id: str = Depends(get_request_id),
):
    """
    Assess a pasted codebase dump.

    The engine runs in the default thread pool under a deadline. Oversized
    input is refused before any pattern runs.
    """
    size = len(payload.code_output)
    if size > settings.MAX_CODE_OUTPUT_CHARS:
        raise InputTooLargeError(size, settings.MAX_CODE_OUTPUT_CHARS)

    logger.info(
        "Assessment requested",
        extra={"request_id": request_id, "tool_type": payload.tool_type.value, "input_chars": size},
    )

    loop = asyncio.get_running_loop()
    fut = loop.run_in_executor(None, functools.partial(engine.analyze, payload))
    try:
        return await asyncio.wait_for(fut, timeout=settings.ASSESSMENT_TIMEOUT_SECONDS)
    except asyncio.TimeoutError:
        # The worker thread cannot be interrupted; it finishes and its result is dropped
        raise AssessmentTimeoutError(settings.ASSESSMENT_TIMEOUT_SECONDS)


@router.post("/validate", response_model=ValidationResponse)
async def validate_assessment(payload: Dict[str, Any] = Body(...)):
    """Check an assessment payload without running it"""
    valid, errors = validate_assessment_input(payload)
    return ValidationResponse(valid=valid, errors=errors)


@router.get("/catalog", response_model=CatalogSummary)
async def get_catalog_summary(catalog: PatternCatalog = Depends(get_catalog)):
    """Version and size of the active detection catalog"""
    return CatalogSummary(**catalog.summary())
