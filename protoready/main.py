# protoready/main.py
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
import time
import uuid

from protoready.core.config import settings
from protoready.core.exceptions import AssessmentTimeoutError, InputTooLargeError
from protoready.core.logging import logger
from protoready.api.v1.router import api_router
from protoready.services.assessment import assessment_engine


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup
    summary = assessment_engine.catalog.summary()
    logger.info(
        "Starting ProtoReady API",
        extra={"catalog_version": summary["version"], "rules": summary["rules"]},
    )

    yield

    # Shutdown
    logger.info("Shutting down ProtoReady API")


app = FastAPI(
    title="ProtoReady API",
    version=settings.VERSION,
    openapi_url=f"{settings.API_V1_STR}/openapi.json",
    docs_url=("/api/docs" if settings.ENVIRONMENT == "development" else None),
    redoc_url=("/api/redoc" if settings.ENVIRONMENT == "development" else None),
    lifespan=lifespan
)

# CORS Middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=[str(origin) for origin in settings.BACKEND_CORS_ORIGINS],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# Request timing middleware
@app.middleware("http")
async def add_process_time_header(request: Request, call_next):
    start_time = time.time()
    response = await call_next(request)
    process_time = time.time() - start_time
    response.headers["X-Process-Time"] = str(process_time)
    return response


@app.middleware("http")
async def request_id_middleware(request: Request, call_next):
    """Tag every request with an id and log its outcome"""
    request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())
    request.state.request_id = request_id

    start_time = time.time()
    response = await call_next(request)
    duration = time.time() - start_time

    response.headers["X-Request-ID"] = request_id
    logger.info(
        "Request handled",
        extra={
            "request_id": request_id,
            "method": request.method,
            "path": request.url.path,
            "status_code": response.status_code,
            "duration_ms": round(duration * 1000, 2),
        },
    )
    return response


# Include routers
app.include_router(api_router, prefix=settings.API_V1_STR)


@app.get("/health")
async def health_check():
    """Health check endpoint"""
    return {
        "status": "healthy",
        "version": settings.VERSION,
        "environment": settings.ENVIRONMENT,
        "catalog_version": assessment_engine.catalog.version,
    }


@app.exception_handler(InputTooLargeError)
async def input_too_large_handler(request: Request, exc: InputTooLargeError):
    logger.warning(
        "Assessment input rejected",
        extra={"request_id": getattr(request.state, "request_id", None), "size": exc.size, "limit": exc.limit},
    )
    return JSONResponse(
        status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
        content={"detail": str(exc)},
    )


@app.exception_handler(AssessmentTimeoutError)
async def assessment_timeout_handler(request: Request, exc: AssessmentTimeoutError):
    logger.warning(
        "Assessment timed out",
        extra={"request_id": getattr(request.state, "request_id", None), "timeout": exc.timeout},
    )
    return JSONResponse(
        status_code=status.HTTP_504_GATEWAY_TIMEOUT,
        content={"detail": str(exc)},
    )


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Global exception handler"""
    logger.exception("Unhandled exception while handling request", exc_info=exc)
    return JSONResponse(
        status_code=500,
        content={"detail": "Internal server error"},
    )
