from fastapi import APIRouter
from protoready.api.v1 import assessment, tools

api_router = APIRouter()

api_router.include_router(assessment.router, prefix="/assessment", tags=["assessment"])
api_router.include_router(tools.router, prefix="/tools", tags=["tools"])
