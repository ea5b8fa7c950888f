from typing import List

from fastapi import APIRouter, HTTPException, status
from fastapi.responses import PlainTextResponse

from protoready.services.tool_prompts import (
    ToolPrompt,
    get_all_tool_prompts,
    get_prompt_instructions,
    get_tool_prompt,
)

router = APIRouter()


def _get_or_404(tool_type: str) -> ToolPrompt:
    prompt = get_tool_prompt(tool_type)
    if prompt is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Tool not supported",
        )
    return prompt


@router.get("", response_model=List[ToolPrompt])
async def list_tools():
    """All supported builders and their export recipes"""
    return get_all_tool_prompts()


@router.get("/{tool_type}", response_model=ToolPrompt)
async def get_tool(tool_type: str):
    return _get_or_404(tool_type)


@router.get("/{tool_type}/instructions", response_class=PlainTextResponse)
async def get_tool_instructions(tool_type: str):
    """Markdown instructions for producing codeOutput with one tool"""
    _get_or_404(tool_type)
    return PlainTextResponse(get_prompt_instructions(tool_type), media_type="text/markdown")
