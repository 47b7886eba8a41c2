"""
Tools router - educational tool generation endpoints.

- POST /api/enhance-prompt: turn a rough idea into a detailed request
- POST /api/generate-tool:  generate an interactive HTML tool
- POST /api/analyze-image:  describe an uploaded image (base64)

Failures come back as {"message": "..."} with a generic text; the
underlying provider error is only logged.
"""

import base64
import binascii
import logging
import uuid
from typing import Optional

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.ai.errors import GenerationFailed, InvalidGeneratedContent
from app.ai.tools.contracts import FileAttachment
from app.ai.tools.service import EducationalToolService
from app.core.errors import BadRequest, UpstreamFailed
from app.db.session import get_db
from app.deps import get_session_user_id, get_tool_service
from app.schemas.account import MessageOut
from app.schemas.tools import (
    AnalyzeImageOut,
    AnalyzeImageRequest,
    EnhancePromptOut,
    EnhancePromptRequest,
    GeneratedToolOut,
    GenerateToolRequest,
)
from app.services.generation_history import (
    GENERATION_COMPLETED,
    GENERATION_FAILED,
    record_generation,
)

logger = logging.getLogger("edutools.api.tools")

router = APIRouter(prefix="/api", tags=["tools"])

_ERROR_RESPONSES = {
    400: {"model": MessageOut},
    502: {"model": MessageOut, "description": "Generative AI backend failed"},
}


@router.post("/enhance-prompt", response_model=EnhancePromptOut, responses=_ERROR_RESPONSES)
async def enhance_prompt(
    body: EnhancePromptRequest,
    service: EducationalToolService = Depends(get_tool_service),
):
    try:
        enhanced = await service.enhance_prompt(body.prompt, category=body.category)
    except GenerationFailed as e:
        logger.error(f"Error enhancing prompt: {e!r}")
        raise UpstreamFailed("Failed to enhance prompt") from e

    return EnhancePromptOut(enhanced_prompt=enhanced)


@router.post("/generate-tool", response_model=GeneratedToolOut, responses=_ERROR_RESPONSES)
async def generate_tool(
    body: GenerateToolRequest,
    service: EducationalToolService = Depends(get_tool_service),
    user_id: Optional[uuid.UUID] = Depends(get_session_user_id),
    db: Optional[Session] = Depends(get_db),
):
    """
    Generate an interactive HTML tool.

    Signed-in users get the attempt saved to their generation history,
    with status "completed" or "failed".
    """
    files = [
        FileAttachment(type=f.type, content=f.content, file_name=f.file_name)
        for f in body.files
    ]

    try:
        tool = await service.generate_tool(
            body.prompt,
            tool_type=body.tool_type,
            category=body.category,
            files=files,
        )
    except ValueError as e:
        raise BadRequest("Prompt must not be empty") from e
    except GenerationFailed as e:
        if isinstance(e, InvalidGeneratedContent):
            logger.error(f"Generated content rejected: {e}")
        else:
            logger.error(f"Gemini API error: {e!r}")
        _record_history(db, user_id, body, html=None, status=GENERATION_FAILED)
        raise UpstreamFailed("Failed to generate educational tool") from e

    _record_history(db, user_id, body, html=tool.html, status=GENERATION_COMPLETED)

    return GeneratedToolOut(html=tool.html, tool_description=tool.tool_description)


def _record_history(
    db: Optional[Session],
    user_id: Optional[uuid.UUID],
    body: GenerateToolRequest,
    html: Optional[str],
    status: str,
) -> None:
    # Anonymous requests and deployments without storage keep no history
    if user_id is None or db is None:
        return
    record_generation(
        db,
        user_id,
        prompt=body.prompt,
        html=html,
        tool_type=body.tool_type,
        category=body.category,
        status=status,
    )


@router.post("/analyze-image", response_model=AnalyzeImageOut, responses=_ERROR_RESPONSES)
async def analyze_image(
    body: AnalyzeImageRequest,
    service: EducationalToolService = Depends(get_tool_service),
):
    data = body.data
    # Accept data URLs ("data:image/png;base64,....") as well as bare base64
    if data.startswith("data:") and "," in data:
        data = data.split(",", 1)[1]
    # MIME-style base64 wraps lines every 76 chars
    data = "".join(data.split())

    try:
        image_bytes = base64.b64decode(data, validate=True)
    except (binascii.Error, ValueError) as e:
        raise BadRequest("Invalid image data") from e

    if not image_bytes:
        raise BadRequest("Invalid image data")

    try:
        analysis = await service.analyze_image(image_bytes, body.mime_type)
    except GenerationFailed as e:
        raise UpstreamFailed("Failed to analyze image") from e

    return AnalyzeImageOut(analysis=analysis)
