"""
Tool schemas - Pydantic models for the educational tool endpoints.

The web client speaks camelCase (toolType, fileName, mimeType), so every
schema here uses camelCase aliases while Python code uses snake_case.
"""

from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base schema: camelCase on the wire, snake_case in Python."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ---------------------------------------------------------------------------
# REQUEST SCHEMAS (what the client sends)
# ---------------------------------------------------------------------------

class EnhancePromptRequest(CamelModel):
    """
    Example request body:
    {
        "prompt": "fractions",
        "category": "Math"
    }
    """
    prompt: str = Field(..., min_length=1, max_length=5000)
    category: Optional[str] = Field(None, max_length=100)


class FileAttachmentIn(CamelModel):
    """
    A file the user attached. Images are sent as the text produced by
    /api/analyze-image, so content is always text.
    """
    type: Literal["text", "image"]
    content: str
    file_name: str = Field(..., min_length=1, max_length=255)


class GenerateToolRequest(CamelModel):
    """
    Example request body:
    {
        "prompt": "Quiz me on the water cycle",
        "toolType": "quiz",
        "category": "Science",
        "files": [{"type": "text", "content": "...", "fileName": "notes.txt"}]
    }

    toolType is one of the built-in types ("quiz", "flashcards", "chart",
    "worksheet", "timeline", "game", "lecture", "diagram", "custom"), "auto",
    or a user's own custom tool type label.
    """
    prompt: str = Field(..., min_length=1, max_length=10000)
    tool_type: Optional[str] = Field(None, max_length=100)
    category: Optional[str] = Field(None, max_length=100)
    files: list[FileAttachmentIn] = Field(default_factory=list)


class AnalyzeImageRequest(CamelModel):
    """
    Example request body:
    {
        "data": "iVBORw0KGgo...",
        "mimeType": "image/png"
    }
    """
    data: str = Field(..., min_length=1, description="Base64-encoded image bytes")
    mime_type: str = Field(..., pattern=r"^image/[\w.+-]+$")


# ---------------------------------------------------------------------------
# RESPONSE SCHEMAS (what the server returns)
# ---------------------------------------------------------------------------

class EnhancePromptOut(CamelModel):
    enhanced_prompt: str


class GeneratedToolOut(CamelModel):
    html: str
    tool_description: str = ""


class AnalyzeImageOut(CamelModel):
    analysis: str
