"""
Prompts Module - Centralized prompt templates for AI interactions.

Keeping prompts centralized makes them:
- Easy to update and iterate
- Consistent across the application
- Testable and version-controlled
"""

from app.ai.prompts.tool_prompts import (
    IMAGE_ANALYSIS_PROMPT,
    TOOL_TYPE_INSTRUCTIONS,
    build_enhance_prompt,
    build_file_context,
    build_tool_system_prompt,
)

__all__ = [
    "IMAGE_ANALYSIS_PROMPT",
    "TOOL_TYPE_INSTRUCTIONS",
    "build_enhance_prompt",
    "build_file_context",
    "build_tool_system_prompt",
]
