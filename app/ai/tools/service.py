"""
EducationalToolService - the thin callers around the resilient generator.

Each operation builds a prompt, delegates to ResilientGenerator (or, for
images, makes one direct provider call) and post-processes the text.

Usage:
    service = EducationalToolService(generator, provider, vision_model="gemini-2.5-flash")

    enhanced = await service.enhance_prompt("fractions", category="Math")
    tool = await service.generate_tool("fractions", tool_type="quiz")
    description = await service.analyze_image(png_bytes, "image/png")
"""

import logging
from typing import Optional, Sequence

from app.ai.errors import GenerationFailed
from app.ai.prompts.tool_prompts import (
    IMAGE_ANALYSIS_PROMPT,
    build_enhance_prompt,
    build_file_context,
    build_tool_system_prompt,
)
from app.ai.providers.base import AIProvider
from app.ai.retry import ResilientGenerator
from app.ai.tools.contracts import FileAttachment, GeneratedTool
from app.ai.tools.html import ensure_html

logger = logging.getLogger("edutools.ai.tools")

ENHANCE_FALLBACK_TEXT = "Failed to enhance prompt"
IMAGE_ANALYSIS_FALLBACK_TEXT = "Unable to analyze image"


class EducationalToolService:
    """
    Generates educational content with Gemini.

    Retry policy per operation:
    - enhance_prompt: generator with enhance_max_retries / enhance_base_delay_ms
    - generate_tool: generator with its own defaults
    - analyze_image: single direct call, no retry
    """

    def __init__(
        self,
        generator: ResilientGenerator,
        provider: AIProvider,
        vision_model: str,
        enhance_max_retries: int = 2,
        enhance_base_delay_ms: float = 500,
    ):
        self._generator = generator
        self._provider = provider
        self._vision_model = vision_model
        self._enhance_max_retries = enhance_max_retries
        self._enhance_base_delay_ms = enhance_base_delay_ms

    async def enhance_prompt(self, prompt: str, category: Optional[str] = None) -> str:
        """
        Rewrite a user's rough prompt into a richer educational tool request.

        Returns the enhanced prompt, trimmed. Generation failures propagate
        as GenerationFailed.
        """
        enhance_text = build_enhance_prompt(prompt, category)

        response = await self._generator.generate(
            enhance_text,
            system_instruction=None,
            max_retries=self._enhance_max_retries,
            base_delay_ms=self._enhance_base_delay_ms,
        )

        enhanced = response.strip()
        if not enhanced:
            return ENHANCE_FALLBACK_TEXT

        logger.info(f"Prompt enhanced: {len(prompt)} chars -> {len(enhanced)} chars")
        return enhanced

    async def generate_tool(
        self,
        prompt: str,
        tool_type: Optional[str] = None,
        category: Optional[str] = None,
        files: Optional[Sequence[FileAttachment]] = None,
    ) -> GeneratedTool:
        """
        Generate a self-contained interactive HTML tool.

        Args:
            prompt: What the user wants
            tool_type: Built-in type ("quiz", "flashcards", ...), a custom
                       label, "auto" or None
            category: Subject/category, "none" or None
            files: Attachments whose text is added to the prompt

        Raises:
            InvalidGeneratedContent: the model's answer isn't HTML
            GenerationFailed: every model failed
        """
        file_context = build_file_context(files)
        system_prompt = build_tool_system_prompt(
            prompt,
            tool_type=tool_type,
            category=category,
            file_context=file_context,
        )

        generated = await self._generator.generate(
            prompt + file_context,
            system_instruction=system_prompt,
        )

        html = ensure_html(generated)
        logger.info(
            f"Generated {len(html)} chars of HTML "
            f"(tool_type={tool_type or 'auto'}, files={len(files or [])})"
        )
        return GeneratedTool(html=html, tool_description="")

    async def analyze_image(self, image_bytes: bytes, mime_type: str) -> str:
        """
        Describe an image so it can feed into tool generation.

        One call to the vision model, no retries. Returns a fallback
        message when the model answers with no text.
        """
        if not image_bytes:
            raise ValueError("image_bytes must not be empty")

        try:
            response = await self._provider.analyze_image(
                image_bytes,
                mime_type,
                prompt=IMAGE_ANALYSIS_PROMPT,
                model=self._vision_model,
            )
        except GenerationFailed as e:
            logger.error(f"Image analysis error: {e}")
            raise

        return response.content or IMAGE_ANALYSIS_FALLBACK_TEXT
