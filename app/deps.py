"""
Dependencies module - reusable FastAPI dependencies for route handlers.

- get_session_user_id: resolves the session cookie to a user ID (or None)
- get_tool_service: builds the educational tool service from settings
"""

import uuid  # For the user ID type
from functools import lru_cache
from typing import Optional

from fastapi import Request  # FastAPI components

from app.ai.providers.gemini import GeminiProvider
from app.ai.retry import ResilientGenerator
from app.ai.tools.service import EducationalToolService
from app.core.config import settings  # App configuration
from app.core.security import decode_session_token


def get_session_user_id(request: Request) -> Optional[uuid.UUID]:
    """
    Resolve the session cookie to the authenticated user's ID.

    Returns None instead of raising so each handler can answer with its own
    JSON error body. Missing cookie, bad signature, expired token and a
    non-UUID subject all resolve to None.
    """
    token = request.cookies.get(settings.SESSION_COOKIE_NAME)
    if not token:
        return None
    return decode_session_token(token)


@lru_cache
def get_tool_service() -> EducationalToolService:
    """
    Build the tool service once per process from explicit settings.

    Tests replace it with app.dependency_overrides[get_tool_service].
    """
    provider = GeminiProvider(api_key=settings.GEMINI_API_KEY)
    generator = ResilientGenerator(
        provider=provider,
        models=settings.GEMINI_MODELS,
        max_retries=settings.GENERATION_MAX_RETRIES,
        base_delay_ms=settings.GENERATION_BASE_DELAY_MS,
    )
    return EducationalToolService(
        generator=generator,
        provider=provider,
        vision_model=settings.GEMINI_VISION_MODEL,
        enhance_max_retries=settings.ENHANCE_MAX_RETRIES,
        enhance_base_delay_ms=settings.ENHANCE_BASE_DELAY_MS,
    )
