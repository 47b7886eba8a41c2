"""
AI Providers Module - clients for generative AI backends.

A provider makes exactly one call to one model and raises classified
errors on failure:

    response = await provider.generate(prompt, model="gemini-2.5-flash")

Retrying and falling back across models is the job of app.ai.retry.
"""

from app.ai.providers.base import AIProvider, AIResponse, ProviderType, TokenUsage
from app.ai.providers.gemini import GeminiProvider

__all__ = [
    "AIProvider",
    "AIResponse",
    "ProviderType",
    "TokenUsage",
    "GeminiProvider",
]
