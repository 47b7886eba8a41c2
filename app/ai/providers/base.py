"""
Base AI Provider - Abstract interface for generative AI backends.

This module defines the contract that the resilient generator relies on.
Unlike a "never raise" client, a provider here RAISES classified errors
(see app.ai.errors) so that the caller can decide between retrying the
same model, falling back to the next one, or giving up.

Example:
    provider = GeminiProvider(api_key="...")
    response = await provider.generate("Hello", model="gemini-2.5-flash")
    print(response.content)
"""

import time
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Optional, Any, Dict
from enum import Enum
import logging

logger = logging.getLogger("edutools.ai")


class ProviderType(str, Enum):
    """Enum of supported AI providers."""
    GEMINI = "gemini"


@dataclass
class TokenUsage:
    """
    Token usage statistics for an AI request.

    Used for cost tracking and spotting unusually large generations.
    """
    prompt_tokens: int = 0
    completion_tokens: int = 0
    total_tokens: int = 0

    def __post_init__(self):
        """Calculate total if not provided."""
        if self.total_tokens == 0:
            self.total_tokens = self.prompt_tokens + self.completion_tokens


@dataclass
class AIResponse:
    """
    Standardized response from a provider call.

    Attributes:
        content: The generated text (may be empty - the caller decides
                 whether an empty answer counts as a failure)
        provider: Which provider generated this response
        model: The specific model used
        usage: Token usage statistics
        latency_ms: How long the request took
        raw_response: Original provider response (for debugging)
        metadata: Additional provider-specific data
        created_at: Timestamp of the response
    """
    content: str
    provider: ProviderType
    model: str
    usage: TokenUsage = field(default_factory=TokenUsage)
    latency_ms: float = 0.0
    raw_response: Optional[Any] = None
    metadata: Dict[str, Any] = field(default_factory=dict)
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for logging/serialization."""
        return {
            "content": self.content[:100] + "..." if len(self.content) > 100 else self.content,
            "provider": self.provider.value,
            "model": self.model,
            "tokens": {
                "prompt": self.usage.prompt_tokens,
                "completion": self.usage.completion_tokens,
                "total": self.usage.total_tokens,
            },
            "latency_ms": self.latency_ms,
            "created_at": self.created_at.isoformat(),
        }


class AIProvider(ABC):
    """
    Abstract base class for AI providers.

    Responsibilities:
    - Call ONE model once per invocation (no retries here)
    - Return the text, possibly empty
    - Raise a ProviderError subclass when the call fails
    """

    provider_type: ProviderType

    @abstractmethod
    async def generate(
        self,
        prompt: str,
        model: str,
        system_prompt: Optional[str] = None,
        **kwargs
    ) -> AIResponse:
        """
        Generate text from a single model.

        Args:
            prompt: The user content sent to the model
            model: Model identifier to call
            system_prompt: Optional system instruction

        Returns:
            AIResponse with the generated content (possibly "")

        Raises:
            TransientProviderError / NonTransientProviderError
        """

    @abstractmethod
    async def analyze_image(
        self,
        image_bytes: bytes,
        mime_type: str,
        prompt: str,
        model: str,
    ) -> AIResponse:
        """
        Describe an image with a multimodal model.

        Args:
            image_bytes: Raw image bytes (the SDK base64-encodes them on the wire)
            mime_type: Declared media type, e.g. "image/png"
            prompt: Instruction sent alongside the image
            model: Model identifier to call
        """

    def _measure_latency(self, start_time: float) -> float:
        """Calculate latency in milliseconds."""
        return (time.time() - start_time) * 1000
