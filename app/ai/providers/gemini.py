"""
Gemini Provider - Google's GenAI SDK.

One call, one model. Retries and model fallback live in app.ai.retry;
this class only turns SDK results and exceptions into AIResponse and
classified ProviderErrors.
"""

import time
import logging
from typing import Optional

from google import genai
from google.genai import types

from app.ai.errors import NonTransientProviderError, classify_error
from app.ai.providers.base import (
    AIProvider,
    AIResponse,
    ProviderType,
    TokenUsage,
)

logger = logging.getLogger("edutools.ai.gemini")


class GeminiProvider(AIProvider):
    provider_type = ProviderType.GEMINI

    def __init__(self, api_key: str = "", client: Optional[genai.Client] = None):
        """
        Args:
            api_key: Gemini API key. Ignored when a client is passed in.
            client: Pre-built genai.Client (tests pass a double here)
        """
        self.api_key = api_key

        if client is not None:
            self._client = client
        elif self.api_key:
            self._client = genai.Client(api_key=self.api_key)
            logger.info("Gemini provider initialized")
        else:
            self._client = None
            logger.warning("Gemini API key not configured")

    async def generate(
        self,
        prompt: str,
        model: str,
        system_prompt: Optional[str] = None,
        **kwargs
    ) -> AIResponse:
        self._require_client(model)
        start_time = time.time()

        config = types.GenerateContentConfig(
            # An empty instruction is the same as none
            system_instruction=system_prompt or None,
            **kwargs,
        )

        try:
            # client.aio keeps the event loop free while we wait on the network
            response = await self._client.aio.models.generate_content(
                model=model,
                contents=prompt,
                config=config,
            )
        except Exception as e:
            raise classify_error(e, model=model) from e

        return AIResponse(
            content=response.text or "",
            provider=self.provider_type,
            model=model,
            usage=self._extract_usage(response),
            latency_ms=self._measure_latency(start_time),
            raw_response=response,
        )

    async def analyze_image(
        self,
        image_bytes: bytes,
        mime_type: str,
        prompt: str,
        model: str,
    ) -> AIResponse:
        self._require_client(model)
        start_time = time.time()

        contents = [
            types.Part.from_bytes(data=image_bytes, mime_type=mime_type),
            prompt,
        ]

        try:
            response = await self._client.aio.models.generate_content(
                model=model,
                contents=contents,
            )
        except Exception as e:
            raise classify_error(e, model=model) from e

        return AIResponse(
            content=response.text or "",
            provider=self.provider_type,
            model=model,
            usage=self._extract_usage(response),
            latency_ms=self._measure_latency(start_time),
            raw_response=response,
            metadata={"mime_type": mime_type, "image_bytes": len(image_bytes)},
        )

    # --- private helpers ---

    def _require_client(self, model: str) -> None:
        if self._client is None:
            raise NonTransientProviderError("API key missing", model=model)

    def _extract_usage(self, response) -> TokenUsage:
        # The SDK returns None when no usage was reported
        usage = getattr(response, "usage_metadata", None)
        if not usage:
            return TokenUsage()
        return TokenUsage(
            prompt_tokens=usage.prompt_token_count or 0,
            completion_tokens=usage.candidates_token_count or 0,
        )
