"""
Resilient generation - retry with exponential backoff, then fall back to the
next model.

Flow for one call:
==================
    for model in ranked models:
        for attempt in 0..max_retries:
            call the provider
            ├── non-empty text            -> return it
            ├── transient error           -> wait base_delay_ms * 2**attempt, retry
            │                                (or next model when attempts run out)
            └── empty text / other error  -> next model right away
                                             (propagates if last model AND last attempt)
    raise AllModelsFailed

The backoff wait is an awaited asyncio.sleep, so it only suspends this
call; other requests keep running. Nothing is shared between calls: the
attempt counters are locals.
"""

import asyncio
import logging
import uuid
from typing import Awaitable, Callable, Optional, Sequence

from app.ai.errors import (
    AllModelsFailed,
    EmptyGenerationError,
    GenerationFailed,
    TransientProviderError,
    classify_error,
)
from app.ai.monitoring.logger import AILogger, ai_logger
from app.ai.providers.base import AIProvider

logger = logging.getLogger("edutools.ai.retry")

SleepFn = Callable[[float], Awaitable[None]]


def backoff_delay_ms(base_delay_ms: float, attempt: int) -> float:
    """Delay before retrying after the given 0-based attempt failed."""
    return base_delay_ms * (2 ** attempt)


class ResilientGenerator:
    """
    Obtains generated text from a ranked list of models.

    Usage:
        generator = ResilientGenerator(
            provider=GeminiProvider(api_key=settings.GEMINI_API_KEY),
            models=["gemini-2.5-flash", "gemini-1.5-flash", "gemini-1.5-pro"],
        )
        html = await generator.generate(prompt, system_instruction=SYSTEM_PROMPT)

    On success the returned string is never empty. On failure a
    GenerationFailed subclass is raised.
    """

    DEFAULT_MAX_RETRIES = 3
    DEFAULT_BASE_DELAY_MS = 1000

    def __init__(
        self,
        provider: AIProvider,
        models: Sequence[str],
        max_retries: int = DEFAULT_MAX_RETRIES,
        base_delay_ms: float = DEFAULT_BASE_DELAY_MS,
        sleep: SleepFn = asyncio.sleep,
        monitor: Optional[AILogger] = None,
    ):
        """
        Args:
            provider: Backend that performs one call against one model
            models: Candidate model identifiers, most preferred first
            max_retries: Default retries per model (attempts = max_retries + 1)
            base_delay_ms: Default base backoff delay in milliseconds
            sleep: Awaitable sleep taking seconds (swapped out in tests)
            monitor: Structured logger for attempts, retries and fallbacks
        """
        if not models:
            raise ValueError("At least one candidate model is required")
        if max_retries < 0:
            raise ValueError("max_retries must be >= 0")

        self._provider = provider
        self._models = tuple(models)
        self._max_retries = max_retries
        self._base_delay_ms = base_delay_ms
        self._sleep = sleep
        self._monitor = monitor or ai_logger

    @property
    def models(self) -> tuple[str, ...]:
        return self._models

    async def generate(
        self,
        prompt: str,
        system_instruction: Optional[str] = None,
        max_retries: Optional[int] = None,
        base_delay_ms: Optional[float] = None,
    ) -> str:
        """
        Generate text, masking transient unavailability.

        Args:
            prompt: Content sent to the model (required, non-empty)
            system_instruction: Optional system instruction
            max_retries: Retries per model for this call (default from constructor)
            base_delay_ms: Base backoff delay for this call (default from constructor)

        Returns:
            The generated text (never empty)

        Raises:
            ValueError: prompt is empty
            NonTransientProviderError / EmptyGenerationError: the last model
                failed non-transiently on its last attempt
            AllModelsFailed: every model was exhausted
        """
        if not prompt or not prompt.strip():
            raise ValueError("prompt must be a non-empty string")

        retries = self._max_retries if max_retries is None else max_retries
        base_delay = self._base_delay_ms if base_delay_ms is None else base_delay_ms
        if retries < 0:
            raise ValueError("max_retries must be >= 0")

        request_id = uuid.uuid4().hex[:12]
        last_index = len(self._models) - 1
        last_error: Optional[GenerationFailed] = None

        for model_index, model in enumerate(self._models):
            is_last_model = model_index == last_index

            for attempt in range(retries + 1):
                self._monitor.log_request(request_id, prompt, model=model, attempt=attempt + 1)

                try:
                    response = await self._provider.generate(
                        prompt,
                        model=model,
                        system_prompt=system_instruction,
                    )
                    if not response.content:
                        raise EmptyGenerationError(model=model)
                except Exception as exc:
                    error = classify_error(exc, model=model)
                    last_error = error
                    transient = isinstance(error, TransientProviderError)

                    if transient and attempt < retries:
                        delay_ms = backoff_delay_ms(base_delay, attempt)
                        self._monitor.log_retry(
                            request_id, model, attempt=attempt + 1,
                            delay_ms=delay_ms, error=str(error),
                        )
                        await self._sleep(delay_ms / 1000)
                        continue

                    if not transient and is_last_model and attempt == retries:
                        self._monitor.log_error(
                            request_id, str(error), stage="generation",
                            metadata={"model": model, "attempt": attempt + 1},
                        )
                        if error is exc:
                            raise
                        raise error from exc

                    self._monitor.log_fallback(
                        request_id,
                        model,
                        reason="retries_exhausted" if transient else "non_transient",
                        error=str(error),
                    )
                    break
                else:
                    self._monitor.log_response(request_id, response, attempt=attempt + 1)
                    return response.content

        self._monitor.log_error(
            request_id,
            "All models failed after retries",
            stage="generation",
            metadata={"models": list(self._models)},
        )
        raise AllModelsFailed(models=list(self._models), last_error=last_error) from last_error
