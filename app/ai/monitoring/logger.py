"""
AI Logger - Structured logging for generation calls.

Every attempt of the resilient generator is logged as one JSON line so a
single request can be followed through its retries and model fallbacks.

Log Format:
==========
Each entry includes:
- Event name (ai_request, ai_response, ai_retry, ai_fallback, ai_error)
- Request ID (for tracing)
- Model and attempt number
- Latency / delay where relevant
- Timestamp
"""

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Optional, Dict, Any

from app.ai.providers.base import AIResponse

# Configure the AI logger
logger = logging.getLogger("edutools.ai")
logger.setLevel(logging.INFO)

# Create console handler if not exists
if not logger.handlers:
    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(logging.INFO)
    formatter = logging.Formatter(
        '[%(asctime)s] %(levelname)s [%(name)s] %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )
    handler.setFormatter(formatter)
    logger.addHandler(handler)


def _preview(text: str, limit: int = 100) -> str:
    return text[:limit] + "..." if len(text) > limit else text


class AILogger:
    """
    Structured logger for generation calls.

    Usage:
        ai_logger.log_request(request_id, prompt, model="gemini-2.5-flash", attempt=1)
        ai_logger.log_retry(request_id, model, attempt=1, delay_ms=1000, error=str(e))
        ai_logger.log_response(request_id, response, attempt=2)
    """

    def __init__(self, base_logger: Optional[logging.Logger] = None):
        self._logger = base_logger or logger

    def _emit(self, level: int, label: str, log_data: Dict[str, Any]) -> None:
        log_data["timestamp"] = datetime.now(timezone.utc).isoformat()
        self._logger.log(level, f"{label}: {json.dumps(log_data, default=str)}")

    def log_request(
        self,
        request_id: str,
        prompt: str,
        model: str,
        attempt: int,
        metadata: Optional[Dict[str, Any]] = None,
    ) -> None:
        """
        Log one generation attempt.

        Args:
            request_id: Identifier shared by every attempt of one call
            prompt: The prompt being sent (only length and a preview are logged)
            model: Model being called
            attempt: 1-based attempt number for this model
        """
        log_data = {
            "event": "ai_request",
            "request_id": request_id,
            "model": model,
            "attempt": attempt,
            "prompt_length": len(prompt),
            "prompt_preview": _preview(prompt),
        }
        if metadata:
            log_data["metadata"] = metadata
        self._emit(logging.INFO, "AI Request", log_data)

    def log_response(self, request_id: str, response: AIResponse, attempt: int) -> None:
        """Log a successful attempt."""
        log_data = {
            "event": "ai_response",
            "request_id": request_id,
            "attempt": attempt,
            **response.to_dict(),
            "response_length": len(response.content),
        }
        log_data["latency_ms"] = round(response.latency_ms, 2)
        self._emit(logging.INFO, "AI Response", log_data)

    def log_retry(
        self,
        request_id: str,
        model: str,
        attempt: int,
        delay_ms: float,
        error: str,
    ) -> None:
        """Log a transient failure that will be retried after a backoff delay."""
        log_data = {
            "event": "ai_retry",
            "request_id": request_id,
            "model": model,
            "attempt": attempt,
            "next_attempt": attempt + 1,
            "delay_ms": delay_ms,
            "error": error,
        }
        self._emit(logging.WARNING, "AI Retry", log_data)

    def log_fallback(self, request_id: str, model: str, reason: str, error: str) -> None:
        """Log that a model is being abandoned for the next candidate."""
        log_data = {
            "event": "ai_fallback",
            "request_id": request_id,
            "model": model,
            "reason": reason,
            "error": error,
        }
        self._emit(logging.WARNING, "AI Fallback", log_data)

    def log_error(
        self,
        request_id: str,
        error: str,
        stage: str,
        metadata: Optional[Dict[str, Any]] = None,
    ) -> None:
        """
        Log an error in the AI pipeline.

        Args:
            request_id: Request identifier
            error: Error message
            stage: Where the error occurred (generation, postprocess, image_analysis)
            metadata: Additional context
        """
        log_data = {
            "event": "ai_error",
            "request_id": request_id,
            "error": error,
            "stage": stage,
        }
        if metadata:
            log_data["metadata"] = metadata
        self._emit(logging.ERROR, "AI Error", log_data)


# ---------------------------------------------------------------------------
# SINGLETON INSTANCE
# ---------------------------------------------------------------------------
ai_logger = AILogger()
