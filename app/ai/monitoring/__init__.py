"""
Monitoring Module - structured logging for generation calls.

Usage:
======
    from app.ai.monitoring import ai_logger

    ai_logger.log_request(request_id, prompt, model, attempt=1)
    ai_logger.log_retry(request_id, model, attempt=1, delay_ms=1000, error="overloaded")
"""

from app.ai.monitoring.logger import AILogger, ai_logger

__all__ = [
    "AILogger",
    "ai_logger",
]
