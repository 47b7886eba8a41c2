"""
Generation errors - the failure taxonomy of the AI layer.

Hierarchy:
    GenerationFailed
    ├── ProviderError               (a call to the provider raised)
    │   ├── TransientProviderError      overload / unavailable, worth retrying
    │   └── NonTransientProviderError   anything else
    ├── EmptyGenerationError        the call succeeded but returned no text
    ├── AllModelsFailed             every candidate model was exhausted
    └── InvalidGeneratedContent     text came back but isn't usable HTML

Callers of the resilient generator only need to catch GenerationFailed.
"""

from typing import Optional


class GenerationFailed(Exception):
    """Base class for every failure of the generation pipeline."""


class ProviderError(GenerationFailed):
    """
    A normalized provider failure.

    Attributes:
        message: Human-readable error text from the provider
        status_code: HTTP-like status code, if the provider reported one
        status: Provider status string (e.g. "UNAVAILABLE"), if any
        model: The model that was being called
    """

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        status: Optional[str] = None,
        model: Optional[str] = None,
    ):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.status = status
        self.model = model

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(message={self.message!r}, "
            f"status_code={self.status_code}, status={self.status!r}, model={self.model!r})"
        )


class TransientProviderError(ProviderError):
    """Temporary unavailability (503, "overloaded", "UNAVAILABLE")."""


class NonTransientProviderError(ProviderError):
    """Won't improve by retrying the same request on the same model."""


class EmptyGenerationError(GenerationFailed):
    """The provider answered but the response carried no text."""

    def __init__(self, message: str = "No content generated from AI", model: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.model = model


class AllModelsFailed(GenerationFailed):
    """
    Terminal failure: every model exhausted its retries or failed non-transiently.

    The last underlying error is kept on `last_error` (and chained as __cause__).
    """

    def __init__(
        self,
        message: str = "All models failed after retries",
        models: Optional[list[str]] = None,
        last_error: Optional[BaseException] = None,
    ):
        super().__init__(message)
        self.message = message
        self.models = list(models or [])
        self.last_error = last_error


class InvalidGeneratedContent(GenerationFailed):
    """Generated text does not look like HTML."""

    def __init__(self, message: str = "Generated content does not appear to be valid HTML"):
        super().__init__(message)
        self.message = message


# ---------------------------------------------------------------------------
# CLASSIFICATION
# ---------------------------------------------------------------------------

OVERLOAD_STATUS_CODES = frozenset({503})
OVERLOAD_MESSAGE_MARKERS = ("overloaded", "UNAVAILABLE")


def is_transient(
    status_code: Optional[int] = None,
    message: Optional[str] = None,
    status: Optional[str] = None,
) -> bool:
    """
    Decide whether a provider failure is temporary overload/unavailability.

    Transient when the status code is 503, or the message or status text
    contains "overloaded" or "UNAVAILABLE" (matched case-sensitively, the
    way the provider spells them).
    """
    if status_code in OVERLOAD_STATUS_CODES:
        return True

    for text in (message, status):
        if text and any(marker in text for marker in OVERLOAD_MESSAGE_MARKERS):
            return True

    return False


def _error_details(exc: BaseException) -> tuple[Optional[int], Optional[str], str]:
    """
    Normalize an exception into (status_code, status, message).

    Works with google.genai.errors.APIError (code/status/message) and with
    arbitrary exceptions that carry a status_code attribute or none at all.
    """
    code = getattr(exc, "code", None)
    if code is None:
        code = getattr(exc, "status_code", None)

    status = getattr(exc, "status", None)
    # Some clients put the numeric code in .status
    if isinstance(status, int) and not isinstance(status, bool):
        code = code if code is not None else status
        status = None

    try:
        code = int(code) if code is not None else None
    except (TypeError, ValueError):
        code = None

    message = getattr(exc, "message", None) or str(exc) or type(exc).__name__
    return code, status if isinstance(status, str) else None, str(message)


def classify_error(exc: BaseException, model: Optional[str] = None) -> GenerationFailed:
    """
    Turn any exception raised by a provider call into a classified error.

    Errors that are already classified pass through unchanged; a bare
    ProviderError is sorted into its transient or non-transient subclass.
    """
    if type(exc) is ProviderError:
        code, status, message = exc.status_code, exc.status, exc.message
        model = exc.model or model
    elif isinstance(exc, GenerationFailed):
        return exc
    else:
        code, status, message = _error_details(exc)

    error_cls = (
        TransientProviderError
        if is_transient(status_code=code, message=message, status=status)
        else NonTransientProviderError
    )
    return error_cls(message, status_code=code, status=status, model=model)
