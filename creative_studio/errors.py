"""
Error taxonomy for image and video generation.

Every failure raised by the public entry points derives from GenerationError,
so the Streamlit shell can catch one type at the boundary and show
`describe_error(exc)` to the user.
"""

from __future__ import annotations

from typing import Optional

from google.genai import errors as genai_errors

INVALID_KEY_MARKER = "Requested entity was not found"
INVALID_KEY_MESSAGE = "Your API key is invalid. Please select a valid key and try again."


class GenerationError(Exception):
    """Base class for all creative studio failures."""


class ValidationError(GenerationError):
    """Caller input failed a precondition (blank prompt, missing image, bad file)."""


class EncodingError(GenerationError):
    """An upload could not be turned into a base64 payload."""


class EmptyResultError(GenerationError):
    """The image call succeeded but returned no images."""


class IncompleteResultError(GenerationError):
    """The video job finished without a downloadable video."""


class RequestError(GenerationError):
    """
    Transport, auth or quota failure from the remote service.

    The original message is kept verbatim so callers can still inspect it.
    When the cause is a google-genai APIError its code and status are copied over.
    """

    def __init__(self, message: str, *, cause: Optional[BaseException] = None):
        super().__init__(message)
        self.cause = cause
        self.code: Optional[int] = getattr(cause, "code", None)
        self.status: Optional[str] = getattr(cause, "status", None)

    @classmethod
    def wrap(cls, exc: BaseException) -> "RequestError":
        return cls(str(exc) or exc.__class__.__name__, cause=exc)


class DownloadError(RequestError):
    """The final video fetch returned a non-success HTTP status."""

    def __init__(self, status_code: int, reason: str = ""):
        super().__init__(f"Failed to download video: {status_code} {reason}".rstrip())
        self.code = status_code
        self.status_code = status_code
        self.reason = reason


class GenerationTimeoutError(GenerationError, TimeoutError):
    """The video job did not finish within the polling bound."""


class GenerationCancelledError(GenerationError):
    """The caller cancelled the video job while it was being polled."""


def is_invalid_credential_error(exc: BaseException) -> bool:
    """
    Return True if the error means the selected API key is not usable.

    Prefers the structured code from google-genai (404 / NOT_FOUND) and falls
    back to matching the service's message text. A 404 that names a model
    (misconfigured IMAGEN_MODEL / VEO_MODEL) is not a key problem.
    """
    cause = exc.cause if isinstance(exc, RequestError) and exc.cause is not None else exc
    if isinstance(cause, genai_errors.APIError):
        if cause.code == 404 or (cause.status or "").upper() == "NOT_FOUND":
            return not _names_missing_model(cause.message or str(cause))
    return INVALID_KEY_MARKER in str(exc)


def _names_missing_model(message: str) -> bool:
    text = message.lower()
    return INVALID_KEY_MARKER.lower() not in text and ("models/" in text or "model" in text)


def describe_error(exc: BaseException) -> str:
    """Human-readable message for the UI."""
    if is_invalid_credential_error(exc):
        return INVALID_KEY_MESSAGE
    if isinstance(exc, GenerationError):
        return str(exc) or "An unknown error occurred."
    return "An unknown error occurred during generation."
