"""
Error variants for the image generation endpoint.

Each variant carries the HTTP status it maps to and renders its own JSON
body, so the route only has to catch ``GenerateError`` and return it.
"""
from typing import Any, Dict, Optional

MISSING_FIELDS_MESSAGE = "Image URL and prompt are required"
API_KEY_MISSING_MESSAGE = "API key not configured"
UPSTREAM_FALLBACK_MESSAGE = "OpenRouter API error"
GENERIC_FALLBACK_MESSAGE = "Failed to generate image"


class GenerateError(Exception):
    """Base class for every failure the generate endpoint can report."""

    status_code: int = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_body(self) -> Dict[str, Any]:
        return {"error": self.message}


class InputValidationError(GenerateError):
    """A required request field is missing or empty."""

    status_code = 400

    def __init__(self, message: str = MISSING_FIELDS_MESSAGE):
        super().__init__(message)


class ConfigError(GenerateError):
    """The server is missing configuration needed to reach the upstream."""

    status_code = 500

    def __init__(self, message: str = API_KEY_MISSING_MESSAGE):
        super().__init__(message)


class UpstreamHttpError(GenerateError):
    """OpenRouter answered with a non-success status.

    The upstream status and raw body are passed through to the caller.
    """

    def __init__(self, status: int, body: Any):
        super().__init__(_upstream_message(body) or UPSTREAM_FALLBACK_MESSAGE)
        self.status_code = status
        self.body = body

    def to_body(self) -> Dict[str, Any]:
        return {"error": self.message, "details": self.body}


class UnknownError(GenerateError):
    """Anything else: transport failures, malformed responses, bugs."""

    status_code = 500

    def __init__(self, message: Optional[str] = None):
        super().__init__(message or GENERIC_FALLBACK_MESSAGE)

    @classmethod
    def from_exception(cls, error: BaseException) -> "UnknownError":
        return cls(str(error))


def _upstream_message(body: Any) -> Optional[str]:
    if not isinstance(body, dict):
        return None
    error = body.get("error")
    if isinstance(error, dict):
        message = error.get("message")
        if isinstance(message, str) and message:
            return message
    return None
