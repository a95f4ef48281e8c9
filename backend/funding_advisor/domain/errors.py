"""Error taxonomy shared by services, engines and the HTTP layer.

Every error carries the HTTP status it maps to, a machine-readable code and a
short title, so the API exception handler can render any of them the same way::

    {"error": "Validation failed", "details": "Invalid numeric value for revenue_eur", "code": "VALIDATION_FAILED"}
"""

from typing import List, Optional


class AdvisorError(Exception):
    """Base class for all expected failures."""

    status_code: int = 500
    code: str = "ADVISOR_ERROR"
    title: str = "Request failed"

    def __init__(self, message: str, *, code: Optional[str] = None, title: Optional[str] = None):
        super().__init__(message)
        self.message = message
        if code is not None:
            self.code = code
        if title is not None:
            self.title = title

    def to_dict(self) -> dict:
        return {"error": self.title, "details": self.message, "code": self.code}


class InvalidInputError(AdvisorError):
    """Malformed request shape (non-object payload, non-integer id, missing name)."""

    status_code = 400
    code = "INVALID_INPUT"
    title = "Invalid input"


class ValidationFailedError(AdvisorError):
    """One or more field values failed coercion. All messages are kept."""

    status_code = 400
    code = "VALIDATION_FAILED"
    title = "Validation failed"

    def __init__(self, errors: List[str]):
        self.errors = list(errors)
        super().__init__("; ".join(self.errors))


class NotFoundError(AdvisorError):
    status_code = 404
    code = "NOT_FOUND"
    title = "Not found"


class ProviderFailureError(AdvisorError):
    """The LLM provider errored or returned content that could not be parsed."""

    status_code = 502
    code = "PROVIDER_FAILURE"
    title = "Provider failure"


class ConfigurationMissingError(AdvisorError):
    """A required agent prompt is not configured."""

    status_code = 500
    code = "CONFIGURATION_MISSING"
    title = "Configuration missing"
