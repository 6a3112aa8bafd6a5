"""
Shared error handling for the GitHub clients.
"""

from datetime import datetime, timezone
from typing import Dict, Any, Optional
from pydantic import BaseModel

from opentelemetry import trace


class ErrorResponse(BaseModel):
    """Standard error response format."""

    trace_id: Optional[str] = None
    code: str
    message: str
    details: Dict[str, Any] = {}


class GitHubClientException(Exception):
    """Base exception for the GitHub clients."""

    def __init__(self, code: str, message: str, details: Optional[Dict[str, Any]] = None):
        self.code = code
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def to_response(self) -> ErrorResponse:
        """Convert to error response."""
        # Get trace ID from current span
        trace_id = None
        current_span = trace.get_current_span()
        if current_span and current_span.is_recording():
            span_context = current_span.get_span_context()
            if span_context.trace_id != 0:
                trace_id = f"{span_context.trace_id:032x}"

        return ErrorResponse(
            trace_id=trace_id,
            code=self.code,
            message=self.message,
            details=self.details
        )


class ValidationError(GitHubClientException, ValueError):
    """Validation-related errors."""

    def __init__(self, message: str = "Validation failed", details: Optional[Dict[str, Any]] = None):
        super().__init__("VALIDATION_ERROR", message, details)


class ArgumentNullError(ValidationError):
    """A required argument was None."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Argument '{name}' must not be None", details={"argument": name})


class ArgumentEmptyError(ValidationError):
    """A required string argument was empty or whitespace."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Argument '{name}' must not be an empty string", details={"argument": name})


class ConnectionFailedError(GitHubClientException):
    """The HTTP request never produced a response."""

    def __init__(self, message: str = "Connection to GitHub failed", details: Optional[Dict[str, Any]] = None):
        super().__init__("CONNECTION_ERROR", message, details)


class ApiError(GitHubClientException):
    """GitHub answered with a non-success status code."""

    code = "API_ERROR"

    def __init__(self, status_code: int, message: Optional[str] = None,
                 documentation_url: Optional[str] = None, details: Optional[Dict[str, Any]] = None):
        self.status_code = status_code
        self.documentation_url = documentation_url
        details = dict(details or {})
        details.setdefault("status_code", status_code)
        if documentation_url:
            details.setdefault("documentation_url", documentation_url)
        super().__init__(type(self).code, message or f"GitHub API error: {status_code}", details)


class AuthorizationError(ApiError):
    """Bad or missing credentials (401)."""

    code = "AUTHORIZATION_ERROR"

    def __init__(self, message: Optional[str] = None, status_code: int = 401, **kwargs):
        super().__init__(status_code, message or "Authorization failed", **kwargs)


class TwoFactorRequiredError(AuthorizationError):
    """The account has two-factor authentication enabled and no code was sent."""

    code = "TWO_FACTOR_REQUIRED"

    def __init__(self, two_factor_type: str = "unknown", message: Optional[str] = None, **kwargs):
        self.two_factor_type = two_factor_type
        details = dict(kwargs.pop("details", None) or {})
        details["two_factor_type"] = two_factor_type
        super().__init__(message or "Two-factor authentication code is required", details=details, **kwargs)


class TwoFactorChallengeFailedError(AuthorizationError):
    """The supplied two-factor code was rejected."""

    code = "TWO_FACTOR_CHALLENGE_FAILED"

    def __init__(self, message: Optional[str] = None, **kwargs):
        super().__init__(message or "Two-factor authentication code is not valid", **kwargs)


class ForbiddenError(ApiError):
    """Request understood but refused (403)."""

    code = "FORBIDDEN"

    def __init__(self, message: Optional[str] = None, status_code: int = 403, **kwargs):
        super().__init__(status_code, message or "Forbidden", **kwargs)


class LoginAttemptsExceededError(ForbiddenError):
    """Too many failed login attempts for these credentials."""

    code = "LOGIN_ATTEMPTS_EXCEEDED"


class RateLimitExceededError(ForbiddenError):
    """The API rate limit has been exhausted."""

    code = "RATE_LIMIT_EXCEEDED"

    def __init__(self, limit: int = 0, remaining: int = 0, reset: Optional[datetime] = None,
                 message: Optional[str] = None, **kwargs):
        self.limit = limit
        self.remaining = remaining
        self.reset = reset
        details = dict(kwargs.pop("details", None) or {})
        details.update({
            "limit": limit,
            "remaining": remaining,
            "reset": reset.isoformat() if reset else None
        })
        super().__init__(message or "API rate limit exceeded", details=details, **kwargs)

    @staticmethod
    def parse_reset(value: Optional[str]) -> Optional[datetime]:
        """Convert an X-RateLimit-Reset epoch header to a datetime."""
        if not value:
            return None
        try:
            return datetime.fromtimestamp(int(value), tz=timezone.utc)
        except (ValueError, OverflowError, OSError):
            return None


class NotFoundError(ApiError):
    """Resource does not exist or is hidden from the caller (404)."""

    code = "NOT_FOUND"

    def __init__(self, message: Optional[str] = None, status_code: int = 404, **kwargs):
        super().__init__(status_code, message or "Not found", **kwargs)


class ApiValidationError(ApiError):
    """GitHub rejected the request payload (422)."""

    code = "API_VALIDATION_ERROR"

    def __init__(self, message: Optional[str] = None, errors: Optional[list] = None,
                 status_code: int = 422, **kwargs):
        self.errors = errors or []
        details = dict(kwargs.pop("details", None) or {})
        details["errors"] = self.errors
        super().__init__(status_code, message or "Validation failed", details=details, **kwargs)


class EmptySequenceError(GitHubClientException):
    """An observable completed without emitting the value that was asked for."""

    def __init__(self, message: str = "Sequence contains no elements", details: Optional[Dict[str, Any]] = None):
        super().__init__("EMPTY_SEQUENCE", message, details)
