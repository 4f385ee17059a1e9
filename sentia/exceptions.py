"""Exception hierarchy for the analysis service.

Transport failures are classified into a small taxonomy so that the pipeline
can choose a per-stage policy (fail-open, fail-soft, fail-hard) by type alone.
All errors carry a machine-readable ``error_code`` and serialize to a
problem-details dict for the HTTP layer.
"""

from http import HTTPStatus
from typing import Any, Optional

from sentia.config.message import ERROR_MESSAGES


class SentiaError(Exception):
    """Base exception for all service errors.

    Attributes:
        message: Human-readable error message
        error_code: Application-specific error code
        http_status: HTTP status returned by the API layer
        details: Additional context
        retryable: Whether the caller may retry the operation
    """

    message_key = "unknown_error"

    def __init__(
        self,
        message: str,
        error_code: str,
        http_status: int = 500,
        details: Optional[dict[str, Any]] = None,
        retryable: bool = False,
    ):
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.http_status = http_status
        self.details = details or {}
        self.retryable = retryable

    @property
    def user_message(self) -> str:
        return ERROR_MESSAGES[self.message_key]

    def to_dict(self) -> dict[str, Any]:
        """Convert to RFC 7807 Problem Details format."""
        return {
            "type": f"/errors/{self.error_code}",
            "title": self.user_message,
            "status": self.http_status,
            "code": self.error_code,
            "detail": self.message,
            "retryable": self.retryable,
            **({"details": self.details} if self.details else {}),
        }


# =============================================================================
# Transport-level failures (no HTTP status received)
# =============================================================================


class TransportError(SentiaError):
    """No response was received from the remote service."""

    message_key = "network_error"

    def __init__(self, message: str, error_code: str, **kwargs: Any):
        super().__init__(
            message=message,
            error_code=error_code,
            http_status=kwargs.pop("http_status", 502),
            retryable=True,
            **kwargs,
        )


class NetworkError(TransportError):
    """Connection refused, reset, DNS failure and the like."""

    def __init__(self, message: str = "Network error", **kwargs: Any):
        super().__init__(message, "NETWORK_ERROR", **kwargs)


class RequestTimeoutError(TransportError):
    """A single attempt exceeded its deadline."""

    message_key = "timeout"

    def __init__(self, timeout_seconds: float, **kwargs: Any):
        details = kwargs.pop("details", {})
        details["timeout_seconds"] = timeout_seconds
        super().__init__(
            f"Request timed out after {timeout_seconds:g}s",
            "TIMEOUT",
            http_status=504,
            details=details,
            **kwargs,
        )


# =============================================================================
# Status-bearing failures (never retried)
# =============================================================================


class ApiError(SentiaError):
    """The remote service answered with an error status."""

    message_key = "server_error"

    def __init__(self, status: int, message: str = "", error_code: str = "API_ERROR"):
        super().__init__(
            message=message or f"HTTP {status}",
            error_code=error_code,
            http_status=502,
            details={"upstream_status": int(status)},
            retryable=False,
        )
        self.status = int(status)


class ClientError(ApiError):
    """4xx response."""

    message_key = "invalid_image"

    def __init__(self, status: int, message: str = "", error_code: str = "CLIENT_ERROR"):
        super().__init__(status, message, error_code)


class UnauthorizedError(ClientError):
    """401 response."""

    message_key = "unauthorized"

    def __init__(self, message: str = ""):
        super().__init__(HTTPStatus.UNAUTHORIZED, message, "UNAUTHORIZED")


class RateLimitedError(ClientError):
    """429 response."""

    message_key = "rate_limited"

    def __init__(self, message: str = "", retry_after: Optional[float] = None):
        super().__init__(HTTPStatus.TOO_MANY_REQUESTS, message, "RATE_LIMITED")
        self.retry_after = retry_after
        if retry_after is not None:
            self.details["retry_after"] = retry_after


class ServerError(ApiError):
    """5xx response."""

    def __init__(self, status: int, message: str = ""):
        super().__init__(status, message, "SERVER_ERROR")


def classify_status(status: int, message: str = "") -> ApiError:
    """Map an HTTP error status onto the error taxonomy."""
    if status == HTTPStatus.UNAUTHORIZED:
        return UnauthorizedError(message)
    if status == HTTPStatus.TOO_MANY_REQUESTS:
        return RateLimitedError(message)
    if 400 <= status < 500:
        return ClientError(status, message)
    if status >= 500:
        return ServerError(status, message)
    return ApiError(status, message)


# =============================================================================
# Input and response failures
# =============================================================================


class InvalidImageError(SentiaError):
    """The image reference is missing, unreadable, empty or too large."""

    message_key = "invalid_image"

    def __init__(self, message: str, too_large: bool = False, **kwargs: Any):
        super().__init__(
            message=message,
            error_code="IMAGE_TOO_LARGE" if too_large else "INVALID_IMAGE",
            http_status=413 if too_large else 422,
            **kwargs,
        )
        if too_large:
            self.message_key = "image_too_large"


class MalformedResponseError(ValueError):
    """The remote service returned a body that is not a JSON object.

    Deliberately outside ``SentiaError``: it is an unexpected failure, which the
    analysis stage absorbs with a fallback instead of aborting the pipeline.
    """


# =============================================================================
# Gating failures
# =============================================================================


class QuotaExceededError(SentiaError):
    """The free daily scan quota is exhausted."""

    message_key = "daily_limit_reached"

    def __init__(self, used: int, limit: int, paywall: Optional[dict[str, Any]] = None):
        super().__init__(
            message=f"Daily scan limit reached ({used}/{limit})",
            error_code="DAILY_LIMIT_REACHED",
            http_status=402,
            details={"used": used, "limit": limit, "paywall": paywall or {}},
        )
        self.used = used
        self.limit = limit
        self.paywall = paywall or {}


class PipelineBusyError(SentiaError):
    """A pipeline run is already in flight for this capture."""

    message_key = "scan_in_progress"

    def __init__(self, capture_id: str):
        super().__init__(
            message=f"Analysis already running for capture '{capture_id}'",
            error_code="SCAN_IN_PROGRESS",
            http_status=409,
            details={"capture_id": capture_id},
        )
        self.capture_id = capture_id
