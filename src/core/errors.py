"""
Service error taxonomy.

Every error raised to the HTTP layer is a ServiceError. The exception handler
registered in api.app renders it as ``{"error": message, **extra}`` with the
error's status code.
"""

from typing import Any, Dict, Optional


class ServiceError(Exception):
    """Base class for errors that map to an HTTP response."""

    status_code: int = 500

    def __init__(
        self,
        message: str,
        /,
        status_code: Optional[int] = None,
        **extra: Any,
    ) -> None:
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code
        self.extra: Dict[str, Any] = {k: v for k, v in extra.items() if v is not None}

    def to_payload(self) -> Dict[str, Any]:
        return {"error": self.message, **self.extra}


class ConfigurationError(ServiceError):
    """Required configuration is missing. Never retried."""

    status_code = 500


class NotConnectedError(ServiceError):
    """No board provider credential is available."""

    status_code = 401


class InvalidRequestError(ServiceError):
    """Request body or parameters are missing or malformed."""

    status_code = 400


class InsufficientSignalError(ServiceError):
    """Input is valid but carries nothing to rank (no usable pins or products)."""

    status_code = 400


class UpstreamError(ServiceError):
    """The board provider or the embedding provider returned a non-success."""

    status_code = 502

    def __init__(
        self,
        message: str,
        /,
        upstream_status: Optional[int] = None,
        details: Any = None,
        **extra: Any,
    ) -> None:
        super().__init__(message, upstreamStatus=upstream_status, details=details, **extra)
        self.upstream_status = upstream_status
        self.details = details
