"""
Core module for cross-cutting concerns.

This module provides:
- Structured logging configuration
- Request tracing middleware
- The service error taxonomy
"""

from core.errors import (
    ConfigurationError,
    InsufficientSignalError,
    InvalidRequestError,
    NotConnectedError,
    ServiceError,
    UpstreamError,
)
from core.logging import configure_logging, get_logger

__all__ = [
    "configure_logging",
    "get_logger",
    "ServiceError",
    "ConfigurationError",
    "NotConnectedError",
    "InvalidRequestError",
    "InsufficientSignalError",
    "UpstreamError",
]
