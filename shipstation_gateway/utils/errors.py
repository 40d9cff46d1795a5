from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from fastapi import status

logger = logging.getLogger("shipstation.errors")


class GatewayError(Exception):
    """Base class for every error the gateway core raises.

    ``status_code`` is the HTTP status a front end reports. It is 500 for
    every kind except ``UpstreamError``, which carries ShipStation's status.
    """

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return self.message


class ConfigurationError(GatewayError):
    """Startup configuration is missing or invalid."""


class UnknownOperationError(GatewayError):
    def __init__(self, name: Optional[str]) -> None:
        super().__init__(f"Unknown tool: {name}")
        self.name = name


class ValidationError(GatewayError):
    """Arguments were rejected before any upstream call."""


class TransportError(GatewayError):
    """No response was received from ShipStation (connect failure, timeout)."""

    def __init__(self, message: str, *, method: Optional[str] = None, path: Optional[str] = None) -> None:
        super().__init__(message)
        self.method = method
        self.path = path


class UpstreamError(GatewayError):
    """ShipStation answered with a non-2xx status."""

    def __init__(
        self,
        status_code: int,
        body: str,
        *,
        method: Optional[str] = None,
        path: Optional[str] = None,
    ) -> None:
        super().__init__(f"ShipStation API Error {status_code}: {body}")
        self.status_code = status_code
        self.body = body
        self.method = method
        self.path = path


def error_payload(message: str, path: str) -> Dict[str, Any]:
    """Body shape shared by every HTTP error response."""
    return {
        "error": message,
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "path": path,
    }


def describe(exc: BaseException) -> str:
    """Text shown to tool callers after the ``Error: `` prefix."""
    if isinstance(exc, GatewayError):
        return exc.message
    logger.error("Unexpected %s: %s", type(exc).__name__, exc)
    return str(exc) or type(exc).__name__
