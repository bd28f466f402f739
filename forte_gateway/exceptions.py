"""
Gateway client errors.

Configuration and validation problems are raised before anything goes on
the wire. Transport problems wrap the underlying httpx exception.
"""

from __future__ import annotations

from typing import Any, Dict, Optional


class ForteError(Exception):
    """Base class for all gateway client errors."""

    def __init__(self, message: str, *, details: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(message)
        self.details = details or {}


class ConfigurationError(ForteError, ValueError):
    """Missing credential or unusable client settings."""


class ValidationError(ForteError, ValueError):
    """Request parameters that cannot be turned into protocol fields."""


class TransportError(ForteError):
    """Connection or TLS failure while talking to the gateway."""


class GatewayTimeoutError(TransportError):
    """The gateway did not answer within the read timeout."""
