"""
HTTPS transport for gateway requests.

Each call opens its own connection, posts the raw request body and blocks
until the whole response has been read or the read timeout expires.
"""

from __future__ import annotations

from typing import Optional, Protocol

import httpx
import structlog

from .exceptions import GatewayTimeoutError, TransportError

logger = structlog.get_logger(__name__)

DEFAULT_READ_TIMEOUT = 500.0
DEFAULT_CONNECT_TIMEOUT = 60.0


class Transport(Protocol):
    def post(self, url: str, body: str, timeout: float) -> str:
        """POST ``body`` to ``url`` and return the response text."""
        ...


class HttpxTransport:
    """Default transport built on a short-lived ``httpx.Client``."""

    def __init__(
        self,
        connect_timeout: float = DEFAULT_CONNECT_TIMEOUT,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> None:
        self.connect_timeout = connect_timeout
        # Lets tests plug in httpx.MockTransport
        self._transport = transport

    def post(self, url: str, body: str, timeout: float = DEFAULT_READ_TIMEOUT) -> str:
        timeouts = httpx.Timeout(self.connect_timeout, read=timeout)

        with httpx.Client(timeout=timeouts, transport=self._transport) as client:
            try:
                response = client.post(url, content=body)
            except httpx.TimeoutException as e:
                logger.error("Gateway request timed out", url=url, read_timeout=timeout, error=str(e))
                raise GatewayTimeoutError(
                    "Gateway request timed out", details={"url": url, "read_timeout": timeout}
                ) from e
            except httpx.HTTPError as e:
                logger.error("Gateway request failed", url=url, error=str(e))
                raise TransportError(f"HTTP error: {e}", details={"url": url}) from e

        if response.is_error:
            # Rejections arrive as response fields, so the body is still decoded.
            logger.warning("Gateway returned an HTTP error status", url=url, status_code=response.status_code)

        return response.text
