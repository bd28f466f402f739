from __future__ import annotations

import os

from pydantic import BaseModel, Field, ValidationError as PydanticValidationError, field_validator

from .exceptions import ConfigurationError
from .transport import DEFAULT_READ_TIMEOUT


class GatewaySettings(BaseModel):
    """Merchant credentials and endpoint selection."""

    login: str = Field(..., description="Merchant identifier (pg_merchant_id)")
    password: str = Field(..., description="Processing password (pg_password)")
    test_mode: bool = Field(default=False, description="Use the sandbox endpoint")
    read_timeout: float = Field(default=DEFAULT_READ_TIMEOUT, gt=0, description="Read timeout in seconds")

    model_config = {"frozen": True}

    @field_validator("login", "password")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        if not value or not value.strip():
            raise ValueError("must not be empty")
        return value

    @classmethod
    def from_env(cls, prefix: str = "FORTE_") -> "GatewaySettings":
        """Load settings from ``FORTE_LOGIN``, ``FORTE_PASSWORD``,
        ``FORTE_TEST_MODE`` and ``FORTE_READ_TIMEOUT``."""
        values = {
            "login": os.getenv(f"{prefix}LOGIN"),
            "password": os.getenv(f"{prefix}PASSWORD"),
            "test_mode": os.getenv(f"{prefix}TEST_MODE", "false"),
            "read_timeout": os.getenv(f"{prefix}READ_TIMEOUT", str(DEFAULT_READ_TIMEOUT)),
        }
        return cls.parse(values)

    @classmethod
    def parse(cls, values: dict) -> "GatewaySettings":
        try:
            return cls(**values)
        except PydanticValidationError as e:
            raise ConfigurationError(
                "Invalid gateway settings",
                details={"errors": [_describe(error) for error in e.errors()]},
            ) from e


def _describe(error: dict) -> str:
    location = ".".join(str(part) for part in error.get("loc", ()))
    return f"{location}: {error.get('msg')}"
