"""
Test configuration and fixtures for the gateway client tests.
"""

from typing import Callable, List, Tuple
from unittest.mock import MagicMock

import pytest

from forte_gateway import ForteGateway

APPROVED_RESPONSE = (
    "pg_response_type=A\n"
    "pg_response_code=A01\n"
    "pg_response_description=APPROVED\n"
    "pg_authorization_code=123456\n"
    "pg_trace_number=11111111-2222-3333-4444-555555555555\n"
    "endofdata\n"
)


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    """Keep developer credentials out of the tests."""
    for name in ("FORTE_LOGIN", "FORTE_PASSWORD", "FORTE_TEST_MODE", "FORTE_READ_TIMEOUT"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def mock_transport():
    """Transport stub answering every request with an approval."""
    transport = MagicMock()
    transport.post.return_value = APPROVED_RESPONSE
    return transport


@pytest.fixture
def gateway(mock_transport):
    return ForteGateway(login="mer_test_001", password="secret", test=True, transport=mock_transport)


@pytest.fixture
def mock_card_data():
    """Inline card in the mapping form callers pass around."""
    return {
        "brand": "visa",
        "number": "4111111111111111",
        "month": "12",
        "year": "2030",
        "first_name": "John",
        "last_name": "Doe",
    }


@pytest.fixture
def stored_payment():
    return {"pg_client_id": "CL-1001", "pg_payment_method_id": "PM-2002"}


@pytest.fixture
def sent_pairs(mock_transport) -> Callable[[], List[Tuple[str, str]]]:
    """Ordered ``(key, value)`` pairs of the last request body."""

    def _pairs() -> List[Tuple[str, str]]:
        body = mock_transport.post.call_args.args[1]
        assert body.endswith("endofdata&")
        pairs = []
        for segment in body[: -len("endofdata&")].split("&"):
            if segment:
                key, _, value = segment.partition("=")
                pairs.append((key, value))
        return pairs

    return _pairs
