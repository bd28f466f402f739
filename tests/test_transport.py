"""
HTTPS transport tests

Uses httpx.MockTransport so no network access is needed.
"""

import httpx
import pytest

from forte_gateway import ForteGateway, GatewayTimeoutError, HttpxTransport, TransportError

URL = "https://www.paymentsgateway.net/cgi-bin/posttest.pl"


def _transport(handler) -> HttpxTransport:
    return HttpxTransport(transport=httpx.MockTransport(handler))


class TestHttpxTransport:
    """Request shape and error mapping."""

    @pytest.mark.unit
    def test_posts_raw_body(self):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["method"] = request.method
            seen["url"] = str(request.url)
            seen["body"] = request.content.decode()
            return httpx.Response(200, text="pg_response_type=A\nendofdata")

        text = _transport(handler).post(URL, "pg_merchant_id=1&endofdata&", 10)

        assert text == "pg_response_type=A\nendofdata"
        assert seen == {"method": "POST", "url": URL, "body": "pg_merchant_id=1&endofdata&"}

    @pytest.mark.unit
    def test_http_error_status_still_returns_body(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(500, text="pg_response_type=E\nendofdata")

        assert _transport(handler).post(URL, "endofdata&", 10) == "pg_response_type=E\nendofdata"

    @pytest.mark.unit
    def test_read_timeout(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ReadTimeout("timed out", request=request)

        with pytest.raises(GatewayTimeoutError) as exc_info:
            _transport(handler).post(URL, "endofdata&", 0.5)

        assert exc_info.value.details == {"url": URL, "read_timeout": 0.5}
        assert isinstance(exc_info.value.__cause__, httpx.ReadTimeout)

    @pytest.mark.unit
    def test_connection_failure(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        with pytest.raises(TransportError) as exc_info:
            _transport(handler).post(URL, "endofdata&", 10)

        assert not isinstance(exc_info.value, GatewayTimeoutError)


class TestGatewayOverHttpx:
    """Full round trip through the default transport."""

    @pytest.mark.integration
    def test_void_round_trip(self):
        captured = {}

        def handler(request: httpx.Request) -> httpx.Response:
            captured["body"] = request.content.decode()
            return httpx.Response(
                200,
                text="pg_response_type=A\npg_response_code=A01\npg_trace_number=T-9\nendofdata\n",
            )

        gateway = ForteGateway("mer_test_001", "secret", test=True, transport=_transport(handler))

        result = gateway.void("AUTH123", "TRACE456")

        assert "pg_transaction_type=14&pg_original_authorization_code=AUTH123&" in captured["body"]
        assert result == {"pg_response_type": "A", "pg_response_code": "A01", "pg_trace_number": "T-9"}
