"""
Forte Payments Gateway client

Translates payment operations into the gateway's key-value protocol:

- Sales, authorizations, credits and pre-authorizations against a card or
  a stored payment method
- Captures, voids and balance inquiries referencing a prior transaction
- Recurring schedules (create, suspend, activate, cancel)

Every request carries the merchant credentials and one transaction type
code. Responses are returned as raw string fields; interpreting them is up
to the caller.
"""

from __future__ import annotations

from typing import Any, Dict, Mapping, Optional, Union

import structlog

from . import fields as f
from .config import GatewaySettings
from .exceptions import ConfigurationError, ValidationError
from .fields import RecurringFrequency, TransactionType, encode_fields, mask_fields
from .payment_methods import PaymentMethod, payment_fields
from .response import RESPONSE_CODE, RESPONSE_TYPE, decode_response
from .transport import DEFAULT_READ_TIMEOUT, HttpxTransport, Transport

logger = structlog.get_logger(__name__)

TEST_URL = "https://www.paymentsgateway.net/cgi-bin/posttest.pl"
LIVE_URL = "https://www.paymentsgateway.net/cgi-bin/postauth.pl"

Payment = Union[PaymentMethod, Mapping[str, Any]]
Response = Dict[str, Optional[str]]


class ForteGateway:
    """Client for the Forte (paymentsgateway.net) transaction endpoint."""

    def __init__(
        self,
        login: str,
        password: str,
        test: bool = False,
        transport: Optional[Transport] = None,
        read_timeout: float = DEFAULT_READ_TIMEOUT,
    ):
        if not login or not str(login).strip():
            raise ConfigurationError("Missing required option: login")
        if not password or not str(password).strip():
            raise ConfigurationError("Missing required option: password")
        if read_timeout is None or read_timeout <= 0:
            raise ConfigurationError(
                "Read timeout must be greater than zero", details={"read_timeout": read_timeout}
            )

        self._login = login
        self._password = password
        self._test = bool(test)
        self.read_timeout = read_timeout
        self.transport = transport or HttpxTransport()

    @classmethod
    def from_settings(cls, settings: GatewaySettings, transport: Optional[Transport] = None) -> "ForteGateway":
        return cls(
            login=settings.login,
            password=settings.password,
            test=settings.test_mode,
            transport=transport,
            read_timeout=settings.read_timeout,
        )

    @classmethod
    def from_env(cls, transport: Optional[Transport] = None) -> "ForteGateway":
        return cls.from_settings(GatewaySettings.from_env(), transport=transport)

    @property
    def test(self) -> bool:
        return self._test

    @property
    def url(self) -> str:
        return TEST_URL if self._test else LIVE_URL

    def purchase(self, amount: Any, payment: Payment, options: Optional[Mapping[str, Any]] = None) -> Response:
        """Sale (transaction type 10)."""
        payment_data = payment_fields(payment)
        payment_data.update(self._user_fields(amount, options))
        return self._commit(TransactionType.SALE, payment_data)

    def authorize(self, amount: Any, payment: Payment, options: Optional[Mapping[str, Any]] = None) -> Response:
        """Authorization only (transaction type 11)."""
        payment_data = payment_fields(payment)
        payment_data.update(self._user_fields(amount, options))
        return self._commit(TransactionType.AUTHORIZE, payment_data)

    def capture(self, amount: Any, authorization_code: str, trace_number: str) -> Response:
        """Capture a prior authorization (transaction type 12).

        ``amount`` is accepted for symmetry with the other operations but is
        not transmitted; the gateway captures the authorized amount.
        """
        capture_data = {
            f.ORIGINAL_AUTHORIZATION_CODE: authorization_code,
            f.ORIGINAL_TRACE_NUMBER: trace_number,
        }
        return self._commit(TransactionType.CAPTURE, capture_data)

    def credit(self, amount: Any, payment: Payment, options: Optional[Mapping[str, Any]] = None) -> Response:
        """Credit funds back to a card or stored method (transaction type 13)."""
        payment_data = payment_fields(payment)
        payment_data.update(self._user_fields(amount, options))
        return self._commit(TransactionType.CREDIT, payment_data)

    def void(self, authorization_code: str, trace_number: str) -> Response:
        """Void a prior transaction (transaction type 14)."""
        void_data = {
            f.ORIGINAL_AUTHORIZATION_CODE: authorization_code,
            f.ORIGINAL_TRACE_NUMBER: trace_number,
        }
        return self._commit(TransactionType.VOID, void_data)

    def pre_auth(
        self,
        amount: Any,
        authorization_code: str,
        payment: Payment,
        options: Optional[Mapping[str, Any]] = None,
    ) -> Response:
        """Pre-authorization against an existing authorization code (transaction type 15)."""
        payment_data = payment_fields(payment)
        payment_data[f.ORIGINAL_AUTHORIZATION_CODE] = authorization_code
        payment_data.update(self._user_fields(amount, options))
        return self._commit(TransactionType.PRE_AUTH, payment_data)

    def balance_inquiry(self, amount: Any, authorization_code: str, trace_number: str) -> Response:
        """Balance inquiry on a prior transaction (transaction type 16)."""
        inquiry_data = {
            f.TOTAL_AMOUNT: _require_amount(amount),
            f.ORIGINAL_AUTHORIZATION_CODE: authorization_code,
            f.ORIGINAL_TRACE_NUMBER: trace_number,
        }
        return self._commit(TransactionType.BALANCE_INQUIRY, inquiry_data)

    def recurring_transaction(
        self,
        amount: Any,
        frequency: Union[RecurringFrequency, str],
        quantity: Any,
        schedule_recurring_amount: Any,
        schedule_start_date: Any,
        payment: Payment,
        options: Optional[Mapping[str, Any]] = None,
    ) -> Response:
        """Create a recurring schedule, sent as a sale with schedule fields.

        ``schedule_recurring_amount`` and ``schedule_start_date`` are left
        out of the request when ``None``.
        """
        schedule_frequency = RecurringFrequency.from_name(frequency)

        payment_data = payment_fields(payment)
        payment_data[f.SCHEDULE_FREQUENCY] = schedule_frequency.code
        payment_data[f.SCHEDULE_QUANTITY] = quantity
        if schedule_recurring_amount is not None:
            payment_data[f.SCHEDULE_RECURRING_AMOUNT] = schedule_recurring_amount
        if schedule_start_date is not None:
            payment_data[f.SCHEDULE_START_DATE] = schedule_start_date
        payment_data.update(self._user_fields(amount, options))
        return self._commit(TransactionType.SALE, payment_data)

    def recurring_suspend(self, trace_number: str) -> Response:
        """Suspend an active schedule; nothing is generated until it is reactivated (type 40)."""
        return self._commit(TransactionType.RECURRING_SUSPEND, {f.ORIGINAL_TRACE_NUMBER: trace_number})

    def recurring_activate(self, trace_number: str) -> Response:
        """Return a suspended schedule to the active state (type 41)."""
        return self._commit(TransactionType.RECURRING_ACTIVATE, {f.ORIGINAL_TRACE_NUMBER: trace_number})

    def recurring_recur(self, trace_number: str) -> Response:
        """Delete a recurring schedule permanently (type 42)."""
        return self._commit(TransactionType.RECURRING_CANCEL, {f.ORIGINAL_TRACE_NUMBER: trace_number})

    recurring_cancel = recurring_recur

    def build_request(self, transaction_type: TransactionType, custom_fields: Mapping[str, Any]) -> Dict[str, Any]:
        """Full outgoing field mapping: credentials, transaction type, then ``custom_fields``."""
        request_fields: Dict[str, Any] = {
            f.MERCHANT_ID: self._login,
            f.PASSWORD: self._password,
            f.TRANSACTION_TYPE: transaction_type.code,
        }
        # None never replaces a required field
        request_fields.update((key, value) for key, value in custom_fields.items() if value is not None)
        return request_fields

    def _user_fields(self, amount: Any, options: Optional[Mapping[str, Any]]) -> Dict[str, Any]:
        # Amount goes first; options are copied verbatim and may override anything but None.
        user_fields: Dict[str, Any] = {f.TOTAL_AMOUNT: _require_amount(amount)}
        for key, value in (options or {}).items():
            if value is not None:
                user_fields[key] = value
        return user_fields

    def _commit(self, transaction_type: TransactionType, custom_fields: Mapping[str, Any]) -> Response:
        request_fields = self.build_request(transaction_type, custom_fields)
        body = encode_fields(request_fields)

        logger.info(
            "Sending gateway request",
            transaction_type=transaction_type.name.lower(),
            test_mode=self._test,
        )
        logger.debug("Gateway request fields", fields=mask_fields(request_fields))

        raw_response = self.transport.post(self.url, body, self.read_timeout)
        response = decode_response(raw_response)

        logger.info(
            "Gateway response received",
            transaction_type=transaction_type.name.lower(),
            response_type=response.get(RESPONSE_TYPE),
            response_code=response.get(RESPONSE_CODE),
        )
        return response

    def __repr__(self) -> str:
        return f"ForteGateway(login={self._login!r}, test={self._test})"


def _require_amount(amount: Any) -> Any:
    if amount is None:
        raise ValidationError("Amount is required", details={"field": f.TOTAL_AMOUNT})
    return amount
