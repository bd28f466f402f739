"""Client for the Forte (paymentsgateway.net) key-value transaction protocol."""

from .config import GatewaySettings
from .exceptions import (
    ConfigurationError,
    ForteError,
    GatewayTimeoutError,
    TransportError,
    ValidationError,
)
from .fields import RecurringFrequency, TransactionType, encode_fields
from .gateway import LIVE_URL, TEST_URL, ForteGateway
from .payment_methods import CreditCard, StoredPaymentMethod, coerce_payment_method, payment_fields
from .response import decode_response
from .transport import HttpxTransport, Transport

__all__ = [
    "ConfigurationError",
    "CreditCard",
    "ForteError",
    "ForteGateway",
    "GatewaySettings",
    "GatewayTimeoutError",
    "HttpxTransport",
    "LIVE_URL",
    "RecurringFrequency",
    "StoredPaymentMethod",
    "TEST_URL",
    "TransactionType",
    "Transport",
    "TransportError",
    "ValidationError",
    "coerce_payment_method",
    "decode_response",
    "encode_fields",
    "payment_fields",
]

__version__ = "1.0.0"
