"""
Payment method representations.

A request pays either with an instrument already stored at the gateway
(client id and/or payment method id) or with inline card data. Stored
references always win when both are supplied.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional, Union

from .exceptions import ValidationError
from .fields import (
    CARD_EXPIRATION_MONTH,
    CARD_EXPIRATION_YEAR,
    CARD_NUMBER,
    CARD_TYPE,
    CLIENT_ID,
    PAYMENT_METHOD_ID,
)

_CARD_KEYS = ("brand", "number", "month", "year")


@dataclass(frozen=True)
class StoredPaymentMethod:
    client_id: Optional[str] = None
    payment_method_id: Optional[str] = None

    def __post_init__(self):
        if not self.client_id and not self.payment_method_id:
            raise ValidationError("Stored payment method needs a client id or a payment method id")


@dataclass(frozen=True)
class CreditCard:
    brand: str
    number: str
    month: Union[str, int]
    year: Union[str, int]
    first_name: Optional[str] = None
    last_name: Optional[str] = None

    def __post_init__(self):
        missing = [key for key in _CARD_KEYS if getattr(self, key) in (None, "")]
        if missing:
            raise ValidationError("Incomplete credit card data", details={"missing": missing})


PaymentMethod = Union[StoredPaymentMethod, CreditCard]


def coerce_payment_method(payment: Union[PaymentMethod, Mapping[str, Any]]) -> PaymentMethod:
    """Turn a payment argument into one of the two payment method variants.

    Mappings use the keys ``pg_client_id`` / ``pg_payment_method_id`` for a
    stored instrument and ``brand`` / ``number`` / ``month`` / ``year``
    (plus optional ``first_name`` / ``last_name``) for a card.
    """
    if isinstance(payment, (StoredPaymentMethod, CreditCard)):
        return payment
    if not isinstance(payment, Mapping):
        raise ValidationError(f"Unsupported payment method: {type(payment).__name__}")

    if payment.get(CLIENT_ID) or payment.get(PAYMENT_METHOD_ID):
        return StoredPaymentMethod(
            client_id=payment.get(CLIENT_ID) or None,
            payment_method_id=payment.get(PAYMENT_METHOD_ID) or None,
        )

    return CreditCard(
        brand=payment.get("brand"),
        number=payment.get("number"),
        month=payment.get("month"),
        year=payment.get("year"),
        first_name=payment.get("first_name"),
        last_name=payment.get("last_name"),
    )


def payment_fields(payment: Union[PaymentMethod, Mapping[str, Any]]) -> Dict[str, Any]:
    """Protocol fields for a payment method."""
    method = coerce_payment_method(payment)

    if isinstance(method, StoredPaymentMethod):
        fields: Dict[str, Any] = {}
        if method.client_id:
            fields[CLIENT_ID] = method.client_id
        if method.payment_method_id:
            fields[PAYMENT_METHOD_ID] = method.payment_method_id
        return fields

    # Holder names are not part of the card field set.
    return {
        CARD_TYPE: method.brand,
        CARD_NUMBER: method.number,
        CARD_EXPIRATION_MONTH: method.month,
        CARD_EXPIRATION_YEAR: method.year,
    }
