"""
Protocol field vocabulary and request encoding.

Requests are sent as ``key=value&`` pairs terminated by ``endofdata&``.
The payload looks like form encoding but is not: nothing is escaped, so
values must not contain ``=``, ``&`` or newlines.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Dict, Mapping, Union

import structlog

from .exceptions import ValidationError

logger = structlog.get_logger(__name__)

END_OF_DATA = "endofdata"

# Credentials
MERCHANT_ID = "pg_merchant_id"
PASSWORD = "pg_password"

TRANSACTION_TYPE = "pg_transaction_type"
TOTAL_AMOUNT = "pg_total_amount"

# References to earlier transactions
ORIGINAL_AUTHORIZATION_CODE = "pg_original_authorization_code"
ORIGINAL_TRACE_NUMBER = "pg_original_trace_number"

# Stored instrument
CLIENT_ID = "pg_client_id"
PAYMENT_METHOD_ID = "pg_payment_method_id"

# Inline card
CARD_TYPE = "ecom_payment_card_type"
CARD_NUMBER = "ecom_payment_card_number"
CARD_EXPIRATION_MONTH = "ecom_payment_card_expdate_month"
CARD_EXPIRATION_YEAR = "ecom_payment_card_expdate_year"

CARD_FIELDS = (CARD_TYPE, CARD_NUMBER, CARD_EXPIRATION_MONTH, CARD_EXPIRATION_YEAR)

# Recurring schedule
SCHEDULE_FREQUENCY = "pg_schedule_frequency"
SCHEDULE_QUANTITY = "pg_schedule_quantity"
SCHEDULE_RECURRING_AMOUNT = "pg_schedule_recurring_amount"
SCHEDULE_START_DATE = "pg_schedule_start_date"

_DELIMITERS = ("=", "&", "\n")


class TransactionType(Enum):
    SALE = 10
    AUTHORIZE = 11
    CAPTURE = 12
    CREDIT = 13
    VOID = 14
    PRE_AUTH = 15
    BALANCE_INQUIRY = 16
    RECURRING_SUSPEND = 40
    RECURRING_ACTIVATE = 41
    RECURRING_CANCEL = 42

    @property
    def code(self) -> str:
        """Value sent in ``pg_transaction_type``."""
        return str(self.value)


class RecurringFrequency(Enum):
    WEEKLY = 10  # every seven days
    BIWEEKLY = 15  # every fourteen days
    MONTHLY = 20  # same day every month
    BI_MONTHLY = 25  # every two months
    QUARTERLY = 30  # every three months
    SEMIANNUALLY = 35  # twice a year
    YEARLY = 40  # once a year

    @property
    def code(self) -> str:
        return str(self.value)

    @classmethod
    def from_name(cls, frequency: Union["RecurringFrequency", str]) -> "RecurringFrequency":
        """Look up a frequency by member or by name (``"monthly"``, ``"bi_monthly"``...)."""
        if isinstance(frequency, cls):
            return frequency
        if isinstance(frequency, str):
            try:
                return cls[frequency.strip().upper()]
            except KeyError:
                pass
        raise ValidationError(
            f"Unknown recurring frequency: {frequency!r}",
            details={"allowed": [member.name.lower() for member in cls]},
        )


def encode_fields(fields: Mapping[str, Any]) -> str:
    """Serialize a field mapping to the request wire format.

    Entries are written in insertion order. ``None`` values are left out
    entirely; an empty string is written as ``key=``.
    """
    message = ""
    for key, value in fields.items():
        if value is None:
            continue
        rendered = str(value)
        if any(delimiter in rendered for delimiter in _DELIMITERS):
            logger.warning("Field value contains a protocol delimiter", field=key)
        message += f"{key}={rendered}&"
    return message + f"{END_OF_DATA}&"


def mask_fields(fields: Mapping[str, Any]) -> Dict[str, Any]:
    """Copy of ``fields`` that is safe to log."""
    masked = dict(fields)
    if masked.get(PASSWORD) is not None:
        masked[PASSWORD] = "********"
    number = masked.get(CARD_NUMBER)
    if number is not None:
        number = str(number)
        masked[CARD_NUMBER] = f"{number[:6]}******{number[-4:]}" if len(number) > 10 else "******"
    return masked
