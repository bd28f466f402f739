"""
Gateway response decoding.

Responses come back as ``key=value`` lines with an ``endofdata`` marker
somewhere in the text. Decoding is deliberately permissive: a body with no
marker, stray lines or duplicated keys still produces a mapping, and the
caller decides what the values mean.
"""

from __future__ import annotations

import re
from typing import Dict, Optional

from .fields import END_OF_DATA

# Common response fields
RESPONSE_TYPE = "pg_response_type"
RESPONSE_CODE = "pg_response_code"
RESPONSE_DESCRIPTION = "pg_response_description"
AUTHORIZATION_CODE = "pg_authorization_code"
TRACE_NUMBER = "pg_trace_number"

_PAIR_SEPARATOR = re.compile(r"[\n&]")


def decode_response(body: Optional[str]) -> Dict[str, Optional[str]]:
    """Parse a raw response body into a field mapping.

    The first ``endofdata`` is dropped wherever it appears. Pairs are split
    on newlines and on ``&``, then on the first ``=``. A segment without
    ``=`` maps to ``None``. When a key repeats, the last value wins.

    Like the request encoding, values cannot carry delimiters: a value
    containing ``&`` or a newline is cut at that character and the rest
    becomes a separate (usually valueless) field.
    """
    if not body:
        return {}

    text = body.replace(END_OF_DATA, "", 1)
    result: Dict[str, Optional[str]] = {}
    for segment in _PAIR_SEPARATOR.split(text):
        if not segment:
            continue
        key, separator, value = segment.partition("=")
        result[key] = value if separator else None
    return result
