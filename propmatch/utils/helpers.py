"""
Coercion helpers for loosely-typed property values.

Property values come out of JSON decoding, so the same key can hold
"42", 42 or 42.0 depending on who set it.
"""

import math
import re
from datetime import date, datetime
from typing import Any

# JSON number grammar; Python-only spellings ("1_000", "0x1f", "inf", "01") are not numbers
JSON_NUMBER_PATTERN = re.compile(r"-?(?:0|[1-9]\d*)(?P<fraction>\.\d+)?(?P<exponent>[eE][+-]?\d+)?")


def coerce_number(value: Any) -> int | float | None:
    """
    Convert a value to a finite number, or None if it is not numeric.

    Bools are never numbers here, even though Python treats them as ints.

    Examples:
        >>> coerce_number("18")
        18
        >>> coerce_number("18.5")
        18.5
        >>> coerce_number(True) is None
        True
        >>> coerce_number("abc") is None
        True
        >>> coerce_number("01234") is None
        True
    """
    if value is None or isinstance(value, bool):
        return None

    if isinstance(value, (int, float)):
        number = value
    elif isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        match = JSON_NUMBER_PATTERN.fullmatch(text)
        if match is None:
            return None
        if match.group("fraction") or match.group("exponent"):
            number = float(text)
        else:
            try:
                number = int(text)
            except ValueError:
                # Exceeds the interpreter's int digit limit
                return None
    else:
        return None

    if isinstance(number, float) and (math.isnan(number) or math.isinf(number)):
        return None
    return number


def to_property_string(value: Any) -> str:
    """
    Render a value the way it appears in a JSON property payload.

    Examples:
        >>> to_property_string(True)
        'true'
        >>> to_property_string(323)
        '323'
    """
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    return str(value)
