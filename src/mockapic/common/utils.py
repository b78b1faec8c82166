"""
Mockapic Common Utilities

Small helpers shared by the store, the response writer and the HTTP layer.
"""

import re
from typing import Optional, Sequence, Union


# Go's time.ParseDuration units, in seconds
_DURATION_UNITS = {
    'ns': 1e-9,
    'us': 1e-6,
    'µs': 1e-6,
    'μs': 1e-6,
    'ms': 1e-3,
    's': 1.0,
    'm': 60.0,
    'h': 3600.0,
}

_DURATION_PART = re.compile(r'(\d+(?:\.\d*)?|\.\d+)(ns|us|µs|μs|ms|s|m|h)')


def parse_duration(value: Union[str, int, float]) -> float:
    """
    Parse a Go-style duration into seconds.

    Accepts strings such as "300ms", "60s", "1m30s", "1.5h" or "-2s". A bare
    "0" is zero. Plain numbers are taken as seconds.

    Args:
        value: Duration string or number of seconds

    Returns:
        Duration in seconds (may be negative)

    Raises:
        ValueError: If the string is not a valid duration

    Example:
        parse_duration("1m30s")  # 90.0
    """
    if isinstance(value, bool):
        raise ValueError(f"invalid duration: {value!r}")
    if isinstance(value, (int, float)):
        return float(value)

    text = value.strip()
    sign = 1.0
    if text[:1] in ('-', '+'):
        sign = -1.0 if text[0] == '-' else 1.0
        text = text[1:]

    if text == '0':
        return 0.0
    if not text:
        raise ValueError(f"invalid duration: {value!r}")

    total = 0.0
    position = 0
    for match in _DURATION_PART.finditer(text):
        if match.start() != position:
            raise ValueError(f"invalid duration: {value!r}")
        total += float(match.group(1)) * _DURATION_UNITS[match.group(2)]
        position = match.end()

    if position != len(text):
        raise ValueError(f"invalid duration: {value!r}")

    return sign * total


# RFC 7230 token
_HEADER_NAME = re.compile(r"[A-Za-z0-9!#$%&'*+\-.^_`|~]+")

# Visible Latin-1 characters, with single spaces or tabs only between them
_HEADER_VALUE = re.compile(r"(?:[\x21-\x7e\x80-\xff]+(?:[ \t]+[\x21-\x7e\x80-\xff]+)*)?")


def canonical_header_key(key: str) -> str:
    """
    Canonical MIME header form: first letter and every letter after a
    hyphen upper-cased, the rest lower-cased ("x-language" -> "X-Language").

    Keys holding spaces or other non-token characters are returned as is.
    """
    if not is_valid_header_name(key):
        return key
    return '-'.join(part[:1].upper() + part[1:].lower() for part in key.split('-'))


def is_valid_header_name(name: str) -> bool:
    """True if name can be sent as an HTTP header name."""
    return bool(name) and _HEADER_NAME.fullmatch(name) is not None


def is_valid_header_value(value: str) -> bool:
    """
    True if value can be sent as an HTTP header value.

    Values must encode to Latin-1 and hold no control characters or
    surrounding whitespace. An empty value is valid.
    """
    return _HEADER_VALUE.fullmatch(value) is not None


def first_value(values: Optional[Sequence[str]]) -> str:
    """Return the first value of a multi-valued parameter, or ""."""
    if not values:
        return ''
    return values[0]
