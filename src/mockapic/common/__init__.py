"""
Mockapic Common Utilities

Reference vocabularies and helpers shared across Mockapic modules.
"""

from .content_types import CONTENT_TYPES, CHARSETS, HTTP_CODES, RESERVED_HEADERS
from .utils import (
    parse_duration,
    canonical_header_key,
    first_value,
    is_valid_header_name,
    is_valid_header_value
)

__all__ = [
    'CONTENT_TYPES',
    'CHARSETS',
    'HTTP_CODES',
    'RESERVED_HEADERS',
    'parse_duration',
    'canonical_header_key',
    'is_valid_header_name',
    'is_valid_header_value',
    'first_value',
]
