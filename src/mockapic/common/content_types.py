"""
Mockapic Reference Vocabularies

Closed sets of values a mocked response may declare. Anything outside these
is rejected before a mock is stored.
"""

from http import HTTPStatus
from typing import Dict, List


CONTENT_TYPES: List[str] = [
    "application/json",
    "application/x-www-form-urlencoded",
    "application/xhtml+xml",
    "application/xml",
    "image/jpeg",
    "image/png",
    "image/svg+xml",
    "multipart/form-data",
    "text/css",
    "text/csv",
    "text/html",
    "text/json",
    "text/plain",
    "text/xml",
]

CHARSETS: List[str] = [
    "UTF-8",
    "ISO-8859-1",
    "UTF-16",
]

# Status code -> reason phrase, e.g. 405 -> "Method Not Allowed".
# Informational 1xx codes cannot be sent as a final response.
HTTP_CODES: Dict[int, str] = {
    status.value: status.phrase for status in HTTPStatus if status.value >= 200
}

# Response headers derived from the mock itself; never accepted as stored headers
RESERVED_HEADERS = frozenset({'content-type', 'content-length', 'transfer-encoding', 'connection'})
