"""
Mockapic Record Validator

Checks a candidate mock against the reference vocabularies before it is
stored. Status is checked first, then content type, then charset; the first
failure is the one reported. Headers come last: a mock whose headers cannot
be sent over HTTP would fail on every later fetch, and headers the server
derives from the mock itself (Content-Type, Content-Length, ...) would be
silently replaced.
"""

from ..common.content_types import CONTENT_TYPES, CHARSETS, HTTP_CODES, RESERVED_HEADERS
from ..common.utils import is_valid_header_name, is_valid_header_value
from .errors import ValidationError
from .models import MockedRequest


def validate_mock(mocked: MockedRequest) -> None:
    """
    Validate status, content type, charset and headers of a candidate mock.

    Args:
        mocked: Candidate mock

    Raises:
        ValidationError: Naming the first field outside its vocabulary, or
            'headers' with the offending header name
    """
    if mocked.status not in HTTP_CODES:
        raise ValidationError('status', mocked.status)

    if mocked.content_type not in CONTENT_TYPES:
        raise ValidationError('contentType', mocked.content_type)

    if mocked.charset not in CHARSETS:
        raise ValidationError('charset', mocked.charset)

    for name, value in mocked.headers.items():
        if name.lower() in RESERVED_HEADERS:
            raise ValidationError('headers', name, 'is set by the server')
        if not is_valid_header_name(name) or not is_valid_header_value(value):
            raise ValidationError('headers', name, 'cannot be sent as an HTTP header')
