"""
Mockapic Data Model

Stored mock responses and the lightweight summaries used for listing.

A record is persisted as a JSON object with camelCase keys. The body is
base64 encoded so that arbitrary bytes survive the round trip.
"""

from __future__ import annotations

import base64
import binascii
from dataclasses import dataclass, field
from typing import Any, Dict


CREATED_AT_FORMAT = "%Y-%m-%d %H:%M:%S"


def _require(data: Dict[str, Any], key: str, kind: type) -> Any:
    if key not in data:
        raise ValueError(f"missing field '{key}'")
    value = data[key]
    # bool is an int subclass, never a valid status
    if not isinstance(value, kind) or isinstance(value, bool):
        raise ValueError(f"field '{key}' must be {kind.__name__}, got {type(value).__name__}")
    return value


@dataclass
class MockedRequest:
    """A canned HTTP response stored under its uuid."""

    uuid: str
    created_at: str
    status: int
    content_type: str
    charset: str
    headers: Dict[str, str] = field(default_factory=dict)
    body: bytes = b""

    def equals(self, other: MockedRequest) -> bool:
        """
        Compare the response payload of two mocks.

        Identity fields (uuid, created_at) are ignored.
        """
        return (
            self.status == other.status
            and self.content_type == other.content_type
            and self.charset == other.charset
            and self.headers == other.headers
            and self.body == other.body
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the persisted JSON form."""
        return {
            'uuid': self.uuid,
            'createdAt': self.created_at,
            'status': self.status,
            'contentType': self.content_type,
            'charset': self.charset,
            'headers': dict(self.headers),
            'body': base64.b64encode(self.body).decode('ascii'),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> MockedRequest:
        """
        Create a MockedRequest from its persisted JSON form.

        Raises:
            ValueError: If a field is missing, mistyped, or the body is not base64
        """
        if not isinstance(data, dict):
            raise ValueError(f"expected an object, got {type(data).__name__}")

        headers = data.get('headers') or {}
        if not isinstance(headers, dict) or not all(
            isinstance(k, str) and isinstance(v, str) for k, v in headers.items()
        ):
            raise ValueError("field 'headers' must map strings to strings")

        body = data.get('body') or ''
        if not isinstance(body, str):
            raise ValueError("field 'body' must be a base64 string")
        try:
            raw_body = base64.b64decode(body, validate=True)
        except (binascii.Error, ValueError) as e:
            raise ValueError(f"field 'body' is not valid base64: {e}") from e

        return cls(
            uuid=_require(data, 'uuid', str),
            created_at=_require(data, 'createdAt', str),
            status=_require(data, 'status', int),
            content_type=_require(data, 'contentType', str),
            charset=_require(data, 'charset', str),
            headers=dict(headers),
            body=raw_body,
        )


@dataclass
class MockedRequestLight:
    """Summary of a stored mock, without headers or body."""

    uuid: str
    created_at: str
    status: int
    content_type: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            'uuid': self.uuid,
            'createdAt': self.created_at,
            'status': self.status,
            'contentType': self.content_type,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> MockedRequestLight:
        """Read only the summary keys; the body is never decoded."""
        if not isinstance(data, dict):
            raise ValueError(f"expected an object, got {type(data).__name__}")
        return cls(
            uuid=_require(data, 'uuid', str),
            created_at=_require(data, 'createdAt', str),
            status=_require(data, 'status', int),
            content_type=_require(data, 'contentType', str),
        )
