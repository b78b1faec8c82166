"""
Mockapic Errors

Every failure raised by the mock store, the service facade and the response
writer derives from MockapicError. The HTTP layer maps them to status codes.
"""

from typing import Any


class MockapicError(Exception):
    """Base class for Mockapic errors."""


class ValidationError(MockapicError):
    """A candidate mock declares a value outside its reference vocabulary."""

    def __init__(self, field: str, value: Any, reason: str = "does not exist"):
        self.field = field
        self.value = value
        super().__init__(f"{field} {{{value}}} {reason}")


class InvalidMockIdError(MockapicError):
    """The identifier is not shaped like a mock identifier."""

    def __init__(self, mock_id: str, reason: str):
        self.mock_id = mock_id
        super().__init__(reason)


class NotFoundError(MockapicError):
    """No mock is stored under the identifier."""

    def __init__(self, mock_id: str):
        self.mock_id = mock_id
        super().__init__(f"mock {{{mock_id}}} does not exist")


class ClientDisconnectedError(MockapicError):
    """The client went away while its response was being delayed."""


class StorageError(MockapicError):
    """The record store could not complete an operation."""


class CorruptDataError(StorageError):
    """A stored record cannot be deserialized."""

    def __init__(self, mock_id: str, reason: str):
        self.mock_id = mock_id
        super().__init__(f"mock {{{mock_id}}} is corrupt: {reason}")


class ListError(StorageError):
    """Enumerating the stored records failed."""


class WriteError(StorageError):
    """A new record could not be persisted."""

    def __init__(self, mock_id: str, reason: str):
        self.mock_id = mock_id
        super().__init__(f"error to write mock {{{mock_id}}}: {reason}")
