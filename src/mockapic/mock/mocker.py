"""
Mockapic Mock Service

The single entry point used by the HTTP layer: create, fetch, list and clean
mocked responses. Validation and storage are composed here.
"""

from __future__ import annotations

import logging
import uuid
from datetime import datetime
from pathlib import Path
from typing import Callable, List, Mapping, Optional, Protocol, Sequence, Union

from ..common.utils import first_value
from .errors import InvalidMockIdError, MockapicError
from .models import CREATED_AT_FORMAT, MockedRequest, MockedRequestLight
from .store import MockStore
from .validator import validate_mock


class Mocker(Protocol):
    """Operations the HTTP layer needs from a mock service."""

    def get(self, mock_id: str) -> MockedRequest:
        ...

    def list(self) -> List[MockedRequestLight]:
        ...

    def new(self, params: Mapping[str, Sequence[str]], body: bytes) -> str:
        ...

    def clean(self, max_limit: int) -> int:
        ...


def parse_status(value: str) -> int:
    """Parse a plain ASCII integer status, or -1 when value is not one."""
    digits = value[1:] if value.startswith('-') else value
    if not digits.isascii() or not digits.isdigit():
        return -1
    return int(value)


def parse_mock_id(mock_id: str) -> str:
    """
    Check that mock_id is a canonical uuid string.

    Raises:
        InvalidMockIdError: If the identifier has the wrong length or shape
    """
    if len(mock_id) != 36:
        raise InvalidMockIdError(mock_id, f"invalid UUID length: {len(mock_id)}")
    try:
        parsed = uuid.UUID(mock_id)
    except ValueError as e:
        raise InvalidMockIdError(mock_id, "invalid UUID format") from e
    if str(parsed) != mock_id.lower():
        raise InvalidMockIdError(mock_id, "invalid UUID format")
    return str(parsed)


class Mock:
    """
    Mock service backed by a MockStore.

    Example:
        mocker = Mock('./mocks')
        mock_id = mocker.new({'status': ['200'], 'contentType': ['text/plain'],
                              'charset': ['UTF-8'], 'x-language': ['python']},
                             b'Hello World')
        mocked = mocker.get(mock_id)
        removed = mocker.clean(max_limit=100)
    """

    def __init__(
        self,
        store: Union[MockStore, str, Path],
        clock: Optional[Callable[[], datetime]] = None,
        id_factory: Optional[Callable[[], str]] = None
    ):
        """
        Initialize the mock service.

        Args:
            store: MockStore instance or working directory to open one on
            clock: Returns the creation time of new mocks (defaults to datetime.now)
            id_factory: Returns fresh mock identifiers (defaults to uuid4)
        """
        self.store = store if isinstance(store, MockStore) else MockStore(store)
        self.clock = clock or datetime.now
        self.id_factory = id_factory or (lambda: str(uuid.uuid4()))
        self.logger = logging.getLogger("mockapic.mock")

    def get(self, mock_id: str) -> MockedRequest:
        """
        Find the mocked response stored under mock_id.

        Raises:
            InvalidMockIdError: If mock_id is not a uuid
            NotFoundError: If nothing is stored under mock_id
            CorruptDataError: If the stored record is unreadable
        """
        return self.store.get(parse_mock_id(mock_id))

    def list(self) -> List[MockedRequestLight]:
        """All stored mocks, most recent first."""
        return self.store.list()

    def new(self, params: Mapping[str, Sequence[str]], body: bytes) -> str:
        """
        Create a new mocked response.

        Args:
            params: Multi-valued request parameters (status, contentType,
                charset, and any header name)
            body: Raw response body

        Returns:
            The uuid of the new mock

        Raises:
            ValidationError: If status, content type or charset is unsupported
            WriteError: If the mock could not be stored
        """
        mocked = MockedRequest(
            uuid=self.id_factory(),
            created_at=self.clock().strftime(CREATED_AT_FORMAT),
            status=-1,
            content_type='',
            charset='',
            headers={},
            body=bytes(body),
        )

        # status, contentType and charset are typed fields; every other name is a header
        for name, values in params.items():
            if name == 'status':
                mocked.status = parse_status(first_value(values))
            elif name == 'contentType':
                mocked.content_type = first_value(values)
            elif name == 'charset':
                mocked.charset = first_value(values)
            elif values:
                mocked.headers[name] = values[0]

        validate_mock(mocked)
        self.store.put(mocked)

        self.logger.info(f"New mock {mocked.uuid} ({mocked.status} {mocked.content_type})")
        return mocked.uuid

    def clean(self, max_limit: int) -> int:
        """
        Remove the oldest mocks beyond max_limit.

        A max_limit below 1 disables cleaning. Records that cannot be removed
        are skipped and not counted.

        Args:
            max_limit: Number of most recent mocks to keep

        Returns:
            Number of mocks actually removed

        Raises:
            ListError: If the stored mocks cannot be listed
        """
        if max_limit < 1:
            return 0

        mocked_requests = self.store.list()
        nb_to_delete = len(mocked_requests) - max_limit
        if nb_to_delete < 1:
            return 0

        removed = 0
        for light in mocked_requests[-nb_to_delete:]:
            try:
                if self.store.delete(light.uuid):
                    removed += 1
            except MockapicError as e:
                self.logger.warning(f"Could not remove mock {light.uuid}: {e}")

        self.logger.info(f"Cleaned {removed} mock(s), limit {max_limit}")
        return removed
