"""
Mockapic Mock Module

Storage, validation and delivery of mocked HTTP responses.

This module provides:
- File-backed record store
- Mock service facade (create, get, list, clean)
- Response writer with capped, cancellable delays
- FastAPI server
"""

from .errors import (
    MockapicError,
    ValidationError,
    InvalidMockIdError,
    NotFoundError,
    ClientDisconnectedError,
    StorageError,
    CorruptDataError,
    ListError,
    WriteError
)
from .models import MockedRequest, MockedRequestLight
from .validator import validate_mock
from .store import MockStore
from .mocker import Mocker, Mock, parse_mock_id
from .response import MockResponseWriter
from .server import MockapicServer, create_server

__all__ = [
    # Errors
    'MockapicError',
    'ValidationError',
    'InvalidMockIdError',
    'NotFoundError',
    'ClientDisconnectedError',
    'StorageError',
    'CorruptDataError',
    'ListError',
    'WriteError',

    # Model
    'MockedRequest',
    'MockedRequestLight',

    # Core
    'validate_mock',
    'MockStore',
    'Mocker',
    'Mock',
    'parse_mock_id',
    'MockResponseWriter',

    # Server
    'MockapicServer',
    'create_server',
]
