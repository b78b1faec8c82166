"""
Mockapic Record Store

Durable storage for mocked responses: one JSON file per mock, named after its
uuid, inside a working directory. There is no in-memory cache, every call
reads or writes the filesystem.
"""

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any, Dict, List, Tuple, Union

from .errors import CorruptDataError, ListError, NotFoundError, StorageError, WriteError
from .models import MockedRequest, MockedRequestLight


RECORD_SUFFIX = '.json'


class MockStore:
    """
    Directory-backed store of MockedRequest records.

    Writes go through a temporary file and an atomic rename, so a record file
    is either absent or complete.

    Example:
        store = MockStore('./mocks')
        store.put(mocked)
        mocked = store.get(mocked.uuid)
        for light in store.list():
            print(light.uuid, light.created_at)
    """

    def __init__(self, working_directory: Union[str, Path]):
        """
        Initialize the store, creating the working directory if needed.

        Args:
            working_directory: Directory holding one file per mock
        """
        self.working_directory = Path(working_directory)
        self.working_directory.mkdir(parents=True, exist_ok=True)
        self.logger = logging.getLogger("mockapic.store")

    def _path(self, mock_id: str) -> Path:
        return self.working_directory / f"{mock_id}{RECORD_SUFFIX}"

    def _load(self, mock_id: str) -> Dict[str, Any]:
        """Read and decode the raw JSON object of a record."""
        path = self._path(mock_id)
        try:
            data = path.read_bytes()
        except FileNotFoundError as e:
            self.logger.warning(f"Mock {mock_id} not found in {self.working_directory}")
            raise NotFoundError(mock_id) from e
        except OSError as e:
            self.logger.error(f"Error to load mock {mock_id} from {self.working_directory}: {e}")
            raise StorageError(f"error to load mock {{{mock_id}}}: {e}") from e

        try:
            return json.loads(data)
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            self.logger.error(f"Error to unmarshal mock {mock_id} from {self.working_directory}: {e}")
            raise CorruptDataError(mock_id, str(e)) from e

    def get(self, mock_id: str) -> MockedRequest:
        """
        Load a stored mock.

        Args:
            mock_id: Mock uuid

        Returns:
            The stored MockedRequest

        Raises:
            NotFoundError: If no record exists for mock_id
            CorruptDataError: If the record cannot be deserialized
            StorageError: If the record file cannot be read
        """
        data = self._load(mock_id)
        try:
            return MockedRequest.from_dict(data)
        except ValueError as e:
            self.logger.error(f"Invalid mock {mock_id} in {self.working_directory}: {e}")
            raise CorruptDataError(mock_id, str(e)) from e

    def list(self) -> List[MockedRequestLight]:
        """
        Summaries of every stored mock, most recent first.

        Any unreadable or corrupt record fails the whole call. A record
        removed between the directory scan and its read is left out.

        Returns:
            List of MockedRequestLight, empty if nothing is stored

        Raises:
            ListError: If the directory or any record cannot be read
        """
        try:
            entries = [
                entry for entry in os.scandir(self.working_directory)
                if entry.name.endswith(RECORD_SUFFIX) and entry.is_file()
            ]
        except OSError as e:
            self.logger.error(f"Error to read directory {self.working_directory}: {e}")
            raise ListError(f"error to read directory {{{self.working_directory}}}: {e}") from e

        keyed: List[Tuple[str, int, str, MockedRequestLight]] = []
        for entry in sorted(entries, key=lambda e: e.name):
            mock_id = entry.name[:-len(RECORD_SUFFIX)]
            try:
                light = MockedRequestLight.from_dict(self._load(mock_id))
                mtime_ns = entry.stat().st_mtime_ns
            except (NotFoundError, FileNotFoundError):
                # Removed since the scan, e.g. by a concurrent clean
                self.logger.debug(f"Mock {mock_id} removed while listing")
                continue
            except (ValueError, OSError, StorageError) as e:
                self.logger.error(f"Error to list mock {mock_id} in {self.working_directory}: {e}")
                raise ListError(f"error to list mocked responses: {e}") from e
            keyed.append((light.created_at, mtime_ns, entry.name, light))

        keyed.sort(key=lambda item: item[:3], reverse=True)
        return [item[3] for item in keyed]

    def put(self, mocked: MockedRequest) -> None:
        """
        Persist a mock under its uuid.

        Raises:
            WriteError: If the record cannot be serialized or written
        """
        try:
            data = json.dumps(mocked.to_dict()).encode('utf-8')
        except (TypeError, ValueError) as e:
            self.logger.error(f"Error to marshal mock {mocked.uuid}: {e}")
            raise WriteError(mocked.uuid, str(e)) from e

        tmp_path = None
        try:
            with tempfile.NamedTemporaryFile(
                dir=self.working_directory,
                prefix=f".{mocked.uuid}.",
                suffix='.tmp',
                delete=False
            ) as f:
                tmp_path = f.name
                f.write(data)
            os.replace(tmp_path, self._path(mocked.uuid))
        except OSError as e:
            self.logger.error(f"Error to write mock {mocked.uuid} in {self.working_directory}: {e}")
            if tmp_path is not None:
                Path(tmp_path).unlink(missing_ok=True)
            raise WriteError(mocked.uuid, str(e)) from e

        self.logger.debug(f"Stored mock {mocked.uuid} ({len(data)} bytes)")

    def delete(self, mock_id: str) -> bool:
        """
        Remove a stored mock.

        Returns:
            True if a record was removed, False if none existed

        Raises:
            StorageError: If the record exists but cannot be removed
        """
        try:
            self._path(mock_id).unlink()
        except FileNotFoundError:
            return False
        except OSError as e:
            self.logger.error(f"Error to remove mock {mock_id} from {self.working_directory}: {e}")
            raise StorageError(f"error to remove mock {{{mock_id}}}: {e}") from e

        self.logger.debug(f"Removed mock {mock_id}")
        return True
