"""
Tests for the Mockapic record store.

Tests the directory-backed MockStore: put/get round trips, enumeration
order, strict listing, deletion and failure modes.
"""

import json
import os
from unittest.mock import patch

import pytest

from mockapic.mock.errors import CorruptDataError, ListError, NotFoundError, StorageError, WriteError
from mockapic.mock.models import MockedRequest
from mockapic.mock.store import MockStore


def make_mock(uuid, created_at='2024-01-01 12:00:00', status=200, body=b'Hello World'):
    return MockedRequest(
        uuid=uuid,
        created_at=created_at,
        status=status,
        content_type='text/plain',
        charset='UTF-8',
        headers={'x-language': 'python'},
        body=body,
    )


@pytest.fixture
def store(tmp_path):
    """Store on a fresh working directory."""
    return MockStore(tmp_path / 'mocks')


class TestMockStore:
    """Test MockStore put/get/delete."""

    def test_creates_working_directory(self, tmp_path):
        working_directory = tmp_path / 'nested' / 'mocks'

        MockStore(working_directory)

        assert working_directory.is_dir()

    def test_put_then_get(self, store):
        mocked = make_mock('a1', body=b'\x89PNG\r\n\x1a\n')

        store.put(mocked)

        assert store.get('a1') == mocked

    def test_one_file_per_mock(self, store):
        store.put(make_mock('a1'))
        store.put(make_mock('b2'))

        names = sorted(p.name for p in store.working_directory.iterdir())
        assert names == ['a1.json', 'b2.json']

    def test_persisted_format(self, store):
        """Test the record file is a JSON object with camelCase keys."""
        store.put(make_mock('a1'))

        data = json.loads((store.working_directory / 'a1.json').read_text())

        assert data['uuid'] == 'a1'
        assert data['contentType'] == 'text/plain'
        assert data['createdAt'] == '2024-01-01 12:00:00'

    def test_get_missing(self, store):
        with pytest.raises(NotFoundError):
            store.get('missing')

    def test_get_corrupt_json(self, store):
        (store.working_directory / 'bad.json').write_text('{not json')

        with pytest.raises(CorruptDataError) as exc_info:
            store.get('bad')

        assert exc_info.value.mock_id == 'bad'

    def test_get_incomplete_record(self, store):
        (store.working_directory / 'bad.json').write_text(json.dumps({'uuid': 'bad'}))

        with pytest.raises(CorruptDataError):
            store.get('bad')

    def test_corrupt_is_storage_error(self, store):
        (store.working_directory / 'bad.json').write_bytes(b'\xff\xfe')

        with pytest.raises(StorageError):
            store.get('bad')

    def test_delete(self, store):
        store.put(make_mock('a1'))

        assert store.delete('a1') is True
        assert store.delete('a1') is False
        with pytest.raises(NotFoundError):
            store.get('a1')

    def test_delete_failure(self, store):
        store.put(make_mock('a1'))

        with patch('pathlib.Path.unlink', side_effect=PermissionError('read-only')):
            with pytest.raises(StorageError):
                store.delete('a1')

    def test_write_failure_leaves_nothing(self, store):
        """Test a failed write raises WriteError and leaves no file behind."""
        with patch('mockapic.mock.store.os.replace', side_effect=OSError('disk full')):
            with pytest.raises(WriteError) as exc_info:
                store.put(make_mock('a1'))

        assert exc_info.value.mock_id == 'a1'
        assert list(store.working_directory.iterdir()) == []


class TestMockStoreList:
    """Test MockStore enumeration."""

    def test_empty_store(self, store):
        assert store.list() == []

    def test_most_recent_first(self, store):
        store.put(make_mock('old', created_at='2024-01-01 10:00:00'))
        store.put(make_mock('new', created_at='2024-01-03 10:00:00'))
        store.put(make_mock('mid', created_at='2024-01-02 10:00:00'))

        assert [light.uuid for light in store.list()] == ['new', 'mid', 'old']

    def test_summaries(self, store):
        store.put(make_mock('a1', status=404))

        (light,) = store.list()

        assert light.uuid == 'a1'
        assert light.status == 404
        assert light.content_type == 'text/plain'
        assert light.created_at == '2024-01-01 12:00:00'

    def test_same_second_order_is_deterministic(self, store):
        for mock_id in ('c', 'a', 'b'):
            store.put(make_mock(mock_id))

        first = [light.uuid for light in store.list()]
        second = [light.uuid for light in store.list()]

        assert sorted(first) == ['a', 'b', 'c']
        assert first == second

    def test_same_second_uses_write_order(self, store):
        """Test ties on createdAt fall back to the file modification time."""
        store.put(make_mock('first'))
        store.put(make_mock('second'))
        os.utime(store.working_directory / 'first.json', ns=(1_000_000_000, 1_000_000_000))
        os.utime(store.working_directory / 'second.json', ns=(2_000_000_000, 2_000_000_000))

        assert [light.uuid for light in store.list()] == ['second', 'first']

    def test_ignores_other_files(self, store):
        store.put(make_mock('a1'))
        (store.working_directory / 'README.txt').write_text('not a mock')
        (store.working_directory / '.a2.123.tmp').write_text('partial')
        (store.working_directory / 'sub.json').mkdir()

        assert [light.uuid for light in store.list()] == ['a1']

    def test_one_corrupt_record_fails_whole_list(self, store):
        """Test listing is all or nothing."""
        store.put(make_mock('a1'))
        (store.working_directory / 'bad.json').write_text('{not json')

        with pytest.raises(ListError):
            store.list()

    def test_record_removed_during_list_is_skipped(self, store):
        """Test a record deleted after the scan is left out, not an error."""
        store.put(make_mock('a1', created_at='2024-01-01 10:00:00'))
        store.put(make_mock('b2', created_at='2024-01-02 10:00:00'))
        real_load = store._load

        def load_after_clean(mock_id):
            if mock_id == 'a1':
                store.delete('a1')
            return real_load(mock_id)

        with patch.object(store, '_load', side_effect=load_after_clean):
            lights = store.list()

        assert [light.uuid for light in lights] == ['b2']

    def test_unreadable_directory(self, store):
        with patch('mockapic.mock.store.os.scandir', side_effect=PermissionError('denied')):
            with pytest.raises(ListError):
                store.list()
