"""
Tests for the Mockapic data model.

Tests MockedRequest and MockedRequestLight conversion to and from the
persisted JSON form.
"""

import pytest

from mockapic.mock.models import MockedRequest, MockedRequestLight


@pytest.fixture
def mocked():
    return MockedRequest(
        uuid='0b7e7d3c-6c3a-4a8e-9d8e-9b1c6d0b1a11',
        created_at='2024-05-01 10:00:00',
        status=201,
        content_type='application/json',
        charset='UTF-8',
        headers={'x-language': 'python'},
        body=b'\x00\xff{"id": 1}',
    )


class TestMockedRequest:
    """Test MockedRequest dataclass."""

    def test_to_dict_encodes_body(self, mocked):
        """Test body is stored as base64 with camelCase keys."""
        data = mocked.to_dict()

        assert data['uuid'] == mocked.uuid
        assert data['createdAt'] == '2024-05-01 10:00:00'
        assert data['contentType'] == 'application/json'
        assert data['headers'] == {'x-language': 'python'}
        assert isinstance(data['body'], str)

    def test_from_dict_restores_raw_bytes(self, mocked):
        """Test non UTF-8 bodies survive serialization."""
        restored = MockedRequest.from_dict(mocked.to_dict())

        assert restored == mocked
        assert restored.body == b'\x00\xff{"id": 1}'

    def test_from_dict_defaults(self):
        """Test missing headers and body default to empty."""
        restored = MockedRequest.from_dict({
            'uuid': 'id', 'createdAt': 'now', 'status': 200,
            'contentType': 'text/plain', 'charset': 'UTF-8'
        })

        assert restored.headers == {}
        assert restored.body == b''

    @pytest.mark.parametrize("broken", [
        {'createdAt': 'now', 'status': 200, 'contentType': 'text/plain', 'charset': 'UTF-8'},
        {'uuid': 'id', 'createdAt': 'now', 'status': '200', 'contentType': 'text/plain', 'charset': 'UTF-8'},
        {'uuid': 'id', 'createdAt': 'now', 'status': True, 'contentType': 'text/plain', 'charset': 'UTF-8'},
        {'uuid': 'id', 'createdAt': 'now', 'status': 200, 'contentType': 'text/plain', 'charset': 'UTF-8',
         'body': 'not base64!'},
        {'uuid': 'id', 'createdAt': 'now', 'status': 200, 'contentType': 'text/plain', 'charset': 'UTF-8',
         'headers': {'x-count': 1}},
    ])
    def test_from_dict_rejects_invalid(self, broken):
        with pytest.raises(ValueError):
            MockedRequest.from_dict(broken)

    def test_from_dict_rejects_non_object(self):
        with pytest.raises(ValueError):
            MockedRequest.from_dict(['not', 'an', 'object'])

    def test_equals_ignores_identity(self, mocked):
        """Test equals compares the response payload only."""
        other = MockedRequest.from_dict(mocked.to_dict())
        other.uuid = 'another'
        other.created_at = '2030-01-01 00:00:00'

        assert mocked.equals(other)

        other.headers = {'x-language': 'go'}
        assert not mocked.equals(other)


class TestMockedRequestLight:
    """Test MockedRequestLight projection."""

    def test_from_dict_ignores_body(self, mocked):
        """Test the summary never decodes the body."""
        data = mocked.to_dict()
        data['body'] = 'not base64 at all'

        light = MockedRequestLight.from_dict(data)

        assert light.uuid == mocked.uuid
        assert light.status == 201

    def test_to_dict(self, mocked):
        data = MockedRequestLight.from_dict(mocked.to_dict()).to_dict()

        assert data == {
            'uuid': mocked.uuid,
            'createdAt': '2024-05-01 10:00:00',
            'status': 201,
            'contentType': 'application/json'
        }

    def test_from_dict_missing_field(self):
        with pytest.raises(ValueError):
            MockedRequestLight.from_dict({'uuid': 'id', 'status': 200})
