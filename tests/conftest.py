import pytest
from unittest.mock import Mock
from httpx import Response

from text2query.client.history import HistoryEntry, HistoryStore, InMemoryStorage
from text2query.conversion.gateway import GatewayError, GatewayResult
from text2query.core.constants import Dialect


@pytest.fixture
def fake_api_url():
    return "http://fake-text2query:9999"


@pytest.fixture
def healthy_gateway(mocker):
    gateway = mocker.Mock()
    gateway.invoke = mocker.AsyncMock(
        return_value=GatewayResult(completion="SELECT * FROM users WHERE ..."))
    return gateway


@pytest.fixture
def failing_gateway(mocker):
    gateway = mocker.Mock()
    gateway.invoke = mocker.AsyncMock(
        return_value=GatewayResult(error=GatewayError("ConnectError: connection refused")))
    return gateway


@pytest.fixture
def storage():
    return InMemoryStorage()


@pytest.fixture
def history(storage):
    return HistoryStore(storage)


@pytest.fixture
def sample_entries():
    return [
        HistoryEntry(text=f"request {i}", dialect=Dialect.SQL if i % 2 else Dialect.MONGODB,
                     result=f"query {i}")
        for i in range(1, 12)
    ]


@pytest.fixture
def mock_httpx_client(mocker):
    """Mock httpx.Client completely"""
    mock_client = mocker.Mock()

    mock_post_response = Mock(spec=Response)
    mock_post_response.raise_for_status.return_value = None
    mock_post_response.json.return_value = {"query": "db.users.find({})"}

    mock_client.post.return_value = mock_post_response

    mocker.patch("httpx.Client", return_value=mock_client)
    return mock_client
