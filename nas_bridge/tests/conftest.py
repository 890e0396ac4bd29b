import pytest

from nas_bridge.config import NasBridgeConfig
from nas_bridge.models.auth import Session
from nas_bridge.storage import MemoryKeyValueStore
from nas_bridge.tests.helpers import (
    ACCESS_TOKEN,
    BASE_URL,
    FAR_FUTURE_MS,
    FakeHost,
    MockTransport,
)


@pytest.fixture
def config() -> NasBridgeConfig:
    """Create test config."""
    return NasBridgeConfig()


@pytest.fixture
def mock_transport() -> MockTransport:
    """Create mock transport."""
    return MockTransport()


@pytest.fixture
def storage() -> MemoryKeyValueStore:
    return MemoryKeyValueStore()


@pytest.fixture
def host() -> FakeHost:
    return FakeHost()


@pytest.fixture
def session() -> Session:
    return Session(
        server_base_url=BASE_URL,
        access_token=ACCESS_TOKEN,
        expires_at_ms=FAR_FUTURE_MS,
        username="admin",
    )
