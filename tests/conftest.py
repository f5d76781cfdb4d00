"""Shared test fixtures for JTL connector tests."""

import pytest
from unittest.mock import AsyncMock, MagicMock, patch

from jtl_connector.cache import TTLCache
from jtl_connector.config import ConnectorSettings, DictConfigStore
from jtl_connector.jtl_client import JtlClient

from tests.fixtures.common import VALID_CONFIG


class FakeClock:
    """Manually advanced replacement for time.monotonic."""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def config_store():
    return DictConfigStore(VALID_CONFIG)


@pytest.fixture
def settings(config_store):
    return ConnectorSettings(config_store)


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def cache(clock):
    return TTLCache(clock=clock)


@pytest.fixture
def mock_response():
    """Factory for creating mock HTTP responses.

    Usage:
        resp = mock_response(200, {"key": "value"})
        resp = mock_response(401, text="Unauthorized")
    """
    def _make(status_code=200, json_data=None, text=None, headers=None):
        response = MagicMock()
        response.status_code = status_code
        if json_data is not None:
            response.json.return_value = json_data
            response.text = text or str(json_data)
        else:
            response.json.side_effect = ValueError("No JSON")
            response.text = text or ""
        response.headers = headers or {}
        return response
    return _make


@pytest.fixture
def mock_client(settings, cache):
    """Create a JtlClient with a fake clock cache and mocked _request method."""
    client = JtlClient(settings=settings, cache=cache)
    client._request = AsyncMock()
    return client


# All resource modules that import JtlClient
_RESOURCE_MODULES = [
    "jtl_connector.resources.auth",
    "jtl_connector.resources.items",
    "jtl_connector.resources.stock",
    "jtl_connector.resources.product_page",
]


@pytest.fixture
def mock_jtl_class(settings):
    """Patch JtlClient in all resource modules, yield (mock_class, mock_instance).

    The mock instance carries real settings so the enrichment tool can read
    the enableOnPdp flag.
    """
    mock_instance = MagicMock()
    mock_instance.settings = settings
    mock_class = MagicMock()
    mock_class.from_env.return_value = mock_instance

    patchers = [patch(f"{mod}.JtlClient", mock_class) for mod in _RESOURCE_MODULES]
    for p in patchers:
        p.start()
    yield mock_class, mock_instance
    for p in patchers:
        p.stop()
