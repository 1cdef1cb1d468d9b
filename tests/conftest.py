"""
Pytest configuration for sockcomm tests.

This module contains fixtures and test doubles shared across the test suite.
"""

from unittest.mock import MagicMock

import pytest

from sockcomm.channel.protocol import Channel
from sockcomm.channel.registry import get_channel_registry
from sockcomm.handle import SocketHandle


class MockHandle(SocketHandle):
    """Socket handle test double that records the parameters it was built from."""

    def __init__(self, params):
        self.params = params
        self.init_sock(params)
        self.closed = False

    def sock_type(self) -> str:
        return self.params.proto

    def close(self) -> None:
        self.closed = True

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()


class MockChannel(Channel):
    """Channel test double."""

    def __init__(self, raise_on_create=None):
        self.raise_on_create = raise_on_create
        self.created = []

    def create(self, params):
        if self.raise_on_create:
            raise self.raise_on_create
        handle = MockHandle(params)
        self.created.append(handle)
        return handle

    def __repr__(self) -> str:
        return "MockChannel()"


@pytest.fixture
def mock_channel():
    """Fixture providing a mock channel."""
    return MockChannel()


@pytest.fixture
def register_mock_channel(mock_channel):
    """Fixture that registers the mock channel as ``mock`` in the global registry."""
    registry = get_channel_registry()
    registry.register("mock", mock_channel)
    yield mock_channel
    if "mock" in registry.get_registered_names():
        registry.unregister("mock")


@pytest.fixture
def mock_telemetry(monkeypatch):
    """Fixture providing mock telemetry components for the factory."""
    mock_tracer = MagicMock()
    mock_span = MagicMock()
    mock_span.__enter__.return_value = mock_span
    mock_tracer.start_as_current_span.return_value = mock_span
    mock_tracer.start_span.return_value = mock_span

    mock_logger = MagicMock()

    mock_get_telemetry = MagicMock(return_value=(mock_tracer, mock_logger))
    monkeypatch.setattr("sockcomm.factory.get_telemetry", mock_get_telemetry)

    return mock_tracer, mock_logger


def pytest_configure(config):
    """Register custom marks with pytest."""
    config.addinivalue_line("markers", "network: test opens real loopback sockets")
