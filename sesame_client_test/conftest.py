"""Shared fixtures for the Sesame client tests."""

import os
import sys

import pytest

# Add the parent directory to the path so we can import sesame_client
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from sesame_client.client.config.endpoint_config import EndpointConfig
from sesame_client.client.request.request_builder import RequestBuilder
from sesame_client_test.utils.test_helpers import (
    BASE_ADDRESS,
    TEST_REPOSITORY,
    create_mock_client,
    setup_test_logging,
)

setup_test_logging()


@pytest.fixture(autouse=True)
def clear_sesame_env(monkeypatch):
    """Keep SESAME_CLIENT_* variables from the host environment out of the tests."""
    for name in list(os.environ):
        if name.startswith('SESAME_CLIENT_'):
            monkeypatch.delenv(name, raising=False)


@pytest.fixture
def endpoint_config():
    return EndpointConfig(base_address=BASE_ADDRESS, repository=TEST_REPOSITORY)


@pytest.fixture
def builder(endpoint_config):
    return RequestBuilder(endpoint_config)


@pytest.fixture
def mock_setup():
    client, transport = create_mock_client()
    yield client, transport
    client.close()


@pytest.fixture
def client(mock_setup):
    return mock_setup[0]


@pytest.fixture
def transport(mock_setup):
    return mock_setup[1]
