"""Test Helper Functions

Utility functions to support Sesame client testing.
"""

import logging
from urllib.parse import parse_qsl

from sesame_client.client.config.endpoint_config import EndpointConfig
from sesame_client.client.sesame_client import SesameClient
from sesame_client.mock.mock_transport import MockSesameTransport, RecordedRequest

BASE_ADDRESS = 'http://localhost:8080/openrdf-sesame'
TEST_REPOSITORY = 'test-repo'


def setup_test_logging():
    """Set up logging for tests."""
    logging.basicConfig(
        level=logging.DEBUG,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )


def create_mock_client(repository: str = TEST_REPOSITORY, **config_values):
    """Create a client wired to a fresh mock server holding one repository.

    Returns:
        Tuple of (client, transport)
    """
    transport = MockSesameTransport(BASE_ADDRESS)
    transport.create_repository(repository, title="Test repository")
    config = EndpointConfig(base_address=BASE_ADDRESS, repository=repository, **config_values)
    return SesameClient(config, transport=transport), transport


def form_fields(request: RecordedRequest) -> dict:
    """Decode the form-encoded body of a recorded request."""
    return dict(parse_qsl(request.body.decode('ascii'), keep_blank_values=True))


def column_values(result_set, variable: str) -> list:
    """Lexical values of one column, None for unbound cells."""
    return [value.value if value is not None else None for value in result_set.column(variable)]
