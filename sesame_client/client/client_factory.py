"""Sesame Client Factory

Factory function to create a Sesame client from configuration settings,
backed either by HTTP or by the in-memory mock server.
"""

import logging
from typing import Iterable, Optional

from .config.client_config_loader import SesameClientConfig
from .response.result_decoder import DEFAULT_DECODERS, ResultDecoder
from .sesame_client import SesameClient
from .transport.http_transport import RequestsTransport
from ..mock.mock_transport import MockSesameTransport

logger = logging.getLogger(__name__)


def create_sesame_client(config_path: Optional[str] = None, *, config: Optional[SesameClientConfig] = None,
                         decoders: Iterable[ResultDecoder] = DEFAULT_DECODERS) -> SesameClient:
    """
    Create a Sesame client based on configuration settings.

    The 'use_mock_client' setting selects the in-memory mock server instead
    of HTTP; the configured repository is created on the mock server.

    Args:
        config_path: Path to the client configuration YAML file (optional if config provided)
        config: Pre-loaded SesameClientConfig (takes precedence over config_path)
        decoders: Result decoders the client accepts

    Returns:
        SesameClient

    Raises:
        ConfigError: If configuration loading or validation fails
    """
    if config is not None:
        client_config = config
        logger.info("Using provided config object for client creation")
    elif config_path is not None:
        client_config = SesameClientConfig(config_path)
        logger.info(f"Loaded config from {config_path} for client creation")
    else:
        client_config = SesameClientConfig()
        logger.info("Using default config for client creation")

    endpoint_config = client_config.to_endpoint_config()
    timeout = client_config.get_timeout()

    if client_config.use_mock_client():
        logger.info("Creating Sesame client with mock transport based on configuration setting")
        credentials = endpoint_config.credentials
        transport = MockSesameTransport(
            endpoint_config.base_address,
            credentials=(credentials.username, credentials.password) if credentials else None,
        )
        if endpoint_config.repository:
            transport.create_repository(endpoint_config.repository)
    else:
        logger.info("Creating Sesame client with HTTP transport")
        transport = RequestsTransport(timeout=timeout)

    return SesameClient(endpoint_config, transport=transport, decoders=decoders, timeout=timeout)
