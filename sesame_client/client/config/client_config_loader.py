"""
Sesame Client Configuration Loader

This module provides functionality to load and validate Sesame client configuration
from YAML files and environment variables for connecting to Sesame servers.
"""

import os
import yaml
from pathlib import Path
from typing import Dict, Any, Optional, Tuple
import logging

from dotenv import load_dotenv

from ..utils.client_utils import ConfigError
from .endpoint_config import EndpointConfig, DEFAULT_SERVER_URL, DEFAULT_ENCODING

logger = logging.getLogger(__name__)

ENV_PREFIX = 'SESAME_CLIENT_'

# environment variable -> (section, key)
ENV_OVERRIDES = {
    'SERVER_URL': ('server', 'url'),
    'REPOSITORY': ('server', 'repository'),
    'ENCODING': ('server', 'encoding'),
    'AUTH_USERNAME': ('auth', 'username'),
    'AUTH_PASSWORD': ('auth', 'password'),
    'TIMEOUT': ('client', 'timeout'),
    'USE_MOCK_CLIENT': ('client', 'use_mock_client'),
}


class SesameClientConfig:
    """
    Sesame client configuration loader and manager.

    Loads configuration from YAML files, applies SESAME_CLIENT_* environment
    overrides and provides access to configuration sections.
    """

    def __init__(self, config_path: Optional[str] = None, *, env_file: Optional[str] = None,
                 use_env: bool = True):
        """
        Initialize the client configuration loader.

        Args:
            config_path: Path to configuration file. If None, uses default locations or built-in defaults.
            env_file: Optional .env file loaded before environment overrides are applied
            use_env: Whether SESAME_CLIENT_* environment variables override file values
        """
        self.config_data: Dict[str, Any] = {}
        self.config_path: Optional[str] = None

        if config_path is not None:
            self.load_config(config_path)
        else:
            self._load_default_config()

        if env_file is not None:
            load_dotenv(env_file)
            logger.info(f"Loaded environment file: {env_file}")

        if use_env:
            self._apply_env_overrides()

    def load_config(self, config_path: str) -> None:
        """
        Load configuration from a specific file path.

        Args:
            config_path: Path to the YAML configuration file

        Raises:
            ConfigError: If the file cannot be loaded or parsed
        """
        config_file = Path(config_path)

        if not config_file.exists():
            raise ConfigError(f"Configuration file not found: {config_path}")

        try:
            with open(config_file, 'r', encoding='utf-8') as f:
                self.config_data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigError(f"Error parsing YAML configuration: {e}") from e
        except OSError as e:
            raise ConfigError(f"Error loading configuration file: {e}") from e

        if not isinstance(self.config_data, dict):
            raise ConfigError(f"Configuration root must be a mapping: {config_path}")

        self.config_path = str(config_file.absolute())
        logger.info(f"Loaded client configuration from: {self.config_path}")

    def _load_default_config(self) -> None:
        """
        Load default configuration by searching standard locations or using built-in defaults.
        """
        default_paths = [
            "sesameclient-config.yaml",
            "sesameclient_config/sesameclient-config.yaml",
            os.path.expanduser("~/.sesame/sesameclient-config.yaml"),
            "/etc/sesame/sesameclient-config.yaml"
        ]

        for path in default_paths:
            if os.path.exists(path):
                try:
                    self.load_config(path)
                    logger.info(f"Found and loaded default config from: {path}")
                    return
                except ConfigError:
                    continue

        self.config_data = {
            'server': {
                'url': DEFAULT_SERVER_URL,
                'repository': None,
                'encoding': DEFAULT_ENCODING
            },
            'auth': {},
            'client': {
                'timeout': None,
                'use_mock_client': False
            }
        }
        self.config_path = "<built-in defaults>"
        logger.info("Using built-in default configuration")

    def _apply_env_overrides(self) -> None:
        for suffix, (section, key) in ENV_OVERRIDES.items():
            value = os.getenv(ENV_PREFIX + suffix)
            if value is None:
                continue
            if key == 'use_mock_client':
                value = value.strip().lower() in ('1', 'true', 'yes', 'on')
            elif key == 'timeout':
                try:
                    value = float(value)
                except ValueError as e:
                    raise ConfigError(f"{ENV_PREFIX + suffix} must be a number: {value}") from e
            section_data = self.config_data.get(section)
            if not isinstance(section_data, dict):
                section_data = {}
                self.config_data[section] = section_data
            section_data[key] = value
            logger.debug(f"Configuration override from environment: {section}.{key}")

    def get_server_config(self) -> Dict[str, Any]:
        return self.config_data.get('server') or {}

    def get_auth_config(self) -> Dict[str, Any]:
        return self.config_data.get('auth') or {}

    def get_client_config(self) -> Dict[str, Any]:
        return self.config_data.get('client') or {}

    def get_server_url(self) -> str:
        """
        Get the Sesame server URL.

        Returns:
            Server URL string
        """
        return self.get_server_config().get('url') or DEFAULT_SERVER_URL

    def get_repository(self) -> Optional[str]:
        """
        Get the repository selected in configuration.

        Returns:
            Repository id, or None if no repository is configured
        """
        return self.get_server_config().get('repository')

    def get_encoding(self) -> str:
        return self.get_server_config().get('encoding') or DEFAULT_ENCODING

    def get_credentials(self) -> Tuple[Optional[str], Optional[str]]:
        """
        Get username and password for authentication.

        Returns:
            Tuple of (username, password); both None when no credentials are configured
        """
        auth_config = self.get_auth_config()
        return auth_config.get('username'), auth_config.get('password')

    def get_timeout(self) -> Optional[float]:
        """
        Get the transport timeout in seconds.

        Returns:
            Timeout in seconds, or None to leave the transport without a timeout
        """
        return self.get_client_config().get('timeout')

    def use_mock_client(self) -> bool:
        """
        Get whether to use the in-memory mock transport instead of HTTP.

        Returns:
            True if the mock transport should be used (default: False)
        """
        return self.get_client_config().get('use_mock_client', False)

    def validate_config(self) -> None:
        """
        Validate the loaded configuration.

        Raises:
            ConfigError: If configuration is invalid
        """
        server_url = self.get_server_url()
        if not isinstance(server_url, str) or not server_url:
            raise ConfigError("Server URL must be a non-empty string")

        if not server_url.startswith(('http://', 'https://')):
            raise ConfigError("Server URL must start with http:// or https://")

        repository = self.get_repository()
        if repository is not None and not isinstance(repository, str):
            raise ConfigError("Repository must be a string")

        username, password = self.get_credentials()
        if username is not None and (not isinstance(username, str) or not username):
            raise ConfigError("Username must be a non-empty string")

        if password is not None and not isinstance(password, str):
            raise ConfigError("Password must be a string")

        timeout = self.get_timeout()
        if timeout is not None and (isinstance(timeout, bool) or not isinstance(timeout, (int, float))
                                    or timeout <= 0):
            raise ConfigError("Timeout must be a positive number")

        if not isinstance(self.use_mock_client(), bool):
            raise ConfigError("use_mock_client must be a boolean value")

        logger.info("Client configuration validation passed")

    def to_endpoint_config(self) -> EndpointConfig:
        """
        Build the immutable endpoint configuration.

        Returns:
            EndpointConfig instance

        Raises:
            ConfigError: If configuration is invalid
        """
        self.validate_config()
        username, password = self.get_credentials()
        credentials = None
        if username:
            credentials = {'username': username, 'password': password or ""}
        return EndpointConfig.create(
            base_address=self.get_server_url(),
            repository=self.get_repository(),
            encoding=self.get_encoding(),
            credentials=credentials,
        )

    def __str__(self) -> str:
        """String representation of the configuration."""
        return f"SesameClientConfig(path={self.config_path}, server_url={self.get_server_url()})"
