"""Sesame Endpoint Configuration

Immutable connection settings shared by every request a client issues.
"""

import codecs
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from ..utils.client_utils import ConfigError

DEFAULT_SERVER_URL = 'http://localhost:8080/openrdf-sesame'
DEFAULT_ENCODING = 'utf-8'


class Credentials(BaseModel):
    """User/password pair for HTTP Basic authentication."""
    model_config = ConfigDict(frozen=True)

    username: str = Field(
        ...,
        description="User name"
    )
    password: str = Field(
        "",
        description="Password"
    )

    def __repr__(self) -> str:
        return f"Credentials(username={self.username!r}, password='***')"

    __str__ = __repr__


class EndpointConfig(BaseModel):
    """Server address, selected repository, encoding and credentials."""
    model_config = ConfigDict(frozen=True)

    base_address: str = Field(
        DEFAULT_SERVER_URL,
        description="Sesame server base address",
        examples=["http://localhost:8080/openrdf-sesame"]
    )
    repository: Optional[str] = Field(
        None,
        description="Selected repository id"
    )
    encoding: str = Field(
        DEFAULT_ENCODING,
        description="Charset appended to request content types"
    )
    credentials: Optional[Credentials] = Field(
        None,
        description="Optional authentication data"
    )

    @classmethod
    def create(cls, **values) -> 'EndpointConfig':
        """
        Build a config, reporting invalid values as ConfigError.

        Raises:
            ConfigError: If any value fails validation
        """
        try:
            return cls(**values)
        except ValidationError as e:
            raise ConfigError(f"Invalid endpoint configuration: {e}") from e

    @field_validator('base_address')
    @classmethod
    def _check_base_address(cls, value: str) -> str:
        if not value or not value.strip():
            raise ValueError("base_address must be a non-empty string")
        if not value.startswith(('http://', 'https://')):
            raise ValueError("base_address must start with http:// or https://")
        return value

    @field_validator('encoding')
    @classmethod
    def _check_encoding(cls, value: str) -> str:
        if not value or not value.strip():
            raise ValueError("encoding must be a non-empty string")
        try:
            codecs.lookup(value)
        except LookupError as e:
            raise ValueError(f"unknown encoding: {value}") from e
        return value

    def validate_repository_selected(self) -> str:
        """
        Ensure a repository has been selected.

        Returns:
            The repository id

        Raises:
            ConfigError: If no repository is selected
        """
        if not self.repository:
            raise ConfigError("No repository has been selected")
        return self.repository

    def charset_suffix(self) -> str:
        """Render the charset parameter appended to Content-Type headers."""
        return f";charset={self.encoding}"

    def with_repository(self, repository: Optional[str]) -> 'EndpointConfig':
        return self.model_copy(update={'repository': repository})

    def with_encoding(self, encoding: str) -> 'EndpointConfig':
        # model_copy skips validation
        return EndpointConfig.create(
            base_address=self.base_address,
            repository=self.repository,
            encoding=encoding,
            credentials=self.credentials,
        )

    def with_credentials(self, username: Optional[str], password: str = "") -> 'EndpointConfig':
        credentials = Credentials(username=username, password=password or "") if username else None
        return self.model_copy(update={'credentials': credentials})
