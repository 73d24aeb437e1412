"""
Sesame Client Utilities

Error taxonomy and shared helper functions for Sesame client operations.
"""

from typing import Optional


class SesameClientError(Exception):
    """Base exception for Sesame client errors."""
    pass


class ConfigError(SesameClientError):
    """Raised when the client configuration is missing or invalid."""
    pass


class InvalidArgument(SesameClientError):
    """Raised when an operation receives an argument it cannot accept."""
    pass


class UnsupportedFormat(InvalidArgument):
    """Raised when a result format has no registered decoder."""

    def __init__(self, result_format: str, supported=()):
        self.result_format = result_format
        self.supported = tuple(supported)
        message = f"Unsupported result format '{result_format}'"
        if self.supported:
            message += f" (supported: {', '.join(self.supported)})"
        super().__init__(message)


class ProtocolError(SesameClientError):
    """Raised when the server answers with a status the operation does not expect."""

    def __init__(self, status: int, operation: str, expected: Optional[int] = None, body: str = ""):
        self.status = status
        self.operation = operation
        self.expected = expected
        self.body = body
        message = f"Operation '{operation}' failed with HTTP status {status}"
        if expected is not None:
            message += f" (expected {expected})"
        if body:
            message += f": {body[:200]}"
        super().__init__(message)


class DecodeError(SesameClientError):
    """Raised when a response body cannot be decoded."""

    def __init__(self, message: str, row_index: Optional[int] = None, fragment: Optional[str] = None):
        self.row_index = row_index
        self.fragment = fragment
        details = message
        if row_index is not None:
            details += f" (row {row_index})"
        if fragment:
            details += f": {fragment[:200]}"
        super().__init__(details)


class TransportError(SesameClientError):
    """Raised when the underlying HTTP transport fails."""
    pass


def validate_required_params(**params):
    """
    Validate that required parameters are provided.

    Args:
        **params: Parameter name-value pairs to validate

    Raises:
        ConfigError: If any required parameter is missing
        InvalidArgument: If any required parameter is empty
    """
    for param_name, param_value in params.items():
        if param_value is None:
            raise ConfigError(f"Required parameter '{param_name}' is missing")
        if isinstance(param_value, (str, bytes)) and not param_value:
            raise InvalidArgument(f"Required parameter '{param_name}' is empty")
