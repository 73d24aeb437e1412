"""
Sesame Client Utilities

Shared utilities and helper functions for Sesame client operations.
"""

from .client_utils import (
    SesameClientError,
    ConfigError,
    InvalidArgument,
    UnsupportedFormat,
    ProtocolError,
    DecodeError,
    TransportError,
    validate_required_params,
)

__all__ = [
    'SesameClientError',
    'ConfigError',
    'InvalidArgument',
    'UnsupportedFormat',
    'ProtocolError',
    'DecodeError',
    'TransportError',
    'validate_required_params',
]
