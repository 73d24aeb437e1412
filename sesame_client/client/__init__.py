"""
Sesame Client

Client library for the Sesame HTTP repository protocol.
"""

from .sesame_client import SesameClient
from .sesame_client_inf import SesameClientInterface
from .client_factory import create_sesame_client

__all__ = [
    'SesameClient',
    'SesameClientInterface',
    'create_sesame_client',
]
