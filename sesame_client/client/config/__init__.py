from .endpoint_config import EndpointConfig, Credentials
from .client_config_loader import SesameClientConfig

__all__ = [
    'EndpointConfig',
    'Credentials',
    'SesameClientConfig',
]
