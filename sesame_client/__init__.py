"""
Sesame Client

Python binding for the Sesame (RDF4J) HTTP repository protocol: request
building, protocol client and SPARQL result decoding.
"""

from .client.sesame_client import SesameClient
from .client.sesame_client_inf import SesameClientInterface
from .client.client_factory import create_sesame_client
from .client.config.endpoint_config import EndpointConfig, Credentials
from .client.config.client_config_loader import SesameClientConfig
from .client.request import formats
from .client.request.request_builder import Operation, OperationDescriptor, RequestBuilder
from .client.response.result_set import BindingKind, BindingValue, Row, ResultSet
from .client.response.result_decoder import ResultDecoder, SparqlXmlResultDecoder, SparqlJsonResultDecoder
from .client.utils.client_utils import (
    SesameClientError,
    ConfigError,
    InvalidArgument,
    UnsupportedFormat,
    ProtocolError,
    DecodeError,
    TransportError,
)

__version__ = '0.1.0'

__all__ = [
    'SesameClient',
    'SesameClientInterface',
    'create_sesame_client',
    'EndpointConfig',
    'Credentials',
    'SesameClientConfig',
    'formats',
    'Operation',
    'OperationDescriptor',
    'RequestBuilder',
    'BindingKind',
    'BindingValue',
    'Row',
    'ResultSet',
    'ResultDecoder',
    'SparqlXmlResultDecoder',
    'SparqlJsonResultDecoder',
    'SesameClientError',
    'ConfigError',
    'InvalidArgument',
    'UnsupportedFormat',
    'ProtocolError',
    'DecodeError',
    'TransportError',
]
