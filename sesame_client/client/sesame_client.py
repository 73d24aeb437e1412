"""Sesame Client

HTTP client for the Sesame repository protocol. Every operation builds one
request, sends it once through the transport, checks the status code the
operation expects and decodes the body.
"""

import logging
import re
from typing import Any, Dict, Iterable, Optional

from rdflib import Graph

from .config.endpoint_config import EndpointConfig
from .request import formats
from .request.request_builder import OperationDescriptor, RDFData, RequestBuilder, check_input_format
from .response.result_decoder import DEFAULT_DECODERS, ResultDecoder, build_decoder_registry
from .response.result_set import ResultSet
from .sesame_client_inf import SesameClientInterface
from .transport.http_transport import HttpTransport, RequestsTransport, TransportResponse
from .utils.client_utils import DecodeError, ProtocolError
from .utils.content_loader import load_content, serialize_graph

logger = logging.getLogger(__name__)

_INTEGER = re.compile(r'-?[0-9]+')


class SesameClient(SesameClientInterface):
    """
    Sesame HTTP protocol client.

    The endpoint configuration is fixed for the lifetime of a client. Use
    with_repository(), with_encoding() or with_credentials() to obtain a
    client for different settings; derived clients share the transport.
    """

    def __init__(self, config: Optional[EndpointConfig] = None, *,
                 transport: Optional[HttpTransport] = None,
                 decoders: Iterable[ResultDecoder] = DEFAULT_DECODERS,
                 timeout: Optional[float] = None):
        """
        Initialize the Sesame client.

        Args:
            config: Endpoint configuration; defaults to a local server without a repository
            transport: HTTP transport; a requests-based transport is created when omitted
            decoders: Result decoders, one per accepted result format
            timeout: Timeout in seconds for the default transport
        """
        self._config = config if config is not None else EndpointConfig()
        self._decoders: Dict[str, ResultDecoder] = build_decoder_registry(decoders)
        self._builder = RequestBuilder(self._config, result_formats=self._decoders.keys())
        self.transport = transport if transport is not None else RequestsTransport(timeout=timeout)
        self.timeout = timeout

        logger.info(f"Sesame client initialized: {self}")

    @property
    def config(self) -> EndpointConfig:
        return self._config

    @property
    def builder(self) -> RequestBuilder:
        return self._builder

    @property
    def result_formats(self):
        return tuple(self._decoders)

    def _derive(self, config: EndpointConfig) -> 'SesameClient':
        return SesameClient(config, transport=self.transport, decoders=self._decoders.values(),
                            timeout=self.timeout)

    def with_repository(self, repository: Optional[str]) -> 'SesameClient':
        return self._derive(self._config.with_repository(repository))

    def with_encoding(self, encoding: str) -> 'SesameClient':
        return self._derive(self._config.with_encoding(encoding))

    def with_credentials(self, username: Optional[str], password: str = "") -> 'SesameClient':
        return self._derive(self._config.with_credentials(username, password))

    # Dispatch

    def execute(self, descriptor: OperationDescriptor) -> TransportResponse:
        """
        Send a request and enforce its expected status.

        Args:
            descriptor: Request built by the RequestBuilder

        Returns:
            The transport response

        Raises:
            ProtocolError: If the status differs from the expected one
            TransportError: If the transport fails
        """
        url = descriptor.url(self._config.base_address)
        credentials = self._config.credentials
        auth = (credentials.username, credentials.password) if credentials else None

        logger.info(f"Sesame {descriptor.operation.value}: {descriptor.method} {url}")
        response = self.transport.send(descriptor.method, url, dict(descriptor.headers), descriptor.body, auth)

        if response.status_code != descriptor.expected_status:
            logger.error(f"Sesame {descriptor.operation.value} returned HTTP {response.status_code}, "
                         f"expected {descriptor.expected_status}")
            raise ProtocolError(
                response.status_code,
                descriptor.operation.value,
                expected=descriptor.expected_status,
                body=response.text(self._config.encoding),
            )
        return response

    def _fetch_results(self, descriptor: OperationDescriptor) -> ResultSet:
        response = self.execute(descriptor)
        result_set = self._decoders[descriptor.result_format].decode(response.body)
        logger.info(f"Sesame {descriptor.operation.value} returned {len(result_set)} rows")
        return result_set

    # Repositories

    def list_repositories(self, result_format: str = formats.SPARQL_XML) -> ResultSet:
        """
        List the repositories available on the server.

        Returns:
            ResultSet with one row per repository (uri, id, title, readable, writable)
        """
        return self._fetch_results(self._builder.list_repositories(result_format))

    def query(self, query: str, result_format: str = formats.SPARQL_XML,
              query_lang: str = 'sparql', infer: bool = True) -> ResultSet:
        """
        Evaluate a tuple query against the selected repository.

        Args:
            query: Query text
            result_format: Result format to negotiate
            query_lang: 'sparql' or 'serql'
            infer: Whether inferred statements are included

        Returns:
            Decoded ResultSet

        Raises:
            ConfigError: If no repository is selected
            InvalidArgument: If the query language is invalid
            UnsupportedFormat: If the result format has no decoder
            ProtocolError: If the server does not answer 200
            DecodeError: If the result document is malformed
        """
        return self._fetch_results(self._builder.query(query, result_format, query_lang, infer))

    # Statements

    def append(self, data: RDFData, context: str = formats.NULL_CONTEXT,
               input_format: str = formats.RDFXML) -> None:
        """
        Add statements to the selected repository.

        Args:
            data: RDF data in input_format
            context: Target context URI, or 'null' for the default context
            input_format: One of the supported input MIME types
        """
        self.execute(self._builder.append(data, context, input_format))

    def append_file(self, file_path: str, context: str = formats.NULL_CONTEXT,
                    input_format: str = formats.RDFXML) -> None:
        """Add statements read from a local file or URL."""
        self._config.validate_repository_selected()
        check_input_format(input_format)
        self.append(load_content(file_path, transport=self.transport), context, input_format)

    def append_graph(self, graph: Graph, context: str = formats.NULL_CONTEXT,
                     input_format: str = formats.TURTLE) -> None:
        """Add the statements of an rdflib graph."""
        self._config.validate_repository_selected()
        self.append(serialize_graph(graph, input_format, self._config.encoding), context, input_format)

    def overwrite(self, data: RDFData, context: str = formats.NULL_CONTEXT,
                  input_format: str = formats.RDFXML) -> None:
        """
        Replace the statements of the selected repository.

        Args:
            data: RDF data in input_format
            context: Context whose statements are replaced, or 'null'
            input_format: One of the supported input MIME types
        """
        self.execute(self._builder.overwrite(data, context, input_format))

    def overwrite_file(self, file_path: str, context: str = formats.NULL_CONTEXT,
                       input_format: str = formats.RDFXML) -> None:
        """Replace statements with the content of a local file or URL."""
        self._config.validate_repository_selected()
        check_input_format(input_format)
        self.overwrite(load_content(file_path, transport=self.transport), context, input_format)

    def overwrite_graph(self, graph: Graph, context: str = formats.NULL_CONTEXT,
                        input_format: str = formats.TURTLE) -> None:
        """Replace statements with the statements of an rdflib graph."""
        self._config.validate_repository_selected()
        self.overwrite(serialize_graph(graph, input_format, self._config.encoding), context, input_format)

    def clear(self) -> None:
        """Remove all statements from the selected repository, in all contexts."""
        self.execute(self._builder.clear())

    # Namespaces

    def get_namespace(self, prefix: str) -> str:
        """
        Look up the namespace bound to a prefix.

        Returns:
            The namespace URI
        """
        response = self.execute(self._builder.get_namespace(prefix))
        return response.text(self._config.encoding).strip()

    def set_namespace(self, prefix: str, namespace: str) -> None:
        self.execute(self._builder.set_namespace(prefix, namespace))

    def delete_namespace(self, prefix: str) -> None:
        self.execute(self._builder.delete_namespace(prefix))

    # Contexts

    def list_contexts(self, result_format: str = formats.SPARQL_XML) -> ResultSet:
        """
        List the contexts of the selected repository.

        Returns:
            ResultSet with a single contextID column
        """
        return self._fetch_results(self._builder.list_contexts(result_format))

    def size(self, context: str = formats.NULL_CONTEXT) -> int:
        """
        Count the statements in a context of the selected repository.

        Raises:
            DecodeError: If the server answers with a non-integer body
        """
        response = self.execute(self._builder.size(context))
        text = response.text(self._config.encoding).strip()
        if not _INTEGER.fullmatch(text):
            raise DecodeError("Size response is not an integer", fragment=text)
        return int(text)

    # Connection Management

    def close(self) -> None:
        self.transport.close()
        logger.info("Sesame client closed")

    def get_server_info(self) -> Dict[str, Any]:
        return {
            'server_url': self._config.base_address,
            'repository': self._config.repository,
            'encoding': self._config.encoding,
            'authenticated': self._config.credentials is not None,
            'result_formats': list(self.result_formats),
            'timeout': self.timeout,
        }

    def __str__(self) -> str:
        return f"SesameClient(server={self._config.base_address}, repository={self._config.repository})"

    def __repr__(self) -> str:
        return self.__str__()
