"""Sesame Request Builder

Maps logical Sesame operations onto HTTP request descriptors. No I/O happens
here: every method validates its arguments against the endpoint configuration
and returns an OperationDescriptor that a transport can send as-is.
"""

from enum import Enum
from typing import Dict, Iterable, Optional, Tuple, Union
from urllib.parse import quote, quote_plus, urlencode

from pydantic import BaseModel, ConfigDict, Field

from ..config.endpoint_config import EndpointConfig
from ..utils.client_utils import InvalidArgument, UnsupportedFormat, validate_required_params
from . import formats


RDFData = Union[str, bytes]


class Operation(str, Enum):
    LIST_REPOSITORIES = 'list_repositories'
    QUERY = 'query'
    APPEND = 'append'
    OVERWRITE = 'overwrite'
    GET_NAMESPACE = 'get_namespace'
    SET_NAMESPACE = 'set_namespace'
    DELETE_NAMESPACE = 'delete_namespace'
    LIST_CONTEXTS = 'list_contexts'
    SIZE = 'size'
    CLEAR = 'clear'


class OperationDescriptor(BaseModel):
    """A fully shaped HTTP request for one Sesame operation."""
    model_config = ConfigDict(frozen=True)

    operation: Operation = Field(
        ...,
        description="Logical operation name"
    )
    method: str = Field(
        ...,
        description="HTTP method (GET, POST, PUT, DELETE)"
    )
    path: str = Field(
        ...,
        description="Path below the server base address"
    )
    query: Tuple[Tuple[str, str], ...] = Field(
        (),
        description="Ordered query parameters, values already URL-encoded"
    )
    headers: Dict[str, str] = Field(
        default_factory=dict,
        description="Accept / Content-Type headers"
    )
    form: Optional[Tuple[Tuple[str, str], ...]] = Field(
        None,
        description="Form fields carried by the body, in order"
    )
    body: Optional[bytes] = Field(
        None,
        description="Encoded request body"
    )
    expected_status: int = Field(
        ...,
        description="The only status code the operation accepts"
    )
    result_format: Optional[str] = Field(
        None,
        description="Result format to decode the response with, for tabular operations"
    )

    def url(self, base_address: str) -> str:
        """Render the absolute request URL below ``base_address``."""
        url = f"{base_address.rstrip('/')}{self.path}"
        if self.query:
            url += '?' + '&'.join(f"{name}={value}" for name, value in self.query)
        return url


def check_query_lang(query_lang: str) -> str:
    if query_lang not in formats.QUERY_LANGUAGES:
        raise InvalidArgument(
            f"Please supply a valid query language, SPARQL or SeRQL supported (got {query_lang!r})")
    return query_lang


def check_input_format(input_format: str) -> str:
    if input_format not in formats.INPUT_FORMATS:
        raise InvalidArgument(f"Please supply a valid input format (got {input_format!r})")
    return input_format


def encode_context(context: Optional[str]) -> str:
    """
    Encode a context identifier for the ``context`` query parameter.

    The sentinel ``null`` is passed through. Any other value is wrapped in
    angle brackets unless already delimited, then percent-encoded as a whole.
    """
    if context is None or context == formats.NULL_CONTEXT:
        return formats.NULL_CONTEXT
    if not context:
        raise InvalidArgument("Context must be 'null' or a URI")
    if not (context.startswith('<') and context.endswith('>')):
        context = f"<{context}>"
    return quote_plus(context)


def encode_infer(infer: bool) -> str:
    return 'true' if infer else 'false'


class RequestBuilder:
    """Builds OperationDescriptors for a given endpoint configuration."""

    def __init__(self, config: EndpointConfig, result_formats: Iterable[str] = (formats.SPARQL_XML,)):
        self.config = config
        self.result_formats = tuple(result_formats)

    def check_result_format(self, result_format: str) -> str:
        if result_format not in self.result_formats:
            raise UnsupportedFormat(result_format, self.result_formats)
        return result_format

    def _repository_path(self, suffix: str = '') -> str:
        repository = self.config.validate_repository_selected()
        return f"/repositories/{quote(repository, safe='')}{suffix}"

    def _encode(self, data: RDFData) -> bytes:
        if isinstance(data, bytes):
            return data
        return data.encode(self.config.encoding)

    def list_repositories(self, result_format: str = formats.SPARQL_XML) -> OperationDescriptor:
        self.check_result_format(result_format)
        return OperationDescriptor(
            operation=Operation.LIST_REPOSITORIES,
            method='GET',
            path='/repositories',
            headers={'Accept': result_format},
            expected_status=200,
            result_format=result_format,
        )

    def query(self, query: str, result_format: str = formats.SPARQL_XML,
              query_lang: str = 'sparql', infer: bool = True) -> OperationDescriptor:
        path = self._repository_path()
        check_query_lang(query_lang)
        self.check_result_format(result_format)
        validate_required_params(query=query)

        form = (
            ('query', query),
            ('queryLn', query_lang),
            ('infer', encode_infer(infer)),
        )
        return OperationDescriptor(
            operation=Operation.QUERY,
            method='POST',
            path=path,
            headers={
                'Accept': result_format,
                'Content-Type': formats.FORM_URLENCODED + self.config.charset_suffix(),
            },
            form=form,
            body=urlencode(form, encoding=self.config.encoding).encode('ascii'),
            expected_status=200,
            result_format=result_format,
        )

    def _statements(self, operation: Operation, method: str, data: RDFData,
                    context: str, input_format: str) -> OperationDescriptor:
        path = self._repository_path('/statements')
        encoded_context = encode_context(context)
        check_input_format(input_format)
        validate_required_params(data=data)
        return OperationDescriptor(
            operation=operation,
            method=method,
            path=path,
            query=(('context', encoded_context),),
            headers={'Content-Type': input_format + self.config.charset_suffix()},
            body=self._encode(data),
            expected_status=204,
        )

    def append(self, data: RDFData, context: str = formats.NULL_CONTEXT,
               input_format: str = formats.RDFXML) -> OperationDescriptor:
        return self._statements(Operation.APPEND, 'POST', data, context, input_format)

    def overwrite(self, data: RDFData, context: str = formats.NULL_CONTEXT,
                  input_format: str = formats.RDFXML) -> OperationDescriptor:
        return self._statements(Operation.OVERWRITE, 'PUT', data, context, input_format)

    def _namespace_path(self, prefix: str) -> str:
        path = self._repository_path()
        validate_required_params(prefix=prefix)
        return f"{path}/namespaces/{quote(prefix, safe='')}"

    def get_namespace(self, prefix: str) -> OperationDescriptor:
        return OperationDescriptor(
            operation=Operation.GET_NAMESPACE,
            method='GET',
            path=self._namespace_path(prefix),
            headers={'Accept': formats.TEXT_PLAIN},
            expected_status=200,
        )

    def set_namespace(self, prefix: str, namespace: str) -> OperationDescriptor:
        path = self._namespace_path(prefix)
        validate_required_params(namespace=namespace)
        return OperationDescriptor(
            operation=Operation.SET_NAMESPACE,
            method='PUT',
            path=path,
            headers={'Content-Type': formats.TEXT_PLAIN + self.config.charset_suffix()},
            body=self._encode(namespace),
            expected_status=204,
        )

    def delete_namespace(self, prefix: str) -> OperationDescriptor:
        return OperationDescriptor(
            operation=Operation.DELETE_NAMESPACE,
            method='DELETE',
            path=self._namespace_path(prefix),
            expected_status=204,
        )

    def list_contexts(self, result_format: str = formats.SPARQL_XML) -> OperationDescriptor:
        path = self._repository_path('/contexts')
        self.check_result_format(result_format)
        return OperationDescriptor(
            operation=Operation.LIST_CONTEXTS,
            method='POST',
            path=path,
            headers={'Accept': result_format},
            expected_status=200,
            result_format=result_format,
        )

    def size(self, context: str = formats.NULL_CONTEXT) -> OperationDescriptor:
        path = self._repository_path('/size')
        return OperationDescriptor(
            operation=Operation.SIZE,
            method='POST',
            path=path,
            query=(('context', encode_context(context)),),
            headers={'Accept': formats.TEXT_PLAIN},
            expected_status=200,
        )

    def clear(self) -> OperationDescriptor:
        return OperationDescriptor(
            operation=Operation.CLEAR,
            method='DELETE',
            path=self._repository_path('/statements'),
            expected_status=204,
        )
