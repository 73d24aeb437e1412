"""Mock Sesame Transport

In-memory stand-in for a Sesame server. Implements HttpTransport by routing
requests to rdflib datasets kept per repository, so the real client code
path (request building, status checks, decoding) runs unchanged without a
network. Every request is recorded for inspection, and canned responses can
be queued to simulate arbitrary server behaviour.
"""

import logging
from collections import deque
from typing import Dict, List, Optional, Tuple
from urllib.parse import parse_qsl, unquote, urlsplit

from pydantic import BaseModel, ConfigDict, Field
from rdflib import Dataset, Graph, URIRef
from rdflib.graph import DATASET_DEFAULT_GRAPH_ID

from ..client.request import formats
from ..client.response.result_set import BindingValue, ResultSet
from ..client.response.result_writer import write_sparql_json, write_sparql_xml
from ..client.transport.http_transport import HttpTransport, TransportResponse
from ..client.utils.client_utils import TransportError

_QUAD_FORMATS = ('trig', 'trix')

_WRITERS = {
    formats.SPARQL_XML: write_sparql_xml,
    formats.SPARQL_JSON: write_sparql_json,
}


class RecordedRequest(BaseModel):
    """A request received by the mock transport."""
    model_config = ConfigDict(frozen=True)

    method: str = Field(..., description="HTTP method")
    url: str = Field(..., description="Absolute request URL")
    headers: Dict[str, str] = Field(default_factory=dict, description="Request headers")
    body: Optional[bytes] = Field(None, description="Request body")
    auth: Optional[Tuple[str, str]] = Field(None, description="Basic authentication pair")

    @property
    def path(self) -> str:
        return urlsplit(self.url).path

    @property
    def query_string(self) -> str:
        return urlsplit(self.url).query


class MockRepository:
    """One repository held by the mock server."""

    def __init__(self, repository_id: str, title: str = ""):
        self.repository_id = repository_id
        self.title = title
        self.dataset = Dataset(default_union=True)
        self.namespaces: Dict[str, str] = {}

    def graph(self, context: Optional[str]):
        if context is None:
            return self.dataset.default_context
        return self.dataset.graph(URIRef(context))

    def named_contexts(self) -> List[str]:
        return [
            str(graph.identifier)
            for graph in self.dataset.contexts()
            if graph.identifier != DATASET_DEFAULT_GRAPH_ID and len(graph) > 0
        ]

    def clear(self, context: Optional[str] = None) -> None:
        if context is None:
            self.dataset.remove((None, None, None, None))
        else:
            self.graph(context).remove((None, None, None))


class MockSesameTransport(HttpTransport):
    """
    HttpTransport answering like a Sesame server, backed by rdflib.

    Args:
        base_address: Address the mock server is reachable at
        credentials: Optional (username, password) the server requires
    """

    def __init__(self, base_address: str = 'http://localhost:8080/openrdf-sesame', *,
                 credentials: Optional[Tuple[str, str]] = None):
        self.base_address = base_address.rstrip('/')
        self.base_path = urlsplit(base_address).path.rstrip('/')
        self.credentials = credentials
        self.repositories: Dict[str, MockRepository] = {}
        self.requests: List[RecordedRequest] = []
        self._queued: deque = deque()
        self._failures: deque = deque()
        self.documents: Dict[str, TransportResponse] = {}
        self.logger = logging.getLogger(self.__class__.__name__)

    # Test controls

    def create_repository(self, repository_id: str, title: str = "") -> MockRepository:
        repository = self.repositories.get(repository_id)
        if repository is None:
            repository = MockRepository(repository_id, title)
            self.repositories[repository_id] = repository
            self.logger.info(f"Created mock repository '{repository_id}'")
        return repository

    def queue_response(self, status_code: int, body: bytes = b"", headers: Optional[Dict[str, str]] = None) -> None:
        """Answer the next request with a canned response instead of routing it."""
        if isinstance(body, str):
            body = body.encode('utf-8')
        self._queued.append(TransportResponse(status_code=status_code, body=body, headers=headers or {}))

    def serve_document(self, url: str, body: bytes, status_code: int = 200) -> None:
        """Answer GET requests for an absolute URL outside the repository API."""
        if isinstance(body, str):
            body = body.encode('utf-8')
        self.documents[url] = TransportResponse(status_code=status_code, body=body)

    def queue_failure(self, message: str = "Connection refused") -> None:
        """Fail the next request with a TransportError."""
        self._failures.append(message)

    @property
    def last_request(self) -> Optional[RecordedRequest]:
        return self.requests[-1] if self.requests else None

    # HttpTransport

    def send(self, method: str, url: str, headers: Dict[str, str], body: Optional[bytes] = None,
             auth: Optional[Tuple[str, str]] = None) -> TransportResponse:
        self.requests.append(RecordedRequest(method=method, url=url, headers=headers, body=body,
                                             auth=tuple(auth) if auth else None))
        if self._failures:
            raise TransportError(f"HTTP {method} {url} failed: {self._failures.popleft()}")
        if self._queued:
            return self._queued.popleft()
        if method == 'GET' and url in self.documents:
            return self.documents[url]
        if self.credentials is not None and tuple(auth or ()) != tuple(self.credentials):
            return self._respond(401, "Unauthorized")

        parts = urlsplit(url)
        path = parts.path[len(self.base_path):] if parts.path.startswith(self.base_path) else parts.path
        segments = [unquote(segment) for segment in path.strip('/').split('/') if segment]
        params = dict(parse_qsl(parts.query, keep_blank_values=True))
        return self._route(method, segments, params, headers, body or b"")

    # Routing

    @staticmethod
    def _respond(status_code: int, body: str = "", content_type: str = formats.TEXT_PLAIN) -> TransportResponse:
        return TransportResponse(status_code=status_code, body=body.encode('utf-8'),
                                 headers={'Content-Type': content_type} if body else {})

    @staticmethod
    def _results(result_set: ResultSet, accept: str) -> TransportResponse:
        writer = _WRITERS.get(accept)
        if writer is None:
            return MockSesameTransport._respond(406, f"Unsupported result format: {accept}")
        return TransportResponse(status_code=200, body=writer(result_set), headers={'Content-Type': accept})

    @staticmethod
    def _context(params: Dict[str, str]) -> Optional[str]:
        context = params.get('context', formats.NULL_CONTEXT)
        if context == formats.NULL_CONTEXT:
            return None
        if context.startswith('<') and context.endswith('>'):
            context = context[1:-1]
        return context

    def _route(self, method: str, segments: List[str], params: Dict[str, str],
               headers: Dict[str, str], body: bytes) -> TransportResponse:
        if not segments or segments[0] != 'repositories':
            return self._respond(404, "Not found")

        accept = headers.get('Accept', formats.SPARQL_XML)
        if len(segments) == 1:
            if method != 'GET':
                return self._respond(405, "Method not allowed")
            return self._results(self._repository_list(), accept)

        repository = self.repositories.get(segments[1])
        if repository is None:
            return self._respond(404, f"Unknown repository: {segments[1]}")

        resource = segments[2] if len(segments) > 2 else None
        if resource is None and method == 'POST':
            return self._query(repository, body, headers, accept)
        if resource == 'statements' and method in ('POST', 'PUT'):
            return self._upload(repository, method, params, headers, body)
        if resource == 'statements' and method == 'DELETE':
            repository.clear()
            return self._respond(204)
        if resource == 'namespaces' and len(segments) == 4:
            return self._namespace(repository, method, segments[3], body)
        if resource == 'contexts' and method == 'POST':
            rows = [{'contextID': BindingValue.uri(context)} for context in repository.named_contexts()]
            return self._results(ResultSet(['contextID'], rows), accept)
        if resource == 'size' and method == 'POST':
            context = self._context(params)
            return self._respond(200, str(len(repository.graph(context))))
        return self._respond(405, "Method not allowed")

    def _repository_list(self) -> ResultSet:
        rows = []
        for repository in self.repositories.values():
            rows.append({
                'uri': BindingValue.uri(f"{self.base_address}/repositories/{repository.repository_id}"),
                'id': BindingValue.literal(repository.repository_id),
                'title': BindingValue.literal(repository.title),
                'readable': BindingValue.literal('true', datatype='http://www.w3.org/2001/XMLSchema#boolean'),
                'writable': BindingValue.literal('true', datatype='http://www.w3.org/2001/XMLSchema#boolean'),
            })
        return ResultSet(['uri', 'id', 'title', 'readable', 'writable'], rows)

    def _query(self, repository: MockRepository, body: bytes, headers: Dict[str, str],
               accept: str) -> TransportResponse:
        form = dict(parse_qsl(body.decode('utf-8'), keep_blank_values=True))
        if form.get('queryLn', 'sparql') != 'sparql':
            return self._respond(400, "Only SPARQL is supported by the mock server")
        try:
            result = repository.dataset.query(form.get('query', ''))
        except Exception as e:
            return self._respond(400, f"MALFORMED QUERY: {e}")
        if result.type != 'SELECT':
            return self._respond(400, f"Unsupported query type: {result.type}")

        variables = [str(variable) for variable in result.vars]
        rows = [
            {str(name): BindingValue.from_rdflib(term) for name, term in row.asdict().items()}
            for row in result
        ]
        return self._results(ResultSet(variables, rows), accept)

    def _upload(self, repository: MockRepository, method: str, params: Dict[str, str],
                headers: Dict[str, str], body: bytes) -> TransportResponse:
        content_type = headers.get('Content-Type', '').split(';')[0].strip()
        rdflib_format = formats.RDFLIB_FORMATS.get(content_type)
        if rdflib_format is None:
            return self._respond(415, f"Unsupported MIME type: {content_type}")

        context = self._context(params)
        # a rejected body leaves the repository unchanged
        try:
            if rdflib_format in _QUAD_FORMATS:
                staged = Dataset()
                staged.parse(data=body, format=rdflib_format)
                quads = list(staged.quads((None, None, None, None)))
            else:
                staged = Graph()
                staged.parse(data=body, format=rdflib_format)
                quads = [(s, p, o, context) for s, p, o in staged]
        except Exception as e:
            return self._respond(400, f"MALFORMED DATA: {e}")

        if method == 'PUT':
            repository.clear(context)
        for s, p, o, graph_id in quads:
            repository.graph(graph_id).add((s, p, o))
        return self._respond(204)

    def _namespace(self, repository: MockRepository, method: str, prefix: str,
                   body: bytes) -> TransportResponse:
        if method == 'GET':
            namespace = repository.namespaces.get(prefix)
            if namespace is None:
                return self._respond(404, f"Undefined prefix: {prefix}")
            return self._respond(200, namespace)
        if method == 'PUT':
            repository.namespaces[prefix] = body.decode('utf-8').strip()
            return self._respond(204)
        if method == 'DELETE':
            repository.namespaces.pop(prefix, None)
            return self._respond(204)
        return self._respond(405, "Method not allowed")
