"""Sesame Client Interface

Abstract base class defining the interface for Sesame clients.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, Optional

from rdflib import Graph

from .request import formats
from .request.request_builder import RDFData
from .response.result_set import ResultSet


class SesameClientInterface(ABC):
    """
    Abstract interface for Sesame clients.

    Defines the operations of the Sesame HTTP protocol that every client
    implementation offers.
    """

    # Connection Management

    @abstractmethod
    def close(self) -> None:
        """Release the underlying transport."""
        pass

    @abstractmethod
    def get_server_info(self) -> Dict[str, Any]:
        """Get information about the configured server."""
        pass

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    # Repositories

    @abstractmethod
    def list_repositories(self, result_format: str = formats.SPARQL_XML) -> ResultSet:
        pass

    @abstractmethod
    def query(self, query: str, result_format: str = formats.SPARQL_XML,
              query_lang: str = 'sparql', infer: bool = True) -> ResultSet:
        pass

    # Statements

    @abstractmethod
    def append(self, data: RDFData, context: str = formats.NULL_CONTEXT,
               input_format: str = formats.RDFXML) -> None:
        pass

    @abstractmethod
    def append_file(self, file_path: str, context: str = formats.NULL_CONTEXT,
                    input_format: str = formats.RDFXML) -> None:
        pass

    @abstractmethod
    def append_graph(self, graph: Graph, context: str = formats.NULL_CONTEXT,
                     input_format: str = formats.TURTLE) -> None:
        pass

    @abstractmethod
    def overwrite(self, data: RDFData, context: str = formats.NULL_CONTEXT,
                  input_format: str = formats.RDFXML) -> None:
        pass

    @abstractmethod
    def overwrite_file(self, file_path: str, context: str = formats.NULL_CONTEXT,
                       input_format: str = formats.RDFXML) -> None:
        pass

    @abstractmethod
    def overwrite_graph(self, graph: Graph, context: str = formats.NULL_CONTEXT,
                        input_format: str = formats.TURTLE) -> None:
        pass

    @abstractmethod
    def clear(self) -> None:
        pass

    # Namespaces

    @abstractmethod
    def get_namespace(self, prefix: str) -> str:
        pass

    @abstractmethod
    def set_namespace(self, prefix: str, namespace: str) -> None:
        pass

    @abstractmethod
    def delete_namespace(self, prefix: str) -> None:
        pass

    # Contexts

    @abstractmethod
    def list_contexts(self, result_format: str = formats.SPARQL_XML) -> ResultSet:
        pass

    @abstractmethod
    def size(self, context: str = formats.NULL_CONTEXT) -> int:
        pass

    # Configuration

    @abstractmethod
    def with_repository(self, repository: Optional[str]) -> 'SesameClientInterface':
        pass

    @abstractmethod
    def with_encoding(self, encoding: str) -> 'SesameClientInterface':
        pass

    @abstractmethod
    def with_credentials(self, username: Optional[str], password: str = "") -> 'SesameClientInterface':
        pass
