"""
Sesame HTTP Transport

Sends shaped requests over HTTP and hands back status code, headers and body.
The transport knows nothing about Sesame operations.
"""

import logging
from abc import ABC, abstractmethod
from typing import Dict, Optional, Tuple

import requests
from requests.auth import HTTPBasicAuth
from pydantic import BaseModel, ConfigDict, Field

from ..utils.client_utils import TransportError

logger = logging.getLogger(__name__)

USER_AGENT = 'Sesame-Python-Client/0.1'


class TransportResponse(BaseModel):
    """Status, headers and raw body of one HTTP exchange."""
    model_config = ConfigDict(frozen=True)

    status_code: int = Field(
        ...,
        description="HTTP status code"
    )
    body: bytes = Field(
        b"",
        description="Raw response body"
    )
    headers: Dict[str, str] = Field(
        default_factory=dict,
        description="Response headers"
    )

    def text(self, encoding: str = 'utf-8') -> str:
        return self.body.decode(encoding, errors='replace')


class HttpTransport(ABC):
    """Executes a single HTTP request."""

    @abstractmethod
    def send(self, method: str, url: str, headers: Dict[str, str], body: Optional[bytes] = None,
             auth: Optional[Tuple[str, str]] = None) -> TransportResponse:
        """
        Send one request.

        Args:
            method: HTTP method (GET, POST, PUT, DELETE)
            url: Absolute request URL
            headers: Request headers
            body: Encoded request body, if any
            auth: Optional (username, password) for HTTP Basic authentication

        Returns:
            TransportResponse

        Raises:
            TransportError: If the request could not be completed
        """
        pass

    def close(self) -> None:
        """Release any resources held by the transport."""
        pass


class RequestsTransport(HttpTransport):
    """HttpTransport backed by a requests.Session."""

    def __init__(self, timeout: Optional[float] = None, session: Optional[requests.Session] = None):
        """
        Args:
            timeout: Optional timeout in seconds passed to every request
            session: Optional pre-configured session; one is created on first use otherwise
        """
        self.timeout = timeout
        self.session: Optional[requests.Session] = session

    def _get_session(self) -> requests.Session:
        if self.session is None:
            self.session = requests.Session()
            self.session.headers.update({'User-Agent': USER_AGENT})
        return self.session

    def send(self, method: str, url: str, headers: Dict[str, str], body: Optional[bytes] = None,
             auth: Optional[Tuple[str, str]] = None) -> TransportResponse:
        session = self._get_session()
        logger.debug(f"{method} {url}")
        try:
            response = session.request(
                method,
                url,
                headers=headers,
                data=body,
                auth=HTTPBasicAuth(*auth) if auth else None,
                timeout=self.timeout,
            )
        except requests.exceptions.RequestException as e:
            logger.error(f"HTTP {method} {url} failed: {e}")
            raise TransportError(f"HTTP {method} {url} failed: {e}") from e

        return TransportResponse(
            status_code=response.status_code,
            body=response.content or b"",
            headers=dict(response.headers),
        )

    def close(self) -> None:
        if self.session:
            try:
                self.session.close()
            finally:
                self.session = None
