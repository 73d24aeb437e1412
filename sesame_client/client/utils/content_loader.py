"""
Sesame Content Loader

Turns file paths, URLs and rdflib graphs into request bodies for the
statement upload operations.
"""

import logging
from pathlib import Path
from typing import Optional

from rdflib import Graph

from ..request import formats
from ..request.request_builder import check_input_format
from ..transport.http_transport import HttpTransport, RequestsTransport
from .client_utils import ConfigError, InvalidArgument, TransportError, validate_required_params

logger = logging.getLogger(__name__)


def load_content(file_path: str, transport: Optional[HttpTransport] = None,
                 timeout: Optional[float] = None) -> bytes:
    """
    Read RDF data from a local file or an http(s) URL.

    Args:
        file_path: Local path or URL
        transport: Transport used for URL downloads; a short-lived requests transport otherwise
        timeout: Timeout in seconds for the short-lived transport

    Returns:
        Raw file content

    Raises:
        ConfigError: If no path is given
        InvalidArgument: If the path is empty or the file cannot be read
        TransportError: If the URL cannot be fetched
    """
    if file_path is None:
        raise ConfigError("Please supply a filepath")
    if not file_path:
        raise InvalidArgument("Please supply a filepath")

    file_path = str(file_path)
    if file_path.startswith(('http://', 'https://')):
        return _download(file_path, transport, timeout)

    path = Path(file_path)
    if not path.is_file():
        raise InvalidArgument(f"File not found: {file_path}")
    try:
        content = path.read_bytes()
    except OSError as e:
        raise InvalidArgument(f"Cannot read {file_path}: {e}") from e
    logger.info(f"Loaded {len(content)} bytes from {path}")
    return content


def _download(url: str, transport: Optional[HttpTransport], timeout: Optional[float]) -> bytes:
    owned = transport is None
    if owned:
        transport = RequestsTransport(timeout=timeout)

    logger.info(f"Downloading RDF content from {url}")
    try:
        response = transport.send('GET', url, {'Accept': ', '.join(formats.INPUT_FORMATS)})
    finally:
        if owned:
            transport.close()

    if response.status_code != 200:
        logger.error(f"Download of {url} returned HTTP {response.status_code}")
        raise TransportError(f"Failed to download {url}: HTTP {response.status_code}")
    return response.body


def serialize_graph(graph: Graph, input_format: str, encoding: str = 'utf-8') -> bytes:
    """
    Serialize an rdflib graph in one of the Sesame input formats.

    Raises:
        InvalidArgument: If the format is not a supported input format
    """
    check_input_format(input_format)
    validate_required_params(graph=graph)
    return graph.serialize(format=formats.RDFLIB_FORMATS[input_format], encoding=encoding)
