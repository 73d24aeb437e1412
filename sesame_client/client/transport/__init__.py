from .http_transport import HttpTransport, RequestsTransport, TransportResponse

__all__ = [
    'HttpTransport',
    'RequestsTransport',
    'TransportResponse',
]
