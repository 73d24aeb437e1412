from .mock_transport import MockSesameTransport, MockRepository, RecordedRequest

__all__ = [
    'MockSesameTransport',
    'MockRepository',
    'RecordedRequest',
]
