from . import formats
from .request_builder import (
    Operation,
    OperationDescriptor,
    RequestBuilder,
    check_input_format,
    check_query_lang,
    encode_context,
)

__all__ = [
    'formats',
    'Operation',
    'OperationDescriptor',
    'RequestBuilder',
    'check_input_format',
    'check_query_lang',
    'encode_context',
]
