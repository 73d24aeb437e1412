from .result_set import BindingKind, BindingValue, Row, ResultSet
from .result_decoder import (
    ResultDecoder,
    SparqlXmlResultDecoder,
    SparqlJsonResultDecoder,
    DEFAULT_DECODERS,
    build_decoder_registry,
)
from .result_writer import write_sparql_xml, write_sparql_json

__all__ = [
    'BindingKind',
    'BindingValue',
    'Row',
    'ResultSet',
    'ResultDecoder',
    'SparqlXmlResultDecoder',
    'SparqlJsonResultDecoder',
    'DEFAULT_DECODERS',
    'build_decoder_registry',
    'write_sparql_xml',
    'write_sparql_json',
]
