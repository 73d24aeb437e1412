"""Sesame Result Decoders

Decoders turning SPARQL result documents into ResultSets. Each decoder
handles one content type; the client picks one by the negotiated result
format. Documents are decoded eagerly and rejected as a whole when any part
is malformed.
"""

import json
import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, Iterable, List, Optional

from lxml import etree
from pydantic import ValidationError

from ..request import formats
from ..utils.client_utils import DecodeError
from .result_set import BindingKind, BindingValue, ResultSet

logger = logging.getLogger(__name__)

SPARQL_RESULTS_NS = 'http://www.w3.org/2005/sparql-results#'
XML_LANG = '{http://www.w3.org/XML/1998/namespace}lang'


class ResultDecoder(ABC):
    """Decodes one SPARQL result wire format into a ResultSet."""

    content_type: str = ''

    @abstractmethod
    def decode(self, body: bytes) -> ResultSet:
        """
        Decode a complete result document.

        Args:
            body: Raw response body

        Returns:
            ResultSet with every row decoded

        Raises:
            DecodeError: If the document is malformed
        """
        pass


def _make_value(kind: BindingKind, value: str, language: Optional[str], datatype: Optional[str],
                row_index: int, fragment: str) -> BindingValue:
    if kind is not BindingKind.LITERAL and not value:
        raise DecodeError(f"Empty {kind.value} value", row_index=row_index, fragment=fragment)
    try:
        return BindingValue(kind=kind, value=value, language=language, datatype=datatype)
    except ValidationError as e:
        raise DecodeError(f"Malformed {kind.value} binding: {e.errors()[0]['msg']}",
                          row_index=row_index, fragment=fragment) from e


class SparqlXmlResultDecoder(ResultDecoder):
    """Decoder for application/sparql-results+xml."""

    content_type = formats.SPARQL_XML

    def _parser(self) -> etree.XMLParser:
        return etree.XMLParser(resolve_entities=False, no_network=True, remove_comments=True)

    @staticmethod
    def _name(element) -> Optional[str]:
        """Local name of a SPARQL results element, None for anything else."""
        if not isinstance(element.tag, str):
            return None
        qname = etree.QName(element)
        if qname.namespace not in (SPARQL_RESULTS_NS, None):
            return None
        return qname.localname

    def _children(self, element, name: str) -> List:
        return [child for child in element if self._name(child) == name]

    @staticmethod
    def _fragment(element) -> str:
        return etree.tostring(element, encoding='unicode', with_tail=False)

    def decode(self, body: bytes) -> ResultSet:
        if isinstance(body, str):
            body = body.encode('utf-8')
        try:
            root = etree.fromstring(body, parser=self._parser())
        except (etree.XMLSyntaxError, ValueError) as e:
            raise DecodeError(f"Unparsable result document: {e}",
                              fragment=body[:200].decode('utf-8', errors='replace')) from e

        if self._name(root) != 'sparql':
            raise DecodeError("Document root is not a SPARQL results element", fragment=self._fragment(root))

        heads = self._children(root, 'head')
        if len(heads) != 1:
            raise DecodeError("Result document must contain exactly one head element")
        variables = self._variables(heads[0])

        if self._children(root, 'boolean'):
            raise DecodeError("Boolean results are not supported, expected a tabular result")

        results = self._children(root, 'results')
        if len(results) != 1:
            raise DecodeError("Result document must contain exactly one results element")

        rows = [
            self._row(index, result, variables)
            for index, result in enumerate(self._children(results[0], 'result'))
        ]
        logger.debug(f"Decoded SPARQL XML result: {len(variables)} variables, {len(rows)} rows")
        return ResultSet(variables, rows)

    def _variables(self, head) -> List[str]:
        variables: List[str] = []
        for variable in self._children(head, 'variable'):
            name = variable.get('name')
            if not name:
                raise DecodeError("Variable declaration without a name", fragment=self._fragment(variable))
            if name not in variables:
                variables.append(name)
        return variables

    def _row(self, index: int, result, variables: List[str]) -> Dict[str, BindingValue]:
        row: Dict[str, BindingValue] = {}
        for binding in self._children(result, 'binding'):
            fragment = self._fragment(binding)
            name = binding.get('name')
            if not name:
                raise DecodeError("Binding without a variable name", row_index=index, fragment=fragment)
            if name not in variables:
                raise DecodeError(f"Binding for undeclared variable '{name}'", row_index=index, fragment=fragment)
            if name in row:
                raise DecodeError(f"Variable '{name}' bound twice", row_index=index, fragment=fragment)
            row[name] = self._value(index, binding, fragment)
        return row

    def _value(self, index: int, binding, fragment: str) -> BindingValue:
        terms = [child for child in binding if isinstance(child.tag, str)]
        if len(terms) != 1:
            raise DecodeError("Binding must hold exactly one value", row_index=index, fragment=fragment)

        term = terms[0]
        tag = self._name(term)
        if tag == 'uri':
            return _make_value(BindingKind.URI, (term.text or '').strip(), None, None, index, fragment)
        if tag == 'bnode':
            return _make_value(BindingKind.BNODE, (term.text or '').strip(), None, None, index, fragment)
        if tag == 'literal':
            return _make_value(BindingKind.LITERAL, term.text or '', term.get(XML_LANG),
                               term.get('datatype'), index, fragment)
        raise DecodeError(f"Unrecognized binding value element '{term.tag}'", row_index=index, fragment=fragment)


class SparqlJsonResultDecoder(ResultDecoder):
    """Decoder for application/sparql-results+json."""

    content_type = formats.SPARQL_JSON

    # 'typed-literal' is emitted by pre-Recommendation serializers
    _KINDS = {
        'uri': BindingKind.URI,
        'literal': BindingKind.LITERAL,
        'typed-literal': BindingKind.LITERAL,
        'bnode': BindingKind.BNODE,
    }

    def decode(self, body: bytes) -> ResultSet:
        try:
            document = json.loads(body)
        except (ValueError, UnicodeDecodeError) as e:
            raise DecodeError(f"Unparsable result document: {e}") from e

        if not isinstance(document, dict) or not isinstance(document.get('head'), dict):
            raise DecodeError("Result document must contain a head object")
        if 'boolean' in document:
            raise DecodeError("Boolean results are not supported, expected a tabular result")

        variables: List[str] = []
        for name in document['head'].get('vars', []):
            if not isinstance(name, str) or not name:
                raise DecodeError("Variable declaration without a name", fragment=json.dumps(name))
            if name not in variables:
                variables.append(name)

        results = document.get('results')
        if not isinstance(results, dict) or not isinstance(results.get('bindings'), list):
            raise DecodeError("Result document must contain a results.bindings list")

        rows = [self._row(index, bindings, variables) for index, bindings in enumerate(results['bindings'])]
        logger.debug(f"Decoded SPARQL JSON result: {len(variables)} variables, {len(rows)} rows")
        return ResultSet(variables, rows)

    def _row(self, index: int, bindings: Any, variables: List[str]) -> Dict[str, BindingValue]:
        if not isinstance(bindings, dict):
            raise DecodeError("Result row must be an object", row_index=index, fragment=json.dumps(bindings))
        row: Dict[str, BindingValue] = {}
        for name, term in bindings.items():
            fragment = json.dumps({name: term})
            if name not in variables:
                raise DecodeError(f"Binding for undeclared variable '{name}'", row_index=index, fragment=fragment)
            if not isinstance(term, dict) or term.get('type') not in self._KINDS \
                    or not isinstance(term.get('value'), str):
                raise DecodeError("Malformed binding value", row_index=index, fragment=fragment)
            row[name] = _make_value(self._KINDS[term['type']], term['value'], term.get('xml:lang'),
                                    term.get('datatype'), index, fragment)
        return row


DEFAULT_DECODERS = (SparqlXmlResultDecoder(),)


def build_decoder_registry(decoders: Iterable[ResultDecoder]) -> Dict[str, ResultDecoder]:
    """Index decoders by content type; later decoders replace earlier ones."""
    return {decoder.content_type: decoder for decoder in decoders}
