"""Sesame Result Writers

Serialize ResultSets into the SPARQL result wire formats.
"""

import json
from typing import Any, Dict

from lxml import etree

from .result_decoder import SPARQL_RESULTS_NS, XML_LANG
from .result_set import BindingValue, ResultSet


def _qname(local: str) -> str:
    return f"{{{SPARQL_RESULTS_NS}}}{local}"


def write_sparql_xml(result_set: ResultSet) -> bytes:
    """Serialize a ResultSet as application/sparql-results+xml."""
    root = etree.Element(_qname('sparql'), nsmap={None: SPARQL_RESULTS_NS})
    head = etree.SubElement(root, _qname('head'))
    for variable in result_set.variables:
        etree.SubElement(head, _qname('variable'), name=variable)

    results = etree.SubElement(root, _qname('results'))
    for row in result_set:
        result = etree.SubElement(results, _qname('result'))
        for name, value in row.bound().items():
            binding = etree.SubElement(result, _qname('binding'), name=name)
            term = etree.SubElement(binding, _qname(value.kind.value))
            term.text = value.value
            if value.language:
                term.set(XML_LANG, value.language)
            if value.datatype:
                term.set('datatype', value.datatype)

    return etree.tostring(root, xml_declaration=True, encoding='UTF-8', pretty_print=True)


def _json_term(value: BindingValue) -> Dict[str, Any]:
    term = {'type': value.kind.value, 'value': value.value}
    if value.language:
        term['xml:lang'] = value.language
    if value.datatype:
        term['datatype'] = value.datatype
    return term


def write_sparql_json(result_set: ResultSet) -> bytes:
    """Serialize a ResultSet as application/sparql-results+json."""
    document = {
        'head': {'vars': list(result_set.variables)},
        'results': {
            'bindings': [
                {name: _json_term(value) for name, value in row.bound().items()}
                for row in result_set
            ]
        },
    }
    return json.dumps(document).encode('utf-8')
