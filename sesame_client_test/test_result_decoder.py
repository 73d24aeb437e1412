"""Tests for the SPARQL result decoders and writers."""

import os
import sys

import pytest

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from sesame_client.client.response.result_decoder import (
    SparqlJsonResultDecoder,
    SparqlXmlResultDecoder,
    build_decoder_registry,
)
from sesame_client.client.response.result_set import BindingKind, BindingValue, ResultSet
from sesame_client.client.response.result_writer import write_sparql_json, write_sparql_xml
from sesame_client.client.request import formats
from sesame_client.client.utils.client_utils import DecodeError
from sesame_client_test.fixtures import sample_results
from sesame_client_test.utils.test_helpers import column_values


@pytest.fixture
def xml_decoder():
    return SparqlXmlResultDecoder()


@pytest.fixture
def json_decoder():
    return SparqlJsonResultDecoder()


def check_people(result_set):
    assert result_set.variables == ('s', 'name', 'age')
    assert len(result_set) == 2

    alice, bob = result_set
    assert alice['s'] == BindingValue.uri('http://example.org/alice')
    assert alice['name'] == BindingValue.literal('Alice', language='en')
    assert alice['age'] == BindingValue.literal('42', datatype=sample_results.XSD_INTEGER)

    assert bob['s'].kind is BindingKind.BNODE
    assert bob['s'].value == 'b0'
    assert bob['name'] == BindingValue.literal('Bob')
    assert bob['age'] is None
    assert not bob.is_bound('age')


class TestSparqlXmlResultDecoder:

    def test_decode_people(self, xml_decoder):
        check_people(xml_decoder.decode(sample_results.PEOPLE_RESULT_XML))

    def test_empty_results(self, xml_decoder):
        result_set = xml_decoder.decode(sample_results.EMPTY_RESULT_XML)

        assert result_set.variables == ('x',)
        assert len(result_set) == 0
        assert list(result_set) == []

    def test_duplicate_variables_keep_first(self, xml_decoder):
        result_set = xml_decoder.decode(sample_results.DUPLICATE_VARIABLES_XML)
        assert result_set.variables == ('x', 'y')
        assert column_values(result_set, 'y') == [None]

    def test_literal_whitespace_preserved(self, xml_decoder):
        body = sample_results.sparql_xml(
            '<variable name="x"/>',
            '<result><binding name="x"><literal>  padded  </literal></binding></result>'
        )
        assert xml_decoder.decode(body)[0]['x'].value == '  padded  '

    def test_empty_literal(self, xml_decoder):
        body = sample_results.sparql_xml(
            '<variable name="x"/>',
            '<result><binding name="x"><literal/></binding></result>'
        )
        assert xml_decoder.decode(body)[0]['x'] == BindingValue.literal('')

    def test_boolean_document_rejected(self, xml_decoder):
        with pytest.raises(DecodeError):
            xml_decoder.decode(sample_results.BOOLEAN_RESULT_XML)

    @pytest.mark.parametrize('body', [
        sample_results.UNDECLARED_BINDING_XML,
        sample_results.LANG_AND_DATATYPE_XML,
        sample_results.EMPTY_URI_XML,
        sample_results.UNKNOWN_VALUE_ELEMENT_XML,
        sample_results.TWO_VALUES_XML,
        sample_results.DOUBLE_BINDING_XML,
    ])
    def test_malformed_row_reports_index(self, xml_decoder, body):
        with pytest.raises(DecodeError) as exc_info:
            xml_decoder.decode(body)

        assert exc_info.value.row_index == 1
        assert exc_info.value.fragment

    @pytest.mark.parametrize('body', [
        sample_results.TRUNCATED_XML,
        sample_results.NOT_SPARQL_XML,
        b'',
    ])
    def test_unparsable_document(self, xml_decoder, body):
        with pytest.raises(DecodeError):
            xml_decoder.decode(body)

    def test_external_entities_not_resolved(self, xml_decoder, tmp_path):
        secret = tmp_path / 'secret.txt'
        secret.write_text('top secret')
        body = (
            f'<?xml version="1.0"?><!DOCTYPE sparql [<!ENTITY ext SYSTEM "file://{secret}">]>'
            '<sparql xmlns="http://www.w3.org/2005/sparql-results#">'
            '<head><variable name="x"/></head>'
            '<results><result><binding name="x"><literal>&ext;</literal></binding></result></results>'
            '</sparql>'
        ).encode('utf-8')

        result_set = xml_decoder.decode(body)
        assert 'top secret' not in result_set[0]['x'].value

    def test_round_trip_through_writer(self, xml_decoder):
        original = xml_decoder.decode(sample_results.PEOPLE_RESULT_XML)
        assert xml_decoder.decode(write_sparql_xml(original)) == original


class TestSparqlJsonResultDecoder:

    def test_decode_people(self, json_decoder):
        check_people(json_decoder.decode(sample_results.PEOPLE_RESULT_JSON))

    def test_matches_writer_output(self, json_decoder, xml_decoder):
        original = xml_decoder.decode(sample_results.PEOPLE_RESULT_XML)
        assert json_decoder.decode(write_sparql_json(original)) == original

    def test_boolean_document_rejected(self, json_decoder):
        with pytest.raises(DecodeError):
            json_decoder.decode(sample_results.BOOLEAN_RESULT_JSON)

    def test_undeclared_variable(self, json_decoder):
        body = b'{"head": {"vars": ["x"]}, "results": {"bindings": [{"y": {"type": "uri", "value": "u"}}]}}'
        with pytest.raises(DecodeError) as exc_info:
            json_decoder.decode(body)
        assert exc_info.value.row_index == 0

    def test_unknown_term_type(self, json_decoder):
        body = b'{"head": {"vars": ["x"]}, "results": {"bindings": [{"x": {"type": "triple", "value": "u"}}]}}'
        with pytest.raises(DecodeError):
            json_decoder.decode(body)

    def test_invalid_json(self, json_decoder):
        with pytest.raises(DecodeError):
            json_decoder.decode(b'{"head": ')


class TestDecoderRegistry:

    def test_registry_keyed_by_content_type(self):
        registry = build_decoder_registry([SparqlXmlResultDecoder(), SparqlJsonResultDecoder()])
        assert set(registry) == {formats.SPARQL_XML, formats.SPARQL_JSON}

    def test_writer_output_declares_namespace(self):
        document = write_sparql_xml(ResultSet(['x'], [{'x': BindingValue.uri('http://example.org/a')}]))
        assert document.startswith(b"<?xml version='1.0' encoding='UTF-8'?>")
        assert b'xmlns="http://www.w3.org/2005/sparql-results#"' in document
