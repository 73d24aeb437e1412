"""Tests for the ResultSet, Row and BindingValue models."""

import os
import sys

import pytest
from pydantic import ValidationError
from rdflib import BNode, Literal, URIRef
from rdflib.namespace import XSD

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from sesame_client.client.response.result_set import BindingKind, BindingValue, ResultSet, Row


@pytest.fixture
def result_set():
    return ResultSet(
        ['s', 'o'],
        [
            {'s': BindingValue.uri('http://example.org/a'), 'o': BindingValue.literal('one')},
            {'s': BindingValue.uri('http://example.org/b')},
        ]
    )


class TestBindingValue:

    def test_kinds(self):
        assert BindingValue.uri('http://example.org/a').is_uri
        assert BindingValue.literal('x').is_literal
        assert BindingValue.bnode('b1').is_bnode

    def test_literal_cannot_have_language_and_datatype(self):
        with pytest.raises(ValidationError):
            BindingValue.literal('x', language='en', datatype=str(XSD.string))

    def test_uri_cannot_have_language(self):
        with pytest.raises(ValidationError):
            BindingValue(kind=BindingKind.URI, value='http://example.org/a', language='en')

    def test_frozen(self):
        value = BindingValue.literal('x')
        with pytest.raises(ValidationError):
            value.value = 'y'

    def test_str(self):
        assert str(BindingValue.uri('http://example.org/a')) == '<http://example.org/a>'
        assert str(BindingValue.bnode('b1')) == '_:b1'
        assert str(BindingValue.literal('chat', language='fr')) == '"chat"@fr'
        assert str(BindingValue.literal('1', datatype=str(XSD.integer))) == \
            '"1"^^<http://www.w3.org/2001/XMLSchema#integer>'

    def test_to_rdflib(self):
        assert BindingValue.uri('http://example.org/a').to_rdflib() == URIRef('http://example.org/a')
        assert BindingValue.bnode('b1').to_rdflib() == BNode('b1')
        assert BindingValue.literal('chat', language='fr').to_rdflib() == Literal('chat', lang='fr')
        assert BindingValue.literal('1', datatype=str(XSD.integer)).to_rdflib() == Literal(1)

    def test_from_rdflib(self):
        assert BindingValue.from_rdflib(URIRef('http://example.org/a')) == BindingValue.uri('http://example.org/a')
        assert BindingValue.from_rdflib(Literal('chat', lang='fr')) == BindingValue.literal('chat', language='fr')
        assert BindingValue.from_rdflib(Literal(5)) == BindingValue.literal('5', datatype=str(XSD.integer))
        assert BindingValue.from_rdflib(BNode('b1')).is_bnode


class TestRow:

    def test_unbound_variable_is_none(self, result_set):
        row = result_set[1]
        assert row['o'] is None
        assert not row.is_bound('o')
        assert row.bound() == {'s': BindingValue.uri('http://example.org/b')}

    def test_undeclared_variable_raises(self, result_set):
        with pytest.raises(KeyError):
            result_set[0]['missing']

    def test_iterates_all_variables(self, result_set):
        assert list(result_set[1]) == ['s', 'o']
        assert len(result_set[1]) == 2

    def test_rows_compare_by_content(self):
        values = {'x': BindingValue.literal('1')}
        assert Row(('x',), values) == Row(('x',), dict(values))
        assert hash(Row(('x',), values)) == hash(Row(('x',), dict(values)))


class TestResultSet:

    def test_sequence_access(self, result_set):
        assert len(result_set) == 2
        assert result_set[0]['o'].value == 'one'
        assert result_set[-1]['s'].value == 'http://example.org/b'
        assert [row['s'].value for row in result_set] == [row['s'].value for row in result_set]

    def test_column(self, result_set):
        assert result_set.column('o') == [BindingValue.literal('one'), None]
        with pytest.raises(KeyError):
            result_set.column('missing')

    def test_variables_deduplicated(self):
        assert ResultSet(['a', 'b', 'a']).variables == ('a', 'b')

    def test_undeclared_binding_rejected(self):
        with pytest.raises(ValueError):
            ResultSet(['a'], [{'b': BindingValue.literal('x')}])

    def test_immutable(self, result_set):
        with pytest.raises((AttributeError, TypeError)):
            result_set.rows.append(result_set[0])
        with pytest.raises(TypeError):
            result_set[0] = result_set[1]

    def test_equality(self, result_set):
        copy = ResultSet(result_set.variables, result_set.rows)
        assert copy == result_set
        assert ResultSet(['s']) != result_set
