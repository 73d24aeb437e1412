"""Sample Result Documents for Testing

SPARQL result documents (XML and JSON) and RDF payloads used by the decoder
and client tests.
"""

XSD_INTEGER = 'http://www.w3.org/2001/XMLSchema#integer'


def sparql_xml(head: str, results: str) -> bytes:
    """Wrap head and results fragments in a SPARQL XML results document."""
    return (
        '<?xml version="1.0"?>\n'
        '<sparql xmlns="http://www.w3.org/2005/sparql-results#">\n'
        f'  <head>{head}</head>\n'
        f'  <results>{results}</results>\n'
        '</sparql>\n'
    ).encode('utf-8')


PEOPLE_RESULT_XML = sparql_xml(
    '<variable name="s"/><variable name="name"/><variable name="age"/>',
    '''
    <result>
      <binding name="s"><uri>http://example.org/alice</uri></binding>
      <binding name="name"><literal xml:lang="en">Alice</literal></binding>
      <binding name="age"><literal datatype="http://www.w3.org/2001/XMLSchema#integer">42</literal></binding>
    </result>
    <result>
      <binding name="s"><bnode>b0</bnode></binding>
      <binding name="name"><literal>Bob</literal></binding>
    </result>
    '''
)

EMPTY_RESULT_XML = sparql_xml('<variable name="x"/>', '')

DUPLICATE_VARIABLES_XML = sparql_xml(
    '<variable name="x"/><variable name="y"/><variable name="x"/>',
    '<result><binding name="x"><literal>1</literal></binding></result>'
)

BOOLEAN_RESULT_XML = (
    b'<?xml version="1.0"?>\n'
    b'<sparql xmlns="http://www.w3.org/2005/sparql-results#">'
    b'<head/><boolean>true</boolean></sparql>'
)

# Second row is malformed in each document
UNDECLARED_BINDING_XML = sparql_xml(
    '<variable name="x"/>',
    '<result><binding name="x"><literal>ok</literal></binding></result>'
    '<result><binding name="y"><literal>bad</literal></binding></result>'
)

LANG_AND_DATATYPE_XML = sparql_xml(
    '<variable name="x"/>',
    '<result><binding name="x"><literal>ok</literal></binding></result>'
    '<result><binding name="x">'
    '<literal xml:lang="en" datatype="http://www.w3.org/2001/XMLSchema#string">bad</literal>'
    '</binding></result>'
)

EMPTY_URI_XML = sparql_xml(
    '<variable name="x"/>',
    '<result><binding name="x"><literal>ok</literal></binding></result>'
    '<result><binding name="x"><uri></uri></binding></result>'
)

UNKNOWN_VALUE_ELEMENT_XML = sparql_xml(
    '<variable name="x"/>',
    '<result><binding name="x"><literal>ok</literal></binding></result>'
    '<result><binding name="x"><triple/></binding></result>'
)

TWO_VALUES_XML = sparql_xml(
    '<variable name="x"/>',
    '<result><binding name="x"><literal>ok</literal></binding></result>'
    '<result><binding name="x"><uri>http://example.org/a</uri><literal>b</literal></binding></result>'
)

DOUBLE_BINDING_XML = sparql_xml(
    '<variable name="x"/>',
    '<result><binding name="x"><literal>ok</literal></binding></result>'
    '<result><binding name="x"><literal>a</literal></binding>'
    '<binding name="x"><literal>b</literal></binding></result>'
)

TRUNCATED_XML = b'<?xml version="1.0"?><sparql xmlns="http://www.w3.org/2005/sparql-results#"><head>'

NOT_SPARQL_XML = b'<?xml version="1.0"?><html><body>Server error</body></html>'

PEOPLE_RESULT_JSON = b'''{
  "head": {"vars": ["s", "name", "age"]},
  "results": {"bindings": [
    {"s": {"type": "uri", "value": "http://example.org/alice"},
     "name": {"type": "literal", "value": "Alice", "xml:lang": "en"},
     "age": {"type": "typed-literal", "value": "42",
             "datatype": "http://www.w3.org/2001/XMLSchema#integer"}},
    {"s": {"type": "bnode", "value": "b0"},
     "name": {"type": "literal", "value": "Bob"}}
  ]}
}'''

BOOLEAN_RESULT_JSON = b'{"head": {}, "boolean": true}'

PEOPLE_TURTLE = '''@prefix ex: <http://example.org/> .
@prefix foaf: <http://xmlns.com/foaf/0.1/> .

ex:alice foaf:name "Alice"@en ;
    foaf:age 42 .
ex:bob foaf:name "Bob" .
'''

PEOPLE_RDFXML = '''<?xml version="1.0" encoding="UTF-8"?>
<rdf:RDF xmlns:rdf="http://www.w3.org/1999/02/22-rdf-syntax-ns#"
         xmlns:foaf="http://xmlns.com/foaf/0.1/">
  <rdf:Description rdf:about="http://example.org/carol">
    <foaf:name>Carol</foaf:name>
  </rdf:Description>
</rdf:RDF>
'''

PEOPLE_NTRIPLES = (
    '<http://example.org/dave> <http://xmlns.com/foaf/0.1/name> "Dave" .\n'
    '<http://example.org/erin> <http://xmlns.com/foaf/0.1/name> "Erin" .\n'
)
