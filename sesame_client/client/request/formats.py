"""
Sesame Wire Formats

MIME types understood by the Sesame HTTP protocol.
"""

# Result formats
SPARQL_XML = 'application/sparql-results+xml'
SPARQL_JSON = 'application/sparql-results+json'
BINARY_TABLE = 'application/x-binary-rdf-results-table'
BOOLEAN = 'text/boolean'

# Input formats
RDFXML = 'application/rdf+xml'
NTRIPLES = 'text/plain'
TURTLE = 'application/x-turtle'
N3 = 'text/rdf+n3'
TRIX = 'application/trix'
TRIG = 'application/x-trig'

INPUT_FORMATS = (RDFXML, NTRIPLES, TURTLE, N3, TRIX, TRIG)

# rdflib serializer plugin names per input format
RDFLIB_FORMATS = {
    RDFXML: 'xml',
    NTRIPLES: 'nt',
    TURTLE: 'turtle',
    N3: 'n3',
    TRIX: 'trix',
    TRIG: 'trig',
}

FORM_URLENCODED = 'application/x-www-form-urlencoded'
TEXT_PLAIN = 'text/plain'

QUERY_LANGUAGES = ('sparql', 'serql')

NULL_CONTEXT = 'null'
