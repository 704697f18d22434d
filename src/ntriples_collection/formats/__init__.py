"""
RDF Format Parsers and Serializers.

Supports:
- N-Triples (.nt)
"""

from ntriples_collection.formats.ntriples import (
    NTriplesParser,
    NTriplesSerializer,
    ParsedDocument,
    ParseError,
    parse_ntriples,
    parse_ntriples_as_document,
    serialize_ntriples,
)

__all__ = [
    "NTriplesParser",
    "NTriplesSerializer",
    "ParsedDocument",
    "ParseError",
    "parse_ntriples",
    "parse_ntriples_as_document",
    "serialize_ntriples",
]
