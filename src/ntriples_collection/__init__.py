"""
ntriples-collection: N-Triples decoding, encoding and typed predicate lookups.

Triples are flat (subject, predicate, object) records of raw lexical terms;
typed values are derived on demand.
"""

__version__ = "0.3.0"

from ntriples_collection.models import Triple, SemanticValue
from ntriples_collection.config import CodecConfig, InvalidLiteralPolicy, ConfigValidationError
from ntriples_collection.terms import (
    InvalidLiteralError,
    TermKind,
    encode_iri,
    encode_literal,
    encode_object,
    escape_string,
    unescape_string,
)
from ntriples_collection.literals import XSDDatatype, normalize_value
from ntriples_collection.formats.ntriples import (
    ParseError,
    ParsedDocument,
    parse_ntriples,
    serialize_ntriples,
)
from ntriples_collection.query import (
    as_semantic_value,
    as_semantic_values,
    find_object_by_predicate,
    find_string_by_predicate,
    find_objects_by_predicate,
    find_strings_by_predicate,
    find_localized_object_by_predicate,
    find_localized_string_by_predicate,
)
from ntriples_collection.files import FileError, WriteResult, read_ntriples_file, write_ntriples_file

__all__ = [
    "Triple",
    "SemanticValue",
    # Configuration
    "CodecConfig",
    "InvalidLiteralPolicy",
    "ConfigValidationError",
    # Terms
    "InvalidLiteralError",
    "TermKind",
    "encode_iri",
    "encode_literal",
    "encode_object",
    "escape_string",
    "unescape_string",
    # Literals
    "XSDDatatype",
    "normalize_value",
    # Document codec
    "ParseError",
    "ParsedDocument",
    "parse_ntriples",
    "serialize_ntriples",
    # Queries
    "as_semantic_value",
    "as_semantic_values",
    "find_object_by_predicate",
    "find_string_by_predicate",
    "find_objects_by_predicate",
    "find_strings_by_predicate",
    "find_localized_object_by_predicate",
    "find_localized_string_by_predicate",
    # Files
    "FileError",
    "WriteResult",
    "read_ntriples_file",
    "write_ntriples_file",
]
