"""
Literal normalization: XML Schema datatype -> native Python value.

Datatypes are matched case-sensitively against the full XSD namespace IRI.
Malformed lexical forms never raise here: numbers fall back to NaN and
dates to None.
"""

from datetime import datetime
from enum import Enum
from typing import Any, Optional
import logging
import math
import re

from ntriples_collection.terms import XSD_NS, TermKind, get_term_kind, split_literal

logger = logging.getLogger(__name__)


class XSDDatatype(Enum):
    """Recognized XML Schema datatypes, valued by their full IRI."""
    STRING = f"{XSD_NS}string"
    ANY_URI = f"{XSD_NS}anyURI"
    TIME = f"{XSD_NS}time"
    INTEGER = f"{XSD_NS}integer"
    NON_POSITIVE_INTEGER = f"{XSD_NS}nonPositiveInteger"
    NEGATIVE_INTEGER = f"{XSD_NS}negativeInteger"
    NON_NEGATIVE_INTEGER = f"{XSD_NS}nonNegativeInteger"
    POSITIVE_INTEGER = f"{XSD_NS}positiveInteger"
    FLOAT = f"{XSD_NS}float"
    BOOLEAN = f"{XSD_NS}boolean"
    DATE_TIME = f"{XSD_NS}dateTime"
    DATE = f"{XSD_NS}date"

    @classmethod
    def from_iri(cls, iri: Optional[str]) -> Optional["XSDDatatype"]:
        """Classify a datatype IRI; None for plain literals and unknown types."""
        if iri is None:
            return None
        try:
            return cls(iri)
        except ValueError:
            return None


class ValueKind(Enum):
    """Native value family a datatype maps to."""
    STRING = "string"
    INTEGER = "integer"
    FLOAT = "float"
    BOOLEAN = "boolean"
    DATETIME = "datetime"
    RAW = "raw"


DATATYPE_KINDS = {
    XSDDatatype.STRING: ValueKind.STRING,
    XSDDatatype.ANY_URI: ValueKind.STRING,
    XSDDatatype.TIME: ValueKind.STRING,
    XSDDatatype.INTEGER: ValueKind.INTEGER,
    XSDDatatype.NON_POSITIVE_INTEGER: ValueKind.INTEGER,
    XSDDatatype.NEGATIVE_INTEGER: ValueKind.INTEGER,
    XSDDatatype.NON_NEGATIVE_INTEGER: ValueKind.INTEGER,
    XSDDatatype.POSITIVE_INTEGER: ValueKind.INTEGER,
    XSDDatatype.FLOAT: ValueKind.FLOAT,
    XSDDatatype.BOOLEAN: ValueKind.BOOLEAN,
    XSDDatatype.DATE_TIME: ValueKind.DATETIME,
    XSDDatatype.DATE: ValueKind.DATETIME,
}


def value_kind(datatype_iri: Optional[str]) -> ValueKind:
    """
    Map a datatype IRI to the native value family.

    Plain literals, language-tagged literals and any datatype outside the
    table map to RAW: the lexical value is returned unchanged.
    """
    datatype = XSDDatatype.from_iri(datatype_iri)
    if datatype is None:
        return ValueKind.RAW
    return DATATYPE_KINDS[datatype]


# =============================================================================
# Lexical parsers
# =============================================================================

_INTEGER_PREFIX = re.compile(r"^\s*([+-]?\d+)")
_FLOAT_PREFIX = re.compile(
    r"^\s*([+-]?(?:\d+\.?\d*(?:[eE][+-]?\d+)?|\.\d+(?:[eE][+-]?\d+)?))"
)
_FLOAT_SPECIALS = {"INF": math.inf, "+INF": math.inf, "-INF": -math.inf}


def parse_integer(lexical: str) -> Any:
    """Parse the leading integer of a lexical form; NaN if there is none."""
    match = _INTEGER_PREFIX.match(lexical)
    if match is None:
        logger.debug(f"Not an integer lexical form: {lexical!r}")
        return math.nan
    return int(match.group(1))


def parse_float(lexical: str) -> float:
    """Parse the leading decimal number of a lexical form; NaN if there is none."""
    special = _FLOAT_SPECIALS.get(lexical.strip())
    if special is not None:
        return special
    match = _FLOAT_PREFIX.match(lexical)
    if match is None:
        logger.debug(f"Not a float lexical form: {lexical!r}")
        return math.nan
    return float(match.group(1))


def parse_boolean(lexical: str) -> bool:
    return lexical.strip().lower() in ("true", "1")


def parse_datetime(lexical: str) -> Optional[datetime]:
    """Strict ISO-8601 parse; None when the lexical form is not ISO-8601."""
    try:
        return datetime.fromisoformat(lexical)
    except ValueError:
        logger.debug(f"Not an ISO-8601 date/time: {lexical!r}")
        return None


_PARSERS = {
    ValueKind.STRING: lambda lexical: lexical,
    ValueKind.INTEGER: parse_integer,
    ValueKind.FLOAT: parse_float,
    ValueKind.BOOLEAN: parse_boolean,
    ValueKind.DATETIME: parse_datetime,
    ValueKind.RAW: lambda lexical: lexical,
}


# =============================================================================
# Normalization
# =============================================================================

def normalize_literal(lexical: str, datatype_iri: Optional[str]) -> Any:
    """Convert a (lexical value, datatype IRI) pair to a native value."""
    return _PARSERS[value_kind(datatype_iri)](lexical)


def normalize_value(term: Optional[str], default: Any = None) -> Any:
    """
    Normalize a raw object term.

    Args:
        term: Stored object term, or None
        default: Returned when term is None

    Returns:
        Native value for literals, the term itself for IRIs and blank nodes

    Raises:
        InvalidLiteralError: If a quoted term is not literal syntax
    """
    if term is None:
        return default
    if get_term_kind(term) != TermKind.LITERAL:
        return term
    parts = split_literal(term)
    return normalize_literal(parts.value, parts.datatype)


def normalize_values(terms, default: Any = None) -> list:
    return [normalize_value(term, default) for term in terms]
