"""
Term classification and encoding for N-Triples.

Handles the three object-position term kinds (IRI, blank node, literal),
literal decomposition into (lexical value, datatype, language), and the
restricted escape set of the N-Triples grammar.

Escape rules (bidirectional):
- backslash, double quote, tab, LF, CR, backspace, form feed use their
  two-character escapes
- any other code point below 0x1A and any unpaired surrogate use \\uXXXX
- supplementary-plane code points (or a UTF-16 surrogate pair) use
  \\UXXXXXXXX
"""

from enum import IntEnum
from typing import NamedTuple, Optional
import re


XSD_NS = "http://www.w3.org/2001/XMLSchema#"

BNODE_PREFIX = "_:"


class InvalidLiteralError(ValueError):
    """Raised when an object string cannot be encoded as an N-Triples term."""

    def __init__(self, obj: str, message: Optional[str] = None):
        super().__init__(message or f"Invalid literal: {obj!r}")
        self.object = obj


# =============================================================================
# Term Kinds
# =============================================================================

class TermKind(IntEnum):
    """Kind of an object-position term."""
    IRI = 0
    LITERAL = 1
    BNODE = 2


def get_term_kind(term: str) -> TermKind:
    """Classify a raw object term by its first characters."""
    if term.startswith('"'):
        return TermKind.LITERAL
    if term.startswith(BNODE_PREFIX):
        return TermKind.BNODE
    return TermKind.IRI


def is_literal(term: Optional[str]) -> bool:
    return bool(term) and term.startswith('"')


def is_blank_node(term: Optional[str]) -> bool:
    return bool(term) and term.startswith(BNODE_PREFIX)


def is_iri(term: Optional[str]) -> bool:
    return bool(term) and not is_literal(term) and not is_blank_node(term)


# =============================================================================
# Escaping
# =============================================================================

ESCAPES = {
    "\\": "\\\\",
    '"': '\\"',
    "\t": "\\t",
    "\n": "\\n",
    "\r": "\\r",
    "\b": "\\b",
    "\f": "\\f",
}

UNESCAPES = {
    "\\": "\\",
    '"': '"',
    "'": "'",
    "t": "\t",
    "n": "\n",
    "r": "\r",
    "b": "\b",
    "f": "\f",
}

# Characters that need escaping; supplementary code points are included
# so they come out as \U escapes.
_NEEDS_ESCAPE = re.compile(
    r'["\\\t\n\r\b\f\x00-\x19\ud800-\udfff\U00010000-\U0010ffff]'
)

_ESCAPE_SEQUENCE = re.compile(
    r'\\(?:u([0-9A-Fa-f]{4})|U([0-9A-Fa-f]{8})|(.))', re.DOTALL
)


def _escape_char(ch: str, following: str = "") -> str:
    if ch in ESCAPES:
        return ESCAPES[ch]
    cp = ord(ch)
    if 0xD800 <= cp <= 0xDBFF and following and 0xDC00 <= ord(following) <= 0xDFFF:
        # UTF-16 pair carried as two code points
        cp = (cp - 0xD800) * 0x400 + ord(following) + 0x2400
        return f"\\U{cp:08X}"
    if cp > 0xFFFF:
        return f"\\U{cp:08X}"
    return f"\\u{cp:04X}"


def escape_string(value: str) -> str:
    """
    Escape a string for use inside an IRI or a literal body.

    Args:
        value: Unescaped text

    Returns:
        Text safe to place between ``<>`` or ``""`` in N-Triples
    """
    if not _NEEDS_ESCAPE.search(value):
        return value

    out = []
    i = 0
    n = len(value)
    while i < n:
        ch = value[i]
        cp = ord(ch)
        if ch in ESCAPES or cp <= 0x19 or cp > 0xFFFF or 0xDC00 <= cp <= 0xDFFF:
            out.append(_escape_char(ch))
        elif 0xD800 <= cp <= 0xDBFF:
            following = value[i + 1] if i + 1 < n else ""
            if following and 0xDC00 <= ord(following) <= 0xDFFF:
                out.append(_escape_char(ch, following))
                i += 1
            else:
                out.append(_escape_char(ch))
        else:
            out.append(ch)
        i += 1
    return "".join(out)


def _replace_escape(match: re.Match) -> str:
    short_hex, long_hex, char = match.groups()
    if short_hex is not None:
        return chr(int(short_hex, 16))
    if long_hex is not None:
        cp = int(long_hex, 16)
        if cp > 0x10FFFF:
            raise ValueError(f"Invalid code point escape: \\U{long_hex}")
        return chr(cp)
    if char in UNESCAPES:
        return UNESCAPES[char]
    raise ValueError(f"Invalid escape sequence: \\{char}")


def unescape_string(value: str) -> str:
    """
    Invert escape_string.

    Raises:
        ValueError: On an unknown or truncated escape sequence
    """
    if "\\" not in value:
        return value
    return _ESCAPE_SEQUENCE.sub(_replace_escape, value)


# =============================================================================
# Literal Decomposition
# =============================================================================

class LiteralParts(NamedTuple):
    """A literal split into its lexical value and optional suffix."""
    value: str
    datatype: Optional[str] = None
    language: Optional[str] = None


# Body is greedy so embedded quotes stay in the value.
LITERAL_PATTERN = re.compile(
    r'^"(.*)"(?:\^\^(.+)|@([-a-z0-9]+))?$',
    re.DOTALL | re.IGNORECASE,
)


def split_literal(term: str) -> LiteralParts:
    """
    Split a stored literal into its parts.

    Args:
        term: Literal in stored form, e.g. ``"chat"@fr``

    Raises:
        InvalidLiteralError: If the term is not literal syntax
    """
    match = LITERAL_PATTERN.match(term)
    if match is None:
        raise InvalidLiteralError(term)
    value, datatype, language = match.groups()
    if datatype is not None and datatype.startswith("<") and datatype.endswith(">"):
        datatype = datatype[1:-1]
    return LiteralParts(value=value, datatype=datatype, language=language)


def get_literal_value(term: str) -> str:
    return split_literal(term).value


def get_literal_type(term: str) -> Optional[str]:
    """Datatype IRI of a literal, or None when it carries no ``^^`` suffix."""
    return split_literal(term).datatype


def get_literal_language(term: str) -> Optional[str]:
    """Language tag of a literal, or None when it carries no ``@`` suffix."""
    return split_literal(term).language


def make_literal(value: str, datatype: Optional[str] = None, language: Optional[str] = None) -> str:
    """Build the stored form of a literal from its parts (no escaping)."""
    if language:
        return f'"{value}"@{language}'
    if datatype:
        return f'"{value}"^^{datatype}'
    return f'"{value}"'


# =============================================================================
# Encoding
# =============================================================================

def encode_iri(iri: str) -> str:
    """Wrap an IRI in angle brackets, escaping the restricted set."""
    return f"<{escape_string(iri)}>"


def encode_subject(term: str) -> str:
    """Encode a subject; blank nodes pass through."""
    if is_blank_node(term):
        return term
    return encode_iri(term)


def encode_literal(value: str, datatype: Optional[str] = None, language: Optional[str] = None) -> str:
    """
    Encode a literal as N-Triples text.

    A language tag wins over a datatype.
    """
    body = f'"{escape_string(value)}"'
    if language:
        return f"{body}@{language}"
    if datatype:
        return f"{body}^^{encode_iri(datatype)}"
    return body


def encode_object(obj: str) -> str:
    """
    Encode a stored object term.

    IRIs are bracketed, blank nodes pass through, literals are split and
    re-emitted with escaping.

    Raises:
        InvalidLiteralError: If a quoted term is not valid literal syntax
    """
    if not obj.startswith('"'):
        return encode_subject(obj)
    parts = split_literal(obj)
    return encode_literal(parts.value, parts.datatype, parts.language)
