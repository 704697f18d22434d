"""
N-Triples Parser and Serializer.

Line-oriented: each statement sits on its own line.
Only lines containing '<' are treated as statements; everything else
(blank lines, comments) is ignored.

Grammar (per line):
  triple  ::= subject predicate object '.' comment?
  subject ::= IRIREF | BLANK_NODE_LABEL
  object  ::= IRIREF | BLANK_NODE_LABEL | literal
  literal ::= STRING_LITERAL_QUOTE ('^^' IRIREF | LANGTAG)?

A fourth (graph) term is not part of the grammar: quad input must be
converted with Triple.coerce, which drops the graph.

Reference: https://www.w3.org/TR/n-triples/
"""

from typing import Iterable, Iterator, List, Optional, Tuple, Union
from dataclasses import dataclass, field
from io import StringIO
import logging
import re

import polars as pl

from ntriples_collection.config import CodecConfig, DEFAULT_CONFIG, InvalidLiteralPolicy
from ntriples_collection.models import Triple, TripleLike
from ntriples_collection.terms import (
    BNODE_PREFIX,
    InvalidLiteralError,
    encode_iri,
    encode_object,
    encode_subject,
    make_literal,
    unescape_string,
)

logger = logging.getLogger(__name__)

_LINE_BREAK = re.compile(r"\r\n?|\n")
_IRIREF = re.compile(r"<((?:[^\x00-\x20<>{}\\]|\\.)*)>", re.DOTALL)
_BLANK_NODE = re.compile(r"_:(\w(?:[\w\-.]*[\w\-])?)")
_LANGTAG = re.compile(r"@([a-zA-Z]+(?:-[a-zA-Z0-9]+)*)")


class ParseError(ValueError):
    """Raised when a statement line does not match the N-Triples grammar."""

    def __init__(self, message: str, line_number: Optional[int] = None, line: Optional[str] = None):
        self.message = message
        self.line_number = line_number
        self.line = line
        if line_number is not None:
            message = f"Error parsing line {line_number}: {message}\nLine: {line}"
        super().__init__(message)


def is_triple_line(line: str) -> bool:
    """A line is a candidate statement iff it contains an IRI delimiter."""
    return "<" in line


@dataclass
class ParsedDocument:
    """Result of parsing N-Triples."""
    triples: List[Triple] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.triples)

    def __iter__(self) -> Iterator[Triple]:
        return iter(self.triples)

    def to_columnar(self) -> Tuple[List[str], List[str], List[str]]:
        """Extract columnar data for fast insertion."""
        return (
            [t.subject for t in self.triples],
            [t.predicate for t in self.triples],
            [t.object for t in self.triples],
        )

    def to_dataframe(self) -> pl.DataFrame:
        """Triples as a subject/predicate/object DataFrame, in document order."""
        subjects, predicates, objects = self.to_columnar()
        return pl.DataFrame(
            {"subject": subjects, "predicate": predicates, "object": objects},
            schema={"subject": pl.Utf8, "predicate": pl.Utf8, "object": pl.Utf8},
        )

    @classmethod
    def from_dataframe(cls, df: pl.DataFrame) -> "ParsedDocument":
        """Build a document from a DataFrame with subject/predicate/object columns."""
        missing = {"subject", "predicate", "object"} - set(df.columns)
        if missing:
            raise ValueError(f"DataFrame is missing columns: {sorted(missing)}")
        return cls(triples=[
            Triple(subject=row["subject"], predicate=row["predicate"], object=row["object"])
            for row in df.select(["subject", "predicate", "object"]).iter_rows(named=True)
        ])


class NTriplesParser:
    """
    Parser for N-Triples.

    Terms are returned in their stored form: IRIs without brackets,
    literals with their escapes resolved (``"a \\"b\\""`` becomes
    ``"a "b""``) and datatypes without brackets.
    """

    def __init__(self, config: Optional[CodecConfig] = None):
        self.config = config or DEFAULT_CONFIG
        self.line_number = 0

    def parse(self, source: Union[str, StringIO]) -> ParsedDocument:
        """
        Parse N-Triples content.

        Args:
            source: N-Triples content as string or StringIO

        Returns:
            ParsedDocument with triples in input order

        Raises:
            ParseError: On the first line that is not a valid statement
        """
        if isinstance(source, StringIO):
            text = source.read()
        else:
            text = source

        triples = list(self.parse_lines(_LINE_BREAK.split(text)))
        logger.debug(f"Parsed {len(triples)} triples")
        return ParsedDocument(triples=triples)

    def parse_lines(self, lines: Iterable[str]) -> Iterator[Triple]:
        """
        Parse lines of N-Triples.

        Yields:
            Triple objects
        """
        for i, line in enumerate(lines):
            self.line_number = i + 1
            if not is_triple_line(line):
                continue
            try:
                triple = self.parse_line(line)
            except ParseError as e:
                raise ParseError(e.message, self.line_number, line) from e
            if triple is not None:
                yield triple

    def parse_line(self, line: str) -> Optional[Triple]:
        """Parse a single statement; None for a comment-only line."""
        pos = self._skip_ws(line, 0)
        if pos >= len(line) or line[pos] == "#":
            return None

        subject, pos = self._parse_subject(line, pos)
        pos = self._skip_ws(line, pos)

        predicate, pos = self._parse_iri(line, pos)
        pos = self._skip_ws(line, pos)

        obj, pos = self._parse_object(line, pos)
        pos = self._skip_ws(line, pos)

        if pos >= len(line) or line[pos] != ".":
            raise ParseError("Expected '.' after object")
        pos = self._skip_ws(line, pos + 1)

        if pos < len(line) and line[pos] != "#":
            raise ParseError(f"Unexpected content after '.': {line[pos:]!r}")

        return Triple(subject=subject, predicate=predicate, object=obj)

    def _skip_ws(self, line: str, pos: int) -> int:
        while pos < len(line) and line[pos] in " \t":
            pos += 1
        return pos

    def _parse_subject(self, line: str, pos: int) -> Tuple[str, int]:
        if line.startswith(BNODE_PREFIX, pos):
            return self._parse_blank_node(line, pos)
        if pos < len(line) and line[pos] == "<":
            return self._parse_iri(line, pos)
        raise ParseError("Expected IRI or blank node as subject")

    def _parse_iri(self, line: str, pos: int) -> Tuple[str, int]:
        if pos >= len(line) or line[pos] != "<":
            raise ParseError("Expected IRI")
        match = _IRIREF.match(line, pos)
        if match is None:
            raise ParseError("Unterminated or malformed IRI")
        try:
            iri = unescape_string(match.group(1))
        except ValueError as e:
            raise ParseError(str(e)) from e
        return iri, match.end()

    def _parse_blank_node(self, line: str, pos: int) -> Tuple[str, int]:
        match = _BLANK_NODE.match(line, pos)
        if match is None:
            raise ParseError("Malformed blank node label")
        return match.group(0), match.end()

    def _parse_object(self, line: str, pos: int) -> Tuple[str, int]:
        if pos >= len(line):
            raise ParseError("Missing object")

        ch = line[pos]
        if ch == "<":
            return self._parse_iri(line, pos)
        if ch == '"':
            return self._parse_literal(line, pos)
        if line.startswith(BNODE_PREFIX, pos):
            return self._parse_blank_node(line, pos)

        raise ParseError(f"Unexpected object term starting with {ch!r}")

    def _parse_literal(self, line: str, pos: int) -> Tuple[str, int]:
        """Parse a quoted literal with optional ^^datatype or @lang."""
        end = pos + 1
        while end < len(line):
            ch = line[end]
            if ch == "\\":
                end += 2
                continue
            if ch == '"':
                break
            end += 1
        else:
            raise ParseError("Unterminated literal")

        try:
            value = unescape_string(line[pos + 1:end])
        except ValueError as e:
            raise ParseError(str(e)) from e
        pos = end + 1

        if line.startswith("^^", pos):
            datatype, pos = self._parse_iri(line, pos + 2)
            return make_literal(value, datatype=datatype), pos

        if pos < len(line) and line[pos] == "@":
            match = _LANGTAG.match(line, pos)
            if match is None:
                raise ParseError("Malformed language tag")
            language = match.group(1)
            if self.config.lowercase_language_tags:
                language = language.lower()
            return make_literal(value, language=language), match.end()

        return make_literal(value), pos


class NTriplesSerializer:
    """
    Serializer for N-Triples.

    Emits one ``<s> <p> o.`` statement per line. Graph information on the
    input is discarded.
    """

    def __init__(self, config: Optional[CodecConfig] = None):
        self.config = config or DEFAULT_CONFIG

    def serialize(self, triples: Iterable[TripleLike]) -> str:
        """
        Serialize triples to N-Triples.

        Args:
            triples: Triple objects or dicts with subject/predicate/object

        Returns:
            N-Triples text, statements joined by newlines (no trailing newline)

        Raises:
            InvalidLiteralError: If an object is not valid term syntax and the
                policy is ABORT
        """
        return "\n".join(self.serialize_lines(triples))

    def serialize_lines(self, triples: Iterable[TripleLike]) -> List[str]:
        lines = []
        for item in triples:
            triple = Triple.coerce(item)
            try:
                lines.append(self._format_triple(triple))
            except InvalidLiteralError:
                if self.config.invalid_literal_policy is InvalidLiteralPolicy.ABORT:
                    raise
                logger.warning(f"Skipping triple with invalid object: {triple.object!r}")
        logger.debug(f"Serialized {len(lines)} triples")
        return lines

    def _format_triple(self, triple: Triple) -> str:
        subject = encode_subject(triple.subject)
        predicate = encode_iri(triple.predicate)
        obj = encode_object(triple.object)
        return f"{subject} {predicate} {obj}."


def parse_ntriples(source: Union[str, StringIO], config: Optional[CodecConfig] = None) -> List[Triple]:
    """
    Decode N-Triples text into triples.

    Args:
        source: N-Triples content
        config: Codec options (defaults to DEFAULT_CONFIG)

    Returns:
        Triples in input order

    Raises:
        ParseError: If any candidate line is malformed
    """
    return parse_ntriples_as_document(source, config).triples


def parse_ntriples_as_document(
    source: Union[str, StringIO],
    config: Optional[CodecConfig] = None,
) -> ParsedDocument:
    """Decode N-Triples text into a ParsedDocument."""
    parser = NTriplesParser(config)
    return parser.parse(source)


def serialize_ntriples(triples: Iterable[TripleLike], config: Optional[CodecConfig] = None) -> str:
    """
    Encode triples as N-Triples text.

    Args:
        triples: Triple objects or dicts; any graph key is ignored
        config: Codec options (defaults to DEFAULT_CONFIG)

    Returns:
        N-Triples text without a trailing newline
    """
    serializer = NTriplesSerializer(config)
    return serializer.serialize(triples)
