"""
Value objects shared by the codec and query layers.

Triples keep every term in its raw lexical form. Typed values are
derived on demand (see SemanticValue) and never stored on the triple.
"""

from dataclasses import dataclass, InitVar
from typing import Any, Mapping, Optional, Union


@dataclass(frozen=True, slots=True)
class Triple:
    """
    A single N-Triples statement.

    Attributes:
        subject: IRI (without angle brackets) or blank node label (``_:b0``)
        predicate: IRI without angle brackets
        object: Raw object term: an IRI, a blank node, or a literal such as
            ``"chat"@fr`` or ``"3"^^http://www.w3.org/2001/XMLSchema#integer``

    A ``graph`` keyword is accepted for quad-shaped input but is dropped.
    """
    subject: str
    predicate: str
    object: str
    # Init-only: named graphs are not part of a triple collection.
    graph: InitVar[Optional[str]] = None

    @classmethod
    def coerce(cls, item: Union["Triple", Mapping[str, Any]]) -> "Triple":
        """Accept a Triple or a dict-like triple, ignoring any graph key."""
        if isinstance(item, Triple):
            return item
        return cls(
            subject=item["subject"],
            predicate=item["predicate"],
            object=item["object"],
        )

    def to_dict(self) -> dict:
        return {
            "subject": self.subject,
            "predicate": self.predicate,
            "object": self.object,
        }


@dataclass(frozen=True)
class SemanticValue:
    """
    Decoded view of an object term.

    ``value`` is the raw object string, ``literal_value`` the normalized
    native value. Type and language are None for IRIs, blank nodes and
    plain literals.
    """
    value: Optional[str]
    literal_value: Any = None
    literal_type: Optional[str] = None
    literal_language: Optional[str] = None


TripleLike = Union[Triple, Mapping[str, Any]]
