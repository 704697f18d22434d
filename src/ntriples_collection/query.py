"""
Predicate lookups over a triple collection.

All functions are linear scans in input order over Triple objects or
triple-shaped dicts; the subject is ignored. Values are normalized with
ntriples_collection.literals.

Localized lookups cascade through at most three languages: the requested
one, then up to two alternates. An empty language ("" or None) matches
terms without a language tag.
"""

from datetime import datetime
from typing import Any, Iterable, List, Optional, Sequence
import math

from ntriples_collection.literals import normalize_value, normalize_values
from ntriples_collection.models import SemanticValue, Triple, TripleLike
from ntriples_collection.terms import get_term_kind, split_literal, TermKind

MAX_ALT_LANGS = 2


def _objects_for(triples: Iterable[TripleLike], predicate: str) -> List[str]:
    objects = []
    for item in triples:
        triple = Triple.coerce(item)
        if triple.predicate == predicate:
            objects.append(triple.object)
    return objects


def _first_object_for(triples: Iterable[TripleLike], predicate: str) -> Optional[str]:
    for item in triples:
        triple = Triple.coerce(item)
        if triple.predicate == predicate:
            return triple.object
    return None


def as_string(value: Any) -> Optional[str]:
    """
    String form of a normalized value.

    Booleans become "true"/"false", datetimes ISO-8601 and NaN "NaN".
    """
    if value is None:
        return None
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, float) and math.isnan(value):
        return "NaN"
    return str(value)


# =============================================================================
# Semantic values
# =============================================================================

def as_semantic_value(value: Optional[str]) -> SemanticValue:
    """
    Decode an object term into a SemanticValue.

    Raises:
        InvalidLiteralError: If a quoted term is not literal syntax
    """
    literal_value = normalize_value(value, None)
    if value is None or get_term_kind(value) != TermKind.LITERAL:
        return SemanticValue(value=value, literal_value=literal_value)
    parts = split_literal(value)
    return SemanticValue(
        value=value,
        literal_value=literal_value,
        literal_type=parts.datatype,
        literal_language=parts.language,
    )


def as_semantic_values(values: Iterable[Optional[str]]) -> List[SemanticValue]:
    return [as_semantic_value(v) for v in values]


# =============================================================================
# Predicate lookups
# =============================================================================

def find_object_by_predicate(
    triples: Iterable[TripleLike],
    predicate: str,
    default: Any = None,
) -> Any:
    """
    Find the first object value for a predicate.

    Args:
        triples: Triples to scan (subject is ignored)
        predicate: Predicate IRI
        default: Returned when no triple has the predicate

    Returns:
        The normalized value: str, int, float, bool or datetime

    Example:
        >>> find_object_by_predicate(triples, "http://purl.org/dc/elements/1.1/creator")
        'Amadeus'
    """
    return normalize_value(_first_object_for(triples, predicate), default)


def find_string_by_predicate(
    triples: Iterable[TripleLike],
    predicate: str,
    default: Any = None,
) -> Optional[str]:
    """Like find_object_by_predicate, coerced with as_string."""
    return as_string(find_object_by_predicate(triples, predicate, default))


def find_objects_by_predicate(triples: Iterable[TripleLike], predicate: str) -> List[Any]:
    """
    Find all object values for a predicate, in input order.

    Returns an empty list when nothing matches.
    """
    return normalize_values(_objects_for(triples, predicate))


def find_strings_by_predicate(triples: Iterable[TripleLike], predicate: str) -> List[Optional[str]]:
    return [as_string(v) for v in find_objects_by_predicate(triples, predicate)]


def _same_language(candidate: Optional[str], wanted: Optional[str]) -> bool:
    # None and "" both mean "no language tag"
    return (candidate or "") == (wanted or "")


def _find_by_language(values: Sequence[SemanticValue], language: Optional[str]) -> Optional[SemanticValue]:
    for value in values:
        if _same_language(value.literal_language, language):
            return value
    return None


def find_localized_object_by_predicate(
    triples: Iterable[TripleLike],
    predicate: str,
    language: Optional[str],
    alt_langs: Optional[Sequence[str]] = None,
    default: Any = None,
) -> Any:
    """
    Find the first object value for a predicate in the requested language.

    The search falls back to alt_langs[0] and then alt_langs[1]; further
    alternates are ignored, and so is everything from the first None
    alternate on. Each tier returns its first match in input order.

    Args:
        triples: Triples to scan (subject is ignored)
        predicate: Predicate IRI
        language: Requested language tag; "" matches untagged literals
        alt_langs: Up to two fallback languages; "" matches untagged literals
        default: Returned when no tier matches

    Example:
        >>> find_localized_object_by_predicate(triples, DC_CREATOR, "fr", ["en"])
        'Amadeus'
    """
    objects = _objects_for(triples, predicate)
    if not objects:
        return default

    semantic_values = as_semantic_values(objects)
    tiers = [language]
    for alt_lang in list(alt_langs or [])[:MAX_ALT_LANGS]:
        # A None alternate ends the cascade; use "" to ask for untagged values.
        if alt_lang is None:
            break
        tiers.append(alt_lang)

    found = None
    for tier in tiers:
        found = _find_by_language(semantic_values, tier)
        if found is not None:
            break

    if found is None:
        return default
    return found.literal_value


def find_localized_string_by_predicate(
    triples: Iterable[TripleLike],
    predicate: str,
    language: Optional[str],
    alt_langs: Optional[Sequence[str]] = None,
    default: Any = None,
) -> Optional[str]:
    """Like find_localized_object_by_predicate, coerced with as_string."""
    return as_string(find_localized_object_by_predicate(
        triples, predicate, language, alt_langs, default
    ))
