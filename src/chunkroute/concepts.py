"""Concept normalization.

Maps lexical variants ("promise", "await") to canonical concept ids
("async-operations"). Unknown terms pass through as literal concepts.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping

__all__ = [
    "CONCEPT_MAPPINGS",
    "clean_term",
    "lookup_concept",
    "normalize_concept",
    "related_variants",
]

# Characters stripped from both ends of a term, e.g. "trysync?" → "trysync".
_EDGE_PUNCTUATION = "?!.,;:'\"`()"

CONCEPT_MAPPINGS: Mapping[str, str] = MappingProxyType(
    {
        "error handling": "error-handling",
        "error management": "error-handling",
        "exception handling": "error-handling",
        "try catch": "error-handling",
        "async": "async-operations",
        "asynchronous": "async-operations",
        "promise": "async-operations",
        "await": "async-operations",
        "react": "react-integration",
        "hook": "react-integration",
        "component": "react-integration",
        "boundary": "react-integration",
        "type": "type-safety",
        "typescript": "type-safety",
        "types": "type-safety",
        "typing": "type-safety",
        "performance": "performance-optimization",
        "speed": "performance-optimization",
        "optimize": "performance-optimization",
        "fast": "performance-optimization",
        "test": "testing-patterns",
        "testing": "testing-patterns",
        "mock": "testing-patterns",
        "jest": "testing-patterns",
        "config": "configuration",
        "configuration": "configuration",
        "setup": "configuration",
        "options": "configuration",
    }
)


def clean_term(term: str) -> str:
    """Lowercase a term and strip whitespace and edge punctuation."""
    cleaned = term.lower().strip()
    while cleaned and (cleaned[0] in _EDGE_PUNCTUATION or cleaned[-1] in _EDGE_PUNCTUATION):
        cleaned = cleaned.strip(_EDGE_PUNCTUATION).strip()
    return cleaned


def lookup_concept(term: str) -> str | None:
    """Return the canonical id for a known variant, else ``None``."""
    return CONCEPT_MAPPINGS.get(clean_term(term))


def normalize_concept(term: str) -> str:
    """Resolve a term to its canonical concept id.

    Total over all strings: unknown terms come back cleaned but otherwise
    unchanged. Idempotent, since no canonical id is itself a variant of a
    different concept.
    """
    cleaned = clean_term(term)
    return CONCEPT_MAPPINGS.get(cleaned, cleaned)


def related_variants(concepts: Iterable[str]) -> list[str]:
    """List the variants (in table order) that map to any of ``concepts``."""
    wanted = set(concepts)
    return [variant for variant, canonical in CONCEPT_MAPPINGS.items() if canonical in wanted]
