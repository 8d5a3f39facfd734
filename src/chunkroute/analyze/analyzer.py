"""Query classification by ordered regex rules with a keyword fallback."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from chunkroute.analyze.patterns import CATEGORY_RULES
from chunkroute.analyze.questions import QUESTION_TEMPLATES, generate_questions_for_chunk
from chunkroute.concepts import CONCEPT_MAPPINGS, clean_term, lookup_concept, normalize_concept
from chunkroute.types import (
    CONCEPTUAL,
    DEEP_DIVE_SECTION,
    FUNCTION_REFERENCE,
    QueryAnalysis,
)

if TYPE_CHECKING:
    from collections.abc import Mapping

    from chunkroute.types import CategoryRule, Chunk

__all__ = [
    "DEFAULT_INTENT",
    "KEYWORD_CATEGORY",
    "KEYWORD_CONFIDENCE",
    "PATTERN_CONFIDENCE",
    "QueryPatternAnalyzer",
]

logger = logging.getLogger(__name__)

KEYWORD_CATEGORY = "keyword-based"
DEFAULT_INTENT = "general-information"
PATTERN_CONFIDENCE = 0.9
KEYWORD_CONFIDENCE = 0.6

# Checked in this order for every token; the first token with a hit fixes the intent.
_INTENT_KEYWORDS: tuple[tuple[str, frozenset[str]], ...] = (
    ("usage-guidance", frozenset({"how", "use", "implement", "setup"})),
    ("conceptual-understanding", frozenset({"what", "explain", "define"})),
    ("problem-solving", frozenset({"fix", "solve", "error", "problem"})),
    ("performance-optimization", frozenset({"performance", "optimize", "fast", "slow"})),
)

_KEYWORD_CHUNK_TYPES = (FUNCTION_REFERENCE, DEEP_DIVE_SECTION, CONCEPTUAL)


def _keyword_intent(token: str) -> str | None:
    for intent, keywords in _INTENT_KEYWORDS:
        if token in keywords:
            return intent
    return None


class QueryPatternAnalyzer:
    """Classifies free-text queries into categories, intents and concepts.

    Usage::

        analyzer = QueryPatternAnalyzer()
        analysis = analyzer.analyze_query("How do I use trySync?")
        analysis.category   # "how-to-usage"
        analysis.concepts   # ("trysync",)
    """

    def __init__(self, rules: tuple[CategoryRule, ...] = CATEGORY_RULES) -> None:
        self.rules = rules

    @property
    def concept_mappings(self) -> Mapping[str, str]:
        return CONCEPT_MAPPINGS

    @property
    def question_templates(self) -> Mapping[str, tuple[str, ...]]:
        return QUESTION_TEMPLATES

    def analyze_query(self, query: str) -> QueryAnalysis:
        """Classify a query.

        The first rule pattern that matches decides the category and its
        captured groups become the concepts. Queries no pattern matches are
        classified by keyword analysis instead; this never raises.

        Args:
            query: Raw user query.

        Returns:
            The query's classification.
        """
        normalized = query.lower().strip()

        for rule in self.rules:
            for pattern in rule.patterns:
                match = pattern.search(normalized)
                if match is None:
                    continue
                normalized_groups = (normalize_concept(g) for g in match.groups() if g)
                concepts = tuple(c for c in normalized_groups if c)
                logger.debug(
                    "Query %r matched %s (%s), concepts=%s",
                    query,
                    rule.name,
                    pattern.pattern,
                    concepts,
                )
                return QueryAnalysis(
                    category=rule.name,
                    intent=rule.intent,
                    priority=rule.priority,
                    concepts=concepts,
                    expected_chunk_types=rule.expected_chunk_types,
                    response_format=rule.response_format,
                    confidence=PATTERN_CONFIDENCE,
                    original_query=query,
                    normalized_query=normalized,
                )

        return self.analyze_by_keywords(normalized, original_query=query)

    def analyze_by_keywords(self, query: str, original_query: str = "") -> QueryAnalysis:
        """Fallback classification from individual keywords.

        Each whitespace-separated token that is a known concept variant
        contributes its canonical concept. The intent comes from the first
        token that belongs to an intent keyword bucket.
        """
        concepts: list[str] = []
        intent = ""

        for token in query.split():
            concept = lookup_concept(token)
            if concept:
                concepts.append(concept)
            if not intent:
                intent = _keyword_intent(clean_term(token)) or ""

        analysis = QueryAnalysis(
            category=KEYWORD_CATEGORY,
            intent=intent or DEFAULT_INTENT,
            priority="medium",
            concepts=tuple(concepts),
            expected_chunk_types=_KEYWORD_CHUNK_TYPES,
            response_format="general",
            confidence=KEYWORD_CONFIDENCE,
            original_query=original_query or query,
            normalized_query=query,
        )
        logger.debug("Query %r fell back to keywords: intent=%s", query, analysis.intent)
        return analysis

    def generate_questions_for_chunk(self, chunk: Chunk) -> list[str]:
        """Expand the question templates for ``chunk``."""
        return generate_questions_for_chunk(chunk)
