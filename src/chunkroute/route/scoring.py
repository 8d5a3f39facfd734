"""Heuristic multi-factor scoring of routing candidates.

Scores are additive weighted terms with no upper bound; only their relative
order matters. Confidence is a separate estimate clamped to [0, 1].
"""

from __future__ import annotations

from types import MappingProxyType
from typing import TYPE_CHECKING

from chunkroute.types import MatchType, ScoredCandidate

if TYPE_CHECKING:
    from collections.abc import Mapping

    from chunkroute.types import Candidate, Chunk, QueryAnalysis, RoutingRule

__all__ = [
    "BASE_CONFIDENCE",
    "COMPLEXITY_LEVELS",
    "INTENT_COMPLEXITY",
    "complexity_score",
    "score_candidate",
    "semantic_score",
]

BASE_CONFIDENCE = 0.5

COMPLEXITY_LEVELS: Mapping[str, int] = MappingProxyType(
    {"basic": 1, "intermediate": 2, "advanced": 3}
)

INTENT_COMPLEXITY: Mapping[str, int] = MappingProxyType(
    {
        "usage-guidance": 1,
        "conceptual-understanding": 2,
        "problem-solving": 3,
        "performance-optimization": 3,
    }
)

# Chunks without a known complexity count as basic; other intents sit in the middle.
_DEFAULT_CHUNK_LEVEL = 1
_DEFAULT_INTENT_LEVEL = 2


def semantic_score(chunk: Chunk, analysis: QueryAnalysis) -> float:
    """Fraction of the query's concepts found in the chunk's tags.

    Returns 0.0 for a query without concepts.
    """
    concepts = set(analysis.concepts)
    if not concepts:
        return 0.0
    overlap = concepts & set(chunk.metadata.semantic_tags)
    return len(overlap) / len(concepts)


def complexity_score(chunk: Chunk, analysis: QueryAnalysis) -> float:
    """How well chunk complexity fits the query intent: 1.0 exact, down to 1/3."""
    chunk_level = COMPLEXITY_LEVELS.get(chunk.metadata.complexity, _DEFAULT_CHUNK_LEVEL)
    intent_level = INTENT_COMPLEXITY.get(analysis.intent, _DEFAULT_INTENT_LEVEL)
    return 1 - abs(chunk_level - intent_level) / 3


def score_candidate(
    candidate: Candidate,
    chunk: Chunk,
    analysis: QueryAnalysis,
    rule: RoutingRule,
) -> ScoredCandidate:
    """Score one candidate against a routing rule.

    Args:
        candidate: The candidate to score.
        chunk: The chunk ``candidate`` refers to.
        analysis: Classification of the query being routed.
        rule: Routing rule selected for the query's category.

    Returns:
        The scored candidate (without the chunk attached).
    """
    weights = rule.scoring_weights
    score = 0.0
    confidence = BASE_CONFIDENCE

    if candidate.match_type is MatchType.EXACT_FUNCTION:
        score += weights.exact_match
        confidence += 0.4

    semantic = semantic_score(chunk, analysis)
    score += semantic * weights.semantic_match
    confidence += semantic * 0.3

    chunk_type = chunk.metadata.chunk_type
    if chunk_type in rule.primary_targets:
        score += weights.category_match
        confidence += 0.2
    elif chunk_type in rule.secondary_targets:
        score += weights.category_match * 0.5
        confidence += 0.1

    score += complexity_score(chunk, analysis) * weights.complexity_match

    return ScoredCandidate(
        chunk_id=candidate.chunk_id,
        score=score,
        match_type=candidate.match_type,
        confidence=min(confidence, 1.0),
    )
