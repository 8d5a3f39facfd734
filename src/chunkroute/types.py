"""Routing data contracts for chunkroute.

Frozen dataclasses that flow between routing stages:
  chunk record → Chunk → ChunkIndex
  query → QueryAnalysis → list[Candidate] → list[ScoredCandidate]
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import re

__all__ = [
    "CONCEPTUAL",
    "DEEP_DIVE_SECTION",
    "FUNCTION_REFERENCE",
    "GENERAL",
    "Candidate",
    "CategoryRule",
    "Chunk",
    "ChunkMetadata",
    "MatchType",
    "QueryAnalysis",
    "RoutingRule",
    "ScoredCandidate",
    "ScoringWeights",
]

# Chunk types emitted by the chunk producer.
FUNCTION_REFERENCE = "function-reference"
DEEP_DIVE_SECTION = "deep-dive-section"
CONCEPTUAL = "conceptual"
GENERAL = "general"


class MatchType(str, Enum):
    """Reason a chunk became a routing candidate."""

    EXACT_FUNCTION = "exact_function"
    CONCEPT = "concept"
    TYPE = "type"


@dataclass(frozen=True)
class ChunkMetadata:
    """Metadata attached to every chunk by the chunk producer."""

    chunk_type: str
    semantic_tags: tuple[str, ...] = ()
    function_name: str = ""
    complexity: str = ""
    concept: str = ""


@dataclass(frozen=True)
class Chunk:
    """A single unit of documentation, read-only to the router."""

    chunk_id: str
    content: str
    metadata: ChunkMetadata
    title: str = ""


@dataclass(frozen=True)
class CategoryRule:
    """A query category recognised by regex patterns, tried in order."""

    name: str
    patterns: tuple[re.Pattern[str], ...]
    intent: str
    priority: str
    expected_chunk_types: tuple[str, ...]
    response_format: str


@dataclass(frozen=True)
class ScoringWeights:
    """Weights for the additive scoring terms of a routing rule."""

    exact_match: float
    semantic_match: float
    category_match: float
    complexity_match: float


@dataclass(frozen=True)
class RoutingRule:
    """Per-category target chunk types, result cap and scoring weights."""

    primary_targets: tuple[str, ...]
    secondary_targets: tuple[str, ...]
    max_results: int
    scoring_weights: ScoringWeights

    @property
    def target_types(self) -> tuple[str, ...]:
        return self.primary_targets + self.secondary_targets


@dataclass(frozen=True)
class QueryAnalysis:
    """Classification of one query."""

    category: str
    intent: str
    priority: str
    concepts: tuple[str, ...]
    expected_chunk_types: tuple[str, ...]
    response_format: str
    confidence: float
    original_query: str = ""
    normalized_query: str = ""


@dataclass(frozen=True)
class Candidate:
    """A (chunk, match reason) pair, before scoring."""

    chunk_id: str
    match_type: MatchType
    match_value: str


@dataclass(frozen=True)
class ScoredCandidate:
    """A routed chunk with its heuristic score.

    ``score`` is unbounded above; ``confidence`` is clamped to [0, 1].
    """

    chunk_id: str
    score: float
    match_type: MatchType
    confidence: float
    chunk: Chunk | None = None
