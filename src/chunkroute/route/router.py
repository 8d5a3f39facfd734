"""Query router — candidate generation, scoring and ranking."""

from __future__ import annotations

import logging
import threading
from dataclasses import replace
from typing import TYPE_CHECKING, Any

from chunkroute.route.index import ChunkIndex, build_index
from chunkroute.route.rules import ROUTING_RULES, get_routing_rule
from chunkroute.route.scoring import score_candidate
from chunkroute.types import Candidate, MatchType

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping

    from chunkroute.types import Chunk, QueryAnalysis, RoutingRule, ScoredCandidate

__all__ = ["QueryRouter"]

logger = logging.getLogger(__name__)


class QueryRouter:
    """Routes classified queries to ranked chunks.

    The router owns the current ``ChunkIndex`` snapshot. ``index_chunks``
    builds a complete new snapshot and swaps it in with a single reference
    assignment, so a query that grabbed the previous snapshot keeps a
    consistent view until it returns.

    Usage::

        router = QueryRouter()
        router.index_chunks(chunks)
        results = router.route_query(analyzer.analyze_query("What is error handling?"))
    """

    def __init__(self, routing_rules: Mapping[str, RoutingRule] = ROUTING_RULES) -> None:
        self.routing_rules = routing_rules
        self._index = ChunkIndex()
        self._swap_lock = threading.Lock()

    @property
    def index(self) -> ChunkIndex:
        """The current index snapshot."""
        return self._index

    def index_chunks(self, chunks: Iterable[Chunk | Mapping[str, Any]]) -> ChunkIndex:
        """Rebuild the index from a fresh corpus and swap it in.

        Returns:
            The new snapshot.
        """
        with self._swap_lock:
            snapshot = build_index(chunks, version=self._index.version + 1)
            self._index = snapshot
        return snapshot

    def get_rule(self, category: str) -> RoutingRule:
        rule = self.routing_rules.get(category)
        return rule if rule is not None else get_routing_rule(category)

    def route_query(
        self,
        analysis: QueryAnalysis,
        index: ChunkIndex | None = None,
    ) -> list[ScoredCandidate]:
        """Rank chunks for a classified query.

        Args:
            analysis: Output of ``QueryPatternAnalyzer.analyze_query``.
            index: Snapshot to route against; defaults to the router's
                current snapshot, read once.

        Returns:
            At most ``max_results`` scored candidates of the category's
            routing rule, by descending score (stable on ties), each with
            its chunk attached.
        """
        snapshot = index if index is not None else self._index
        rule = self.get_rule(analysis.category)

        candidates = self.find_candidate_chunks(analysis, rule, snapshot)
        scored = self.score_chunks(candidates, analysis, rule, snapshot)
        ranked = sorted(scored, key=lambda c: c.score, reverse=True)[: rule.max_results]

        logger.debug(
            "Routed %r (%s): %d candidates, returning %d",
            analysis.original_query,
            analysis.category,
            len(candidates),
            len(ranked),
        )
        return [replace(c, chunk=snapshot.by_id[c.chunk_id]) for c in ranked]

    def find_candidate_chunks(
        self,
        analysis: QueryAnalysis,
        rule: RoutingRule,
        index: ChunkIndex | None = None,
    ) -> list[Candidate]:
        """Collect candidates by function name, concept tag and chunk type.

        Duplicates (same chunk, match type and value) are dropped; the first
        occurrence keeps its position.
        """
        snapshot = index if index is not None else self._index
        candidates: list[Candidate] = []

        for concept in analysis.concepts:
            for chunk_id in snapshot.by_function.get(concept, ()):
                candidates.append(Candidate(chunk_id, MatchType.EXACT_FUNCTION, concept))

        for concept in analysis.concepts:
            for chunk_id in snapshot.by_concept.get(concept, ()):
                candidates.append(Candidate(chunk_id, MatchType.CONCEPT, concept))

        target_types = rule.target_types
        for chunk_id, chunk in snapshot.by_id.items():
            if chunk.metadata.chunk_type in target_types:
                candidates.append(Candidate(chunk_id, MatchType.TYPE, chunk.metadata.chunk_type))

        return list(dict.fromkeys(candidates))

    def score_chunks(
        self,
        candidates: list[Candidate],
        analysis: QueryAnalysis,
        rule: RoutingRule,
        index: ChunkIndex | None = None,
    ) -> list[ScoredCandidate]:
        """Score candidates in order; candidates not in the index are dropped."""
        snapshot = index if index is not None else self._index
        scored: list[ScoredCandidate] = []
        for candidate in candidates:
            chunk = snapshot.get(candidate.chunk_id)
            if chunk is None:
                logger.debug("Dropping candidate for unknown chunk %s", candidate.chunk_id)
                continue
            scored.append(score_candidate(candidate, chunk, analysis, rule))
        return scored
