"""Tests for chunkroute.types module — routing data contracts."""

from __future__ import annotations

import dataclasses

import pytest

from chunkroute.types import (
    Candidate,
    Chunk,
    ChunkMetadata,
    MatchType,
    QueryAnalysis,
    ScoredCandidate,
)


class TestChunkMetadata:
    def test_frozen(self):
        meta = ChunkMetadata(chunk_type="conceptual")
        with pytest.raises(dataclasses.FrozenInstanceError):
            meta.chunk_type = "general"  # type: ignore[misc]

    def test_defaults(self):
        meta = ChunkMetadata(chunk_type="conceptual")
        assert meta.semantic_tags == ()
        assert meta.function_name == ""
        assert meta.complexity == ""


class TestChunk:
    def test_frozen(self):
        chunk = Chunk(chunk_id="c1", content="text", metadata=ChunkMetadata(chunk_type="general"))
        with pytest.raises(dataclasses.FrozenInstanceError):
            chunk.content = "changed"  # type: ignore[misc]

    def test_default_title(self):
        chunk = Chunk(chunk_id="c1", content="text", metadata=ChunkMetadata(chunk_type="general"))
        assert chunk.title == ""


class TestCandidate:
    def test_equal_candidates_hash_equal(self):
        a = Candidate("c1", MatchType.CONCEPT, "error-handling")
        b = Candidate("c1", MatchType.CONCEPT, "error-handling")
        assert a == b
        assert len({a, b}) == 1

    def test_match_type_distinguishes(self):
        a = Candidate("c1", MatchType.CONCEPT, "x")
        b = Candidate("c1", MatchType.TYPE, "x")
        assert len({a, b}) == 2

    def test_match_type_values(self):
        assert MatchType.EXACT_FUNCTION.value == "exact_function"
        assert MatchType("type") is MatchType.TYPE


class TestQueryAnalysis:
    def test_frozen(self):
        analysis = QueryAnalysis(
            category="comparison",
            intent="comparison-analysis",
            priority="medium",
            concepts=("a", "b"),
            expected_chunk_types=("conceptual",),
            response_format="comparison-table",
            confidence=0.9,
        )
        with pytest.raises(dataclasses.FrozenInstanceError):
            analysis.concepts = ()  # type: ignore[misc]
        assert analysis.original_query == ""


class TestScoredCandidate:
    def test_default_chunk(self):
        scored = ScoredCandidate(chunk_id="c1", score=3.5, match_type=MatchType.TYPE, confidence=0.6)
        assert scored.chunk is None
