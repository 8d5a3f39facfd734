"""Tests for chunkroute.route.index — chunk index snapshots."""

from __future__ import annotations

from typing import Any

import pytest

from chunkroute.route import ChunkIndex, build_index
from chunkroute.types import Chunk, ChunkMetadata


class TestBuildIndex:
    def test_by_id_in_corpus_order(self, sample_records: list[dict[str, Any]]):
        index = build_index(sample_records)
        assert list(index.by_id) == [r["chunk_id"] for r in sample_records]
        assert len(index) == 5

    def test_by_function_lowercased(self, sample_records: list[dict[str, Any]]):
        index = build_index(sample_records)
        assert dict(index.by_function) == {
            "trysync": ("fn-trysync",),
            "tryasync": ("fn-tryasync",),
        }

    def test_by_concept(self, sample_records: list[dict[str, Any]]):
        index = build_index(sample_records)
        assert index.by_concept["error-handling"] == (
            "fn-trysync",
            "fn-tryasync",
            "deep-error-handling",
        )
        assert index.by_concept["type-safety"] == ("concept-philosophy",)

    def test_accepts_chunk_objects(self, sample_chunks: list[Chunk]):
        index = build_index(sample_chunks)
        assert index.get("fn-trysync") is sample_chunks[0]
        assert "general-readme" in index

    def test_deterministic(self, sample_records: list[dict[str, Any]]):
        first = build_index(sample_records)
        second = build_index(sample_records)
        assert list(first.by_id) == list(second.by_id)
        assert dict(first.by_function) == dict(second.by_function)
        assert dict(first.by_concept) == dict(second.by_concept)

    def test_read_only(self, sample_records: list[dict[str, Any]]):
        index = build_index(sample_records)
        with pytest.raises(TypeError):
            index.by_id["x"] = index.by_id["fn-trysync"]  # type: ignore[index]

    def test_empty_corpus(self):
        index = build_index([])
        assert len(index) == 0
        assert index.skipped == 0


class TestMalformedChunks:
    def test_missing_chunk_id_skipped(self, sample_records: list[dict[str, Any]]):
        bad = {"title": "orphan", "metadata": {"chunk_type": "conceptual", "semantic_tags": ["x"]}}
        index = build_index([*sample_records, bad])
        assert index.skipped == 1
        assert len(index) == 5
        assert "x" not in index.by_concept

    def test_missing_chunk_type_skipped(self, sample_records: list[dict[str, Any]]):
        bad = {"chunk_id": "no-type", "metadata": {"function_name": "ghost"}}
        index = build_index([bad, *sample_records])
        assert index.skipped == 1
        assert "no-type" not in index
        assert "ghost" not in index.by_function

    def test_invalid_chunk_object_skipped(self):
        chunk = Chunk(chunk_id="", content="", metadata=ChunkMetadata(chunk_type="general"))
        index = build_index([chunk])
        assert index.skipped == 1
        assert len(index) == 0

    def test_duplicate_chunk_id_keeps_first(self):
        first = {
            "chunk_id": "a",
            "metadata": {
                "chunk_type": "function-reference",
                "function_name": "foo",
                "semantic_tags": ["x"],
            },
        }
        second = {
            "chunk_id": "a",
            "metadata": {"chunk_type": "conceptual", "semantic_tags": ["x", "y"]},
        }
        index = build_index([first, second])
        assert index.skipped == 1
        assert len(index) == 1
        assert index.by_id["a"].metadata.function_name == "foo"
        assert index.by_function == {"foo": ("a",)}
        assert index.by_concept == {"x": ("a",)}


class TestChunkIndex:
    def test_default_is_empty(self):
        index = ChunkIndex()
        assert len(index) == 0
        assert index.version == 0
        assert index.chunks == []

    def test_version_stamp(self, sample_records: list[dict[str, Any]]):
        assert build_index(sample_records, version=7).version == 7
