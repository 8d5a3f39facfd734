"""Tests for chunkroute.corpus — chunk record parsing and corpus loading."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING

import pytest

from chunkroute.corpus import load_corpus, parse_chunk
from chunkroute.exceptions import CorpusError, MalformedChunkError

if TYPE_CHECKING:
    from pathlib import Path


class TestParseChunk:
    def test_full_record(self):
        chunk = parse_chunk(
            {
                "chunk_id": "fn-trysync",
                "title": "trySync",
                "content": "Wraps a sync call",
                "metadata": {
                    "chunk_type": "function-reference",
                    "function_name": "trySync",
                    "complexity": "basic",
                    "semantic_tags": ["error-handling"],
                    "concept": "sync-wrapping",
                },
            }
        )
        assert chunk.chunk_id == "fn-trysync"
        assert chunk.title == "trySync"
        assert chunk.metadata.chunk_type == "function-reference"
        assert chunk.metadata.function_name == "trySync"
        assert chunk.metadata.complexity == "basic"
        assert chunk.metadata.semantic_tags == ("error-handling",)
        assert chunk.metadata.concept == "sync-wrapping"

    def test_optional_fields_absent(self):
        chunk = parse_chunk({"chunk_id": "c1", "metadata": {"chunk_type": "general"}})
        assert chunk.title == ""
        assert chunk.content == ""
        assert chunk.metadata.function_name == ""
        assert chunk.metadata.complexity == ""
        assert chunk.metadata.semantic_tags == ()
        assert chunk.metadata.concept == ""

    def test_topics_merged_after_semantic_tags(self):
        chunk = parse_chunk(
            {
                "chunk_id": "c1",
                "metadata": {
                    "chunk_type": "conceptual",
                    "semantic_tags": ["error-handling", "result"],
                    "topics": ["result", "typescript"],
                },
            }
        )
        assert chunk.metadata.semantic_tags == ("error-handling", "result", "typescript")

    def test_non_list_tags_ignored(self):
        chunk = parse_chunk(
            {"chunk_id": "c1", "metadata": {"chunk_type": "conceptual", "topics": "oops"}}
        )
        assert chunk.metadata.semantic_tags == ()

    @pytest.mark.parametrize(
        "record",
        [
            {"metadata": {"chunk_type": "general"}},
            {"chunk_id": "", "metadata": {"chunk_type": "general"}},
            {"chunk_id": "c1"},
            {"chunk_id": "c1", "metadata": {}},
            {"chunk_id": "c1", "metadata": {"chunk_type": ""}},
        ],
    )
    def test_malformed(self, record):
        with pytest.raises(MalformedChunkError):
            parse_chunk(record)


class TestLoadCorpus:
    def test_loads_records_in_name_order(self, corpus_dir: Path):
        records = load_corpus(corpus_dir)
        ids = [r["chunk_id"] for r in records]
        assert ids == sorted(ids)
        assert len(ids) == 5

    def test_excludes_index_file(self, corpus_dir: Path):
        records = load_corpus(corpus_dir)
        assert all("chunk_id" in r for r in records)

    def test_missing_directory(self, tmp_path: Path):
        with pytest.raises(CorpusError, match="not found"):
            load_corpus(tmp_path / "nope")

    def test_invalid_json(self, corpus_dir: Path):
        (corpus_dir / "broken.json").write_text("{not json", encoding="utf-8")
        with pytest.raises(CorpusError, match="Failed to load chunks"):
            load_corpus(corpus_dir)

    def test_invalid_utf8(self, corpus_dir: Path):
        (corpus_dir / "binary.json").write_bytes(b'{"chunk_id": "\xff\xfe"}')
        with pytest.raises(CorpusError, match="Failed to load chunks"):
            load_corpus(corpus_dir)

    def test_non_object_json(self, corpus_dir: Path):
        (corpus_dir / "list.json").write_text(json.dumps([1, 2]), encoding="utf-8")
        with pytest.raises(CorpusError, match="JSON object"):
            load_corpus(corpus_dir)

    def test_empty_directory(self, tmp_path: Path):
        assert load_corpus(tmp_path) == []
