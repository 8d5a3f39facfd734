"""Shared fixtures for chunkroute tests."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

import pytest

from chunkroute.corpus import parse_chunk

if TYPE_CHECKING:
    from pathlib import Path

    from chunkroute.types import Chunk


def _record(
    chunk_id: str,
    chunk_type: str,
    *,
    title: str = "",
    function_name: str | None = None,
    complexity: str | None = None,
    tags: list[str] | None = None,
) -> dict[str, Any]:
    metadata: dict[str, Any] = {"chunk_type": chunk_type, "semantic_tags": tags or []}
    if function_name is not None:
        metadata["function_name"] = function_name
    if complexity is not None:
        metadata["complexity"] = complexity
    return {
        "chunk_id": chunk_id,
        "title": title,
        "content": f"Content of {title or chunk_id}",
        "metadata": metadata,
    }


@pytest.fixture
def sample_records() -> list[dict[str, Any]]:
    """A small corpus covering every chunk type."""
    return [
        _record(
            "fn-trysync",
            "function-reference",
            title="trySync",
            function_name="trySync",
            complexity="basic",
            tags=["error-handling", "sync"],
        ),
        _record(
            "fn-tryasync",
            "function-reference",
            title="tryAsync",
            function_name="tryAsync",
            complexity="intermediate",
            tags=["error-handling", "async-operations"],
        ),
        _record(
            "deep-error-handling",
            "deep-dive-section",
            title="Error Handling Patterns",
            complexity="intermediate",
            tags=["error-handling"],
        ),
        _record(
            "concept-philosophy",
            "conceptual",
            title="Design Philosophy",
            complexity="basic",
            tags=["type-safety"],
        ),
        _record("general-readme", "general", title="README"),
    ]


@pytest.fixture
def sample_chunks(sample_records: list[dict[str, Any]]) -> list[Chunk]:
    return [parse_chunk(r) for r in sample_records]


@pytest.fixture
def corpus_dir(tmp_path: Path, sample_records: list[dict[str, Any]]) -> Path:
    """The sample corpus written as one JSON file per chunk, plus an index.json."""
    chunks = tmp_path / "chunks"
    chunks.mkdir()
    for record in sample_records:
        (chunks / f"{record['chunk_id']}.json").write_text(json.dumps(record), encoding="utf-8")
    (chunks / "index.json").write_text(
        json.dumps({"total_chunks": len(sample_records), "chunks": []}), encoding="utf-8"
    )
    return chunks
