"""Chunk corpus loading.

Reads the chunk producer's JSON records from a directory and turns each
record into a ``Chunk``.
"""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING, Any

from chunkroute.exceptions import CorpusError, MalformedChunkError
from chunkroute.types import Chunk, ChunkMetadata

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping
    from pathlib import Path

__all__ = ["INDEX_FILE", "load_corpus", "parse_chunk"]

logger = logging.getLogger(__name__)

# Summary file written next to the chunks by the chunk producer.
INDEX_FILE = "index.json"


def _string_list(value: object) -> list[str]:
    if not isinstance(value, (list, tuple)):
        return []
    return [str(v) for v in value if v]


def parse_chunk(record: Mapping[str, Any]) -> Chunk:
    """Build a ``Chunk`` from a producer record.

    ``semantic_tags`` and ``topics`` are both accepted as concept tags and
    merged in that order without duplicates. Missing optional fields are
    treated as absent.

    Raises:
        MalformedChunkError: If ``chunk_id`` or ``metadata.chunk_type`` is
            missing or empty.
    """
    chunk_id = record.get("chunk_id")
    if not chunk_id or not isinstance(chunk_id, str):
        raise MalformedChunkError("Chunk record missing chunk_id")

    metadata = record.get("metadata")
    if not isinstance(metadata, dict):
        raise MalformedChunkError(f"Chunk {chunk_id!r} missing metadata")

    chunk_type = metadata.get("chunk_type")
    if not chunk_type:
        raise MalformedChunkError(f"Chunk {chunk_id!r} missing metadata.chunk_type")

    tags = _string_list(metadata.get("semantic_tags")) + _string_list(metadata.get("topics"))

    return Chunk(
        chunk_id=chunk_id,
        title=str(record.get("title") or ""),
        content=str(record.get("content") or ""),
        metadata=ChunkMetadata(
            chunk_type=str(chunk_type),
            semantic_tags=tuple(dict.fromkeys(tags)),
            function_name=str(metadata.get("function_name") or ""),
            complexity=str(metadata.get("complexity") or ""),
            concept=str(metadata.get("concept") or ""),
        ),
    )


def load_corpus(chunks_dir: Path, exclude: Iterable[str] = (INDEX_FILE,)) -> list[dict[str, Any]]:
    """Load raw chunk records from every ``*.json`` file in a directory.

    Files are read in name order so repeated loads yield the same corpus.
    Records are returned unvalidated; malformed ones are skipped later by
    the indexer.

    Raises:
        CorpusError: If the directory is missing or unreadable, or a file is
            not a JSON object.
    """
    if not chunks_dir.is_dir():
        raise CorpusError(f"Chunk directory not found: {chunks_dir}")

    excluded = set(exclude)
    records: list[dict[str, Any]] = []
    try:
        paths = sorted(p for p in chunks_dir.glob("*.json") if p.name not in excluded)
        for path in paths:
            data = json.loads(path.read_text(encoding="utf-8"))
            if not isinstance(data, dict):
                raise CorpusError(f"Chunk file {path} does not contain a JSON object")
            records.append(data)
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
        logger.error("Failed to load chunks from %s: %s", chunks_dir, e)
        raise CorpusError(f"Failed to load chunks from {chunks_dir}: {e}") from e

    logger.info("Loaded %d chunk records from %s", len(records), chunks_dir)
    return records
