"""In-memory chunk indices.

A ``ChunkIndex`` is an immutable snapshot of three lookup tables built in
one pass over the corpus. Re-indexing builds a new snapshot; existing
snapshots are never patched.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TYPE_CHECKING, Any

from chunkroute.corpus import parse_chunk
from chunkroute.exceptions import MalformedChunkError
from chunkroute.types import Chunk

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping

__all__ = ["ChunkIndex", "build_index"]

logger = logging.getLogger(__name__)


def _empty() -> Mapping[str, Any]:
    return MappingProxyType({})


@dataclass(frozen=True)
class ChunkIndex:
    """Read-only snapshot of the chunk lookup tables.

    Attributes:
        by_id: ``chunk_id`` → chunk, in corpus order.
        by_function: lowercased function name → chunk ids.
        by_concept: semantic tag → chunk ids.
        skipped: Number of malformed records left out of the index.
        version: Snapshot number assigned by the owning router.
    """

    by_id: Mapping[str, Chunk] = field(default_factory=_empty)
    by_function: Mapping[str, tuple[str, ...]] = field(default_factory=_empty)
    by_concept: Mapping[str, tuple[str, ...]] = field(default_factory=_empty)
    skipped: int = 0
    version: int = 0

    def __len__(self) -> int:
        return len(self.by_id)

    def __contains__(self, chunk_id: object) -> bool:
        return chunk_id in self.by_id

    def get(self, chunk_id: str) -> Chunk | None:
        return self.by_id.get(chunk_id)

    @property
    def chunks(self) -> list[Chunk]:
        return list(self.by_id.values())


def _validate(record: Chunk | Mapping[str, Any]) -> Chunk:
    if isinstance(record, Chunk):
        if not record.chunk_id:
            raise MalformedChunkError("Chunk missing chunk_id")
        if not record.metadata.chunk_type:
            raise MalformedChunkError(f"Chunk {record.chunk_id!r} missing chunk_type")
        return record
    return parse_chunk(record)


def build_index(records: Iterable[Chunk | Mapping[str, Any]], version: int = 0) -> ChunkIndex:
    """Index chunks by id, function name and concept tag.

    Accepts parsed ``Chunk`` objects or raw producer records. Malformed
    records and repeats of an already indexed ``chunk_id`` are logged,
    counted in ``ChunkIndex.skipped`` and left out; one bad record never
    aborts the pass.

    Args:
        records: The chunk corpus.
        version: Snapshot number to stamp on the index.

    Returns:
        A new, fully built index snapshot.
    """
    by_id: dict[str, Chunk] = {}
    by_function: dict[str, list[str]] = {}
    by_concept: dict[str, list[str]] = {}
    skipped = 0

    for record in records:
        try:
            chunk = _validate(record)
        except MalformedChunkError as e:
            logger.warning("Skipping malformed chunk: %s", e)
            skipped += 1
            continue

        # First record wins; later ones with the same id never reach the lookups.
        if chunk.chunk_id in by_id:
            logger.warning("Skipping duplicate chunk id %r", chunk.chunk_id)
            skipped += 1
            continue

        by_id[chunk.chunk_id] = chunk

        if chunk.metadata.function_name:
            by_function.setdefault(chunk.metadata.function_name.lower(), []).append(
                chunk.chunk_id
            )

        for tag in chunk.metadata.semantic_tags:
            by_concept.setdefault(tag, []).append(chunk.chunk_id)

    logger.info(
        "Indexed %d chunks (%d functions, %d concepts, %d skipped)",
        len(by_id),
        len(by_function),
        len(by_concept),
        skipped,
    )
    return ChunkIndex(
        by_id=MappingProxyType(by_id),
        by_function=MappingProxyType({k: tuple(v) for k, v in by_function.items()}),
        by_concept=MappingProxyType({k: tuple(v) for k, v in by_concept.items()}),
        skipped=skipped,
        version=version,
    )
