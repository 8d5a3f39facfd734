"""Custom exception hierarchy for chunkroute."""

__all__ = [
    "ChunkrouteError",
    "ConfigError",
    "CorpusError",
    "MalformedChunkError",
    "PatternDatabaseError",
]


class ChunkrouteError(Exception):
    """Base exception for all chunkroute errors."""


class ConfigError(ChunkrouteError):
    """Raised when configuration loading or validation fails."""


class CorpusError(ChunkrouteError):
    """Raised when the chunk corpus directory cannot be read."""


class MalformedChunkError(ChunkrouteError):
    """Raised when a chunk record lacks ``chunk_id`` or ``metadata.chunk_type``."""


class PatternDatabaseError(ChunkrouteError):
    """Raised when the generated pattern database cannot be saved or loaded."""
