"""chunkroute: pattern-based query routing over pre-chunked documentation."""

__version__ = "0.1.0"
