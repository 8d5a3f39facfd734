"""Configuration system for chunkroute.

Optional ``chunkroute.toml`` mapped onto typed dataclasses, with defaults
for every value.
"""

from __future__ import annotations

import logging
import sys
from dataclasses import asdict, dataclass, field, fields
from typing import TYPE_CHECKING, TypeVar

import tomli_w

if sys.version_info >= (3, 12):
    import tomllib
else:
    import tomli as tomllib

from chunkroute.exceptions import ConfigError

if TYPE_CHECKING:
    from collections.abc import Mapping
    from pathlib import Path

_T = TypeVar("_T")

__all__ = [
    "CONFIG_FILE",
    "ChunkrouteConfig",
    "CorpusConfig",
    "GenerateConfig",
    "OutputConfig",
    "TestConfig",
    "default_config",
    "load_config",
    "save_config",
]

logger = logging.getLogger(__name__)

CONFIG_FILE = "chunkroute.toml"

DEFAULT_TEST_QUERIES = [
    "How do I use trySync?",
    "What is error handling?",
    "tryAsync vs trySync",
    "How to fix TypeError?",
    "React error boundary example",
    "Performance optimization",
    "Configure try-error",
]


@dataclass
class CorpusConfig:
    """[corpus] section."""

    input_dir: str = "rag-optimization/chunks"
    exclude: list[str] = field(default_factory=lambda: ["index.json"])


@dataclass
class OutputConfig:
    """[output] section."""

    output_dir: str = "rag-optimization"
    filename: str = "query-patterns.json"
    indent: int = 2


@dataclass
class GenerateConfig:
    """[generate] section."""

    mapping_top_n: int = 3
    top_concepts: int = 50
    suggestion_limit: int = 5


@dataclass
class TestConfig:
    """[test] section."""

    __test__ = False

    queries: list[str] = field(default_factory=lambda: list(DEFAULT_TEST_QUERIES))


@dataclass
class ChunkrouteConfig:
    """Root configuration combining all sections."""

    corpus: CorpusConfig = field(default_factory=CorpusConfig)
    output: OutputConfig = field(default_factory=OutputConfig)
    generate: GenerateConfig = field(default_factory=GenerateConfig)
    test: TestConfig = field(default_factory=TestConfig)


def default_config() -> ChunkrouteConfig:
    """Return a config with all default values."""
    return ChunkrouteConfig()


def _section_from_dict(cls: type[_T], data: Mapping[str, object]) -> _T:
    names = {f.name for f in fields(cls)}  # type: ignore[arg-type]
    return cls(**{k: v for k, v in data.items() if k in names})


def save_config(config: ChunkrouteConfig, path: Path) -> None:
    """Write ``config`` as TOML, creating parent directories."""
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(tomli_w.dumps(asdict(config)), encoding="utf-8")
    except OSError as e:
        logger.error("Failed to save config to %s: %s", path, e)
        raise ConfigError(f"Failed to save config to {path}: {e}") from e
    logger.info("Saved config to %s", path)


def load_config(path: Path) -> ChunkrouteConfig:
    """Read a TOML config file.

    Sections or keys the file leaves out keep their defaults; unknown ones
    are ignored.

    Raises:
        ConfigError: If the file is missing, unreadable or not valid TOML.
    """
    if not path.is_file():
        raise ConfigError(f"Config file not found: {path}")

    try:
        data = tomllib.loads(path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, tomllib.TOMLDecodeError) as e:
        logger.error("Failed to load config from %s: %s", path, e)
        raise ConfigError(f"Failed to load config from {path}: {e}") from e

    sections = {
        f.name: _section_from_dict(f.default_factory, data[f.name])  # type: ignore[arg-type]
        for f in fields(ChunkrouteConfig)
        if isinstance(data.get(f.name), dict)
    }
    logger.info("Loaded config from %s", path)
    return ChunkrouteConfig(**sections)
