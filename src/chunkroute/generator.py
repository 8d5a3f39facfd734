"""Pattern database generator.

Drives the analyzer and router over a chunk corpus: indexes the chunks,
expands question templates per chunk, routes every question and collects
the results into a JSON-serializable pattern database.
"""

from __future__ import annotations

import json
import logging
from collections import Counter
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import TYPE_CHECKING, Any

from chunkroute.analyze import QueryPatternAnalyzer
from chunkroute.concepts import related_variants
from chunkroute.config import default_config
from chunkroute.corpus import load_corpus
from chunkroute.exceptions import PatternDatabaseError
from chunkroute.route import QueryRouter

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping
    from pathlib import Path

    from chunkroute.config import ChunkrouteConfig
    from chunkroute.route import ChunkIndex
    from chunkroute.types import (
        CategoryRule,
        Chunk,
        QueryAnalysis,
        RoutingRule,
        ScoredCandidate,
    )

__all__ = [
    "PatternDatabase",
    "QueryPatternsGenerator",
    "QueryTestResult",
    "Suggestion",
    "analysis_to_dict",
    "load_patterns",
    "result_to_dict",
    "save_patterns",
]

logger = logging.getLogger(__name__)


@dataclass
class PatternDatabase:
    """Generated category rules, templates, routing rules and query mappings."""

    categories: dict[str, Any] = field(default_factory=dict)
    templates: dict[str, list[str]] = field(default_factory=dict)
    concept_mappings: dict[str, str] = field(default_factory=dict)
    routing_rules: dict[str, Any] = field(default_factory=dict)
    mappings: dict[str, dict[str, Any]] = field(default_factory=dict)
    statistics: dict[str, Any] = field(default_factory=dict)
    generated_at: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {
            "categories": self.categories,
            "templates": self.templates,
            "concept_mappings": self.concept_mappings,
            "routing_rules": self.routing_rules,
            "mappings": self.mappings,
            "statistics": self.statistics,
            "generated_at": self.generated_at,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> PatternDatabase:
        return cls(
            categories=dict(data.get("categories", {})),
            templates=dict(data.get("templates", {})),
            concept_mappings=dict(data.get("concept_mappings", {})),
            routing_rules=dict(data.get("routing_rules", {})),
            mappings=dict(data.get("mappings", {})),
            statistics=dict(data.get("statistics", {})),
            generated_at=str(data.get("generated_at", "")),
        )


@dataclass(frozen=True)
class Suggestion:
    """A group of follow-up hints for a tested query."""

    type: str
    items: tuple[str, ...]


@dataclass(frozen=True)
class QueryTestResult:
    """Classification, routed chunks and suggestions for one query."""

    query: str
    analysis: QueryAnalysis
    results: list[ScoredCandidate]
    suggestions: list[Suggestion]


def _category_to_dict(rule: CategoryRule) -> dict[str, object]:
    return {
        "patterns": [p.pattern for p in rule.patterns],
        "intent": rule.intent,
        "priority": rule.priority,
        "expectedChunkTypes": list(rule.expected_chunk_types),
        "responseFormat": rule.response_format,
    }


def _routing_rule_to_dict(rule: RoutingRule) -> dict[str, object]:
    weights = rule.scoring_weights
    return {
        "primaryTargets": list(rule.primary_targets),
        "secondaryTargets": list(rule.secondary_targets),
        "maxResults": rule.max_results,
        "scoringWeights": {
            "exactMatch": weights.exact_match,
            "semanticMatch": weights.semantic_match,
            "categoryMatch": weights.category_match,
            "complexityMatch": weights.complexity_match,
        },
    }


def analysis_to_dict(analysis: QueryAnalysis) -> dict[str, object]:
    """Serialize a QueryAnalysis for JSON output."""
    return {
        "category": analysis.category,
        "intent": analysis.intent,
        "priority": analysis.priority,
        "concepts": list(analysis.concepts),
        "expectedChunkTypes": list(analysis.expected_chunk_types),
        "responseFormat": analysis.response_format,
        "confidence": analysis.confidence,
        "originalQuery": analysis.original_query,
        "normalizedQuery": analysis.normalized_query,
    }


def result_to_dict(result: ScoredCandidate) -> dict[str, object]:
    """Serialize a routed chunk for JSON output."""
    d: dict[str, object] = {
        "chunk_id": result.chunk_id,
        "score": result.score,
        "match_type": result.match_type.value,
        "confidence": result.confidence,
    }
    if result.chunk is not None:
        d["title"] = result.chunk.title
        d["chunk_type"] = result.chunk.metadata.chunk_type
    return d


def save_patterns(db: PatternDatabase, output_dir: Path, filename: str, indent: int = 2) -> Path:
    """Write the pattern database as JSON into ``output_dir``.

    Returns:
        Path of the written file.
    """
    output_file = output_dir / filename
    try:
        output_dir.mkdir(parents=True, exist_ok=True)
        output_file.write_text(json.dumps(db.to_dict(), indent=indent) + "\n", encoding="utf-8")
    except OSError as e:
        logger.error("Failed to save pattern database to %s: %s", output_file, e)
        raise PatternDatabaseError(f"Failed to save pattern database to {output_file}: {e}") from e
    logger.info("Saved pattern database to %s", output_file)
    return output_file


def load_patterns(path: Path) -> PatternDatabase:
    """Load a pattern database written by ``save_patterns``."""
    if not path.exists():
        raise PatternDatabaseError(f"Pattern database not found: {path}")

    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
        logger.error("Failed to load pattern database from %s: %s", path, e)
        raise PatternDatabaseError(f"Failed to load pattern database from {path}: {e}") from e

    if not isinstance(data, dict):
        raise PatternDatabaseError(f"Pattern database {path} is not a JSON object")

    db = PatternDatabase.from_dict(data)
    logger.info("Loaded pattern database from %s (%d mappings)", path, len(db.mappings))
    return db


class QueryPatternsGenerator:
    """Orchestrates analysis and routing over a whole corpus.

    Usage::

        generator = QueryPatternsGenerator(config)
        db = generator.generate_patterns(Path("rag-optimization/chunks"))
        save_patterns(db, Path("rag-optimization"), "query-patterns.json")
    """

    def __init__(
        self,
        config: ChunkrouteConfig | None = None,
        analyzer: QueryPatternAnalyzer | None = None,
        router: QueryRouter | None = None,
    ) -> None:
        self.config = config or default_config()
        self.analyzer = analyzer or QueryPatternAnalyzer()
        self.router = router or QueryRouter()

    def generate_patterns(self, chunks_dir: Path) -> PatternDatabase:
        """Load a corpus directory and build its pattern database.

        Raises:
            CorpusError: If the directory cannot be loaded.
        """
        records = load_corpus(chunks_dir, self.config.corpus.exclude)
        return self.generate_from_chunks(records)

    def generate_from_chunks(self, records: Iterable[Chunk | Mapping[str, Any]]) -> PatternDatabase:
        """Index ``records`` and build the pattern database from them."""
        index = self.router.index_chunks(records)

        questions = {
            chunk_id: self.analyzer.generate_questions_for_chunk(chunk)
            for chunk_id, chunk in index.by_id.items()
        }
        mappings = self._build_query_mappings(questions, index)
        statistics = self._build_statistics(index, mappings)

        logger.info(
            "Generated %d query mappings from %d chunks",
            len(mappings),
            len(index),
        )
        return PatternDatabase(
            categories={rule.name: _category_to_dict(rule) for rule in self.analyzer.rules},
            templates={k: list(v) for k, v in self.analyzer.question_templates.items()},
            concept_mappings=dict(self.analyzer.concept_mappings),
            routing_rules={
                name: _routing_rule_to_dict(rule) for name, rule in self.router.routing_rules.items()
            },
            mappings=mappings,
            statistics=statistics,
            generated_at=datetime.now(UTC).isoformat(),
        )

    def _build_query_mappings(
        self,
        questions: Mapping[str, list[str]],
        index: ChunkIndex,
    ) -> dict[str, dict[str, Any]]:
        top_n = self.config.generate.mapping_top_n
        mappings: dict[str, dict[str, Any]] = {}
        for chunk_questions in questions.values():
            for question in chunk_questions:
                analysis = self.analyzer.analyze_query(question)
                routed = self.router.route_query(analysis, index=index)
                mappings[question] = {
                    "primary_chunks": [r.chunk_id for r in routed[:top_n]],
                    "category": analysis.category,
                    "intent": analysis.intent,
                    "concepts": list(analysis.concepts),
                    "confidence": analysis.confidence,
                }
        return mappings

    def _build_statistics(
        self,
        index: ChunkIndex,
        mappings: Mapping[str, Mapping[str, Any]],
    ) -> dict[str, Any]:
        chunks = index.chunks
        by_type = Counter(c.metadata.chunk_type for c in chunks)
        by_complexity = Counter(c.metadata.complexity or "unknown" for c in chunks)
        by_category = Counter(str(m["category"]) for m in mappings.values())
        by_concept = Counter(tag for c in chunks for tag in c.metadata.semantic_tags)

        return {
            "total_chunks": len(chunks),
            "skipped_chunks": index.skipped,
            "chunks_by_type": dict(by_type),
            "questions_by_category": dict(by_category),
            "concepts_by_frequency": dict(by_concept.most_common(self.config.generate.top_concepts)),
            "complexity_distribution": dict(by_complexity),
        }

    def test_query(self, query: str, db: PatternDatabase | None = None) -> QueryTestResult:
        """Classify and route one query against the current index.

        When a pattern database is given, suggestions list questions of the
        same category and concept variants related to the query.
        """
        analysis = self.analyzer.analyze_query(query)
        results = self.router.route_query(analysis)
        return QueryTestResult(
            query=query,
            analysis=analysis,
            results=results,
            suggestions=self.generate_suggestions(analysis, db) if db is not None else [],
        )

    def generate_suggestions(self, analysis: QueryAnalysis, db: PatternDatabase) -> list[Suggestion]:
        limit = self.config.generate.suggestion_limit
        suggestions: list[Suggestion] = []

        if db.mappings:
            similar = [
                question
                for question, mapping in db.mappings.items()
                if mapping.get("category") == analysis.category
            ]
            suggestions.append(Suggestion("similar_questions", tuple(similar[:limit])))

        if analysis.concepts:
            if db.concept_mappings:
                wanted = set(analysis.concepts)
                related = [v for v, c in db.concept_mappings.items() if c in wanted]
            else:
                related = related_variants(analysis.concepts)
            suggestions.append(Suggestion("related_concepts", tuple(related[:limit])))

        return suggestions
