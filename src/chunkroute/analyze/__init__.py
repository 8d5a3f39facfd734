"""Query analysis — category rules, keyword fallback, question templates."""

from chunkroute.analyze.analyzer import (
    DEFAULT_INTENT,
    KEYWORD_CATEGORY,
    KEYWORD_CONFIDENCE,
    PATTERN_CONFIDENCE,
    QueryPatternAnalyzer,
)
from chunkroute.analyze.patterns import CATEGORY_RULES, get_category_rule
from chunkroute.analyze.questions import QUESTION_TEMPLATES, generate_questions_for_chunk

__all__ = [
    "CATEGORY_RULES",
    "DEFAULT_INTENT",
    "KEYWORD_CATEGORY",
    "KEYWORD_CONFIDENCE",
    "PATTERN_CONFIDENCE",
    "QUESTION_TEMPLATES",
    "QueryPatternAnalyzer",
    "generate_questions_for_chunk",
    "get_category_rule",
]
