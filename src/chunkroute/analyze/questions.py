"""Question templates expanded per chunk type."""

from __future__ import annotations

from types import MappingProxyType
from typing import TYPE_CHECKING

from chunkroute.types import CONCEPTUAL, DEEP_DIVE_SECTION, FUNCTION_REFERENCE

if TYPE_CHECKING:
    from collections.abc import Mapping

    from chunkroute.types import Chunk

__all__ = ["DEFAULT_CONCEPT", "QUESTION_TEMPLATES", "generate_questions_for_chunk"]

DEFAULT_CONCEPT = "this concept"

QUESTION_TEMPLATES: Mapping[str, tuple[str, ...]] = MappingProxyType(
    {
        FUNCTION_REFERENCE: (
            "How do I use {function}?",
            "What does {function} do?",
            "What are the parameters of {function}?",
            "What does {function} return?",
            "When should I use {function}?",
            "{function} example",
            "{function} usage",
            "{function} documentation",
        ),
        DEEP_DIVE_SECTION: (
            "How does {concept} work?",
            "What is {concept}?",
            "{concept} best practices",
            "{concept} patterns",
            "{concept} examples",
            "{concept} implementation",
            "{concept} troubleshooting",
            "{concept} performance",
        ),
        CONCEPTUAL: (
            "What is {concept}?",
            "{concept} overview",
            "{concept} explanation",
            "{concept} architecture",
            "{concept} design",
            "{concept} philosophy",
        ),
    }
)


def generate_questions_for_chunk(chunk: Chunk) -> list[str]:
    """Expand the question templates for a chunk's type.

    ``{function}`` is replaced only when the chunk has a function name;
    ``{concept}`` is the chunk title, else its metadata concept, else
    ``DEFAULT_CONCEPT``. Chunk types without templates yield an empty list.
    """
    templates = QUESTION_TEMPLATES.get(chunk.metadata.chunk_type, ())
    function_name = chunk.metadata.function_name
    concept = chunk.title or chunk.metadata.concept or DEFAULT_CONCEPT

    questions: list[str] = []
    for template in templates:
        question = template
        if function_name:
            question = question.replace("{function}", function_name)
        questions.append(question.replace("{concept}", concept))
    return questions
