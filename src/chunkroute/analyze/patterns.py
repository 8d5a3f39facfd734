"""Query category rules.

``CATEGORY_RULES`` is tried in definition order and each rule's patterns in
list order; the first matching pattern decides the category. Captured groups
become the query's raw concepts.
"""

from __future__ import annotations

import re

from chunkroute.types import (
    CONCEPTUAL,
    DEEP_DIVE_SECTION,
    FUNCTION_REFERENCE,
    CategoryRule,
)

__all__ = ["CATEGORY_RULES", "get_category_rule"]


def _rule(
    name: str,
    patterns: list[str],
    intent: str,
    priority: str,
    expected_chunk_types: tuple[str, ...],
    response_format: str,
) -> CategoryRule:
    return CategoryRule(
        name=name,
        patterns=tuple(re.compile(p, re.IGNORECASE) for p in patterns),
        intent=intent,
        priority=priority,
        expected_chunk_types=expected_chunk_types,
        response_format=response_format,
    )


CATEGORY_RULES: tuple[CategoryRule, ...] = (
    _rule(
        "how-to-usage",
        [
            r"^how (?:do|can) i (?:use|implement|setup|configure) (.+)",
            r"^how to (?:use|implement|setup|configure) (.+)",
            r"^(?:usage|example|implementation) (?:of|for) (.+)",
            r"^(.+) usage$",
            r"^(.+) example$",
            r"^(.+) implementation$",
        ],
        intent="usage-guidance",
        priority="high",
        expected_chunk_types=(FUNCTION_REFERENCE, DEEP_DIVE_SECTION),
        response_format="step-by-step",
    ),
    _rule(
        "what-is-definition",
        [
            r"^what is (.+)",
            r"^what does (.+) do",
            r"^(.+) definition$",
            r"^define (.+)",
            r"^explain (.+)",
            r"^(.+) explanation$",
        ],
        intent="conceptual-understanding",
        priority="high",
        expected_chunk_types=(DEEP_DIVE_SECTION, CONCEPTUAL, FUNCTION_REFERENCE),
        response_format="definition-with-examples",
    ),
    _rule(
        "when-to-use",
        [
            r"^when (?:should|would) i (?:use|choose) (.+)",
            r"^when to (?:use|choose) (.+)",
            r"^(?:use cases|scenarios) (?:for|of) (.+)",
            r"^best practices (?:for|with) (.+)",
            r"^(.+) best practices$",
        ],
        intent="decision-guidance",
        priority="medium",
        expected_chunk_types=(DEEP_DIVE_SECTION, CONCEPTUAL),
        response_format="scenarios-with-recommendations",
    ),
    _rule(
        "troubleshooting",
        [
            r"^(?:how to )?(?:fix|solve|resolve) (.+)",
            r"^(.+) (?:error|issue|problem)$",
            r"^troubleshoot(?:ing)? (.+)",
            r"^debug(?:ging)? (.+)",
            r"^(.+) (?:not working|fails|broken)$",
            r"^why (?:does|is) (.+) (?:not working|failing|broken)",
        ],
        intent="problem-solving",
        priority="high",
        expected_chunk_types=(DEEP_DIVE_SECTION, FUNCTION_REFERENCE),
        response_format="problem-solution",
    ),
    _rule(
        "comparison",
        [
            r"^(.+) vs (.+)",
            r"^difference between (.+) and (.+)",
            r"^compare (.+) (?:and|with) (.+)",
            r"^(.+) or (.+)",
            r"^(?:which|what) is better (.+) or (.+)",
        ],
        intent="comparison-analysis",
        priority="medium",
        expected_chunk_types=(DEEP_DIVE_SECTION, CONCEPTUAL),
        response_format="comparison-table",
    ),
    _rule(
        "performance",
        [
            r"^(.+) performance$",
            r"^(?:optimize|optimization) (.+)",
            r"^(.+) (?:speed|efficiency|benchmark)$",
            r"^(?:fast|slow|memory) (.+)",
            r"^performance (?:of|with) (.+)",
        ],
        intent="performance-optimization",
        priority="medium",
        expected_chunk_types=(DEEP_DIVE_SECTION, FUNCTION_REFERENCE),
        response_format="performance-analysis",
    ),
    _rule(
        "integration",
        [
            r"^(.+) (?:with|in) (?:react|nextjs|express|node)",
            r"^(?:react|nextjs|express|node) (.+)",
            r"^integrate (.+) with (.+)",
            r"^(.+) integration$",
            r"^framework (.+)",
        ],
        intent="integration-guidance",
        priority="high",
        expected_chunk_types=(DEEP_DIVE_SECTION, FUNCTION_REFERENCE),
        response_format="integration-steps",
    ),
    _rule(
        "api-reference",
        [
            r"^(.+) parameters$",
            r"^(.+) (?:signature|interface|type)$",
            r"^(.+) (?:returns?|return type)$",
            r"^(.+) (?:throws?|exceptions?)$",
            r"^(.+) (?:options|config|configuration)$",
        ],
        intent="api-documentation",
        priority="high",
        expected_chunk_types=(FUNCTION_REFERENCE, DEEP_DIVE_SECTION),
        response_format="api-documentation",
    ),
    _rule(
        "testing",
        [
            r"^(?:test|testing) (.+)",
            r"^(?:mock|mocking) (.+)",
            r"^(.+) (?:test|testing)$",
            r"^(?:unit|integration) test (.+)",
            r"^test (?:cases|scenarios) (?:for|of) (.+)",
        ],
        intent="testing-guidance",
        priority="low",
        expected_chunk_types=(DEEP_DIVE_SECTION, FUNCTION_REFERENCE),
        response_format="testing-examples",
    ),
)

_RULES_BY_NAME: dict[str, CategoryRule] = {rule.name: rule for rule in CATEGORY_RULES}


def get_category_rule(name: str) -> CategoryRule | None:
    """Return the category rule registered under ``name``, if any."""
    return _RULES_BY_NAME.get(name)
