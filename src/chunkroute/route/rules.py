"""Routing rules per query category."""

from __future__ import annotations

from types import MappingProxyType
from typing import TYPE_CHECKING

from chunkroute.types import (
    CONCEPTUAL,
    DEEP_DIVE_SECTION,
    FUNCTION_REFERENCE,
    RoutingRule,
    ScoringWeights,
)

if TYPE_CHECKING:
    from collections.abc import Mapping

__all__ = ["DEFAULT_ROUTING_CATEGORY", "ROUTING_RULES", "get_routing_rule"]

# Categories without a rule of their own (including keyword-based) route with this one.
DEFAULT_ROUTING_CATEGORY = "what-is-definition"

ROUTING_RULES: Mapping[str, RoutingRule] = MappingProxyType(
    {
        "how-to-usage": RoutingRule(
            primary_targets=(FUNCTION_REFERENCE,),
            secondary_targets=(DEEP_DIVE_SECTION,),
            max_results=5,
            scoring_weights=ScoringWeights(
                exact_match=10, semantic_match=7, category_match=5, complexity_match=3
            ),
        ),
        "what-is-definition": RoutingRule(
            primary_targets=(DEEP_DIVE_SECTION, CONCEPTUAL),
            secondary_targets=(FUNCTION_REFERENCE,),
            max_results=3,
            scoring_weights=ScoringWeights(
                exact_match=10, semantic_match=8, category_match=6, complexity_match=2
            ),
        ),
        "troubleshooting": RoutingRule(
            primary_targets=(DEEP_DIVE_SECTION,),
            secondary_targets=(FUNCTION_REFERENCE,),
            max_results=7,
            scoring_weights=ScoringWeights(
                exact_match=10, semantic_match=8, category_match=4, complexity_match=6
            ),
        ),
        "api-reference": RoutingRule(
            primary_targets=(FUNCTION_REFERENCE,),
            secondary_targets=(DEEP_DIVE_SECTION,),
            max_results=3,
            scoring_weights=ScoringWeights(
                exact_match=15, semantic_match=5, category_match=3, complexity_match=2
            ),
        ),
        "comparison": RoutingRule(
            primary_targets=(DEEP_DIVE_SECTION, CONCEPTUAL),
            secondary_targets=(FUNCTION_REFERENCE,),
            max_results=4,
            scoring_weights=ScoringWeights(
                exact_match=8, semantic_match=10, category_match=6, complexity_match=4
            ),
        ),
    }
)


def get_routing_rule(category: str) -> RoutingRule:
    """Return the routing rule for ``category``, or the default rule.

    Never raises: unknown categories route with the rule registered for
    ``DEFAULT_ROUTING_CATEGORY``.
    """
    rule = ROUTING_RULES.get(category)
    if rule is None:
        return ROUTING_RULES[DEFAULT_ROUTING_CATEGORY]
    return rule
