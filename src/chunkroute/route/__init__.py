"""Query routing — chunk indices, routing rules, scoring."""

from chunkroute.route.index import ChunkIndex, build_index
from chunkroute.route.router import QueryRouter
from chunkroute.route.rules import DEFAULT_ROUTING_CATEGORY, ROUTING_RULES, get_routing_rule
from chunkroute.route.scoring import complexity_score, score_candidate, semantic_score

__all__ = [
    "DEFAULT_ROUTING_CATEGORY",
    "ROUTING_RULES",
    "ChunkIndex",
    "QueryRouter",
    "build_index",
    "complexity_score",
    "get_routing_rule",
    "score_candidate",
    "semantic_score",
]
