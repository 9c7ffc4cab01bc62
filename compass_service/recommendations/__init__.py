"""
Event recommendation package.

Provides the reconciler that merges an external (LLM) ranking with the
candidate set, the deterministic fallback scorer, and the status filter that
runs before ranking. Nothing here depends on Flask so it can be reused by the
web layer or batch tooling.
"""

from .errors import (
    EmptyCandidateSet,
    ExternalCallError,
    RecommendationError,
    UnparseableRankingOutput,
)
from .filters import can_rate, exclude_decided_events, next_status
from .llm_ranker import LLMRanker
from .reconciler import (
    ExternalRank,
    RecommendationReconciler,
    merge_ranking,
    reconcile,
)
from .scoring import FallbackScorer, fallback_sort, popularity, rating_count, rating_stats

__all__ = [
    "EmptyCandidateSet",
    "ExternalCallError",
    "ExternalRank",
    "FallbackScorer",
    "LLMRanker",
    "RecommendationError",
    "RecommendationReconciler",
    "UnparseableRankingOutput",
    "can_rate",
    "exclude_decided_events",
    "fallback_sort",
    "merge_ranking",
    "next_status",
    "popularity",
    "rating_count",
    "rating_stats",
    "reconcile",
]
