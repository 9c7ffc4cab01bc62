"""
Factory for creating the recommendations module.
"""
from pathlib import Path
from typing import Optional

from compass_service.recommendations import (
    ExternalRank,
    FallbackScorer,
    LLMRanker,
    RecommendationReconciler,
)
from .routes import create_recommendation_routes
from .services import RecommendationService


def create_recommendations_module(
    llm_config,
    ranking_config,
    external_rank: Optional[ExternalRank] = None,
    prompts_dir: Optional[Path] = None,
) -> dict:
    """
    Create the recommendations module with all its components.

    Args:
        llm_config: LLMConfig used by the default LLM ranker
        ranking_config: RankingConfig with timeout and fallback weights
        external_rank: Ranking callable; defaults to an LLMRanker
        prompts_dir: Directory holding rank_events.md (package prompts by default)

    Returns:
        Dictionary containing:
            - reconciler: RecommendationReconciler instance
            - service: RecommendationService instance
            - blueprint: Flask blueprint for routes
    """
    if external_rank is None:
        external_rank = LLMRanker(
            llm_config,
            prompts_dir=prompts_dir,
            timeout=ranking_config.timeout_seconds,
        )

    reconciler = RecommendationReconciler(
        external_rank,
        timeout=ranking_config.timeout_seconds,
        scorer=FallbackScorer(
            rating_weight=ranking_config.rating_weight,
            popularity_weight=ranking_config.popularity_weight,
        ),
    )
    service = RecommendationService(reconciler, include_going=ranking_config.include_going)
    blueprint = create_recommendation_routes(service)

    return {
        "reconciler": reconciler,
        "service": service,
        "blueprint": blueprint
    }
