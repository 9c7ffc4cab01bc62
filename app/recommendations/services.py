"""
Recommendation services for the dashboard API.
"""
import logging
from typing import Any, Dict

from compass_service.models import FallbackKind, RankingResult
from compass_service.recommendations import (
    EmptyCandidateSet,
    RecommendationReconciler,
    exclude_decided_events,
)
from .models import RecommendationRequest

_LOG = logging.getLogger("recommendations")


class RecommendationService:
    """Filters candidates and ranks them for one dashboard request."""

    def __init__(self, reconciler: RecommendationReconciler, include_going: bool = False):
        self.reconciler = reconciler
        self.include_going = include_going

    def recommend(self, req: RecommendationRequest) -> Dict[str, Any]:
        """Return the response payload for a parsed request."""
        candidates = exclude_decided_events(req.events, req.statuses, include_going=self.include_going)
        excluded = len(req.events) - len(candidates)
        if excluded:
            _LOG.info("Excluded %d already decided events", excluded)

        career_considered = bool(req.profile.career_goal) and any(
            event.career_paths for event in candidates
        )

        _LOG.info("Analyzing %d events for %s", len(candidates), req.profile.career_goal or "unknown goal")
        try:
            result = self.reconciler.reconcile(
                req.profile,
                candidates,
                req.ratings,
                career_data_considered=career_considered,
            )
        except EmptyCandidateSet:
            return {
                "rankedEvents": [],
                "usedFallback": False,
                "fallbackKind": FallbackKind.NONE.value,
                "reasoning": "No candidate events left after excluding decided events",
            }

        payload = result.to_payload()
        payload["reasoning"] = self._reasoning(result, req.profile.career_goal)
        return payload

    @staticmethod
    def _reasoning(result: RankingResult, career_goal: str) -> str:
        if not result.used_fallback:
            return f"AI ranked {len(result.ordered_events)} events for {career_goal or 'unknown goal'}"
        if result.fallback_kind == FallbackKind.CAREER_AND_RATINGS:
            return "Fallback sorted by rating and popularity; career paths considered upstream"
        return "Fallback sorted by rating and popularity"
