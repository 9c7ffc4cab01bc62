"""
Ranking output models.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Tuple

from .events import Event


class FallbackKind(str, Enum):
    """Which path produced a ranking; informational for UI messaging only."""

    NONE = "none"
    RATINGS_ONLY = "ratings-only"
    CAREER_AND_RATINGS = "career-and-ratings"


@dataclass(frozen=True, slots=True)
class RankingResult:
    """Final ordering returned by the reconciler."""

    ordered_events: Tuple[Event, ...]
    used_fallback: bool = False
    fallback_kind: FallbackKind = FallbackKind.NONE
    scores: Dict[str, float] = field(default_factory=dict)

    @property
    def ordered_ids(self) -> List[str]:
        return [event.id for event in self.ordered_events]

    def to_payload(self) -> Dict[str, Any]:
        """Convert to the JSON response shape used by the dashboard."""
        return {
            "rankedEvents": [event.to_payload() for event in self.ordered_events],
            "usedFallback": self.used_fallback,
            "fallbackKind": self.fallback_kind.value,
        }
