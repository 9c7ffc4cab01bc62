"""
Deterministic fallback scoring.

Used when the external ranker is unavailable: every event gets a finite score
blending its average rating with a log-dampened popularity term, so a single
5-star rating does not outrank a well-established event with many slightly
lower ratings.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence, Tuple

from ..models import Event, UserRating

DEFAULT_RATING_WEIGHT = 0.7
DEFAULT_POPULARITY_WEIGHT = 0.3


@dataclass(slots=True)
class FallbackScorer:
    """Scores events by ``rating * w_r + ln(count + 1) * w_p``."""

    rating_weight: float = DEFAULT_RATING_WEIGHT
    popularity_weight: float = DEFAULT_POPULARITY_WEIGHT

    def score(self, event: Event) -> float:
        average = event.average_rating or 0.0
        return average * self.rating_weight + popularity(event) * self.popularity_weight

    def score_all(self, events: Sequence[Event]) -> Dict[str, float]:
        return {event.id: self.score(event) for event in events}

    def sort(self, events: Sequence[Event]) -> List[Event]:
        """Sort descending by score; ties keep input order (``sorted`` is stable)."""
        return sorted(events, key=self.score, reverse=True)


def rating_count(event: Event) -> int:
    """Number of ratings behind ``average_rating``.

    ``ratingCount`` wins over ``totalRatings``; with neither present the event
    counts as one rating so an uncounted average still gets a popularity term.
    """
    if event.rating_count is not None:
        return event.rating_count
    if event.total_ratings is not None:
        return event.total_ratings
    return 1


def popularity(event: Event) -> float:
    return math.log(rating_count(event) + 1)


def rating_stats(ratings: Sequence[UserRating], event_id: str) -> Tuple[Optional[float], int]:
    """Recompute ``(averageRating, totalRatings)`` for one event.

    Returns ``(None, 0)`` when the event has no ratings.
    """
    values = [r.rating for r in ratings if r.event_id == event_id]
    if not values:
        return None, 0
    return sum(values) / len(values), len(values)


def fallback_sort(events: Sequence[Event]) -> List[Event]:
    """Sort with the default weights."""
    return FallbackScorer().sort(events)
