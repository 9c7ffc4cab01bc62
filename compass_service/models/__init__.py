"""
Models package for event recommendation data.

This package contains the pydantic models for profiles, events, ratings and
statuses, plus the ranking result container and output parsing helpers.
"""

from .events import (
    Event,
    EventStatus,
    UserEventStatus,
    UserProfile,
    UserRating,
)

from .ranking import (
    FallbackKind,
    RankingResult,
)

from .utils import (
    clean_json_response,
    coerce_ranked_ids,
    parse_ranked_ids,
)

__all__ = [
    # Input models
    "Event",
    "EventStatus",
    "UserEventStatus",
    "UserProfile",
    "UserRating",

    # Output models
    "FallbackKind",
    "RankingResult",

    # Utilities
    "clean_json_response",
    "coerce_ranked_ids",
    "parse_ranked_ids",
]
