"""
Request models for the recommendations API.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List

from compass_service.models import Event, UserEventStatus, UserProfile, UserRating


class MissingInputError(ValueError):
    """The request has no profile or no events."""


@dataclass
class RecommendationRequest:
    """Parsed body of ``POST /api/recommendations``."""

    profile: UserProfile
    events: List[Event]
    ratings: List[UserRating] = field(default_factory=list)
    statuses: List[UserEventStatus] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'RecommendationRequest':
        """Build from the JSON body.

        Raises:
            MissingInputError: if ``userProfile`` or ``events`` is missing or empty
            ValueError: if a collection field is not a JSON array
            pydantic.ValidationError: if any item fails validation
        """
        if not isinstance(data, dict) or not data.get("userProfile") or not data.get("events"):
            raise MissingInputError("Missing userProfile or events")

        events = _as_list(data, "events")
        ratings = _as_list(data, "userRatings")
        statuses = _as_list(data, "userEvents")

        return cls(
            profile=UserProfile.model_validate(data["userProfile"]),
            events=[Event.model_validate(e) for e in events],
            ratings=[UserRating.model_validate(r) for r in ratings],
            statuses=[UserEventStatus.model_validate(s) for s in statuses],
        )


def _as_list(data: Dict[str, Any], key: str) -> List[Any]:
    value = data.get(key)
    if value is None:
        return []
    if not isinstance(value, list):
        raise ValueError(f"{key} must be a list, got {type(value).__name__}")
    return value
