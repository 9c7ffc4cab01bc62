"""
Event catalog and user-context models.

These mirror the documents the dashboard collects from the event, profile,
rating and per-user status stores. Field aliases keep the camelCase wire names
used by the frontend while the Python side uses snake_case.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


def timestamp_to_datetime(value: Any) -> Any:
    """Convert a serialized Firestore timestamp into an aware datetime.

    Both the client SDK shape (``seconds``/``nanoseconds``) and the admin SDK
    shape (``_seconds``/``_nanoseconds``) are recognised. Any other value is
    returned unchanged.
    """
    if not isinstance(value, dict):
        return value
    seconds = value.get("seconds", value.get("_seconds"))
    nanos = value.get("nanoseconds", value.get("_nanoseconds", 0)) or 0
    if not isinstance(seconds, (int, float)) or not isinstance(nanos, (int, float)):
        return value
    return datetime.fromtimestamp(seconds + nanos / 1e9, tz=timezone.utc)


class UserProfile(BaseModel):
    """Declared major and career goal of a student."""
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    major: str = Field(default="", description="Declared major")
    career_goal: str = Field(default="", alias="careerGoal", description="Career goal")


class Event(BaseModel):
    """A campus event as stored in the event catalog.

    Unknown fields are kept so the event can be echoed back unchanged.
    """
    model_config = ConfigDict(populate_by_name=True, extra="allow", frozen=True)

    id: str = Field(min_length=1, description="Unique event identifier")
    title: str = Field(default="", description="Event title")
    description: str = Field(default="", description="Event description")
    career_paths: List[str] = Field(default_factory=list, alias="careerPaths")
    skills_learned: List[str] = Field(default_factory=list, alias="skillsLearned")
    date: Optional[Any] = Field(default=None, description="Display date")
    location: Optional[str] = Field(default=None, description="Display location")
    club: str = Field(default="", description="Hosting club")
    average_rating: Optional[float] = Field(default=None, ge=0, le=5, alias="averageRating")
    rating_count: Optional[int] = Field(default=None, ge=0, alias="ratingCount")
    total_ratings: Optional[int] = Field(default=None, ge=0, alias="totalRatings")
    deadline: Optional[Any] = Field(default=None, description="Registration deadline")

    @field_validator("date", "deadline", mode="before")
    @classmethod
    def _normalize_timestamp(cls, value: Any) -> Any:
        # Display-only; never reject an event over its date shape
        return timestamp_to_datetime(value)

    def to_payload(self) -> dict:
        """Serialize with wire names, dropping unset optional fields."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class UserRating(BaseModel):
    """A 1-5 star rating a user gave to an attended event."""
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    user_id: str = Field(default="", alias="userId")
    event_id: str = Field(alias="eventId")
    rating: int = Field(ge=1, le=5)
    event_title: Optional[str] = Field(default=None, alias="eventTitle")


class EventStatus(str, Enum):
    """Per-user decision recorded against an event."""

    GOING = "going"
    ATTENDED = "attended"
    SKIPPED = "skipped"

    @classmethod
    def is_valid(cls, status: str) -> bool:
        """Check if a status string is valid."""
        try:
            cls(status)
            return True
        except ValueError:
            return False


class UserEventStatus(BaseModel):
    """Status of one event for one user."""
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    user_id: Optional[str] = Field(default=None, alias="userId")
    event_id: str = Field(alias="eventId")
    status: EventStatus
