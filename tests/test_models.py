"""
Tests for the event models and ranker output parsing.
"""

import pytest
from pydantic import ValidationError

from compass_service.models import (
    Event,
    FallbackKind,
    RankingResult,
    UserProfile,
    UserRating,
    clean_json_response,
    parse_ranked_ids,
)


class TestEventModel:

    def test_camel_case_fields_are_accepted(self):
        event = Event.model_validate({
            "id": "e1",
            "title": "Intro to SQL",
            "careerPaths": ["Data Analyst"],
            "skillsLearned": ["SQL"],
            "averageRating": 4.2,
            "totalRatings": 12,
        })

        assert event.career_paths == ["Data Analyst"]
        assert event.skills_learned == ["SQL"]
        assert event.average_rating == 4.2
        assert event.total_ratings == 12
        assert event.rating_count is None

    def test_extra_fields_are_echoed(self):
        event = Event.model_validate({"id": "e1", "imageUrl": "https://x/y.png"})

        payload = event.to_payload()

        assert payload["imageUrl"] == "https://x/y.png"
        assert "averageRating" not in payload

    def test_deadline_string_is_echoed_unchanged(self):
        event = Event.model_validate({"id": "e1", "deadline": "2025-03-01T12:00:00Z"})

        assert event.to_payload()["deadline"] == "2025-03-01T12:00:00Z"

    @pytest.mark.parametrize("stamp", [
        {"seconds": 1735689600, "nanoseconds": 0},
        {"_seconds": 1735689600, "_nanoseconds": 500000000},
    ])
    def test_firestore_timestamps_become_datetimes(self, stamp):
        event = Event.model_validate({"id": "e1", "deadline": stamp, "date": stamp})

        assert event.deadline == event.date
        assert event.deadline.year == 2025
        assert event.deadline.tzinfo is not None
        assert event.to_payload()["deadline"].startswith("2025-01-01T00:00:00")

    def test_unrecognised_date_shapes_are_kept(self):
        event = Event.model_validate({"id": "e1", "date": {"label": "Week 3"}})

        assert event.date == {"label": "Week 3"}

    @pytest.mark.parametrize("bad", [
        {"id": ""},
        {"id": "e1", "averageRating": 7},
        {"id": "e1", "ratingCount": -1},
    ])
    def test_invalid_events_are_rejected(self, bad):
        with pytest.raises(ValidationError):
            Event.model_validate(bad)


def test_rating_must_be_between_one_and_five():
    assert UserRating(userId="u", eventId="e", rating=1).rating == 1
    with pytest.raises(ValidationError):
        UserRating(userId="u", eventId="e", rating=0)
    with pytest.raises(ValidationError):
        UserRating(userId="u", eventId="e", rating=6)


def test_profile_alias():
    profile = UserProfile.model_validate({"major": "CS", "careerGoal": "SWE"})

    assert profile.career_goal == "SWE"


def test_ranking_result_payload():
    result = RankingResult(
        ordered_events=(Event(id="b"), Event(id="a")),
        used_fallback=True,
        fallback_kind=FallbackKind.RATINGS_ONLY,
    )

    assert result.to_payload() == {
        "rankedEvents": [{"id": "b", "title": "", "description": "", "careerPaths": [],
                          "skillsLearned": [], "club": ""},
                         {"id": "a", "title": "", "description": "", "careerPaths": [],
                          "skillsLearned": [], "club": ""}],
        "usedFallback": True,
        "fallbackKind": "ratings-only",
    }


class TestRankedIdParsing:

    @pytest.mark.parametrize("text", [
        '["id2","id1"]',
        '```json\n["id2","id1"]\n```',
        '```\n["id2", "id1"]\n```',
        '```JSON ["id2","id1"] ```',
        'Here is the ranking:\n["id2", "id1"]',
        '```json\n["id2","id1"]',
    ])
    def test_wrapped_arrays(self, text):
        assert parse_ranked_ids(text) == ["id2", "id1"]

    def test_empty_array(self):
        assert parse_ranked_ids("[]") == []

    @pytest.mark.parametrize("text", [
        "",
        "no ranking today",
        '{"ids": ["a"]}',
        '[1, 2]',
        '"id1"',
        '[["nested"]]',
    ])
    def test_unparseable(self, text):
        with pytest.raises(ValueError):
            parse_ranked_ids(text)

    def test_clean_json_response_without_fence(self):
        assert clean_json_response('  ["a"]  ') == '["a"]'
