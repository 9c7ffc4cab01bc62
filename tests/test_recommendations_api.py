"""
Tests for the recommendations HTTP endpoint.
"""

import pytest

from config_manager import ConfigManager
from app.main import create_app


EVENTS = [
    {"id": "e1", "title": "Resume Clinic", "averageRating": 3.0, "totalRatings": 2},
    {"id": "e2", "title": "SQL Workshop", "careerPaths": ["Data Analyst"],
     "averageRating": 4.5, "ratingCount": 20, "imageUrl": "/img/sql.png"},
    {"id": "e3", "title": "Hack Night"},
]

PROFILE = {"major": "BSc Statistics", "careerGoal": "Data Analyst"}


def _make_client(tmp_path, monkeypatch, external_rank):
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("RANKING_TIMEOUT_SECONDS", raising=False)
    flask_app = create_app(ConfigManager(str(tmp_path / "config.json")), external_rank=external_rank)
    flask_app.config.update(TESTING=True)
    return flask_app.test_client()


@pytest.fixture()
def calls():
    return []


@pytest.fixture()
def client(tmp_path, monkeypatch, calls):
    """Client whose ranker returns events in reverse input order."""
    def rank(profile, events, ratings):
        calls.append([e.id for e in events])
        return [e.id for e in reversed(events)]

    return _make_client(tmp_path, monkeypatch, rank)


@pytest.fixture()
def failing_client(tmp_path, monkeypatch):
    def rank(profile, events, ratings):
        raise TimeoutError("gemini timed out")

    return _make_client(tmp_path, monkeypatch, rank)


class TestRecommendationsEndpoint:

    def test_ai_ranking(self, client):
        resp = client.post("/api/recommendations", json={
            "userProfile": PROFILE,
            "events": EVENTS,
            "userRatings": [{"userId": "u1", "eventId": "old", "rating": 5}],
        })

        assert resp.status_code == 200
        data = resp.get_json()
        assert [e["id"] for e in data["rankedEvents"]] == ["e3", "e2", "e1"]
        assert data["usedFallback"] is False
        assert data["fallbackKind"] == "none"
        assert data["reasoning"] == "AI ranked 3 events for Data Analyst"

    def test_events_are_echoed_with_extra_fields(self, client):
        resp = client.post("/api/recommendations", json={"userProfile": PROFILE, "events": EVENTS})

        sql = next(e for e in resp.get_json()["rankedEvents"] if e["id"] == "e2")
        assert sql["imageUrl"] == "/img/sql.png"
        assert sql["careerPaths"] == ["Data Analyst"]

    def test_decided_events_are_excluded_before_ranking(self, client, calls):
        resp = client.post("/api/recommendations", json={
            "userProfile": PROFILE,
            "events": EVENTS,
            "userEvents": [
                {"userId": "u1", "eventId": "e1", "status": "attended"},
                {"userId": "u1", "eventId": "e3", "status": "skipped"},
            ],
        })

        assert resp.status_code == 200
        assert [e["id"] for e in resp.get_json()["rankedEvents"]] == ["e2"]
        assert calls == [["e2"]]

    def test_all_events_decided_returns_empty_state(self, client, calls):
        resp = client.post("/api/recommendations", json={
            "userProfile": PROFILE,
            "events": EVENTS[:1],
            "userEvents": [{"eventId": "e1", "status": "going"}],
        })

        assert resp.status_code == 200
        data = resp.get_json()
        assert data["rankedEvents"] == []
        assert data["usedFallback"] is False
        assert calls == []

    def test_fallback_when_ranker_fails(self, failing_client):
        resp = failing_client.post("/api/recommendations", json={"userProfile": PROFILE, "events": EVENTS})

        assert resp.status_code == 200
        data = resp.get_json()
        assert data["usedFallback"] is True
        # e2 carries career paths, so career data was considered upstream
        assert data["fallbackKind"] == "career-and-ratings"
        assert [e["id"] for e in data["rankedEvents"]] == ["e2", "e1", "e3"]

    def test_ratings_only_fallback_without_career_paths(self, failing_client):
        events = [e for e in EVENTS if "careerPaths" not in e]

        resp = failing_client.post("/api/recommendations", json={"userProfile": PROFILE, "events": events})

        assert resp.get_json()["fallbackKind"] == "ratings-only"

    @pytest.mark.parametrize("body", [
        {},
        {"events": EVENTS},
        {"userProfile": PROFILE},
        {"userProfile": PROFILE, "events": []},
    ])
    def test_missing_inputs(self, client, body):
        resp = client.post("/api/recommendations", json=body)

        assert resp.status_code == 400
        assert resp.get_json()["error"] == "Missing userProfile or events"

    def test_non_json_body(self, client):
        resp = client.post("/api/recommendations", data="hello", content_type="text/plain")

        assert resp.status_code == 400

    def test_invalid_rating_is_rejected(self, client):
        resp = client.post("/api/recommendations", json={
            "userProfile": PROFILE,
            "events": EVENTS,
            "userRatings": [{"userId": "u1", "eventId": "e1", "rating": 9}],
        })

        assert resp.status_code == 400
        assert resp.get_json()["error"] == "Invalid request"

    def test_firestore_timestamp_fields_are_accepted(self, client):
        stamp = {"seconds": 1735689600, "nanoseconds": 0}
        events = [dict(EVENTS[0], deadline=stamp, date=stamp), EVENTS[1]]

        resp = client.post("/api/recommendations", json={"userProfile": PROFILE, "events": events})

        assert resp.status_code == 200
        echoed = next(e for e in resp.get_json()["rankedEvents"] if e["id"] == "e1")
        assert echoed["deadline"].startswith("2025-01-01T00:00:00")

    @pytest.mark.parametrize("field, value", [
        ("userRatings", 5),
        ("userEvents", "going"),
        ("events", {"id": "e1"}),
    ])
    def test_non_list_collections_are_rejected(self, client, field, value):
        body = {"userProfile": PROFILE, "events": EVENTS}
        body[field] = value

        resp = client.post("/api/recommendations", json=body)

        assert resp.status_code == 400
        data = resp.get_json()
        assert data["error"] == "Invalid request"
        assert field in data["details"]

    def test_reasoning_without_career_goal(self, client):
        resp = client.post("/api/recommendations", json={
            "userProfile": {"major": "BSc Statistics"},
            "events": EVENTS,
        })

        assert resp.get_json()["reasoning"] == "AI ranked 3 events for unknown goal"

    def test_duplicate_event_ids_are_rejected(self, client):
        resp = client.post("/api/recommendations", json={
            "userProfile": PROFILE,
            "events": [{"id": "e1"}, {"id": "e1"}],
        })

        assert resp.status_code == 400


def test_health(client):
    resp = client.get("/api/health")

    assert resp.status_code == 200
    assert resp.get_json() == {"status": "UP", "service": "career-compass"}
