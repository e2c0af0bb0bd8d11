"""
Tests for the match service boundary.
"""

from datetime import datetime, timezone

import pytest

from volunteer_match.config import MatchingConfig, WeightsConfig
from volunteer_match.errors import NotFound, StoreUnavailable
from volunteer_match.matching.scorer import MatchScorer
from volunteer_match.matching.service import MatchService
from volunteer_match.storage.store import InMemoryStore

OLDER = datetime(2029, 1, 1, tzinfo=timezone.utc)
NEWER = datetime(2029, 6, 1, tzinfo=timezone.utc)


class FailingStore:
    """Store whose reads fail."""

    def __init__(self, volunteer=None, error=None):
        self.volunteer = volunteer
        self.error = error

    def get_volunteer(self, volunteer_id):
        if self.volunteer is None:
            raise StoreUnavailable("get_volunteer")
        return self.volunteer

    def list_open_events(self):
        raise self.error


class RecordingScorer(MatchScorer):
    """Scorer that remembers which events it was asked to score."""

    def __init__(self):
        super().__init__()
        self.seen = []

    def score(self, volunteer, event):
        self.seen.append(event.id)
        return super().score(volunteer, event)


@pytest.fixture
def catalog(make_event):
    """Events A (garden, Austin), B (full, Dallas), C (no skills, Austin)."""
    return [
        make_event("e-c", skills=[], location="Austin", slots=1, remaining=1, created_at=NEWER),
        make_event("e-b", skills=["carpentry"], location="Dallas", slots=2, remaining=0, created_at=OLDER),
        make_event("e-a", skills=["gardening"], location="Austin", slots=5, remaining=5, created_at=OLDER),
    ]


class TestMatchService:
    """Test the end-to-end matching pipeline."""

    def test_ranked_matches(self, volunteer, catalog, now):
        service = MatchService(InMemoryStore([volunteer], catalog, now=now))
        results = service.match("v-ana")

        assert [r.event.id for r in results] == ["e-a", "e-c"]
        assert results[0].score == 100
        assert results[0].why == ("Matches skill: gardening", "Located in your city")
        assert results[1].score == 100
        assert results[1].why == ("Located in your city",)

    def test_full_events_excluded(self, volunteer, catalog, now):
        results = MatchService(InMemoryStore([volunteer], catalog, now=now)).match("v-ana")
        assert "e-b" not in {r.event.id for r in results}

    def test_full_events_never_scored(self, volunteer, catalog, now):
        scorer = RecordingScorer()
        MatchService(InMemoryStore([volunteer], catalog, now=now), scorer=scorer).match("v-ana")
        assert sorted(scorer.seen) == ["e-a", "e-c"]

    def test_negative_remaining_excluded(self, volunteer, make_event, now):
        store = InMemoryStore([volunteer], [make_event("e-x", remaining=-4)], now=now)
        assert MatchService(store).match("v-ana") == []

    def test_empty_catalog(self, volunteer, now):
        assert MatchService(InMemoryStore([volunteer], [], now=now)).match("v-ana") == []

    def test_unknown_volunteer(self, catalog, now):
        with pytest.raises(NotFound) as exc_info:
            MatchService(InMemoryStore([], catalog, now=now)).match("v-missing")
        assert exc_info.value.volunteer_id == "v-missing"

    def test_base_only_match_kept(self, volunteer, make_event, now):
        store = InMemoryStore([volunteer], [make_event("e-x", skills=["welding"], location="Dallas")], now=now)
        results = MatchService(store).match("v-ana")
        assert len(results) == 1
        assert results[0].score == 20
        assert results[0].why == ()

    def test_limit(self, volunteer, catalog, now):
        results = MatchService(InMemoryStore([volunteer], catalog, now=now)).match("v-ana", limit=1)
        assert [r.event.id for r in results] == ["e-a"]

    def test_idempotent(self, volunteer, catalog, now):
        service = MatchService(InMemoryStore([volunteer], catalog, now=now))
        assert service.match("v-ana") == service.match("v-ana")

    def test_volunteer_lookup_failure_propagates(self):
        with pytest.raises(StoreUnavailable) as exc_info:
            MatchService(FailingStore()).match("v-ana")
        assert exc_info.value.operation == "get_volunteer"

    def test_event_listing_failure_propagates(self, volunteer):
        store = FailingStore(volunteer=volunteer, error=StoreUnavailable("list_open_events"))
        with pytest.raises(StoreUnavailable) as exc_info:
            MatchService(store).match("v-ana")
        assert exc_info.value.operation == "list_open_events"

    def test_other_store_errors_not_masked(self, volunteer):
        store = FailingStore(volunteer=volunteer, error=RuntimeError("boom"))
        with pytest.raises(RuntimeError, match="boom"):
            MatchService(store).match("v-ana")

    def test_from_config_uses_weights(self, volunteer, make_event, now):
        config = MatchingConfig(weights=WeightsConfig(base=10, skills=60, location=30))
        store = InMemoryStore([volunteer], [make_event("e-x", skills=["carpentry"], location="Dallas")], now=now)
        results = MatchService.from_config(store, config).match("v-ana")
        assert results[0].score == 10
