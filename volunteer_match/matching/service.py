"""Match service: the boundary between the store and the matching pipeline."""

import logging
from typing import TYPE_CHECKING, List, Optional

from volunteer_match.errors import NotFound
from volunteer_match.matching.capacity import CapacityFilter
from volunteer_match.matching.ranker import MatchResult, Ranker
from volunteer_match.matching.scorer import MatchScorer, ScoreWeights

if TYPE_CHECKING:
    from volunteer_match.config import MatchingConfig
    from volunteer_match.storage.store import EventStore

logger = logging.getLogger(__name__)


class MatchService:
    """Loads a volunteer and the open events, then filters, scores and ranks.

    Holds no per-request state; one instance can serve concurrent requests.
    Store failures propagate unchanged.
    """

    def __init__(
        self,
        store: "EventStore",
        scorer: Optional[MatchScorer] = None,
        ranker: Optional[Ranker] = None,
        capacity_filter: Optional[CapacityFilter] = None,
    ):
        self.store = store
        self.scorer = scorer or MatchScorer()
        self.ranker = ranker or Ranker()
        self.capacity_filter = capacity_filter or CapacityFilter()

    @classmethod
    def from_config(cls, store: "EventStore", config: "MatchingConfig") -> "MatchService":
        """Build a service using the weights from a MatchingConfig."""
        weights = ScoreWeights(**config.weights.model_dump())
        return cls(store, scorer=MatchScorer(weights=weights))

    def match(self, volunteer_id: str, limit: Optional[int] = None) -> List[MatchResult]:
        """Rank open events for a volunteer.

        Args:
            volunteer_id: Identifier of the volunteer to match
            limit: Optional top-N window

        Returns:
            MatchResults, best first. Empty when no event has open slots.

        Raises:
            NotFound: If the volunteer does not exist
            StoreUnavailable: If a store read fails
        """
        volunteer = self.store.get_volunteer(volunteer_id)
        if volunteer is None:
            raise NotFound(volunteer_id)

        events = self.store.list_open_events()
        eligible = self.capacity_filter.filter(events)
        logger.info(
            f"Matching volunteer {volunteer_id}: {len(eligible)} of {len(events)} open events have capacity"
        )
        if not eligible:
            return []

        scores = self.scorer.score_batch(volunteer, eligible)
        return self.ranker.rank(scores, limit=limit)
