"""Deterministic ranking of scored events."""

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Dict, Iterable, List, Optional, Tuple

from volunteer_match.matching.scorer import MatchScore
from volunteer_match.records.models import Event

logger = logging.getLogger(__name__)

_NO_TIMESTAMP = datetime.min.replace(tzinfo=timezone.utc)


@dataclass(frozen=True)
class MatchResult:
    """A ranked event recommendation. Derived per request, never stored."""
    event: Event
    score: int
    why: Tuple[str, ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "event": self.event.to_dict(),
            "score": self.score,
            "why": list(self.why),
        }


def _sort_key(scored: MatchScore) -> tuple:
    created_at = scored.event.created_at
    return (
        -scored.total,
        created_at is None,          # events with a creation time come first
        created_at or _NO_TIMESTAMP,
        scored.event.id,
    )


class Ranker:
    """Orders scored events by score, then age, then id."""

    def rank(
        self,
        scored: Iterable[MatchScore],
        limit: Optional[int] = None,
    ) -> List[MatchResult]:
        """Rank scored events.

        Ties are broken by earlier creation time, then by event id, so the
        output order is stable across repeated calls with the same input.

        Args:
            scored: Scores from MatchScorer
            limit: Optional top-N window (None returns everything)

        Returns:
            MatchResults, best first

        Raises:
            ValueError: If limit is negative
        """
        if limit is not None and limit < 0:
            raise ValueError(f"limit must be non-negative, got {limit}")

        ordered = sorted(scored, key=_sort_key)
        if limit is not None:
            ordered = ordered[:limit]

        results = [
            MatchResult(event=s.event, score=s.total, why=s.reasons)
            for s in ordered
        ]
        logger.info(f"Ranked {len(results)} events")
        return results
