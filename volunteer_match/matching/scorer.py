"""Match score calculation for volunteer/event pairs.

Implements a fixed-weight linear model:
- base points, always awarded
- skill points * (matched / required), full points when nothing is required
- location points * geo signal

Each contribution is rounded half-up and the total is clamped to 0-100.
"""

import logging
import math
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional, Tuple

from volunteer_match.matching.geo import ExactCityMatcher, GeoMatch, GeoMatcher
from volunteer_match.matching.skills import SkillMatch, SkillMatcher
from volunteer_match.records.models import Event, Volunteer

logger = logging.getLogger(__name__)

MIN_SCORE = 0
MAX_SCORE = 100


@dataclass(frozen=True)
class ScoreWeights:
    """Points available for each signal."""
    base: float = 20.0
    skills: float = 50.0
    location: float = 30.0


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


@dataclass(frozen=True)
class MatchScore:
    """Score for one event with its breakdown and reasons."""
    event: Event
    total: int                   # Final score (0-100)
    base_points: int
    skill_points: int
    location_points: int
    reasons: Tuple[str, ...] = ()
    skill_match: Optional[SkillMatch] = field(default=None, compare=False)
    geo_match: Optional[GeoMatch] = field(default=None, compare=False)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "event_id": self.event.id,
            "total": self.total,
            "breakdown": {
                "base": self.base_points,
                "skills": self.skill_points,
                "location": self.location_points,
            },
            "reasons": list(self.reasons),
        }


class MatchScorer:
    """Calculates match scores for capacity-eligible events."""

    SKILL_REASON = "Matches skill: {skill}"

    def __init__(
        self,
        weights: Optional[ScoreWeights] = None,
        skill_matcher: Optional[SkillMatcher] = None,
        geo_matcher: Optional[GeoMatcher] = None,
    ):
        """Initialize the scorer.

        Args:
            weights: Points per signal (default 20/50/30)
            skill_matcher: Skill overlap strategy
            geo_matcher: Location comparison strategy (default exact city)
        """
        self.weights = weights or ScoreWeights()
        self.skill_matcher = skill_matcher or SkillMatcher()
        self.geo_matcher = geo_matcher or ExactCityMatcher()

    def score(self, volunteer: Volunteer, event: Event) -> MatchScore:
        """Score one event for a volunteer.

        Args:
            volunteer: Volunteer snapshot
            event: Event that already passed the capacity filter

        Returns:
            MatchScore with breakdown and ordered reasons
        """
        reasons: List[str] = []

        base_points = round_half_up(self.weights.base)

        skill_match = self.skill_matcher.match(volunteer.skills, event.skills)
        skill_points = round_half_up(self.weights.skills * skill_match.ratio)
        for skill in skill_match.matched:
            reasons.append(self.SKILL_REASON.format(skill=skill))

        geo_match = self.geo_matcher.compare(volunteer.location, event.location)
        signal = min(1.0, max(0.0, geo_match.signal))
        location_points = round_half_up(self.weights.location * signal)
        if signal > 0.0 and geo_match.reason:
            reasons.append(geo_match.reason)

        total = base_points + skill_points + location_points
        total = min(MAX_SCORE, max(MIN_SCORE, total))

        logger.debug(
            f"Scored event {event.id} for volunteer {volunteer.id}: "
            f"{total} (base={base_points}, skills={skill_points}, location={location_points})"
        )

        return MatchScore(
            event=event,
            total=total,
            base_points=base_points,
            skill_points=skill_points,
            location_points=location_points,
            reasons=tuple(reasons),
            skill_match=skill_match,
            geo_match=geo_match,
        )

    def score_batch(
        self,
        volunteer: Volunteer,
        events: Iterable[Event],
    ) -> List[MatchScore]:
        """Calculate scores for multiple events.

        Args:
            volunteer: Volunteer snapshot
            events: Capacity-eligible events

        Returns:
            List of MatchScores (same order as events)
        """
        scores = [self.score(volunteer, event) for event in events]
        logger.info(f"Calculated {len(scores)} match scores for volunteer {volunteer.id}")
        return scores
