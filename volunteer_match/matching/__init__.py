"""Matching module for skill/location matching, scoring and ranking."""

from volunteer_match.matching.capacity import CapacityFilter
from volunteer_match.matching.geo import ExactCityMatcher, GeoMatch, GeoMatcher
from volunteer_match.matching.ranker import MatchResult, Ranker
from volunteer_match.matching.scorer import MatchScore, MatchScorer, ScoreWeights
from volunteer_match.matching.service import MatchService
from volunteer_match.matching.skills import SkillMatch, SkillMatcher

__all__ = [
    "CapacityFilter",
    "ExactCityMatcher",
    "GeoMatch",
    "GeoMatcher",
    "MatchResult",
    "Ranker",
    "MatchScore",
    "MatchScorer",
    "ScoreWeights",
    "MatchService",
    "SkillMatch",
    "SkillMatcher",
]
