"""Skill overlap between a volunteer and an event's requirements."""

import logging
from dataclasses import dataclass
from typing import Any, Dict, Iterable, Tuple

from volunteer_match.processing.normalizer import clean_text, comparison_key

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SkillMatch:
    """Result of comparing volunteer skills against required skills."""
    matched: Tuple[str, ...]     # Matched skills, in the event's declared order
    required_count: int          # Distinct requirements after normalization

    @property
    def matched_count(self) -> int:
        return len(self.matched)

    @property
    def has_requirements(self) -> bool:
        return self.required_count > 0

    @property
    def ratio(self) -> float:
        """Fraction of requirements met (1.0 when nothing is required)."""
        if not self.has_requirements:
            return 1.0
        return self.matched_count / max(1, self.required_count)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "matched": list(self.matched),
            "matched_count": self.matched_count,
            "required_count": self.required_count,
            "ratio": round(self.ratio, 3),
        }


class SkillMatcher:
    """Exact, case-insensitive skill tag matching.

    Tags are compared after trimming and collapsing whitespace. There is no
    fuzzy or stemmed matching: "garden" does not match "gardening".
    """

    def match(
        self,
        volunteer_skills: Iterable[str],
        required_skills: Iterable[str],
    ) -> SkillMatch:
        """Compare a volunteer's skills with an event's requirements.

        Args:
            volunteer_skills: Skill tags the volunteer offers
            required_skills: Skill tags the event requires, in declared order

        Returns:
            SkillMatch with the intersection in the event's order
        """
        offered = {comparison_key(s) for s in volunteer_skills}
        offered.discard("")

        matched = []
        seen = set()
        for skill in required_skills:
            key = comparison_key(skill)
            if not key or key in seen:
                continue
            seen.add(key)
            if key in offered:
                matched.append(clean_text(skill))

        return SkillMatch(matched=tuple(matched), required_count=len(seen))
