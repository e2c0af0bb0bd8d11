"""Text normalization for skill tags, locations, and event dates.

Skill tags and location strings arrive as free text from registration forms.
Everything that gets compared goes through the same normalization so that
"  Gardening " and "gardening" are the same tag.
"""

import logging
import re
from datetime import datetime
from typing import Any, Iterable, List, Optional

logger = logging.getLogger(__name__)

_WHITESPACE = re.compile(r"\s+")


def clean_text(value: Any) -> str:
    """Trim and collapse internal whitespace, keeping case.

    Non-string values such as numeric tags from YAML are converted with str().
    """
    if value is None:
        return ""
    return _WHITESPACE.sub(" ", str(value)).strip()


def comparison_key(value: Optional[str]) -> str:
    """Key used for case-insensitive comparison of tags and locations."""
    return clean_text(value).casefold()


class Normalizer:
    """Normalizes volunteer and event fields to a consistent format."""

    # Date formats accepted from snapshot files and form submissions
    DATE_FORMATS = [
        "%Y-%m-%dT%H:%M:%S",  # ISO without zone
        "%Y-%m-%d %H:%M:%S",  # ISO with space
        "%Y-%m-%dT%H:%M",     # HTML datetime-local
        "%Y-%m-%d %H:%M",
        "%Y-%m-%d",           # ISO date
        "%m/%d/%Y",           # US format
    ]

    def normalize_tags(self, tags: Optional[Iterable[str]]) -> List[str]:
        """Clean a list of tags, dropping blanks and case-insensitive duplicates.

        The first spelling of each tag is kept, in its original position.

        Args:
            tags: Raw tag strings

        Returns:
            Cleaned tags in first-seen order
        """
        if not tags:
            return []

        seen = set()
        cleaned = []
        for tag in tags:
            text = clean_text(tag)
            key = text.casefold()
            if not key or key in seen:
                continue
            seen.add(key)
            cleaned.append(text)
        return cleaned

    def normalize_location(self, location: Optional[str]) -> str:
        """Clean a free-text city name for storage and display."""
        return clean_text(location)

    def parse_datetime(self, value: Optional[str]) -> Optional[datetime]:
        """Parse a date/time string in any of the accepted formats.

        Args:
            value: Date string, ISO 8601 preferred

        Returns:
            Parsed datetime or None if parsing fails
        """
        if not value:
            return None

        value = value.strip()
        try:
            return datetime.fromisoformat(value.replace("Z", "+00:00"))
        except ValueError:
            pass

        for fmt in self.DATE_FORMATS:
            try:
                return datetime.strptime(value, fmt)
            except ValueError:
                continue

        logger.warning(f"Could not parse date: {value}")
        return None
