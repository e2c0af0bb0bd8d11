"""Export functions for match results in multiple formats."""

import csv
import json
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

from volunteer_match.matching.ranker import MatchResult

# Lower bounds for each score band, highest first
SCORE_BANDS = [
    (80, "excellent"),
    (60, "good"),
    (40, "fair"),
]

EXPORT_EXTENSIONS = (".json", ".csv", ".md", ".markdown")


def score_band(score: int) -> str:
    """Label a 0-100 score with its display band."""
    for threshold, label in SCORE_BANDS:
        if score >= threshold:
            return label
    return "low"


def _format_date(value: Optional[str]) -> str:
    return value[:10] if value else ""


def _rows(matches: Sequence[MatchResult]) -> List[Dict[str, Any]]:
    rows = []
    for i, match in enumerate(matches, 1):
        event = match.event.to_dict()
        rows.append({
            "rank": i,
            "event_id": event["id"],
            "title": event["title"],
            "date": event["date"],
            "location": event["location"],
            "remaining_slots": event["remainingSlots"],
            "score": match.score,
            "band": score_band(match.score),
            "why": list(match.why),
        })
    return rows


def export_json(
    matches: Sequence[MatchResult],
    filepath: str,
    volunteer_id: Optional[str] = None,
) -> None:
    """Export match results to JSON format.

    Args:
        matches: Ranked match results, best first
        filepath: Path to write JSON file
        volunteer_id: Volunteer the matches were computed for

    Raises:
        IOError: If file cannot be written
    """
    export_data = {
        "exported_at": datetime.now().isoformat(),
        "volunteer_id": volunteer_id,
        "total_matches": len(matches),
        "matches": [
            {"rank": i, "band": score_band(m.score), **m.to_dict()}
            for i, m in enumerate(matches, 1)
        ],
    }

    path = Path(filepath)
    path.parent.mkdir(parents=True, exist_ok=True)

    with open(path, "w", encoding="utf-8") as f:
        json.dump(export_data, f, indent=2, ensure_ascii=False)


def export_csv(
    matches: Sequence[MatchResult],
    filepath: str,
    volunteer_id: Optional[str] = None,
) -> None:
    """Export match results to CSV format.

    Reasons are joined with "; " into a single column.

    Args:
        matches: Ranked match results, best first
        filepath: Path to write CSV file
        volunteer_id: Unused, accepted for a uniform signature

    Raises:
        IOError: If file cannot be written
    """
    path = Path(filepath)
    path.parent.mkdir(parents=True, exist_ok=True)

    fieldnames = [
        "rank",
        "event_id",
        "title",
        "date",
        "location",
        "remaining_slots",
        "score",
        "band",
        "why",
    ]

    with open(path, "w", newline="", encoding="utf-8") as f:
        writer = csv.DictWriter(f, fieldnames=fieldnames)
        writer.writeheader()
        for row in _rows(matches):
            row["date"] = _format_date(row["date"])
            row["why"] = "; ".join(row["why"])
            writer.writerow(row)


def export_markdown(
    matches: Sequence[MatchResult],
    filepath: str,
    volunteer_id: Optional[str] = None,
) -> None:
    """Export match results to Markdown format.

    Args:
        matches: Ranked match results, best first
        filepath: Path to write Markdown file
        volunteer_id: Volunteer the matches were computed for

    Raises:
        IOError: If file cannot be written
    """
    path = Path(filepath)
    path.parent.mkdir(parents=True, exist_ok=True)

    lines = []

    # Header
    lines.append("# Volunteer Matches")
    lines.append("")
    lines.append(f"**Exported:** {datetime.now().strftime('%Y-%m-%d %H:%M:%S')}")
    if volunteer_id:
        lines.append(f"**Volunteer:** {volunteer_id}")
    lines.append(f"**Matches:** {len(matches)}")
    lines.append("")
    lines.append("---")
    lines.append("")

    for row in _rows(matches):
        lines.append(f"## {row['rank']}. {row['title']}")
        lines.append("")
        lines.append(f"**Score:** {row['score']}% ({row['band']})")
        lines.append(f"**Date:** {_format_date(row['date'])}")
        if row["location"]:
            lines.append(f"**Location:** {row['location']}")
        lines.append(f"**Open slots:** {row['remaining_slots']}")
        lines.append("")

        if row["why"]:
            lines.append("### Why this is a good match")
            lines.append("")
            for reason in row["why"]:
                lines.append(f"- {reason}")
            lines.append("")

        lines.append("---")
        lines.append("")

    with open(path, "w", encoding="utf-8") as f:
        f.write("\n".join(lines))


def export_matches(
    matches: Sequence[MatchResult],
    filepath: str,
    volunteer_id: Optional[str] = None,
) -> None:
    """Export match results with format auto-detection from file extension.

    Args:
        matches: Ranked match results, best first
        filepath: Path to write file (extension determines format)
        volunteer_id: Volunteer the matches were computed for

    Raises:
        ValueError: If file extension is not recognized
        IOError: If file cannot be written
    """
    extension = Path(filepath).suffix.lower()

    if extension == ".json":
        export_json(matches, filepath, volunteer_id)
    elif extension == ".csv":
        export_csv(matches, filepath, volunteer_id)
    elif extension in (".md", ".markdown"):
        export_markdown(matches, filepath, volunteer_id)
    else:
        raise ValueError(
            f"Unsupported file format: {extension}. "
            f"Supported formats: {', '.join(EXPORT_EXTENSIONS)}"
        )
