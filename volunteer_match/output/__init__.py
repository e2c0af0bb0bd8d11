"""Output module for exporting match results."""

from volunteer_match.output.export import (
    EXPORT_EXTENSIONS,
    export_csv,
    export_json,
    export_markdown,
    export_matches,
    score_band,
)

__all__ = [
    "EXPORT_EXTENSIONS",
    "export_csv",
    "export_json",
    "export_markdown",
    "export_matches",
    "score_band",
]
