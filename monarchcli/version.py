"""Build and version information."""

from __future__ import annotations

VERSION = "0.3.1"
COMMIT = "none"
DATE = "unknown"
BUILT_BY = "unknown"


def version_info() -> dict[str, str]:
    """Return the version fields as a dictionary."""
    return {
        "version": VERSION,
        "commit": COMMIT,
        "date": DATE,
        "built_by": BUILT_BY,
    }