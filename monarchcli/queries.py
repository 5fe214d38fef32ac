"""Access to the GraphQL documents shipped with the package."""

from __future__ import annotations

from pathlib import Path

QUERY_ROOT = Path(__file__).with_name("graphql")


def _is_valid_path(path: str) -> bool:
    if not path or path.startswith("/") or path.endswith("/"):
        return False
    return all(part not in ("", ".", "..") for part in path.split("/"))


def get(path: str) -> str:
    """Return the text of a query file, or an empty string if it cannot be read."""
    if not _is_valid_path(path):
        return ""
    try:
        return (Path(QUERY_ROOT) / path).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError):
        return ""