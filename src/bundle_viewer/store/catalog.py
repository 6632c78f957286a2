"""Top-level key listing with case-insensitive substring filtering."""

from __future__ import annotations

from bundle_viewer.types import Document


def list_keys(document: Document, query: str | None = None) -> list[str]:
    keys = list(document.keys())
    if not query:
        return keys
    needle = query.lower()
    return [key for key in keys if needle in key.lower()]
