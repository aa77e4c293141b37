"""
Centralized validation utilities for paths, content types and input text.

This module provides a single source of truth for the matching rules used
by the middleware pipeline and the request handlers.
"""

from __future__ import annotations

from collections.abc import Iterable

# Content types whose bodies may be written to logs
TEXTUAL_CONTENT_TYPES = ("application/json", "application/xml", "text/")


def matches_path_prefix(path: str, prefixes: Iterable[str]) -> bool:
    """
    Check if a request path starts with any of the given path segments.

    Matching is case-insensitive and segment-aware: "/health" matches
    "/health" and "/Health/live" but not "/healthcheck".

    Args:
        path: Request path, e.g. "/api/user/1"
        prefixes: Path prefixes, each starting with "/"

    Returns:
        True if any prefix matches the path
    """
    lowered = path.lower()
    for prefix in prefixes:
        candidate = prefix.lower().rstrip("/")
        if not candidate:
            return True
        if lowered == candidate or lowered.startswith(candidate + "/"):
            return True
    return False


def is_textual_content_type(content_type: str | None) -> bool:
    """
    Check if a content type is textual (JSON, XML or text/*).

    Args:
        content_type: Raw Content-Type header value, possibly None

    Returns:
        True if bodies of this type can be logged as text
    """
    if not content_type:
        return False
    lowered = content_type.lower()
    return any(marker in lowered for marker in TEXTUAL_CONTENT_TYPES)


def is_blank(value: str | None) -> bool:
    """Return True for None, empty or whitespace-only strings."""
    return value is None or not value.strip()
