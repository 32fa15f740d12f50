from __future__ import annotations

import re
from typing import Dict


_SLUG_PATTERN = re.compile(r"[^a-zA-Z0-9\s-]")
_SEPARATOR_PATTERN = re.compile(r"[\s-]+")


def slugify(text: str, fallback: str = "section") -> str:
    """Create a URL-friendly slug from arbitrary text."""

    slug = _SLUG_PATTERN.sub("", text).strip().lower()
    slug = _SEPARATOR_PATTERN.sub("-", slug)
    return slug or fallback


def unique_slug(text: str, seen: Dict[str, int], fallback: str = "section") -> str:
    """Slugify ``text`` and suffix repeats (``article-5``, ``article-5-1``)."""

    base = slugify(text, fallback=fallback)
    count = seen.get(base, 0)
    seen[base] = count + 1
    return f"{base}-{count}" if count else base


__all__ = ["slugify", "unique_slug"]
