"""Slug generation utilities for URL-safe identifiers."""

from __future__ import annotations

import re

POST_FALLBACK = "post"
USER_FALLBACK = "user"

_WHITESPACE = re.compile(r"\s+")
_DISALLOWED = re.compile(r"[^a-z0-9-]")
_HYPHENS = re.compile(r"-+")


def normalize(text: str, fallback: str = POST_FALLBACK) -> str:
    """Map arbitrary text to a canonical URL-safe token.

    Non-ASCII letters are dropped rather than transliterated, so
    ``"  ¡Hola, Mundo!  "`` becomes ``"hola-mundo"``.

    Args:
        text: Free text such as a post title or display name.
        fallback: Token returned when nothing survives normalization.

    Returns:
        A token matching ``^[a-z0-9]+(-[a-z0-9]+)*$`` or the fallback.
    """
    value = _WHITESPACE.sub("-", text.lower().strip())
    value = _DISALLOWED.sub("", value)
    value = _HYPHENS.sub("-", value).strip("-")
    return value or fallback


class SlugGenerator:
    """Generate slugs for one entity kind.

    Binds the fallback token and an optional length cap so callers do not
    have to thread them through every call.
    """

    def __init__(self, fallback: str = POST_FALLBACK, max_length: int | None = None) -> None:
        """Initialize slug generator.

        Args:
            fallback: Token used when the input normalizes to nothing.
            max_length: Maximum length for generated slugs. Use None to disable truncation.
        """
        self.fallback = fallback
        self.max_length = max_length

    def slugify(self, value: str) -> str:
        """Generate a URL-safe slug from free text."""
        return self.truncate(normalize(value, self.fallback))

    def truncate(self, value: str) -> str:
        """Truncate a value to the configured max length."""
        if self.max_length is None or len(value) <= self.max_length:
            return value
        return value[: self.max_length].rstrip("-") or self.fallback

    def with_suffix(self, base: str, suffix: int | str) -> str:
        """Append a collision suffix, shortening the base so the result fits the cap.

        When the cap leaves no room for even one base character the suffix is
        appended to the untruncated base.
        """
        tail = f"-{suffix}"
        if self.max_length is None or len(base) + len(tail) <= self.max_length:
            return f"{base}{tail}"
        room = self.max_length - len(tail)
        if room < 1:
            return f"{base}{tail}"
        return f"{base[:room].rstrip('-') or self.fallback[:room]}{tail}"
