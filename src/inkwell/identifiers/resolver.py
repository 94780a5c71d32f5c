"""Find a token not already held by another entity."""

from __future__ import annotations

import time
from collections.abc import Awaitable, Callable

import structlog

from inkwell.core.config import DEFAULT_SLUG_MAX_ATTEMPTS
from inkwell.core.slug import SlugGenerator

logger = structlog.get_logger()

TokenLookup = Callable[[str], Awaitable[str | None]]


async def resolve_unique(
    base: str,
    lookup: TokenLookup,
    *,
    exclude_id: str | None = None,
    max_attempts: int = DEFAULT_SLUG_MAX_ATTEMPTS,
    generator: SlugGenerator | None = None,
    clock: Callable[[], float] = time.time,
) -> str:
    """Return ``base`` or the first free ``base-N`` suffix.

    The existence check and the caller's later write are not atomic, so two
    concurrent writers with the same base may both receive the same token.

    Args:
        base: Normalized token to start from.
        lookup: Returns the id of the entity holding a token, or None.
        exclude_id: Entity whose own token is not a collision (renames).
        max_attempts: Candidates tried before the timestamp fallback.
        generator: Joins suffixes onto the base within its length cap.
        clock: Seconds since the epoch, used by the fallback suffix.

    Returns:
        A token not held by any entity other than ``exclude_id``.
    """
    generator = generator or SlugGenerator()
    candidate = base
    counter = 1
    for _ in range(max_attempts):
        holder = await lookup(candidate)
        if holder is None or holder == exclude_id:
            return candidate
        logger.debug("slug_collision", candidate=candidate, holder=holder)
        candidate = generator.with_suffix(base, counter)
        counter += 1

    fallback = generator.with_suffix(base, int(clock() * 1000))
    logger.warning("slug_fallback_timestamp", base=base, attempts=max_attempts, token=fallback)
    return fallback
