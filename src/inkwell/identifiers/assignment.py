"""Assign and resolve human-readable identifiers for one entity kind."""

from __future__ import annotations

import structlog

from inkwell.core.config import DEFAULT_SLUG_MAX_ATTEMPTS
from inkwell.core.slug import SlugGenerator

from .registry import TokenEntry, TokenRegistry
from .resolver import resolve_unique

logger = structlog.get_logger()


class IdentifierAssignmentService:
    """Orchestrate normalization and uniqueness for create, rename and read.

    The service is stateless; it reads through the registry and leaves
    persisting the returned token to the caller.
    """

    def __init__(
        self,
        registry: TokenRegistry,
        generator: SlugGenerator,
        max_attempts: int = DEFAULT_SLUG_MAX_ATTEMPTS,
    ) -> None:
        self._registry = registry
        self._generator = generator
        self._max_attempts = max_attempts

    def normalize(self, text: str | None) -> str:
        """Normalize text with this kind's fallback token."""
        return self._generator.slugify(text or "")

    async def _holder(self, token: str) -> str | None:
        entry = await self._registry.find_by_token(token)
        return entry.entity_id if entry else None

    async def assign_on_create(self, text: str | None) -> str:
        """Token for a new entity; the caller persists it with the insert."""
        base = self.normalize(text)
        return await resolve_unique(
            base, self._holder, max_attempts=self._max_attempts, generator=self._generator
        )

    async def assign_on_rename(self, entity_id: str, text: str | None) -> str:
        """Token for an entity whose source text changed.

        The base is used directly when it is free or already held by the
        entity itself; only a real conflict pays for the suffix scan.
        """
        base = self.normalize(text)
        holder = await self._holder(base)
        if holder is None or holder == entity_id:
            return base
        return await resolve_unique(
            base,
            self._holder,
            exclude_id=entity_id,
            max_attempts=self._max_attempts,
            generator=self._generator,
        )

    async def resolve_on_read(self, token: str) -> TokenEntry | None:
        """Find the entity a token refers to.

        Tries the stored-token index first, then scans every entity comparing
        stored tokens and, for legacy entities without one, the normalized
        source text. The scan is repeated case-insensitively before giving up.
        Callers should backfill entries whose ``needs_backfill`` is set.
        """
        entry = await self._registry.find_by_token(token)
        if entry is not None:
            return entry

        entries = await self._registry.list_entries()
        entry = self._scan(entries, token, fold_case=False)
        if entry is None:
            entry = self._scan(entries, token, fold_case=True)

        if entry is not None:
            logger.info(
                "token_resolved_by_scan",
                token=token,
                entity_id=entry.entity_id,
                needs_backfill=entry.needs_backfill,
            )
        return entry

    def _scan(self, entries: list[TokenEntry], token: str, *, fold_case: bool) -> TokenEntry | None:
        wanted = token.lower() if fold_case else token
        for entry in entries:
            if entry.token is not None:
                stored = entry.token.lower() if fold_case else entry.token
                if stored == wanted:
                    return entry
            elif self.normalize(entry.source) == wanted:
                return entry
        return None
