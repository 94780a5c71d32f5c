"""Token registry interface shared by sluggable and named entities."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol


@dataclass(frozen=True)
class TokenEntry:
    """A registry row: one entity, the text its token derives from, and the stored token."""

    entity_id: str
    source: str | None
    token: str | None

    @property
    def needs_backfill(self) -> bool:
        """True when the entity predates token storage."""
        return self.token is None


class TokenRegistry(Protocol):
    """Read access to the assigned tokens of one entity kind."""

    async def find_by_token(self, token: str) -> TokenEntry | None:
        """Exact-match lookup on the stored token column."""
        ...

    async def list_entries(self) -> list[TokenEntry]:
        """Every entity of the kind, in storage order."""
        ...
