"""Shared async repository helpers for SQLModel session work."""

from __future__ import annotations

import asyncio
from collections.abc import Callable
from typing import TYPE_CHECKING, Any, Generic, TypeVar

from sqlmodel import Session, SQLModel

if TYPE_CHECKING:
    from sqlalchemy import Engine

T = TypeVar("T")
ModelT = TypeVar("ModelT", bound=SQLModel)


class AsyncRepository(Generic[ModelT]):
    """Wrap sync SQLModel session work for async callers."""

    model: type[ModelT]

    def __init__(self, engine: Engine) -> None:
        self._engine = engine

    async def _run_session(self, fn: Callable[[Session], T]) -> T:
        """Run a sync function inside a Session on a worker thread."""

        def _run() -> T:
            with Session(self._engine, expire_on_commit=False) as session:
                return fn(session)

        return await asyncio.to_thread(_run)

    async def get(self, entity_id: str) -> ModelT | None:
        """Fetch one row by primary key."""
        return await self._run_session(lambda session: session.get(self.model, entity_id))

    async def insert(self, entity: ModelT) -> ModelT:
        """Persist a new row and return it."""

        def _insert(session: Session) -> ModelT:
            session.add(entity)
            session.commit()
            session.refresh(entity)
            return entity

        return await self._run_session(_insert)

    async def patch(self, entity_id: str, fields: dict[str, Any]) -> ModelT | None:
        """Update selected columns of one row; returns None when it is gone."""

        def _patch(session: Session) -> ModelT | None:
            existing = session.get(self.model, entity_id)
            if existing is None:
                return None
            for key, value in fields.items():
                setattr(existing, key, value)
            session.add(existing)
            session.commit()
            session.refresh(existing)
            return existing

        return await self._run_session(_patch)

    async def delete(self, entity_id: str) -> None:
        """Delete one row by primary key if present."""

        def _delete(session: Session) -> None:
            existing = session.get(self.model, entity_id)
            if existing is not None:
                session.delete(existing)
                session.commit()

        await self._run_session(_delete)
