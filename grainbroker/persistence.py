"""Unit of work over the relational store.

`GrainBrokerContext` wraps one AsyncSession per request. Changes are staged
with add/remove/mark_modified and applied atomically by `save()`.

Optimistic concurrency comes from SQLAlchemy's flush: an UPDATE or DELETE
that matches no row raises `StaleDataError`, which `save()` turns into
`ConcurrencyError`. Nothing here takes locks.
"""

import logging
import uuid
from collections.abc import AsyncGenerator, Sequence
from typing import TypeVar

from sqlalchemy import exists, inspect, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import make_transient_to_detached
from sqlalchemy.orm.attributes import flag_modified
from sqlalchemy.orm.exc import StaleDataError

from grainbroker.database import Base, async_session

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=Base)


class ConcurrencyError(Exception):
    """A staged row no longer matches the store (usually: deleted meanwhile)."""

    def __init__(self, message: str = "The row was modified or deleted since it was loaded"):
        self.message = message
        super().__init__(message)


class GrainBrokerContext:
    def __init__(self, session: AsyncSession):
        self._session = session

    @property
    def session(self) -> AsyncSession:
        return self._session

    # ── Reads ───────────────────────────────────────────────────

    async def all(self, model: type[ModelT]) -> Sequence[ModelT]:
        result = await self._session.execute(select(model))
        return result.scalars().all()

    async def find(self, model: type[ModelT], entity_id: uuid.UUID) -> ModelT | None:
        # A SELECT rather than session.get(): the identity map may still hold
        # rows removed by a cascade in the store.
        result = await self._session.execute(select(model).where(model.id == entity_id))
        return result.scalar_one_or_none()

    async def any(self, model: type[ModelT], entity_id: uuid.UUID) -> bool:
        result = await self._session.execute(select(exists().where(model.id == entity_id)))
        return bool(result.scalar())

    # ── Staging ─────────────────────────────────────────────────

    def add(self, entity: Base) -> None:
        self._session.add(entity)

    async def remove(self, entity: Base) -> None:
        await self._session.delete(entity)

    def mark_modified(self, entity: ModelT) -> ModelT:
        """Stage a full-row replace of `entity`, matched on its primary key.

        Returns the instance the session now tracks. That is `entity` itself
        unless the session already holds another instance with the same key,
        in which case the values are copied onto the tracked one.
        """
        state = inspect(entity)
        mapper = state.mapper
        pk_keys = {mapper.get_property_by_column(col).key for col in mapper.primary_key}
        column_keys = [attr.key for attr in mapper.column_attrs]

        if state.transient:
            for key in column_keys:
                setattr(entity, key, getattr(entity, key))
            identity = mapper.identity_key_from_instance(entity)
            tracked = self._session.sync_session.identity_map.get(identity)
            if tracked is not None:
                for key in column_keys:
                    if key not in pk_keys:
                        setattr(tracked, key, getattr(entity, key))
                entity = tracked
            else:
                make_transient_to_detached(entity)
                self._session.add(entity)
        elif state.detached:
            self._session.add(entity)

        for key in column_keys:
            if key not in pk_keys:
                flag_modified(entity, key)
        return entity

    # ── Flush ───────────────────────────────────────────────────

    async def save(self) -> None:
        """Commit every staged change in one transaction.

        Raises:
            ConcurrencyError: an UPDATE/DELETE matched no row.
        """
        try:
            await self._session.commit()
        except StaleDataError as exc:
            await self._session.rollback()
            logger.info(f"Concurrency conflict on save: {exc}")
            raise ConcurrencyError() from exc
        except Exception:
            await self._session.rollback()
            raise


async def get_context() -> AsyncGenerator[GrainBrokerContext, None]:
    """Yield a request-scoped persistence context."""
    async with async_session() as session:
        yield GrainBrokerContext(session)
