"""Concrete DocumentStore backed by a SQLAlchemy JSON-document table."""

import logging
import uuid
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Any

from sqlalchemy import select
from sqlalchemy.exc import DBAPIError, InterfaceError, OperationalError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from catalog_admin.application.interfaces import DocumentStore
from catalog_admin.domain.entities import Record, SortDirection
from catalog_admin.domain.exceptions import (
    EntityNotFoundError,
    PermissionDeniedError,
    StoreRejectedError,
    StoreUnavailableError,
)
from catalog_admin.infrastructure.database.models import DocumentModel

logger = logging.getLogger(__name__)

# PostgreSQL SQLSTATE for insufficient_privilege
_INSUFFICIENT_PRIVILEGE = "42501"


def _is_permission_error(exc: DBAPIError) -> bool:
    orig = exc.orig
    code = getattr(orig, "sqlstate", None) or getattr(orig, "pgcode", None)
    if code == _INSUFFICIENT_PRIVILEGE:
        return True
    return "permission denied" in str(orig).lower()


def _sort_key(value: Any) -> tuple[int, Any]:
    """Numbers sort before strings; mixed types never compare directly."""
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return (0, value)
    return (1, str(value))


class SQLAlchemyDocumentStore(DocumentStore):
    """Implements the DocumentStore port on one ``documents`` table.

    Every call runs in its own session and commits before returning, so
    there are no transactions spanning calls. Ordering and filtering work on
    the JSON ``data`` map in Python, which keeps them identical on
    PostgreSQL and SQLite.
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        self._session_factory = session_factory

    @asynccontextmanager
    async def _session(self, operation: str) -> AsyncIterator[AsyncSession]:
        """Yield a session, commit on success and translate driver failures."""
        async with self._session_factory() as session:
            try:
                yield session
                await session.commit()
            except (OperationalError, InterfaceError) as exc:
                await session.rollback()
                logger.error("Document store unavailable during %s: %s", operation, exc)
                raise StoreUnavailableError(str(exc.orig)) from exc
            except DBAPIError as exc:
                await session.rollback()
                if _is_permission_error(exc):
                    logger.error("Permission denied during %s: %s", operation, exc)
                    raise PermissionDeniedError(str(exc.orig)) from exc
                logger.error("Document store rejected %s: %s", operation, exc)
                raise StoreRejectedError(str(exc.orig)) from exc
            except OSError as exc:
                await session.rollback()
                logger.error("Document store unreachable during %s: %s", operation, exc)
                raise StoreUnavailableError(str(exc)) from exc
            except SQLAlchemyError as exc:
                await session.rollback()
                logger.error("Document store rejected %s: %s", operation, exc)
                raise StoreRejectedError(str(exc)) from exc

    @staticmethod
    def _to_entity(model: DocumentModel) -> Record:
        """Map ORM model → domain entity."""
        return Record(id=model.id, collection=model.collection, data=dict(model.data or {}))

    async def list_all(
        self,
        collection: str,
        *,
        order_by: str | None = None,
        direction: SortDirection = SortDirection.DESC,
        filters: dict[str, Any] | None = None,
    ) -> list[Record]:
        stmt = (
            select(DocumentModel)
            .where(DocumentModel.collection == collection)
            .order_by(DocumentModel.created_at)
        )
        async with self._session(f"list {collection}") as session:
            result = await session.execute(stmt)
            records = [self._to_entity(row) for row in result.scalars().all()]

        if filters:
            records = [
                r for r in records
                if all(name in r.data and r.data[name] == value for name, value in filters.items())
            ]
        if order_by is not None:
            records = [r for r in records if r.data.get(order_by) is not None]
            records.sort(
                key=lambda r: _sort_key(r.data[order_by]),
                reverse=direction is SortDirection.DESC,
            )
        return records

    async def get_by_id(self, collection: str, record_id: str) -> Record | None:
        async with self._session(f"get {collection}/{record_id}") as session:
            model = await session.get(DocumentModel, record_id)
            if model is None or model.collection != collection:
                return None
            return self._to_entity(model)

    async def get_top_by_field(
        self,
        collection: str,
        field: str,
        direction: SortDirection,
        limit: int,
    ) -> list[Record]:
        records = await self.list_all(collection, order_by=field, direction=direction)
        return records[:limit]

    async def create(self, collection: str, data: dict[str, Any]) -> str:
        record_id = str(uuid.uuid4())
        async with self._session(f"create {collection}") as session:
            session.add(DocumentModel(id=record_id, collection=collection, data=dict(data)))
        logger.debug("Created %s/%s", collection, record_id)
        return record_id

    async def update(self, collection: str, record_id: str, partial: dict[str, Any]) -> None:
        async with self._session(f"update {collection}/{record_id}") as session:
            model = await session.get(DocumentModel, record_id)
            if model is None or model.collection != collection:
                raise EntityNotFoundError(collection, record_id)
            # JSON columns only persist on reassignment
            model.data = {**(model.data or {}), **partial}

    async def delete(self, collection: str, record_id: str) -> None:
        async with self._session(f"delete {collection}/{record_id}") as session:
            model = await session.get(DocumentModel, record_id)
            if model is None or model.collection != collection:
                raise EntityNotFoundError(collection, record_id)
            await session.delete(model)
        logger.debug("Deleted %s/%s", collection, record_id)
