"""Item persistence on top of the shared async SQLAlchemy engine."""
from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from sqlalchemy import delete, insert, select, text, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from research_node.core.exceptions import InternalError
from research_node.db.schema import ItemRow

logger = logging.getLogger(__name__)


class ItemStore:
    """CRUD access to the ``items`` table.

    Update and delete do not verify that the id exists; a statement touching zero
    rows still counts as success.
    """

    def __init__(self, sessionmaker: async_sessionmaker[AsyncSession]) -> None:
        self._sessionmaker = sessionmaker

    @asynccontextmanager
    async def _session(self, failure: str) -> AsyncIterator[AsyncSession]:
        try:
            async with self._sessionmaker() as session:
                yield session
        except SQLAlchemyError as exc:
            raise InternalError(failure) from exc

    async def ping(self) -> None:
        async with self._session("Database error") as session:
            await session.execute(text("SELECT 1"))

    async def list_items(self) -> list[dict]:
        async with self._session("Database error") as session:
            rows = (await session.execute(select(ItemRow))).scalars().all()
            return [row.to_dict() for row in rows]

    async def get_item(self, item_id: int) -> dict | None:
        async with self._session("Database error") as session:
            row = (
                await session.execute(select(ItemRow).where(ItemRow.id == item_id))
            ).scalar_one_or_none()
            return row.to_dict() if row else None

    async def get_last_item(self) -> dict | None:
        async with self._session("Database error") as session:
            row = (
                await session.execute(select(ItemRow).order_by(ItemRow.id.desc()).limit(1))
            ).scalar_one_or_none()
            return row.to_dict() if row else None

    async def create_item(self, name: str | None, value: str | None) -> int:
        async with self._session("Error saving item") as session:
            result = await session.execute(insert(ItemRow).values(name=name, value=value))
            await session.commit()
            item_id = result.inserted_primary_key[0]
            logger.debug("Created item %s", item_id)
            return item_id

    async def update_item(self, item_id: int, name: str, value: str) -> None:
        async with self._session("Error updating item") as session:
            await session.execute(
                update(ItemRow).where(ItemRow.id == item_id).values(name=name, value=value)
            )
            await session.commit()

    async def delete_item(self, item_id: int) -> None:
        async with self._session("Error deleting item") as session:
            await session.execute(delete(ItemRow).where(ItemRow.id == item_id))
            await session.commit()

    async def delete_last_item(self) -> int | None:
        """Delete the row with the highest id and return that id, or None when empty."""

        async with self._session("Database error") as session:
            last_id = (
                await session.execute(select(ItemRow.id).order_by(ItemRow.id.desc()).limit(1))
            ).scalar_one_or_none()
        if last_id is None:
            return None
        async with self._session("Error deleting last item") as session:
            await session.execute(delete(ItemRow).where(ItemRow.id == last_id))
            await session.commit()
        return last_id
