from abc import ABC, abstractmethod
from typing import Any

from sqlalchemy import delete, select, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from core.errors import DuplicateEntryError, RowStoreError
from models.watchlist import WatchlistEntry


class RowStore(ABC):
    """Watchlist rows of a single user. Every operation is scoped to ``user_id``."""

    def __init__(self, user_id: str) -> None:
        self.user_id = user_id

    @abstractmethod
    async def select(self) -> list[Any]:
        """All rows of the user, newest first."""
        ...

    @abstractmethod
    async def insert(self, values: dict[str, Any]) -> Any:
        """Insert a row; raise DuplicateEntryError if the title is already listed."""
        ...

    @abstractmethod
    async def update(self, imdb_id: str, values: dict[str, Any]) -> int:
        ...

    @abstractmethod
    async def delete(self, imdb_id: str) -> int:
        ...


class SqlRowStore(RowStore):
    def __init__(self, db: AsyncSession, user_id: str):
        super().__init__(user_id)
        self.db = db

    async def select(self) -> list[WatchlistEntry]:
        stmt = (
            select(WatchlistEntry)
            .where(WatchlistEntry.user_id == self.user_id)
            .order_by(WatchlistEntry.created_at.desc())
        )
        result = await self.db.execute(stmt)
        return list(result.scalars().all())

    async def insert(self, values: dict[str, Any]) -> WatchlistEntry:
        row = WatchlistEntry(user_id=self.user_id, **values)
        self.db.add(row)
        try:
            await self.db.commit()
        except IntegrityError as e:
            await self.db.rollback()
            raise DuplicateEntryError(values["imdb_id"]) from e
        except SQLAlchemyError as e:
            await self.db.rollback()
            raise RowStoreError(str(e)) from e
        return row

    async def update(self, imdb_id: str, values: dict[str, Any]) -> int:
        stmt = (
            update(WatchlistEntry)
            .where(
                WatchlistEntry.user_id == self.user_id,
                WatchlistEntry.imdb_id == imdb_id,
            )
            .values(**values)
        )
        return await self._execute(stmt)

    async def delete(self, imdb_id: str) -> int:
        stmt = delete(WatchlistEntry).where(
            WatchlistEntry.user_id == self.user_id,
            WatchlistEntry.imdb_id == imdb_id,
        )
        return await self._execute(stmt)

    async def _execute(self, stmt) -> int:
        try:
            result = await self.db.execute(stmt)
            await self.db.commit()
        except SQLAlchemyError as e:
            await self.db.rollback()
            raise RowStoreError(str(e)) from e
        return result.rowcount
