import logging
from collections import OrderedDict
from typing import TYPE_CHECKING

from core.errors import DuplicateEntryError, RowStoreError
from schemas.watchlist import (
    MutationResult,
    RatingUpdate,
    StatusUpdate,
    WatchlistEntryCreate,
    WatchlistEntryRead,
)
from services.row_store import RowStore

if TYPE_CHECKING:
    from client.notices import NoticeBoard

logger = logging.getLogger(__name__)

NOT_FOUND_MESSAGE = "Not in your watchlist"


class WatchlistCache:
    """Last listed watchlist per user, dropped on every successful write.

    Every invalidation bumps ``version``, so a listing that started before
    a write cannot store its older rows afterwards. At most
    ``max_users`` lists are kept, least recently used evicted first.
    """

    def __init__(self, max_users: int = 128) -> None:
        self.max_users = max_users
        self._entries: OrderedDict[str, list[WatchlistEntryRead]] = OrderedDict()
        self.version = 0

    def get(self, user_id: str) -> list[WatchlistEntryRead] | None:
        entries = self._entries.get(user_id)
        if entries is not None:
            self._entries.move_to_end(user_id)
        return entries

    def set(self, user_id: str, entries: list[WatchlistEntryRead], version: int) -> bool:
        # A write landed while the rows were being read
        if version != self.version:
            return False
        self._entries[user_id] = entries
        self._entries.move_to_end(user_id)
        while len(self._entries) > self.max_users:
            self._entries.popitem(last=False)
        return True

    def invalidate(self, user_id: str) -> None:
        self._entries.pop(user_id, None)
        self.version += 1

    def reset(self) -> None:
        self._entries.clear()
        self.version += 1


class WatchlistStore:
    """Watchlist accessor for one user.

    Without a cache every listing reads through the row store, which is
    what the HTTP routes do: each request gets its own store and workers
    share nothing. A long-lived caller such as a client session may pass
    a ``WatchlistCache`` to serve repeated listings from memory.
    """

    def __init__(
        self,
        rows: RowStore,
        cache: WatchlistCache | None = None,
        notices: "NoticeBoard | None" = None,
    ):
        self.rows = rows
        self.cache = cache
        self.notices = notices

    async def list_entries(self) -> list[WatchlistEntryRead]:
        user_id = self.rows.user_id
        if self.cache is None:
            return await self._select()

        cached = self.cache.get(user_id)
        if cached is not None:
            return list(cached)

        version = self.cache.version
        entries = await self._select()
        self.cache.set(user_id, entries, version)
        return list(entries)

    async def _select(self) -> list[WatchlistEntryRead]:
        rows = await self.rows.select()
        return [WatchlistEntryRead.model_validate(row) for row in rows]

    async def contains(self, imdb_id: str) -> bool:
        return any(e.imdb_id == imdb_id for e in await self.list_entries())

    async def add(self, item: WatchlistEntryCreate | dict) -> MutationResult:
        # Raises ValidationError before anything reaches the store
        if not isinstance(item, WatchlistEntryCreate):
            item = WatchlistEntryCreate.model_validate(item)

        try:
            row = await self.rows.insert(item.model_dump())
        except DuplicateEntryError:
            return self._report(MutationResult(code="duplicate", message="Already in your watchlist"))
        except RowStoreError as e:
            logger.error("Insert of %s failed: %s", item.imdb_id, e)
            return self._report(MutationResult(code="failed", message="Failed to add"))

        self._invalidate()
        return self._report(
            MutationResult(
                code="added",
                message="Added to watchlist",
                entry=WatchlistEntryRead.model_validate(row),
            )
        )

    async def remove(self, imdb_id: str) -> MutationResult:
        try:
            count = await self.rows.delete(imdb_id)
        except RowStoreError as e:
            logger.error("Delete of %s failed: %s", imdb_id, e)
            return self._report(MutationResult(code="failed", message="Failed to remove"))

        if not count:
            return self._report(MutationResult(code="not_found", message=NOT_FOUND_MESSAGE))
        self._invalidate()
        return self._report(MutationResult(code="removed", message="Removed from watchlist"))

    async def rate(self, imdb_id: str, rating: int | None) -> MutationResult:
        update = RatingUpdate(rating=rating)
        return await self._update(imdb_id, {"rating": update.rating}, "Rating updated", "Failed to rate")

    async def set_status(self, imdb_id: str, status: str) -> MutationResult:
        update = StatusUpdate(status=status)
        return await self._update(imdb_id, {"status": update.status}, "Status updated", "Failed to update status")

    async def _update(self, imdb_id: str, values: dict, success: str, failure: str) -> MutationResult:
        try:
            count = await self.rows.update(imdb_id, values)
        except RowStoreError as e:
            logger.error("Update of %s failed: %s", imdb_id, e)
            return self._report(MutationResult(code="failed", message=failure))

        if not count:
            return self._report(MutationResult(code="not_found", message=NOT_FOUND_MESSAGE))
        self._invalidate()
        return self._report(MutationResult(code="updated", message=success))

    def _invalidate(self) -> None:
        if self.cache is not None:
            self.cache.invalidate(self.rows.user_id)

    def _report(self, result: MutationResult) -> MutationResult:
        if self.notices is not None:
            self.notices.post(result.level, result.message)
        return result


def filter_and_sort(
    entries: list[WatchlistEntryRead],
    media_type: str = "all",
    sort: str = "date",
) -> list[WatchlistEntryRead]:
    """Filter by media type and order the way the watchlist page does."""
    items = [e for e in entries if media_type == "all" or e.media_type == media_type]

    if sort == "title":
        items.sort(key=lambda e: e.title.casefold())
    elif sort == "year":
        items.sort(key=lambda e: e.year or "", reverse=True)
    elif sort == "rating":
        items.sort(key=lambda e: e.rating or 0, reverse=True)
    else:
        items.sort(key=lambda e: e.created_at, reverse=True)
    return items
