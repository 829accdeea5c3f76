"""Seed script to populate a demo user's watchlist."""
import asyncio
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent / "watchlog" / "src"))

from core.database import engine, get_db  # noqa: E402
from models import Base  # noqa: E402
from services.row_store import SqlRowStore  # noqa: E402
from services.watchlist import WatchlistStore  # noqa: E402

DEMO_USER_ID = sys.argv[1] if len(sys.argv) > 1 else "demo-user"

ENTRIES = [
    {"imdb_id": "tt1375666", "title": "Inception", "year": "2010", "media_type": "movie", "rating": 5, "status": "completed"},
    {"imdb_id": "tt0903747", "title": "Breaking Bad", "year": "2008–2013", "media_type": "series", "rating": 5, "status": "completed"},
    {"imdb_id": "tt4574334", "title": "Stranger Things", "year": "2016–2025", "media_type": "series", "rating": 4, "status": "watching"},
    {"imdb_id": "tt0816692", "title": "Interstellar", "year": "2014", "media_type": "movie", "rating": None, "status": "plan_to_watch"},
    {"imdb_id": "tt6751668", "title": "Parasite", "year": "2019", "media_type": "movie", "rating": 4, "status": "on_hold"},
]


async def seed():
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async with get_db() as db:
        store = WatchlistStore(SqlRowStore(db, DEMO_USER_ID))
        for data in ENTRIES:
            data = dict(data)
            rating = data.pop("rating")
            status = data.pop("status")

            result = await store.add(data)
            print(f"  {data['title']}: {result.message}")
            if result.code == "added":
                await store.rate(data["imdb_id"], rating)
                await store.set_status(data["imdb_id"], status)

        entries = await store.list_entries()
        print(f"Watchlist of {DEMO_USER_ID} seeded: {len(entries)} entries")

    await engine.dispose()


if __name__ == "__main__":
    asyncio.run(seed())
