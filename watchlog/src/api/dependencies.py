from collections.abc import AsyncIterator
from functools import lru_cache

from fastapi import Depends, Header, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from config import settings
from core.database import get_db
from core.errors import ProxyError
from core.identity import IdentityVerifier, Principal, SupabaseIdentityVerifier
from core.validation import extract_bearer_token
from services.omdb import OmdbClient
from services.row_store import SqlRowStore
from services.watchlist import WatchlistStore


@lru_cache
def get_identity_verifier() -> IdentityVerifier:
    return SupabaseIdentityVerifier(
        settings.SUPABASE_URL,
        settings.SUPABASE_ANON_KEY,
        timeout=settings.HTTP_TIMEOUT,
    )


@lru_cache
def get_omdb_client() -> OmdbClient:
    return OmdbClient(
        settings.OMDB_API_KEY,
        base_url=settings.OMDB_BASE_URL,
        timeout=settings.HTTP_TIMEOUT,
    )


async def get_session() -> AsyncIterator[AsyncSession]:
    async with get_db() as db:
        yield db


async def get_current_principal(
    authorization: str | None = Header(default=None),
    verifier: IdentityVerifier = Depends(get_identity_verifier),
) -> Principal:
    try:
        token = extract_bearer_token(authorization)
        return await verifier.verify(token)
    except ProxyError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message) from e


async def get_watchlist_store(
    principal: Principal = Depends(get_current_principal),
    db: AsyncSession = Depends(get_session),
) -> WatchlistStore:
    return WatchlistStore(SqlRowStore(db, principal.id))
