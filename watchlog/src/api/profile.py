from fastapi import APIRouter, Depends

from api.dependencies import get_current_principal, get_watchlist_store
from core.identity import Principal
from schemas.watchlist import ProfileRead
from services.stats import compute_stats
from services.watchlist import WatchlistStore

router = APIRouter(tags=["profile"])


@router.get("/profile", response_model=ProfileRead)
async def profile(
    principal: Principal = Depends(get_current_principal),
    store: WatchlistStore = Depends(get_watchlist_store),
):
    return ProfileRead(
        id=principal.id,
        email=principal.email,
        member_since=principal.created_at,
        summary=compute_stats(await store.list_entries()),
    )
