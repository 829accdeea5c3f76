from typing import Literal

from fastapi import APIRouter, Depends, HTTPException, Response

from api.dependencies import get_watchlist_store
from schemas.watchlist import (
    MutationResult,
    RatingUpdate,
    StatusUpdate,
    WatchlistEntryCreate,
    WatchlistEntryRead,
    WatchlistStats,
)
from services.stats import compute_stats
from services.watchlist import WatchlistStore, filter_and_sort

router = APIRouter(prefix="/watchlist", tags=["watchlist"])


def _raise_for_result(result: MutationResult) -> MutationResult:
    if result.code == "not_found":
        raise HTTPException(status_code=404, detail=result.message)
    if result.code == "failed":
        raise HTTPException(status_code=500, detail=result.message)
    return result


@router.get("", response_model=list[WatchlistEntryRead])
async def list_watchlist(
    media_type: Literal["all", "movie", "series", "episode"] = "all",
    sort: Literal["date", "title", "year", "rating"] = "date",
    store: WatchlistStore = Depends(get_watchlist_store),
):
    return filter_and_sort(await store.list_entries(), media_type, sort)


@router.get("/stats", response_model=WatchlistStats)
async def watchlist_stats(store: WatchlistStore = Depends(get_watchlist_store)):
    return compute_stats(await store.list_entries())


@router.post("", status_code=201, response_model=MutationResult)
async def add_entry(
    payload: WatchlistEntryCreate,
    response: Response,
    store: WatchlistStore = Depends(get_watchlist_store),
):
    result = _raise_for_result(await store.add(payload))
    if result.code == "duplicate":
        response.status_code = 200
    return result


@router.delete("/{imdb_id}", response_model=MutationResult)
async def remove_entry(imdb_id: str, store: WatchlistStore = Depends(get_watchlist_store)):
    return _raise_for_result(await store.remove(imdb_id))


@router.patch("/{imdb_id}/rating", response_model=MutationResult)
async def rate_entry(
    imdb_id: str,
    payload: RatingUpdate,
    store: WatchlistStore = Depends(get_watchlist_store),
):
    return _raise_for_result(await store.rate(imdb_id, payload.rating))


@router.patch("/{imdb_id}/status", response_model=MutationResult)
async def set_entry_status(
    imdb_id: str,
    payload: StatusUpdate,
    store: WatchlistStore = Depends(get_watchlist_store),
):
    return _raise_for_result(await store.set_status(imdb_id, payload.status))
