from collections import Counter
from collections.abc import Iterable
from decimal import ROUND_HALF_UP, Decimal

from constants.omdb import WATCH_STATUSES
from schemas.watchlist import StatusCount, WatchlistEntryRead, WatchlistStats


def _average(ratings: list[int]) -> float:
    # One decimal, halves rounded up: [2, 2, 2, 3] gives 2.3
    mean = Decimal(sum(ratings)) / Decimal(len(ratings))
    return float(mean.quantize(Decimal("0.1"), rounding=ROUND_HALF_UP))


def compute_stats(entries: Iterable[WatchlistEntryRead]) -> WatchlistStats:
    entries = list(entries)

    media = Counter(e.media_type for e in entries)
    statuses = Counter(e.status for e in entries)
    ratings = [e.rating for e in entries if e.rating]
    avg_rating = _average(ratings) if ratings else None

    by_status = {status: statuses.get(status, 0) for status in WATCH_STATUSES}

    return WatchlistStats(
        total=len(entries),
        movies=media.get("movie", 0),
        series=media.get("series", 0),
        rated=len(ratings),
        avg_rating=avg_rating,
        by_status=by_status,
        # Chart view: empty slices are dropped
        status_breakdown=[
            StatusCount(status=status, label=label, count=by_status[status])
            for status, label in WATCH_STATUSES.items()
            if by_status[status]
        ],
        rating_distribution={score: ratings.count(score) for score in range(1, 6)},
    )
