import uuid
from datetime import datetime, timezone

from schemas.watchlist import WatchlistEntryRead
from services.stats import compute_stats


def _entry(media_type="movie", rating=None, status="plan_to_watch") -> WatchlistEntryRead:
    return WatchlistEntryRead(
        id=uuid.uuid4(),
        imdb_id="tt1234567",
        title="Title",
        year="2020",
        poster_url=None,
        media_type=media_type,
        rating=rating,
        status=status,
        created_at=datetime.now(timezone.utc),
    )


def test_empty_watchlist():
    stats = compute_stats([])
    assert stats.total == 0
    assert stats.avg_rating is None
    assert stats.status_breakdown == []
    assert set(stats.by_status) == {"watching", "completed", "plan_to_watch", "on_hold", "dropped"}
    assert stats.rating_distribution == {1: 0, 2: 0, 3: 0, 4: 0, 5: 0}


def test_counts_and_average():
    stats = compute_stats([
        _entry("movie", 5, "completed"),
        _entry("movie", 4, "completed"),
        _entry("series", None, "watching"),
        _entry("episode", 2, "dropped"),
    ])
    assert stats.total == 4
    assert stats.movies == 2
    assert stats.series == 1
    assert stats.rated == 3
    assert stats.avg_rating == 3.7
    assert stats.rating_distribution[5] == 1
    assert stats.rating_distribution[3] == 0


def test_breakdown_drops_empty_statuses():
    stats = compute_stats([_entry(status="on_hold"), _entry(status="on_hold")])
    assert [(s.status, s.label, s.count) for s in stats.status_breakdown] == [("on_hold", "On Hold", 2)]
    assert stats.by_status["watching"] == 0


def test_average_rounds_halves_up():
    stats = compute_stats([_entry(rating=2), _entry(rating=2), _entry(rating=2), _entry(rating=3)])
    assert stats.avg_rating == 2.3

    stats = compute_stats([_entry(rating=4), _entry(rating=5)])
    assert stats.avg_rating == 4.5
