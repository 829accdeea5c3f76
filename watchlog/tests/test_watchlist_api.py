import httpx
import pytest

from api.dependencies import get_identity_verifier, get_session
from main import app

ALICE = {"Authorization": "Bearer alice-token"}
BOB = {"Authorization": "Bearer bob-token"}


def _payload(imdb_id="tt1160419", title="Dune", **overrides) -> dict:
    payload = {
        "imdb_id": imdb_id,
        "title": title,
        "year": "2021",
        "poster_url": "N/A",
        "media_type": "movie",
    }
    payload.update(overrides)
    return payload


@pytest.fixture
async def client(db_session, fake_verifier):
    async def session_override():
        yield db_session

    app.dependency_overrides[get_identity_verifier] = lambda: fake_verifier
    app.dependency_overrides[get_session] = session_override

    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


async def test_requires_bearer_token(client):
    resp = await client.get("/watchlist")
    assert resp.status_code == 401

    resp = await client.get("/watchlist", headers={"Authorization": "Bearer nope"})
    assert resp.status_code == 401
    assert resp.json() == {"detail": "Unauthorized"}


async def test_add_and_duplicate(client):
    resp = await client.post("/watchlist", json=_payload(), headers=ALICE)
    assert resp.status_code == 201
    body = resp.json()
    assert body["code"] == "added"
    assert body["level"] == "success"
    assert body["entry"]["poster_url"] is None
    assert body["entry"]["status"] == "plan_to_watch"

    resp = await client.post("/watchlist", json=_payload(), headers=ALICE)
    assert resp.status_code == 200
    assert resp.json()["level"] == "info"
    assert resp.json()["message"] == "Already in your watchlist"

    resp = await client.get("/watchlist", headers=ALICE)
    assert len(resp.json()) == 1


async def test_invalid_payload(client):
    resp = await client.post("/watchlist", json=_payload(imdb_id="tt12"), headers=ALICE)
    assert resp.status_code == 422


async def test_lists_are_per_user(client):
    await client.post("/watchlist", json=_payload(), headers=ALICE)
    resp = await client.get("/watchlist", headers=BOB)
    assert resp.json() == []


async def test_filter_and_sort(client):
    await client.post("/watchlist", json=_payload("tt0000001", "Zodiac"), headers=ALICE)
    await client.post("/watchlist", json=_payload("tt0000002", "Andor", year="2022–", media_type="series"), headers=ALICE)

    resp = await client.get("/watchlist", params={"sort": "title"}, headers=ALICE)
    assert [e["title"] for e in resp.json()] == ["Andor", "Zodiac"]

    resp = await client.get("/watchlist", params={"media_type": "series"}, headers=ALICE)
    assert [e["imdb_id"] for e in resp.json()] == ["tt0000002"]

    resp = await client.get("/watchlist", params={"sort": "popularity"}, headers=ALICE)
    assert resp.status_code == 422


async def test_rating_and_status(client):
    await client.post("/watchlist", json=_payload(), headers=ALICE)

    resp = await client.patch("/watchlist/tt1160419/rating", json={"rating": 5}, headers=ALICE)
    assert resp.status_code == 200
    resp = await client.patch("/watchlist/tt1160419/rating", json={"rating": 0}, headers=ALICE)
    assert resp.status_code == 200
    resp = await client.patch("/watchlist/tt1160419/status", json={"status": "completed"}, headers=ALICE)
    assert resp.status_code == 200

    entry = (await client.get("/watchlist", headers=ALICE)).json()[0]
    assert entry["rating"] is None
    assert entry["status"] == "completed"

    resp = await client.patch("/watchlist/tt1160419/status", json={"status": "binged"}, headers=ALICE)
    assert resp.status_code == 422
    resp = await client.patch("/watchlist/tt1160419/rating", json={"rating": 9}, headers=ALICE)
    assert resp.status_code == 422


async def test_remove(client):
    await client.post("/watchlist", json=_payload(), headers=ALICE)

    resp = await client.delete("/watchlist/tt1160419", headers=BOB)
    assert resp.status_code == 404

    resp = await client.delete("/watchlist/tt1160419", headers=ALICE)
    assert resp.status_code == 200
    assert resp.json()["message"] == "Removed from watchlist"
    assert (await client.get("/watchlist", headers=ALICE)).json() == []


async def test_stats_and_profile(client):
    await client.post("/watchlist", json=_payload("tt0000001", "One"), headers=ALICE)
    await client.post("/watchlist", json=_payload("tt0000002", "Two", media_type="series"), headers=ALICE)
    await client.patch("/watchlist/tt0000001/rating", json={"rating": 4}, headers=ALICE)
    await client.patch("/watchlist/tt0000002/rating", json={"rating": 3}, headers=ALICE)
    await client.patch("/watchlist/tt0000002/status", json={"status": "watching"}, headers=ALICE)

    stats = (await client.get("/watchlist/stats", headers=ALICE)).json()
    assert stats["total"] == 2
    assert stats["movies"] == 1
    assert stats["series"] == 1
    assert stats["avg_rating"] == 3.5
    assert stats["by_status"]["watching"] == 1
    assert stats["by_status"]["dropped"] == 0
    assert stats["rating_distribution"] == {"1": 0, "2": 0, "3": 1, "4": 1, "5": 0}

    profile = (await client.get("/profile", headers=ALICE)).json()
    assert profile["email"] == "alice@example.com"
    assert profile["member_since"] == "2024-01-05T10:00:00Z"
    assert profile["summary"]["rated"] == 2


async def test_security_and_cors_headers(client):
    resp = await client.get("/health", headers={"Origin": "http://localhost:5173"})
    assert resp.json() == {"status": "ok"}
    assert resp.headers["x-content-type-options"] == "nosniff"
    assert resp.headers["access-control-allow-origin"] == "http://localhost:5173"
