import asyncio
import logging
import random
from dataclasses import dataclass

from client.notices import NoticeBoard
from client.operations import Operation, OperationStatus
from client.proxy_client import ProxyClient
from config import settings
from constants.omdb import NOT_FOUND_ERROR
from core.errors import NoEpisodesError, UpstreamError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RandomEpisode:
    season: int
    episode: dict


def parse_total_seasons(value) -> int:
    """``totalSeasons`` from a detail record; 0 when absent or "N/A"."""
    try:
        return max(int(value), 0)
    except (TypeError, ValueError):
        return 0


def _failure_message(error: Exception | None, default: str) -> str:
    if isinstance(error, UpstreamError) and str(error):
        return str(error)
    return default


class SearchOrchestrator:
    """Search, detail, trending and random-episode state for one signed-in user.

    Each kind of request is its own Operation: a new search cancels the
    search in flight but leaves a pending detail fetch alone.
    """

    def __init__(
        self,
        proxy: ProxyClient,
        notices: NoticeBoard | None = None,
        *,
        search_timeout: float | None = None,
        debounce: float | None = None,
        trending_queries: list[str] | None = None,
        trending_limit: int | None = None,
        rng: random.Random | None = None,
    ):
        self.proxy = proxy
        self.notices = notices if notices is not None else NoticeBoard()
        self.debounce = settings.SEARCH_DEBOUNCE_SECONDS if debounce is None else debounce
        self.trending_queries = list(
            settings.TRENDING_QUERIES if trending_queries is None else trending_queries
        )
        self.trending_limit = settings.TRENDING_LIMIT if trending_limit is None else trending_limit
        self.rng = rng or random.Random()

        self.search_op: Operation[list[dict]] = Operation(
            "search",
            timeout=settings.SEARCH_TIMEOUT_SECONDS if search_timeout is None else search_timeout,
        )
        self.detail_op: Operation[dict] = Operation("detail")
        self.trending_op: Operation[list[dict]] = Operation("trending", clear_on_failure=False)
        self.episode_op: Operation[RandomEpisode] = Operation("episode", clear_on_failure=False)

    @property
    def results(self) -> list[dict]:
        return self.search_op.result or []

    @property
    def is_searching(self) -> bool:
        return self.search_op.is_pending

    @property
    def detail(self) -> dict | None:
        return self.detail_op.result

    @property
    def is_loading_detail(self) -> bool:
        return self.detail_op.is_pending

    @property
    def trending(self) -> list[dict]:
        return self.trending_op.result or []

    @property
    def random_episode(self) -> RandomEpisode | None:
        return self.episode_op.result

    # Search

    async def search(self, query: str) -> list[dict]:
        query = query.strip()
        if not query:
            self.search_op.reset([])
            return []

        status = await self.search_op.run(lambda: self._fetch_search(query), delay=self.debounce)
        if status is OperationStatus.FAILED:
            self.notices.error(_failure_message(self.search_op.error, "Search failed"))
        return self.results

    async def _fetch_search(self, query: str) -> list[dict]:
        data = await self.proxy.search(query)
        if data.get("Search"):
            return data["Search"]

        error = data.get("Error")
        if error and error != NOT_FOUND_ERROR:
            raise UpstreamError(error)
        return []

    # Detail

    async def get_detail(self, imdb_id: str) -> dict | None:
        status = await self.detail_op.run(lambda: self._fetch_detail(imdb_id))
        if status is OperationStatus.FAILED:
            self.notices.error("Failed to load details")
        return self.detail

    async def _fetch_detail(self, imdb_id: str) -> dict | None:
        data = await self.proxy.detail(imdb_id)
        return data if data.get("Title") else None

    def close_detail(self) -> None:
        self.detail_op.reset()

    # Trending

    async def load_trending(self) -> list[dict]:
        status = await self.trending_op.run(self._fetch_trending)
        if status is OperationStatus.FAILED:
            self.notices.error("Failed to load trending titles")
        return self.trending

    async def _fetch_trending(self) -> list[dict]:
        responses = await asyncio.gather(
            *(self.proxy.search(q) for q in self.trending_queries),
            return_exceptions=True,
        )

        seen: set[str] = set()
        titles: list[dict] = []
        for query, response in zip(self.trending_queries, responses):
            if isinstance(response, BaseException):
                logger.warning("Trending query %r failed: %s", query, response)
                continue
            hits = response.get("Search") if isinstance(response, dict) else None
            if not hits:
                continue

            first = hits[0]
            imdb_id = first.get("imdbID")
            if not imdb_id or imdb_id in seen:
                continue
            seen.add(imdb_id)
            titles.append(first)
            if len(titles) >= self.trending_limit:
                break
        return titles

    # Random episode

    async def pick_random_episode(self, imdb_id: str, total_seasons: int) -> RandomEpisode | None:
        if total_seasons < 1:
            self.notices.error("No seasons available for this title")
            return None

        season = self.rng.randint(1, total_seasons)
        status = await self.episode_op.run(lambda: self._fetch_random_episode(imdb_id, season))
        if status is OperationStatus.FAILED:
            if isinstance(self.episode_op.error, NoEpisodesError):
                self.notices.error("No episodes found for this season")
            else:
                self.notices.error("Failed to pick a random episode")
            return None
        if status is OperationStatus.SUCCEEDED:
            return self.random_episode
        return None

    async def _fetch_random_episode(self, imdb_id: str, season: int) -> RandomEpisode:
        data = await self.proxy.season(imdb_id, season)
        episodes = data.get("Episodes") or []
        if not episodes:
            raise NoEpisodesError(f"{imdb_id} season {season} has no episodes")
        return RandomEpisode(season=season, episode=self.rng.choice(episodes))

    def clear_random_episode(self) -> None:
        self.episode_op.reset()
