import logging
from typing import Any

import httpx

from core.errors import UpstreamError

logger = logging.getLogger(__name__)


class ProxyClient:
    """Calls /omdb-proxy on behalf of a signed-in user."""

    def __init__(
        self,
        base_url: str,
        token: str | None = None,
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.base_url = base_url
        self.token = token
        self.client = httpx.AsyncClient(timeout=timeout, transport=transport)

    async def search(self, query: str, page: int | None = None) -> dict:
        params = {"s": query.strip()}
        if page is not None:
            params["page"] = str(page)
        return await self._get(params)

    async def detail(self, imdb_id: str) -> dict:
        return await self._get({"i": imdb_id})

    async def season(self, imdb_id: str, season: int) -> dict:
        return await self._get({"i": imdb_id, "Season": str(season)})

    async def _get(self, params: dict[str, str]) -> Any:
        headers = {"Authorization": f"Bearer {self.token}"} if self.token else {}
        response = await self.client.get(self.base_url, params=params, headers=headers)

        if response.status_code != 200:
            try:
                body = response.json()
            except ValueError:
                body = None
            message = body.get("error") if isinstance(body, dict) else None
            raise UpstreamError(message or f"Proxy returned {response.status_code}", response.status_code)

        return response.json()

    async def aclose(self) -> None:
        await self.client.aclose()
