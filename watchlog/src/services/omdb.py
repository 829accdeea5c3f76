import logging
from dataclasses import dataclass
from typing import Any

import httpx

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class OmdbQuery:
    """Exactly one upstream request: a title search or an identifier lookup."""

    search: str | None = None
    page: str | None = None
    imdb_id: str | None = None
    season: str | None = None

    def to_params(self) -> dict[str, str]:
        if self.search is not None:
            params = {"s": self.search}
            if self.page:
                params["page"] = self.page
            return params

        params = {"i": self.imdb_id.strip()}
        if self.season:
            params["Season"] = self.season
        else:
            params["plot"] = "full"
        return params


class OmdbClient:
    def __init__(
        self,
        api_key: str | None,
        base_url: str = "https://www.omdbapi.com/",
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.api_key = api_key
        self.base_url = base_url
        self.client = httpx.AsyncClient(timeout=timeout, transport=transport)

    @property
    def is_configured(self) -> bool:
        return bool(self.api_key)

    async def fetch(self, query: OmdbQuery) -> Any:
        """Run the query and return the upstream JSON body untouched.

        OMDb answers logical failures ("Movie not found!") with a 200 and a
        ``"Response": "False"`` body, which is passed through like any other.
        """
        params = {"apikey": self.api_key, **query.to_params()}
        response = await self.client.get(self.base_url, params=params)
        return response.json()

    async def aclose(self) -> None:
        await self.client.aclose()
