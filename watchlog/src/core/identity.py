import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass

import httpx

from core.errors import AuthenticationError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Principal:
    id: str
    email: str | None = None
    created_at: str | None = None


class IdentityVerifier(ABC):
    @abstractmethod
    async def verify(self, token: str) -> Principal:
        """Resolve a bearer token to its principal or raise AuthenticationError."""
        ...

    async def aclose(self) -> None:
        pass


class SupabaseIdentityVerifier(IdentityVerifier):
    def __init__(
        self,
        url: str,
        anon_key: str,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.url = url.rstrip("/")
        self.anon_key = anon_key
        self.client = httpx.AsyncClient(timeout=timeout, transport=transport)

    async def verify(self, token: str) -> Principal:
        if not token:
            raise AuthenticationError()

        try:
            response = await self.client.get(
                f"{self.url}/auth/v1/user",
                headers={
                    "apikey": self.anon_key,
                    "Authorization": f"Bearer {token}",
                },
            )
        except httpx.HTTPError as e:
            logger.warning("Identity service unreachable: %s", e)
            raise AuthenticationError() from e

        if response.status_code != 200:
            logger.info("Token rejected by identity service (%s)", response.status_code)
            raise AuthenticationError()

        try:
            data = response.json()
        except ValueError as e:
            raise AuthenticationError() from e

        user_id = data.get("id") if isinstance(data, dict) else None
        if not user_id:
            raise AuthenticationError()

        return Principal(
            id=str(user_id),
            email=data.get("email"),
            created_at=data.get("created_at"),
        )

    async def aclose(self) -> None:
        await self.client.aclose()
