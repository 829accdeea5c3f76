from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from config import settings
from constants.omdb import CORS_ALLOW_HEADERS, CORS_ALLOW_METHODS


def resolve_origin(origin: str | None, allowed: list[str] | None = None) -> str:
    allowed = allowed if allowed is not None else settings.ALLOWED_ORIGINS
    if origin and origin in allowed:
        return origin
    return allowed[0]


def cors_headers(origin: str | None, allowed: list[str] | None = None) -> dict[str, str]:
    return {
        "Access-Control-Allow-Origin": resolve_origin(origin, allowed),
        "Access-Control-Allow-Headers": CORS_ALLOW_HEADERS,
        "Access-Control-Allow-Methods": CORS_ALLOW_METHODS,
        "Vary": "Origin",
    }


class AllowListCORSMiddleware(BaseHTTPMiddleware):
    """Strict allow-list CORS: unknown origins get the default origin back.

    Preflight requests are answered here with an empty body.
    """

    async def dispatch(self, request: Request, call_next) -> Response:
        headers = cors_headers(request.headers.get("origin"))
        if request.method == "OPTIONS":
            return Response(status_code=200, headers=headers)

        response = await call_next(request)
        response.headers.update(headers)
        return response
