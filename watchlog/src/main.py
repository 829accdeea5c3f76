import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from api.dependencies import get_identity_verifier, get_omdb_client
from api.health import router as health_router
from api.omdb_proxy import router as omdb_proxy_router
from api.profile import router as profile_router
from api.watchlist import router as watchlist_router
from config import settings
from core.cors import AllowListCORSMiddleware
from core.database import engine
from models import Base

logger = logging.getLogger("uvicorn.error")

# httpx logs full request URLs at INFO, which would include the OMDb key
logging.getLogger("httpx").setLevel(logging.WARNING)


@asynccontextmanager
async def lifespan(app: FastAPI):
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    if not settings.OMDB_API_KEY:
        logger.warning("OMDB_API_KEY is not set, /omdb-proxy will answer 500")
    logger.info(
        "Watchlog ready: upstream=%s origins=%s",
        settings.OMDB_BASE_URL,
        ", ".join(settings.ALLOWED_ORIGINS),
    )

    yield
    await get_omdb_client().aclose()
    await get_identity_verifier().aclose()
    await engine.dispose()


app = FastAPI(title="Watchlog", version="0.1.0", lifespan=lifespan)


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next) -> Response:
        response = await call_next(request)
        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["X-Frame-Options"] = "DENY"
        response.headers["X-XSS-Protection"] = "1; mode=block"
        response.headers["Referrer-Policy"] = "no-referrer"
        return response


app.add_middleware(SecurityHeadersMiddleware)
# Added last so it runs outermost and also answers preflights
app.add_middleware(AllowListCORSMiddleware)

app.include_router(health_router)
app.include_router(omdb_proxy_router)
app.include_router(watchlist_router)
app.include_router(profile_router)
