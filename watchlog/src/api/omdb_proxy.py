import logging

from fastapi import APIRouter, Depends, Header, Request
from fastapi.responses import JSONResponse

from api.dependencies import get_identity_verifier, get_omdb_client
from core.errors import ProxyError
from core.identity import IdentityVerifier
from core.validation import extract_bearer_token, validate_proxy_query
from services.omdb import OmdbClient

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/omdb-proxy")
async def omdb_proxy(
    request: Request,
    authorization: str | None = Header(default=None),
    verifier: IdentityVerifier = Depends(get_identity_verifier),
    omdb: OmdbClient = Depends(get_omdb_client),
):
    """Relay one OMDb request with the server-held key.

    Caller identity is checked before any parameter is looked at, and the
    upstream body comes back verbatim with a 200, "not found" included.
    """
    params = request.query_params
    try:
        token = extract_bearer_token(authorization)
        await verifier.verify(token)

        if not omdb.is_configured:
            logger.error("OMDB_API_KEY is not set")
            raise ProxyError(500, "OMDB API key not configured")

        query = validate_proxy_query(
            search=params.get("s"),
            imdb_id=params.get("i"),
            season=params.get("Season"),
            page=params.get("page"),
        )
        data = await omdb.fetch(query)
    except ProxyError as e:
        logger.info("omdb-proxy rejected request: %s (%s)", e.message, e.status_code)
        return JSONResponse({"error": e.message}, status_code=e.status_code)
    except Exception:
        logger.exception("omdb-proxy failed")
        return JSONResponse({"error": "Internal server error"}, status_code=500)

    return JSONResponse(data)
