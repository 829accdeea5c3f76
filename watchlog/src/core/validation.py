import re
from urllib.parse import urlsplit

from core.errors import ProxyError
from services.omdb import OmdbQuery

# ASCII only: a Unicode digit must never reach the upstream URL
IMDB_ID_PATTERN = re.compile(r"tt[0-9]{7,8}", re.ASCII)
DIGITS_PATTERN = re.compile(r"[0-9]+", re.ASCII)
# YYYY, YYYY-YYYY, and the open "YYYY–" ranges OMDb uses for running series
YEAR_PATTERN = re.compile(r"[0-9]{4}(?:[-–](?:[0-9]{4})?)?", re.ASCII)

BEARER_PREFIX = "Bearer "

# Max lengths
MAX_SEARCH_LENGTH = 100
MAX_TITLE_LENGTH = 500
MAX_POSTER_URL_LENGTH = 2000

MIN_SEASON = 1
MAX_SEASON = 100


def is_valid_imdb_id(value: str | None) -> bool:
    return bool(value) and IMDB_ID_PATTERN.fullmatch(value) is not None


def is_valid_season(value: str | None) -> bool:
    if not value or DIGITS_PATTERN.fullmatch(value) is None:
        return False
    return MIN_SEASON <= int(value) <= MAX_SEASON


def is_valid_page(value: str | None) -> bool:
    return bool(value) and DIGITS_PATTERN.fullmatch(value) is not None


def is_valid_year(value: str) -> bool:
    return YEAR_PATTERN.fullmatch(value) is not None


def is_valid_poster_url(value: str) -> bool:
    if len(value) > MAX_POSTER_URL_LENGTH:
        return False
    try:
        parts = urlsplit(value)
    except ValueError:
        return False
    return parts.scheme in ("http", "https") and bool(parts.netloc)


def extract_bearer_token(authorization: str | None) -> str:
    """Return the token from an ``Authorization: Bearer`` header or raise 401."""
    if not authorization or not authorization.startswith(BEARER_PREFIX):
        raise ProxyError(401, "Unauthorized")
    token = authorization[len(BEARER_PREFIX):].strip()
    if not token:
        raise ProxyError(401, "Unauthorized")
    return token


def validate_proxy_query(
    search: str | None,
    imdb_id: str | None,
    season: str | None,
    page: str | None,
) -> OmdbQuery:
    """Check the proxy's query parameters and build the single upstream query.

    Checks run in a fixed order and the first failure wins. A search string
    takes precedence over an identifier when both are given; an invalid
    ``page`` is dropped rather than rejected.
    """
    if not search and not imdb_id:
        raise ProxyError(400, "Missing search query or IMDB ID")

    if search and len(search) > MAX_SEARCH_LENGTH:
        raise ProxyError(400, "Search query too long")

    if imdb_id and not is_valid_imdb_id(imdb_id):
        raise ProxyError(400, "Invalid IMDB ID format")

    if season and not is_valid_season(season):
        raise ProxyError(400, "Invalid season number")

    if search:
        return OmdbQuery(
            search=search.strip(),
            page=page if is_valid_page(page) else None,
        )
    return OmdbQuery(imdb_id=imdb_id, season=season or None)
