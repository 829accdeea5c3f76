from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # Upstream movie database; the key never leaves the server
    OMDB_API_KEY: str | None = None
    OMDB_BASE_URL: str = "https://www.omdbapi.com/"

    # Identity service (Supabase auth) used to verify bearer tokens
    SUPABASE_URL: str
    SUPABASE_ANON_KEY: str

    DATABASE_URL: str

    # First entry is the fallback for unknown origins
    ALLOWED_ORIGINS: list[str] = [
        "http://localhost:8080",
        "http://localhost:5173",
    ]

    HTTP_TIMEOUT: float = 10.0

    # Client-side orchestration
    PROXY_URL: str = "http://localhost:8000/omdb-proxy"
    SEARCH_TIMEOUT_SECONDS: float = 10.0
    SEARCH_DEBOUNCE_SECONDS: float = 0.0
    TRENDING_QUERIES: list[str] = [
        "Inception",
        "Breaking Bad",
        "The Dark Knight",
        "Stranger Things",
        "Interstellar",
    ]
    TRENDING_LIMIT: int = 10

    model_config = {"env_file": ".env", "extra": "ignore"}


settings = Settings()
