class ProxyError(Exception):
    """A request the proxy refuses; rendered as ``{"error": message}``."""

    def __init__(self, status_code: int, message: str) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.message = message


class AuthenticationError(ProxyError):
    def __init__(self, message: str = "Unauthorized") -> None:
        super().__init__(401, message)


class RowStoreError(Exception):
    """The row store failed to apply an operation."""


class DuplicateEntryError(RowStoreError):
    def __init__(self, imdb_id: str) -> None:
        super().__init__(f"{imdb_id} is already in the watchlist")
        self.imdb_id = imdb_id


class UpstreamError(Exception):
    """The proxy or the movie database reported an error."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class NoEpisodesError(Exception):
    pass
