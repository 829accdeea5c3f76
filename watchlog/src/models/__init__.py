from models.base import Base
from models.watchlist import WatchlistEntry

__all__ = ["Base", "WatchlistEntry"]
