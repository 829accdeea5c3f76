from sqlalchemy import CheckConstraint, Index, SmallInteger, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from constants.omdb import DEFAULT_STATUS
from models.base import Base, IdentityMixin


class WatchlistEntry(IdentityMixin, Base):
    __tablename__ = "watchlist"
    __table_args__ = (
        UniqueConstraint("user_id", "imdb_id", name="uq_watchlist_user_imdb"),
        CheckConstraint("rating BETWEEN 1 AND 5", name="ck_watchlist_rating_range"),
        Index("ix_watchlist_user_created", "user_id", "created_at"),
    )

    user_id: Mapped[str] = mapped_column(String(64), nullable=False)
    imdb_id: Mapped[str] = mapped_column(String(10), nullable=False)
    title: Mapped[str] = mapped_column(String(500), nullable=False)
    year: Mapped[str | None] = mapped_column(String(9), nullable=True)
    poster_url: Mapped[str | None] = mapped_column(String(2000), nullable=True)
    media_type: Mapped[str] = mapped_column(String(10), nullable=False)
    rating: Mapped[int | None] = mapped_column(SmallInteger, nullable=True)
    status: Mapped[str] = mapped_column(
        String(20), nullable=False, default=DEFAULT_STATUS
    )
