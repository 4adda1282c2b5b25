"""
Movie and genre models
"""
from sqlalchemy import Column, Integer, String, Boolean, DateTime, Float, Text, Table, ForeignKey
from sqlalchemy.orm import relationship

from app.core.database import Base
from app.models.user import utcnow


movie_genres = Table(
    "movie_genres",
    Base.metadata,
    Column("movie_id", Integer, ForeignKey("movies.id", ondelete="CASCADE"), primary_key=True),
    Column("genre_id", Integer, ForeignKey("genres.id", ondelete="CASCADE"), primary_key=True),
)


class Genre(Base):
    __tablename__ = "genres"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(50), unique=True, nullable=False)
    tmdb_id = Column(Integer, unique=True, nullable=True, index=True)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False)

    movies = relationship("Movie", secondary=movie_genres, back_populates="genres")

    def __repr__(self):
        return f"<Genre {self.name} tmdb={self.tmdb_id}>"


class Movie(Base):
    __tablename__ = "movies"

    id = Column(Integer, primary_key=True, index=True)
    tmdb_id = Column(Integer, unique=True, nullable=False, index=True)
    title = Column(String(200), nullable=False)
    overview = Column(Text, nullable=True)
    # Kept as the raw catalog string; not every catalog date parses
    release_date = Column(String(20), nullable=True)
    vote_average = Column(Float, nullable=True)
    vote_count = Column(Integer, nullable=True)
    popularity = Column(Float, nullable=True)
    poster_path = Column(String(200), nullable=True)
    backdrop_path = Column(String(200), nullable=True)
    is_adult = Column(Boolean, default=False, nullable=False)
    original_language = Column(String(20), nullable=True)
    original_title = Column(String(200), nullable=True)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False)

    genres = relationship("Genre", secondary=movie_genres, back_populates="movies", lazy="selectin")
    like_list = relationship("LikeList", back_populates="movie", cascade="all, delete-orphan")
    watchlist = relationship("WatchlistItem", back_populates="movie", cascade="all, delete-orphan")
    ratings = relationship("Rating", back_populates="movie", cascade="all, delete-orphan")

    def __repr__(self):
        return f"<Movie {self.tmdb_id} {self.title!r}>"
