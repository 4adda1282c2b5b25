"""
SQLAlchemy ORM models
"""
from app.models.user import User
from app.models.movie import Movie, Genre, movie_genres
from app.models.like_list import LikeList, LikeStatus
from app.models.rating import Rating, WatchlistItem

__all__ = [
    "User",
    "Movie", "Genre", "movie_genres",
    "LikeList", "LikeStatus",
    "Rating", "WatchlistItem",
]
