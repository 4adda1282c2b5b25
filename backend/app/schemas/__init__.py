"""
Pydantic schemas for request/response validation
"""
from app.schemas.user import UserBase, UserCreate, UserUpdate, User
from app.schemas.movie import (
    Genre, GenreCreate, GenreRecord, CatalogMovie, MoviePage, MovieFilters,
    MovieCreate, MovieRecord
)
from app.schemas.rating import (
    RatingCreate, RatingUpdate, Rating, RatingAverage,
    WatchlistItemCreate, WatchlistItem, WatchlistResponse, WatchlistCheck
)
from app.schemas.like_list import LikeListItemCreate, LikeListItem, LikeStatusResponse
from app.schemas.recommendation import (
    RecommendationStrategy, TasteProfile, YearPreference, RatingPreference,
    ScoredMovie, RecommendationResult, UserRecommendationData
)
from app.schemas.auth import Token, Login, Register, RefreshToken, ChangePassword

__all__ = [
    # User schemas
    "UserBase", "UserCreate", "UserUpdate", "User",

    # Movie schemas
    "Genre", "GenreCreate", "GenreRecord", "CatalogMovie", "MoviePage", "MovieFilters",
    "MovieCreate", "MovieRecord",

    # Rating and watchlist schemas
    "RatingCreate", "RatingUpdate", "Rating", "RatingAverage",
    "WatchlistItemCreate", "WatchlistItem", "WatchlistResponse", "WatchlistCheck",

    # Like list schemas
    "LikeListItemCreate", "LikeListItem", "LikeStatusResponse",

    # Recommendation schemas
    "RecommendationStrategy", "TasteProfile", "YearPreference", "RatingPreference",
    "ScoredMovie", "RecommendationResult", "UserRecommendationData",

    # Auth schemas
    "Token", "Login", "Register", "RefreshToken", "ChangePassword",
]
