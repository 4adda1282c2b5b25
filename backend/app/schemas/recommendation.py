"""
Recommendation-related Pydantic schemas
"""
import enum
from typing import Dict, List
from pydantic import BaseModel, Field

from app.schemas.movie import CatalogMovie


class RecommendationStrategy(str, enum.Enum):
    INSUFFICIENT_DATA = "InsufficientData"
    ADVANCED = "Advanced"


class YearPreference(BaseModel):
    preferred_start_year: int
    preferred_end_year: int
    weight: float = 1.0


class RatingPreference(BaseModel):
    min_rating: float
    preferred_rating: float = 10.0
    weight: float = 1.0


class TasteProfile(BaseModel):
    """
    Per-request weighting derived from a user's likes and dislikes.
    Rebuilt on every recommendation request and never persisted.
    """
    genre_weights: Dict[int, float] = {}
    avoided_genres: Dict[int, float] = {}
    year_preference: YearPreference
    rating_preference: RatingPreference
    avoided_movie_ids: List[int] = []


class ScoredMovie(BaseModel):
    movie: CatalogMovie
    composite_score: float = Field(..., ge=0)
    genre_component: float
    year_component: float
    rating_component: float
    popularity_component: float


class RecommendationResult(BaseModel):
    strategy: RecommendationStrategy
    message: str
    movies: List[CatalogMovie] = []
    page: int
    total_pages: int
    total_results: int


class UserRecommendationData(BaseModel):
    liked_count: int
    disliked_count: int
    strategy: RecommendationStrategy
    liked_movies: List[CatalogMovie] = []
    disliked_movies: List[CatalogMovie] = []
