"""
Pydantic models for TMDB API responses
"""
from typing import List, Optional, Dict, Any
from pydantic import BaseModel, field_validator


class TMDBGenre(BaseModel):
    """TMDB Genre model"""
    id: int
    name: str


class TMDBMovie(BaseModel):
    """TMDB Movie model (list endpoints carry genre ids only)"""
    id: int
    title: Optional[str] = None
    original_title: Optional[str] = None
    overview: Optional[str] = None
    release_date: Optional[str] = None
    poster_path: Optional[str] = None
    backdrop_path: Optional[str] = None
    adult: bool = False
    genre_ids: List[int] = []
    original_language: Optional[str] = None
    popularity: Optional[float] = None
    vote_average: Optional[float] = None
    vote_count: Optional[int] = None

    @field_validator("genre_ids", mode="before")
    @classmethod
    def null_genre_ids(cls, v):
        return [] if v is None else v

    @field_validator("adult", mode="before")
    @classmethod
    def null_adult(cls, v):
        return False if v is None else v

    @property
    def display_title(self) -> Optional[str]:
        return self.title or self.original_title


class TMDBMovieDetails(TMDBMovie):
    """Movie detail model (detail endpoint carries full genre objects)"""
    runtime: Optional[int] = None
    status: Optional[str] = None
    tagline: Optional[str] = None
    homepage: Optional[str] = None
    genres: List[TMDBGenre] = []
    production_companies: List[Dict[str, Any]] = []

    @field_validator("genres", "production_companies", mode="before")
    @classmethod
    def null_lists(cls, v):
        return [] if v is None else v


class TMDBPagedResponse(BaseModel):
    """Shared shape of search/discover/popular/... responses"""
    page: int = 1
    # rows are validated one at a time by the client
    results: List[Any] = []
    total_pages: int = 0
    total_results: int = 0


class TMDBGenreListResponse(BaseModel):
    """TMDB genre list response"""
    genres: List[TMDBGenre] = []
