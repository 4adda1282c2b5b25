"""
Movie-related Pydantic schemas
"""
from typing import Optional, List
from pydantic import BaseModel, Field
from datetime import datetime

from app.utils.helpers import extract_year_from_date


class GenreBase(BaseModel):
    """Base genre schema"""
    name: str = Field(..., max_length=50)


class Genre(GenreBase):
    """Catalog genre (id is the catalog genre id)"""
    id: int

    class Config:
        from_attributes = True


class GenreCreate(GenreBase):
    """Schema for creating or renaming local genres"""
    tmdb_id: Optional[int] = None


class GenreRecord(GenreCreate):
    """Local genre row"""
    id: int
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class CatalogMovie(BaseModel):
    """
    Immutable movie snapshot as seen by the recommendation engine.
    `id` is always the catalog (TMDB) id, never a local row id.
    """
    id: int
    title: str
    overview: Optional[str] = None
    release_date: Optional[str] = None
    vote_average: Optional[float] = Field(None, ge=0, le=10)
    vote_count: Optional[int] = None
    popularity: Optional[float] = None
    genres: List[Genre] = []
    poster_path: Optional[str] = None
    backdrop_path: Optional[str] = None
    poster_url: Optional[str] = None
    backdrop_url: Optional[str] = None
    adult: bool = False
    original_language: Optional[str] = None
    original_title: Optional[str] = None

    class Config:
        frozen = True

    @property
    def genre_ids(self) -> List[int]:
        return [genre.id for genre in self.genres]

    @property
    def genre_names(self) -> List[str]:
        return [genre.name for genre in self.genres]

    @property
    def year(self) -> Optional[int]:
        return extract_year_from_date(self.release_date)


class MoviePage(BaseModel):
    """One page of catalog results with the catalog's pagination metadata"""
    movies: List[CatalogMovie]
    page: int
    total_pages: int
    total_results: int


class MovieFilters(BaseModel):
    """Discover filters understood by the catalog gateway"""
    genres: Optional[List[int]] = None
    release_date_from: Optional[str] = Field(None, pattern=r"^\d{4}-\d{2}-\d{2}$")
    release_date_to: Optional[str] = Field(None, pattern=r"^\d{4}-\d{2}-\d{2}$")
    min_rating: Optional[float] = Field(None, ge=0, le=10)
    max_rating: Optional[float] = Field(None, ge=0, le=10)
    min_vote_count: Optional[int] = Field(None, ge=0)
    language: Optional[str] = None
    sort_by: Optional[str] = Field("popularity", pattern="^(popularity|rating|release_date|title)$")
    sort_order: Optional[str] = Field("desc", pattern="^(asc|desc)$")
    include_adult: Optional[bool] = False



class MovieCreate(BaseModel):
    """Schema for creating or replacing a locally stored movie"""
    tmdb_id: int = Field(..., gt=0)
    title: str = Field(..., min_length=1, max_length=200)
    overview: Optional[str] = None
    release_date: Optional[str] = Field(None, pattern=r"^\d{4}-\d{2}-\d{2}$")
    vote_average: Optional[float] = Field(None, ge=0, le=10)
    vote_count: Optional[int] = Field(None, ge=0)
    popularity: Optional[float] = Field(None, ge=0)
    poster_path: Optional[str] = Field(None, max_length=200)
    backdrop_path: Optional[str] = Field(None, max_length=200)
    is_adult: bool = False
    original_language: Optional[str] = Field(None, max_length=20)
    original_title: Optional[str] = Field(None, max_length=200)
    # local genre ids; unknown ids are ignored
    genre_ids: List[int] = []


class MovieRecord(BaseModel):
    """Locally stored movie row"""
    id: int
    tmdb_id: int
    title: str
    overview: Optional[str] = None
    release_date: Optional[str] = None
    vote_average: Optional[float] = None
    vote_count: Optional[int] = None
    popularity: Optional[float] = None
    poster_path: Optional[str] = None
    backdrop_path: Optional[str] = None
    is_adult: bool = False
    original_language: Optional[str] = None
    original_title: Optional[str] = None
    genres: List[GenreRecord] = []
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True
