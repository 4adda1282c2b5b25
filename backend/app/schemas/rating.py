"""
Rating and watchlist Pydantic schemas
"""
from typing import Optional, List
from pydantic import BaseModel, Field
from datetime import datetime

from app.schemas.movie import CatalogMovie


class RatingBase(BaseModel):
    """Base rating schema"""
    score: int = Field(..., ge=1, le=5)
    comment: Optional[str] = Field(None, max_length=500)


class RatingCreate(RatingBase):
    """Schema for rating a catalog movie"""
    movie_id: int


class Rating(RatingBase):
    """Complete rating schema for responses"""
    id: int
    user_id: int
    movie_id: int
    created_at: datetime
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class RatingAverage(BaseModel):
    movie_id: int
    average_score: Optional[float] = None
    rating_count: int = 0


class WatchlistItemCreate(BaseModel):
    """Schema for adding to watchlist"""
    movie_id: int


class WatchlistItem(BaseModel):
    """Complete watchlist item schema"""
    id: int
    movie_id: int
    movie: CatalogMovie
    created_at: datetime


class WatchlistResponse(BaseModel):
    """Watchlist response schema"""
    items: List[WatchlistItem]
    total: int


class WatchlistCheck(BaseModel):
    is_in_watchlist: bool


class RatingUpdate(RatingBase):
    """Schema for changing the score or comment of an existing rating"""
    pass
