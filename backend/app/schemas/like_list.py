"""
Like/dislike list schemas
"""
from datetime import datetime
from pydantic import BaseModel

from app.models.like_list import LikeStatus
from app.schemas.movie import CatalogMovie


class LikeListItemCreate(BaseModel):
    """Schema for liking or disliking a catalog movie"""
    movie_id: int
    status: LikeStatus


class LikeListItem(BaseModel):
    id: int
    movie_id: int
    movie: CatalogMovie
    status: LikeStatus
    created_at: datetime
    updated_at: datetime


class LikeStatusResponse(BaseModel):
    status: str  # "liked", "disliked" or "none"
