"""
Rating endpoints
"""
from typing import Any, List
from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session
import logging

from app.core.database import get_db
from app.models.rating import Rating as RatingModel
from app.models.user import User
from app.schemas.rating import Rating, RatingAverage, RatingCreate, RatingUpdate
from app.services.catalog import CatalogGateway
from app.services.rating_service import RatingService
from app.utils.dependencies import get_catalog_gateway, get_current_active_user
from app.utils.exceptions import (
    InsufficientPermissions, MovieNotFound, TMDBAPIError,
    insufficient_permissions_exception, movie_not_found_exception, tmdb_api_error_exception
)

logger = logging.getLogger(__name__)
router = APIRouter()


def rating_to_schema(rating: RatingModel) -> Rating:
    # expose the catalog id, not the local row id
    return Rating(
        id=rating.id,
        user_id=rating.user_id,
        movie_id=rating.movie.tmdb_id,
        score=rating.score,
        comment=rating.comment,
        created_at=rating.created_at,
        updated_at=rating.updated_at
    )


def _rating_not_found():
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail="Rating not found"
    )


@router.get("", response_model=List[Rating])
async def list_ratings(
    skip: int = Query(0, ge=0),
    limit: int = Query(50, ge=1, le=100),
    db: Session = Depends(get_db)
) -> Any:
    return [rating_to_schema(rating) for rating in RatingService(db).list_ratings(skip, limit)]


@router.get("/movie/{movie_id}", response_model=List[Rating])
async def get_movie_ratings(movie_id: int, db: Session = Depends(get_db)) -> Any:
    return [rating_to_schema(rating) for rating in RatingService(db).get_movie_ratings(movie_id)]


@router.get("/average/movie/{movie_id}", response_model=RatingAverage)
async def get_movie_average(movie_id: int, db: Session = Depends(get_db)) -> Any:
    return RatingService(db).get_average(movie_id)


@router.get("/{rating_id}", response_model=Rating)
async def get_rating(rating_id: int, db: Session = Depends(get_db)) -> Any:
    rating = RatingService(db).get_rating_by_id(rating_id)
    if not rating:
        raise _rating_not_found()
    return rating_to_schema(rating)


@router.post("", response_model=Rating)
async def rate_movie(
    rating_data: RatingCreate,
    current_user: User = Depends(get_current_active_user),
    db: Session = Depends(get_db),
    gateway: CatalogGateway = Depends(get_catalog_gateway)
) -> Any:
    """
    Rate a movie 1-5, replacing the user's earlier rating for it
    """
    try:
        rating = await RatingService(db, gateway).rate_movie(current_user.id, rating_data)
        return rating_to_schema(rating)

    except MovieNotFound:
        raise movie_not_found_exception()
    except TMDBAPIError as e:
        logger.error(f"Catalog error while rating: {str(e)}")
        raise tmdb_api_error_exception()
    except Exception as e:
        logger.error(f"Error saving rating: {str(e)}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to save rating"
        )


@router.put("/{rating_id}", response_model=Rating)
async def update_rating(
    rating_id: int,
    rating_data: RatingUpdate,
    current_user: User = Depends(get_current_active_user),
    db: Session = Depends(get_db)
) -> Any:
    """
    Change the score or comment of one of your ratings
    """
    try:
        rating = RatingService(db).update_rating(current_user.id, rating_id, rating_data)
    except InsufficientPermissions:
        raise insufficient_permissions_exception()

    if not rating:
        raise _rating_not_found()
    return rating_to_schema(rating)


@router.delete("/{rating_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_rating(
    rating_id: int,
    current_user: User = Depends(get_current_active_user),
    db: Session = Depends(get_db)
):
    try:
        deleted = RatingService(db).delete_rating(current_user.id, rating_id)
    except InsufficientPermissions:
        raise insufficient_permissions_exception()

    if not deleted:
        raise _rating_not_found()
