"""
Like/dislike list endpoints
"""
from typing import Any, List
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
import logging

from app.core.database import get_db
from app.models.user import User
from app.schemas.like_list import LikeListItem, LikeListItemCreate, LikeStatusResponse
from app.services.catalog import CatalogGateway
from app.services.like_list_service import LikeListService
from app.utils.dependencies import get_catalog_gateway, get_current_active_user
from app.utils.exceptions import (
    MovieNotFound, TMDBAPIError, movie_not_found_exception, tmdb_api_error_exception
)

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("", response_model=List[LikeListItem])
async def get_like_list(
    current_user: User = Depends(get_current_active_user),
    db: Session = Depends(get_db)
) -> Any:
    return LikeListService(db).get_like_list(current_user.id)


@router.post("", response_model=LikeListItem)
async def set_like_status(
    item: LikeListItemCreate,
    current_user: User = Depends(get_current_active_user),
    db: Session = Depends(get_db),
    gateway: CatalogGateway = Depends(get_catalog_gateway)
) -> Any:
    """
    Like or dislike a movie. A later status for the same movie replaces the earlier one.
    """
    try:
        service = LikeListService(db, gateway)
        return await service.set_status(current_user.id, item.movie_id, item.status)

    except MovieNotFound:
        raise movie_not_found_exception()
    except TMDBAPIError as e:
        logger.error(f"Catalog error while saving like status: {str(e)}")
        raise tmdb_api_error_exception()
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error saving like status: {str(e)}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to update like list"
        )


@router.delete("/{movie_id}", status_code=status.HTTP_204_NO_CONTENT)
async def remove_like_status(
    movie_id: int,
    current_user: User = Depends(get_current_active_user),
    db: Session = Depends(get_db)
):
    if not LikeListService(db).remove(current_user.id, movie_id):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Movie is not in the like list"
        )


@router.get("/status/{movie_id}", response_model=LikeStatusResponse)
async def get_like_status(
    movie_id: int,
    current_user: User = Depends(get_current_active_user),
    db: Session = Depends(get_db)
) -> Any:
    return LikeStatusResponse(status=LikeListService(db).get_status(current_user.id, movie_id))
