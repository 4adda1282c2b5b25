"""
Watchlist endpoints
"""
from typing import Any
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
import logging

from app.core.database import get_db
from app.models.user import User
from app.schemas.rating import WatchlistCheck, WatchlistItem, WatchlistItemCreate, WatchlistResponse
from app.services.catalog import CatalogGateway
from app.services.watchlist_service import WatchlistService
from app.utils.dependencies import get_catalog_gateway, get_current_active_user
from app.utils.exceptions import (
    DuplicateEntry, MovieNotFound, TMDBAPIError, movie_not_found_exception, tmdb_api_error_exception
)

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("", response_model=WatchlistResponse)
async def get_watchlist(
    current_user: User = Depends(get_current_active_user),
    db: Session = Depends(get_db)
) -> Any:
    return WatchlistService(db).get_watchlist(current_user.id)


@router.post("", response_model=WatchlistItem, status_code=status.HTTP_201_CREATED)
async def add_to_watchlist(
    item: WatchlistItemCreate,
    current_user: User = Depends(get_current_active_user),
    db: Session = Depends(get_db),
    gateway: CatalogGateway = Depends(get_catalog_gateway)
) -> Any:
    """
    Add a movie to the watchlist
    """
    try:
        return await WatchlistService(db, gateway).add(current_user.id, item.movie_id)

    except DuplicateEntry:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Movie already in watchlist"
        )
    except MovieNotFound:
        raise movie_not_found_exception()
    except TMDBAPIError as e:
        logger.error(f"Catalog error while adding to watchlist: {str(e)}")
        raise tmdb_api_error_exception()
    except Exception as e:
        logger.error(f"Error adding to watchlist: {str(e)}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to add to watchlist"
        )


@router.delete("/{movie_id}", status_code=status.HTTP_204_NO_CONTENT)
async def remove_from_watchlist(
    movie_id: int,
    current_user: User = Depends(get_current_active_user),
    db: Session = Depends(get_db)
):
    if not WatchlistService(db).remove(current_user.id, movie_id):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Movie is not in the watchlist"
        )


@router.get("/check/{movie_id}", response_model=WatchlistCheck)
async def check_watchlist(
    movie_id: int,
    current_user: User = Depends(get_current_active_user),
    db: Session = Depends(get_db)
) -> Any:
    return WatchlistCheck(is_in_watchlist=WatchlistService(db).is_in_watchlist(current_user.id, movie_id))
