"""
Genre endpoints
"""
from typing import Any, List
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
import logging

from app.core.database import get_db
from app.models.user import User
from app.schemas.movie import Genre, GenreCreate, GenreRecord
from app.services.catalog import CatalogGateway
from app.services.genre_service import GenreService
from app.utils.dependencies import get_catalog_gateway, get_current_active_user
from app.utils.exceptions import DuplicateEntry, TMDBAPIError, tmdb_api_error_exception

logger = logging.getLogger(__name__)
router = APIRouter()


def _genre_not_found():
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail="Genre not found"
    )


@router.get("", response_model=List[GenreRecord])
async def list_genres(db: Session = Depends(get_db)) -> Any:
    return GenreService(db).list_genres()


@router.get("/catalog", response_model=List[Genre])
async def list_catalog_genres(
    gateway: CatalogGateway = Depends(get_catalog_gateway)
) -> Any:
    """
    Genre list as served by TMDB
    """
    try:
        return await gateway.genres()
    except TMDBAPIError as e:
        logger.error(f"Error fetching catalog genres: {str(e)}")
        raise tmdb_api_error_exception()


@router.get("/{genre_id}", response_model=GenreRecord)
async def get_genre(genre_id: int, db: Session = Depends(get_db)) -> Any:
    genre = GenreService(db).get_genre(genre_id)
    if not genre:
        raise _genre_not_found()
    return genre


@router.post("", response_model=GenreRecord, status_code=status.HTTP_201_CREATED)
async def create_genre(
    genre_data: GenreCreate,
    current_user: User = Depends(get_current_active_user),
    db: Session = Depends(get_db)
) -> Any:
    try:
        return GenreService(db).create_genre(genre_data)
    except DuplicateEntry as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))


@router.put("/{genre_id}", response_model=GenreRecord)
async def update_genre(
    genre_id: int,
    genre_data: GenreCreate,
    current_user: User = Depends(get_current_active_user),
    db: Session = Depends(get_db)
) -> Any:
    try:
        genre = GenreService(db).update_genre(genre_id, genre_data)
    except DuplicateEntry as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))

    if not genre:
        raise _genre_not_found()
    return genre


@router.delete("/{genre_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_genre(
    genre_id: int,
    current_user: User = Depends(get_current_active_user),
    db: Session = Depends(get_db)
):
    if not GenreService(db).delete_genre(genre_id):
        raise _genre_not_found()
