"""
Movie endpoints: TMDB catalog proxy plus locally stored movies
"""
from typing import Any, List, Optional
from fastapi import APIRouter, Depends, HTTPException, status, Query
from sqlalchemy.orm import Session
import logging

from app.core.database import get_db
from app.models.user import User
from app.schemas.movie import CatalogMovie, MovieCreate, MovieFilters, MoviePage, MovieRecord
from app.services.catalog import CatalogGateway
from app.services.movie_repository import MovieRepository
from app.utils.dependencies import (
    get_catalog_gateway, get_current_active_user, validate_movie_id, validate_page
)
from app.utils.exceptions import (
    DuplicateEntry, TMDBAPIError, movie_not_found_exception, tmdb_api_error_exception
)
from app.utils.helpers import sanitize_search_query

logger = logging.getLogger(__name__)
router = APIRouter()


async def _fetch_list(name: str, call) -> MoviePage:
    try:
        return await call
    except TMDBAPIError as e:
        logger.error(f"Error fetching {name} movies: {str(e)}")
        raise tmdb_api_error_exception()
    except Exception as e:
        logger.error(f"Error fetching {name} movies: {str(e)}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to fetch {name} movies"
        )


@router.get("/popular", response_model=MoviePage)
async def get_popular_movies(
    page: int = Depends(validate_page),
    gateway: CatalogGateway = Depends(get_catalog_gateway)
) -> Any:
    return await _fetch_list("popular", gateway.popular(page))


@router.get("/top-rated", response_model=MoviePage)
async def get_top_rated_movies(
    page: int = Depends(validate_page),
    gateway: CatalogGateway = Depends(get_catalog_gateway)
) -> Any:
    return await _fetch_list("top rated", gateway.top_rated(page))


@router.get("/trending", response_model=MoviePage)
async def get_trending_movies(
    page: int = Depends(validate_page),
    gateway: CatalogGateway = Depends(get_catalog_gateway)
) -> Any:
    """
    Movies trending this week
    """
    return await _fetch_list("trending", gateway.trending(page))


@router.get("/now-playing", response_model=MoviePage)
async def get_now_playing_movies(
    page: int = Depends(validate_page),
    gateway: CatalogGateway = Depends(get_catalog_gateway)
) -> Any:
    return await _fetch_list("now playing", gateway.now_playing(page))


@router.get("/search", response_model=MoviePage)
async def search_movies(
    q: str = Query(..., min_length=1, description="Search query"),
    include_adult: bool = Query(False, description="Include adult content"),
    page: int = Depends(validate_page),
    gateway: CatalogGateway = Depends(get_catalog_gateway)
) -> Any:
    """
    Search movies by title
    """
    query = sanitize_search_query(q)
    if not query:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Search query is empty"
        )
    return await _fetch_list("search", gateway.search(query, page, include_adult))


@router.get("/discover", response_model=MoviePage)
async def discover_movies(
    genres: Optional[str] = Query(None, description="Comma separated genre ids"),
    release_date_from: Optional[str] = Query(None, pattern=r"^\d{4}-\d{2}-\d{2}$"),
    release_date_to: Optional[str] = Query(None, pattern=r"^\d{4}-\d{2}-\d{2}$"),
    min_rating: Optional[float] = Query(None, ge=0, le=10),
    max_rating: Optional[float] = Query(None, ge=0, le=10),
    min_vote_count: Optional[int] = Query(None, ge=0),
    language: Optional[str] = Query(None, min_length=2, max_length=5),
    sort_by: str = Query("popularity", pattern="^(popularity|rating|release_date|title)$"),
    sort_order: str = Query("desc", pattern="^(asc|desc)$"),
    include_adult: bool = Query(False),
    page: int = Depends(validate_page),
    gateway: CatalogGateway = Depends(get_catalog_gateway)
) -> Any:
    """
    Discover movies with filtering
    """
    genre_ids = None
    if genres:
        try:
            genre_ids = [int(g) for g in genres.split(",") if g.strip()]
        except ValueError:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="genres must be a comma separated list of ids"
            )

    filters = MovieFilters(
        genres=genre_ids,
        release_date_from=release_date_from,
        release_date_to=release_date_to,
        min_rating=min_rating,
        max_rating=max_rating,
        min_vote_count=min_vote_count,
        language=language,
        sort_by=sort_by,
        sort_order=sort_order,
        include_adult=include_adult
    )
    return await _fetch_list("discovered", gateway.discover(filters, page))


@router.get("/genre/{genre_id}", response_model=MoviePage)
async def get_movies_by_genre(
    genre_id: int,
    page: int = Depends(validate_page),
    gateway: CatalogGateway = Depends(get_catalog_gateway)
) -> Any:
    filters = MovieFilters(genres=[genre_id])
    return await _fetch_list("genre", gateway.discover(filters, page))


@router.get("/tmdb/{movie_id}", response_model=CatalogMovie)
async def get_movie_details(
    movie_id: int = Depends(validate_movie_id),
    gateway: CatalogGateway = Depends(get_catalog_gateway)
) -> Any:
    """
    Get movie information by catalog id
    """
    try:
        movie = await gateway.movie_by_id(movie_id)
    except TMDBAPIError as e:
        logger.error(f"Error fetching movie {movie_id}: {str(e)}")
        raise tmdb_api_error_exception()

    if movie is None:
        raise movie_not_found_exception()
    return movie


@router.get("/{movie_id}/similar", response_model=MoviePage)
async def get_similar_movies(
    movie_id: int = Depends(validate_movie_id),
    page: int = Depends(validate_page),
    gateway: CatalogGateway = Depends(get_catalog_gateway)
) -> Any:
    return await _fetch_list("similar", gateway.similar(movie_id, page))


@router.get("/{movie_id}/recommendations", response_model=MoviePage)
async def get_catalog_recommendations(
    movie_id: int = Depends(validate_movie_id),
    page: int = Depends(validate_page),
    gateway: CatalogGateway = Depends(get_catalog_gateway)
) -> Any:
    """
    TMDB's own recommendations for a movie (not personalized)
    """
    return await _fetch_list("recommended", gateway.recommendations_for(movie_id, page))


# Locally stored movies, addressed by local row id. Declared after the
# catalog routes so the fixed paths above take precedence.

@router.get("", response_model=List[MovieRecord])
async def list_local_movies(
    page: int = Query(1, ge=1),
    page_size: int = Query(20, ge=1, le=100),
    db: Session = Depends(get_db)
) -> Any:
    return MovieRepository(db).list_movies(skip=(page - 1) * page_size, limit=page_size)


@router.get("/{movie_id}", response_model=MovieRecord)
async def get_local_movie(
    movie_id: int = Depends(validate_movie_id),
    db: Session = Depends(get_db)
) -> Any:
    movie = MovieRepository(db).get_movie(movie_id)
    if not movie:
        raise movie_not_found_exception()
    return movie


@router.post("", response_model=MovieRecord, status_code=status.HTTP_201_CREATED)
async def create_local_movie(
    movie_data: MovieCreate,
    current_user: User = Depends(get_current_active_user),
    db: Session = Depends(get_db)
) -> Any:
    try:
        return MovieRepository(db).create_movie(movie_data)
    except DuplicateEntry as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))
    except Exception as e:
        logger.error(f"Error creating movie: {str(e)}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to create movie"
        )


@router.put("/{movie_id}", response_model=MovieRecord)
async def update_local_movie(
    movie_data: MovieCreate,
    movie_id: int = Depends(validate_movie_id),
    current_user: User = Depends(get_current_active_user),
    db: Session = Depends(get_db)
) -> Any:
    try:
        movie = MovieRepository(db).update_movie(movie_id, movie_data)
    except DuplicateEntry as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))

    if not movie:
        raise movie_not_found_exception()
    return movie


@router.delete("/{movie_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_local_movie(
    movie_id: int = Depends(validate_movie_id),
    current_user: User = Depends(get_current_active_user),
    db: Session = Depends(get_db)
):
    if not MovieRepository(db).delete_movie(movie_id):
        raise movie_not_found_exception()
