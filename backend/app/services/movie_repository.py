"""
Local movie rows keyed by catalog id
"""
from typing import List, Optional
from sqlalchemy.orm import Session
import logging

from app.core.config import settings
from app.models.movie import Movie, Genre
from app.schemas.movie import CatalogMovie, Genre as GenreSchema, MovieCreate
from app.services.catalog import CatalogGateway
from app.utils.exceptions import DuplicateEntry, MovieNotFound
from app.utils.helpers import build_image_url

logger = logging.getLogger(__name__)


def movie_to_catalog(movie: Movie) -> CatalogMovie:
    """
    Snapshot a stored movie in catalog form. Genres without a catalog id
    have no mapping and are left out.
    """
    genres = [
        GenreSchema(id=genre.tmdb_id, name=genre.name)
        for genre in movie.genres
        if genre.tmdb_id is not None
    ]
    return CatalogMovie(
        id=movie.tmdb_id,
        title=movie.title,
        overview=movie.overview,
        release_date=movie.release_date,
        vote_average=movie.vote_average,
        vote_count=movie.vote_count,
        popularity=movie.popularity,
        genres=genres,
        poster_path=movie.poster_path,
        backdrop_path=movie.backdrop_path,
        poster_url=build_image_url(settings.TMDB_IMAGE_BASE_URL, "w500", movie.poster_path),
        backdrop_url=build_image_url(settings.TMDB_IMAGE_BASE_URL, "w1280", movie.backdrop_path),
        adult=movie.is_adult,
        original_language=movie.original_language,
        original_title=movie.original_title,
    )


class MovieRepository:
    """Resolves catalog ids to local rows, importing from the catalog on first use"""

    def __init__(self, db: Session, gateway: Optional[CatalogGateway] = None):
        self.db = db
        self.gateway = gateway

    def get_by_tmdb_id(self, tmdb_id: int) -> Optional[Movie]:
        return self.db.query(Movie).filter(Movie.tmdb_id == tmdb_id).first()

    def _match_genre(self, genre: GenreSchema) -> Genre:
        """Find the local genre by catalog id or name, creating it if absent"""
        local = self.db.query(Genre).filter(Genre.tmdb_id == genre.id).first()
        if local:
            return local

        local = self.db.query(Genre).filter(Genre.name == genre.name).first()
        if local:
            if local.tmdb_id is None:
                local.tmdb_id = genre.id
            return local

        local = Genre(name=genre.name, tmdb_id=genre.id)
        self.db.add(local)
        self.db.flush()
        logger.info(f"Created genre {genre.name} (tmdb {genre.id})")
        return local

    async def get_or_import(self, tmdb_id: int) -> Movie:
        """Return the local movie for a catalog id, fetching it if not stored yet"""
        movie = self.get_by_tmdb_id(tmdb_id)
        if movie:
            return movie

        if self.gateway is None:
            raise MovieNotFound(f"Movie {tmdb_id} is not stored locally")

        catalog_movie = await self.gateway.movie_by_id(tmdb_id)
        if catalog_movie is None:
            raise MovieNotFound(f"Movie {tmdb_id} not found in catalog")

        try:
            movie = Movie(
                tmdb_id=catalog_movie.id,
                title=catalog_movie.title,
                overview=catalog_movie.overview,
                release_date=catalog_movie.release_date,
                vote_average=catalog_movie.vote_average,
                vote_count=catalog_movie.vote_count,
                popularity=catalog_movie.popularity,
                poster_path=catalog_movie.poster_path,
                backdrop_path=catalog_movie.backdrop_path,
                is_adult=catalog_movie.adult,
                original_language=catalog_movie.original_language,
                original_title=catalog_movie.original_title,
            )
            movie.genres = [self._match_genre(genre) for genre in catalog_movie.genres]

            self.db.add(movie)
            self.db.commit()
            self.db.refresh(movie)

            logger.info(f"Imported movie {tmdb_id}: {movie.title}")
            return movie

        except Exception as e:
            logger.error(f"Error importing movie {tmdb_id}: {e}")
            self.db.rollback()
            raise

    # Local CRUD
    def list_movies(self, skip: int = 0, limit: int = 20) -> List[Movie]:
        return self.db.query(Movie).order_by(Movie.id).offset(skip).limit(limit).all()

    def get_movie(self, movie_id: int) -> Optional[Movie]:
        """Get a movie by local row id"""
        return self.db.query(Movie).filter(Movie.id == movie_id).first()

    def _check_unique(self, tmdb_id: int, exclude_id: Optional[int] = None):
        query = self.db.query(Movie).filter(Movie.tmdb_id == tmdb_id)
        if exclude_id is not None:
            query = query.filter(Movie.id != exclude_id)
        if query.first():
            raise DuplicateEntry(f"Movie with TMDB id {tmdb_id} already exists")

    def _apply(self, movie: Movie, data: MovieCreate):
        for field, value in data.model_dump(exclude={"genre_ids"}).items():
            setattr(movie, field, value)
        if data.genre_ids:
            movie.genres = self.db.query(Genre).filter(Genre.id.in_(data.genre_ids)).all()
        else:
            movie.genres = []

    def create_movie(self, data: MovieCreate) -> Movie:
        self._check_unique(data.tmdb_id)
        try:
            movie = Movie()
            self._apply(movie, data)

            self.db.add(movie)
            self.db.commit()
            self.db.refresh(movie)

            logger.info(f"Created movie {movie.id}: {movie.title}")
            return movie

        except Exception as e:
            logger.error(f"Error creating movie {data.tmdb_id}: {e}")
            self.db.rollback()
            raise

    def update_movie(self, movie_id: int, data: MovieCreate) -> Optional[Movie]:
        """Replace every field of a stored movie, genres included"""
        movie = self.get_movie(movie_id)
        if not movie:
            return None

        self._check_unique(data.tmdb_id, exclude_id=movie_id)
        try:
            self._apply(movie, data)
            self.db.commit()
            self.db.refresh(movie)
            return movie

        except Exception as e:
            logger.error(f"Error updating movie {movie_id}: {e}")
            self.db.rollback()
            raise

    def delete_movie(self, movie_id: int) -> bool:
        """Delete a stored movie with its likes, ratings and watchlist entries"""
        movie = self.get_movie(movie_id)
        if not movie:
            return False

        try:
            self.db.delete(movie)
            self.db.commit()
            logger.info(f"Deleted movie {movie_id}")
            return True

        except Exception as e:
            logger.error(f"Error deleting movie {movie_id}: {e}")
            self.db.rollback()
            raise
