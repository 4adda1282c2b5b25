"""
Local genre table management
"""
from typing import List, Optional
from sqlalchemy.orm import Session
import logging

from app.models.movie import Genre
from app.schemas.movie import GenreCreate
from app.utils.exceptions import DuplicateEntry

logger = logging.getLogger(__name__)

# Catalog genre ids as listed by TMDB
DEFAULT_GENRES = [
    ("Action", 28),
    ("Adventure", 12),
    ("Animation", 16),
    ("Comedy", 35),
    ("Crime", 80),
    ("Documentary", 99),
    ("Drama", 18),
    ("Family", 10751),
    ("Fantasy", 14),
    ("History", 36),
    ("Horror", 27),
    ("Music", 10402),
    ("Mystery", 9648),
    ("Romance", 10749),
    ("Science Fiction", 878),
    ("TV Movie", 10770),
    ("Thriller", 53),
    ("War", 10752),
    ("Western", 37),
]


class GenreService:

    def __init__(self, db: Session):
        self.db = db

    def list_genres(self) -> List[Genre]:
        return self.db.query(Genre).order_by(Genre.name).all()

    def get_genre(self, genre_id: int) -> Optional[Genre]:
        return self.db.query(Genre).filter(Genre.id == genre_id).first()

    def _check_unique(self, data: GenreCreate, exclude_id: Optional[int] = None):
        query = self.db.query(Genre).filter(Genre.name == data.name)
        if exclude_id is not None:
            query = query.filter(Genre.id != exclude_id)
        if query.first():
            raise DuplicateEntry(f"Genre '{data.name}' already exists")

        if data.tmdb_id is not None:
            query = self.db.query(Genre).filter(Genre.tmdb_id == data.tmdb_id)
            if exclude_id is not None:
                query = query.filter(Genre.id != exclude_id)
            if query.first():
                raise DuplicateEntry(f"Catalog genre {data.tmdb_id} is already mapped")

    def create_genre(self, data: GenreCreate) -> Genre:
        self._check_unique(data)
        try:
            genre = Genre(name=data.name, tmdb_id=data.tmdb_id)
            self.db.add(genre)
            self.db.commit()
            self.db.refresh(genre)

            logger.info(f"Genre created: {genre.name}")
            return genre

        except Exception as e:
            logger.error(f"Error creating genre {data.name}: {e}")
            self.db.rollback()
            raise

    def update_genre(self, genre_id: int, data: GenreCreate) -> Optional[Genre]:
        genre = self.get_genre(genre_id)
        if not genre:
            return None

        self._check_unique(data, exclude_id=genre_id)
        try:
            genre.name = data.name
            genre.tmdb_id = data.tmdb_id
            self.db.commit()
            self.db.refresh(genre)
            return genre

        except Exception as e:
            logger.error(f"Error updating genre {genre_id}: {e}")
            self.db.rollback()
            raise

    def delete_genre(self, genre_id: int) -> bool:
        genre = self.get_genre(genre_id)
        if not genre:
            return False

        try:
            self.db.delete(genre)
            self.db.commit()
            return True

        except Exception as e:
            logger.error(f"Error deleting genre {genre_id}: {e}")
            self.db.rollback()
            raise

    def seed_defaults(self) -> int:
        """Insert any missing default genres; returns how many were added"""
        added = 0
        for name, tmdb_id in DEFAULT_GENRES:
            exists = self.db.query(Genre).filter(
                (Genre.name == name) | (Genre.tmdb_id == tmdb_id)
            ).first()
            if exists:
                continue
            self.db.add(Genre(name=name, tmdb_id=tmdb_id))
            added += 1

        self.db.commit()
        logger.info(f"Seeded {added} genres")
        return added
