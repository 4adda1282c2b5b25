"""
Like/dislike list service; also the history store behind recommendations
"""
from typing import List
from sqlalchemy.orm import Session, joinedload
from sqlalchemy import desc
from sqlalchemy.exc import IntegrityError
import logging

from app.models.like_list import LikeList, LikeStatus
from app.models.movie import Movie
from app.schemas.like_list import LikeListItem
from app.schemas.movie import CatalogMovie
from app.services.catalog import CatalogGateway
from app.services.movie_repository import MovieRepository, movie_to_catalog
from app.services.recommendation.history import HistoryStore

logger = logging.getLogger(__name__)


class LikeListService(HistoryStore):
    """Service for a user's liked and disliked movies"""

    def __init__(self, db: Session, gateway: CatalogGateway = None):
        self.db = db
        self.movies = MovieRepository(db, gateway)

    def _entries(self, user_id: int, status: LikeStatus = None):
        query = self.db.query(LikeList).options(
            joinedload(LikeList.movie)
        ).filter(LikeList.user_id == user_id)

        if status is not None:
            query = query.filter(LikeList.status == status)

        return query.order_by(desc(LikeList.updated_at), desc(LikeList.id))

    def _get_entry(self, user_id: int, tmdb_id: int):
        return self.db.query(LikeList).join(Movie).filter(
            LikeList.user_id == user_id,
            Movie.tmdb_id == tmdb_id
        ).first()

    def _to_schema(self, entry: LikeList) -> LikeListItem:
        return LikeListItem(
            id=entry.id,
            movie_id=entry.movie.tmdb_id,
            movie=movie_to_catalog(entry.movie),
            status=entry.status,
            created_at=entry.created_at,
            updated_at=entry.updated_at
        )

    # History store
    def get_liked(self, user_id: int) -> List[CatalogMovie]:
        return [movie_to_catalog(entry.movie) for entry in self._entries(user_id, LikeStatus.LIKED).all()]

    def get_disliked(self, user_id: int) -> List[CatalogMovie]:
        return [movie_to_catalog(entry.movie) for entry in self._entries(user_id, LikeStatus.DISLIKED).all()]

    def count_liked(self, user_id: int) -> int:
        return self.db.query(LikeList).filter(
            LikeList.user_id == user_id,
            LikeList.status == LikeStatus.LIKED
        ).count()

    def count_disliked(self, user_id: int) -> int:
        return self.db.query(LikeList).filter(
            LikeList.user_id == user_id,
            LikeList.status == LikeStatus.DISLIKED
        ).count()

    # CRUD
    def get_like_list(self, user_id: int) -> List[LikeListItem]:
        """All of a user's likes and dislikes, most recent first"""
        return [self._to_schema(entry) for entry in self._entries(user_id).all()]

    async def set_status(self, user_id: int, tmdb_id: int, status: LikeStatus) -> LikeListItem:
        """Like or dislike a movie, replacing any earlier status for it"""
        movie = await self.movies.get_or_import(tmdb_id)

        try:
            entry = self.db.query(LikeList).filter(
                LikeList.user_id == user_id,
                LikeList.movie_id == movie.id
            ).first()

            if entry:
                entry.status = status
            else:
                entry = LikeList(user_id=user_id, movie_id=movie.id, status=status)
                self.db.add(entry)

            self.db.commit()

        except IntegrityError:
            # a concurrent request inserted the pair first
            self.db.rollback()
            entry = self.db.query(LikeList).filter(
                LikeList.user_id == user_id,
                LikeList.movie_id == movie.id
            ).one()
            entry.status = status
            self.db.commit()

        except Exception as e:
            logger.error(f"Error setting like status for user {user_id}, movie {tmdb_id}: {e}")
            self.db.rollback()
            raise

        self.db.refresh(entry)
        logger.info(f"User {user_id} marked movie {tmdb_id} as {status.name.lower()}")
        return self._to_schema(entry)

    def remove(self, user_id: int, tmdb_id: int) -> bool:
        """Remove a movie from the user's like list"""
        try:
            entry = self._get_entry(user_id, tmdb_id)
            if not entry:
                return False

            self.db.delete(entry)
            self.db.commit()

            logger.info(f"User {user_id} cleared like status for movie {tmdb_id}")
            return True

        except Exception as e:
            logger.error(f"Error removing like entry for user {user_id}, movie {tmdb_id}: {e}")
            self.db.rollback()
            raise

    def get_status(self, user_id: int, tmdb_id: int) -> str:
        """'liked', 'disliked' or 'none'"""
        entry = self._get_entry(user_id, tmdb_id)
        if not entry:
            return "none"
        return entry.status.name.lower()
