"""
Service for handling user watchlists
"""
from typing import Optional
from sqlalchemy.orm import Session, joinedload
from sqlalchemy import desc
from sqlalchemy.exc import IntegrityError
import logging

from app.models.movie import Movie
from app.models.rating import WatchlistItem
from app.schemas.rating import WatchlistItem as WatchlistItemSchema, WatchlistResponse
from app.services.catalog import CatalogGateway
from app.services.movie_repository import MovieRepository, movie_to_catalog
from app.utils.exceptions import DuplicateEntry

logger = logging.getLogger(__name__)


class WatchlistService:

    def __init__(self, db: Session, gateway: CatalogGateway = None):
        self.db = db
        self.movies = MovieRepository(db, gateway)

    def _get_item(self, user_id: int, tmdb_id: int) -> Optional[WatchlistItem]:
        return self.db.query(WatchlistItem).join(Movie).filter(
            WatchlistItem.user_id == user_id,
            Movie.tmdb_id == tmdb_id
        ).first()

    def _to_schema(self, item: WatchlistItem) -> WatchlistItemSchema:
        return WatchlistItemSchema(
            id=item.id,
            movie_id=item.movie.tmdb_id,
            movie=movie_to_catalog(item.movie),
            created_at=item.created_at
        )

    def get_watchlist(self, user_id: int) -> WatchlistResponse:
        """Get user's watchlist, most recently added first"""
        items = self.db.query(WatchlistItem).options(
            joinedload(WatchlistItem.movie)
        ).filter(
            WatchlistItem.user_id == user_id
        ).order_by(desc(WatchlistItem.created_at), desc(WatchlistItem.id)).all()

        return WatchlistResponse(
            items=[self._to_schema(item) for item in items],
            total=len(items)
        )

    async def add(self, user_id: int, tmdb_id: int) -> WatchlistItemSchema:
        """Add movie to user's watchlist"""
        if self._get_item(user_id, tmdb_id):
            raise DuplicateEntry(f"Movie {tmdb_id} is already in the watchlist")

        movie = await self.movies.get_or_import(tmdb_id)

        try:
            item = WatchlistItem(user_id=user_id, movie_id=movie.id)
            self.db.add(item)
            self.db.commit()
            self.db.refresh(item)

        except IntegrityError as e:
            self.db.rollback()
            raise DuplicateEntry(f"Movie {tmdb_id} is already in the watchlist") from e

        except Exception as e:
            logger.error(f"Error adding to watchlist: {e}")
            self.db.rollback()
            raise

        logger.info(f"Added to watchlist: User {user_id}, Movie {tmdb_id}")
        return self._to_schema(item)

    def remove(self, user_id: int, tmdb_id: int) -> bool:
        """Remove movie from watchlist"""
        try:
            item = self._get_item(user_id, tmdb_id)
            if not item:
                return False

            self.db.delete(item)
            self.db.commit()
            return True

        except Exception as e:
            logger.error(f"Error removing movie {tmdb_id} from watchlist: {e}")
            self.db.rollback()
            raise

    def is_in_watchlist(self, user_id: int, tmdb_id: int) -> bool:
        return self._get_item(user_id, tmdb_id) is not None
