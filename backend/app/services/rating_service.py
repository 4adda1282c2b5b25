"""
Service for handling movie ratings
"""
from typing import Optional, List
from sqlalchemy.orm import Session
from sqlalchemy import desc, func
import logging

from app.models.movie import Movie
from app.models.rating import Rating
from app.schemas.rating import RatingCreate, RatingUpdate, RatingAverage
from app.services.catalog import CatalogGateway
from app.services.movie_repository import MovieRepository
from app.utils.exceptions import InsufficientPermissions

logger = logging.getLogger(__name__)


class RatingService:
    """Service for handling ratings"""

    def __init__(self, db: Session, gateway: CatalogGateway = None):
        self.db = db
        self.movies = MovieRepository(db, gateway)

    def get_rating_by_id(self, rating_id: int) -> Optional[Rating]:
        return self.db.query(Rating).filter(Rating.id == rating_id).first()

    def list_ratings(self, skip: int = 0, limit: int = 50) -> List[Rating]:
        """All ratings, newest first"""
        return self.db.query(Rating).order_by(
            desc(Rating.created_at), desc(Rating.id)
        ).offset(skip).limit(limit).all()

    def get_user_ratings(self, user_id: int) -> List[Rating]:
        return self.db.query(Rating).filter(
            Rating.user_id == user_id
        ).order_by(desc(Rating.created_at), desc(Rating.id)).all()

    def get_movie_ratings(self, tmdb_id: int) -> List[Rating]:
        """All ratings for a catalog movie, newest first"""
        return self.db.query(Rating).join(Movie).filter(
            Movie.tmdb_id == tmdb_id
        ).order_by(desc(Rating.created_at), desc(Rating.id)).all()

    def get_average(self, tmdb_id: int) -> RatingAverage:
        average, count = self.db.query(
            func.avg(Rating.score),
            func.count(Rating.id)
        ).select_from(Rating).join(Movie).filter(Movie.tmdb_id == tmdb_id).one()

        return RatingAverage(
            movie_id=tmdb_id,
            average_score=round(float(average), 2) if average is not None else None,
            rating_count=count or 0
        )

    async def rate_movie(self, user_id: int, rating_data: RatingCreate) -> Rating:
        """Create the user's rating for a movie, or replace their previous one"""
        movie = await self.movies.get_or_import(rating_data.movie_id)

        try:
            rating = self.db.query(Rating).filter(
                Rating.user_id == user_id,
                Rating.movie_id == movie.id
            ).first()

            if rating:
                rating.score = rating_data.score
                rating.comment = rating_data.comment
            else:
                rating = Rating(
                    user_id=user_id,
                    movie_id=movie.id,
                    score=rating_data.score,
                    comment=rating_data.comment
                )
                self.db.add(rating)

            self.db.commit()
            self.db.refresh(rating)

            logger.info(f"Rating saved: User {user_id} rated movie {rating_data.movie_id} {rating_data.score}")
            return rating

        except Exception as e:
            logger.error(f"Error saving rating: {e}")
            self.db.rollback()
            raise

    def update_rating(self, user_id: int, rating_id: int, rating_data: RatingUpdate) -> Optional[Rating]:
        """Change the score or comment of one of the user's own ratings"""
        rating = self.get_rating_by_id(rating_id)
        if not rating:
            return None

        if rating.user_id != user_id:
            raise InsufficientPermissions(f"Rating {rating_id} belongs to another user")

        try:
            rating.score = rating_data.score
            rating.comment = rating_data.comment
            self.db.commit()
            self.db.refresh(rating)
            return rating

        except Exception as e:
            logger.error(f"Error updating rating {rating_id}: {e}")
            self.db.rollback()
            raise

    def delete_rating(self, user_id: int, rating_id: int) -> bool:
        """Delete one of the user's own ratings"""
        rating = self.get_rating_by_id(rating_id)
        if not rating:
            return False

        if rating.user_id != user_id:
            raise InsufficientPermissions(f"Rating {rating_id} belongs to another user")

        try:
            self.db.delete(rating)
            self.db.commit()
            return True

        except Exception as e:
            logger.error(f"Error deleting rating {rating_id}: {e}")
            self.db.rollback()
            raise
