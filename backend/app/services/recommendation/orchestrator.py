"""
Personalized recommendation entry points
"""
import logging

from app.core.config import settings
from app.schemas.recommendation import (
    RecommendationResult, RecommendationStrategy, UserRecommendationData
)
from app.services.catalog import CatalogGateway
from app.services.recommendation.candidates import CandidateGenerator
from app.services.recommendation.history import HistoryStore
from app.services.recommendation.profile import TasteProfileBuilder
from app.services.recommendation.scoring import score_and_rank
from app.utils.exceptions import RetrievalError

logger = logging.getLogger(__name__)

INSUFFICIENT_DATA_MESSAGE = "Like at least 2 movies to get personalized recommendations."
ADVANCED_MESSAGE = "Recommendations based on the movies you liked and disliked."


class RecommendationService:
    """Chooses a strategy and runs the profile -> candidates -> ranking pipeline"""

    def __init__(self, history: HistoryStore, gateway: CatalogGateway):
        self.history = history
        self.gateway = gateway
        self.profile_builder = TasteProfileBuilder(history)
        self.candidate_generator = CandidateGenerator(gateway)

    def _strategy_for(self, liked_count: int) -> RecommendationStrategy:
        if liked_count < settings.RECOMMENDATION_MIN_LIKES:
            return RecommendationStrategy.INSUFFICIENT_DATA
        return RecommendationStrategy.ADVANCED

    async def get_personalized_recommendations(self, user_id: int, page: int = 1) -> RecommendationResult:
        """Ranked recommendations for one page of catalog candidates"""
        operation = "get_personalized_recommendations"
        try:
            liked_count = self.history.count_liked(user_id)
            strategy = self._strategy_for(liked_count)
            logger.info(f"User {user_id} has {liked_count} liked movies, strategy {strategy.value}")

            if strategy == RecommendationStrategy.INSUFFICIENT_DATA:
                return RecommendationResult(
                    strategy=strategy,
                    message=INSUFFICIENT_DATA_MESSAGE,
                    movies=[],
                    page=page,
                    total_pages=1,
                    total_results=0
                )

            profile = self.profile_builder.build_profile(user_id)
            candidates = await self.candidate_generator.generate_candidates(profile, page)
            ranked = score_and_rank(candidates.movies, profile)

            return RecommendationResult(
                strategy=strategy,
                message=ADVANCED_MESSAGE,
                movies=[scored.movie for scored in ranked],
                page=candidates.page,
                total_pages=candidates.total_pages,
                total_results=candidates.total_results
            )

        except RetrievalError as e:
            logger.error(f"Retrieval failed for user {user_id} during {e.operation or operation}: {e}")
            if e.user_id is None:
                e.user_id = user_id
            raise
        except Exception as e:
            logger.error(f"Error during {operation} for user {user_id}: {e}")
            raise RetrievalError(
                f"Could not compute recommendations: {e}",
                operation=operation,
                user_id=user_id
            ) from e

    def analyze_user_data(self, user_id: int) -> UserRecommendationData:
        """Counts and movie lists behind a user's recommendations"""
        operation = "analyze_user_data"
        try:
            liked = self.history.get_liked(user_id)
            disliked = self.history.get_disliked(user_id)
        except Exception as e:
            logger.error(f"Error during {operation} for user {user_id}: {e}")
            raise RetrievalError(
                f"Could not load user history: {e}",
                operation=operation,
                user_id=user_id
            ) from e

        return UserRecommendationData(
            liked_count=len(liked),
            disliked_count=len(disliked),
            strategy=self._strategy_for(len(liked)),
            liked_movies=liked,
            disliked_movies=disliked
        )
