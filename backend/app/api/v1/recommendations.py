"""
Personalized recommendation endpoints
"""
from typing import Any
from fastapi import APIRouter, Depends, HTTPException, status
import logging

from app.models.user import User
from app.schemas.recommendation import RecommendationResult, UserRecommendationData
from app.services.recommendation.orchestrator import RecommendationService
from app.utils.dependencies import get_current_active_user, get_recommendation_service, validate_page
from app.utils.exceptions import RetrievalError, recommendation_error_exception

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("/personalized", response_model=RecommendationResult)
async def get_personalized_recommendations(
    page: int = Depends(validate_page),
    current_user: User = Depends(get_current_active_user),
    service: RecommendationService = Depends(get_recommendation_service)
) -> Any:
    """
    Recommendations from the user's likes and dislikes.

    Users with fewer than two likes get an empty list and a prompt message
    rather than an error.
    """
    try:
        return await service.get_personalized_recommendations(current_user.id, page)

    except RetrievalError:
        # already logged with user id and operation
        raise recommendation_error_exception()
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error generating recommendations for user {current_user.id}: {str(e)}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to generate recommendations"
        )


@router.get("/user-data", response_model=UserRecommendationData)
async def get_user_recommendation_data(
    current_user: User = Depends(get_current_active_user),
    service: RecommendationService = Depends(get_recommendation_service)
) -> Any:
    """
    Liked/disliked counts and movies behind the user's recommendations
    """
    try:
        return service.analyze_user_data(current_user.id)
    except RetrievalError:
        raise recommendation_error_exception()
