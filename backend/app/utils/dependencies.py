"""
FastAPI dependencies for authentication and common operations
"""
from typing import Optional
from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.orm import Session
import logging

from app.core.config import settings
from app.core.database import get_db
from app.core.security import security
from app.models.user import User
from app.services.auth_service import AuthService
from app.services.cache.redis_client import RedisCache
from app.services.catalog import CatalogGateway
from app.services.like_list_service import LikeListService
from app.services.recommendation.orchestrator import RecommendationService
from app.services.tmdb.client import TMDBClient
from app.services.tmdb.genre_cache import GenreCache

logger = logging.getLogger(__name__)

# Security scheme
security_scheme = HTTPBearer()


def _user_id_from_token(token: str) -> Optional[int]:
    subject = security.verify_token(token, "access")
    if subject is None:
        return None
    try:
        return int(subject)
    except ValueError:
        logger.warning(f"Token subject is not a user id: {subject}")
        return None


async def get_current_user(
    credentials: HTTPAuthorizationCredentials = Depends(security_scheme),
    db: Session = Depends(get_db)
) -> User:
    """Get current user from JWT token"""
    user_id = _user_id_from_token(credentials.credentials)
    if user_id is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid authentication credentials",
            headers={"WWW-Authenticate": "Bearer"},
        )

    user = AuthService(db).get_user_by_id(user_id)
    if not user:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="User not found",
        )

    return user


async def get_current_active_user(
    current_user: User = Depends(get_current_user)
) -> User:
    """Get current active user"""
    if not current_user.is_active:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Inactive user"
        )
    return current_user


def get_catalog_gateway(request: Request) -> CatalogGateway:
    """Process-wide TMDB client, created on first use and closed on shutdown"""
    gateway = getattr(request.app.state, "catalog_gateway", None)
    if gateway is None:
        store = RedisCache() if settings.REDIS_URL else None
        gateway = TMDBClient(genre_cache=GenreCache(store=store))
        request.app.state.catalog_gateway = gateway
        request.app.state.genre_store = store
    return gateway


def get_recommendation_service(
    db: Session = Depends(get_db),
    gateway: CatalogGateway = Depends(get_catalog_gateway)
) -> RecommendationService:
    return RecommendationService(LikeListService(db, gateway), gateway)


def validate_movie_id(movie_id: int) -> int:
    """Validate movie ID"""
    if movie_id <= 0:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Invalid movie ID"
        )
    return movie_id


def validate_page(page: int = 1) -> int:
    """TMDB serves pages 1..500"""
    if not 1 <= page <= 500:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Page must be between 1 and 500"
        )
    return page
