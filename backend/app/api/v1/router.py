"""
Main API router that includes all endpoint routers
"""
from fastapi import APIRouter

from app.api.v1 import auth, genres, likelist, movies, ratings, recommendations, users, watchlist
from app.core.config import settings

api_router = APIRouter(prefix=settings.API_V1_STR)

api_router.include_router(
    auth.router,
    prefix="/auth",
    tags=["authentication"]
)

api_router.include_router(
    users.router,
    prefix="/users",
    tags=["users"]
)

api_router.include_router(
    movies.router,
    prefix="/movies",
    tags=["movies"]
)

api_router.include_router(
    genres.router,
    prefix="/genres",
    tags=["genres"]
)

api_router.include_router(
    likelist.router,
    prefix="/likelist",
    tags=["likelist"]
)

api_router.include_router(
    watchlist.router,
    prefix="/watchlist",
    tags=["watchlist"]
)

api_router.include_router(
    ratings.router,
    prefix="/ratings",
    tags=["ratings"]
)

api_router.include_router(
    recommendations.router,
    prefix="/recommendations",
    tags=["recommendations"]
)
