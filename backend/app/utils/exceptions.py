"""
Custom exceptions for the application
"""
from typing import Optional
from fastapi import HTTPException, status


class MovieMatchException(Exception):
    """Base exception for MovieMatch application"""
    pass


class MovieNotFound(MovieMatchException):
    """Movie not found exception"""
    pass


class DuplicateEntry(MovieMatchException):
    """Entry already exists (watchlist item, genre name, ...)"""
    pass


class InsufficientPermissions(MovieMatchException):
    """Insufficient permissions exception"""
    pass


class RetrievalError(MovieMatchException):
    """A history store or catalog call failed or timed out"""

    def __init__(
        self,
        message: str,
        operation: Optional[str] = None,
        user_id: Optional[int] = None
    ):
        super().__init__(message)
        self.operation = operation
        self.user_id = user_id


class TMDBAPIError(RetrievalError):
    """TMDB API error"""

    def __init__(
        self,
        message: str,
        operation: Optional[str] = None,
        status_code: Optional[int] = None
    ):
        super().__init__(message, operation=operation)
        self.status_code = status_code


# HTTP Exception mappings
def movie_not_found_exception():
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail="Movie not found"
    )


def insufficient_permissions_exception():
    return HTTPException(
        status_code=status.HTTP_403_FORBIDDEN,
        detail="Insufficient permissions"
    )


def tmdb_api_error_exception():
    return HTTPException(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        detail="Movie database service temporarily unavailable"
    )


def recommendation_error_exception():
    return HTTPException(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        detail="Could not compute recommendations"
    )
