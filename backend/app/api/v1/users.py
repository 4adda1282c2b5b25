"""
User account endpoints
"""
from typing import Any, List
from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session
import logging

from app.api.v1.ratings import rating_to_schema
from app.core.database import get_db
from app.models.user import User
from app.schemas.rating import Rating
from app.schemas.user import User as UserSchema, UserCreate, UserUpdate
from app.services.auth_service import AuthService
from app.services.rating_service import RatingService
from app.utils.dependencies import get_current_active_user
from app.utils.exceptions import insufficient_permissions_exception

logger = logging.getLogger(__name__)
router = APIRouter()


def _user_not_found():
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail="User not found"
    )


def _require_self(user_id: int, current_user: User):
    if user_id != current_user.id:
        raise insufficient_permissions_exception()


@router.get("", response_model=List[UserSchema])
async def list_users(
    skip: int = Query(0, ge=0),
    limit: int = Query(50, ge=1, le=100),
    current_user: User = Depends(get_current_active_user),
    db: Session = Depends(get_db)
) -> Any:
    return AuthService(db).list_users(skip, limit)


@router.get("/{user_id}", response_model=UserSchema)
async def get_user(
    user_id: int,
    current_user: User = Depends(get_current_active_user),
    db: Session = Depends(get_db)
) -> Any:
    user = AuthService(db).get_user_by_id(user_id)
    if not user:
        raise _user_not_found()
    return user


@router.post("", response_model=UserSchema, status_code=status.HTTP_201_CREATED)
async def create_user(
    user_data: UserCreate,
    db: Session = Depends(get_db)
) -> Any:
    """
    Create a user account without the registration confirmation step
    """
    try:
        auth_service = AuthService(db)

        if auth_service.get_user_by_username(user_data.username):
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Username already taken"
            )

        if auth_service.get_user_by_email(user_data.email):
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Email already registered"
            )

        return auth_service.create_user(user_data)

    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error creating user: {str(e)}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to create user"
        )


@router.put("/{user_id}", response_model=UserSchema)
async def update_user(
    user_id: int,
    user_update: UserUpdate,
    current_user: User = Depends(get_current_active_user),
    db: Session = Depends(get_db)
) -> Any:
    _require_self(user_id, current_user)

    user = AuthService(db).update_user(user_id, user_update)
    if not user:
        raise _user_not_found()
    return user


@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_user(
    user_id: int,
    current_user: User = Depends(get_current_active_user),
    db: Session = Depends(get_db)
):
    _require_self(user_id, current_user)

    if not AuthService(db).delete_user(user_id):
        raise _user_not_found()


@router.get("/{user_id}/ratings", response_model=List[Rating])
async def get_user_ratings(user_id: int, db: Session = Depends(get_db)) -> Any:
    if not AuthService(db).get_user_by_id(user_id):
        raise _user_not_found()

    return [rating_to_schema(rating) for rating in RatingService(db).get_user_ratings(user_id)]
