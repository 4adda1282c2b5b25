"""
Authentication service for user management
"""
from typing import List, Optional
from sqlalchemy.orm import Session
import logging

from app.core.security import security
from app.models.user import User, utcnow
from app.schemas.user import UserCreate, UserUpdate

logger = logging.getLogger(__name__)


class AuthService:
    """Service for handling authentication and user management"""

    def __init__(self, db: Session):
        self.db = db

    def get_user_by_id(self, user_id: int) -> Optional[User]:
        """Get user by ID"""
        return self.db.query(User).filter(User.id == user_id).first()

    def list_users(self, skip: int = 0, limit: int = 50) -> List[User]:
        return self.db.query(User).order_by(User.id).offset(skip).limit(limit).all()

    def get_user_by_email(self, email: str) -> Optional[User]:
        """Get user by email address"""
        return self.db.query(User).filter(User.email == email).first()

    def get_user_by_username(self, username: str) -> Optional[User]:
        return self.db.query(User).filter(User.username == username).first()

    def create_user(self, user_create: UserCreate) -> User:
        """Create a new user account"""
        try:
            db_user = User(
                email=user_create.email,
                username=user_create.username,
                hashed_password=security.get_password_hash(user_create.password),
                first_name=user_create.first_name,
                last_name=user_create.last_name,
                date_of_birth=user_create.date_of_birth,
                is_active=True
            )

            self.db.add(db_user)
            self.db.commit()
            self.db.refresh(db_user)

            logger.info(f"User created successfully: {db_user.email}")
            return db_user

        except Exception as e:
            logger.error(f"Error creating user: {e}")
            self.db.rollback()
            raise

    def update_user(self, user_id: int, user_update: UserUpdate) -> Optional[User]:
        """Update user information"""
        try:
            user = self.get_user_by_id(user_id)
            if not user:
                return None

            for field, value in user_update.model_dump(exclude_unset=True).items():
                setattr(user, field, value)

            self.db.commit()
            self.db.refresh(user)

            logger.info(f"User updated successfully: {user.email}")
            return user

        except Exception as e:
            logger.error(f"Error updating user {user_id}: {e}")
            self.db.rollback()
            raise

    def update_password(self, user_id: int, new_password: str) -> bool:
        """Update user password"""
        try:
            user = self.get_user_by_id(user_id)
            if not user:
                return False

            user.hashed_password = security.get_password_hash(new_password)
            self.db.commit()

            logger.info(f"Password updated for user: {user.email}")
            return True

        except Exception as e:
            logger.error(f"Error updating password for user {user_id}: {e}")
            self.db.rollback()
            raise

    def update_last_login(self, user_id: int) -> bool:
        """Update user's last login timestamp"""
        try:
            user = self.get_user_by_id(user_id)
            if not user:
                return False

            user.last_login = utcnow()
            self.db.commit()
            return True

        except Exception as e:
            # a missed timestamp must not block login
            logger.error(f"Error updating last login for user {user_id}: {e}")
            self.db.rollback()
            return False

    def delete_user(self, user_id: int) -> bool:
        """Delete a user account together with its lists and ratings"""
        try:
            user = self.get_user_by_id(user_id)
            if not user:
                return False

            self.db.delete(user)
            self.db.commit()

            logger.info(f"User deleted: {user.email}")
            return True

        except Exception as e:
            logger.error(f"Error deleting user {user_id}: {e}")
            self.db.rollback()
            raise
