"""
Security utilities for authentication and authorization
"""
from datetime import datetime, timedelta, timezone
from typing import Optional, Union
from jose import JWTError, jwt
from passlib.context import CryptContext
from fastapi import HTTPException, status
from sqlalchemy.orm import Session
import logging

from app.core.config import settings
from app.models.user import User

logger = logging.getLogger(__name__)

# Password hashing
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


class SecurityManager:
    """Handles all security-related operations"""

    def __init__(self):
        self.secret_key = settings.SECRET_KEY
        self.algorithm = settings.ALGORITHM
        self.access_token_expire_minutes = settings.ACCESS_TOKEN_EXPIRE_MINUTES
        self.refresh_token_expire_minutes = settings.REFRESH_TOKEN_EXPIRE_MINUTES

    def verify_password(self, plain_password: str, hashed_password: str) -> bool:
        """Verify a password against its hash"""
        try:
            return pwd_context.verify(plain_password, hashed_password)
        except Exception as e:
            logger.error(f"Password verification error: {e}")
            return False

    def get_password_hash(self, password: str) -> str:
        """Hash a password"""
        try:
            return pwd_context.hash(password)
        except Exception as e:
            logger.error(f"Password hashing error: {e}")
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail="Error processing password"
            )

    def _create_token(
        self,
        subject: Union[str, int],
        token_type: str,
        expires_delta: timedelta
    ) -> str:
        to_encode = {
            "exp": datetime.now(timezone.utc) + expires_delta,
            "sub": str(subject),
            "type": token_type
        }

        try:
            return jwt.encode(to_encode, self.secret_key, algorithm=self.algorithm)
        except Exception as e:
            logger.error(f"Token creation error ({token_type}): {e}")
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail=f"Error creating {token_type} token"
            )

    def create_access_token(
        self,
        subject: Union[str, int],
        expires_delta: Optional[timedelta] = None
    ) -> str:
        """Create a new access token"""
        return self._create_token(
            subject,
            "access",
            expires_delta or timedelta(minutes=self.access_token_expire_minutes)
        )

    def create_refresh_token(
        self,
        subject: Union[str, int],
        expires_delta: Optional[timedelta] = None
    ) -> str:
        """Create a new refresh token"""
        return self._create_token(
            subject,
            "refresh",
            expires_delta or timedelta(minutes=self.refresh_token_expire_minutes)
        )

    def verify_token(self, token: str, token_type: str = "access") -> Optional[str]:
        """Verify and decode a token, returning its subject"""
        try:
            payload = jwt.decode(
                token,
                self.secret_key,
                algorithms=[self.algorithm]
            )

            user_id = payload.get("sub")
            token_type_claim = payload.get("type", "access")

            if user_id is None:
                logger.warning("Token missing subject")
                return None

            if token_type_claim != token_type:
                logger.warning(f"Invalid token type. Expected: {token_type}, Got: {token_type_claim}")
                return None

            return user_id

        except JWTError as e:
            logger.warning(f"JWT Error: {e}")
            return None

    def authenticate_user(self, db: Session, email: str, password: str) -> Optional[User]:
        """Authenticate a user with email and password"""
        user = db.query(User).filter(User.email == email).first()

        if not user:
            logger.info(f"Authentication failed: User not found for email {email}")
            return None

        if not user.is_active:
            logger.info(f"Authentication failed: User {email} is inactive")
            return None

        if not self.verify_password(password, user.hashed_password):
            logger.info(f"Authentication failed: Invalid password for {email}")
            return None

        logger.info(f"User {email} authenticated successfully")
        return user


# Global security manager instance
security = SecurityManager()


def create_token_pair(user_id: Union[str, int]) -> dict:
    """Create both access and refresh tokens for a user"""
    access_token = security.create_access_token(subject=user_id)
    refresh_token = security.create_refresh_token(subject=user_id)

    return {
        "access_token": access_token,
        "refresh_token": refresh_token,
        "token_type": "bearer",
        "expires_in": settings.ACCESS_TOKEN_EXPIRE_MINUTES * 60  # seconds
    }
