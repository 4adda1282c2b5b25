"""
Like/dislike interaction model
"""
import enum
from sqlalchemy import Column, Integer, DateTime, Enum, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship

from app.core.database import Base
from app.models.user import utcnow


class LikeStatus(int, enum.Enum):
    LIKED = 1
    DISLIKED = 2


class LikeList(Base):
    """One row per (user, movie); a later status replaces the earlier one"""
    __tablename__ = "like_lists"
    __table_args__ = (
        UniqueConstraint("user_id", "movie_id", name="uq_like_lists_user_movie"),
    )

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    movie_id = Column(Integer, ForeignKey("movies.id", ondelete="CASCADE"), nullable=False, index=True)
    status = Column(Enum(LikeStatus, name="like_status"), nullable=False)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False)

    user = relationship("User", back_populates="like_list")
    movie = relationship("Movie", back_populates="like_list")
