"""
User-related Pydantic schemas
"""
from typing import Optional
from pydantic import BaseModel, EmailStr, field_validator, Field
from datetime import datetime, date


class UserBase(BaseModel):
    """Base user schema"""
    email: EmailStr
    username: str = Field(..., min_length=3, max_length=50)
    first_name: Optional[str] = Field(None, max_length=100)
    last_name: Optional[str] = Field(None, max_length=100)


class UserCreate(UserBase):
    """Schema for user registration"""
    password: str = Field(..., min_length=8, max_length=72)
    date_of_birth: Optional[date] = None

    @field_validator('username')
    @classmethod
    def username_alphanumeric(cls, v):
        if not v.replace('_', '').replace('-', '').isalnum():
            raise ValueError('Username must be alphanumeric (underscores and hyphens allowed)')
        return v


class UserUpdate(BaseModel):
    """Schema for profile updates"""
    first_name: Optional[str] = Field(None, max_length=100)
    last_name: Optional[str] = Field(None, max_length=100)
    date_of_birth: Optional[date] = None


class User(UserBase):
    """Public user schema (for API responses)"""
    id: int
    is_active: bool
    date_of_birth: Optional[date] = None
    created_at: datetime
    last_login: Optional[datetime] = None

    class Config:
        from_attributes = True
