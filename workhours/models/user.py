"""User model definitions."""
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, EmailStr, Field


class UserBase(BaseModel):
    """Base user fields."""

    email: EmailStr
    first_name: str = Field(min_length=1, max_length=50)
    last_name: str = Field(min_length=1, max_length=50)


class UserCreate(UserBase):
    """User creation model with password."""

    password: str = Field(min_length=6)


class UserUpdate(BaseModel):
    """User profile update model - all fields optional."""

    email: Optional[EmailStr] = None
    first_name: Optional[str] = Field(default=None, min_length=1, max_length=50)
    last_name: Optional[str] = Field(default=None, min_length=1, max_length=50)
    phone: Optional[str] = None
    avatar_url: Optional[str] = None
    address: Optional[str] = None
    siret: Optional[str] = None
    default_hourly_rate: Optional[float] = Field(default=None, ge=0)


class User(UserBase):
    """User model without password (for API responses)."""

    id: str = Field(alias="_id", serialization_alias="id")
    phone: Optional[str] = None
    avatar_url: Optional[str] = None
    address: Optional[str] = None
    siret: Optional[str] = None
    default_hourly_rate: Optional[float] = None
    created_at: datetime
    updated_at: datetime

    model_config = {"populate_by_name": True}


class UserInDB(User):
    """User model with hashed password (for database storage)."""

    hashed_password: str
