from datetime import datetime
from typing import Literal, Optional
from pydantic import BaseModel, EmailStr, Field

from urbannest.core.clock import utcnow

UserRole = Literal["user", "agent"]


class User(BaseModel):
    """User document stored in the ``users`` collection"""
    id: Optional[str] = Field(None, alias="_id")
    name: str = Field(..., description="User's full name")
    email: EmailStr = Field(..., description="User's email address")
    password_hash: str = Field(..., description="Hashed password")
    role: UserRole = Field(default="user")
    phone: Optional[str] = Field(default=None)
    avatar: Optional[str] = Field(default=None)
    reset_password_token: Optional[str] = Field(default=None, description="SHA-256 of the emailed reset token")
    reset_password_expires: Optional[datetime] = Field(default=None)
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)
    is_active: bool = Field(default=True)

    class Config:
        from_attributes = True
        populate_by_name = True
