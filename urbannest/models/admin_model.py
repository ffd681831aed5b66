from datetime import datetime
from typing import Optional
from pydantic import BaseModel, EmailStr, Field

from urbannest.core.clock import utcnow


class Admin(BaseModel):
    """Admin document stored in the ``admins`` collection"""

    id: Optional[str] = Field(None, alias="_id")
    name: str = Field(..., description="Admin's full name")
    email: EmailStr = Field(..., description="Admin's email address")
    password_hash: str = Field(..., description="Hashed password")
    avatar: Optional[str] = Field(default=None)
    last_login: Optional[datetime] = Field(default=None)
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)
    is_active: bool = Field(default=True)

    class Config:
        from_attributes = True
        populate_by_name = True
