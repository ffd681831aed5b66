from pydantic import BaseModel, Field


class UserStatusRequest(BaseModel):
    """Schema for activating or deactivating a user account"""
    is_active: bool = Field(..., description="Whether the account may log in")
