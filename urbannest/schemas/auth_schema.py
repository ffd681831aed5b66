from typing import Optional
from pydantic import BaseModel, Field


class RegisterRequest(BaseModel):
    """Schema for user registration request"""
    name: Optional[str] = Field(default=None, description="User's full name", max_length=100)
    email: Optional[str] = Field(default=None, description="User's email address")
    password: Optional[str] = Field(default=None, description="User's password")
    role: Optional[str] = Field(default=None, description="'user' or 'agent'")
    phone: Optional[str] = Field(default=None, description="User's phone number")


class LoginRequest(BaseModel):
    """Schema for login request (admins and users alike)"""
    email: Optional[str] = Field(default=None, description="Email address")
    password: Optional[str] = Field(default=None, description="Password")


class ForgotPasswordRequest(BaseModel):
    """Schema for forgot-password request"""
    email: Optional[str] = Field(default=None, description="Email of the account to recover")


class ResetPasswordRequest(BaseModel):
    """Schema for reset-password request"""
    password: Optional[str] = Field(default=None, description="New password")


class PrincipalResponse(BaseModel):
    """Public fields of an admin or user; never includes the password"""
    id: str = Field(..., description="Principal ID")
    name: str = Field(..., description="Full name")
    email: str = Field(..., description="Email address")
    role: str = Field(..., description="'admin', 'agent' or 'user'")
    phone: Optional[str] = Field(default=None, description="Phone number")
    avatar: Optional[str] = Field(default=None, description="Avatar URL")

    class Config:
        from_attributes = True


class AuthResponse(BaseModel):
    """Schema for register/login response"""
    token: str = Field(..., description="JWT access token")
    user: PrincipalResponse

    class Config:
        from_attributes = True
