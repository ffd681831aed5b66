"""
Common response models and exceptions for API
"""
import logging
from typing import Any, Optional, List
from pydantic import BaseModel, Field

logger = logging.getLogger(__name__)


class ResponseBody(BaseModel):
    """Common API response structure"""
    message: str = Field(..., description="Response message")
    errors: List[str] = Field(default_factory=list, description="List of error messages")
    data: Optional[Any] = Field(default=None, description="Response data")

    class Config:
        from_attributes = True


class BadRequestException(Exception):
    """Exception for bad request (400)"""
    def __init__(self, message: str, errors: Optional[List[str]] = None):
        self.message = message
        self.errors = errors or []
        super().__init__(self.message)


class UnauthorizedException(Exception):
    """Exception for unauthorized (401)"""
    def __init__(self, message: str, errors: Optional[List[str]] = None):
        self.message = message
        self.errors = errors or []
        super().__init__(self.message)


class ForbiddenException(Exception):
    """Exception for forbidden (403)"""
    def __init__(self, message: str, errors: Optional[List[str]] = None):
        self.message = message
        self.errors = errors or []
        super().__init__(self.message)


class NotFoundException(Exception):
    """Exception for not found (404)"""
    def __init__(self, message: str, errors: Optional[List[str]] = None):
        self.message = message
        self.errors = errors or []
        super().__init__(self.message)


class InternalServerErrorException(Exception):
    """Exception for internal server error (500)

    The original message is logged; the client only ever sees a generic one
    unless ``public_message`` is given.
    """
    def __init__(self, message: str, errors: Optional[List[str]] = None, public_message: Optional[str] = None):
        logger.error(message, exc_info=True)
        self.message = public_message or "Sorry something went wrong"
        self.errors = errors or []
        super().__init__(self.message)


# Domain errors raised by the services layer. Controllers translate these
# into the HTTP exceptions above.

class AuthError(Exception):
    """Base class for authentication and recovery failures"""
    default_message = "Authentication error"

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class InputValidationError(AuthError):
    default_message = "Invalid input"


class InvalidCredentialsError(AuthError):
    default_message = "Invalid credentials"


class AccountDeactivatedError(AuthError):
    default_message = "Account is deactivated"


class InvalidOrExpiredTokenError(AuthError):
    default_message = "Invalid or expired token"


class AccountNotFoundError(AuthError):
    default_message = "There is no user with that email"


class DeliveryError(AuthError):
    default_message = "Email could not be sent"
