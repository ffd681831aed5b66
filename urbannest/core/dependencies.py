"""Dependency injection for clean architecture"""

from typing import Union

from fastapi import Depends, Request
from pymongo.database import Database

from urbannest.core.config import settings
from urbannest.core.db import get_db
from urbannest.core.exceptions import (
    ForbiddenException,
    NotFoundException,
    UnauthorizedException,
)
from urbannest.models.principal_model import AdminPrincipal, SessionContext, UserPrincipal
from urbannest.repositories.admin_repository import AdminRepository
from urbannest.repositories.user_repository import UserRepository
from urbannest.repositories.mongo_admin_repository import MongoAdminRepository
from urbannest.repositories.mongo_user_repository import MongoUserRepository
from urbannest.services.auth_service import AuthService
from urbannest.services.email_service import BrevoEmailSender, EmailSender
from urbannest.services.password_reset_service import PasswordResetService


def get_user_repository(db: Database = Depends(get_db)) -> UserRepository:
    """
    Get user repository instance.

    Args:
        db: Database of the running app

    Returns:
        UserRepository instance
    """
    return MongoUserRepository(db)


def get_admin_repository(db: Database = Depends(get_db)) -> AdminRepository:
    """
    Get admin repository instance.

    Args:
        db: Database of the running app

    Returns:
        AdminRepository instance
    """
    return MongoAdminRepository(db)


def get_email_sender() -> EmailSender:
    return BrevoEmailSender(
        api_key=settings.BREVO_API_KEY,
        sender_name=settings.EMAIL_SENDER_NAME,
        sender_email=settings.EMAIL_SENDER_ADDRESS,
    )


def get_auth_service(
    user_repo: UserRepository = Depends(get_user_repository),
    admin_repo: AdminRepository = Depends(get_admin_repository),
) -> AuthService:
    """
    Get authentication service instance.

    Args:
        user_repo: User repository (injected)
        admin_repo: Admin repository (injected)

    Returns:
        AuthService instance
    """
    return AuthService(user_repository=user_repo, admin_repository=admin_repo)


def get_password_reset_service(
    user_repo: UserRepository = Depends(get_user_repository),
    email_sender: EmailSender = Depends(get_email_sender),
) -> PasswordResetService:
    return PasswordResetService(user_repository=user_repo, email_sender=email_sender)


def get_session(request: Request) -> SessionContext:
    """Session resolved by TokenAuthMiddleware"""
    session = getattr(request.state, "session", None)
    if session is None:
        raise UnauthorizedException("Not authorized to access this route")
    return session


def get_current_principal(
    session: SessionContext = Depends(get_session),
    auth_service: AuthService = Depends(get_auth_service),
) -> Union[AdminPrincipal, UserPrincipal]:
    principal = auth_service.get_principal(session)
    if principal is None:
        raise NotFoundException("User not found")
    return principal


def require_roles(*roles: str):
    """
    Build a dependency that only lets the listed roles through.

    Admin principals always pass when ``admin`` is one of the roles.
    """
    def checker(
        principal: Union[AdminPrincipal, UserPrincipal] = Depends(get_current_principal),
    ) -> Union[AdminPrincipal, UserPrincipal]:
        if "admin" in roles and principal.principal_type == "admin":
            return principal
        if principal.role not in roles:
            raise ForbiddenException(
                f"User role '{principal.role}' is not authorized to access this route"
            )
        return principal

    return checker
