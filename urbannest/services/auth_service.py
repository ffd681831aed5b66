import logging
from typing import Optional, Union

from pydantic import ValidationError

from urbannest.core.clock import utcnow
from urbannest.core.config import settings
from urbannest.core.exceptions import (
    AccountDeactivatedError,
    InputValidationError,
    InvalidCredentialsError,
)
from urbannest.core.security import (
    PASSWORD_MAX_BYTES,
    hash_password,
    password_too_long,
    verify_password,
)
from urbannest.models.principal_model import (
    AdminPrincipal,
    SessionContext,
    UserPrincipal,
    admin_principal_from_doc,
    user_principal_from_doc,
)
from urbannest.models.user_model import User
from urbannest.repositories.admin_repository import AdminRepository
from urbannest.repositories.user_repository import UserRepository

logger = logging.getLogger(__name__)

SELF_REGISTRATION_ROLES = ("user", "agent")


class AuthService:
    """Registration, login and current-principal lookup across both stores"""

    def __init__(self, user_repository: UserRepository, admin_repository: AdminRepository):
        """
        Initialize authentication service.

        Args:
            user_repository: Repository for user data access
            admin_repository: Repository for admin data access
        """
        self.user_repository = user_repository
        self.admin_repository = admin_repository

    def register(
        self,
        name: Optional[str],
        email: Optional[str],
        password: Optional[str],
        role: Optional[str] = None,
        phone: Optional[str] = None,
    ) -> UserPrincipal:
        """
        Register a new user (never an admin)

        Returns:
            UserPrincipal: The created user

        Raises:
            InputValidationError: Missing fields, short password, taken email or admin role
        """
        if not name or not name.strip() or not email or not password:
            raise InputValidationError("Please provide name, email and password")

        email = email.strip().lower()
        if self.user_repository.find_by_email(email):
            raise InputValidationError("User already exists with this email")

        # Admins are provisioned out-of-band, never through registration
        if role == "admin":
            raise InputValidationError("Admin accounts cannot be created through registration")
        role = role or "user"
        if role not in SELF_REGISTRATION_ROLES:
            raise InputValidationError(f"Role '{role}' is not allowed")

        if len(password) < settings.PASSWORD_MIN_LENGTH:
            raise InputValidationError(
                f"Password must be at least {settings.PASSWORD_MIN_LENGTH} characters"
            )
        if password_too_long(password):
            raise InputValidationError(f"Password must be at most {PASSWORD_MAX_BYTES} bytes")

        try:
            user_doc = User(
                name=name.strip(),
                email=email,
                password_hash=hash_password(password),
                role=role,
                phone=phone,
            ).model_dump(exclude={"id"})
        except ValidationError as e:
            raise InputValidationError("Please provide a valid email") from e

        try:
            created = self.user_repository.create(user_doc)
        except ValueError as e:
            # Lost a race with a concurrent registration for the same email
            raise InputValidationError(str(e)) from e

        logger.info("Registered %s account %s", role, created["_id"])
        return user_principal_from_doc(created)

    def authenticate(
        self, email: Optional[str], password: Optional[str]
    ) -> Union[AdminPrincipal, UserPrincipal]:
        """
        Authenticate an admin or user by email and password.

        The admin collection is checked first; a user sharing an admin's
        email can therefore never log in.

        Returns:
            AdminPrincipal or UserPrincipal

        Raises:
            InputValidationError: If email or password is missing
            AccountDeactivatedError: If the matching account is inactive
            InvalidCredentialsError: Unknown email or wrong password
        """
        if not email or not password:
            raise InputValidationError("Please provide email and password")

        admin = self.admin_repository.find_by_email(email, include_password=True)
        if admin:
            if not admin.get("is_active", True):
                raise AccountDeactivatedError()
            if not verify_password(password, admin.get("password_hash", "")):
                raise InvalidCredentialsError()
            self._record_admin_login(str(admin["_id"]))
            return admin_principal_from_doc(admin)

        user = self.user_repository.find_by_email(email, include_password=True)
        if not user:
            raise InvalidCredentialsError()
        if not user.get("is_active", True):
            raise AccountDeactivatedError()
        if not verify_password(password, user.get("password_hash", "")):
            raise InvalidCredentialsError()
        return user_principal_from_doc(user)

    def _record_admin_login(self, admin_id: str) -> None:
        try:
            self.admin_repository.update(admin_id, {"last_login": utcnow()})
        except Exception as e:
            logger.warning("Could not record last login for admin %s: %s", admin_id, e)

    def get_principal(self, session: SessionContext) -> Optional[Union[AdminPrincipal, UserPrincipal]]:
        """Load the principal a session points at, from the one store its type names"""
        if session.principal_type == "admin":
            admin = self.admin_repository.find_by_id(session.principal_id)
            return admin_principal_from_doc(admin) if admin else None
        user = self.user_repository.find_by_id(session.principal_id)
        return user_principal_from_doc(user) if user else None

    def set_user_active(self, user_id: str, is_active: bool) -> Optional[UserPrincipal]:
        """Activate or deactivate a user account"""
        user = self.user_repository.update(
            user_id, {"is_active": is_active, "updated_at": utcnow()}
        )
        if user is None:
            return None
        logger.info("User %s is_active set to %s", user_id, is_active)
        return user_principal_from_doc(user)
