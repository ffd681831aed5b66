import logging
from datetime import timedelta
from typing import Optional

from urbannest.core.clock import utcnow
from urbannest.core.config import settings
from urbannest.core.exceptions import (
    AccountNotFoundError,
    DeliveryError,
    InputValidationError,
    InvalidOrExpiredTokenError,
)
from urbannest.core.security import (
    PASSWORD_MAX_BYTES,
    generate_reset_token,
    hash_password,
    hash_reset_token,
    password_too_long,
)
from urbannest.models.principal_model import UserPrincipal, user_principal_from_doc
from urbannest.repositories.user_repository import UserRepository
from urbannest.services.email_service import EmailSender, build_reset_url, password_reset_email

logger = logging.getLogger(__name__)


class PasswordResetService:
    """
    Forgot-password / reset-password flow for users.

    A reset moves a user from "no reset pending" to "reset pending" when
    requested, and out again when the token is consumed, when it expires, or
    when the email carrying it fails to send. Only the SHA-256 of the token is
    stored; a newer request overwrites an older pending token.
    """

    def __init__(self, user_repository: UserRepository, email_sender: EmailSender):
        self.user_repository = user_repository
        self.email_sender = email_sender

    def request_reset(self, email: Optional[str]) -> str:
        """
        Issue a reset token for ``email`` and mail the link.

        Returns:
            str: The raw token that was emailed

        Raises:
            InputValidationError: If email is missing
            AccountNotFoundError: If no user has that email
            DeliveryError: If the email could not be sent (token is withdrawn)
        """
        if not email or not email.strip():
            raise InputValidationError("Please provide an email")

        user = self.user_repository.find_by_email(email)
        if not user:
            raise AccountNotFoundError()

        user_id = str(user["_id"])
        raw_token, token_hash = generate_reset_token()
        expires_at = utcnow() + timedelta(minutes=settings.RESET_TOKEN_EXPIRE_MINUTES)
        self.user_repository.set_reset_token(user_id, token_hash, expires_at)

        reset_url = build_reset_url(raw_token)
        try:
            self.email_sender.send(
                to_email=user["email"],
                to_name=user.get("name", ""),
                subject="Password reset request",
                html_content=password_reset_email(
                    user.get("name", ""), reset_url, settings.RESET_TOKEN_EXPIRE_MINUTES
                ),
            )
        except DeliveryError:
            self._withdraw_token(user_id)
            raise
        except Exception as e:
            self._withdraw_token(user_id)
            raise DeliveryError() from e

        logger.info("Password reset requested for user %s", user_id)
        return raw_token

    def _withdraw_token(self, user_id: str) -> None:
        self.user_repository.clear_reset_token(user_id)
        logger.warning("Withdrew reset token for user %s after failed delivery", user_id)

    def reset_password(self, raw_token: str, password: Optional[str]) -> UserPrincipal:
        """
        Consume a reset token and set a new password.

        Raises:
            InputValidationError: Missing, too-short or too-long password
            InvalidOrExpiredTokenError: Unknown, already used or expired token
        """
        if not password:
            raise InputValidationError("Please provide a new password")
        if len(password) < settings.PASSWORD_MIN_LENGTH:
            raise InputValidationError(
                f"Password must be at least {settings.PASSWORD_MIN_LENGTH} characters"
            )
        if password_too_long(password):
            raise InputValidationError(f"Password must be at most {PASSWORD_MAX_BYTES} bytes")
        if not raw_token:
            raise InvalidOrExpiredTokenError()

        user = self.user_repository.consume_reset_token(
            hash_reset_token(raw_token), utcnow(), hash_password(password)
        )
        if user is None:
            raise InvalidOrExpiredTokenError()

        logger.info("Password reset completed for user %s", user["_id"])
        return user_principal_from_doc(user)
