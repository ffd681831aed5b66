"""User repository interface following clean architecture"""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Optional, Dict, Any


class UserRepository(ABC):
    """Abstract repository interface for user data access"""

    @abstractmethod
    def create(self, user_data: Dict[str, Any]) -> Dict[str, Any]:
        """
        Create a new user.

        Args:
            user_data: Dictionary containing user data

        Returns:
            Created user dictionary with _id

        Raises:
            ValueError: If the email is already taken
        """
        pass

    @abstractmethod
    def find_by_email(self, email: str, include_password: bool = False) -> Optional[Dict[str, Any]]:
        """
        Find user by email address.

        Args:
            email: User's email address
            include_password: Also return ``password_hash`` (authentication only)

        Returns:
            User dictionary if found, None otherwise
        """
        pass

    @abstractmethod
    def find_by_id(self, user_id: str) -> Optional[Dict[str, Any]]:
        """
        Find user by ID. Never includes ``password_hash``.

        Args:
            user_id: User's ID

        Returns:
            User dictionary if found, None otherwise
        """
        pass

    @abstractmethod
    def update(self, user_id: str, update_data: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        """
        Update user data.

        Args:
            user_id: User's ID
            update_data: Dictionary with fields to update

        Returns:
            Updated user dictionary if found, None otherwise
        """
        pass

    @abstractmethod
    def set_reset_token(self, user_id: str, token_hash: str, expires_at: datetime) -> bool:
        """
        Store a password-reset token hash and its expiry, replacing any previous one.

        Returns:
            True if the user exists, False otherwise
        """
        pass

    @abstractmethod
    def clear_reset_token(self, user_id: str) -> bool:
        """
        Remove the password-reset token hash and expiry.

        Returns:
            True if the user exists, False otherwise
        """
        pass

    @abstractmethod
    def consume_reset_token(
        self, token_hash: str, now: datetime, password_hash: str
    ) -> Optional[Dict[str, Any]]:
        """
        Set a new password for the user holding an unexpired reset token.

        Matching, password update and token removal happen in one
        single-document write, so a token can only ever be consumed once.

        Args:
            token_hash: Hash of the raw token presented by the client
            now: Current time; the stored expiry must be strictly later
            password_hash: Hash of the new password

        Returns:
            Updated user dictionary, or None if no user matched
        """
        pass
