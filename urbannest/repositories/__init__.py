"""Repository interfaces and implementations for clean architecture"""

from urbannest.repositories.admin_repository import AdminRepository
from urbannest.repositories.user_repository import UserRepository

__all__ = ["AdminRepository", "UserRepository"]
