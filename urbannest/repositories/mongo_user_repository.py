"""MongoDB implementation of UserRepository"""

import logging
from datetime import datetime
from typing import Optional, Dict, Any
from pymongo import ReturnDocument
from pymongo.database import Database
from pymongo.errors import DuplicateKeyError, PyMongoError
from bson import ObjectId
from bson.errors import InvalidId

from urbannest.repositories.user_repository import UserRepository

logger = logging.getLogger(__name__)

PUBLIC_PROJECTION = {"password_hash": 0}
RESET_FIELDS = {"reset_password_token": "", "reset_password_expires": ""}


def _object_id(user_id: str) -> Optional[ObjectId]:
    try:
        return ObjectId(user_id)
    except (InvalidId, TypeError):
        return None


class MongoUserRepository(UserRepository):
    """MongoDB implementation of UserRepository"""

    def __init__(self, db: Database):
        """
        Initialize MongoDB user repository.

        Args:
            db: MongoDB database instance
        """
        self.db = db
        self.collection = db["users"]
        self._create_indexes()

    def _create_indexes(self):
        """Create indexes for better query performance"""
        try:
            self.collection.create_index("email", unique=True)
            self.collection.create_index("reset_password_token", sparse=True)
        except PyMongoError as e:
            logger.warning("Index creation warning: %s", e)

    def create(self, user_data: Dict[str, Any]) -> Dict[str, Any]:
        """Create a new user in MongoDB"""
        try:
            result = self.collection.insert_one(user_data)
            user_data["_id"] = result.inserted_id
            return user_data
        except DuplicateKeyError as e:
            raise ValueError("User already exists with this email") from e

    def find_by_email(self, email: str, include_password: bool = False) -> Optional[Dict[str, Any]]:
        """Find user by email address"""
        projection = None if include_password else PUBLIC_PROJECTION
        return self.collection.find_one({"email": email.strip().lower()}, projection)

    def find_by_id(self, user_id: str) -> Optional[Dict[str, Any]]:
        """Find user by ID"""
        object_id = _object_id(user_id)
        if object_id is None:
            return None
        return self.collection.find_one({"_id": object_id}, PUBLIC_PROJECTION)

    def update(self, user_id: str, update_data: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        """Update user data"""
        object_id = _object_id(user_id)
        if object_id is None:
            return None
        return self.collection.find_one_and_update(
            {"_id": object_id},
            {"$set": update_data},
            projection=PUBLIC_PROJECTION,
            return_document=ReturnDocument.AFTER
        )

    def set_reset_token(self, user_id: str, token_hash: str, expires_at: datetime) -> bool:
        """Store reset token hash and expiry (last write wins)"""
        object_id = _object_id(user_id)
        if object_id is None:
            return False
        result = self.collection.update_one(
            {"_id": object_id},
            {"$set": {"reset_password_token": token_hash, "reset_password_expires": expires_at}}
        )
        return result.matched_count > 0

    def clear_reset_token(self, user_id: str) -> bool:
        """Drop reset token hash and expiry"""
        object_id = _object_id(user_id)
        if object_id is None:
            return False
        result = self.collection.update_one({"_id": object_id}, {"$unset": RESET_FIELDS})
        return result.matched_count > 0

    def consume_reset_token(
        self, token_hash: str, now: datetime, password_hash: str
    ) -> Optional[Dict[str, Any]]:
        """Swap in the new password and drop the reset token in one write"""
        return self.collection.find_one_and_update(
            {
                "reset_password_token": token_hash,
                "reset_password_expires": {"$gt": now},
            },
            {
                "$set": {"password_hash": password_hash, "updated_at": now},
                "$unset": RESET_FIELDS,
            },
            projection=PUBLIC_PROJECTION,
            return_document=ReturnDocument.AFTER
        )
