"""MongoDB implementation of AdminRepository"""

import logging
from typing import Optional, Dict, Any
from pymongo import ReturnDocument
from pymongo.database import Database
from pymongo.errors import DuplicateKeyError, PyMongoError
from bson import ObjectId
from bson.errors import InvalidId

from urbannest.repositories.admin_repository import AdminRepository

logger = logging.getLogger(__name__)

PUBLIC_PROJECTION = {"password_hash": 0}


class MongoAdminRepository(AdminRepository):
    """MongoDB implementation of AdminRepository"""

    def __init__(self, db: Database):
        """
        Initialize MongoDB admin repository.

        Args:
            db: MongoDB database instance
        """
        self.db = db
        self.collection = db["admins"]
        self._create_indexes()

    def _create_indexes(self):
        """Create indexes for better query performance"""
        try:
            self.collection.create_index("email", unique=True)
        except PyMongoError as e:
            logger.warning("Index creation warning: %s", e)

    def create(self, admin_data: Dict[str, Any]) -> Dict[str, Any]:
        """Create a new admin in MongoDB"""
        try:
            result = self.collection.insert_one(admin_data)
            admin_data["_id"] = result.inserted_id
            return admin_data
        except DuplicateKeyError as e:
            raise ValueError("Admin already exists with this email") from e

    def find_by_email(self, email: str, include_password: bool = False) -> Optional[Dict[str, Any]]:
        """Find admin by email address"""
        projection = None if include_password else PUBLIC_PROJECTION
        return self.collection.find_one({"email": email.strip().lower()}, projection)

    def find_by_id(self, admin_id: str) -> Optional[Dict[str, Any]]:
        """Find admin by ID"""
        try:
            return self.collection.find_one({"_id": ObjectId(admin_id)}, PUBLIC_PROJECTION)
        except (InvalidId, TypeError):
            return None

    def update(self, admin_id: str, update_data: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        """Update admin data"""
        try:
            object_id = ObjectId(admin_id)
        except (InvalidId, TypeError):
            return None
        return self.collection.find_one_and_update(
            {"_id": object_id},
            {"$set": update_data},
            projection=PUBLIC_PROJECTION,
            return_document=ReturnDocument.AFTER
        )
