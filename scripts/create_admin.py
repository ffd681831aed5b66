"""
Create or update an UrbanNest admin account

Admins cannot self-register; this script provisions them directly in the
``admins`` collection. Running it again for the same email resets the
password and re-activates the account.

Usage:
    python scripts/create_admin.py --name "Site Admin" --email admin@urbannest.com
"""

import argparse
import getpass
import logging
import sys

from pymongo import MongoClient
from pymongo.errors import PyMongoError

from urbannest.core.clock import utcnow
from urbannest.core.config import settings
from urbannest.core.logging_config import setup_logging
from urbannest.core.security import PASSWORD_MAX_BYTES, hash_password, password_too_long
from urbannest.models.admin_model import Admin
from urbannest.repositories.mongo_admin_repository import MongoAdminRepository

logger = logging.getLogger("urbannest.scripts.create_admin")


def create_or_update_admin(repository: MongoAdminRepository, name: str, email: str, password: str) -> dict:
    """Insert a new admin, or refresh the password of an existing one"""
    email = email.strip().lower()
    existing = repository.find_by_email(email)
    password_hash = hash_password(password)

    if existing:
        logger.info("Admin '%s' already exists. Updating password and status.", email)
        return repository.update(
            str(existing["_id"]),
            {"name": name, "password_hash": password_hash, "is_active": True, "updated_at": utcnow()},
        )

    logger.info("Creating admin '%s'.", email)
    admin_doc = Admin(name=name, email=email, password_hash=password_hash).model_dump(exclude={"id"})
    return repository.create(admin_doc)


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Create or update an UrbanNest admin")
    parser.add_argument("--name", required=True, help="Admin's full name")
    parser.add_argument("--email", required=True, help="Admin's email address")
    parser.add_argument("--password", help="Password (prompted for when omitted)")
    args = parser.parse_args(argv)

    setup_logging()
    password = args.password or getpass.getpass("Admin password: ")
    if len(password) < settings.PASSWORD_MIN_LENGTH:
        logger.error("Password must be at least %d characters", settings.PASSWORD_MIN_LENGTH)
        return 1
    if password_too_long(password):
        logger.error("Password must be at most %d bytes", PASSWORD_MAX_BYTES)
        return 1

    client = MongoClient(settings.MONGO_URI)
    try:
        repository = MongoAdminRepository(client[settings.MONGO_DB])
        admin = create_or_update_admin(repository, args.name, args.email, password)
        logger.info("Admin ready: %s (%s)", admin["email"], admin["_id"])
        return 0
    except PyMongoError as e:
        logger.error("MongoDB error: %s", e)
        return 1
    finally:
        client.close()


if __name__ == "__main__":
    sys.exit(main())
