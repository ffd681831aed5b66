import os

os.environ.setdefault("JWT_SECRET_KEY", "test-secret-key-with-enough-length-for-hs256")
os.environ.setdefault("MONGO_DB", "urbannest_test")
os.environ.setdefault("FRONTEND_URL", "http://frontend.test")

import re
from typing import List, Optional

import mongomock
import pytest
from fastapi.testclient import TestClient

from urbannest.core.db import get_db
from urbannest.core.dependencies import get_email_sender
from urbannest.core.exceptions import DeliveryError
from urbannest.core.security import hash_password
from urbannest.main import app
from urbannest.models.admin_model import Admin
from urbannest.repositories.mongo_admin_repository import MongoAdminRepository
from urbannest.repositories.mongo_user_repository import MongoUserRepository
from urbannest.services.auth_service import AuthService
from urbannest.services.email_service import EmailSender
from urbannest.services.password_reset_service import PasswordResetService

RESET_LINK = re.compile(r"http://frontend\.test/reset-password/([0-9a-f]+)")


class RecordingEmailSender(EmailSender):
    """Keeps sent mail in memory; can be told to fail"""

    def __init__(self):
        self.sent: List[dict] = []
        self.fail = False
        self.error: Optional[Exception] = None

    def send(self, to_email, to_name, subject, html_content):
        if self.fail:
            raise DeliveryError()
        if self.error is not None:
            raise self.error
        self.sent.append(
            {"to": to_email, "name": to_name, "subject": subject, "html": html_content}
        )

    def last_reset_token(self) -> Optional[str]:
        if not self.sent:
            return None
        match = RESET_LINK.search(self.sent[-1]["html"])
        return match.group(1) if match else None


@pytest.fixture
def db():
    return mongomock.MongoClient()["urbannest_test"]


@pytest.fixture
def user_repo(db):
    return MongoUserRepository(db)


@pytest.fixture
def admin_repo(db):
    return MongoAdminRepository(db)


@pytest.fixture
def email_sender():
    return RecordingEmailSender()


@pytest.fixture
def auth_service(user_repo, admin_repo):
    return AuthService(user_repository=user_repo, admin_repository=admin_repo)


@pytest.fixture
def reset_service(user_repo, email_sender):
    return PasswordResetService(user_repository=user_repo, email_sender=email_sender)


@pytest.fixture
def make_admin(admin_repo):
    def _make_admin(email="admin@x.com", password="adminpass", name="Site Admin", is_active=True):
        doc = Admin(
            name=name,
            email=email,
            password_hash=hash_password(password),
            is_active=is_active,
        ).model_dump(exclude={"id"})
        return admin_repo.create(doc)

    return _make_admin


@pytest.fixture
def client(db, email_sender):
    app.dependency_overrides[get_db] = lambda: db
    app.dependency_overrides[get_email_sender] = lambda: email_sender
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()
