"""
Shared fixtures. The environment is set before any app module is imported
so settings, the engine and the app pick up the test configuration.
"""

import os

os.environ["DATABASE_URL"] = "sqlite://"
os.environ["REDIS_URL"] = ""
os.environ["ENVIRONMENT"] = "test"
os.environ["MAIL_MODE"] = "live"
os.environ["EMAIL_USER"] = "portfolio@example.com"
os.environ["EMAIL_PASS"] = "app-password"
os.environ["FROM_EMAIL"] = "portfolio@example.com"
os.environ["ADMIN_EMAIL"] = "admin@example.com"
os.environ["ADMIN_PASSWORD"] = "correct-horse-battery"
os.environ["OWNER_NAME"] = "Chala Birmechu"
os.environ["SECRET_KEY"] = "test-secret-key"
os.environ["RATE_LIMIT_MAX_REQUESTS"] = "10000"
os.environ["NOTIFY_ON_PERSIST_FAILURE"] = "True"
os.environ["LOG_FILE"] = ""

from unittest.mock import AsyncMock

import pytest
from fastapi.testclient import TestClient

from app.api.deps import get_sender_holder
from app.core.database import SessionLocal, create_tables
from app.main import app
from app.models.admin import Admin
from app.models.contact import ContactMessage
from app.services.database.contact_repository import ContactRepository
from app.services.sender_cache import SenderHolder
from tests.helpers import FakeSender


@pytest.fixture(autouse=True)
def clean_db():
    create_tables()
    yield
    with SessionLocal() as db:
        db.query(ContactMessage).delete()
        db.query(Admin).delete()
        db.commit()


@pytest.fixture
def repository():
    return ContactRepository(SessionLocal)


@pytest.fixture
def fake_sender():
    return FakeSender()


@pytest.fixture
def sender_factory(fake_sender):
    return AsyncMock(return_value=fake_sender)


@pytest.fixture
def sender_holder(sender_factory):
    return SenderHolder(sender_factory, ttl_seconds=300, timeout_seconds=1)


@pytest.fixture
def client(sender_holder):
    app.dependency_overrides[get_sender_holder] = lambda: sender_holder
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()
