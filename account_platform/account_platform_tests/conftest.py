"""
Pytest configuration for account service tests.

The database URL must be set before the service modules are imported,
since the engine is created at import time.
"""
import os

os.environ["DATABASE_URL"] = "sqlite:///./account_platform_test.db"
os.environ["SECRET_KEY"] = "test-secret-key-for-account-platform-suite"

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from account_platform.account_platform.account_service.main import app
from account_platform.account_platform.account_service.db import Base, engine


@pytest.fixture(autouse=True)
def reset_database():
    # Drop all tables and recreate them before each test
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)


@pytest.fixture(scope="session")
def client():
    with TestClient(app) as c:
        yield c


@pytest.fixture
def db_session():
    """Create a database session for testing."""
    session = Session(bind=engine)
    yield session
    session.close()
