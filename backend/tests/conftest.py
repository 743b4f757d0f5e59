"""
Fixtures communes : base SQLite en mémoire, client HTTP, comptes de test.
"""
import os

# La configuration est lue à l'import des modules healthpoints
os.environ["JWT_SECRET_KEY"] = "test-secret-key-for-healthpoints-test-suite-only"
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["ENVIRONMENT"] = "test"
os.environ["LOG_FILE"] = ""
os.environ["RATE_LIMIT_ENABLED"] = "false"

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel, Session, create_engine

import healthpoints.domain.entities  # noqa: F401
from healthpoints.auth.jwt import jwt_manager
from healthpoints.auth.security import AuthoritiesConstants
from healthpoints.core.database import get_session, session_scope
from healthpoints.domain.entities import UserCreate
from healthpoints.domain.services.account_service import account_service
from healthpoints.main import app


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    SQLModel.metadata.create_all(engine)
    yield engine
    SQLModel.metadata.drop_all(engine)


@pytest.fixture
def session(engine):
    with Session(engine) as session:
        yield session


@pytest.fixture
def client(engine):
    def _get_test_session():
        with session_scope(engine) as session:
            yield session

    app.dependency_overrides[get_session] = _get_test_session
    yield TestClient(app)
    app.dependency_overrides.clear()


def _create_account(engine, login, authorities, password="password"):
    with session_scope(engine) as session:
        user = account_service.create_user(
            session,
            UserCreate(login=login, email=f"{login}@example.com", password=password),
            authorities=authorities,
        )
        return user.id


@pytest.fixture
def admin_id(engine):
    return _create_account(engine, "admin", [AuthoritiesConstants.ADMIN, AuthoritiesConstants.USER])


@pytest.fixture
def user_id(engine):
    return _create_account(engine, "user", [AuthoritiesConstants.USER])


@pytest.fixture
def other_user_id(engine):
    return _create_account(engine, "other", [AuthoritiesConstants.USER])


def bearer(login, authorities):
    return {"Authorization": f"Bearer {jwt_manager.create_token(login, authorities)}"}


@pytest.fixture
def admin_headers(admin_id):
    return bearer("admin", [AuthoritiesConstants.ADMIN, AuthoritiesConstants.USER])


@pytest.fixture
def user_headers(user_id):
    return bearer("user", [AuthoritiesConstants.USER])


@pytest.fixture
def other_headers(other_user_id):
    return bearer("other", [AuthoritiesConstants.USER])
