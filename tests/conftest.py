# tests/conftest.py

from __future__ import annotations

from types import SimpleNamespace
from typing import Callable, Iterator

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
from sqlmodel import Session

from taskboard.database import create_db_engine, create_tables, get_db
from taskboard.main import app
from taskboard.models import User
from taskboard.services import UserStore


@pytest.fixture()
def engine() -> Iterator[Engine]:
    """
    Private in-memory SQLite database per test.

    StaticPool keeps the single connection alive across sessions and threads,
    which is what lets TestClient requests see each other's commits.
    """
    engine = create_db_engine("sqlite://", poolclass=StaticPool)
    create_tables(engine)
    yield engine
    engine.dispose()


@pytest.fixture()
def session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(autocommit=False, autoflush=False, bind=engine, class_=Session)


@pytest.fixture()
def session(session_factory: sessionmaker) -> Iterator[Session]:
    with session_factory() as session:
        yield session


@pytest.fixture()
def make_user(session: Session) -> Callable[[str], User]:
    """Create a user directly through the credential store."""

    def _make(name: str) -> User:
        email = f"{name.lower()}@example.com"
        return UserStore(session).create(email, "not-a-real-hash", name)

    return _make


@pytest.fixture()
def client(session_factory: sessionmaker) -> Iterator[TestClient]:
    def _get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = _get_db
    # Not used as a context manager: startup would touch the real database.
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture()
def register(client: TestClient) -> Callable[..., SimpleNamespace]:
    """
    Register a user through the API and return id, token and auth headers.

    The session cookie set by the endpoint is cleared so every request in a
    test authenticates only through the headers it passes explicitly.
    """

    def _register(name: str, email: str | None = None) -> SimpleNamespace:
        email = email or f"{name.lower()}@example.com"
        resp = client.post(
            "/api/auth/register",
            json={"email": email, "password": "password123", "name": name},
        )
        assert resp.status_code == 201, resp.text
        client.cookies.clear()
        data = resp.json()["data"]
        return SimpleNamespace(
            id=data["user"]["id"],
            email=email,
            token=data["token"],
            headers={"Authorization": f"Bearer {data['token']}"},
        )

    return _register
