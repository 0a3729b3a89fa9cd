"""
Shared fixtures: an in-memory SQLite database rebuilt for every test, a user
factory and an authenticated API client.
"""
import os

# Must be set before anything from app is imported: the engine is built at import time
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["ENVIRONMENT"] = "test"

import pytest
from fastapi.testclient import TestClient

from app.core.security import create_access_token
from app.db.base import Base
from app.db.session import SessionLocal, engine
from app.modules.friendships.models.friendship import Friendship
from app.modules.user_management.schemas.user import UserCreate
from app.modules.user_management.services.user import create_user


@pytest.fixture
def db():
    Base.metadata.create_all(bind=engine)
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def make_user(db):
    def _make_user(user_id, full_name=None, phone_number=None):
        return create_user(
            db,
            UserCreate(
                id=user_id,
                full_name=full_name or f"User {user_id.upper()}",
                phone_number=phone_number or f"+1-555-{user_id}",
            ),
        )
    return _make_user


@pytest.fixture
def users(make_user):
    """Four users: a, b, c and d"""
    return {user_id: make_user(user_id) for user_id in ("a", "b", "c", "d")}


@pytest.fixture
def edges(db):
    """Current rows for an ordered pair, read fresh from the database"""
    def _edges(user_id, friend_user_id):
        db.expire_all()
        return db.query(Friendship).filter(
            Friendship.user_id == user_id,
            Friendship.friend_user_id == friend_user_id,
        ).all()
    return _edges


@pytest.fixture
def client(db):
    from app.main import app

    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def auth_headers():
    def _auth_headers(user_id):
        return {"Authorization": f"Bearer {create_access_token(user_id)}"}
    return _auth_headers
