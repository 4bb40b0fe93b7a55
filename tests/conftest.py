"""
Shared pytest fixtures.

Uses a SQLite database file so no Postgres is required for tests.
"""
import os

os.environ.setdefault("DATABASE_URL", "sqlite:///./test_progress.db")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from app.db.base import Base, get_db
from app.main import app
from app.models.task_definition import TaskDefinition, Track

SQLITE_URL = "sqlite:///./test_progress.db"

engine = create_engine(SQLITE_URL, connect_args={"check_same_thread": False})
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# The career track is left without definitions on purpose (NO_ACTIVE_TASKS).
DEFAULT_TASKS = [
    (Track.linkedin, "Update your headline",             10, 1),
    (Track.linkedin, "Comment on 3 posts",               10, 2),
    (Track.linkedin, "Send 5 connection requests",       10, 3),
    (Track.linkedin, "Publish a post",                   20, 4),
    (Track.linkedin, "Follow 3 target companies",         5, 5),
    (Track.linkedin, "Ask for a recommendation",         15, 6),
    (Track.linkedin, "Review weekly profile analytics",   5, 7),
    (Track.github,   "Push commits on 3 days",           20, 1),
    (Track.github,   "Open a pull request",              15, 3),
    (Track.github,   "Update a README",                  10, 7),
]


def override_get_db():
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture(scope="session", autouse=True)
def create_tables():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    # Seed the weekly catalogue (normally done by Alembic migration)
    db = TestingSessionLocal()
    try:
        for track, title, points, order in DEFAULT_TASKS:
            db.add(TaskDefinition(
                track=track,
                title=title,
                points_base=points,
                display_order=order,
                active=True,
            ))
        db.commit()
    finally:
        db.close()
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture()
def db():
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture()
def client(db):
    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()
