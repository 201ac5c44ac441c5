import os
import tempfile

# Point the app at a throwaway sqlite file before taquara_backend.core.database is imported
os.environ.setdefault("TAQUARA_DB_PATH", os.path.join(tempfile.mkdtemp(), "taquara-test.db"))
os.environ.setdefault("TAQUARA_EXCLUDED_MATCHES", "5,6,7,8")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel, Session, create_engine

from taquara_backend import models  # noqa: F401  (registers tables)
from taquara_backend.core.auth import InMemorySessionStore, get_session_store, pwd_context
from taquara_backend.core.database import get_session
from taquara_backend.main import app
from taquara_backend.models import Match, Team, User
from tests.factories import SEASON_START

ADMIN_EMAIL = "admin@taquara.local"
ADMIN_PASSWORD = "s3cret"


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    SQLModel.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session(engine):
    with Session(engine) as session:
        yield session


@pytest.fixture
def seeded(session):
    """
    Four teams, one admin, two presenters and two rounds:
    round 1 finished (ids 1, 2), round 2 pending (ids 3, 4),
    plus match 5 (excluded by configuration) in round 2.
    """
    session.add_all([
        Team(id=1, name="Avaí", abbreviation="AVA"),
        Team(id=2, name="Criciúma", abbreviation="CRI", highlighted=True),
        Team(id=3, name="Goiás", abbreviation="GOI"),
        Team(id=4, name="Remo", abbreviation="REM"),
        User(id=1, name="Admin", email=ADMIN_EMAIL, password_hash=pwd_context.hash(ADMIN_PASSWORD), is_admin=True),
        User(id=2, name="Diego"),
        User(id=3, name="Marcelo"),
    ])
    session.commit()
    session.add_all([
        Match(id=1, round=1, date=SEASON_START, home_team_id=1, away_team_id=2, home_score=2, away_score=1),
        Match(id=2, round=1, date=SEASON_START, home_team_id=3, away_team_id=4, home_score=0, away_score=0),
        Match(id=3, round=2, date=SEASON_START.replace(day=12), home_team_id=2, away_team_id=3),
        Match(id=4, round=2, date=SEASON_START.replace(day=12), home_team_id=4, away_team_id=1),
        Match(id=5, round=2, date=SEASON_START.replace(day=13), home_team_id=1, away_team_id=3),
    ])
    session.commit()
    return session


@pytest.fixture
def client(engine):
    def override_session():
        with Session(engine) as session:
            yield session

    store = InMemorySessionStore()
    app.dependency_overrides[get_session] = override_session
    app.dependency_overrides[get_session_store] = lambda: store
    # No context manager: startup hooks (file DB creation, auto-seed) are not run
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def admin_client(client, seeded):
    response = client.post("/auth/login", json={"email": ADMIN_EMAIL, "password": ADMIN_PASSWORD})
    assert response.status_code == 200
    return client
