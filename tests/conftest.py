import os

# settings are read at import time; keep tests off any real database
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["SEED_ON_STARTUP"] = "false"
os.environ.setdefault("AUTO_CHECK_BADGES", "false")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from main import app
from config.database import Base, get_db
from api.badges.badges_model import Badge
from api.states.states_service import seed_states


@pytest.fixture
def engine(tmp_path):
    """A fresh sqlite file per test so separate sessions see each other's commits."""
    engine = create_engine(
        f"sqlite:///{tmp_path / 'test.sqlite'}",
        connect_args={"check_same_thread": False}
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db_session(session_factory):
    db = session_factory()
    seed_states(db)
    try:
        yield db
    finally:
        db.close()


@pytest.fixture
def client(session_factory, db_session):
    def override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.pop(get_db, None)


@pytest.fixture
def make_badge(db_session):
    def _make(name, criteria, tier=1, category="special"):
        badge = Badge(
            name=name,
            description=f"{name} badge",
            image_url=None,
            criteria=criteria,
            tier=tier,
            category=category
        )
        db_session.add(badge)
        db_session.commit()
        db_session.refresh(badge)
        return badge
    return _make
