import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from dojo.api.dependencies import get_db
from dojo.core.config import settings
from dojo.main import app
from dojo.models import init_db
from dojo.models.participant import Participant


@pytest.fixture
def engine():
    """Fresh in-memory database for each test."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    init_db(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def db(engine):
    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client(db):
    def override_get_db():
        yield db

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.pop(get_db, None)


@pytest.fixture
def revoke_win_on_reset(monkeypatch):
    monkeypatch.setattr(settings, "REVOKE_WIN_ON_RESET", True)


@pytest.fixture
def make_participants(db):
    def _make(*first_names, **fields):
        people = [Participant(first_name=name, wins=0, **fields) for name in first_names]
        db.add_all(people)
        db.commit()
        for p in people:
            db.refresh(p)
        return people
    return _make
