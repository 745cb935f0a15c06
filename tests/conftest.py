from datetime import datetime, timedelta, timezone

import pytest
from fastapi.testclient import TestClient
from sqlmodel import Session, SQLModel, create_engine
from sqlmodel.pool import StaticPool

from flyer_backend.database import get_session
from flyer_backend.main import app
from flyer_backend.services import project_service


@pytest.fixture(name="engine")
def engine_fixture():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    SQLModel.metadata.create_all(engine)
    yield engine
    SQLModel.metadata.drop_all(engine)


@pytest.fixture(name="session")
def session_fixture(engine):
    with Session(engine) as session:
        yield session


@pytest.fixture(name="client")
def client_fixture(session):
    app.dependency_overrides[get_session] = lambda: session
    client = TestClient(app)
    yield client
    app.dependency_overrides.clear()


@pytest.fixture
def clock(monkeypatch):
    """
    Deterministic, strictly increasing clock for timestamp assertions.
    Each call to utcnow() advances one second.
    """
    state = {"now": datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc)}

    def fake_now():
        state["now"] += timedelta(seconds=1)
        return state["now"]

    monkeypatch.setattr(project_service, "utcnow", fake_now)
    return state
