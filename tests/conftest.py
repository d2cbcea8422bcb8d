"""
Shared pytest fixtures for the scheduler tests.

Provides:
- Settings pointing at a temporary SQLite file
- A TestClient running the full application
- Bearer headers for the configured password
- A bare database session for service tests
"""

import pytest
from fastapi.testclient import TestClient
from sqlmodel import Session

from scheduler.config import Settings
from scheduler.db.config import create_db_engine
from scheduler.db.init import init_db
from scheduler.main import create_app

PASSWORD = "secret"


@pytest.fixture
def settings(tmp_path):
    return Settings(
        password=PASSWORD,
        db_file=str(tmp_path / "scheduler.db"),
        web_dir=str(tmp_path / "web"),
    )


@pytest.fixture
def client(settings):
    """TestClient with startup/shutdown (schema install) applied."""
    with TestClient(create_app(settings)) as test_client:
        yield test_client


@pytest.fixture
def auth_headers(client):
    response = client.post("/api/signin", json={"password": PASSWORD})
    assert response.status_code == 200
    return {"Authorization": f"Bearer {response.json()['token']}"}


@pytest.fixture
def session(tmp_path):
    engine = create_db_engine(f"sqlite:///{tmp_path / 'service.db'}")
    init_db(engine)
    with Session(engine) as db_session:
        yield db_session
    engine.dispose()
