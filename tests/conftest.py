"""Shared fixtures: in-memory database, recording notifier, API client."""

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, SQLModel, create_engine

from app.api.app import create_app
from app.api.deps import get_notifier, get_session
from app.config import Settings
from app.domain.models import Bug  # noqa: F401


class RecordingNotifier:
    """Stands in for WebhookNotifier and keeps every message it was asked to send."""

    enabled = True

    def __init__(self) -> None:
        self.sent: list[str] = []

    async def send(self, text: str) -> bool:
        self.sent.append(text)
        return True


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
def notifier() -> RecordingNotifier:
    return RecordingNotifier()


@pytest.fixture
def make_client(engine):
    """Build a TestClient over the shared engine with the given settings and notifier."""

    def _make(notifier=None, settings: Settings | None = None) -> TestClient:
        app = create_app(settings or Settings(_env_file=None, environment="development"))

        def _session():
            with Session(engine) as s:
                yield s

        app.dependency_overrides[get_session] = _session
        if notifier is not None:
            app.dependency_overrides[get_notifier] = lambda: notifier
        return TestClient(app, raise_server_exceptions=False)

    return _make


@pytest.fixture
def client(make_client, notifier) -> TestClient:
    return make_client(notifier=notifier)


@pytest.fixture
def sample_bug() -> dict:
    return {
        "title": "Login broken",
        "description": "button unresponsive",
        "reportedBy": "Jane",
    }
