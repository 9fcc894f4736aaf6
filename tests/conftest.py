import pytest
from fastapi.testclient import TestClient

from people_service.api.main import create_app
from people_service.core.config import Settings
from people_service.core.database import DatabaseManager
from tests.stubs import StubClient


@pytest.fixture
def settings(tmp_path):
    return Settings(
        _env_file=None,
        MONGODB_URL="mongodb://db.test:27017/people",
        STATIC_DIR=tmp_path / "docs",
    )


@pytest.fixture
def stub_client():
    return StubClient()


@pytest.fixture
def database(settings, stub_client):
    return DatabaseManager(settings, client_factory=stub_client)


@pytest.fixture
def client(settings, database):
    app = create_app(settings, database)
    with TestClient(app) as test_client:
        yield test_client
