import pytest
from fastapi.testclient import TestClient

from chat_backend.main import app, get_store
from chat_backend.user_store import UserStore


@pytest.fixture
def store(tmp_path):
    s = UserStore(tmp_path / "auth.db")
    s.init_schema()
    return s


@pytest.fixture
def client(store):
    app.dependency_overrides[get_store] = lambda: store
    yield TestClient(app, raise_server_exceptions=False)
    app.dependency_overrides.clear()
