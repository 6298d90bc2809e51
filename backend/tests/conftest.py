# tests/conftest.py
import shutil
import tempfile
from pathlib import Path

import pytest
import pytest_asyncio
from fastapi.testclient import TestClient

from constructiq.config import settings
from constructiq.database import build_engine, build_session_factory
from constructiq.main import app
from constructiq.persistence import FileKeyValueStorage, LocalAdapter, RemoteAdapter
from constructiq.services.store import EntityStore, RefreshPolicy
from constructiq.services.workspace import Workspace

SQLALCHEMY_TEST_DATABASE_URL = "sqlite:///:memory:"

USER_ID = "user-1"


@pytest.fixture(scope="session")
def temp_storage_dir():
    """Create temporary storage directory for test files"""
    temp_dir = tempfile.mkdtemp()
    for subdir in ["local", "uploads"]:
        Path(temp_dir, subdir).mkdir(parents=True, exist_ok=True)
    yield Path(temp_dir)
    shutil.rmtree(temp_dir)


@pytest.fixture(autouse=True)
def override_settings(temp_storage_dir, tmp_path):
    """Point storage at temporary directories; every test gets a fresh local store"""
    original = {
        "STORAGE_PATH": settings.STORAGE_PATH,
        "LOCAL_STORE_PATH": settings.LOCAL_STORE_PATH,
        "UPLOADS_PATH": settings.UPLOADS_PATH,
        "PERSISTENCE_BACKEND": settings.PERSISTENCE_BACKEND,
        "REFRESH_POLICY": settings.REFRESH_POLICY,
    }

    settings.STORAGE_PATH = temp_storage_dir
    settings.LOCAL_STORE_PATH = tmp_path / "local"
    settings.UPLOADS_PATH = temp_storage_dir / "uploads"
    settings.PERSISTENCE_BACKEND = "local"
    settings.REFRESH_POLICY = "confirm"

    yield

    for name, value in original.items():
        setattr(settings, name, value)


@pytest.fixture
def key_value_storage(tmp_path):
    return FileKeyValueStorage(tmp_path / "kv")


@pytest.fixture
def local_adapter(key_value_storage):
    return LocalAdapter(key_value_storage, prefix="constructiq_")


@pytest.fixture
def session_factory():
    """Fresh in-memory database per test"""
    engine = build_engine(SQLALCHEMY_TEST_DATABASE_URL)
    factory = build_session_factory(engine)
    yield factory
    engine.dispose()


@pytest.fixture
def remote_adapter(session_factory):
    return RemoteAdapter(session_factory)


@pytest.fixture(params=["local", "remote"])
def adapter(request):
    """Each store-level test runs against both persistence backends"""
    return request.getfixturevalue(f"{request.param}_adapter")


@pytest_asyncio.fixture
async def store(adapter):
    entity_store = EntityStore(adapter, RefreshPolicy.CONFIRM)
    await entity_store.load()
    return entity_store


@pytest_asyncio.fixture
async def workspace(store):
    ws = Workspace(store)
    await ws.load()
    return ws


@pytest_asyncio.fixture
async def project(workspace):
    return await workspace.add_project({"name": "Harbor Tower", "jobNumber": "HT-001"}, USER_ID)


@pytest.fixture
def client():
    """Test client running the app lifespan against the temporary local store"""
    with TestClient(app, headers={"X-User-Id": USER_ID}) as test_client:
        yield test_client


@pytest.fixture
def sample_project(client):
    """Create a sample project through the API; the caller becomes administrator"""
    response = client.post("/api/projects", json={"name": "Test Project", "description": "Test Description"})
    assert response.status_code == 200
    return response.json()
