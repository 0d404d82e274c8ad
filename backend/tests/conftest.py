from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from backend.analytics.store import clear_events
from backend.app import app, get_repository
from backend.catalog.seed import SEED_RECORDS
from backend.storage.memory import MemoryRepository
from backend.storage.sqlite_store import SQLiteRepository


@pytest.fixture
def memory_repo():
    repo = MemoryRepository()
    repo.seed(SEED_RECORDS)
    return repo


@pytest.fixture
def sqlite_repo(tmp_path):
    repo = SQLiteRepository(tmp_path / "tech_finder.db")
    repo.create_schema()
    repo.seed(SEED_RECORDS)
    yield repo
    repo.close()


@pytest.fixture(params=["memory", "sqlite"])
def repo(request):
    return request.getfixturevalue(f"{request.param}_repo")


@pytest.fixture
def client(memory_repo):
    clear_events()
    app.dependency_overrides[get_repository] = lambda: memory_repo
    yield TestClient(app)
    app.dependency_overrides.clear()
