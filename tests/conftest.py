"""
- One PuzzleStore for the whole session: the lock puzzle walks 100k codes,
  so solve it once and share the result.
- Override FastAPI's get_store / get_app_settings so routes use our objects.
- Provide a client fixture (TestClient(app)) with the overrides applied.
"""
import os
import pytest

from fastapi.testclient import TestClient

# Ensure the app does NOT run dev-only startup hooks (pre-solving the default puzzle)
os.environ.setdefault("APP_ENV", "test")

from codelock.config import Settings
from codelock.main import app, get_app_settings, get_store
from codelock.store import PuzzleStore


@pytest.fixture(scope="session")
def store() -> PuzzleStore:
    return PuzzleStore()


@pytest.fixture
def settings() -> Settings:
    return Settings(
        app_env="test",
        default_puzzle="combination-lock",
        max_solve_length=4,
        log_level="DEBUG",
    )


@pytest.fixture(autouse=True)
def override_dep(store, settings):
    """Force the app to use the shared store and fixed settings for every request."""
    app.dependency_overrides[get_store] = lambda: store
    app.dependency_overrides[get_app_settings] = lambda: settings
    yield
    app.dependency_overrides.clear()


@pytest.fixture
def client():
    # In-process client; no server, no lifespan events (not used as a context manager)
    return TestClient(app)
