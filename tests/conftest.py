import sys
from collections.abc import Callable
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from backend.auth.jwt import create_access_token  # noqa: E402
from backend.config import settings  # noqa: E402
from backend.main import app  # noqa: E402


@pytest.fixture
def client() -> TestClient:
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def auth_headers() -> Callable[[str], dict[str, str]]:
    def _headers(role: str, subject: str = "user-1") -> dict[str, str]:
        token = create_access_token(subject, role)
        return {"Authorization": f"Bearer {token}"}

    return _headers


@pytest.fixture
def role_switching(monkeypatch):
    monkeypatch.setattr(settings, "allow_role_switching", True)
    yield
