"""Shared fixtures: a fresh SQLite file per test, a client and identity helpers."""

from typing import Any, Callable, Dict

import pytest
from fastapi.testclient import TestClient

from wedsimplify_api.app.core.config import settings
from wedsimplify_api.app.core.db import init_db
from wedsimplify_api.app.core.security import create_access_token
from wedsimplify_api.app.main import app

VENDOR_FIELDS = {
    "businessName": "Luma Photography",
    "category": "Photography",
    "description": "Candid wedding photography",
    "country": "USA",
    "state": "CA",
    "city": "San Diego",
}


@pytest.fixture(autouse=True)
def database(tmp_path, monkeypatch):
    monkeypatch.setattr(settings, "database_url", str(tmp_path / "wedsimplify-test.db"))
    init_db()
    yield


@pytest.fixture
def client(database) -> TestClient:
    with TestClient(app) as test_client:
        yield test_client


def token_for(sub: str, **claims: Any) -> str:
    claims.setdefault("email", f"{sub}@example.com")
    claims.setdefault("first_name", "Alex")
    claims.setdefault("last_name", "Smith")
    return create_access_token({"sub": sub, **claims})


def headers_for(sub: str, **claims: Any) -> Dict[str, str]:
    return {"Authorization": f"Bearer {token_for(sub, **claims)}"}


@pytest.fixture
def login(client) -> Callable[..., Dict[str, str]]:
    """Log a user in and return their auth headers."""

    def _login(sub: str, **claims: Any) -> Dict[str, str]:
        headers = headers_for(sub, **claims)
        response = client.post("/api/auth/login", headers=headers)
        assert response.status_code == 200, response.text
        return headers

    return _login


@pytest.fixture
def make_user(client, login) -> Callable[..., Dict[str, str]]:
    """Log a user in and run profile setup for ``role``; return their headers."""

    def _make_user(sub: str, role: str, **fields: Any) -> Dict[str, str]:
        headers = login(sub)
        if role == "vendor":
            fields = {**VENDOR_FIELDS, **fields}
        response = client.post("/api/setup-profile", json={"role": role, **fields}, headers=headers)
        assert response.status_code == 201, response.text
        return headers

    return _make_user


def vendor_id_of(client: TestClient, headers: Dict[str, str]) -> str:
    return client.get("/api/auth/user", headers=headers).json()["roleData"]["id"]
