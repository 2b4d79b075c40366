"""
Pytest fixtures for scoreboard tests
"""

import pytest
from unittest.mock import MagicMock
from typing import Dict, Any
from fastapi.testclient import TestClient

from scoreboard.utils.config import reset_config
from scoreboard.utils.supabase_client import SupabaseClient, get_supabase_client


USER_TOKEN = "user-access-token"
ADMIN_TOKEN = "admin-access-token"


@pytest.fixture(autouse=True)
def app_env(monkeypatch):
    """Point configuration at a fake Supabase project"""
    monkeypatch.setenv("SUPABASE_URL", "https://test-project.supabase.co")
    monkeypatch.setenv("SUPABASE_ANON_KEY", "test-anon-key")
    monkeypatch.delenv("SUPABASE_SERVICE_KEY", raising=False)
    monkeypatch.setenv("APP_ADMIN_EMAILS", "admin@example.com")
    monkeypatch.setenv("APP_PASSWORD_RESET_REDIRECT_URL", "http://testserver/auth/reset-password")
    monkeypatch.delenv("APP_DEFAULT_POINTS_AWARD", raising=False)
    reset_config()
    yield
    reset_config()


@pytest.fixture
def sample_user() -> Dict[str, Any]:
    return {
        "id": "5b8f0c2e-1111-4a6b-9c3d-000000000001",
        "email": "player@example.com",
        "name": "Player One",
        "email_confirmed": True,
    }


@pytest.fixture
def admin_user() -> Dict[str, Any]:
    return {
        "id": "9e1d7a40-2222-4f0e-8b7c-000000000002",
        "email": "Admin@Example.com",
        "name": "Admin",
        "email_confirmed": True,
    }


@pytest.fixture
def sample_session() -> Dict[str, Any]:
    return {
        "access_token": USER_TOKEN,
        "refresh_token": "refresh-token",
        "expires_at": 1767225600,
        "token_type": "bearer",
    }


@pytest.fixture
def leaderboard_rows():
    """Rows as returned by the profiles_with_points view, unsorted"""
    return [
        {"id": "aaaaaaaa-0000-0000-0000-000000000001", "name": "Alice", "points": 30},
        {"id": "bbbbbbbb-0000-0000-0000-000000000002", "name": None, "points": 50},
        {"id": "cccccccc-0000-0000-0000-000000000003", "name": "Carol", "points": 10},
        {"id": "dddddddd-0000-0000-0000-000000000004", "name": "Dave", "points": 0},
    ]


@pytest.fixture
def mock_supabase(sample_user, admin_user):
    """SupabaseClient stand-in; async methods become AsyncMocks via spec"""
    supabase = MagicMock(spec=SupabaseClient)
    supabase.is_available.return_value = True

    def _get_user(token):
        if token == USER_TOKEN:
            return {"success": True, "user": sample_user}
        if token == ADMIN_TOKEN:
            return {"success": True, "user": admin_user}
        return {"success": False, "error": "invalid JWT"}

    supabase.get_user.side_effect = _get_user
    supabase.rpc.return_value = {"success": True, "data": None}
    supabase.select_rows.return_value = {"success": True, "data": []}
    return supabase


@pytest.fixture
def client(mock_supabase):
    """Test client with the Supabase dependency replaced"""
    from scoreboard.main import app

    app.dependency_overrides[get_supabase_client] = lambda: mock_supabase
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def user_headers():
    return {"Authorization": f"Bearer {USER_TOKEN}"}


@pytest.fixture
def admin_headers():
    return {"Authorization": f"Bearer {ADMIN_TOKEN}"}
