"""
Unit tests for API routes
"""

import pytest
from fastapi.testclient import TestClient

from scoreboard.utils.config import SupabaseConfig
from scoreboard.utils.supabase_client import SupabaseClient, get_supabase_client


class TestServiceRoutes:
    def test_health_check(self, client):
        response = client.get("/health")
        assert response.status_code == 200

        data = response.json()
        assert data["status"] == "healthy"
        assert data["service"] == "scoreboard"
        assert "timestamp" in data

    def test_supabase_health(self, client, mock_supabase):
        response = client.get("/health/supabase")
        assert response.status_code == 200
        assert response.json()["leaderboard_view"] == "available"

    def test_supabase_health_unavailable(self, client, mock_supabase):
        mock_supabase.is_available.return_value = False

        response = client.get("/health/supabase")
        assert response.status_code == 503
        assert response.json()["error"] is True

    def test_root_endpoint(self, client):
        response = client.get("/")
        assert response.status_code == 200
        assert response.json()["docs"] == "/docs"


class TestAuthRoutes:
    def test_register(self, client, mock_supabase, sample_user):
        mock_supabase.sign_up.return_value = {"success": True, "user": sample_user, "session": None}

        response = client.post("/auth/register", json={
            "email": "player@example.com",
            "password": "abcdEF1!",
            "name": "Player One"
        })

        assert response.status_code == 201
        data = response.json()
        assert data["user"]["id"] == sample_user["id"]
        assert data["session"] is None
        assert data["notification"]["title"] == "Registration successful"

    def test_register_short_password(self, client, mock_supabase):
        response = client.post("/auth/register", json={"email": "player@example.com", "password": "short"})

        assert response.status_code == 422
        mock_supabase.sign_up.assert_not_awaited()

    def test_register_failure(self, client, mock_supabase):
        mock_supabase.sign_up.return_value = {"success": False, "error": "User already registered"}

        response = client.post("/auth/register", json={"email": "player@example.com", "password": "abcdEF1!"})

        assert response.status_code == 400
        data = response.json()
        assert data["error"] is True
        assert data["message"] == "User already registered"
        assert data["notification"] == {
            "title": "Registration failed",
            "description": "User already registered",
            "variant": "destructive"
        }

    def test_login(self, client, mock_supabase, sample_user, sample_session):
        mock_supabase.sign_in.return_value = {"success": True, "user": sample_user, "session": sample_session}

        response = client.post("/auth/login", json={"email": "player@example.com", "password": "secret"})

        assert response.status_code == 200
        data = response.json()
        assert data["session"]["access_token"] == sample_session["access_token"]
        assert data["notification"]["title"] == "Login successful"

    def test_login_failure(self, client, mock_supabase):
        mock_supabase.sign_in.return_value = {"success": False, "error": "Invalid login credentials"}

        response = client.post("/auth/login", json={"email": "player@example.com", "password": "wrong"})

        assert response.status_code == 401
        assert response.json()["notification"]["title"] == "Login failed"

    def test_logout(self, client, mock_supabase, user_headers):
        mock_supabase.sign_out.return_value = {"success": True}

        response = client.post("/auth/logout", headers=user_headers)

        assert response.status_code == 200
        assert response.json()["notification"]["title"] == "Logged out"
        mock_supabase.sign_out.assert_awaited_once_with("user-access-token")

    def test_logout_requires_token(self, client):
        response = client.post("/auth/logout")
        assert response.status_code in (401, 403)

    def test_password_reset(self, client, mock_supabase):
        mock_supabase.reset_password.return_value = {"success": True, "message": "Password reset email sent"}

        response = client.post("/auth/password-reset", json={"email": "player@example.com"})

        assert response.status_code == 200
        assert response.json()["notification"]["title"] == "Password reset link sent"

    def test_password_reset_invalid_email(self, client, mock_supabase):
        response = client.post("/auth/password-reset", json={"email": "not-an-email"})

        assert response.status_code == 422
        mock_supabase.reset_password.assert_not_awaited()

    def test_password_reset_complete(self, client, mock_supabase, sample_user):
        mock_supabase.update_password.return_value = {"success": True, "user": sample_user}

        response = client.post("/auth/password-reset/complete", json={
            "access_token": "recovery-at",
            "refresh_token": "recovery-rt",
            "new_password": "newPass1!"
        })

        assert response.status_code == 200
        assert response.json()["notification"]["title"] == "Password updated"

    def test_refresh(self, client, mock_supabase, sample_session):
        mock_supabase.refresh_session.return_value = {"success": True, "session": sample_session}

        response = client.post("/auth/refresh", json={"refresh_token": "refresh-token"})

        assert response.status_code == 200
        assert response.json()["session"]["refresh_token"] == "refresh-token"

    def test_me(self, client, user_headers, sample_user):
        response = client.get("/auth/me", headers=user_headers)

        assert response.status_code == 200
        assert response.json()["email"] == sample_user["email"]

    def test_me_invalid_token(self, client):
        response = client.get("/auth/me", headers={"Authorization": "Bearer expired"})

        assert response.status_code == 401
        assert response.json()["message"] == "Invalid or expired token"

    def test_session_status(self, client, user_headers):
        signed_in = client.get("/auth/session", headers=user_headers).json()
        anonymous = client.get("/auth/session").json()

        assert signed_in["authenticated"] is True
        assert signed_in["redirect_to"] == "/"
        assert anonymous["authenticated"] is False

    def test_password_strength(self, client):
        response = client.post("/auth/password-strength", json={"password": "abcdEF1!"})

        assert response.status_code == 200
        data = response.json()
        assert data["score"] == 4
        assert data["label"] == "Strong password"


class TestLeaderboardRoutes:
    def test_leaderboard(self, client, mock_supabase, leaderboard_rows, user_headers):
        mock_supabase.select_rows.side_effect = [
            {"success": True, "data": [{"id": "x"}]},
            {"success": True, "data": leaderboard_rows},
        ]

        response = client.get("/leaderboard", headers=user_headers)

        assert response.status_code == 200
        entries = response.json()["entries"]
        assert [e["rank"] for e in entries] == [1, 2, 3, 4]
        assert entries[0]["name"] == "bbbbbbbb"
        assert entries[0]["tier"] == "gold"
        assert not any(e["is_current_user"] for e in entries)

    def test_leaderboard_anonymous_empty(self, client, mock_supabase):
        response = client.get("/leaderboard")

        assert response.status_code == 200
        data = response.json()
        assert data["entries"] == []
        assert data["message"] == "No users on the leaderboard yet. Be the first to earn points!"

    def test_leaderboard_failure(self, client, mock_supabase):
        mock_supabase.select_rows.side_effect = [
            {"success": True, "data": []},
            {"success": False, "error": "timeout"},
        ]

        response = client.get("/leaderboard")

        assert response.status_code == 502
        assert response.json()["notification"]["title"] == "Failed to load leaderboard"

    def test_add_points_default_amount(self, client, mock_supabase, user_headers, sample_user):
        response = client.post("/leaderboard/points", json={}, headers=user_headers)

        assert response.status_code == 200
        data = response.json()
        assert data["change"] == 10
        assert data["notification"]["description"] == "10 points have been added to your account."
        mock_supabase.rpc.assert_awaited_with(
            "add_points_to_user", {"user_uuid": sample_user["id"], "points_to_add": 10}
        )

    def test_add_points_rejects_zero(self, client, mock_supabase, user_headers):
        response = client.post("/leaderboard/points", json={"points": 0}, headers=user_headers)

        assert response.status_code == 422
        mock_supabase.rpc.assert_not_awaited()

    def test_add_points_requires_auth(self, client, mock_supabase):
        response = client.post("/leaderboard/points", json={"points": 5})

        assert response.status_code in (401, 403)
        mock_supabase.rpc.assert_not_awaited()

    def test_admin_panel_for_regular_user(self, client, user_headers):
        response = client.get("/leaderboard/admin", headers=user_headers)

        assert response.status_code == 200
        data = response.json()
        assert data["is_admin"] is False
        assert data["presets"] == []
        assert data["message"] == "Only the admin can modify user points"

    def test_admin_panel_for_admin(self, client, admin_headers, leaderboard_rows, mock_supabase):
        mock_supabase.select_rows.side_effect = [
            {"success": True, "data": [{"id": "x"}]},
            {"success": True, "data": leaderboard_rows},
        ]

        response = client.get("/leaderboard/admin", headers=admin_headers)

        data = response.json()
        assert data["is_admin"] is True
        assert data["presets"] == [-1, 1, -5, 5, -10, 10, 2]
        assert len(data["entries"]) == 4

    def test_admin_adjust_points(self, client, mock_supabase, admin_headers):
        response = client.post(
            "/leaderboard/admin/users/cccccccc-0000-0000-0000-000000000003/points",
            json={"delta": -10},
            headers=admin_headers
        )

        assert response.status_code == 200
        assert response.json()["notification"]["description"] == "10 points have been deducted from the user."
        mock_supabase.rpc.assert_awaited_once_with(
            "add_points_to_user", {"user_uuid": "cccccccc-0000-0000-0000-000000000003", "points_to_add": -10}
        )

    def test_non_admin_cannot_adjust(self, client, mock_supabase, user_headers):
        response = client.post(
            "/leaderboard/admin/users/cccccccc-0000-0000-0000-000000000003/points",
            json={"delta": 5},
            headers=user_headers
        )

        assert response.status_code == 403
        assert response.json()["notification"]["title"] == "Not authorized"
        mock_supabase.rpc.assert_not_awaited()

    def test_zero_delta_rejected(self, client, admin_headers):
        response = client.post(
            "/leaderboard/admin/users/cccccccc-0000-0000-0000-000000000003/points",
            json={"delta": 0},
            headers=admin_headers
        )
        assert response.status_code == 422

    def test_adjust_rejects_malformed_user_id(self, client, mock_supabase, admin_headers):
        response = client.post(
            "/leaderboard/admin/users/not-a-uuid/points",
            json={"delta": 5},
            headers=admin_headers
        )

        assert response.status_code == 422
        mock_supabase.rpc.assert_not_awaited()


class TestSetupRoutes:
    def test_list(self, client):
        response = client.get("/setup/sql")

        assert response.status_code == 200
        names = [s["name"] for s in response.json()["statements"]]
        assert names[0] == "Create Points Table"
        assert names[-1] == "Grant Privileges"

    def test_single_statement(self, client):
        response = client.get("/setup/sql/create-add-points-function")

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/plain")
        assert "add_points_to_user(user_uuid UUID, points_to_add INTEGER)" in response.text

    def test_script(self, client):
        response = client.get("/setup/sql/script")
        assert response.text.startswith("-- Create Points Table")

    def test_unknown_statement(self, client):
        response = client.get("/setup/sql/drop-everything")

        assert response.status_code == 404
        assert response.json()["message"] == "Unknown setup statement: drop-everything"


class TestUnconfiguredSupabase:
    @pytest.fixture
    def unconfigured_client(self):
        from scoreboard.main import app

        unconfigured = SupabaseClient(SupabaseConfig(supabase_url="", supabase_anon_key=""))
        app.dependency_overrides[get_supabase_client] = lambda: unconfigured
        yield TestClient(app)
        app.dependency_overrides.clear()

    def _assert_unavailable(self, response):
        assert response.status_code == 503
        data = response.json()
        assert data["message"] == "Supabase client not available"
        assert data["notification"]["title"] == "Service unavailable"
        assert data["notification"]["variant"] == "destructive"

    def test_login(self, unconfigured_client):
        response = unconfigured_client.post("/auth/login", json={
            "email": "player@example.com",
            "password": "abcdEF1!"
        })
        self._assert_unavailable(response)

    def test_leaderboard(self, unconfigured_client):
        self._assert_unavailable(unconfigured_client.get("/leaderboard"))

    def test_me(self, unconfigured_client, user_headers):
        self._assert_unavailable(unconfigured_client.get("/auth/me", headers=user_headers))
