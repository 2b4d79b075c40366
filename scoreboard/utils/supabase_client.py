"""
Supabase Client Configuration
Authentication, row queries and remote procedure calls against Supabase
"""

import asyncio
from supabase import create_client, Client
from supabase.lib.client_options import SyncClientOptions
from typing import Any, Dict, Optional
import logging

from scoreboard.utils.config import SupabaseConfig, get_supabase_config
from scoreboard.utils.notifications import SupabaseUnavailableError

logger = logging.getLogger(__name__)


def _error_message(error: Exception) -> str:
    """Extract the platform's message from an SDK exception"""
    message = getattr(error, "message", None)
    return message if isinstance(message, str) and message else str(error)


def _user_to_dict(user) -> Dict[str, Any]:
    metadata = getattr(user, "user_metadata", None) or {}
    return {
        "id": str(user.id),
        "email": user.email,
        "name": metadata.get("name") or None,
        "email_confirmed": getattr(user, "email_confirmed_at", None) is not None
    }


def _session_to_dict(session) -> Dict[str, Any]:
    return {
        "access_token": session.access_token,
        "refresh_token": session.refresh_token,
        "expires_at": session.expires_at,
        "token_type": "bearer"
    }


class SupabaseClient:
    """Supabase client wrapper for auth and leaderboard data"""

    def __init__(self, config: Optional[SupabaseConfig] = None):
        self.config = config or get_supabase_config()
        self.client: Optional[Client] = None

        if self.config.is_configured():
            # Service key bypasses row level security for leaderboard reads and RPC
            data_key = self.config.supabase_service_key or self.config.supabase_anon_key
            try:
                self.client = create_client(self.config.supabase_url, data_key)
                logger.info("Supabase client initialized successfully")
            except Exception as e:
                logger.error(f"Failed to initialize Supabase client: {e}")
                self.client = None
        else:
            logger.warning("Supabase credentials not found in environment")

    def is_available(self) -> bool:
        """Check if Supabase is available and configured"""
        return self.client is not None

    def _require_client(self) -> Client:
        if not self.client:
            raise SupabaseUnavailableError()
        return self.client

    def _new_auth_client(self) -> Client:
        """
        Create a throwaway client for one auth call

        Signing in stores the session on the client it was made with, so auth
        calls never go through the shared data client. The session belongs to
        the API caller, so the SDK must not refresh it in the background.
        """
        self._require_client()
        return create_client(
            self.config.supabase_url,
            self.config.supabase_anon_key,
            options=SyncClientOptions(auto_refresh_token=False, persist_session=False)
        )

    # =====================
    # AUTHENTICATION
    # =====================

    async def sign_up(self, email: str, password: str, name: Optional[str] = None) -> dict:
        """
        Sign up new user with Supabase Auth

        Args:
            email: User email
            password: User password
            name: Display name stored in user metadata

        Returns:
            dict: Supabase auth response
        """
        auth_client = self._new_auth_client()

        try:
            response = await asyncio.to_thread(auth_client.auth.sign_up, {
                "email": email,
                "password": password,
                "options": {
                    "data": {"name": name or ""}
                }
            })

            if response.user:
                logger.info(f"User signed up successfully: {email}")
                return {
                    "success": True,
                    "user": _user_to_dict(response.user),
                    "session": _session_to_dict(response.session) if response.session else None
                }

            logger.error(f"Failed to sign up user: {email}")
            return {
                "success": False,
                "error": "Failed to create account"
            }

        except Exception as e:
            logger.error(f"Supabase sign up error: {e}")
            return {
                "success": False,
                "error": _error_message(e)
            }

    async def sign_in(self, email: str, password: str) -> dict:
        """
        Sign in user with email and password

        Returns:
            dict: Supabase auth response with tokens
        """
        auth_client = self._new_auth_client()

        try:
            response = await asyncio.to_thread(auth_client.auth.sign_in_with_password, {
                "email": email,
                "password": password
            })

            if response.user and response.session:
                logger.info(f"User signed in successfully: {email}")
                return {
                    "success": True,
                    "user": _user_to_dict(response.user),
                    "session": _session_to_dict(response.session)
                }

            logger.error(f"Failed to sign in user: {email}")
            return {
                "success": False,
                "error": "Invalid login credentials"
            }

        except Exception as e:
            logger.error(f"Supabase sign in error: {e}")
            return {
                "success": False,
                "error": _error_message(e)
            }

    async def sign_out(self, access_token: str) -> dict:
        """Revoke the session behind an access token"""
        client = self._require_client()

        try:
            await asyncio.to_thread(client.auth.admin.sign_out, access_token)
            return {"success": True}

        except Exception as e:
            logger.error(f"Supabase sign out error: {e}")
            return {
                "success": False,
                "error": _error_message(e)
            }

    async def reset_password(self, email: str, redirect_to: str) -> dict:
        """
        Send password reset email to user

        Args:
            email: User email
            redirect_to: Page the emailed link lands on

        Returns:
            dict: Reset password response
        """
        auth_client = self._new_auth_client()

        try:
            await asyncio.to_thread(
                auth_client.auth.reset_password_for_email,
                email,
                {"redirect_to": redirect_to}
            )
            logger.info(f"Password reset email sent to: {email}")
            return {
                "success": True,
                "message": "Password reset email sent"
            }

        except Exception as e:
            logger.error(f"Password reset error: {e}")
            return {
                "success": False,
                "error": _error_message(e)
            }

    async def update_password(self, access_token: str, refresh_token: str, new_password: str) -> dict:
        """
        Set a new password using the recovery session from a reset link

        Args:
            access_token: Access token from the reset link
            refresh_token: Refresh token from the reset link
            new_password: Replacement password

        Returns:
            dict: Update response with the user
        """
        auth_client = self._new_auth_client()

        try:
            await asyncio.to_thread(auth_client.auth.set_session, access_token, refresh_token)
            response = await asyncio.to_thread(auth_client.auth.update_user, {"password": new_password})

            if response.user:
                logger.info(f"Password updated for user: {response.user.id}")
                return {
                    "success": True,
                    "user": _user_to_dict(response.user)
                }

            return {
                "success": False,
                "error": "Failed to update password"
            }

        except Exception as e:
            logger.error(f"Password update error: {e}")
            return {
                "success": False,
                "error": _error_message(e)
            }

    async def get_user(self, access_token: str) -> dict:
        """
        Verify user JWT token

        Args:
            access_token: JWT access token

        Returns:
            dict: Token verification response
        """
        client = self._require_client()

        try:
            response = await asyncio.to_thread(client.auth.get_user, access_token)

            if response and response.user:
                return {
                    "success": True,
                    "user": _user_to_dict(response.user)
                }

            return {
                "success": False,
                "error": "Invalid token"
            }

        except Exception as e:
            logger.warning(f"Token verification error: {e}")
            return {
                "success": False,
                "error": _error_message(e)
            }

    async def refresh_session(self, refresh_token: str) -> dict:
        """
        Refresh user session using refresh token

        Returns:
            dict: New session tokens
        """
        auth_client = self._new_auth_client()

        try:
            response = await asyncio.to_thread(auth_client.auth.refresh_session, refresh_token)

            if response.session:
                return {
                    "success": True,
                    "session": _session_to_dict(response.session)
                }

            return {
                "success": False,
                "error": "Failed to refresh session"
            }

        except Exception as e:
            logger.error(f"Session refresh error: {e}")
            return {
                "success": False,
                "error": _error_message(e)
            }

    # =====================
    # DATA
    # =====================

    async def select_rows(
        self,
        relation: str,
        columns: str = "*",
        order_by: Optional[str] = None,
        descending: bool = False,
        limit: Optional[int] = None
    ) -> dict:
        """
        Select rows from a table or view

        Args:
            relation: Table or view name
            columns: PostgREST column list
            order_by: Column to order on
            descending: Order direction
            limit: Maximum rows

        Returns:
            dict: Rows or the query error
        """
        client = self._require_client()

        def _run():
            query = client.table(relation).select(columns)
            if order_by:
                query = query.order(order_by, desc=descending)
            if limit is not None:
                query = query.limit(limit)
            return query.execute()

        try:
            response = await asyncio.to_thread(_run)
            return {
                "success": True,
                "data": response.data or []
            }

        except Exception as e:
            logger.error(f"Query on {relation} failed: {e}")
            return {
                "success": False,
                "error": _error_message(e)
            }

    async def rpc(self, function: str, params: Optional[Dict[str, Any]] = None) -> dict:
        """
        Invoke a database function

        Args:
            function: Function name
            params: Named arguments

        Returns:
            dict: Function result or the call error
        """
        client = self._require_client()

        try:
            response = await asyncio.to_thread(lambda: client.rpc(function, params or {}).execute())
            return {
                "success": True,
                "data": response.data
            }

        except Exception as e:
            logger.error(f"RPC {function} failed: {e}")
            return {
                "success": False,
                "error": _error_message(e)
            }


# Global Supabase client instance
_supabase_client: Optional[SupabaseClient] = None


def get_supabase_client() -> SupabaseClient:
    """Get Supabase client instance"""
    global _supabase_client
    if _supabase_client is None:
        _supabase_client = SupabaseClient()
    return _supabase_client
