"""
Authentication Service
Sign up, sign in and password reset delegated to Supabase Auth
"""

from typing import Dict, Optional
import logging

from scoreboard.schemas.auth import UserCreateSchema
from scoreboard.utils.config import get_app_config
from scoreboard.utils.notifications import success, failure
from scoreboard.utils.supabase_client import SupabaseClient

logger = logging.getLogger(__name__)


class AuthService:
    """User authentication service"""

    @staticmethod
    async def register(supabase: SupabaseClient, user_data: UserCreateSchema) -> Dict:
        """
        Register new user

        Args:
            supabase: Supabase client wrapper
            user_data: Sign-up form data

        Returns:
            dict: Registration result with user info and notification
        """
        result = await supabase.sign_up(user_data.email, user_data.password, user_data.name)

        if not result['success']:
            return {
                'success': False,
                'error': result['error'],
                'notification': failure("Registration failed", result['error'])
            }

        logger.info(f"User registered: {user_data.email}")
        return {
            'success': True,
            'user': result['user'],
            'session': result.get('session'),
            'notification': success(
                "Registration successful",
                "Your account has been created. Please check your email for verification."
            )
        }

    @staticmethod
    async def login(supabase: SupabaseClient, email: str, password: str) -> Dict:
        result = await supabase.sign_in(email, password)

        if not result['success']:
            return {
                'success': False,
                'error': result['error'],
                'notification': failure("Login failed", result['error'])
            }

        return {
            'success': True,
            'user': result['user'],
            'session': result['session'],
            'notification': success("Login successful", "Welcome back!")
        }

    @staticmethod
    async def logout(supabase: SupabaseClient, access_token: str) -> Dict:
        result = await supabase.sign_out(access_token)

        if not result['success']:
            return {
                'success': False,
                'error': result['error'],
                'notification': failure("Logout failed", result['error'])
            }

        return {
            'success': True,
            'notification': success("Logged out", "You have been logged out successfully.")
        }

    @staticmethod
    async def request_password_reset(supabase: SupabaseClient, email: str) -> Dict:
        """
        Send a password reset link

        The link lands on the configured reset page, which posts the recovery
        tokens back to complete_password_reset.
        """
        redirect_to = get_app_config().password_reset_redirect_url
        result = await supabase.reset_password(email, redirect_to)

        if not result['success']:
            return {
                'success': False,
                'error': result['error'],
                'notification': failure("Password reset failed", result['error'])
            }

        return {
            'success': True,
            'notification': success(
                "Password reset link sent",
                "Please check your email for the password reset link."
            )
        }

    @staticmethod
    async def complete_password_reset(
        supabase: SupabaseClient,
        access_token: str,
        refresh_token: str,
        new_password: str
    ) -> Dict:
        result = await supabase.update_password(access_token, refresh_token, new_password)

        if not result['success']:
            return {
                'success': False,
                'error': result['error'],
                'notification': failure("Password reset failed", result['error'])
            }

        return {
            'success': True,
            'user': result['user'],
            'notification': success("Password updated", "You can now sign in with your new password.")
        }

    @staticmethod
    async def refresh(supabase: SupabaseClient, refresh_token: str) -> Dict:
        result = await supabase.refresh_session(refresh_token)

        if not result['success']:
            return {
                'success': False,
                'error': result['error'],
                'notification': failure("Session expired", "Please sign in again.")
            }

        return {
            'success': True,
            'session': result['session']
        }

    @staticmethod
    async def current_user(supabase: SupabaseClient, access_token: str) -> Optional[Dict]:
        """Resolve an access token to {id, email, name, email_confirmed}, or None"""
        result = await supabase.get_user(access_token)
        if not result['success']:
            return None
        return result['user']

    @staticmethod
    def is_admin(user: Optional[Dict]) -> bool:
        """Check the user's email against the configured admin list"""
        if not user or not user.get('email'):
            return False
        return user['email'].lower() in get_app_config().get_admin_emails()
