"""
Authentication Routes
Sign up, sign in, sign out, password reset and session handling
"""

from fastapi import APIRouter, status
import logging

from scoreboard.schemas.auth import (
    UserCreateSchema, UserLoginSchema, PasswordResetSchema,
    PasswordResetCompleteSchema, RefreshSchema, PasswordStrengthRequest,
    PasswordStrengthSchema, AuthResponseSchema, SessionStatusSchema, UserSchema
)
from scoreboard.services.auth_service import AuthService
from scoreboard.services.password_strength import describe_strength
from scoreboard.utils.dependencies import SupabaseDep, AccessToken, CurrentUser, OptionalUser
from scoreboard.utils.notifications import NotificationException

logger = logging.getLogger(__name__)

router = APIRouter()


def _raise_for_result(result: dict, status_code: int):
    """Turn a failed service result into an error response carrying its notification"""
    if result['success']:
        return
    notification = result['notification']
    raise NotificationException(
        status_code=status_code,
        title=notification.title,
        description=notification.description
    )


@router.post("/register", response_model=AuthResponseSchema, status_code=status.HTTP_201_CREATED)
async def register_user(user_data: UserCreateSchema, supabase: SupabaseDep):
    """
    Register new user

    Supabase sends the verification email; a session is only returned when
    the project does not require email confirmation.
    """
    result = await AuthService.register(supabase, user_data)
    _raise_for_result(result, status.HTTP_400_BAD_REQUEST)
    return result


@router.post("/login", response_model=AuthResponseSchema)
async def login_user(login_data: UserLoginSchema, supabase: SupabaseDep):
    result = await AuthService.login(supabase, login_data.email, login_data.password)
    _raise_for_result(result, status.HTTP_401_UNAUTHORIZED)
    logger.info(f"User logged in: {login_data.email}")
    return result


@router.post("/logout", response_model=AuthResponseSchema)
async def logout_user(token: AccessToken, supabase: SupabaseDep):
    result = await AuthService.logout(supabase, token)
    _raise_for_result(result, status.HTTP_400_BAD_REQUEST)
    return result


@router.post("/password-reset", response_model=AuthResponseSchema)
async def request_password_reset(reset_data: PasswordResetSchema, supabase: SupabaseDep):
    """Send a password reset link to the given email"""
    result = await AuthService.request_password_reset(supabase, reset_data.email)
    _raise_for_result(result, status.HTTP_400_BAD_REQUEST)
    return result


@router.post("/password-reset/complete", response_model=AuthResponseSchema)
async def complete_password_reset(reset_data: PasswordResetCompleteSchema, supabase: SupabaseDep):
    """Set a new password with the tokens carried by the reset link"""
    result = await AuthService.complete_password_reset(
        supabase,
        reset_data.access_token,
        reset_data.refresh_token,
        reset_data.new_password
    )
    _raise_for_result(result, status.HTTP_400_BAD_REQUEST)
    return result


@router.post("/refresh", response_model=AuthResponseSchema)
async def refresh_session(refresh_data: RefreshSchema, supabase: SupabaseDep):
    result = await AuthService.refresh(supabase, refresh_data.refresh_token)
    _raise_for_result(result, status.HTTP_401_UNAUTHORIZED)
    return result


@router.get("/me", response_model=UserSchema)
async def get_me(current_user: CurrentUser):
    return current_user


@router.get("/session", response_model=SessionStatusSchema)
async def get_session_status(user: OptionalUser):
    """Signed-in callers are sent on to the home page instead of the auth forms"""
    if user:
        return {"authenticated": True, "user": user, "redirect_to": "/"}
    return {"authenticated": False}


@router.post("/password-strength", response_model=PasswordStrengthSchema)
async def password_strength(payload: PasswordStrengthRequest):
    return describe_strength(payload.password)
