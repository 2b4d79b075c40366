"""
FastAPI Dependencies
Supabase client and authentication dependencies
"""

from fastapi import Depends, HTTPException, status, Header
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from typing import Optional, Annotated
import logging

from scoreboard.services.auth_service import AuthService
from scoreboard.utils.notifications import NotificationException
from scoreboard.utils.supabase_client import SupabaseClient, get_supabase_client

logger = logging.getLogger(__name__)

# Security scheme for Supabase access tokens
security = HTTPBearer()

SupabaseDep = Annotated[SupabaseClient, Depends(get_supabase_client)]


async def get_access_token(
    credentials: HTTPAuthorizationCredentials = Depends(security)
) -> str:
    return credentials.credentials


async def get_current_user(
    supabase: SupabaseDep,
    token: str = Depends(get_access_token)
) -> dict:
    """
    Get current authenticated user from a Supabase access token

    Raises:
        HTTPException: If token is invalid or expired
    """
    user = await AuthService.current_user(supabase, token)
    if user:
        return user

    raise HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Invalid or expired token",
        headers={"WWW-Authenticate": "Bearer"},
    )


async def get_admin_user(
    current_user: dict = Depends(get_current_user)
) -> dict:
    """
    Get current user, requiring admin rights

    Raises:
        NotificationException: If the user is not an admin
    """
    if not AuthService.is_admin(current_user):
        logger.warning(f"Non-admin {current_user.get('email')} attempted a points adjustment")
        raise NotificationException(
            status_code=status.HTTP_403_FORBIDDEN,
            title="Not authorized",
            description="Only the admin can modify user points"
        )

    return current_user


async def get_optional_user(
    supabase: SupabaseDep,
    authorization: Optional[str] = Header(None)
) -> Optional[dict]:
    """
    Get optional user (for endpoints that work with or without auth)

    Returns:
        dict or None: User information if authenticated, None otherwise
    """
    if not authorization or not authorization.startswith("Bearer "):
        return None

    token = authorization.split(" ", 1)[1].strip()
    if not token:
        return None

    return await AuthService.current_user(supabase, token)


# Type aliases for cleaner dependency injection
AccessToken = Annotated[str, Depends(get_access_token)]
CurrentUser = Annotated[dict, Depends(get_current_user)]
AdminUser = Annotated[dict, Depends(get_admin_user)]
OptionalUser = Annotated[Optional[dict], Depends(get_optional_user)]
