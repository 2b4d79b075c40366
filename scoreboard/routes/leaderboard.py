"""
Leaderboard Routes
Ranked point totals, self-awarded points and admin adjustments
"""

from fastapi import APIRouter
from uuid import UUID
import logging

from scoreboard.schemas.leaderboard import (
    LeaderboardResponse, AddPointsSchema, AdjustPointsSchema,
    PointsChangeResponse, AdminPanelResponse
)
from scoreboard.services.auth_service import AuthService
from scoreboard.services.leaderboard_service import (
    LeaderboardService, ADMIN_POINT_PRESETS, EMPTY_LEADERBOARD_MESSAGE
)
from scoreboard.utils.config import get_app_config
from scoreboard.utils.dependencies import SupabaseDep, CurrentUser, AdminUser, OptionalUser

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("", response_model=LeaderboardResponse)
async def get_leaderboard(supabase: SupabaseDep, user: OptionalUser):
    """
    Ranked leaderboard

    Ranks are recomputed on every request. The caller's own row is flagged
    when a valid token is sent.
    """
    entries = await LeaderboardService.fetch_leaderboard(supabase, user['id'] if user else None)
    return {
        "entries": entries,
        "message": None if entries else EMPTY_LEADERBOARD_MESSAGE
    }


@router.post("/points", response_model=PointsChangeResponse)
async def add_points(payload: AddPointsSchema, current_user: CurrentUser, supabase: SupabaseDep):
    points = payload.points if payload.points is not None else get_app_config().default_points_award
    return await LeaderboardService.add_points(supabase, current_user, points)


@router.get("/admin", response_model=AdminPanelResponse)
async def get_admin_panel(current_user: CurrentUser, supabase: SupabaseDep):
    """Admin view of the leaderboard with the point adjustment presets"""
    if not AuthService.is_admin(current_user):
        return {
            "is_admin": False,
            "presets": [],
            "entries": [],
            "message": "Only the admin can modify user points"
        }

    entries = await LeaderboardService.fetch_leaderboard(supabase, current_user['id'])
    return {
        "is_admin": True,
        "presets": ADMIN_POINT_PRESETS,
        "entries": entries,
        "message": None if entries else "No users found in the leaderboard"
    }


@router.post("/admin/users/{user_id}/points", response_model=PointsChangeResponse)
async def adjust_user_points(
    user_id: UUID,
    payload: AdjustPointsSchema,
    admin: AdminUser,
    supabase: SupabaseDep
):
    return await LeaderboardService.adjust_points(supabase, admin, str(user_id), payload.delta)
