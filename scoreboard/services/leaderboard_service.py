"""
Leaderboard Service
Reads point totals from Supabase, ranks them, and mutates points through RPC
"""

from typing import Dict, Iterable, List, Optional
import logging

from fastapi import status

from scoreboard.schemas.leaderboard import LeaderboardEntry, RankTier
from scoreboard.services.setup_sql import (
    LEADERBOARD_VIEW,
    CREATE_POINTS_TABLE_RPC,
    CREATE_VIEW_RPC,
    ADD_POINTS_RPC,
)
from scoreboard.utils.notifications import NotificationException, success
from scoreboard.utils.supabase_client import SupabaseClient

logger = logging.getLogger(__name__)

# Quick adjustments offered on the admin panel
ADMIN_POINT_PRESETS = [-1, 1, -5, 5, -10, 10, 2]

EMPTY_LEADERBOARD_MESSAGE = "No users on the leaderboard yet. Be the first to earn points!"
NAME_FALLBACK_LENGTH = 8

_TIERS = {1: RankTier.GOLD, 2: RankTier.SILVER, 3: RankTier.BRONZE}


def rank_tier(rank: int) -> RankTier:
    return _TIERS.get(rank, RankTier.DEFAULT)


def rank_entries(rows: Iterable[Dict], current_user_id: Optional[str] = None) -> List[LeaderboardEntry]:
    """
    Assign 1-based ranks by descending points

    Ties keep the order the rows arrived in. Rows without a name show the
    first characters of their id instead.
    """
    ordered = sorted(rows, key=lambda row: int(row.get('points') or 0), reverse=True)

    entries = []
    for index, row in enumerate(ordered):
        user_id = str(row['id'])
        rank = index + 1
        entries.append(LeaderboardEntry(
            id=user_id,
            name=row.get('name') or user_id[:NAME_FALLBACK_LENGTH],
            points=int(row.get('points') or 0),
            rank=rank,
            tier=rank_tier(rank),
            is_current_user=current_user_id is not None and user_id == current_user_id
        ))
    return entries


class LeaderboardService:
    """Leaderboard reads and point mutations"""

    @staticmethod
    async def ensure_view(supabase: SupabaseClient) -> bool:
        """
        Make sure the leaderboard view exists

        Probes the view first; when that fails, asks the database to create
        the points table and then the view. Creation failures only log a
        warning since they need the setup SQL to be run by hand.

        Returns:
            bool: True if the view answered the probe
        """
        probe = await supabase.select_rows(LEADERBOARD_VIEW, "id", limit=1)
        if probe['success']:
            return True

        logger.info(f"{LEADERBOARD_VIEW} not reachable, attempting to create it")

        table_result = await supabase.rpc(CREATE_POINTS_TABLE_RPC)
        if not table_result['success']:
            logger.warning(
                f"Could not create points table: {table_result['error']}. "
                f"Run the setup SQL in the Supabase dashboard."
            )

        view_result = await supabase.rpc(CREATE_VIEW_RPC)
        if not view_result['success']:
            logger.warning(
                f"Could not create {LEADERBOARD_VIEW} view: {view_result['error']}. "
                f"Run the setup SQL in the Supabase dashboard."
            )

        return False

    @staticmethod
    async def fetch_leaderboard(
        supabase: SupabaseClient,
        current_user_id: Optional[str] = None
    ) -> List[LeaderboardEntry]:
        """Fetch all point totals and rank them"""
        await LeaderboardService.ensure_view(supabase)

        result = await supabase.select_rows(
            LEADERBOARD_VIEW,
            "id, name, points",
            order_by="points",
            descending=True
        )

        if not result['success']:
            logger.error(f"Error fetching leaderboard: {result['error']}")
            raise NotificationException(
                status_code=status.HTTP_502_BAD_GATEWAY,
                title="Failed to load leaderboard",
                description="Could not retrieve the leaderboard data. Please try again."
            )

        return rank_entries(result['data'], current_user_id)

    @staticmethod
    async def add_points(supabase: SupabaseClient, user: Optional[Dict], points: int) -> Dict:
        """
        Award points to the signed-in user

        Args:
            supabase: Supabase client wrapper
            user: Current user, None when not signed in
            points: Positive amount to add

        Returns:
            dict: Change summary with notification
        """
        if not user:
            raise NotificationException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                title="Not authenticated",
                description="You must be logged in to add points.",
                headers={"WWW-Authenticate": "Bearer"}
            )

        if points < 1:
            raise NotificationException(
                status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
                title="Failed to add points",
                description="Points must be at least 1."
            )

        table_result = await supabase.rpc(CREATE_POINTS_TABLE_RPC)
        if not table_result['success']:
            logger.error(f"Error creating points table: {table_result['error']}")

        result = await supabase.rpc(ADD_POINTS_RPC, {
            'user_uuid': user['id'],
            'points_to_add': points
        })

        if not result['success']:
            raise NotificationException(
                status_code=status.HTTP_502_BAD_GATEWAY,
                title="Failed to add points",
                description="An error occurred while adding points. Please try again."
            )

        logger.info(f"Added {points} points to user {user['id']}")
        return {
            'success': True,
            'user_id': user['id'],
            'change': points,
            'notification': success("Points added", f"{points} points have been added to your account.")
        }

    @staticmethod
    async def adjust_points(supabase: SupabaseClient, admin: Dict, user_id: str, delta: int) -> Dict:
        """
        Add or deduct points on any user's total

        The caller must already have been checked as an admin.
        """
        result = await supabase.rpc(ADD_POINTS_RPC, {
            'user_uuid': user_id,
            'points_to_add': delta
        })

        if not result['success']:
            raise NotificationException(
                status_code=status.HTTP_502_BAD_GATEWAY,
                title="Failed to update points",
                description="An error occurred while updating points. Please try again."
            )

        direction = "added to" if delta >= 0 else "deducted from"
        logger.info(f"Admin {admin.get('email')} changed points of {user_id} by {delta}")
        return {
            'success': True,
            'user_id': user_id,
            'change': delta,
            'notification': success("Points updated", f"{abs(delta)} points have been {direction} the user.")
        }
