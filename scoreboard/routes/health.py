"""
Health check routes
"""

from datetime import datetime, timezone
from fastapi import APIRouter, HTTPException, status
import logging

from scoreboard.services.setup_sql import LEADERBOARD_VIEW
from scoreboard.utils.config import get_app_config
from scoreboard.utils.dependencies import SupabaseDep

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/health")
async def health_check():
    """Service health check"""
    app_config = get_app_config()
    return {
        "status": "healthy",
        "service": app_config.service_name,
        "version": app_config.service_version,
        "timestamp": datetime.now(timezone.utc).isoformat()
    }


@router.get("/health/supabase")
async def supabase_health_check(supabase: SupabaseDep):
    """Supabase connection health check"""
    if not supabase.is_available():
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Supabase client not available"
        )

    probe = await supabase.select_rows(LEADERBOARD_VIEW, "id", limit=1)
    return {
        "status": "healthy",
        "supabase": "connected",
        "leaderboard_view": "available" if probe['success'] else "missing"
    }
