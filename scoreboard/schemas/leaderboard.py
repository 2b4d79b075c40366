"""
Leaderboard schemas
"""

from typing import List, Optional
from pydantic import BaseModel, Field, field_validator
from enum import Enum

from scoreboard.utils.notifications import Notification


class RankTier(str, Enum):
    """Badge shown next to a rank"""
    GOLD = "gold"
    SILVER = "silver"
    BRONZE = "bronze"
    DEFAULT = "default"


class LeaderboardEntry(BaseModel):
    id: str
    name: str
    points: int
    rank: int
    tier: RankTier = RankTier.DEFAULT
    is_current_user: bool = False


class LeaderboardResponse(BaseModel):
    entries: List[LeaderboardEntry]
    message: Optional[str] = None


class AddPointsSchema(BaseModel):
    """Points the signed-in user awards themselves"""
    points: Optional[int] = Field(None, ge=1)


class AdjustPointsSchema(BaseModel):
    """Admin change to another user's total; negative deducts"""
    delta: int

    @field_validator('delta')
    @classmethod
    def validate_delta(cls, v):
        if v == 0:
            raise ValueError('Point change must not be zero')
        return v


class PointsChangeResponse(BaseModel):
    success: bool = True
    user_id: str
    change: int
    notification: Notification


class AdminPanelResponse(BaseModel):
    is_admin: bool
    presets: List[int]
    entries: List[LeaderboardEntry]
    message: Optional[str] = None
