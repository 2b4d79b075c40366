"""
API routes for scoreboard service
"""

from . import auth, health, leaderboard, setup

__all__ = ["auth", "health", "leaderboard", "setup"]
