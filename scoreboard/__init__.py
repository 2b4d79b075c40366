"""
Scoreboard - user authentication and points leaderboard backed by Supabase
"""

__version__ = "1.0.0"
