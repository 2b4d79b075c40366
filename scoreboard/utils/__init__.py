"""
Utility modules for scoreboard service
"""
