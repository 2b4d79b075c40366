"""
Pydantic schemas for scoreboard service
"""
