"""
Business services for scoreboard service
"""
