"""
Data transfer objects for rounds and leaderboards.
"""
