"""
Engine-wide constants for the round results and leaderboard engine.

This module contains the magic numbers and lookup tables used throughout
the codebase to improve maintainability and clarity.
"""

class LevelConstants:
    """Player level ranges, inclusive on both ends."""
    
    LEVEL_RANGES = [
        (0.0, 0.99, "Initiation"),
        (1.0, 1.49, "Beginner"),
        (1.5, 2.4, "Initiation Intermediate"),
        (2.5, 3.4, "Intermediate"),
        (3.5, 4.4, "Intermediate High"),
        (4.5, 5.4, "Intermediate Advanced"),
        (5.5, 5.6, "Competition"),
        (5.7, 7.0, "Professional"),
    ]
    
    # Returned for levels falling between or outside the ranges
    FALLBACK_LEVEL_NAME = "Beginner"

class LeaderboardConstants:
    """Constants for leaderboard requests."""
    
    LEADERBOARD_TYPES = ["level", "social", "games"]
    LEADERBOARD_SCOPES = ["global", "city"]
    
    # Games leaderboard time periods, mapped to trailing window in days
    TIME_PERIODS = {
        "10": 10,
        "30": 30,
        "all": None,
    }
    
    DEFAULT_TIME_PERIOD = "all"
