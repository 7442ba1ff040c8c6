"""
Round results and leaderboard ranking engine.

Decides round winners, persists per-player round outcomes and ranks
leaderboards with tie-aware competition ranks.
"""

__version__ = "1.0.0"
