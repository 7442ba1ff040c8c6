"""
Services package for the round results and leaderboard engine.
"""

from .base import BaseService
from .leaderboard import LeaderboardService
from .round_outcomes import RoundOutcomeService

__all__ = ['BaseService', 'LeaderboardService', 'RoundOutcomeService']
