"""
Leaderboard data models for ranking and leaderboard rendering.

Provides data transfer objects for ranking candidates and leaderboard rows.
"""

from dataclasses import dataclass
from typing import List, Optional


@dataclass(frozen=True)
class LeaderboardCandidate:
    """User considered for a leaderboard, carrying every comparison key."""
    id: str
    level: float = 0.0
    social_level: float = 0.0
    reliability: float = 0.0
    total_points: int = 0
    games_count: int = 0
    games_played: int = 0
    games_won: int = 0
    first_name: Optional[str] = None
    last_name: Optional[str] = None

    @classmethod
    def from_user(cls, user, games_count: int = 0) -> 'LeaderboardCandidate':
        return cls(
            id=user.id,
            level=user.level,
            social_level=user.social_level,
            reliability=user.reliability,
            total_points=user.total_points,
            games_count=games_count,
            games_played=user.games_played,
            games_won=user.games_won,
            first_name=user.first_name,
            last_name=user.last_name,
        )


@dataclass(frozen=True)
class LeaderboardEntry:
    """Single leaderboard row."""
    rank: int
    candidate: LeaderboardCandidate
    level_name: str
    win_rate: str  # Percentage with two decimals, e.g. '66.67'
    last_rating_change: Optional[float] = None

    @property
    def id(self) -> str:
        return self.candidate.id


@dataclass(frozen=True)
class LeaderboardContext:
    """Full leaderboard plus the requesting user's position."""
    entries: List[LeaderboardEntry]
    user_rank: int
    leaderboard_type: str
    scope: str
    time_period: str
