"""
Shared ranking utilities for leaderboards.

Ranks are standard competition ranks ("1224"): tied candidates share a rank
and the next distinct candidate skips ahead by the size of the tie group.
"""

from collections.abc import Mapping
from enum import Enum
from typing import Any, Dict, List, Optional, Sequence, Tuple
from arena.constants import LeaderboardConstants
from arena.utils.logger import log_call, setup_logger

logger = setup_logger(__name__)


class LeaderboardType(Enum):
    LEVEL = "level"
    SOCIAL = "social"
    GAMES = "games"


class RankingUtility:
    """Tie-aware ranking over pre-sorted leaderboard candidates."""

    # Fields that must all be equal for two candidates to tie, in sort precedence
    _TIE_FIELDS = {
        LeaderboardType.GAMES: ('games_count', 'reliability', 'level', 'total_points'),
        LeaderboardType.LEVEL: ('level', 'reliability', 'total_points'),
        LeaderboardType.SOCIAL: ('social_level', 'reliability', 'total_points'),
    }

    @staticmethod
    def _field(candidate: Any, name: str) -> Any:
        if isinstance(candidate, Mapping):
            return candidate.get(name)
        return getattr(candidate, name, None)

    @staticmethod
    def _candidate_id(candidate: Any) -> Any:
        return RankingUtility._field(candidate, 'id')

    @classmethod
    def get_leaderboard_type(cls, leaderboard_type: Any) -> LeaderboardType:
        if isinstance(leaderboard_type, LeaderboardType):
            return leaderboard_type
        return LeaderboardType(leaderboard_type)

    @classmethod
    def get_tie_fields(cls, leaderboard_type: Any) -> Tuple[str, ...]:
        return cls._TIE_FIELDS[cls.get_leaderboard_type(leaderboard_type)]

    @classmethod
    def comparison_key(cls, candidate: Any, leaderboard_type: Any) -> Tuple:
        """Tuple of the comparison fields of a candidate for the given mode."""
        return tuple(cls._field(candidate, name) for name in cls.get_tie_fields(leaderboard_type))

    @classmethod
    def is_tie(cls, first: Any, second: Any, leaderboard_type: Any) -> bool:
        return cls.comparison_key(first, leaderboard_type) == cls.comparison_key(second, leaderboard_type)

    @classmethod
    @log_call(logger)
    def calculate_ranks(cls, candidates: Sequence[Any], leaderboard_type: Any) -> Dict[Any, int]:
        """
        Assign competition ranks to an already sorted candidate sequence.

        The input must be sorted by the same keys used for tie comparison.
        Misordered input is not detected and yields non-monotonic ranks.

        Args:
            candidates: Candidates sorted best first (objects or mappings)
            leaderboard_type: LeaderboardType or its value ('level', 'social', 'games')

        Returns:
            Dictionary mapping candidate id to rank
        """
        leaderboard_type = cls.get_leaderboard_type(leaderboard_type)
        rank_map: Dict[Any, int] = {}
        if not candidates:
            return rank_map

        current_rank = 1
        i = 0
        while i < len(candidates):
            current = candidates[i]
            group_size = 1
            while (i + group_size < len(candidates)
                   and cls.is_tie(current, candidates[i + group_size], leaderboard_type)):
                group_size += 1

            for j in range(group_size):
                rank_map[cls._candidate_id(candidates[i + j])] = current_rank

            i += group_size
            current_rank += group_size

        return rank_map

    @classmethod
    def sort_candidates(cls, candidates: Sequence[Any], leaderboard_type: Any) -> List[Any]:
        """
        Sort candidates best first by the mode's comparison fields, all descending.

        The sort is stable, so fully tied candidates keep their input order.
        """
        return sorted(
            candidates,
            key=lambda c: cls.comparison_key(c, leaderboard_type),
            reverse=True
        )

    @staticmethod
    def validate_leaderboard_type(leaderboard_type: str) -> bool:
        """Validate leaderboard type against allowed values."""
        return leaderboard_type in LeaderboardConstants.LEADERBOARD_TYPES

    @staticmethod
    def validate_scope(scope: str) -> bool:
        """Validate leaderboard scope against allowed values."""
        return scope in LeaderboardConstants.LEADERBOARD_SCOPES

    @staticmethod
    def validate_time_period(time_period: str) -> bool:
        """Validate games leaderboard time period against allowed values."""
        return time_period in LeaderboardConstants.TIME_PERIODS

    @staticmethod
    def get_window_days(time_period: str) -> Optional[int]:
        """Trailing window in days for a time period, None for all time."""
        return LeaderboardConstants.TIME_PERIODS[time_period]
