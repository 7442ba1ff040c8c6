"""
Leaderboard service

Builds level, social and games leaderboards with competition ranks, and
provides the windowed activity count used to enrich leaderboard rows.
Reads tolerate a slightly stale snapshot and use their own short-lived session.
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Dict, Iterable, List, Optional, Tuple

from arena.config import Config
from arena.constants import LeaderboardConstants
from arena.data_models.leaderboard import LeaderboardCandidate, LeaderboardContext, LeaderboardEntry
from arena.database.repositories import ParticipationRepository, UserRepository
from arena.services.base import BaseService
from arena.utils.exceptions import InvalidLeaderboardParameterError, MissingCityError, UserNotFoundError
from arena.utils.levels import format_win_rate, get_level_name
from arena.utils.ranking import LeaderboardType, RankingUtility

logger = logging.getLogger(__name__)


def utcnow() -> datetime:
    """Current UTC time as a naive datetime, matching stored timestamps."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


class LeaderboardService(BaseService):
    """Service for leaderboard ranking and activity enrichment."""

    def __init__(
        self,
        session_factory,
        participation_repository: Optional[ParticipationRepository] = None,
        user_repository: Optional[UserRepository] = None
    ):
        super().__init__(session_factory)
        self.participation_repository = participation_repository or ParticipationRepository()
        self.user_repository = user_repository or UserRepository()

    async def count_recent_participation(
        self,
        user_ids: Iterable[str],
        city_id: Optional[str] = None,
        window_days: Optional[int] = Config.ACTIVITY_WINDOW_DAYS,
        now: Optional[datetime] = None
    ) -> Dict[str, int]:
        """
        Count each user's finalized, actively played games in a trailing window.

        Args:
            user_ids: Users to count for
            city_id: Restrict to games in this city; None for all cities
            window_days: Length of the window [now - window_days, now);
                None counts all time
            now: End of the window, defaults to the current UTC time

        Returns:
            Dictionary mapping every requested user id to its count
        """
        if window_days is not None and window_days <= 0:
            raise ValueError("window_days must be a positive integer")

        since, until = self._window(window_days, now)

        async with self.get_session() as session:
            counts = await self.participation_repository.count_participations(
                session, user_ids, city_id=city_id, since=since, until=until
            )

        logger.debug(f"Counted participation for {len(counts)} users (city={city_id}, window={window_days})")
        return counts

    @staticmethod
    def _window(window_days: Optional[int], now: Optional[datetime]) -> Tuple[Optional[datetime], Optional[datetime]]:
        """Bounds of the half-open window [now - window_days, now), or (None, None) for all time."""
        if window_days is None:
            return None, None
        until = now or utcnow()
        return until - timedelta(days=window_days), until

    def _validate_parameters(self, leaderboard_type: str, scope: str, time_period: str):
        if not RankingUtility.validate_leaderboard_type(leaderboard_type):
            raise InvalidLeaderboardParameterError(
                'leaderboard type', leaderboard_type, LeaderboardConstants.LEADERBOARD_TYPES
            )
        if not RankingUtility.validate_scope(scope):
            raise InvalidLeaderboardParameterError(
                'scope', scope, LeaderboardConstants.LEADERBOARD_SCOPES
            )
        if leaderboard_type == LeaderboardType.GAMES.value and not RankingUtility.validate_time_period(time_period):
            raise InvalidLeaderboardParameterError(
                'time period', time_period, list(LeaderboardConstants.TIME_PERIODS)
            )

    async def get_leaderboard_context(
        self,
        user_id: str,
        leaderboard_type: str = "level",
        scope: str = "global",
        time_period: str = LeaderboardConstants.DEFAULT_TIME_PERIOD,
        now: Optional[datetime] = None
    ) -> LeaderboardContext:
        """
        Build a full leaderboard and the requesting user's rank on it.

        Args:
            user_id: Requesting user
            leaderboard_type: 'level', 'social' or 'games'
            scope: 'global' or 'city' (the user's current city)
            time_period: Games leaderboard window, '10', '30' or 'all'
            now: End of the games window, defaults to the current UTC time

        Returns:
            LeaderboardContext with ranked entries and the user's rank, which is
            one past the last entry when the user is not on the board
        """
        self._validate_parameters(leaderboard_type, scope, time_period)
        board_type = LeaderboardType(leaderboard_type)
        is_social = board_type == LeaderboardType.SOCIAL

        async with self.get_session() as session:
            user = await self.user_repository.get_user(session, user_id)
            if user is None:
                raise UserNotFoundError(user_id)

            city_id = None
            if scope == "city":
                if not user.current_city_id:
                    raise MissingCityError(user_id)
                city_id = user.current_city_id

            if board_type == LeaderboardType.GAMES:
                users = await self.user_repository.get_active_users(session, city_id=city_id)
                since, until = self._window(RankingUtility.get_window_days(time_period), now)
                game_counts = await self.participation_repository.count_participations(
                    session, [u.id for u in users], city_id=city_id, since=since, until=until
                )
                candidates = RankingUtility.sort_candidates(
                    [LeaderboardCandidate.from_user(u, game_counts.get(u.id, 0)) for u in users],
                    board_type
                )
            else:
                order_by_field = 'social_level' if is_social else 'level'
                users = await self.user_repository.get_active_users(
                    session, city_id=city_id, order_by_field=order_by_field
                )
                candidates = [LeaderboardCandidate.from_user(u) for u in users]

            last_changes = await self.user_repository.get_last_rating_changes(
                session, [c.id for c in candidates], is_social
            )

        rank_map = RankingUtility.calculate_ranks(candidates, board_type)
        entries = self._build_entries(candidates, rank_map, last_changes)
        user_rank = rank_map.get(user_id, len(candidates) + 1)

        logger.info(
            f"Built {leaderboard_type} leaderboard ({scope}, {time_period}) with "
            f"{len(entries)} entries, user {user_id} rank {user_rank}"
        )

        return LeaderboardContext(
            entries=entries,
            user_rank=user_rank,
            leaderboard_type=leaderboard_type,
            scope=scope,
            time_period=time_period
        )

    @staticmethod
    def _build_entries(
        candidates: List[LeaderboardCandidate],
        rank_map: Dict[str, int],
        last_changes: Dict[str, float]
    ) -> List[LeaderboardEntry]:
        return [
            LeaderboardEntry(
                rank=rank_map[c.id],
                candidate=c,
                level_name=get_level_name(c.level),
                win_rate=format_win_rate(c.games_won, c.games_played),
                last_rating_change=last_changes.get(c.id)
            )
            for c in candidates
        ]
