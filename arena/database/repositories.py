"""
Persistence collaborators of the results engine.

Every method takes the caller's AsyncSession and never commits, rolls back
or begins a transaction, so it can take part in an enclosing transaction.

- RoundRepository: loads a round with matches, teams, players and sets
- RoundOutcomeRepository: upserts per-player round outcomes
- ParticipationRepository: counts finalized participations per user
"""

import json
from datetime import datetime
from typing import Dict, Iterable, List, Optional
from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from arena.data_models.round import PlayerScore, RoundSnapshot
from arena.database.models import (
    Game, GameOutcome, GameParticipant, LevelChangeEvent, LevelChangeEventType,
    Match, ResultsStatus, Round, RoundOutcome, Team, User
)


class RoundRepository:
    """Loads rounds as immutable snapshots."""

    async def get_round(self, session: AsyncSession, round_id: str) -> Optional[Round]:
        """Get a round with matches, teams (with players) and sets eagerly loaded"""
        result = await session.execute(
            select(Round)
            .options(
                selectinload(Round.game),
                selectinload(Round.matches).selectinload(Match.teams).selectinload(Team.players),
                selectinload(Round.matches).selectinload(Match.sets),
            )
            .where(Round.id == round_id)
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    async def load_round(self, session: AsyncSession, round_id: str) -> Optional[RoundSnapshot]:
        """Load a round snapshot, or None when the round does not exist"""
        round_obj = await self.get_round(session, round_id)
        if round_obj is None:
            return None
        return RoundSnapshot.from_orm(round_obj)


class RoundOutcomeRepository:
    """Create-or-update store for RoundOutcome rows keyed by (round_id, user_id)."""

    async def get_outcome(self, session: AsyncSession, round_id: str, user_id: str) -> Optional[RoundOutcome]:
        result = await session.execute(
            select(RoundOutcome).where(
                RoundOutcome.round_id == round_id,
                RoundOutcome.user_id == user_id
            )
        )
        return result.scalar_one_or_none()

    async def get_outcomes_for_round(self, session: AsyncSession, round_id: str) -> List[RoundOutcome]:
        result = await session.execute(
            select(RoundOutcome)
            .where(RoundOutcome.round_id == round_id)
            .order_by(RoundOutcome.id)
        )
        return list(result.scalars().all())

    async def upsert_metadata(
        self,
        session: AsyncSession,
        round_id: str,
        player_score: PlayerScore
    ) -> RoundOutcome:
        """
        Create or update the outcome of a player in a round.

        A new outcome starts with level_change = 0. An existing outcome only
        has its metadata overwritten; level_change is left untouched.

        Args:
            session: Caller's session
            round_id: Round the outcome belongs to
            player_score: Aggregated score of the player in the round

        Returns:
            The created or updated RoundOutcome (flushed, not committed)
        """
        metadata = json.dumps(player_score.to_metadata())

        outcome = await self.get_outcome(session, round_id, player_score.id)
        if outcome:
            outcome.outcome_metadata = metadata
        else:
            outcome = RoundOutcome(
                round_id=round_id,
                user_id=player_score.id,
                level_change=0,
                outcome_metadata=metadata
            )
            session.add(outcome)

        await session.flush()
        return outcome


class ParticipationRepository:
    """Read-only counting over game participation records."""

    async def count_participations(
        self,
        session: AsyncSession,
        user_ids: Iterable[str],
        city_id: Optional[str] = None,
        since: Optional[datetime] = None,
        until: Optional[datetime] = None
    ) -> Dict[str, int]:
        """
        Count finalized games each user actively played.

        A participation counts when the game's results are FINAL, the
        participant was playing, the game started in [since, until) and,
        if city_id is given, the game belongs to that city.

        Returns:
            Dictionary mapping every requested user id to its count
        """
        user_ids = list(dict.fromkeys(user_ids))
        counts = {user_id: 0 for user_id in user_ids}
        if not user_ids:
            return counts

        conditions = [
            GameParticipant.user_id.in_(user_ids),
            GameParticipant.is_playing == True,
            Game.results_status == ResultsStatus.FINAL,
        ]
        if since is not None:
            conditions.append(Game.start_time >= since)
        if until is not None:
            conditions.append(Game.start_time < until)
        if city_id is not None:
            conditions.append(Game.city_id == city_id)

        result = await session.execute(
            select(GameParticipant.user_id, func.count(GameParticipant.id))
            .join(Game, GameParticipant.game_id == Game.id)
            .where(*conditions)
            .group_by(GameParticipant.user_id)
        )
        for user_id, count in result.all():
            counts[user_id] = count
        return counts


class UserRepository:
    """User lookups for leaderboards."""

    async def get_user(self, session: AsyncSession, user_id: str) -> Optional[User]:
        return await session.get(User, user_id)

    async def get_active_users(
        self,
        session: AsyncSession,
        city_id: Optional[str] = None,
        order_by_field: Optional[str] = None
    ) -> List[User]:
        """
        Get active users, optionally restricted to a city.

        Args:
            order_by_field: 'level' or 'social_level' to sort best first by that
                field, then reliability and total points; None for no ordering
        """
        query = select(User).where(User.is_active == True)
        if city_id is not None:
            query = query.where(User.current_city_id == city_id)
        if order_by_field is not None:
            query = query.order_by(
                getattr(User, order_by_field).desc(),
                User.reliability.desc(),
                User.total_points.desc(),
                User.id
            )
        else:
            query = query.order_by(User.id)

        result = await session.execute(query)
        return list(result.scalars().all())

    async def get_last_rating_changes(
        self,
        session: AsyncSession,
        user_ids: Iterable[str],
        is_social: bool
    ) -> Dict[str, float]:
        """
        Get each user's most recent rating change.

        Level leaderboards use the latest game outcome, social leaderboards
        the latest social level change event. Users without history are absent.
        """
        user_ids = list(user_ids)
        changes: Dict[str, float] = {}
        if not user_ids:
            return changes

        if is_social:
            result = await session.execute(
                select(LevelChangeEvent)
                .where(
                    LevelChangeEvent.user_id.in_(user_ids),
                    LevelChangeEvent.event_type.in_([
                        LevelChangeEventType.SOCIAL_BAR,
                        LevelChangeEventType.SOCIAL_PARTICIPANT
                    ])
                )
                .order_by(LevelChangeEvent.created_at.desc(), LevelChangeEvent.id.desc())
            )
            for event in result.scalars().all():
                changes.setdefault(event.user_id, event.level_change)
        else:
            result = await session.execute(
                select(GameOutcome)
                .where(GameOutcome.user_id.in_(user_ids))
                .order_by(GameOutcome.created_at.desc(), GameOutcome.id.desc())
            )
            for outcome in result.scalars().all():
                changes.setdefault(outcome.user_id, outcome.level_change)

        return changes
