"""
Round Outcome Service

Persists each player's aggregate performance in a round as a RoundOutcome and
resolves round winners for display.

Both operations run inside the caller's session. This service never begins,
commits or rolls back a transaction; database errors propagate unchanged so
the enclosing transaction fails as a whole.
"""

from typing import List, Optional
from sqlalchemy.ext.asyncio import AsyncSession

from arena.data_models.round import RoundSnapshot
from arena.database.models import WinnerOfRound
from arena.database.repositories import RoundOutcomeRepository, RoundRepository
from arena.utils.exceptions import RoundNotFoundError
from arena.utils.logger import setup_logger
from arena.utils.round_scores import get_player_scores_for_round
from arena.utils.round_winner import RoundWinnerStrategyFactory, calculate_round_winner

logger = setup_logger(__name__)


class RoundOutcomeService:
    """Service for per-player round outcomes and round winners."""

    def __init__(
        self,
        round_repository: Optional[RoundRepository] = None,
        outcome_repository: Optional[RoundOutcomeRepository] = None
    ):
        self.round_repository = round_repository or RoundRepository()
        self.outcome_repository = outcome_repository or RoundOutcomeRepository()

    async def apply_round_outcomes(
        self,
        game_id: str,
        round_id: str,
        winner_of_round: WinnerOfRound,
        session: AsyncSession,
        strict: bool = False
    ) -> None:
        """
        Recalculate and upsert the outcome of every player in a round.

        This method:
        1. Reloads the round with matches, teams, players and sets
        2. Aggregates matches won and points scored per player
        3. Upserts one RoundOutcome per player, creating it with
           level_change = 0 or overwriting only its metadata

        Args:
            game_id: Game owning the round, used for logging
            round_id: Round to recalculate
            winner_of_round: Strategy the round is decided by; sets write order
            session: Caller's session, committed by the caller
            strict: Raise RoundNotFoundError instead of returning when the
                round does not exist
        """
        logger.info(f"Updating round outcomes for game {game_id}, round {round_id}")

        round_snapshot = await self.round_repository.load_round(session, round_id)
        if round_snapshot is None:
            if strict:
                raise RoundNotFoundError(round_id)
            logger.warning(f"Round {round_id} of game {game_id} not found, no outcomes updated")
            return

        player_scores = get_player_scores_for_round(round_snapshot)

        strategy = RoundWinnerStrategyFactory.coerce(winner_of_round)
        if strategy == WinnerOfRound.BY_MATCHES_WON:
            sort_key = lambda score: score.matches_won
        else:
            sort_key = lambda score: score.total_scores
        sorted_players = sorted(player_scores.values(), key=sort_key, reverse=True)

        for player_score in sorted_players:
            await self.outcome_repository.upsert_metadata(session, round_id, player_score)
            logger.debug(
                f"Round {round_id} outcome for player {player_score.id}: "
                f"matchesWon={player_score.matches_won}, totalScores={player_score.total_scores}"
            )

        logger.info(
            f"Updated {len(sorted_players)} round outcomes for game {game_id}, round {round_id}"
        )

    async def resolve_round_winner(
        self,
        round_id: str,
        session: AsyncSession,
        winner_of_round: Optional[WinnerOfRound] = None
    ) -> List[str]:
        """
        Load a round and determine its winning team id(s).

        Args:
            round_id: Round to resolve
            session: Caller's session
            winner_of_round: Strategy override; defaults to the game's setting

        Returns:
            Winning team ids, empty when the round does not exist or has no
            complete matches
        """
        round_obj = await self.round_repository.get_round(session, round_id)
        if round_obj is None:
            logger.warning(f"Round {round_id} not found, no winner resolved")
            return []

        if winner_of_round is None:
            winner_of_round = round_obj.game.winner_of_round if round_obj.game else None

        winners = calculate_round_winner(RoundSnapshot.from_orm(round_obj), winner_of_round)
        logger.info(f"Round {round_id} winners: {', '.join(winners) if winners else 'none'}")
        return winners
