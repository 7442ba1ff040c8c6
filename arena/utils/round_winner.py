"""
Round Winner Strategy Pattern

Each strategy picks the ranking key a round is decided by. Every team sharing
the best value wins, so a round may have several co-winners.
"""

from abc import ABC, abstractmethod
from typing import Dict, List, Optional
from arena.config import Config
from arena.data_models.round import RoundSnapshot, TeamScore
from arena.database.models import WinnerOfRound
from arena.utils.round_scores import get_team_scores_for_round
from arena.utils.logger import setup_logger

logger = setup_logger(__name__)

DEFAULT_WINNER_OF_ROUND = WinnerOfRound.__members__.get(
    Config.DEFAULT_WINNER_OF_ROUND.upper(), WinnerOfRound.BY_MATCHES_WON
)

class RoundWinnerStrategy(ABC):
    """Abstract base class for round winner strategies."""

    @abstractmethod
    def get_key(self, score: TeamScore) -> int:
        """Value a team is ranked by, higher is better"""
        pass

    @abstractmethod
    def get_strategy_name(self) -> str:
        """Get human-readable name of this strategy"""
        pass

    def select_winners(self, team_scores: Dict[str, TeamScore]) -> List[str]:
        """
        Select every team holding the maximum key value.

        Args:
            team_scores: Aggregated scores keyed by team id

        Returns:
            Winning team ids, in order of first appearance in the round
        """
        if not team_scores:
            return []

        # sorted() is stable, so tied teams keep their round order
        ranked = sorted(team_scores.values(), key=self.get_key, reverse=True)
        best = self.get_key(ranked[0])
        return [score.id for score in ranked if self.get_key(score) == best]

class ByMatchesWonStrategy(RoundWinnerStrategy):
    """Team(s) with the most matches won take the round."""

    def get_key(self, score: TeamScore) -> int:
        return score.matches_won

    def get_strategy_name(self) -> str:
        return "By matches won"

class ByScoresDeltaStrategy(RoundWinnerStrategy):
    """Team(s) with the most points scored across all sets take the round."""

    def get_key(self, score: TeamScore) -> int:
        return score.total_scores

    def get_strategy_name(self) -> str:
        return "By scores"

class RoundWinnerStrategyFactory:
    """Factory for creating round winner strategies from game configuration"""

    _STRATEGIES = {
        WinnerOfRound.BY_MATCHES_WON: ByMatchesWonStrategy,
        WinnerOfRound.BY_SCORES_DELTA: ByScoresDeltaStrategy,
    }

    @staticmethod
    def coerce(winner_of_round) -> WinnerOfRound:
        """
        Resolve a stored or requested value to a WinnerOfRound member.

        Accepts enum members and their string names/values. Anything else
        falls back to the default strategy.
        """
        if isinstance(winner_of_round, WinnerOfRound):
            return winner_of_round
        if isinstance(winner_of_round, str):
            try:
                return WinnerOfRound[winner_of_round.upper()]
            except KeyError:
                pass
        logger.warning(
            f"Unknown winner of round strategy {winner_of_round!r}, "
            f"falling back to {DEFAULT_WINNER_OF_ROUND.value}"
        )
        return DEFAULT_WINNER_OF_ROUND

    @classmethod
    def create_strategy(cls, winner_of_round) -> RoundWinnerStrategy:
        """
        Create the strategy for a WinnerOfRound value.

        Args:
            winner_of_round: WinnerOfRound member, its name, or anything else

        Returns:
            Configured RoundWinnerStrategy instance
        """
        return cls._STRATEGIES[cls.coerce(winner_of_round)]()

    @staticmethod
    def get_available_strategies() -> List[str]:
        """Get list of available strategy names"""
        return [member.value for member in WinnerOfRound]

def calculate_round_winner(
    round_snapshot: RoundSnapshot,
    winner_of_round: Optional[WinnerOfRound] = DEFAULT_WINNER_OF_ROUND
) -> List[str]:
    """
    Determine the winning team id(s) of a round.

    Args:
        round_snapshot: Round with matches, teams and sets
        winner_of_round: Strategy to decide the round by

    Returns:
        Winning team ids; empty when the round has no complete matches
    """
    strategy = RoundWinnerStrategyFactory.create_strategy(winner_of_round)
    team_scores = get_team_scores_for_round(round_snapshot)
    winners = strategy.select_winners(team_scores)
    logger.debug(
        f"Round {round_snapshot.id} winners ({strategy.get_strategy_name()}): "
        f"{', '.join(winners) if winners else 'none'}"
    )
    return winners
