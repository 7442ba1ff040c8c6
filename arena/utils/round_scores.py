"""
Round score aggregation shared by round winner and round outcome calculation.

A match only counts once both sides (team_number 1 and 2) are present;
incomplete matches are left out of every total.
"""

from typing import Dict, Iterator, Tuple
from arena.data_models.round import MatchSnapshot, PlayerScore, RoundSnapshot, TeamScore, TeamSnapshot
from arena.utils.logger import log_call, setup_logger

logger = setup_logger(__name__)


def _complete_matches(round_snapshot: RoundSnapshot) -> Iterator[Tuple[MatchSnapshot, TeamSnapshot, TeamSnapshot]]:
    """Yield (match, team A, team B) for every match with both sides present."""
    for match in round_snapshot.matches:
        if match.is_complete:
            yield match, match.get_team(1), match.get_team(2)


def _set_totals(match: MatchSnapshot) -> Tuple[int, int]:
    team_a_total = sum(s.team_a_score for s in match.sets)
    team_b_total = sum(s.team_b_score for s in match.sets)
    return team_a_total, team_b_total


@log_call(logger)
def get_team_scores_for_round(round_snapshot: RoundSnapshot) -> Dict[str, TeamScore]:
    """
    Aggregate matches won and points scored per team across a round.

    Args:
        round_snapshot: Round with matches, teams and sets

    Returns:
        Dictionary mapping team id to TeamScore, in order of first appearance
    """
    team_scores: Dict[str, TeamScore] = {}

    for match, team_a, team_b in _complete_matches(round_snapshot):
        team_a_total, team_b_total = _set_totals(match)

        score_a = team_scores.setdefault(team_a.id, TeamScore(team_a.id))
        score_b = team_scores.setdefault(team_b.id, TeamScore(team_b.id))

        score_a.total_scores += team_a_total
        score_b.total_scores += team_b_total

        if match.winner_id == team_a.id:
            score_a.matches_won += 1
        elif match.winner_id == team_b.id:
            score_b.matches_won += 1

    return team_scores


@log_call(logger)
def get_player_scores_for_round(round_snapshot: RoundSnapshot) -> Dict[str, PlayerScore]:
    """
    Aggregate matches won and points scored per player across a round.

    Players are keyed by user id, so a player rotating between teams
    accumulates into a single total.

    Args:
        round_snapshot: Round with matches, teams (with players) and sets

    Returns:
        Dictionary mapping user id to PlayerScore, in order of first appearance
    """
    player_scores: Dict[str, PlayerScore] = {}

    for match, team_a, team_b in _complete_matches(round_snapshot):
        team_a_total, team_b_total = _set_totals(match)

        for team, team_total in ((team_a, team_a_total), (team_b, team_b_total)):
            won = match.winner_id == team.id
            for user_id in team.players:
                score = player_scores.setdefault(user_id, PlayerScore(user_id))
                score.total_scores += team_total
                if won:
                    score.matches_won += 1

    return player_scores
