"""
Tests for team and player score aggregation over a round.
"""

from arena.data_models.round import MatchSnapshot, RoundSnapshot, SetScore, TeamSnapshot
from arena.utils.round_scores import get_player_scores_for_round, get_team_scores_for_round


def _as_tuple(score):
    return score.matches_won, score.total_scores


def test_team_scores_for_two_match_round(scenario_round):
    team_scores = get_team_scores_for_round(scenario_round)

    assert list(team_scores) == ['A', 'B', 'C']
    assert _as_tuple(team_scores['A']) == (2, 21)
    assert _as_tuple(team_scores['B']) == (0, 12)
    assert _as_tuple(team_scores['C']) == (0, 0)


def test_player_scores_for_two_match_round(scenario_round):
    player_scores = get_player_scores_for_round(scenario_round)

    assert set(player_scores) == {'P1', 'P2', 'P3', 'P4', 'P5', 'P6'}
    for user_id in ('P1', 'P2'):
        assert _as_tuple(player_scores[user_id]) == (2, 21)
    for user_id in ('P3', 'P4'):
        assert _as_tuple(player_scores[user_id]) == (0, 12)
    for user_id in ('P5', 'P6'):
        assert _as_tuple(player_scores[user_id]) == (0, 0)


def test_incomplete_match_is_excluded():
    round_snapshot = RoundSnapshot(
        id='R1',
        matches=(
            MatchSnapshot('M1', 'X', teams=(TeamSnapshot('X', 1, ('P1',)),), sets=(SetScore(6, 1),)),
            MatchSnapshot('M2', 'Y', teams=(TeamSnapshot('Y', 2, ('P2',)), TeamSnapshot('Z', 2, ('P3',)))),
        ),
    )

    assert get_team_scores_for_round(round_snapshot) == {}
    assert get_player_scores_for_round(round_snapshot) == {}


def test_round_without_matches_is_empty():
    assert get_team_scores_for_round(RoundSnapshot(id='R1')) == {}


def test_unknown_or_missing_winner_counts_no_win():
    round_snapshot = RoundSnapshot(
        id='R1',
        matches=(
            MatchSnapshot('M1', None, teams=(TeamSnapshot('A', 1), TeamSnapshot('B', 2)), sets=(SetScore(6, 6),)),
            MatchSnapshot('M2', 'stale-team', teams=(TeamSnapshot('A', 1), TeamSnapshot('B', 2)), sets=(SetScore(2, 6),)),
        ),
    )

    team_scores = get_team_scores_for_round(round_snapshot)

    assert _as_tuple(team_scores['A']) == (0, 8)
    assert _as_tuple(team_scores['B']) == (0, 12)


def test_team_number_decides_side_regardless_of_order():
    round_snapshot = RoundSnapshot(
        id='R1',
        matches=(
            MatchSnapshot('M1', 'B', teams=(TeamSnapshot('B', 2), TeamSnapshot('A', 1)), sets=(SetScore(1, 6),)),
        ),
    )

    team_scores = get_team_scores_for_round(round_snapshot)

    assert _as_tuple(team_scores['A']) == (0, 1)
    assert _as_tuple(team_scores['B']) == (1, 6)


def test_rotating_player_accumulates_by_user():
    # P1 partners P2 in the first match and P3 in the second
    round_snapshot = RoundSnapshot(
        id='R1',
        matches=(
            MatchSnapshot(
                'M1', 'T1',
                teams=(TeamSnapshot('T1', 1, ('P1', 'P2')), TeamSnapshot('T2', 2, ('P3', 'P4'))),
                sets=(SetScore(6, 3),),
            ),
            MatchSnapshot(
                'M2', 'T4',
                teams=(TeamSnapshot('T3', 1, ('P1', 'P3')), TeamSnapshot('T4', 2, ('P2', 'P4'))),
                sets=(SetScore(4, 6),),
            ),
        ),
    )

    player_scores = get_player_scores_for_round(round_snapshot)

    assert _as_tuple(player_scores['P1']) == (1, 10)
    assert _as_tuple(player_scores['P2']) == (2, 12)
    assert _as_tuple(player_scores['P3']) == (0, 7)
    assert _as_tuple(player_scores['P4']) == (1, 9)


def test_match_completeness_requires_both_sides():
    complete = MatchSnapshot('M1', 'A', teams=(TeamSnapshot('B', 2), TeamSnapshot('A', 1)))
    one_sided = MatchSnapshot('M2', 'A', teams=(TeamSnapshot('A', 1), TeamSnapshot('C', 1)))

    assert complete.is_complete
    assert not one_sided.is_complete
    assert not MatchSnapshot('M3', None).is_complete


def test_player_score_metadata_shape(scenario_round):
    player_scores = get_player_scores_for_round(scenario_round)

    assert player_scores['P1'].to_metadata() == {'matchesWon': 2, 'totalScores': 21}
    assert player_scores['P5'].to_metadata() == {'matchesWon': 0, 'totalScores': 0}
