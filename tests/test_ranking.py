"""
Tests for leaderboard competition ranking and level names.
"""

import pytest

from arena.data_models.leaderboard import LeaderboardCandidate
from arena.utils.levels import format_win_rate, get_level_name
from arena.utils.ranking import LeaderboardType, RankingUtility


def _candidate(user_id, level=1.0, reliability=0.0, total_points=0, games_count=0, social_level=1.0):
    return LeaderboardCandidate(
        id=user_id,
        level=level,
        social_level=social_level,
        reliability=reliability,
        total_points=total_points,
        games_count=games_count,
    )


def test_tied_leaders_share_first_and_next_skips():
    candidates = [
        _candidate('U1', level=5, reliability=90, total_points=100),
        _candidate('U2', level=5, reliability=90, total_points=100),
        _candidate('U3', level=4, reliability=90, total_points=100),
    ]

    assert RankingUtility.calculate_ranks(candidates, LeaderboardType.LEVEL) == {'U1': 1, 'U2': 1, 'U3': 3}


def test_empty_input_yields_empty_map():
    assert RankingUtility.calculate_ranks([], 'level') == {}


def test_distinct_candidates_rank_sequentially():
    candidates = [_candidate(f'U{i}', level=5 - i) for i in range(4)]

    assert RankingUtility.calculate_ranks(candidates, 'level') == {'U0': 1, 'U1': 2, 'U2': 3, 'U3': 4}


def test_ranks_are_monotonic_and_count_everyone_above():
    candidates = [
        _candidate('U1', level=6),
        _candidate('U2', level=5),
        _candidate('U3', level=5),
        _candidate('U4', level=5),
        _candidate('U5', level=4),
        _candidate('U6', level=4),
        _candidate('U7', level=3),
    ]

    ranks = RankingUtility.calculate_ranks(candidates, 'level')
    ordered = [ranks[c.id] for c in candidates]

    assert ordered == [1, 2, 2, 2, 5, 5, 7]
    assert ordered == sorted(ordered)


def test_level_mode_requires_reliability_and_points_to_tie():
    candidates = [
        _candidate('U1', level=5, reliability=90, total_points=100),
        _candidate('U2', level=5, reliability=80, total_points=100),
        _candidate('U3', level=5, reliability=80, total_points=90),
    ]

    assert RankingUtility.calculate_ranks(candidates, 'level') == {'U1': 1, 'U2': 2, 'U3': 3}


def test_social_mode_compares_social_level_not_level():
    candidates = [
        _candidate('U1', level=6, social_level=3),
        _candidate('U2', level=2, social_level=3),
        _candidate('U3', level=6, social_level=2),
    ]

    assert RankingUtility.calculate_ranks(candidates, LeaderboardType.SOCIAL) == {'U1': 1, 'U2': 1, 'U3': 3}
    assert RankingUtility.calculate_ranks(candidates, LeaderboardType.LEVEL) == {'U1': 1, 'U2': 2, 'U3': 3}


def test_games_mode_also_compares_games_count_and_level():
    candidates = [
        _candidate('U1', games_count=8, level=4, reliability=50),
        _candidate('U2', games_count=8, level=4, reliability=50),
        _candidate('U3', games_count=8, level=3, reliability=50),
        _candidate('U4', games_count=2, level=3, reliability=50),
    ]

    assert RankingUtility.calculate_ranks(candidates, 'games') == {'U1': 1, 'U2': 1, 'U3': 3, 'U4': 4}


def test_only_adjacent_ties_are_grouped():
    # Misordered input is a caller error: equal values apart are not merged
    candidates = [
        _candidate('U1', level=5),
        _candidate('U2', level=4),
        _candidate('U3', level=5),
    ]

    assert RankingUtility.calculate_ranks(candidates, 'level') == {'U1': 1, 'U2': 2, 'U3': 3}


def test_mappings_are_accepted_as_candidates():
    candidates = [
        {'id': 'U1', 'level': 5, 'reliability': 90, 'total_points': 100},
        {'id': 'U2', 'level': 5, 'reliability': 90, 'total_points': 100},
    ]

    assert RankingUtility.calculate_ranks(candidates, 'level') == {'U1': 1, 'U2': 1}


def test_unknown_mode_is_rejected():
    with pytest.raises(ValueError):
        RankingUtility.calculate_ranks([_candidate('U1')], 'elo')


def test_sort_candidates_orders_by_all_keys_descending():
    candidates = [
        _candidate('U1', games_count=2, reliability=90),
        _candidate('U2', games_count=5, reliability=10),
        _candidate('U3', games_count=5, reliability=40),
        _candidate('U4', games_count=5, reliability=40),
    ]

    ordered = RankingUtility.sort_candidates(candidates, 'games')

    assert [c.id for c in ordered] == ['U3', 'U4', 'U2', 'U1']
    assert RankingUtility.calculate_ranks(ordered, 'games') == {'U3': 1, 'U4': 1, 'U2': 3, 'U1': 4}


def test_validators():
    assert RankingUtility.validate_leaderboard_type('games')
    assert not RankingUtility.validate_leaderboard_type('elo')
    assert RankingUtility.validate_scope('city')
    assert not RankingUtility.validate_scope('country')
    assert RankingUtility.validate_time_period('30')
    assert not RankingUtility.validate_time_period('7')
    assert RankingUtility.get_window_days('10') == 10
    assert RankingUtility.get_window_days('all') is None


@pytest.mark.parametrize("level,name", [
    (0.0, "Initiation"),
    (1.2, "Beginner"),
    (2.0, "Initiation Intermediate"),
    (3.4, "Intermediate"),
    (4.0, "Intermediate High"),
    (5.0, "Intermediate Advanced"),
    (5.55, "Competition"),
    (6.5, "Professional"),
    (2.45, "Beginner"),
    (9.0, "Beginner"),
])
def test_level_names(level, name):
    assert get_level_name(level) == name


def test_win_rate_formatting():
    assert format_win_rate(0, 0) == '0.00'
    assert format_win_rate(2, 3) == '66.67'
    assert format_win_rate(5, 5) == '100.00'
