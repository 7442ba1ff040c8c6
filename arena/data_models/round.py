"""
Round data models for round winner and outcome calculation.

Provides immutable snapshots of a round's matches, teams and sets, decoupled
from the ORM so that score aggregation stays pure, plus the mutable score
accumulators built fresh on every calculation.
"""

from dataclasses import dataclass, field
from typing import List, Optional, Tuple


@dataclass(frozen=True)
class SetScore:
    """Score of a single set."""
    team_a_score: int
    team_b_score: int


@dataclass(frozen=True)
class TeamSnapshot:
    """One side of a match. team_number is 1 (side A) or 2 (side B)."""
    id: str
    team_number: int
    players: Tuple[str, ...] = ()


@dataclass(frozen=True)
class MatchSnapshot:
    """Single match with its pre-recorded winner."""
    id: str
    winner_id: Optional[str]
    teams: Tuple[TeamSnapshot, ...] = ()
    sets: Tuple[SetScore, ...] = ()

    def get_team(self, team_number: int) -> Optional[TeamSnapshot]:
        """Get the first team playing as the given side, if any"""
        for team in self.teams:
            if team.team_number == team_number:
                return team
        return None

    @property
    def is_complete(self) -> bool:
        return self.get_team(1) is not None and self.get_team(2) is not None


@dataclass(frozen=True)
class RoundSnapshot:
    """Round with all of its matches."""
    id: str
    matches: Tuple[MatchSnapshot, ...] = ()

    @classmethod
    def from_orm(cls, round_obj) -> 'RoundSnapshot':
        """Build a snapshot from a fully loaded Round model."""
        return cls(
            id=round_obj.id,
            matches=tuple(
                MatchSnapshot(
                    id=match.id,
                    winner_id=match.winner_id,
                    teams=tuple(
                        TeamSnapshot(
                            id=team.id,
                            team_number=team.team_number,
                            players=tuple(p.user_id for p in team.players)
                        )
                        for team in match.teams
                    ),
                    sets=tuple(
                        SetScore(s.team_a_score, s.team_b_score)
                        for s in match.sets
                    )
                )
                for match in round_obj.matches
            )
        )


@dataclass
class TeamScore:
    """Aggregate statistics of a team across a round."""
    id: str
    matches_won: int = 0
    total_scores: int = 0


@dataclass
class PlayerScore:
    """Aggregate statistics of a player across a round."""
    id: str
    matches_won: int = 0
    total_scores: int = 0

    def to_metadata(self) -> dict:
        return {'matchesWon': self.matches_won, 'totalScores': self.total_scores}
