import json
import uuid
from sqlalchemy import (
    Column, Integer, String, DateTime, Boolean, Float, Text,
    ForeignKey, Enum as SQLEnum, UniqueConstraint, CheckConstraint
)
from sqlalchemy.orm import declarative_base, relationship
from sqlalchemy.sql import func
from enum import Enum
from typing import Optional, Dict

Base = declarative_base()

def generate_id() -> str:
    return str(uuid.uuid4())

class WinnerOfRound(Enum):
    BY_MATCHES_WON = "BY_MATCHES_WON"
    BY_SCORES_DELTA = "BY_SCORES_DELTA"

class ResultsStatus(Enum):
    NONE = "NONE"
    IN_PROGRESS = "IN_PROGRESS"
    FINAL = "FINAL"

class LevelChangeEventType(Enum):
    GAME = "GAME"
    SOCIAL_BAR = "SOCIAL_BAR"
    SOCIAL_PARTICIPANT = "SOCIAL_PARTICIPANT"

class City(Base):
    __tablename__ = 'cities'

    id = Column(String(36), primary_key=True, default=generate_id)
    name = Column(String(200), nullable=False)

    def __repr__(self):
        return f"<City(id='{self.id}', name='{self.name}')>"

class User(Base):
    __tablename__ = 'users'

    id = Column(String(36), primary_key=True, default=generate_id)
    first_name = Column(String(100))
    last_name = Column(String(100))

    # Rating stats
    level = Column(Float, default=1.0, nullable=False)
    social_level = Column(Float, default=1.0, nullable=False)
    reliability = Column(Float, default=0.0, nullable=False)
    total_points = Column(Integer, default=0, nullable=False)
    games_played = Column(Integer, default=0, nullable=False)
    games_won = Column(Integer, default=0, nullable=False)

    # Scope
    current_city_id = Column(String(36), ForeignKey('cities.id'), nullable=True, index=True)
    is_active = Column(Boolean, default=True)

    # Metadata
    created_at = Column(DateTime, default=func.now())

    # Relationships
    current_city = relationship("City")

    def __repr__(self):
        return f"<User(id='{self.id}', level={self.level}, reliability={self.reliability})>"

class Game(Base):
    __tablename__ = 'games'

    id = Column(String(36), primary_key=True, default=generate_id)
    city_id = Column(String(36), ForeignKey('cities.id'), nullable=True, index=True)

    # Scheduling and results state
    start_time = Column(DateTime, nullable=False, index=True)
    results_status = Column(SQLEnum(ResultsStatus), default=ResultsStatus.NONE, nullable=False)
    winner_of_round = Column(SQLEnum(WinnerOfRound), default=WinnerOfRound.BY_MATCHES_WON, nullable=False)

    # Metadata
    created_at = Column(DateTime, default=func.now())

    # Relationships
    city = relationship("City")
    participants = relationship("GameParticipant", back_populates="game", cascade="all, delete-orphan")
    rounds = relationship("Round", back_populates="game", cascade="all, delete-orphan",
                          order_by="Round.round_number")

    def __repr__(self):
        return f"<Game(id='{self.id}', status={self.results_status.value if self.results_status else None})>"

class GameParticipant(Base):
    __tablename__ = 'game_participants'

    id = Column(Integer, primary_key=True)
    game_id = Column(String(36), ForeignKey('games.id'), nullable=False, index=True)
    user_id = Column(String(36), ForeignKey('users.id'), nullable=False, index=True)
    is_playing = Column(Boolean, default=True, nullable=False)

    # Relationships
    game = relationship("Game", back_populates="participants")
    user = relationship("User")

    __table_args__ = (UniqueConstraint('game_id', 'user_id'),)

    def __repr__(self):
        return f"<GameParticipant(game_id='{self.game_id}', user_id='{self.user_id}', playing={self.is_playing})>"

class Round(Base):
    __tablename__ = 'rounds'

    id = Column(String(36), primary_key=True, default=generate_id)
    game_id = Column(String(36), ForeignKey('games.id'), nullable=False, index=True)
    round_number = Column(Integer, nullable=False, default=1)

    # Relationships
    game = relationship("Game", back_populates="rounds")
    matches = relationship("Match", back_populates="round", cascade="all, delete-orphan",
                           order_by="Match.match_number")
    outcomes = relationship("RoundOutcome", back_populates="round", cascade="all, delete-orphan")

    def __repr__(self):
        return f"<Round(id='{self.id}', number={self.round_number})>"

class Match(Base):
    __tablename__ = 'matches'

    id = Column(String(36), primary_key=True, default=generate_id)
    round_id = Column(String(36), ForeignKey('rounds.id'), nullable=False, index=True)
    match_number = Column(Integer, nullable=False, default=1)

    # Pre-recorded by the results entry workflow; may reference neither team
    winner_id = Column(String(36), nullable=True)

    # Relationships
    round = relationship("Round", back_populates="matches")
    teams = relationship("Team", back_populates="match", cascade="all, delete-orphan",
                         order_by="Team.team_number")
    sets = relationship("MatchSet", back_populates="match", cascade="all, delete-orphan",
                        order_by="MatchSet.set_number")

    def __repr__(self):
        return f"<Match(id='{self.id}', winner_id={self.winner_id!r}, sets={len(self.sets)})>"

class Team(Base):
    __tablename__ = 'teams'

    id = Column(String(36), primary_key=True, default=generate_id)
    match_id = Column(String(36), ForeignKey('matches.id'), nullable=False, index=True)
    team_number = Column(Integer, nullable=False)

    # Relationships
    match = relationship("Match", back_populates="teams")
    players = relationship("TeamPlayer", back_populates="team", cascade="all, delete-orphan",
                           order_by="TeamPlayer.id")

    __table_args__ = (
        UniqueConstraint('match_id', 'team_number'),
        CheckConstraint('team_number IN (1, 2)', name='check_team_number'),
    )

    def __repr__(self):
        return f"<Team(id='{self.id}', number={self.team_number})>"

class TeamPlayer(Base):
    __tablename__ = 'team_players'

    id = Column(Integer, primary_key=True)
    team_id = Column(String(36), ForeignKey('teams.id'), nullable=False, index=True)
    user_id = Column(String(36), ForeignKey('users.id'), nullable=False, index=True)

    # Relationships
    team = relationship("Team", back_populates="players")
    user = relationship("User")

    __table_args__ = (UniqueConstraint('team_id', 'user_id'),)

    def __repr__(self):
        return f"<TeamPlayer(team_id='{self.team_id}', user_id='{self.user_id}')>"

class MatchSet(Base):
    __tablename__ = 'sets'

    id = Column(Integer, primary_key=True)
    match_id = Column(String(36), ForeignKey('matches.id'), nullable=False, index=True)
    set_number = Column(Integer, nullable=False, default=1)
    team_a_score = Column(Integer, nullable=False, default=0)
    team_b_score = Column(Integer, nullable=False, default=0)

    # Relationships
    match = relationship("Match", back_populates="sets")

    __table_args__ = (
        CheckConstraint('team_a_score >= 0', name='check_team_a_score_non_negative'),
        CheckConstraint('team_b_score >= 0', name='check_team_b_score_non_negative'),
    )

    def __repr__(self):
        return f"<MatchSet(match_id='{self.match_id}', {self.team_a_score}:{self.team_b_score})>"

class RoundOutcome(Base):
    __tablename__ = 'round_outcomes'

    id = Column(Integer, primary_key=True)
    round_id = Column(String(36), ForeignKey('rounds.id'), nullable=False, index=True)
    user_id = Column(String(36), ForeignKey('users.id'), nullable=False, index=True)

    # Set to 0 on creation, owned by the rating subsystem afterwards
    level_change = Column(Float, nullable=False, default=0.0)

    # JSON string: {"matchesWon": int, "totalScores": int}
    outcome_metadata = Column('metadata', Text, nullable=True)

    # Metadata
    created_at = Column(DateTime, default=func.now())
    updated_at = Column(DateTime, default=func.now(), onupdate=func.now())

    # Relationships
    round = relationship("Round", back_populates="outcomes")
    user = relationship("User")

    __table_args__ = (UniqueConstraint('round_id', 'user_id', name='uq_round_outcome_round_user'),)

    @property
    def metadata_dict(self) -> Optional[Dict]:
        if not self.outcome_metadata:
            return None
        return json.loads(self.outcome_metadata)

    def __repr__(self):
        return f"<RoundOutcome(round_id='{self.round_id}', user_id='{self.user_id}', level_change={self.level_change})>"

class GameOutcome(Base):
    __tablename__ = 'game_outcomes'

    id = Column(Integer, primary_key=True)
    game_id = Column(String(36), ForeignKey('games.id'), nullable=False, index=True)
    user_id = Column(String(36), ForeignKey('users.id'), nullable=False, index=True)
    level_change = Column(Float, nullable=False, default=0.0)
    created_at = Column(DateTime, default=func.now(), index=True)

    # Relationships
    game = relationship("Game")
    user = relationship("User")

    __table_args__ = (UniqueConstraint('game_id', 'user_id'),)

    def __repr__(self):
        return f"<GameOutcome(game_id='{self.game_id}', user_id='{self.user_id}', change={self.level_change})>"

class LevelChangeEvent(Base):
    __tablename__ = 'level_change_events'

    id = Column(Integer, primary_key=True)
    user_id = Column(String(36), ForeignKey('users.id'), nullable=False, index=True)
    event_type = Column(SQLEnum(LevelChangeEventType), nullable=False)
    level_before = Column(Float, nullable=False)
    level_after = Column(Float, nullable=False)
    created_at = Column(DateTime, default=func.now(), index=True)

    # Relationships
    user = relationship("User")

    @property
    def level_change(self) -> float:
        return self.level_after - self.level_before

    def __repr__(self):
        return f"<LevelChangeEvent(user_id='{self.user_id}', type={self.event_type.value}, change={self.level_change})>"
