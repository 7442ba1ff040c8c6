"""
Shared fixtures for the results engine test suite.

Database tests run each scenario inside a single asyncio.run() against a
throwaway SQLite file, so no event loop plugin is needed.
"""

import asyncio
import os
import sys

os.environ.setdefault('LOG_TO_FILE', 'false')

# Add the project root to Python path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import pytest

from arena.config import Config
from arena.data_models.round import MatchSnapshot, RoundSnapshot, SetScore, TeamSnapshot
from arena.database.database import Database

Config.LOG_TO_FILE = False


def build_scenario_round() -> RoundSnapshot:
    """
    Two matches: A (P1, P2) beats B (P3, P4) 6:4 3:6 6:2,
    then A beats C (P5, P6) 6:0.
    """
    team_a = TeamSnapshot('A', 1, ('P1', 'P2'))
    return RoundSnapshot(
        id='R1',
        matches=(
            MatchSnapshot(
                id='M1',
                winner_id='A',
                teams=(team_a, TeamSnapshot('B', 2, ('P3', 'P4'))),
                sets=(SetScore(6, 4), SetScore(3, 6), SetScore(6, 2)),
            ),
            MatchSnapshot(
                id='M2',
                winner_id='A',
                teams=(team_a, TeamSnapshot('C', 2, ('P5', 'P6'))),
                sets=(SetScore(6, 0),),
            ),
        ),
    )


@pytest.fixture
def scenario_round() -> RoundSnapshot:
    return build_scenario_round()


@pytest.fixture
def run_with_database(tmp_path):
    """Run an async scenario(db) against a freshly initialized database."""
    database_url = f"sqlite+aiosqlite:///{tmp_path / 'test_arena.db'}"

    def runner(scenario):
        async def run():
            db = Database(database_url)
            await db.initialize()
            try:
                return await scenario(db)
            finally:
                await db.close()
        return asyncio.run(run())

    return runner
