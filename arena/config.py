import os
from dotenv import load_dotenv

load_dotenv()

class Config:
    """Engine configuration settings"""
    
    # Database settings
    DATABASE_URL = os.getenv('DATABASE_URL', 'sqlite+aiosqlite:///arena.db')
    
    # Logging settings
    DEBUG = os.getenv('DEBUG', 'False').lower() == 'true'
    LOG_DIR = os.getenv('LOG_DIR', 'logs')
    LOG_TO_FILE = os.getenv('LOG_TO_FILE', 'True').lower() == 'true'
    
    # Leaderboard settings
    ACTIVITY_WINDOW_DAYS = int(os.getenv('ACTIVITY_WINDOW_DAYS', 30))
    
    # Round results settings
    DEFAULT_WINNER_OF_ROUND = os.getenv('DEFAULT_WINNER_OF_ROUND', 'BY_MATCHES_WON')
    
    @staticmethod
    def to_async_url(database_url: str) -> str:
        """Swap a plain sqlite URL for its aiosqlite driver"""
        if database_url.startswith('sqlite:///'):
            database_url = database_url.replace('sqlite:///', 'sqlite+aiosqlite:///')
        return database_url
    
    @classmethod
    def get_async_database_url(cls) -> str:
        """Get the database URL with an async driver"""
        return cls.to_async_url(cls.DATABASE_URL)
    
    @classmethod
    def validate(cls):
        """Validate that configuration values are usable"""
        if not cls.DATABASE_URL:
            raise ValueError("DATABASE_URL is required")
        if cls.ACTIVITY_WINDOW_DAYS <= 0:
            raise ValueError("ACTIVITY_WINDOW_DAYS must be a positive integer")
        if cls.DEFAULT_WINNER_OF_ROUND.upper() not in ("BY_MATCHES_WON", "BY_SCORES_DELTA"):
            raise ValueError(f"Unknown DEFAULT_WINNER_OF_ROUND: {cls.DEFAULT_WINNER_OF_ROUND}")
