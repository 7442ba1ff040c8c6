"""
Custom exceptions for the results engine with user-friendly error messages.
"""

class ArenaException(Exception):
    """Base exception for results and leaderboard errors."""
    def __init__(self, message: str, user_message: str = None):
        super().__init__(message)
        self.user_message = user_message or message

class RoundNotFoundError(ArenaException):
    """Raised when a round cannot be loaded for outcome calculation."""
    def __init__(self, round_id: str):
        self.round_id = round_id
        super().__init__(
            f"Round '{round_id}' not found",
            "Round not found"
        )

class UserNotFoundError(ArenaException):
    """Raised when the requesting user does not exist."""
    def __init__(self, user_id: str):
        self.user_id = user_id
        super().__init__(
            f"User '{user_id}' not found",
            "User not found"
        )

class MissingCityError(ArenaException):
    """Raised when a city leaderboard is requested by a user without a city."""
    def __init__(self, user_id: str):
        self.user_id = user_id
        super().__init__(
            f"User '{user_id}' has no current city",
            "User does not have a city set"
        )

class InvalidLeaderboardParameterError(ArenaException):
    """Raised when leaderboard type, scope or time period is not supported."""
    def __init__(self, parameter: str, value, allowed):
        self.parameter = parameter
        self.value = value
        super().__init__(
            f"Invalid {parameter} {value!r}, expected one of {list(allowed)}",
            f"Invalid {parameter}. Must be {', '.join(str(a) for a in allowed)}"
        )
