from arena.constants import LevelConstants

def get_level_name(level: float) -> str:
    """
    Get the display name of a player level

    Args:
        level: Player level, normally between 0 and 7

    Returns:
        Name of the inclusive range containing the level, Beginner otherwise
    """
    for minimum, maximum, name in LevelConstants.LEVEL_RANGES:
        if minimum <= level <= maximum:
            return name
    return LevelConstants.FALLBACK_LEVEL_NAME

def format_win_rate(games_won: int, games_played: int) -> str:
    """Format a win rate as a percentage string with two decimals"""
    if not games_played:
        return '0.00'
    return f"{(games_won / games_played) * 100:.2f}"
