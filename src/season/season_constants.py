"""
Season Constants

Centralized constants for the basketball season calendar to eliminate magic numbers.
All game counts, quota sizes and default key dates are defined here.

Season years name the year a season ends: 2025 is the 2024-25 season.

Usage:
    from season.season_constants import SeasonConstants

    if games_played >= SeasonConstants.REGULAR_SEASON_GAMES_PER_TEAM:
        # Regular season finished
"""


class SeasonConstants:
    """
    Basketball season simulation constants.

    Key dates are (month, day) tuples plus a year offset relative to the
    season year (-1 means the calendar year the season starts in).
    """

    # ==================== League Structure ====================

    LEAGUE_TEAM_COUNT = 30
    CONFERENCE_COUNT = 2
    DIVISIONS_PER_CONFERENCE = 3
    TEAMS_PER_DIVISION = 5

    # ==================== Game Counts ====================

    REGULAR_SEASON_GAMES_PER_TEAM = 82
    """
    Standard quota split:
    - 4 division rivals x 4 games = 16
    - 6 conference opponents x 4 games = 24
    - 4 conference opponents x 3 games = 12
    - 15 opposite-conference opponents x 2 games = 30
    """

    DIVISION_GAMES = 4
    CONFERENCE_UPPER_TIER_GAMES = 4
    CONFERENCE_LOWER_TIER_GAMES = 3
    LOWER_TIER_OPPONENTS_PER_DIVISION = 2
    INTER_CONFERENCE_GAMES = 2

    # ==================== Playoffs ====================

    PLAYOFF_ROUNDS = 4
    GAMES_PER_SERIES = 7

    HOME_COURT_PATTERN = (1, 1, 0, 0, 1, 0, 1)
    """2-2-1-1-1 format from the higher seed's point of view"""

    SERIES_GAME_SPACING_DAYS = 2
    SERIES_REST_AFTER_GAMES = (2, 4)
    """An extra rest day follows these game numbers"""

    ROUND_NAMES = {
        1: "First Round",
        2: "Conference Semifinals",
        3: "Conference Finals",
        4: "NBA Finals",
    }

    ROUND_BROADCASTERS = {
        1: "NBA TV/TNT",
        2: "ESPN/TNT",
        3: "ESPN/TNT",
        4: "ABC",
    }

    # ==================== Phase Windows ====================

    TRAINING_CAMP_LEAD_DAYS = 30
    """Team calendars enter training camp this many days before season start"""

    PRESEASON_LEAD_DAYS = 14
    """Team calendars enter preseason this many days before season start"""

    TEAM_ALL_STAR_BREAK_DAYS = 4
    LEAGUE_ALL_STAR_BREAK_DAYS = 3

    # ==================== Default Key Dates ====================

    DRAFT_DATE = (-1, 6, 26)
    FREE_AGENCY_START = (-1, 6, 30)
    SUMMER_LEAGUE_START = (-1, 7, 5)
    SUMMER_LEAGUE_END = (-1, 7, 17)
    TRAINING_CAMP_START = (-1, 9, 24)
    PRESEASON_START = (-1, 10, 4)
    REGULAR_SEASON_START = (-1, 10, 22)
    TRADE_DEADLINE = (0, 2, 6)
    ALL_STAR_WEEKEND = (0, 2, 14)
    REGULAR_SEASON_END = (0, 4, 13)
    PLAYOFFS_START = (0, 4, 19)
    FINALS_START = (0, 6, 1)
    CHAMPIONSHIP_CELEBRATION = (0, 6, 20)

    # ==================== Broadcast ====================

    NATIONAL_TV_PROBABILITY = 0.15
    BROADCASTERS = ("ESPN", "TNT", "ABC", "NBA TV")

    # ==================== Placement Heuristic ====================

    BACK_TO_BACK_AVOIDANCE = 0.7
    """Probability of skipping the day after a scheduled game"""
