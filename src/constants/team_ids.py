"""
Team ID Constants

Provides readable constants for team identifiers to improve code clarity.
Team ids are the three-letter abbreviations used throughout the calendar.

Example:
    # Instead of:
    calendar = league.get_team_calendar("BOS")

    # Use:
    calendar = league.get_team_calendar(TeamIDs.BOSTON_CELTICS)
"""


class TeamIDs:
    """Constants for team identifiers"""

    # Eastern Conference - Atlantic
    BOSTON_CELTICS = "BOS"
    BROOKLYN_NETS = "BKN"
    NEW_YORK_KNICKS = "NYK"
    PHILADELPHIA_76ERS = "PHI"
    TORONTO_RAPTORS = "TOR"

    # Eastern Conference - Central
    CHICAGO_BULLS = "CHI"
    CLEVELAND_CAVALIERS = "CLE"
    DETROIT_PISTONS = "DET"
    INDIANA_PACERS = "IND"
    MILWAUKEE_BUCKS = "MIL"

    # Eastern Conference - Southeast
    ATLANTA_HAWKS = "ATL"
    CHARLOTTE_HORNETS = "CHA"
    MIAMI_HEAT = "MIA"
    ORLANDO_MAGIC = "ORL"
    WASHINGTON_WIZARDS = "WAS"

    # Western Conference - Northwest
    DENVER_NUGGETS = "DEN"
    MINNESOTA_TIMBERWOLVES = "MIN"
    OKLAHOMA_CITY_THUNDER = "OKC"
    PORTLAND_TRAIL_BLAZERS = "POR"
    UTAH_JAZZ = "UTA"

    # Western Conference - Pacific
    GOLDEN_STATE_WARRIORS = "GSW"
    LOS_ANGELES_CLIPPERS = "LAC"
    LOS_ANGELES_LAKERS = "LAL"
    PHOENIX_SUNS = "PHX"
    SACRAMENTO_KINGS = "SAC"

    # Western Conference - Southwest
    DALLAS_MAVERICKS = "DAL"
    HOUSTON_ROCKETS = "HOU"
    MEMPHIS_GRIZZLIES = "MEM"
    NEW_ORLEANS_PELICANS = "NOP"
    SAN_ANTONIO_SPURS = "SAS"

    @classmethod
    def get_all_team_ids(cls) -> list[str]:
        """Get sorted list of all valid team IDs"""
        return sorted(getattr(cls, attr) for attr in dir(cls)
                      if attr.isupper() and isinstance(getattr(cls, attr), str))
