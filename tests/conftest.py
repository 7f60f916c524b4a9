"""
Pytest configuration for test discovery and imports.

Provides fixtures for testing including:
- Standard and small league structures
- Seeded random sources
- Season key dates
- Generated season and league calendars
"""

import sys
import random
from datetime import date
from pathlib import Path
import pytest


# Determine paths
project_root = Path(__file__).parent.parent
src_path = project_root / "src"
tests_path = project_root / "tests"


def pytest_configure(config):
    """Configure pytest - runs very early in startup.

    IMPORTANT: src/ MUST come before tests/ so that test directories such as
    tests/scheduling never shadow the packages they test.
    """
    seen = set()
    new_path = []
    for p in sys.path:
        if p not in seen and p != str(tests_path):
            seen.add(p)
            new_path.append(p)

    for path in [str(src_path), str(project_root)]:
        if path in new_path:
            new_path.remove(path)

    new_path.insert(0, str(project_root))
    new_path.insert(0, str(src_path))

    sys.path[:] = new_path


# ============================================================================
# LEAGUE FIXTURES
# ============================================================================

@pytest.fixture(scope="session")
def standard_structure():
    """The standard 30-team league loaded from teams.json."""
    from team_registry import LeagueStructure
    return LeagueStructure.standard()


@pytest.fixture
def small_structure():
    """
    Eight-team league: 2 conferences x 2 divisions x 2 teams.

    With the default quotas every cross-division conference pair falls in
    the lower tier (two lower-tier opponents per two-team division), so each
    team plays 1 rival x 4 + 2 x 3 + 4 x 2 = 18 games.
    """
    from team_registry import LeagueStructure
    return LeagueStructure.from_mappings(
        conferences={
            "AAA": "East", "BBB": "East", "CCC": "East", "DDD": "East",
            "EEE": "West", "FFF": "West", "GGG": "West", "HHH": "West",
        },
        divisions={
            "AAA": "North", "BBB": "North", "CCC": "South", "DDD": "South",
            "EEE": "Coast", "FFF": "Coast", "GGG": "Desert", "HHH": "Desert",
        }
    )


@pytest.fixture
def seeded_rng():
    """Deterministic random source."""
    return random.Random(2025)


# ============================================================================
# SEASON FIXTURES
# ============================================================================

@pytest.fixture
def test_season():
    """Standard season year for testing (the 2024-25 season)."""
    return 2025


@pytest.fixture
def team_key_dates(test_season):
    from league_calendar import TeamKeyDates
    return TeamKeyDates.for_season(test_season)


@pytest.fixture
def league_key_dates(test_season):
    from league_calendar import LeagueKeyDates
    return LeagueKeyDates.for_season(test_season)


@pytest.fixture
def generated_calendar(standard_structure, test_season):
    """Full regular season calendar for Boston, seeded."""
    from constants import TeamIDs
    from league_calendar import SeasonCalendar
    return SeasonCalendar.generate(test_season, TeamIDs.BOSTON_CELTICS, standard_structure,
                                   rng=random.Random(11))


@pytest.fixture(scope="session")
def generated_league(standard_structure):
    """
    League calendar with all 30 team calendars, seeded.

    Session scoped: tests must not advance or record results on it.
    """
    from league_calendar import LeagueCalendar
    league = LeagueCalendar.create_for_season(2025)
    league.generate_team_calendars(standard_structure, seed=42)
    return league


@pytest.fixture
def game_factory():
    """Build a regular season game for team AAA on a given day."""
    from league_calendar import create_game_event

    counter = {"n": 0}

    def make(day: date, opponent: str = "BBB", is_home: bool = True):
        counter["n"] += 1
        return create_game_event(
            event_id=f"test-game-{counter['n']}",
            event_date=day,
            team_id="AAA",
            opponent_id=opponent,
            is_home=is_home
        )

    return make
