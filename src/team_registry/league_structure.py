"""
League Structure

Team -> conference/division lookup consumed by schedule generation.

Unlike a process-wide registry, a LeagueStructure is an ordinary value that
callers build once and pass to the generator and calendars that need it.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Iterable, List, Mapping, Optional, Tuple, Union
import json
import logging

from league_calendar.calendar_exceptions import ConfigurationError


logger = logging.getLogger(__name__)

DEFAULT_TEAMS_FILE = Path(__file__).parent / "data" / "teams.json"


@dataclass(frozen=True)
class TeamInfo:
    """Classification data for one team"""
    team_id: str
    conference: str
    division: str
    city: str = ""
    nickname: str = ""

    @property
    def full_name(self) -> str:
        name = f"{self.city} {self.nickname}".strip()
        return name or self.team_id

    @classmethod
    def from_dict(cls, team_id: str, data: Mapping[str, str]) -> 'TeamInfo':
        """Create TeamInfo from dictionary data"""
        return cls(
            team_id=team_id,
            conference=data.get('conference', ''),
            division=data.get('division', ''),
            city=data.get('city', ''),
            nickname=data.get('nickname', '')
        )


class LeagueStructure:
    """
    Conference and division layout of a league.

    Validates on construction: every team needs a conference and a division,
    and ids must be unique.
    """

    def __init__(self, teams: Iterable[TeamInfo]):
        self._teams: Dict[str, TeamInfo] = {}

        for team in teams:
            if not team.team_id:
                raise ConfigurationError("team id cannot be empty")
            if team.team_id in self._teams:
                raise ConfigurationError("duplicate team id", config_key=team.team_id)
            if not team.conference:
                raise ConfigurationError("team has no conference", config_key=team.team_id)
            if not team.division:
                raise ConfigurationError("team has no division", config_key=team.team_id)
            self._teams[team.team_id] = team

        if len(self._teams) < 2:
            raise ConfigurationError("a league needs at least two teams",
                                     config_value=len(self._teams))

        # division name -> conference, a division cannot span conferences
        self._division_conference: Dict[str, str] = {}
        for team in self._teams.values():
            existing = self._division_conference.setdefault(team.division, team.conference)
            if existing != team.conference:
                raise ConfigurationError(
                    f"division '{team.division}' spans conferences {existing} and {team.conference}",
                    config_key=team.team_id
                )

    # ==================== Factories ====================

    @classmethod
    def from_mappings(cls, conferences: Mapping[str, str],
                      divisions: Mapping[str, str]) -> 'LeagueStructure':
        """
        Build from parallel team -> conference and team -> division mappings.

        Raises:
            ConfigurationError: If a team appears in one mapping but not the other
        """
        missing_division = set(conferences) - set(divisions)
        missing_conference = set(divisions) - set(conferences)
        if missing_division:
            raise ConfigurationError("division lookup missing for listed team",
                                     config_key=sorted(missing_division)[0])
        if missing_conference:
            raise ConfigurationError("conference lookup missing for listed team",
                                     config_key=sorted(missing_conference)[0])

        return cls(
            TeamInfo(team_id=team_id, conference=conferences[team_id], division=divisions[team_id])
            for team_id in conferences
        )

    @classmethod
    def from_json(cls, filepath: Union[str, Path] = DEFAULT_TEAMS_FILE) -> 'LeagueStructure':
        """Load a league layout from a teams.json file"""
        teams_file = Path(filepath)
        if not teams_file.exists():
            raise ConfigurationError("teams file not found", config_key=str(teams_file))

        with open(teams_file, 'r', encoding='utf-8') as f:
            data = json.load(f)

        # Handle nested structure
        teams_data = data.get("teams", data)

        structure = cls(TeamInfo.from_dict(team_id, team_data)
                        for team_id, team_data in teams_data.items())
        logger.debug(f"Loaded {len(structure)} teams from {teams_file}")
        return structure

    @classmethod
    def standard(cls) -> 'LeagueStructure':
        """The standard 30-team, 2-conference, 6-division league"""
        return cls.from_json(DEFAULT_TEAMS_FILE)

    # ==================== Lookups ====================

    @property
    def team_ids(self) -> List[str]:
        return sorted(self._teams)

    def __len__(self) -> int:
        return len(self._teams)

    def __contains__(self, team_id: object) -> bool:
        return team_id in self._teams

    def get_team(self, team_id: str) -> TeamInfo:
        try:
            return self._teams[team_id]
        except KeyError:
            raise ConfigurationError("conference/division lookup missing for team",
                                     config_key=team_id) from None

    def conference_of(self, team_id: str) -> str:
        return self.get_team(team_id).conference

    def division_of(self, team_id: str) -> str:
        return self.get_team(team_id).division

    @property
    def conferences(self) -> List[str]:
        return sorted({team.conference for team in self._teams.values()})

    def divisions_in_conference(self, conference: str) -> List[str]:
        return sorted(division for division, conf in self._division_conference.items()
                      if conf == conference)

    def teams_in_division(self, division: str) -> List[str]:
        return sorted(team_id for team_id, team in self._teams.items()
                      if team.division == division)

    def division_rivals(self, team_id: str) -> List[str]:
        division = self.division_of(team_id)
        return [t for t in self.teams_in_division(division) if t != team_id]

    def conference_opponents(self, team_id: str) -> List[str]:
        """Same-conference teams outside team_id's division"""
        team = self.get_team(team_id)
        return sorted(t.team_id for t in self._teams.values()
                      if t.conference == team.conference and t.division != team.division)

    def opponents_of(self, team_id: str) -> List[str]:
        self.get_team(team_id)
        return [t for t in self.team_ids if t != team_id]

    # ==================== Validation ====================

    def validate_team(self, team_id: str,
                      opponent_ids: Optional[Iterable[str]] = None) -> Tuple[str, str]:
        """
        Fail fast on bad classification data before generating a schedule.

        Args:
            team_id: Team whose schedule is about to be generated
            opponent_ids: Listed opponents (defaults to every other team)

        Returns:
            (conference, division) of team_id

        Raises:
            ConfigurationError: Missing lookups or team listed as its own opponent
        """
        team = self.get_team(team_id)

        if opponent_ids is not None:
            for opponent_id in opponent_ids:
                if opponent_id == team_id:
                    raise ConfigurationError("team listed as its own opponent",
                                             config_key=team_id)
                self.get_team(opponent_id)

        return team.conference, team.division

    def to_dict(self) -> Dict[str, Dict[str, str]]:
        return {
            team_id: {
                'conference': team.conference,
                'division': team.division,
                'city': team.city,
                'nickname': team.nickname,
            }
            for team_id, team in sorted(self._teams.items())
        }

    def __repr__(self) -> str:
        return (f"LeagueStructure(teams={len(self._teams)}, "
                f"conferences={self.conferences})")
