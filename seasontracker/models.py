"""
Pydantic models for normalized match data and league statistics.
"""

from datetime import datetime, timezone
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, model_validator

Result = Literal['win', 'loss', 'draw']


class TeamSide(BaseModel):
    """One side of a match as seen on the scoreboard."""

    model_config = ConfigDict(frozen=True)

    id: str
    name: str | None = None
    short_name: str | None = None
    logo_url: str
    score: int = Field(default=0, ge=0)

    @property
    def label(self) -> str:
        """Short name for compact display, falling back to the full name."""
        return self.short_name or self.name or self.id


class Match(BaseModel):
    """Canonical match record from the tracked team's perspective."""

    model_config = ConfigDict(frozen=True)

    id: str
    date: str
    home_team: TeamSide
    away_team: TeamSide
    is_home: bool
    tracked_score: int = Field(ge=0)
    opponent_score: int = Field(ge=0)
    result: Result | None = None
    competition: str
    is_fixture: bool = False
    venue: str = ''

    @model_validator(mode='after')
    def result_matches_fixture(self) -> 'Match':
        if self.is_fixture and self.result is not None:
            raise ValueError('fixtures cannot carry a result')
        if not self.is_fixture and self.result is None:
            raise ValueError('played matches must carry a result')
        return self

    @property
    def opponent(self) -> TeamSide:
        return self.away_team if self.is_home else self.home_team

    @property
    def kickoff(self) -> datetime | None:
        """Kick-off as an aware UTC datetime, or None if the date is unparsable."""
        try:
            dt = datetime.fromisoformat(self.date.replace('Z', '+00:00'))
        except (TypeError, ValueError):
            return None
        if dt.tzinfo is None:
            dt = dt.replace(tzinfo=timezone.utc)
        return dt


class Stats(BaseModel):
    """League statistics over completed matches of one competition."""

    played: int = Field(default=0, ge=0)
    won: int = Field(default=0, ge=0)
    drawn: int = Field(default=0, ge=0)
    lost: int = Field(default=0, ge=0)
    goals_for: int = Field(default=0, ge=0)
    goals_against: int = Field(default=0, ge=0)
    points: int = Field(default=0, ge=0)

    @property
    def goal_difference(self) -> int:
        return self.goals_for - self.goals_against
