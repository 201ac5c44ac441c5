# match_model.py
# Defines the Match model (fixtures and results) and the admin score-update schemas.

from typing import Optional, List
from datetime import datetime
from pydantic import BaseModel
from sqlalchemy import DateTime
from sqlmodel import SQLModel, Field


class Match(SQLModel, table=True):
    """
    Represents a fixture between two teams in a given round.
    Scores stay None until the admin enters a result; a match with both
    scores set is finished.
    """
    id: Optional[int] = Field(default=None, primary_key=True)

    # Foreign keys
    home_team_id: int = Field(foreign_key="team.id")       # Home team
    away_team_id: int = Field(foreign_key="team.id")       # Away team

    # Match details
    round: int = Field(index=True)                         # Matchday number
    date: datetime = Field(sa_type=DateTime(timezone=False))  # Kick-off, local time (naive)

    # Results (set by the admin)
    home_score: Optional[int] = None
    away_score: Optional[int] = None

    @property
    def is_finished(self) -> bool:
        return self.home_score is not None and self.away_score is not None


class MatchScoreUpdate(BaseModel):
    """One row of the admin results form. Both None clears the result."""
    match_id: int
    home_score: Optional[int] = None
    away_score: Optional[int] = None


class MatchScoreUpdateRequest(BaseModel):
    scores: List[MatchScoreUpdate]
