# scorer_model.py
# Defines the Scorer model (top-scorers list) and its admin edit schema.

from typing import Optional, List
from pydantic import BaseModel
from sqlmodel import SQLModel, Field


class Scorer(SQLModel, table=True):
    """A player on the top-scorers list. rank is reassigned whenever the list is saved."""
    id: Optional[int] = Field(default=None, primary_key=True)
    player: str
    team_id: int = Field(foreign_key="team.id")
    goals: int = 0
    rank: int = 0


class ScorerEdit(BaseModel):
    player: str
    team_id: int
    goals: int


class ScorerListRequest(BaseModel):
    scorers: List[ScorerEdit]
