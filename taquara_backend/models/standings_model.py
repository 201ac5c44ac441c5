# standings_model.py
# Defines the persisted standings table (one row per team).

from sqlmodel import SQLModel, Field


class StandingsEntry(SQLModel, table=True):
    """
    Accumulated league statistics for one team.
    goal_difference is derived (goals_for - goals_against) and recomputed by the
    standings engine every time the entry changes.
    """
    __tablename__ = "classification"

    team_id: int = Field(primary_key=True, foreign_key="team.id")
    points: int = 0
    played: int = 0
    wins: int = 0
    draws: int = 0
    losses: int = 0
    goals_for: int = 0
    goals_against: int = 0
    goal_difference: int = 0
