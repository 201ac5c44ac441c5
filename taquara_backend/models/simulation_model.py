# simulation_model.py
# Request/response schemas for the final-table simulator.

from typing import List
from pydantic import BaseModel


class HypotheticalScore(BaseModel):
    """A user-entered score for a remaining fixture, identified by round + home + away."""
    round: int
    home_team_id: int
    away_team_id: int
    home_score: int
    away_score: int


class SimulationRequest(BaseModel):
    scores: List[HypotheticalScore]
