# prediction_model.py
# Defines the Prediction model (a presenter's guess for a match) and request schemas.

from typing import Optional, List
from pydantic import BaseModel
from sqlalchemy import UniqueConstraint
from sqlmodel import SQLModel, Field


class Prediction(SQLModel, table=True):
    """
    A presenter's predicted scoreline for one match.
    Only one prediction per (match, user) is kept; saving again replaces it.
    """
    __table_args__ = (UniqueConstraint("match_id", "user_id"),)

    id: Optional[int] = Field(default=None, primary_key=True)
    match_id: int = Field(foreign_key="match.id", index=True)
    user_id: int = Field(foreign_key="user.id", index=True)
    predicted_home_score: int
    predicted_away_score: int


class PredictionSubmit(BaseModel):
    match_id: int
    user_id: int
    predicted_home_score: int
    predicted_away_score: int


class PredictionSubmitRequest(BaseModel):
    predictions: List[PredictionSubmit]
