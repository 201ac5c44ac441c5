# ranking_model.py
# Schemas produced by the prediction scorer (per-prediction score, ranking rows, results grid).

from typing import Optional, List
from enum import Enum
from pydantic import BaseModel


class ResultSign(str, Enum):
    """Which side a scoreline favours"""
    HOME = "home"
    DRAW = "draw"
    AWAY = "away"


class PredictionCategory(str, Enum):
    """Outcome of scoring a prediction against the final result"""
    EXACT = "exact"        # Exact scoreline
    OUTCOME = "outcome"    # Right result sign, different scoreline
    MISS = "miss"          # Wrong result sign
    PENDING = "pending"    # Match not finished yet


class PredictionScore(BaseModel):
    points: int
    category: PredictionCategory


class PredictionDetail(BaseModel):
    """One scored prediction as shown in a presenter's ranking breakdown."""
    match_id: int
    round: int
    fixture: str               # e.g. "Avaí x Criciúma"
    predicted: str             # "2-1"
    actual: str                # "1-1"
    points: int
    category: PredictionCategory


class RankingEntry(BaseModel):
    user_id: int
    user_name: str
    total_points: int = 0
    exact_count: int = 0
    outcome_count: int = 0
    miss_count: int = 0
    details: List[PredictionDetail] = []


class ResultCell(BaseModel):
    """A presenter's prediction for a match in the results grid."""
    user_id: int
    predicted: Optional[str] = None    # None when the presenter did not predict
    points: Optional[int] = None       # None until the match is finished


class ResultRow(BaseModel):
    match_id: int
    fixture: str
    score: Optional[str] = None        # None while pending
    excluded: bool = False
    predictions: List[ResultCell] = []


class ResultRound(BaseModel):
    round: int
    matches: List[ResultRow] = []
