# taquara_backend/models/__init__.py
# Centralized imports for all database models and schemas

# Team
from .team_model import Team

# Match and admin result updates
from .match_model import Match, MatchScoreUpdate, MatchScoreUpdateRequest

# Standings (classification table)
from .standings_model import StandingsEntry

# Users
from .user_model import User, UserLogin

# Predictions
from .prediction_model import Prediction, PredictionSubmit, PredictionSubmitRequest

# Top scorers
from .scorer_model import Scorer, ScorerEdit, ScorerListRequest

# Scoring / ranking schemas
from .ranking_model import (
    ResultSign, PredictionCategory, PredictionScore, PredictionDetail,
    RankingEntry, ResultCell, ResultRow, ResultRound
)

# Simulation
from .simulation_model import HypotheticalScore, SimulationRequest
