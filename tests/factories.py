from datetime import datetime, timedelta

from taquara_backend.models.match_model import Match
from taquara_backend.models.prediction_model import Prediction
from taquara_backend.models.team_model import Team
from taquara_backend.models.user_model import User

SEASON_START = datetime(2025, 4, 5, 16, 0)


def make_teams():
    return [
        Team(id=1, name="Avaí", abbreviation="AVA"),
        Team(id=2, name="Criciúma", abbreviation="CRI", highlighted=True),
        Team(id=3, name="Goiás", abbreviation="GOI"),
        Team(id=4, name="Remo", abbreviation="REM"),
    ]


def make_match(match_id, home, away, home_score=None, away_score=None, round=1, days=0):
    return Match(
        id=match_id,
        round=round,
        date=SEASON_START + timedelta(days=days),
        home_team_id=home,
        away_team_id=away,
        home_score=home_score,
        away_score=away_score,
    )


def make_prediction(prediction_id, match_id, user_id, home, away):
    return Prediction(id=prediction_id, match_id=match_id, user_id=user_id,
                      predicted_home_score=home, predicted_away_score=away)


def make_users():
    return [
        User(id=1, name="Admin", email="admin@taquara.local", is_admin=True),
        User(id=2, name="Diego"),
        User(id=3, name="Marcelo"),
    ]


def as_dict(standings):
    """team_id -> every field, for comparing tables regardless of order."""
    return {entry.team_id: entry.model_dump() for entry in standings}
