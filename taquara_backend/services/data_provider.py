# data_provider.py
# Loads the working set the standings engine needs and validates it at the boundary,
# so the core only ever sees well-formed records.

from dataclasses import dataclass, field
from typing import FrozenSet, List

from sqlmodel import Session, select

from taquara_backend.core.config import EXCLUDED_MATCH_IDS
from taquara_backend.core.errors import InvalidReferenceError, validate_score
from taquara_backend.models.match_model import Match
from taquara_backend.models.prediction_model import Prediction
from taquara_backend.models.team_model import Team
from taquara_backend.models.user_model import User


@dataclass
class LeagueData:
    teams: List[Team] = field(default_factory=list)
    matches: List[Match] = field(default_factory=list)
    predictions: List[Prediction] = field(default_factory=list)
    users: List[User] = field(default_factory=list)
    excluded_ids: FrozenSet[int] = frozenset()

    @property
    def presenters(self) -> List[User]:
        return [u for u in self.users if not u.is_admin]


def validate_league_data(data: LeagueData) -> LeagueData:
    """
    Checks references and score domains across the working set.
    Raises InvalidReferenceError / MalformedScoreError on the first problem found.
    """
    team_ids = {t.id for t in data.teams}
    match_ids = {m.id for m in data.matches}
    user_ids = {u.id for u in data.users}

    for match in data.matches:
        for team_id in (match.home_team_id, match.away_team_id):
            if team_id not in team_ids:
                raise InvalidReferenceError(f"Match {match.id} references unknown team {team_id}.")
        validate_score(match.home_score, f"match {match.id} home_score")
        validate_score(match.away_score, f"match {match.id} away_score")

    for prediction in data.predictions:
        if prediction.match_id not in match_ids:
            raise InvalidReferenceError(f"Prediction {prediction.id} references unknown match {prediction.match_id}.")
        if prediction.user_id not in user_ids:
            raise InvalidReferenceError(f"Prediction {prediction.id} references unknown user {prediction.user_id}.")
        validate_score(prediction.predicted_home_score, f"prediction {prediction.id} home score", allow_none=False)
        validate_score(prediction.predicted_away_score, f"prediction {prediction.id} away score", allow_none=False)

    return data


def load_league_data(session: Session, excluded_ids=None) -> LeagueData:
    """Reads teams, matches (by date), predictions and users, then validates them."""
    data = LeagueData(
        teams=list(session.exec(select(Team).order_by(Team.id)).all()),
        matches=list(session.exec(select(Match).order_by(Match.date, Match.id)).all()),
        predictions=list(session.exec(select(Prediction)).all()),
        users=list(session.exec(select(User).order_by(User.id)).all()),
        excluded_ids=frozenset(EXCLUDED_MATCH_IDS if excluded_ids is None else excluded_ids),
    )
    return validate_league_data(data)


def snapshot_match(match: Match) -> Match:
    """Detached copy of a match (not attached to any session)."""
    return Match(
        id=match.id,
        round=match.round,
        date=match.date,
        home_team_id=match.home_team_id,
        away_team_id=match.away_team_id,
        home_score=match.home_score,
        away_score=match.away_score,
    )


def snapshot_matches(matches) -> List[Match]:
    return [snapshot_match(m) for m in matches]
