# taquara_backend/core/scoring.py
# Prediction scorer: points per prediction, presenter ranking and the results grid.

from collections import defaultdict
from typing import Dict, Iterable, List, Optional

from taquara_backend.core.config import POINTS_EXACT, POINTS_OUTCOME, POINTS_MISS
from taquara_backend.core.errors import InvalidReferenceError, validate_score
from taquara_backend.models.match_model import Match
from taquara_backend.models.prediction_model import Prediction
from taquara_backend.models.ranking_model import (
    ResultSign, PredictionCategory, PredictionScore, PredictionDetail,
    RankingEntry, ResultCell, ResultRow, ResultRound
)
from taquara_backend.models.team_model import Team
from taquara_backend.models.user_model import User


def result_sign(home: int, away: int) -> ResultSign:
    if home > away:
        return ResultSign.HOME
    if home < away:
        return ResultSign.AWAY
    return ResultSign.DRAW


def score_prediction(prediction: Prediction, match: Match) -> PredictionScore:
    """
    Scores one prediction against the match result:
    - exact scoreline  -> POINTS_EXACT (3)
    - same result sign -> POINTS_OUTCOME (1)
    - anything else    -> POINTS_MISS (0)
    A match without both scores gives a PENDING score of 0.
    """
    predicted_home = validate_score(prediction.predicted_home_score, "predicted_home_score", allow_none=False)
    predicted_away = validate_score(prediction.predicted_away_score, "predicted_away_score", allow_none=False)

    if match.home_score is None or match.away_score is None:
        return PredictionScore(points=0, category=PredictionCategory.PENDING)

    actual_home = validate_score(match.home_score, "home_score")
    actual_away = validate_score(match.away_score, "away_score")

    if predicted_home == actual_home and predicted_away == actual_away:
        return PredictionScore(points=POINTS_EXACT, category=PredictionCategory.EXACT)
    if result_sign(predicted_home, predicted_away) == result_sign(actual_home, actual_away):
        return PredictionScore(points=POINTS_OUTCOME, category=PredictionCategory.OUTCOME)
    return PredictionScore(points=POINTS_MISS, category=PredictionCategory.MISS)


def fixture_label(match: Match, teams_by_id: Optional[Dict[int, Team]] = None) -> str:
    """Fixture label ("Home x Away") using team names when available, team ids otherwise."""
    teams_by_id = teams_by_id or {}
    home = teams_by_id.get(match.home_team_id)
    away = teams_by_id.get(match.away_team_id)
    home_label = home.name if home else f"#{match.home_team_id}"
    away_label = away.name if away else f"#{match.away_team_id}"
    return f"{home_label} x {away_label}"


# =========================================
# PRESENTER RANKING
# =========================================
def build_ranking(
    users: Iterable[User],
    predictions: Iterable[Prediction],
    matches: Iterable[Match],
    excluded_ids: Iterable[int] = frozenset(),
    round_filter: Optional[int] = None,
    teams: Optional[Iterable[Team]] = None,
) -> List[RankingEntry]:
    """
    Ranks presenters (non-admin users) by prediction points.

    Only predictions on finished, non-excluded matches count, restricted to
    round_filter when given. Ordering: total points, then exact hits (both
    descending); presenters still level keep their user-list order.
    """
    excluded_ids = frozenset(excluded_ids)
    matches_by_id = {match.id: match for match in matches}
    teams_by_id = {team.id: team for team in teams} if teams is not None else {}

    predictions_by_user = defaultdict(list)
    for prediction in predictions:
        predictions_by_user[prediction.user_id].append(prediction)

    ranking = []
    for user in users:
        if user.is_admin:
            continue

        row = RankingEntry(user_id=user.id, user_name=user.name)
        for prediction in predictions_by_user.get(user.id, []):
            match = matches_by_id.get(prediction.match_id)
            if match is None:
                raise InvalidReferenceError(
                    f"Prediction {prediction.id} references unknown match {prediction.match_id}."
                )
            if not match.is_finished or match.id in excluded_ids:
                continue
            if round_filter is not None and match.round != round_filter:
                continue

            score = score_prediction(prediction, match)
            row.total_points += score.points
            if score.category == PredictionCategory.EXACT:
                row.exact_count += 1
            elif score.category == PredictionCategory.OUTCOME:
                row.outcome_count += 1
            else:
                row.miss_count += 1

            row.details.append(PredictionDetail(
                match_id=match.id,
                round=match.round,
                fixture=fixture_label(match, teams_by_id),
                predicted=f"{prediction.predicted_home_score}-{prediction.predicted_away_score}",
                actual=f"{match.home_score}-{match.away_score}",
                points=score.points,
                category=score.category,
            ))
        ranking.append(row)

    return sorted(ranking, key=lambda r: (-r.total_points, -r.exact_count))


# =========================================
# RESULTS GRID
# =========================================
def build_results_grid(
    users: Iterable[User],
    predictions: Iterable[Prediction],
    matches: Iterable[Match],
    teams: Iterable[Team],
    excluded_ids: Iterable[int] = frozenset(),
) -> List[ResultRound]:
    """
    All matches grouped by round (latest round first), each with its score and
    every presenter's prediction. Points are shown for finished matches only.
    Excluded matches are listed (flagged) but never scored.
    """
    excluded_ids = frozenset(excluded_ids)
    presenters = [u for u in users if not u.is_admin]
    teams_by_id = {team.id: team for team in teams}
    predictions_by_key = {(p.match_id, p.user_id): p for p in predictions}

    rounds = defaultdict(list)
    for match in matches:
        rounds[match.round].append(match)

    grid = []
    for round_number in sorted(rounds, reverse=True):
        result_round = ResultRound(round=round_number)
        for match in rounds[round_number]:
            excluded = match.id in excluded_ids
            row = ResultRow(
                match_id=match.id,
                fixture=fixture_label(match, teams_by_id),
                score=f"{match.home_score}-{match.away_score}" if match.is_finished else None,
                excluded=excluded,
            )
            for presenter in presenters:
                prediction = predictions_by_key.get((match.id, presenter.id))
                cell = ResultCell(user_id=presenter.id)
                if prediction is not None:
                    cell.predicted = f"{prediction.predicted_home_score}-{prediction.predicted_away_score}"
                    if match.is_finished and not excluded:
                        cell.points = score_prediction(prediction, match).points
                row.predictions.append(cell)
            result_round.matches.append(row)
        grid.append(result_round)

    return grid
