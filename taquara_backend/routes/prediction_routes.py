import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlmodel import Session

from taquara_backend.core.auth import get_current_user
from taquara_backend.core.database import get_session
from taquara_backend.core.rounds import next_round_for_all
from taquara_backend.core.scoring import build_ranking, fixture_label
from taquara_backend.models.prediction_model import PredictionSubmitRequest
from taquara_backend.models.user_model import User
from taquara_backend.services.data_provider import load_league_data
from taquara_backend.services.persistence import save_predictions

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/next-round")
def get_next_round(session: Session = Depends(get_session), user: User = Depends(get_current_user)):
    """
    The round open for predictions (first one where a presenter still misses a
    prediction) with its fixtures and the predictions saved so far.
    """
    data = load_league_data(session)
    round_number = next_round_for_all(data.matches, data.predictions, data.users, data.excluded_ids)
    if round_number is None:
        return {"round": None, "fixtures": [], "message": "No pending matches to predict."}

    teams_by_id = {t.id: t for t in data.teams}
    predictions = {(p.match_id, p.user_id): p for p in data.predictions}
    fixtures = []
    for match in data.matches:
        if match.round != round_number or match.id in data.excluded_ids:
            continue
        cells = []
        for presenter in data.presenters:
            prediction = predictions.get((match.id, presenter.id))
            cells.append({
                "user_id": presenter.id,
                "user_name": presenter.name,
                "predicted_home_score": prediction.predicted_home_score if prediction else None,
                "predicted_away_score": prediction.predicted_away_score if prediction else None,
            })
        fixtures.append({
            "match_id": match.id,
            "fixture": fixture_label(match, teams_by_id),
            "date": match.date,
            "predictions": cells,
        })
    return {"round": round_number, "fixtures": fixtures}


@router.post("")
def submit_predictions(payload: PredictionSubmitRequest, session: Session = Depends(get_session),
                       user: User = Depends(get_current_user)):
    """Saves (or replaces) presenters' predictions. Requires a logged-in user."""
    try:
        saved = save_predictions(session, payload.predictions)
    except ValueError as e:
        logger.warning("Rejected predictions from user %s: %s", user.id, e)
        raise HTTPException(status_code=400, detail=str(e))
    return {"message": "Predictions saved", "saved": len(saved)}


@router.get("/ranking")
def get_ranking(round: Optional[int] = Query(default=None, ge=1), session: Session = Depends(get_session)):
    """Presenter ranking, overall or for a single round."""
    data = load_league_data(session)
    return {
        "round": round,
        "ranking": build_ranking(data.users, data.predictions, data.matches, data.excluded_ids, round, data.teams),
    }
