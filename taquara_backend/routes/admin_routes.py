import logging

from fastapi import APIRouter, Depends, HTTPException
from sqlmodel import Session

from taquara_backend.core.auth import require_admin
from taquara_backend.core.database import get_session
from taquara_backend.models.match_model import MatchScoreUpdateRequest
from taquara_backend.models.scorer_model import ScorerListRequest
from taquara_backend.models.user_model import User
from taquara_backend.services.persistence import recompute_standings, save_scorers, update_match_scores

logger = logging.getLogger(__name__)

router = APIRouter()


def _standings_payload(standings):
    return [entry.model_dump() for entry in standings]


@router.post("/matches")
def update_matches(payload: MatchScoreUpdateRequest, session: Session = Depends(get_session),
                   admin: User = Depends(require_admin)):
    """
    Enter or correct results. Only the changed matches are applied to the
    stored standings (incremental update).
    """
    try:
        standings = update_match_scores(session, payload.scores)
    except ValueError as e:
        session.rollback()
        raise HTTPException(status_code=400, detail=str(e))
    logger.info("Results updated by admin %s", admin.id)
    return {"message": "Results saved", "standings": _standings_payload(standings)}


@router.post("/standings/recompute")
def recompute(session: Session = Depends(get_session), admin: User = Depends(require_admin)):
    """Rebuilds the stored standings from all matches."""
    try:
        standings = recompute_standings(session)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return {"message": "Standings recomputed", "standings": _standings_payload(standings)}


@router.put("/scorers")
def update_scorers(payload: ScorerListRequest, session: Session = Depends(get_session),
                   admin: User = Depends(require_admin)):
    try:
        scorers = save_scorers(session, payload.scorers)
    except ValueError as e:
        session.rollback()
        raise HTTPException(status_code=400, detail=str(e))
    return {
        "message": "Scorers saved",
        "scorers": [{"rank": s.rank, "player": s.player, "team_id": s.team_id, "goals": s.goals} for s in scorers],
    }
