from fastapi import APIRouter, Depends, HTTPException
from sqlmodel import Session

from taquara_backend.core.database import get_session
from taquara_backend.core.scoring import fixture_label
from taquara_backend.core.simulation import project_final_standings, simulatable_fixtures
from taquara_backend.core.standings import compute_standings
from taquara_backend.models.simulation_model import SimulationRequest
from taquara_backend.routes.league_routes import serialize_standings
from taquara_backend.services.data_provider import load_league_data

router = APIRouter()


@router.get("/fixtures")
def get_simulatable_fixtures(session: Session = Depends(get_session)):
    """Remaining fixtures the simulator accepts scores for."""
    data = load_league_data(session)
    teams_by_id = {t.id: t for t in data.teams}
    return [
        {
            "round": m.round,
            "home_team_id": m.home_team_id,
            "away_team_id": m.away_team_id,
            "fixture": fixture_label(m, teams_by_id),
            "date": m.date,
        }
        for m in simulatable_fixtures(data.matches, data.excluded_ids)
    ]


@router.post("/project")
def project_standings(payload: SimulationRequest, session: Session = Depends(get_session)):
    """
    Projects the final table from the current one plus the submitted
    hypothetical scores. Nothing is saved.
    """
    data = load_league_data(session)
    base = compute_standings(data.teams, data.matches, data.excluded_ids)
    # Finished fixtures stay in the list so scores sent for them are skipped rather than rejected
    fixtures = [m for m in data.matches if m.id not in data.excluded_ids]
    try:
        projected = project_final_standings(base, fixtures, payload.scores, data.teams)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    return {
        "simulated": len(payload.scores),
        "standings": serialize_standings(projected, data.teams, data.matches, data.excluded_ids),
    }
