from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlmodel import Session, select

from taquara_backend.core.config import FORM_WINDOW
from taquara_backend.core.database import get_session
from taquara_backend.core.form import compute_form
from taquara_backend.core.scoring import build_results_grid
from taquara_backend.core.standings import classify_zone, compute_standings
from taquara_backend.models.scorer_model import Scorer
from taquara_backend.models.team_model import Team
from taquara_backend.services.data_provider import load_league_data

router = APIRouter()


def serialize_standings(standings, teams, matches, excluded_ids) -> list:
    """Standings rows with position, zone, team info and recent form, ready for the frontend."""
    teams_by_id = {t.id: t for t in teams}
    total = len(standings)
    rows = []
    for position, entry in enumerate(standings, start=1):
        team = teams_by_id[entry.team_id]
        rows.append({
            "position": position,
            "zone": classify_zone(position, total),          # "promotion" | "relegation" | None
            "team_id": team.id,
            "team_name": team.name,
            "abbreviation": team.abbreviation,
            "highlighted": team.highlighted,
            "points": entry.points,
            "played": entry.played,
            "wins": entry.wins,
            "draws": entry.draws,
            "losses": entry.losses,
            "goals_for": entry.goals_for,
            "goals_against": entry.goals_against,
            "goal_difference": entry.goal_difference,
            "form": compute_form(team.id, matches, FORM_WINDOW, excluded_ids),
        })
    return rows


# =========================================
# GET LEAGUE STANDINGS
# =========================================
@router.get("/standings")
def get_standings(round: Optional[int] = Query(default=None, ge=1), session: Session = Depends(get_session)):
    """
    Standings computed from the finished, non-excluded matches.
    With ?round=N the table is shown as it stood after round N.
    """
    data = load_league_data(session)
    matches = data.matches
    if round is not None:
        # Form is cut at the same round as the table
        matches = [m for m in matches if m.round <= round]
    standings = compute_standings(data.teams, matches, data.excluded_ids)

    return {
        "round": round,
        "standings": serialize_standings(standings, data.teams, matches, data.excluded_ids),
    }


@router.get("/teams/{team_id}/form")
def get_team_form(team_id: int, window: int = Query(default=FORM_WINDOW, ge=1, le=38),
                  session: Session = Depends(get_session)):
    data = load_league_data(session)
    if not any(t.id == team_id for t in data.teams):
        raise HTTPException(status_code=404, detail="Team not found")
    return {
        "team_id": team_id,
        "form": compute_form(team_id, data.matches, window, data.excluded_ids),
    }


# =========================================
# GET FIXTURES / RESULTS
# =========================================
@router.get("/fixtures")
def get_fixtures(round: Optional[int] = Query(default=None, ge=1), session: Session = Depends(get_session)):
    """All fixtures (optionally a single round), ordered by date."""
    data = load_league_data(session)
    teams_by_id = {t.id: t for t in data.teams}
    return [
        {
            "fixture_id": m.id,
            "round": m.round,
            "date": m.date,
            "home_team_id": m.home_team_id,
            "home_team_name": teams_by_id[m.home_team_id].name,
            "away_team_id": m.away_team_id,
            "away_team_name": teams_by_id[m.away_team_id].name,
            # Consider the match "played" if both goal values exist
            "played": m.is_finished,
            "home_score": m.home_score,
            "away_score": m.away_score,
            "excluded": m.id in data.excluded_ids,
        }
        for m in data.matches
        if round is None or m.round == round
    ]


@router.get("/results")
def get_results(session: Session = Depends(get_session)):
    """Every round (latest first) with scores and each presenter's predictions/points."""
    data = load_league_data(session)
    return {
        "presenters": [{"id": u.id, "name": u.name} for u in data.presenters],
        "rounds": build_results_grid(data.users, data.predictions, data.matches, data.teams, data.excluded_ids),
    }


# =========================================
# GET TOP SCORERS
# =========================================
@router.get("/scorers")
def get_scorers(session: Session = Depends(get_session)):
    teams_by_id = {t.id: t for t in session.exec(select(Team)).all()}
    scorers = session.exec(select(Scorer).order_by(Scorer.rank, Scorer.player)).all()
    return [
        {
            "rank": s.rank,
            "player": s.player,
            "team_id": s.team_id,
            "team_name": teams_by_id[s.team_id].name if s.team_id in teams_by_id else None,
            "goals": s.goals,
        }
        for s in scorers
    ]
