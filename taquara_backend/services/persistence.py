# persistence.py
# Write side of the portal: result entry (with incremental standings), predictions and scorers.

import logging
from typing import Iterable, List

from sqlmodel import Session, select

from taquara_backend.core.errors import InvalidReferenceError, validate_score
from taquara_backend.core.scorers import rank_scorers
from taquara_backend.core.standings import apply_match_delta, compute_standings, sort_standings
from taquara_backend.models.match_model import Match, MatchScoreUpdate
from taquara_backend.models.prediction_model import Prediction, PredictionSubmit
from taquara_backend.models.scorer_model import Scorer, ScorerEdit
from taquara_backend.models.standings_model import StandingsEntry
from taquara_backend.models.team_model import Team
from taquara_backend.models.user_model import User
from taquara_backend.services.data_provider import LeagueData, load_league_data, snapshot_matches

logger = logging.getLogger(__name__)


# =========================================
# STANDINGS
# =========================================
def load_standings(session: Session) -> List[StandingsEntry]:
    return list(session.exec(select(StandingsEntry)).all())


def save_standings(session: Session, entries: Iterable[StandingsEntry]):
    """Upserts one classification row per team. Caller commits."""
    for entry in entries:
        session.merge(StandingsEntry(**entry.model_dump()))


def current_standings(session: Session, data: LeagueData) -> List[StandingsEntry]:
    """
    Stored standings, ordered. Falls back to a full recompute when the stored
    table doesn't cover exactly the registered teams (first run, new team).
    """
    stored = load_standings(session)
    if {e.team_id for e in stored} != {t.id for t in data.teams}:
        logger.info("Stored standings incomplete, recomputing from matches")
        return compute_standings(data.teams, data.matches, data.excluded_ids)
    return sort_standings(stored, data.teams)


def recompute_standings(session: Session, excluded_ids=None) -> List[StandingsEntry]:
    """Rebuilds the whole table from the matches and stores it."""
    data = load_league_data(session, excluded_ids)
    standings = compute_standings(data.teams, data.matches, data.excluded_ids)
    save_standings(session, standings)
    session.commit()
    logger.info("Standings recomputed for %d teams", len(standings))
    return standings


# =========================================
# RESULT ENTRY
# =========================================
def update_match_scores(session: Session, updates: Iterable[MatchScoreUpdate], excluded_ids=None) -> List[StandingsEntry]:
    """
    Applies the admin's score edits and updates the stored standings with only
    the delta of the matches that actually changed. Returns the new table.
    """
    data = load_league_data(session, excluded_ids)
    matches_by_id = {m.id: m for m in data.matches}
    baseline = current_standings(session, data)
    old_matches = snapshot_matches(data.matches)

    changed = 0
    for update in updates:
        match = matches_by_id.get(update.match_id)
        if match is None:
            raise InvalidReferenceError(f"Match {update.match_id} not found.")
        home_score = validate_score(update.home_score, f"match {match.id} home_score")
        away_score = validate_score(update.away_score, f"match {match.id} away_score")
        if (match.home_score, match.away_score) != (home_score, away_score):
            changed += 1
        match.home_score = home_score
        match.away_score = away_score
        session.add(match)

    new_matches = snapshot_matches(data.matches)
    standings = apply_match_delta(baseline, old_matches, new_matches, data.excluded_ids, data.teams)
    save_standings(session, standings)
    session.commit()

    logger.info("Admin result entry: %d match(es) changed", changed)
    return standings


# =========================================
# PREDICTIONS
# =========================================
def save_predictions(session: Session, submissions: Iterable[PredictionSubmit], excluded_ids=None) -> List[Prediction]:
    """
    Upserts predictions: one row per (match, user), a new submission replaces the old values.
    Only presenters can predict, and only on matches that are still open.
    """
    data = load_league_data(session, excluded_ids)
    matches_by_id = {m.id: m for m in data.matches}
    users_by_id = {u.id: u for u in data.users}

    saved = []
    for submission in submissions:
        match = matches_by_id.get(submission.match_id)
        if match is None:
            raise InvalidReferenceError(f"Match {submission.match_id} not found.")
        user = users_by_id.get(submission.user_id)
        if user is None or user.is_admin:
            raise InvalidReferenceError(f"Presenter {submission.user_id} not found.")
        if match.is_finished or match.id in data.excluded_ids:
            raise ValueError(f"Match {match.id} is closed for predictions.")

        home = validate_score(submission.predicted_home_score, "predicted_home_score", allow_none=False)
        away = validate_score(submission.predicted_away_score, "predicted_away_score", allow_none=False)

        prediction = session.exec(
            select(Prediction).where(
                Prediction.match_id == match.id,
                Prediction.user_id == user.id,
            )
        ).first()
        if prediction is None:
            prediction = Prediction(match_id=match.id, user_id=user.id,
                                    predicted_home_score=home, predicted_away_score=away)
        else:
            prediction.predicted_home_score = home
            prediction.predicted_away_score = away
        session.add(prediction)
        saved.append(prediction)

    session.commit()
    for prediction in saved:
        session.refresh(prediction)
    logger.info("Saved %d prediction(s)", len(saved))
    return saved


# =========================================
# TOP SCORERS
# =========================================
def save_scorers(session: Session, edits: Iterable[ScorerEdit]) -> List[Scorer]:
    """Replaces the top-scorers list with the edited one, re-ranked."""
    team_ids = {t.id for t in session.exec(select(Team)).all()}
    rows = []
    for edit in edits:
        if edit.team_id not in team_ids:
            raise InvalidReferenceError(f"Team {edit.team_id} not found.")
        player = edit.player.strip()
        if not player:
            raise ValueError("Player name must not be empty.")
        rows.append(Scorer(player=player, team_id=edit.team_id, goals=edit.goals))

    ranked = rank_scorers(rows)

    for existing in session.exec(select(Scorer)).all():
        session.delete(existing)
    session.add_all(ranked)
    session.commit()
    for scorer in ranked:
        session.refresh(scorer)
    return ranked
