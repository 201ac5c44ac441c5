# taquara_backend/core/simulation.py
# "What if" projector: applies hypothetical scores for remaining fixtures on top
# of the current table. Nothing here is ever persisted.

from typing import Iterable, List, Optional

from taquara_backend.core.errors import InvalidReferenceError, validate_score
from taquara_backend.core.standings import apply_result, copy_entry, sort_standings
from taquara_backend.models.match_model import Match
from taquara_backend.models.simulation_model import HypotheticalScore
from taquara_backend.models.standings_model import StandingsEntry
from taquara_backend.models.team_model import Team


def simulatable_fixtures(matches: Iterable[Match], excluded_ids: Iterable[int] = frozenset()) -> List[Match]:
    """Fixtures that can still be simulated: not finished and not voided."""
    excluded_ids = frozenset(excluded_ids)
    return [m for m in matches if not m.is_finished and m.id not in excluded_ids]


def project_final_standings(
    base_standings: Iterable[StandingsEntry],
    remaining_fixtures: Iterable[Match],
    hypothetical_scores: Iterable[HypotheticalScore],
    teams: Optional[Iterable[Team]] = None,
) -> List[StandingsEntry]:
    """
    Projects the table after the hypothetical results.

    - Each score is matched to a fixture by (round, home team, away team)
    - Scores for fixtures that are already finished are ignored
    - A score matching no fixture at all raises InvalidReferenceError
    - A fixture may only be given one score per projection (InvalidReferenceError)
    - base_standings and the fixtures are left untouched
    """
    table = {entry.team_id: copy_entry(entry) for entry in base_standings}
    fixtures = {(m.round, m.home_team_id, m.away_team_id): m for m in remaining_fixtures}
    seen = set()

    for hypothetical in hypothetical_scores:
        key = (hypothetical.round, hypothetical.home_team_id, hypothetical.away_team_id)
        fixture = fixtures.get(key)
        if fixture is None:
            raise InvalidReferenceError(
                f"No fixture for round {key[0]}: team {key[1]} vs team {key[2]}."
            )
        if key in seen:
            raise InvalidReferenceError(
                f"Fixture for round {key[0]}: team {key[1]} vs team {key[2]} was given more than one score."
            )
        seen.add(key)
        if fixture.is_finished:
            continue

        home_score = validate_score(hypothetical.home_score, "home_score", allow_none=False)
        away_score = validate_score(hypothetical.away_score, "away_score", allow_none=False)
        for team_id in (fixture.home_team_id, fixture.away_team_id):
            if team_id not in table:
                raise InvalidReferenceError(f"Team {team_id} has no standings entry.")

        apply_result(table[fixture.home_team_id], home_score, away_score)
        apply_result(table[fixture.away_team_id], away_score, home_score)

    for entry in table.values():
        entry.goal_difference = entry.goals_for - entry.goals_against

    return sort_standings(table.values(), teams)
