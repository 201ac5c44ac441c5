# taquara_backend/core/standings.py
# Standings engine: full table computation, incremental score deltas and the
# official tie-break ordering. Pure functions; inputs are never mutated.

import unicodedata
from typing import Dict, Iterable, List, Optional

from taquara_backend.core.config import WIN_POINTS, DRAW_POINTS, PROMOTION_SPOTS, RELEGATION_SPOTS
from taquara_backend.core.errors import InvalidReferenceError, validate_score
from taquara_backend.models.match_model import Match
from taquara_backend.models.standings_model import StandingsEntry
from taquara_backend.models.team_model import Team

STAT_FIELDS = ("points", "played", "wins", "draws", "losses", "goals_for", "goals_against")


# ---------------------------------------------
# Helpers
# ---------------------------------------------
def empty_entry(team_id: int) -> StandingsEntry:
    return StandingsEntry(team_id=team_id, **{field: 0 for field in STAT_FIELDS}, goal_difference=0)


def copy_entry(entry: StandingsEntry) -> StandingsEntry:
    """Detached copy, so callers can diff old vs new before persisting."""
    return StandingsEntry(
        team_id=entry.team_id,
        **{field: getattr(entry, field) for field in STAT_FIELDS},
        goal_difference=entry.goals_for - entry.goals_against,
    )


def is_counted(match: Match, excluded_ids: Iterable[int] = frozenset()) -> bool:
    """A match counts for the table only when both scores are set and it isn't voided."""
    return (
        match.home_score is not None
        and match.away_score is not None
        and match.id not in excluded_ids
    )


def apply_result(entry: StandingsEntry, goals_for: int, goals_against: int, sign: int = 1):
    """
    Applies one result to a team's entry from that team's perspective.
    sign=+1 adds the result, sign=-1 removes a previously applied one.
    goal_difference is left for the caller to recompute.
    """
    entry.played += sign
    entry.goals_for += goals_for * sign
    entry.goals_against += goals_against * sign

    if goals_for > goals_against:
        entry.wins += sign
        entry.points += WIN_POINTS * sign
    elif goals_for < goals_against:
        entry.losses += sign
    else:
        entry.draws += sign
        entry.points += DRAW_POINTS * sign


def _check_teams(table: Dict[int, StandingsEntry], match: Match):
    for team_id in (match.home_team_id, match.away_team_id):
        if team_id not in table:
            raise InvalidReferenceError(f"Match {match.id} references unknown team {team_id}.")


def _apply_match(table: Dict[int, StandingsEntry], match: Match, sign: int):
    home_score = validate_score(match.home_score, f"match {match.id} home_score", allow_none=False)
    away_score = validate_score(match.away_score, f"match {match.id} away_score", allow_none=False)

    _check_teams(table, match)
    apply_result(table[match.home_team_id], home_score, away_score, sign)
    apply_result(table[match.away_team_id], away_score, home_score, sign)


def _refresh_goal_difference(table: Dict[int, StandingsEntry]):
    for entry in table.values():
        entry.goal_difference = entry.goals_for - entry.goals_against


def _name_key(name: str) -> tuple:
    # Accent and case insensitive first ("Avaí" sorts with "Avai"), raw name breaks exact ties
    stripped = "".join(
        ch for ch in unicodedata.normalize("NFKD", name) if not unicodedata.combining(ch)
    )
    return (stripped.casefold(), name)


# =========================================
# ORDERING
# =========================================
def sort_standings(entries: Iterable[StandingsEntry], teams: Optional[Iterable[Team]] = None) -> List[StandingsEntry]:
    """
    Orders a table by: points, wins, goal difference, goals for (all descending),
    then team name ascending. Without teams the name tie-break is skipped and
    equal entries keep their incoming order.
    """
    entries = list(entries)
    names = {team.id: team.name for team in teams} if teams is not None else None

    def key(entry: StandingsEntry):
        stats = (-entry.points, -entry.wins, -entry.goal_difference, -entry.goals_for)
        if names is None:
            return stats
        return stats + (_name_key(names.get(entry.team_id, "")),)

    return sorted(entries, key=key)


def classify_zone(position: int, total: int) -> Optional[str]:
    """Returns "promotion" for the top spots, "relegation" for the bottom ones, else None."""
    if position <= PROMOTION_SPOTS:
        return "promotion"
    if position > total - RELEGATION_SPOTS:
        return "relegation"
    return None


# =========================================
# FULL COMPUTATION
# =========================================
def compute_standings(teams: Iterable[Team], matches: Iterable[Match], excluded_ids: Iterable[int] = frozenset()) -> List[StandingsEntry]:
    """
    Builds the league table from scratch.
    - One zeroed entry per registered team (teams without games included)
    - Only finished, non-excluded matches are counted
    - Returned in official order (see sort_standings)

    Raises InvalidReferenceError when any match (played or not) references an unknown team
    and MalformedScoreError for scores outside the non-negative integers.
    """
    teams = list(teams)
    excluded_ids = frozenset(excluded_ids)
    table = {team.id: empty_entry(team.id) for team in teams}

    for match in matches:
        _check_teams(table, match)
        if is_counted(match, excluded_ids):
            _apply_match(table, match, +1)

    _refresh_goal_difference(table)
    return sort_standings(table.values(), teams)


def standings_up_to_round(teams: Iterable[Team], matches: Iterable[Match], round_number: int, excluded_ids: Iterable[int] = frozenset()) -> List[StandingsEntry]:
    """Table as it stood after the given round (matches of later rounds ignored)."""
    return compute_standings(teams, [m for m in matches if m.round <= round_number], excluded_ids)


# =========================================
# INCREMENTAL UPDATE
# =========================================
def _same_result(old: Match, new: Match) -> bool:
    return (
        old.home_score == new.home_score
        and old.away_score == new.away_score
        and old.home_team_id == new.home_team_id
        and old.away_team_id == new.away_team_id
    )


def apply_match_delta(
    current_standings: Iterable[StandingsEntry],
    old_matches: Iterable[Match],
    new_matches: Iterable[Match],
    excluded_ids: Iterable[int] = frozenset(),
    teams: Optional[Iterable[Team]] = None,
) -> List[StandingsEntry]:
    """
    Applies only the score changes between two versions of the match list.

    For every match whose result changed, the old result is removed (if it was
    counted) and the new one added (if it counts). Unchanged matches are skipped,
    re-applying them would count them twice. A match missing from old_matches is
    added in full; one missing from new_matches is removed.

    Works on copies: current_standings is left untouched.
    """
    excluded_ids = frozenset(excluded_ids)
    table = {entry.team_id: copy_entry(entry) for entry in current_standings}
    old_by_id = {match.id: match for match in old_matches}
    seen = set()

    for new in new_matches:
        seen.add(new.id)
        old = old_by_id.get(new.id)
        if old is not None and _same_result(old, new):
            continue

        if old is not None and is_counted(old, excluded_ids):
            _apply_match(table, old, -1)
        if is_counted(new, excluded_ids):
            _apply_match(table, new, +1)

    for match_id, old in old_by_id.items():
        if match_id not in seen and is_counted(old, excluded_ids):
            _apply_match(table, old, -1)

    _refresh_goal_difference(table)
    return sort_standings(table.values(), teams)
